"""
Scores Router - Science Fair Evaluation Platform
fairscore/routers/scores.py

Leaderboard, per-project breakdown, headline numbers, and the raw results
list for the admin.
"""

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from fairscore.core.dependencies import get_ranking_engine, get_result_repository, require_admin
from fairscore.models.result import Result
from fairscore.models.scoring import ProjectDetail, ProjectScore, ScoreSummary
from fairscore.repositories.result_repository import ResultRepository
from fairscore.scoring.ranking import RankingEngine

router = APIRouter(prefix="/api/v1", tags=["Scores"], dependencies=[Depends(require_admin)])


class RankingResponse(BaseModel):
    items: List[ProjectScore]
    total: int


class ResultListResponse(BaseModel):
    items: List[Result]
    total: int


@router.get("/scores/rankings", response_model=RankingResponse, summary="Project leaderboard")
async def get_rankings(engine: RankingEngine = Depends(get_ranking_engine)) -> RankingResponse:
    items = engine.rank_projects()
    return RankingResponse(items=items, total=len(items))


@router.get("/scores/summary", response_model=ScoreSummary, summary="Score summary")
async def get_summary(engine: RankingEngine = Depends(get_ranking_engine)) -> ScoreSummary:
    return engine.summary()


@router.get("/scores/projects/{project_id}", response_model=ProjectDetail, summary="Per-criterion breakdown")
async def get_project_detail(project_id: str, engine: RankingEngine = Depends(get_ranking_engine)) -> ProjectDetail:
    return engine.project_detail(project_id)


@router.get("/results", response_model=ResultListResponse, summary="All results")
async def list_results(repo: ResultRepository = Depends(get_result_repository)) -> ResultListResponse:
    items = repo.get_all()
    return ResultListResponse(items=items, total=len(items))
