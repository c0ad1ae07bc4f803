"""
Evaluator Portal Router - Science Fair Evaluation Platform
fairscore/routers/evaluator_portal.py

Everything an evaluator does for themselves: profile, assignments,
progress, drafting / reviewing / submitting scores, and finalizing.
Requests carry X-Evaluator-Email and X-Evaluator-Code.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from fairscore.core.dependencies import (
    current_evaluator,
    get_assignment_resolver,
    get_entity_store,
    get_evaluator_repository,
    get_lifecycle_engine,
)
from fairscore.models.evaluator import Evaluator, EvaluatorProfileUpdate
from fairscore.models.result import Result, ResultReview, ScoreInput
from fairscore.models.scoring import AssignmentRow, Progress
from fairscore.repositories.entity_store import EntityStore
from fairscore.repositories.evaluator_repository import EvaluatorRepository
from fairscore.services.assignment_service import AssignmentResolver
from fairscore.services.lifecycle_service import FinalizeOutcome, ResultLifecycleEngine

router = APIRouter(prefix="/api/v1/evaluator", tags=["Evaluator"])


class EvaluatorSessionResponse(BaseModel):
    evaluator: Evaluator
    finalized: bool


class AssignmentsResponse(BaseModel):
    items: List[AssignmentRow]
    progress: Progress
    finalized: bool


class FinalizeRequest(BaseModel):
    admin_password: Optional[str] = None


@router.get("/me", response_model=EvaluatorSessionResponse, summary="Current evaluator")
async def get_me(
    evaluator: Evaluator = Depends(current_evaluator),
    store: EntityStore = Depends(get_entity_store),
) -> EvaluatorSessionResponse:
    return EvaluatorSessionResponse(evaluator=evaluator, finalized=store.is_finalized(evaluator.id))


@router.patch("/me", response_model=Evaluator, summary="Update own profile")
async def update_me(
    data: EvaluatorProfileUpdate,
    evaluator: Evaluator = Depends(current_evaluator),
    repo: EvaluatorRepository = Depends(get_evaluator_repository),
) -> Evaluator:
    return repo.update_profile(evaluator.id, data)


@router.get("/assignments", response_model=AssignmentsResponse, summary="Assigned projects with status")
async def get_assignments(
    evaluator: Evaluator = Depends(current_evaluator),
    resolver: AssignmentResolver = Depends(get_assignment_resolver),
    store: EntityStore = Depends(get_entity_store),
) -> AssignmentsResponse:
    return AssignmentsResponse(
        items=resolver.assignment_rows(evaluator.id),
        progress=resolver.progress(evaluator.id),
        finalized=store.is_finalized(evaluator.id),
    )


@router.get("/progress", response_model=Progress, summary="Completion progress")
async def get_progress(
    evaluator: Evaluator = Depends(current_evaluator),
    resolver: AssignmentResolver = Depends(get_assignment_resolver),
) -> Progress:
    return resolver.progress(evaluator.id)


@router.put("/results/{project_id}/draft", response_model=Result, summary="Save a draft")
async def save_draft(
    project_id: str,
    data: ScoreInput,
    evaluator: Evaluator = Depends(current_evaluator),
    engine: ResultLifecycleEngine = Depends(get_lifecycle_engine),
) -> Result:
    # An omitted remark keeps the one already saved
    remark = data.remark if "remark" in data.model_fields_set else None
    return engine.save_draft(evaluator.id, project_id, data.scores, remark)


@router.post("/results/{project_id}/review", response_model=ResultReview, summary="Review before submitting")
async def review_scores(
    project_id: str,
    data: ScoreInput,
    evaluator: Evaluator = Depends(current_evaluator),
    engine: ResultLifecycleEngine = Depends(get_lifecycle_engine),
) -> ResultReview:
    return engine.review(evaluator.id, project_id, data.scores, data.remark)


@router.post("/results/{project_id}/submit", response_model=Result, summary="Submit an evaluation")
async def submit_scores(
    project_id: str,
    data: ScoreInput,
    evaluator: Evaluator = Depends(current_evaluator),
    engine: ResultLifecycleEngine = Depends(get_lifecycle_engine),
) -> Result:
    return await engine.submit(evaluator.id, project_id, data.scores, data.remark)


@router.post("/finalize", response_model=FinalizeOutcome, summary="Finalize all evaluations")
async def finalize(
    data: Optional[FinalizeRequest] = None,
    evaluator: Evaluator = Depends(current_evaluator),
    engine: ResultLifecycleEngine = Depends(get_lifecycle_engine),
) -> FinalizeOutcome:
    return await engine.finalize_all(evaluator.id, data.admin_password if data else None)
