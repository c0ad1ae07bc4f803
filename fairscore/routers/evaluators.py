"""
Evaluator Router - Science Fair Evaluation Platform
fairscore/routers/evaluators.py

Admin CRUD for evaluators plus CSV bulk import. Deleting an evaluator drops
them from every panel; their results stay.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from fairscore.config import get_settings
from fairscore.core.dependencies import get_entity_store, get_evaluator_repository, require_admin
from fairscore.models.evaluator import Evaluator, EvaluatorCreate, EvaluatorUpdate
from fairscore.repositories.entity_store import EntityStore
from fairscore.repositories.evaluator_repository import EvaluatorRepository
from fairscore.services.evaluator_import import ImportReport, import_evaluators

router = APIRouter(prefix="/api/v1", tags=["Evaluators"], dependencies=[Depends(require_admin)])


class EvaluatorListResponse(BaseModel):
    items: List[Evaluator]
    total: int


class EvaluatorImportRequest(BaseModel):
    csv: str = Field(..., description="Header row (e.g. name,email,expertise) then one evaluator per line")


@router.get("/evaluators", response_model=EvaluatorListResponse, summary="List evaluators")
async def list_evaluators(repo: EvaluatorRepository = Depends(get_evaluator_repository)) -> EvaluatorListResponse:
    items = repo.get_all()
    return EvaluatorListResponse(items=items, total=len(items))


@router.post(
    "/evaluators",
    response_model=Evaluator,
    status_code=status.HTTP_201_CREATED,
    summary="Create an evaluator",
    description="Creates an evaluator. An access code is generated when none is given.",
)
async def create_evaluator(
    evaluator: EvaluatorCreate,
    repo: EvaluatorRepository = Depends(get_evaluator_repository),
) -> Evaluator:
    return repo.create(evaluator)


@router.post(
    "/evaluators/import",
    response_model=ImportReport,
    status_code=status.HTTP_201_CREATED,
    summary="Bulk import evaluators from CSV",
)
async def import_evaluators_csv(
    request: EvaluatorImportRequest,
    store: EntityStore = Depends(get_entity_store),
) -> ImportReport:
    config = get_settings()
    return import_evaluators(store, request.csv, code_range=(config.EVALUATOR_CODE_MIN, config.EVALUATOR_CODE_MAX))


@router.get("/evaluators/{evaluator_id}", response_model=Evaluator, summary="Get an evaluator")
async def get_evaluator(evaluator_id: str, repo: EvaluatorRepository = Depends(get_evaluator_repository)) -> Evaluator:
    return repo.get_or_raise(evaluator_id)


@router.patch("/evaluators/{evaluator_id}", response_model=Evaluator, summary="Update an evaluator")
async def update_evaluator(
    evaluator_id: str,
    data: EvaluatorUpdate,
    repo: EvaluatorRepository = Depends(get_evaluator_repository),
) -> Evaluator:
    return repo.update(evaluator_id, data)


@router.delete("/evaluators/{evaluator_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an evaluator")
async def delete_evaluator(evaluator_id: str, repo: EvaluatorRepository = Depends(get_evaluator_repository)) -> None:
    repo.delete(evaluator_id)
