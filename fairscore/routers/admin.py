"""
Admin Router - Science Fair Evaluation Platform
fairscore/routers/admin.py

Destructive and maintenance operations: identifier migration, clearing
scores, resetting the event.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from fairscore.core.dependencies import get_entity_store, get_identifier_allocator, require_admin
from fairscore.repositories.entity_store import EntityStore
from fairscore.services.identifiers import IdentifierAllocator, MigrationReport

router = APIRouter(prefix="/api/v1/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


class IdStatusResponse(BaseModel):
    needs_migration: bool


class ClearScoresResponse(BaseModel):
    results_removed: int


class ResetResponse(BaseModel):
    reset: bool


@router.get("/ids", response_model=IdStatusResponse, summary="Check for legacy identifiers")
async def id_status(ids: IdentifierAllocator = Depends(get_identifier_allocator)) -> IdStatusResponse:
    return IdStatusResponse(needs_migration=ids.needs_migration())


@router.post("/migrate-ids", response_model=MigrationReport, summary="Rewrite ids to the canonical form")
async def migrate_ids(ids: IdentifierAllocator = Depends(get_identifier_allocator)) -> MigrationReport:
    return ids.migrate()


@router.post("/clear-scores", response_model=ClearScoresResponse, summary="Delete every result")
async def clear_scores(store: EntityStore = Depends(get_entity_store)) -> ClearScoresResponse:
    return ClearScoresResponse(results_removed=store.clear_scores())


@router.post("/reset", response_model=ResetResponse, summary="Delete all event data")
async def reset_all(store: EntityStore = Depends(get_entity_store)) -> ResetResponse:
    store.reset_all()
    return ResetResponse(reset=True)
