"""
Health Check Router - Science Fair Evaluation Platform
fairscore/routers/health.py
"""

from datetime import datetime, timezone
from typing import Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from fairscore.config import get_settings
from fairscore.core.dependencies import get_entity_store, get_sync_coordinator
from fairscore.repositories.entity_store import EntityStore
from fairscore.services.sync_service import SynchronizationCoordinator

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]
    last_sync: Optional[datetime] = None


@router.get("/health", response_model=HealthResponse, summary="Service health")
async def health_check(
    store: EntityStore = Depends(get_entity_store),
    sync: SynchronizationCoordinator = Depends(get_sync_coordinator),
) -> HealthResponse:
    remote = "configured" if sync.client().configured else "not configured"
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=get_settings().APP_VERSION,
        dependencies={"entity_store": "in-memory", "remote_store": remote},
        last_sync=store.last_sync,
    )
