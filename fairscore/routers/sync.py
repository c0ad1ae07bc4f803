"""
Sync Router - Science Fair Evaluation Platform
fairscore/routers/sync.py

Admin control of the remote store session and data transfer.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from fairscore.core.dependencies import get_sync_coordinator, require_admin
from fairscore.services.sync_service import SynchronizationCoordinator, SyncStatus

router = APIRouter(prefix="/api/v1/sync", tags=["Sync"], dependencies=[Depends(require_admin)])


class RemoteLoginRequest(BaseModel):
    password: str


class BulkSyncRequest(BaseModel):
    password: Optional[str] = None


class BulkSyncResponse(BaseModel):
    synced_at: datetime


class LoadResponse(BaseModel):
    loaded: bool
    last_sync: Optional[datetime] = None


class RetryResponse(BaseModel):
    pushed: int
    remaining: int


@router.get("/status", response_model=SyncStatus, summary="Sync status")
async def sync_status(sync: SynchronizationCoordinator = Depends(get_sync_coordinator)) -> SyncStatus:
    return sync.status()


@router.post("/login", response_model=SyncStatus, summary="Open a remote admin session")
async def remote_login(
    request: RemoteLoginRequest,
    sync: SynchronizationCoordinator = Depends(get_sync_coordinator),
) -> SyncStatus:
    await sync.login(request.password)
    return sync.status()


@router.post("/logout", response_model=SyncStatus, summary="Drop the remote admin session")
async def remote_logout(sync: SynchronizationCoordinator = Depends(get_sync_coordinator)) -> SyncStatus:
    sync.logout()
    return sync.status()


@router.post("/bulk", response_model=BulkSyncResponse, summary="Push the full dataset")
async def bulk_sync(
    request: Optional[BulkSyncRequest] = None,
    sync: SynchronizationCoordinator = Depends(get_sync_coordinator),
) -> BulkSyncResponse:
    password = request.password if request else None
    synced_at = await sync.bulk_sync(password)
    return BulkSyncResponse(synced_at=synced_at)


@router.post("/load", response_model=LoadResponse, summary="Reload data from the remote store")
async def load_remote(sync: SynchronizationCoordinator = Depends(get_sync_coordinator)) -> LoadResponse:
    loaded = await sync.load_from_remote()
    return LoadResponse(loaded=loaded, last_sync=sync.store.last_sync)


@router.post("/retry", response_model=RetryResponse, summary="Re-push results that failed to sync")
async def retry_backlog(sync: SynchronizationCoordinator = Depends(get_sync_coordinator)) -> RetryResponse:
    pushed = await sync.retry_backlog()
    return RetryResponse(pushed=pushed, remaining=len(sync.backlog))
