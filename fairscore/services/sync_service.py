"""
Synchronization Coordinator - Science Fair Evaluation Platform
fairscore/services/sync_service.py

Keeps the in-memory store and the remote store in step:

  - load_from_remote: remote dataset replaces local collections (startup)
  - bulk_sync: admin-gated push of the full snapshot
  - push_result: best-effort single-result push after each submit

The admin session token lives only in memory. Result pushes run as
background tasks; a failure lands in the backlog as result id -> ts of the
version that failed, instead of escaping. A retry pushes the record
currently in the store, never the copy that failed. A successful bulk sync
removes only the entries its snapshot carried at the same or a newer ts.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, Optional, Set

import httpx
from pydantic import ValidationError as PydanticValidationError

from fairscore.core.exceptions import AuthError, RemoteError
from fairscore.models.base import CamelModel
from fairscore.models.result import Result
from fairscore.models.snapshot import RemoteDataset
from fairscore.repositories.entity_store import EntityStore
from fairscore.services.remote_client import RemoteStoreClient

logger = logging.getLogger(__name__)


class SyncStatus(CamelModel):
    remote_configured: bool
    authenticated: bool
    last_sync: Optional[datetime] = None
    pending_pushes: int = 0
    backlog: int = 0


class SynchronizationCoordinator:
    def __init__(
        self,
        store: EntityStore,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.store = store
        self.timeout = timeout
        self.transport = transport
        self._token: Optional[str] = None
        self._tasks: Set[asyncio.Task] = set()
        self.backlog: Dict[str, int] = {}

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def client(self) -> RemoteStoreClient:
        """Client for the URL currently held in event settings."""
        return RemoteStoreClient(self.store.settings.gas_url, timeout=self.timeout, transport=self.transport)

    @property
    def authenticated(self) -> bool:
        return self._token is not None

    async def login(self, password: str) -> None:
        self._token = await self.client().admin_login(password)
        logger.info("Admin session established with remote store")

    def logout(self) -> None:
        self._token = None

    def status(self) -> SyncStatus:
        return SyncStatus(
            remote_configured=self.client().configured,
            authenticated=self.authenticated,
            last_sync=self.store.last_sync,
            pending_pushes=len(self._tasks),
            backlog=len(self.backlog),
        )

    # ------------------------------------------------------------------
    # Bulk
    # ------------------------------------------------------------------

    async def bulk_sync(self, password: Optional[str] = None) -> datetime:
        """
        Push the full dataset, logging in first when no token is held.

        Local state is never modified on failure.

        Raises:
            RemoteError: no URL configured, transport failure or rejection
            AuthError: no token and no (or a wrong) password
        """
        client = self.client()
        if not client.configured:
            raise RemoteError("Remote URL not configured")

        if self._token is None:
            if not password:
                raise AuthError("Admin password required to sync")
            await self.login(password)

        snapshot = self.store.snapshot()
        carried = {r.id: r.ts for r in snapshot.results}
        payload = snapshot.to_wire()
        try:
            await client.push_bulk(self._token, payload)
        except RemoteError:
            # A rejected push usually means the session expired
            self._token = None
            raise

        self.store.last_sync = datetime.now(timezone.utc)
        # Results written while the push was in flight are not covered
        for result_id, failed_ts in list(self.backlog.items()):
            if result_id in carried and carried[result_id] >= failed_ts:
                del self.backlog[result_id]
        logger.info(f"Bulk sync complete: {len(payload['results'])} results pushed")
        return self.store.last_sync

    # ------------------------------------------------------------------
    # Single result
    # ------------------------------------------------------------------

    async def push_result(self, result: Result) -> bool:
        """
        Best-effort push of one result. Never raises; a failure is logged and
        the result id is kept in the backlog for a later retry.
        """
        client = self.client()
        if not client.configured:
            logger.debug(f"No remote URL, result {result.id} kept locally only")
            return False
        result_id, ts = result.id, result.ts
        try:
            await client.push_result(result.to_wire())
        except (RemoteError, AuthError) as e:
            logger.warning(f"Result push failed for {result_id}: {e.message}")
            self._mark_failed(result_id, ts)
            return False
        # A newer version that failed meanwhile stays in the backlog
        if self.backlog.get(result_id, ts) <= ts:
            self.backlog.pop(result_id, None)
        return True

    def _mark_failed(self, result_id: str, ts: int) -> None:
        self.backlog[result_id] = max(ts, self.backlog.get(result_id, ts))

    def _current(self, result_id: str) -> Optional[Result]:
        for result in self.store.results:
            if result.id == result_id:
                return result
        return None

    def schedule_push(self, result: Result) -> Optional[asyncio.Task]:
        """Push in the background when a loop is running, else skip."""
        if not self.client().configured:
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"No running event loop, result {result.id} queued in backlog")
            self._mark_failed(result.id, result.ts)
            return None
        task = loop.create_task(self.push_result(result.model_copy(deep=True)))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_for_pushes(self) -> None:
        """Wait for every scheduled result push to settle."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def retry_backlog(self) -> int:
        """
        Re-push the current store record of each backlogged result. Ids whose
        record is gone are dropped. Returns how many went through.
        """
        pushed = 0
        for result_id in list(self.backlog):
            if result_id not in self.backlog:
                continue
            result = self._current(result_id)
            if result is None:
                logger.info(f"Result {result_id} no longer exists, dropped from backlog")
                del self.backlog[result_id]
                continue
            if await self.push_result(result.model_copy(deep=True)):
                pushed += 1
        logger.info(f"Backlog retry: {pushed} pushed, {len(self.backlog)} still pending")
        return pushed

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    async def load_from_remote(self) -> bool:
        """
        Replace local data with the remote dataset.

        Any failure is logged and the local data kept. Returns whether the
        load happened.
        """
        client = self.client()
        if not client.configured:
            return False
        try:
            data = await client.get_data()
            dataset = RemoteDataset.model_validate(data)
        except RemoteError as e:
            logger.warning(f"Remote load failed, keeping local data: {e.message}")
            return False
        except PydanticValidationError as e:
            logger.warning(f"Remote dataset malformed, keeping local data: {e.error_count()} errors")
            return False

        self.store.replace_from_snapshot(dataset)
        self.store.last_sync = datetime.now(timezone.utc)
        return True
