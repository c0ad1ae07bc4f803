"""
Remote Store Client - Science Fair Evaluation Platform
fairscore/services/remote_client.py

JSON-over-HTTP client for the spreadsheet web-app that is the event's
system of record. One endpoint URL serves every call:

    GET  <url>?action=getData                      -> dataset
    POST {"type": "adminLogin", "password": ...}   -> {ok, token?, error?}
    POST {"type": "bulk", "token": ..., "data": ...} -> {ok, error?}
    POST {"type": "result", "data": <Result>}      -> {ok, error?}

Every failure (no URL, transport, non-2xx, non-JSON) raises RemoteError.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from fairscore.core.exceptions import AuthError, RemoteError

logger = logging.getLogger(__name__)


class RemoteStoreClient:
    """Async client for one remote store URL."""

    def __init__(
        self,
        url: Optional[str],
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = (url or "").strip()
        self.timeout = timeout
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.url)

    def _require_url(self) -> str:
        if not self.url:
            raise RemoteError("Remote URL not configured")
        return self.url

    def _client(self) -> httpx.AsyncClient:
        # Apps Script answers with a redirect to the actual content host
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self.transport,
        )

    @staticmethod
    def _parse(response: httpx.Response) -> Any:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteError(
                f"Remote store returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError("Invalid JSON from server", status_code=response.status_code) from e

    async def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = self._require_url()
        logger.debug(f"POST {payload.get('type')} to remote store")
        async with self._client() as client:
            try:
                response = await client.post(url, json=payload)
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise RemoteError(f"Remote store unreachable: {e}") from e
        body = self._parse(response)
        if not isinstance(body, dict):
            raise RemoteError("Unexpected response from server")
        return body

    async def get_data(self) -> Dict[str, Any]:
        url = self._require_url()
        async with self._client() as client:
            try:
                response = await client.get(url, params={"action": "getData"})
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise RemoteError(f"Remote store unreachable: {e}") from e
        body = self._parse(response)
        if not isinstance(body, dict):
            raise RemoteError("Unexpected dataset from server")
        if body.get("ok") is False:
            raise RemoteError(f"Failed to fetch data: {body.get('error') or 'unknown error'}")
        return body

    async def admin_login(self, password: str) -> str:
        """
        Exchange the admin password for a session token.

        Raises:
            AuthError: the server rejected the password
            RemoteError: transport or parse failure
        """
        body = await self._post({"type": "adminLogin", "password": password})
        if not body.get("ok") or not body.get("token"):
            raise AuthError(f"Admin login failed: {body.get('error') or 'rejected'}")
        return str(body["token"])

    async def push_bulk(self, token: str, data: Dict[str, Any]) -> None:
        body = await self._post({"type": "bulk", "token": token or "", "data": data})
        if not body.get("ok"):
            raise RemoteError(f"Bulk sync rejected: {body.get('error') or 'unknown error'}")

    async def push_result(self, result: Dict[str, Any]) -> None:
        body = await self._post({"type": "result", "data": result})
        if not body.get("ok"):
            raise RemoteError(f"Result push rejected: {body.get('error') or 'unknown error'}")
