"""
RGS wallet REST client.

Single aiohttp.ClientSession shared for all requests.
One POST per wallet operation, JSON in and JSON out; no batching, no retries.
Returns decoded JSON bodies; state handling lives in the SessionCoordinator.
"""

from __future__ import annotations
import json
import logging
import time
from typing import Any

import aiohttp

from rgs.errors import MalformedResponse, MissingIdentity, RemoteRejected

log = logging.getLogger(__name__)

AUTHENTICATE_PATH = "/wallet/authenticate"
BALANCE_PATH = "/wallet/balance"
PLAY_PATH = "/wallet/play"
END_ROUND_PATH = "/wallet/end-round"
EVENT_PATH = "/bet/event"


def secure_base_url(url: str | None) -> str:
    """
    Normalize the RGS location to an https:// base URL.
    Operators pass a bare host (e.g. rgs.stake-engine.com); any scheme given is replaced.
    """
    if not url or not url.strip():
        raise MissingIdentity("rgs_url")
    host = url.strip().split("://", 1)[-1].rstrip("/")
    if not host:
        raise MissingIdentity("rgs_url")
    return f"https://{host}"


def _decode(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return text


class RGSRestClient:
    """
    Async REST client for the RGS wallet API.

    Call startup() before use, or pass an already open session (tests do).
    """

    def __init__(
        self,
        base_url: str | None,
        request_timeout_s: float = 10,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._base_url = secure_base_url(base_url)
        self._request_timeout_s = request_timeout_s
        self._session = session
        self._owns_session = session is None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def startup(self) -> None:
        if self._session is not None:
            return
        connector = aiohttp.TCPConnector(
            limit=10,
            keepalive_timeout=60,
            enable_cleanup_closed=True,
            ttl_dns_cache=300,
        )
        self._session = aiohttp.ClientSession(
            connector=connector,
            timeout=aiohttp.ClientTimeout(total=self._request_timeout_s, connect=2),
            headers={"Content-Type": "application/json"},
        )
        self._owns_session = True
        log.info("RGS REST client ready for %s", self._base_url)

    async def shutdown(self) -> None:
        if self._session and self._owns_session:
            await self._session.close()
        self._session = None

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    async def _post(self, path: str, body: dict[str, Any]) -> Any:
        assert self._session, "Call startup() first"
        sent_at = time.monotonic_ns()
        async with self._session.post(self._url(path), json=body) as resp:
            status = resp.status
            text = await resp.text()
        latency_ms = (time.monotonic_ns() - sent_at) / 1_000_000
        log.debug("POST %s status=%d latency_ms=%.2f", path, status, latency_ms)

        payload = _decode(text)
        if not 200 <= status < 300:
            raise RemoteRejected(path, status, payload)
        if isinstance(payload, str):
            raise MalformedResponse(path, "body is not JSON", payload)
        return payload

    # ------------------------------------------------------------------
    # Wallet API methods
    # ------------------------------------------------------------------

    async def authenticate(self, session_id: str, language: str) -> Any:
        return await self._post(AUTHENTICATE_PATH, {"sessionID": session_id, "language": language})

    async def balance(self, session_id: str) -> Any:
        return await self._post(BALANCE_PATH, {"sessionID": session_id})

    async def play(self, session_id: str, mode: str, amount: int) -> Any:
        return await self._post(PLAY_PATH, {"sessionID": session_id, "mode": mode, "amount": amount})

    async def end_round(self, session_id: str) -> Any:
        return await self._post(END_ROUND_PATH, {"sessionID": session_id})

    async def event(self, session_id: str, event: str) -> Any:
        return await self._post(EVENT_PATH, {"sessionID": session_id, "event": event})
