"""
ERP Service Layer client.

Owns the Service Layer session: logs in on first use, refreshes the session
shortly before it expires, extends it on every successful call and, when the
server answers 401, logs in again and retries the call once. Every failure
surfaces as `GatewayError`.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt

from shopfloor.core.clock import Clock
from shopfloor.core.observability import GATEWAY_REQUESTS, get_logger
from shopfloor.domain.shared.exceptions import GatewayError

logger = get_logger(__name__)

SESSION_COOKIE = "B1SESSION"


class SessionExpiredError(GatewayError):
    """Raised when the Service Layer rejects the current session."""

    def __init__(self) -> None:
        super().__init__("Service Layer session expired", status_code=401)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def error_message(response: httpx.Response) -> str:
    """Extract the Service Layer error text, falling back to the raw body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, dict) and message.get("value"):
            return str(message["value"])
        if isinstance(message, str) and message:
            return message
    return response.text or response.reason_phrase


class ServiceLayerClient:
    """Session-managed async client for the ERP Service Layer REST API."""

    def __init__(
        self,
        base_url: str,
        company_db: str,
        username: str,
        password: str,
        session_minutes: int = 30,
        refresh_buffer_minutes: int = 5,
        timeout_seconds: float = 15.0,
        verify_ssl: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Clock = _utc_now,
    ):
        self._credentials = {
            "CompanyDB": company_db,
            "UserName": username,
            "Password": password,
        }
        self._session_lifetime = timedelta(minutes=session_minutes)
        self._refresh_buffer = timedelta(minutes=refresh_buffer_minutes)
        self._clock = clock
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            verify=verify_ssl,
            transport=transport,
        )
        self._session_id: str | None = None
        self._expires_at: datetime | None = None
        self._lock = asyncio.Lock()

    @property
    def session_id(self) -> str | None:
        return self._session_id

    @property
    def expires_at(self) -> datetime | None:
        return self._expires_at

    def has_valid_session(self) -> bool:
        """True if a session exists and is not within the refresh window."""
        if self._session_id is None or self._expires_at is None:
            return False
        return self._clock() < self._expires_at - self._refresh_buffer

    def _clear_session(self) -> None:
        self._session_id = None
        self._expires_at = None
        self._client.cookies.clear()

    def _extend_session(self) -> None:
        self._expires_at = self._clock() + self._session_lifetime

    async def login(self) -> str:
        """
        Open a new Service Layer session.

        Returns:
            The new session id

        Raises:
            GatewayError: If the server is unreachable, rejects the
                credentials or returns no session id
        """
        try:
            response = await self._client.post("/Login", json=self._credentials)
        except httpx.HTTPError as e:
            GATEWAY_REQUESTS.labels(method="login", outcome="unreachable").inc()
            raise GatewayError(f"Service Layer unreachable: {e}") from e

        if response.is_error:
            GATEWAY_REQUESTS.labels(method="login", outcome="rejected").inc()
            raise GatewayError(
                f"Service Layer login failed: {error_message(response)}",
                status_code=response.status_code,
            )

        session_id = response.cookies.get(SESSION_COOKIE)
        if not session_id:
            try:
                session_id = response.json().get("SessionId")
            except ValueError:
                session_id = None
        if not session_id:
            GATEWAY_REQUESTS.labels(method="login", outcome="rejected").inc()
            raise GatewayError("Service Layer login returned no session id")

        # the session travels in an explicit header, not the client cookie jar
        self._client.cookies.clear()
        self._session_id = session_id
        self._extend_session()
        GATEWAY_REQUESTS.labels(method="login", outcome="ok").inc()
        logger.info("service_layer_login", expires_at=self._expires_at.isoformat())
        return session_id

    async def ensure_session(self) -> str:
        """Return a usable session id, logging in or refreshing as needed."""
        async with self._lock:
            if not self.has_valid_session():
                if self._session_id is not None:
                    logger.info("service_layer_session_refresh")
                await self.login()
            return self._session_id

    async def _send(
        self, method: str, path: str, payload: dict[str, Any] | None
    ) -> dict[str, Any]:
        session_id = await self.ensure_session()
        try:
            response = await self._client.request(
                method,
                path,
                json=payload,
                headers={"Cookie": f"{SESSION_COOKIE}={session_id}"},
            )
        except httpx.HTTPError as e:
            GATEWAY_REQUESTS.labels(method=method, outcome="unreachable").inc()
            raise GatewayError(f"Service Layer unreachable: {e}") from e

        if response.status_code == httpx.codes.UNAUTHORIZED:
            GATEWAY_REQUESTS.labels(method=method, outcome="unauthorized").inc()
            self._clear_session()
            raise SessionExpiredError()

        if response.is_error:
            GATEWAY_REQUESTS.labels(method=method, outcome="rejected").inc()
            raise GatewayError(
                error_message(response), status_code=response.status_code
            )

        GATEWAY_REQUESTS.labels(method=method, outcome="ok").inc()
        self._extend_session()
        if not response.content:
            return {}
        return response.json()

    async def request(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Send an authenticated request.

        A 401 answer clears the session; the request is then retried once
        with a fresh login. A second 401 is returned to the caller.

        Raises:
            GatewayError: If the request fails
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(2),
            retry=retry_if_exception_type(SessionExpiredError),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning("service_layer_retry_after_401", path=path)
                return await self._send(method, path, payload)

    async def create(self, entity: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Create a record of `entity` and return the created object."""
        return await self.request("POST", f"/{entity}", payload)

    async def logout(self) -> None:
        """End the session; local session state is cleared even if the call fails."""
        if self._session_id is None:
            return
        try:
            await self._client.post(
                "/Logout", headers={"Cookie": f"{SESSION_COOKIE}={self._session_id}"}
            )
            GATEWAY_REQUESTS.labels(method="logout", outcome="ok").inc()
        except httpx.HTTPError as e:
            GATEWAY_REQUESTS.labels(method="logout", outcome="unreachable").inc()
            logger.warning("service_layer_logout_failed", error=str(e))
        finally:
            self._clear_session()

    async def aclose(self) -> None:
        await self.logout()
        await self._client.aclose()
