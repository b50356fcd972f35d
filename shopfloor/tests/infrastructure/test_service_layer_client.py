"""
Tests for the Service Layer client and the gateway-backed activity writer,
using `httpx.MockTransport` in place of the ERP server.
"""

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from shopfloor.domain.shared.exceptions import GatewayError, WriteRejectedError
from shopfloor.domain.workforce.entities.activity_event import ActivityEventDraft
from shopfloor.domain.workforce.value_objects.enums import ActivityKind
from shopfloor.infrastructure.service_layer import (
    ServiceLayerActivityWriter,
    ServiceLayerClient,
)
from shopfloor.infrastructure.service_layer.client import error_message
from shopfloor.tests.utils.fakes import PLANT_TZ, at

BASE_URL = "https://erp.local:50000/b1s/v1"


class FakeServiceLayer:
    """Records requests and answers them from a queue of per-path handlers."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.logins = 0
        self.create_statuses: list[int] = []
        self.login_via_cookie = True

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/b1s/v1")

        if path == "/Login":
            self.logins += 1
            session_id = f"session-{self.logins}"
            if self.login_via_cookie:
                return httpx.Response(
                    200,
                    json={"Version": "1000"},
                    headers={"Set-Cookie": f"B1SESSION={session_id}; path=/b1s"},
                )
            return httpx.Response(200, json={"SessionId": session_id})

        if path == "/Logout":
            return httpx.Response(204)

        status = self.create_statuses.pop(0) if self.create_statuses else 201
        if status == 401:
            return httpx.Response(
                401, json={"error": {"code": 301, "message": {"value": "Invalid session"}}}
            )
        if status >= 400:
            return httpx.Response(
                status, json={"error": {"code": -1, "message": {"value": "No matching records"}}}
            )
        body = json.loads(request.content)
        return httpx.Response(201, json={**body, "DocEntry": 77})

    def session_cookies(self) -> list[str | None]:
        return [
            request.headers.get("Cookie")
            for request in self.requests
            if not request.url.path.endswith("/Login")
        ]


class Clock:
    def __init__(self):
        self.now = datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: int) -> None:
        self.now += timedelta(minutes=minutes)


@pytest.fixture
def server():
    return FakeServiceLayer()


@pytest.fixture
def fake_clock():
    return Clock()


@pytest.fixture
def client(server, fake_clock):
    return ServiceLayerClient(
        base_url=BASE_URL,
        company_db="SBODEMO",
        username="manager",
        password="secret",
        transport=httpx.MockTransport(server),
        clock=fake_clock,
    )


class TestSession:
    @pytest.mark.asyncio
    async def test_login_posts_credentials_and_reads_cookie(self, client, server, fake_clock):
        session_id = await client.login()

        assert session_id == "session-1"
        assert json.loads(server.requests[0].content) == {
            "CompanyDB": "SBODEMO",
            "UserName": "manager",
            "Password": "secret",
        }
        assert client.expires_at == fake_clock.now + timedelta(minutes=30)

    @pytest.mark.asyncio
    async def test_login_reads_session_id_from_body(self, client, server):
        server.login_via_cookie = False

        assert await client.login() == "session-1"

    @pytest.mark.asyncio
    async def test_login_failure_raises_gateway_error(self, fake_clock):
        def reject(request):
            return httpx.Response(
                401, json={"error": {"message": {"value": "Fail to get DB Credentials"}}}
            )

        client = ServiceLayerClient(
            BASE_URL, "SBODEMO", "manager", "wrong",
            transport=httpx.MockTransport(reject), clock=fake_clock,
        )

        with pytest.raises(GatewayError) as exc_info:
            await client.login()

        assert exc_info.value.status_code == 401
        assert "Fail to get DB Credentials" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_session_reused_then_refreshed_near_expiry(self, client, server, fake_clock):
        await client.create("ATELIERATTN", {"Code": "1"})
        fake_clock.advance(20)
        await client.create("ATELIERATTN", {"Code": "2"})
        assert server.logins == 1

        # each successful call extends the session, so refresh only after idling
        fake_clock.advance(26)
        await client.create("ATELIERATTN", {"Code": "3"})

        assert server.logins == 2
        assert server.session_cookies() == [
            "B1SESSION=session-1",
            "B1SESSION=session-1",
            "B1SESSION=session-2",
        ]

    @pytest.mark.asyncio
    async def test_401_relogs_and_retries_once(self, client, server):
        server.create_statuses = [401, 201]

        created = await client.create("ATELIERATTN", {"Code": "1"})

        assert created["DocEntry"] == 77
        assert server.logins == 2
        assert server.session_cookies() == ["B1SESSION=session-1", "B1SESSION=session-2"]

    @pytest.mark.asyncio
    async def test_second_401_is_surfaced(self, client, server):
        server.create_statuses = [401, 401]

        with pytest.raises(GatewayError) as exc_info:
            await client.create("ATELIERATTN", {"Code": "1"})

        assert exc_info.value.status_code == 401
        assert server.logins == 2
        assert client.session_id is None

    @pytest.mark.asyncio
    async def test_error_status_is_not_retried(self, client, server):
        server.create_statuses = [400]

        with pytest.raises(GatewayError) as exc_info:
            await client.create("ATELIERATTN", {"Code": "1"})

        assert exc_info.value.message == "No matching records"
        assert server.logins == 1

    @pytest.mark.asyncio
    async def test_unreachable_server(self, fake_clock):
        def fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = ServiceLayerClient(
            BASE_URL, "SBODEMO", "manager", "secret",
            transport=httpx.MockTransport(fail), clock=fake_clock,
        )

        with pytest.raises(GatewayError, match="unreachable"):
            await client.create("ATELIERATTN", {})

    @pytest.mark.asyncio
    async def test_logout_clears_session_even_on_failure(self, server, fake_clock):
        def handler(request):
            if request.url.path.endswith("/Logout"):
                raise httpx.ConnectError("gone", request=request)
            return server(request)

        client = ServiceLayerClient(
            BASE_URL, "SBODEMO", "manager", "secret",
            transport=httpx.MockTransport(handler), clock=fake_clock,
        )
        await client.login()

        await client.logout()

        assert client.session_id is None
        assert not client.has_valid_session()


def test_error_message_falls_back_to_text():
    response = httpx.Response(500, text="Internal error")

    assert error_message(response) == "Internal error"


class TestServiceLayerActivityWriter:
    def _draft(self) -> ActivityEventDraft:
        return ActivityEventDraft(
            work_order_id="1042",
            machine_id="CNC-01",
            worker_id="200",
            kind=ActivityKind.START,
            occurred_at=at(8, 5),
        )

    @pytest.mark.asyncio
    async def test_append_posts_udo_payload(self, client, server):
        writer = ServiceLayerActivityWriter(client, "ATELIERATTN", PLANT_TZ)

        event = await writer.append(self._draft())

        create = server.requests[-1]
        body = json.loads(create.content)
        assert create.url.path.endswith("/ATELIERATTN")
        assert body["U_ProcType"] == "BAS"
        assert body["U_StartTime"] == 805
        assert body["Code"] == body["Name"] == event.id
        assert event.sequence == 77
        assert event.occurred_at == at(8, 5)

    @pytest.mark.asyncio
    async def test_gateway_failure_becomes_write_rejected(self, client, server):
        server.create_statuses = [500]
        writer = ServiceLayerActivityWriter(client, "ATELIERATTN", PLANT_TZ)

        with pytest.raises(WriteRejectedError) as exc_info:
            await writer.append(self._draft())

        assert exc_info.value.status_code == 500
