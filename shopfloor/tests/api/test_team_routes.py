"""API tests for the team view, catalogue and health routes."""

import asyncio

from fastapi.testclient import TestClient

from shopfloor.api.deps import get_aggregation_engine
from shopfloor.application.services.team_service import WorkforceAggregationEngine
from shopfloor.main import app
from shopfloor.tests.utils.fakes import at, make_event


def test_team_snapshot(client: TestClient, api_prefix: str, event_store) -> None:
    event_store.events = [
        make_event("1", "START", at(8), sequence=1, machine_id="M1"),
        make_event("2", "STOP", at(9), sequence=2, machine_id="M2", pause_reason_code="1"),
    ]

    response = client.get(f"{api_prefix}/team/machines")

    assert response.status_code == 200
    content = response.json()
    assert content["current_shift"] == "A"
    assert content["shift_filter"] == "all"
    names = [card["machine_name"] for card in content["machines"]]
    assert names == ["Çapak Alma", "Freze", "Torna 1", "Boşta"]

    cards = {card["machine_id"]: card for card in content["machines"]}
    assert [w["worker_id"] for w in cards["M1"]["assigned"]] == ["1"]
    assert cards["M1"]["assigned"][0]["current_work_order"]["work_order_id"] == "WO-1"
    assert [w["worker_id"] for w in cards["M2"]["paused"]] == ["2"]
    assert [w["worker_id"] for w in cards["UNASSIGNED"]["available"]] == ["4"]
    assert cards["UNASSIGNED"]["is_idle_pool"] is True


def test_team_snapshot_echoes_shift_filter(client: TestClient, api_prefix: str) -> None:
    response = client.get(f"{api_prefix}/team/machines", params={"shift": "B"})

    assert response.status_code == 200
    assert response.json()["shift_filter"] == "B"


def test_team_snapshot_rejects_unknown_shift(client: TestClient, api_prefix: str) -> None:
    response = client.get(f"{api_prefix}/team/machines", params={"shift": "D"})

    assert response.status_code == 422


def test_team_snapshot_timeout(client: TestClient, api_prefix: str, directory, event_store, clock) -> None:
    async def slow_read(today):
        await asyncio.sleep(1)
        return []

    event_store.find_latest_events_today = slow_read
    app.dependency_overrides[get_aggregation_engine] = lambda: WorkforceAggregationEngine(
        directory, event_store, read_timeout_seconds=0.01, clock=clock
    )

    response = client.get(f"{api_prefix}/team/machines")

    assert response.status_code == 504
    assert response.json()["detail"]["type"] == "timeout"


def test_shifts(client: TestClient, api_prefix: str) -> None:
    response = client.get(f"{api_prefix}/team/shifts")

    assert response.status_code == 200
    content = response.json()
    assert content["current_shift"] == "A"
    assert [s["code"] for s in content["shifts"]] == ["A", "B", "C"]
    assert content["shifts"][1]["start_time"] == "16:00:00"


def test_worker_machines(client: TestClient, api_prefix: str) -> None:
    response = client.get(f"{api_prefix}/workers/20/machines")

    assert response.status_code == 200
    assert response.json() == [
        {"machine_id": "M1", "machine_name": "Torna 1", "is_default": True},
        {"machine_id": "M2", "machine_name": "Çapak Alma", "is_default": False},
    ]


def test_worker_machines_unknown_login(client: TestClient, api_prefix: str) -> None:
    response = client.get(f"{api_prefix}/workers/2/machines")

    assert response.status_code == 404


def test_machine_workers(client: TestClient, api_prefix: str) -> None:
    response = client.get(f"{api_prefix}/machines/M3/workers")

    assert response.status_code == 200
    assert [w["worker_id"] for w in response.json()] == ["3"]


def test_machine_workers_unknown_machine(client: TestClient, api_prefix: str) -> None:
    response = client.get(f"{api_prefix}/machines/M404/workers")

    assert response.status_code == 404


def test_pause_reasons(client: TestClient, api_prefix: str) -> None:
    response = client.get(f"{api_prefix}/pause-reasons")

    assert response.status_code == 200
    assert response.json() == [
        {"code": "1", "name": "Mola"},
        {"code": "2", "name": "Arıza"},
    ]


def test_health(client: TestClient, api_prefix: str) -> None:
    response = client.get(f"{api_prefix}/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics(client: TestClient, api_prefix: str) -> None:
    response = client.get(f"{api_prefix}/metrics")

    assert response.status_code == 200
    assert "shopfloor_http_requests" in response.text
