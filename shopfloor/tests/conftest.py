import pytest

from shopfloor.domain.workforce.entities.directory import Machine, PauseReason, Worker
from shopfloor.tests.utils.fakes import (
    InMemoryDirectory,
    InMemoryEventStore,
    InMemoryPauseReasons,
    InMemoryWorkOrders,
    at,
)


@pytest.fixture
def machines() -> list[Machine]:
    return [
        Machine(
            machine_id="M1",
            machine_name="Torna 1",
            default_assignee_code="20",
            secondary_assignee_codes="200, 300",
        ),
        Machine(
            machine_id="M2",
            machine_name="Çapak Alma",
            default_assignee_code="200",
            secondary_assignee_codes="20",
        ),
        Machine(
            machine_id="M3",
            machine_name="Freze",
            default_assignee_code=None,
            secondary_assignee_codes="300",
        ),
    ]


@pytest.fixture
def workers() -> list[Worker]:
    return [
        Worker(worker_id="1", full_name="Ahmet Yılmaz", login_code="20", assigned_machine_id="M1"),
        Worker(worker_id="2", full_name="Mehmet Demir", login_code="200", assigned_machine_id="M2"),
        Worker(worker_id="3", full_name="Ayşe Kaya", login_code="300", assigned_machine_id="M3"),
        Worker(worker_id="4", full_name="Zeynep Çelik", login_code="400", assigned_machine_id=None),
    ]


@pytest.fixture
def pause_reasons() -> list[PauseReason]:
    return [PauseReason(code="1", name="Mola"), PauseReason(code="2", name="Arıza")]


@pytest.fixture
def directory(machines, workers) -> InMemoryDirectory:
    return InMemoryDirectory(machines, workers)


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def work_orders() -> InMemoryWorkOrders:
    return InMemoryWorkOrders(["WO-1", "WO-2"])


@pytest.fixture
def pause_reason_repository(pause_reasons) -> InMemoryPauseReasons:
    return InMemoryPauseReasons(pause_reasons)


@pytest.fixture
def now():
    return at(10, 30)


@pytest.fixture
def clock(now):
    return lambda: now
