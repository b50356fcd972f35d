"""
Workforce Aggregation

Folds the three bulk reads of the team view (machines, workers with their
assignment, and today's activity events) into a per-machine snapshot. The fold
is pure: it performs no I/O and, given identical inputs, returns an identical
snapshot.
"""

from collections.abc import Iterable
from datetime import datetime

import structlog

from ...shared.base import ValueObject
from ..entities.activity_event import ActivityEvent
from ..entities.directory import (
    IDLE_POOL_MACHINE_ID,
    IDLE_POOL_MACHINE_NAME,
    Machine,
    Worker,
)
from ..value_objects.enums import ActivityKind, ShiftCode, ShiftFilter, WorkerStatus
from .activity_state_machine import classify_worker
from .collation import SortKey, default_sort_key

logger = structlog.get_logger(__name__)


class WorkOrderRef(ValueObject):
    """The work order a worker is currently on, as of their latest event."""

    work_order_id: str
    machine_id: str
    since: datetime


class TeamWorker(ValueObject):
    worker_id: str
    full_name: str
    login_code: str
    status: WorkerStatus
    current_work_order: WorkOrderRef | None = None
    pause_reason_code: str | None = None


class MachineCard(ValueObject):
    """One machine with its workers split into three disjoint buckets."""

    machine_id: str
    machine_name: str
    is_idle_pool: bool = False
    assigned: list[TeamWorker] = []
    paused: list[TeamWorker] = []
    available: list[TeamWorker] = []

    @property
    def worker_count(self) -> int:
        return len(self.assigned) + len(self.paused) + len(self.available)


class WorkforceSnapshot(ValueObject):
    generated_at: datetime
    current_shift: ShiftCode
    shift_filter: ShiftFilter
    machines: list[MachineCard]

    @property
    def worker_count(self) -> int:
        return sum(card.worker_count for card in self.machines)


def build_latest_event_map(
    events: Iterable[ActivityEvent],
) -> dict[str, ActivityEvent]:
    """Map each worker to their maximal event by (occurred_at, sequence)."""
    latest: dict[str, ActivityEvent] = {}
    for event in events:
        current = latest.get(event.worker_id)
        if current is None or event.order_key > current.order_key:
            latest[event.worker_id] = event
    return latest


def _team_worker(worker: Worker, latest: ActivityEvent | None) -> TeamWorker:
    status = classify_worker(latest)
    if status == WorkerStatus.AVAILABLE or latest is None:
        return TeamWorker(
            worker_id=worker.worker_id,
            full_name=worker.full_name,
            login_code=worker.login_code,
            status=WorkerStatus.AVAILABLE,
        )

    return TeamWorker(
        worker_id=worker.worker_id,
        full_name=worker.full_name,
        login_code=worker.login_code,
        status=status,
        current_work_order=WorkOrderRef(
            work_order_id=latest.work_order_id,
            machine_id=latest.machine_id,
            since=latest.occurred_at,
        ),
        pause_reason_code=latest.pause_reason_code
        if latest.known_kind == ActivityKind.STOP
        else None,
    )


def _idle_team_worker(worker: Worker) -> TeamWorker:
    return TeamWorker(
        worker_id=worker.worker_id,
        full_name=worker.full_name,
        login_code=worker.login_code,
        status=WorkerStatus.AVAILABLE,
    )


def fold_snapshot(
    machines: list[Machine],
    workers: list[Worker],
    events: list[ActivityEvent],
    *,
    generated_at: datetime,
    current_shift: ShiftCode,
    shift_filter: ShiftFilter = ShiftFilter.ALL,
    sort_key: SortKey = default_sort_key,
) -> WorkforceSnapshot:
    """
    Build the workforce snapshot from already-fetched data.

    Workers whose assignment names an unknown machine join the idle pool. The
    latest event decides a worker's bucket even when it was recorded on a
    machine other than the one they are assigned to; the assignment decides
    the card.

    Args:
        machines: Every machine in the directory
        workers: Every worker with their current assignment
        events: Activity events of the current plant-local day
        generated_at: Timestamp stamped on the snapshot
        current_shift: Shift active at `generated_at`
        shift_filter: Requested shift filter, echoed back unchanged
        sort_key: Collation key for machine display names

    Returns:
        Machine cards ordered by display name, idle-pool card last
    """
    machine_ids = {machine.machine_id for machine in machines}
    latest_by_worker = build_latest_event_map(events)

    ordered_workers = sorted(
        workers, key=lambda worker: (sort_key(worker.full_name), worker.worker_id)
    )

    by_machine: dict[str, list[Worker]] = {}
    idle: list[Worker] = []
    for worker in ordered_workers:
        machine_id = worker.assigned_machine_id
        if worker.is_idle:
            idle.append(worker)
        elif machine_id not in machine_ids:
            logger.warning(
                "worker_assigned_to_unknown_machine",
                worker_id=worker.worker_id,
                machine_id=machine_id,
            )
            idle.append(worker)
        else:
            by_machine.setdefault(machine_id, []).append(worker)

    cards: list[MachineCard] = []
    for machine in sorted(
        machines,
        key=lambda machine: (sort_key(machine.machine_name), machine.machine_id),
    ):
        buckets: dict[WorkerStatus, list[TeamWorker]] = {
            status: [] for status in WorkerStatus
        }
        for worker in by_machine.get(machine.machine_id, []):
            team_worker = _team_worker(
                worker, latest_by_worker.get(worker.worker_id)
            )
            buckets[team_worker.status].append(team_worker)

        cards.append(
            MachineCard(
                machine_id=machine.machine_id,
                machine_name=machine.machine_name,
                assigned=buckets[WorkerStatus.ASSIGNED],
                paused=buckets[WorkerStatus.PAUSED],
                available=buckets[WorkerStatus.AVAILABLE],
            )
        )

    if idle:
        cards.append(
            MachineCard(
                machine_id=IDLE_POOL_MACHINE_ID,
                machine_name=IDLE_POOL_MACHINE_NAME,
                is_idle_pool=True,
                available=[_idle_team_worker(worker) for worker in idle],
            )
        )

    return WorkforceSnapshot(
        generated_at=generated_at,
        current_shift=current_shift,
        shift_filter=shift_filter,
        machines=cards,
    )
