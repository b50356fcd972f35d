"""
Team view application services.

`WorkforceAggregationEngine` issues the three snapshot reads concurrently
under one deadline and folds them. `TeamDirectoryService` answers the
read-only catalogue queries: shifts, authorization listings and pause reasons.
"""

import asyncio
import time

from shopfloor.core.clock import Clock, plant_now
from shopfloor.core.observability import (
    SNAPSHOT_DURATION,
    SNAPSHOT_FAILURES,
    get_logger,
)
from shopfloor.domain.shared.exceptions import (
    DomainError,
    EntityNotFoundError,
    SnapshotTimeoutError,
    ValidationError,
)
from shopfloor.domain.workforce.entities.directory import PauseReason
from shopfloor.domain.workforce.repositories import (
    ActivityEventRepository,
    DirectoryRepository,
    PauseReasonRepository,
)
from shopfloor.domain.workforce.services.authorization import (
    AuthorizedMachine,
    AuthorizedWorker,
    machines_for_worker,
    workers_for_machine,
)
from shopfloor.domain.workforce.services.collation import SortKey, default_sort_key
from shopfloor.domain.workforce.services.workforce_aggregation import (
    WorkforceSnapshot,
    fold_snapshot,
)
from shopfloor.domain.workforce.value_objects.enums import ShiftCode, ShiftFilter
from shopfloor.domain.workforce.value_objects.shift import (
    ShiftDefinition,
    list_shifts,
    resolve_shift,
)

logger = get_logger(__name__)


class WorkforceAggregationEngine:
    """
    Builds the plant-wide workforce snapshot.

    Exactly three bulk reads are issued per snapshot regardless of plant size:
    machines, workers with assignment, and today's events. Nothing is cached
    between calls.
    """

    def __init__(
        self,
        directory: DirectoryRepository,
        event_repository: ActivityEventRepository,
        read_timeout_seconds: float,
        sort_key: SortKey = default_sort_key,
        clock: Clock = plant_now,
    ):
        self._directory = directory
        self._events = event_repository
        self._read_timeout = read_timeout_seconds
        self._sort_key = sort_key
        self._clock = clock

    async def build_snapshot(
        self,
        shift_filter: ShiftFilter = ShiftFilter.ALL,
        timeout_seconds: float | None = None,
    ) -> WorkforceSnapshot:
        """
        Build a fresh snapshot.

        Args:
            shift_filter: Requested shift, echoed in the snapshot
            timeout_seconds: Deadline for the joined reads, defaults to the
                configured read timeout

        Returns:
            The snapshot as of now

        Raises:
            SnapshotTimeoutError: If the reads do not complete in time; no
                partial snapshot is returned
            DatabaseError: If a read fails
        """
        deadline = timeout_seconds if timeout_seconds is not None else self._read_timeout
        now = self._clock()
        started = time.perf_counter()

        try:
            machines, workers, events = await asyncio.wait_for(
                asyncio.gather(
                    self._directory.list_machines(),
                    self._directory.list_workers_with_assignment(),
                    self._events.find_latest_events_today(now.date()),
                ),
                timeout=deadline,
            )
        except asyncio.TimeoutError as e:
            SNAPSHOT_FAILURES.labels(reason="timeout").inc()
            logger.error("snapshot_reads_timed_out", timeout_seconds=deadline)
            raise SnapshotTimeoutError(deadline) from e
        except DomainError as e:
            SNAPSHOT_FAILURES.labels(reason=e.error_type.value).inc()
            logger.error("snapshot_reads_failed", error=e.message)
            raise

        snapshot = fold_snapshot(
            machines,
            workers,
            events,
            generated_at=now,
            current_shift=resolve_shift(now),
            shift_filter=shift_filter,
            sort_key=self._sort_key,
        )

        elapsed = time.perf_counter() - started
        SNAPSHOT_DURATION.observe(elapsed)
        logger.info(
            "snapshot_built",
            machines=len(machines),
            workers=len(workers),
            events=len(events),
            cards=len(snapshot.machines),
            shift_filter=shift_filter.value,
            duration_ms=round(elapsed * 1000, 2),
        )
        return snapshot


class TeamDirectoryService:
    """Read-only queries over shifts, machine authorization and pause reasons."""

    def __init__(
        self,
        directory: DirectoryRepository,
        pause_reasons: PauseReasonRepository,
        sort_key: SortKey = default_sort_key,
        clock: Clock = plant_now,
    ):
        self._directory = directory
        self._pause_reasons = pause_reasons
        self._sort_key = sort_key
        self._clock = clock

    def shifts(self) -> tuple[tuple[ShiftDefinition, ...], ShiftCode]:
        return list_shifts(self._clock())

    async def machines_for_worker(self, login_code: str) -> list[AuthorizedMachine]:
        """
        List the machines a worker may use, default machine first.

        Raises:
            ValidationError: If the login code is empty
            EntityNotFoundError: If no worker has this login code
        """
        if not login_code or not login_code.strip():
            raise ValidationError("login_code", login_code, "login_code cannot be empty")
        login_code = login_code.strip()

        worker = await self._directory.find_worker_by_login_code(login_code)
        if worker is None:
            raise EntityNotFoundError("Worker", login_code)

        machines = await self._directory.list_machines()
        return machines_for_worker(worker.login_code, machines, self._sort_key)

    async def workers_for_machine(self, machine_id: str) -> list[AuthorizedWorker]:
        """
        List the workers authorized for a machine, default assignee first.

        Raises:
            EntityNotFoundError: If the machine does not exist
        """
        machine = await self._directory.find_machine(machine_id)
        if machine is None:
            raise EntityNotFoundError("Machine", machine_id)

        workers = await self._directory.list_workers_with_assignment()
        return workers_for_machine(machine, workers, self._sort_key)

    async def pause_reasons(self) -> list[PauseReason]:
        return await self._pause_reasons.list_all()
