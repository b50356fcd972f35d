"""
Activity application service.

Orchestrates the activity write path: every precondition is checked against
already-fetched state before the event is handed to the writer, so a rejected
action never reaches the ERP gateway.
"""

from shopfloor.application.dtos.activity_dtos import (
    ActivityActionResponse,
    ActivityHistoryEntry,
    ActivityHistoryResponse,
    WorkerStateResponse,
)
from shopfloor.core.clock import Clock, plant_now
from shopfloor.core.observability import ACTIVITY_ACTIONS, get_logger
from shopfloor.domain.shared.exceptions import (
    DomainError,
    EntityNotFoundError,
    InvalidPauseReasonError,
    InvalidTransitionError,
    MissingPauseReasonError,
    NotAuthorizedError,
    ValidationError,
)
from shopfloor.domain.workforce.entities.activity_event import ActivityEventDraft
from shopfloor.domain.workforce.entities.directory import Machine, Worker
from shopfloor.domain.workforce.repositories import (
    ActivityEventRepository,
    ActivityEventWriter,
    DirectoryRepository,
    PauseReasonRepository,
    WorkOrderRepository,
)
from shopfloor.domain.workforce.services.activity_state_machine import (
    WorkerActivityState,
    action_allowed,
    derive_state,
    derive_state_from_history,
)
from shopfloor.domain.workforce.services.authorization import is_authorized
from shopfloor.domain.workforce.value_objects.enums import ActivityAction, ActivityKind

logger = get_logger(__name__)

UNKNOWN_WORKER_NAME = "Bilinmiyor"


class ActivityService:
    """
    Application service for worker activity on work orders.

    Handles the state query, the four transition actions and the work order
    history. State is derived from the event log on every call.
    """

    def __init__(
        self,
        event_repository: ActivityEventRepository,
        event_writer: ActivityEventWriter,
        directory: DirectoryRepository,
        work_orders: WorkOrderRepository,
        pause_reasons: PauseReasonRepository,
        clock: Clock = plant_now,
    ):
        self._events = event_repository
        self._writer = event_writer
        self._directory = directory
        self._work_orders = work_orders
        self._pause_reasons = pause_reasons
        self._clock = clock

    @staticmethod
    def _require(value: str | None, field_name: str) -> str:
        if value is None or not value.strip():
            raise ValidationError(field_name, value, f"{field_name} cannot be empty")
        return value.strip()

    async def _verify_work_order(self, work_order_id: str) -> None:
        if not await self._work_orders.exists(work_order_id):
            raise EntityNotFoundError("WorkOrder", work_order_id)

    async def _current_state(
        self, work_order_id: str, worker_id: str
    ) -> WorkerActivityState:
        events = await self._events.find_events_for(worker_id, work_order_id)
        return derive_state_from_history(events)

    async def get_worker_state(
        self, work_order_id: str, worker_id: str
    ) -> WorkerStateResponse:
        """
        Derive the allowed actions of a worker on a work order.

        Raises:
            ValidationError: If an identifier is empty
            EntityNotFoundError: If the work order does not exist
        """
        work_order_id = self._require(work_order_id, "work_order_id")
        worker_id = self._require(worker_id, "worker_id")
        await self._verify_work_order(work_order_id)

        state = await self._current_state(work_order_id, worker_id)
        return WorkerStateResponse.from_state(work_order_id, worker_id, state)

    async def start_work(
        self, work_order_id: str, worker_id: str, machine_id: str, note: str | None = None
    ) -> ActivityActionResponse:
        return await self.perform(
            ActivityAction.START, work_order_id, worker_id, machine_id, note=note
        )

    async def stop_work(
        self,
        work_order_id: str,
        worker_id: str,
        machine_id: str,
        pause_reason_code: str | None,
        note: str | None = None,
    ) -> ActivityActionResponse:
        return await self.perform(
            ActivityAction.STOP,
            work_order_id,
            worker_id,
            machine_id,
            pause_reason_code=pause_reason_code,
            note=note,
        )

    async def resume_work(
        self, work_order_id: str, worker_id: str, machine_id: str, note: str | None = None
    ) -> ActivityActionResponse:
        return await self.perform(
            ActivityAction.RESUME, work_order_id, worker_id, machine_id, note=note
        )

    async def finish_work(
        self, work_order_id: str, worker_id: str, machine_id: str, note: str | None = None
    ) -> ActivityActionResponse:
        return await self.perform(
            ActivityAction.FINISH, work_order_id, worker_id, machine_id, note=note
        )

    async def perform(
        self,
        action: ActivityAction,
        work_order_id: str,
        worker_id: str,
        machine_id: str,
        pause_reason_code: str | None = None,
        note: str | None = None,
    ) -> ActivityActionResponse:
        """
        Validate and record one activity action.

        Checks run in order: input presence, work order existence, worker and
        machine lookup, machine authorization, pause reason, then the state
        transition. Only when all pass is the event appended.

        Args:
            action: Requested action
            work_order_id: Work order the action applies to
            worker_id: Acting worker
            machine_id: Machine the work is performed on
            pause_reason_code: Required for STOP, ignored otherwise
            note: Optional free text

        Returns:
            The created event and the state derived from it

        Raises:
            ValidationError: If an identifier is empty or the pause reason is
                missing or unknown
            EntityNotFoundError: If the work order, worker or machine does not exist
            NotAuthorizedError: If the worker may not use the machine
            InvalidTransitionError: If the action is not allowed from the current state
            WriteRejectedError: If the event could not be stored
        """
        kind = action.kind
        try:
            response = await self._perform(
                action, work_order_id, worker_id, machine_id, pause_reason_code, note
            )
        except DomainError as e:
            ACTIVITY_ACTIONS.labels(kind=kind.value, outcome=e.error_type.value).inc()
            logger.warning(
                "activity_action_rejected",
                action=action.value,
                work_order_id=work_order_id,
                worker_id=worker_id,
                machine_id=machine_id,
                error_type=e.error_type.value,
                reason=e.message,
            )
            raise

        ACTIVITY_ACTIONS.labels(kind=kind.value, outcome="accepted").inc()
        logger.info(
            "activity_action_accepted",
            action=action.value,
            event_id=response.event_id,
            work_order_id=response.state.work_order_id,
            worker_id=response.state.worker_id,
            machine_id=machine_id,
        )
        return response

    async def _perform(
        self,
        action: ActivityAction,
        work_order_id: str,
        worker_id: str,
        machine_id: str,
        pause_reason_code: str | None,
        note: str | None,
    ) -> ActivityActionResponse:
        work_order_id = self._require(work_order_id, "work_order_id")
        worker_id = self._require(worker_id, "worker_id")
        machine_id = self._require(machine_id, "machine_id")

        kind = action.kind
        if kind == ActivityKind.STOP:
            if pause_reason_code is None or not pause_reason_code.strip():
                raise MissingPauseReasonError()
            pause_reason_code = pause_reason_code.strip()
        else:
            pause_reason_code = None

        await self._verify_work_order(work_order_id)
        worker, machine = await self._lookup(worker_id, machine_id)

        if not is_authorized(worker.login_code, machine):
            raise NotAuthorizedError(worker.login_code, machine.machine_id)

        if pause_reason_code is not None:
            if await self._pause_reasons.find_by_code(pause_reason_code) is None:
                raise InvalidPauseReasonError(pause_reason_code)

        state = await self._current_state(work_order_id, worker_id)
        if not action_allowed(state, action):
            raise InvalidTransitionError(action.value, state.last_event_kind)

        draft = ActivityEventDraft(
            work_order_id=work_order_id,
            machine_id=machine.machine_id,
            worker_id=worker.worker_id,
            kind=kind,
            occurred_at=self._clock(),
            pause_reason_code=pause_reason_code,
            note=note.strip() if note and note.strip() else None,
        )
        event = await self._writer.append(draft)

        return ActivityActionResponse.from_event(event, derive_state(event))

    async def _lookup(self, worker_id: str, machine_id: str) -> tuple[Worker, Machine]:
        worker = await self._directory.find_worker(worker_id)
        if worker is None or not worker.active:
            raise EntityNotFoundError("Worker", worker_id)
        machine = await self._directory.find_machine(machine_id)
        if machine is None:
            raise EntityNotFoundError("Machine", machine_id)
        return worker, machine

    async def history_for_work_order(
        self, work_order_id: str
    ) -> ActivityHistoryResponse:
        """
        List every activity on a work order, newest first.

        Worker names and pause reason texts are joined in memory from one
        directory read and one catalogue read. Workers who have since left are
        looked up by id.
        """
        work_order_id = self._require(work_order_id, "work_order_id")
        await self._verify_work_order(work_order_id)

        events = await self._events.find_events_for_work_order(work_order_id)
        workers = {
            worker.worker_id: worker
            for worker in await self._directory.list_workers_with_assignment()
        }
        for worker_id in sorted({event.worker_id for event in events} - workers.keys()):
            worker = await self._directory.find_worker(worker_id)
            if worker is not None:
                workers[worker_id] = worker
        reasons = {
            reason.code: reason.name for reason in await self._pause_reasons.list_all()
        }

        entries = []
        for event in sorted(events, key=lambda e: e.order_key, reverse=True):
            kind = event.known_kind
            worker = workers.get(event.worker_id)
            entries.append(
                ActivityHistoryEntry(
                    event_id=event.id,
                    kind=event.kind,
                    label_tr=kind.label_tr if kind else event.kind,
                    label_en=kind.label_en if kind else event.kind,
                    occurred_at=event.occurred_at,
                    worker_id=event.worker_id,
                    worker_name=worker.full_name if worker else UNKNOWN_WORKER_NAME,
                    machine_id=event.machine_id,
                    pause_reason_code=event.pause_reason_code,
                    pause_reason_name=reasons.get(event.pause_reason_code)
                    if event.pause_reason_code
                    else None,
                    note=event.note,
                )
            )

        return ActivityHistoryResponse(
            work_order_id=work_order_id, entries=entries, total=len(entries)
        )
