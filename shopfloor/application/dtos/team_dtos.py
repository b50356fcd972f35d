"""
Team view Data Transfer Objects.

Snapshot, shift catalogue, authorization listings and the pause reason
catalogue as exposed over HTTP.
"""

from datetime import datetime, time

from pydantic import BaseModel

from shopfloor.domain.workforce.entities.directory import PauseReason
from shopfloor.domain.workforce.services.authorization import (
    AuthorizedMachine,
    AuthorizedWorker,
)
from shopfloor.domain.workforce.services.workforce_aggregation import (
    MachineCard,
    TeamWorker,
    WorkforceSnapshot,
)
from shopfloor.domain.workforce.value_objects.enums import (
    ShiftCode,
    ShiftFilter,
    WorkerStatus,
)
from shopfloor.domain.workforce.value_objects.shift import ShiftDefinition


class WorkOrderRefResponse(BaseModel):
    work_order_id: str
    machine_id: str
    since: datetime


class TeamWorkerResponse(BaseModel):
    worker_id: str
    full_name: str
    login_code: str
    status: WorkerStatus
    current_work_order: WorkOrderRefResponse | None = None
    pause_reason_code: str | None = None

    @classmethod
    def from_domain(cls, worker: TeamWorker) -> "TeamWorkerResponse":
        ref = worker.current_work_order
        return cls(
            worker_id=worker.worker_id,
            full_name=worker.full_name,
            login_code=worker.login_code,
            status=worker.status,
            current_work_order=WorkOrderRefResponse(**ref.model_dump())
            if ref
            else None,
            pause_reason_code=worker.pause_reason_code,
        )


class MachineCardResponse(BaseModel):
    machine_id: str
    machine_name: str
    is_idle_pool: bool
    assigned: list[TeamWorkerResponse]
    paused: list[TeamWorkerResponse]
    available: list[TeamWorkerResponse]

    @classmethod
    def from_domain(cls, card: MachineCard) -> "MachineCardResponse":
        return cls(
            machine_id=card.machine_id,
            machine_name=card.machine_name,
            is_idle_pool=card.is_idle_pool,
            assigned=[TeamWorkerResponse.from_domain(w) for w in card.assigned],
            paused=[TeamWorkerResponse.from_domain(w) for w in card.paused],
            available=[TeamWorkerResponse.from_domain(w) for w in card.available],
        )


class WorkforceSnapshotResponse(BaseModel):
    """Plant-wide team view."""

    generated_at: datetime
    current_shift: ShiftCode
    shift_filter: ShiftFilter
    machines: list[MachineCardResponse]

    @classmethod
    def from_domain(cls, snapshot: WorkforceSnapshot) -> "WorkforceSnapshotResponse":
        return cls(
            generated_at=snapshot.generated_at,
            current_shift=snapshot.current_shift,
            shift_filter=snapshot.shift_filter,
            machines=[MachineCardResponse.from_domain(c) for c in snapshot.machines],
        )


class ShiftResponse(BaseModel):
    code: ShiftCode
    name: str
    start_time: time
    end_time: time

    @classmethod
    def from_domain(cls, shift: ShiftDefinition) -> "ShiftResponse":
        return cls(**shift.model_dump())


class ShiftListResponse(BaseModel):
    shifts: list[ShiftResponse]
    current_shift: ShiftCode


class AuthorizedMachineResponse(BaseModel):
    machine_id: str
    machine_name: str
    is_default: bool

    @classmethod
    def from_domain(cls, item: AuthorizedMachine) -> "AuthorizedMachineResponse":
        return cls(
            machine_id=item.machine.machine_id,
            machine_name=item.machine.machine_name,
            is_default=item.is_default,
        )


class AuthorizedWorkerResponse(BaseModel):
    worker_id: str
    full_name: str
    login_code: str
    is_default: bool

    @classmethod
    def from_domain(cls, item: AuthorizedWorker) -> "AuthorizedWorkerResponse":
        return cls(
            worker_id=item.worker.worker_id,
            full_name=item.worker.full_name,
            login_code=item.worker.login_code,
            is_default=item.is_default,
        )


class PauseReasonResponse(BaseModel):
    code: str
    name: str

    @classmethod
    def from_domain(cls, reason: PauseReason) -> "PauseReasonResponse":
        return cls(code=reason.code, name=reason.name)
