"""
Activity Data Transfer Objects.

Request and response shapes of the activity write path, the worker state
query and the work order history.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from shopfloor.domain.workforce.entities.activity_event import ActivityEvent
from shopfloor.domain.workforce.services.activity_state_machine import (
    WorkerActivityState,
)


class ActivityActionRequest(BaseModel):
    """DTO for a start, stop, resume or finish action."""

    worker_id: str = Field(..., max_length=50, description="Acting worker")
    machine_id: str = Field(
        ..., max_length=50, description="Machine the work is performed on"
    )
    pause_reason_code: str | None = Field(
        None, max_length=50, description="Pause reason, required when stopping"
    )
    note: str | None = Field(None, max_length=254, description="Free text note")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "worker_id": "200",
                "machine_id": "CNC-01",
                "pause_reason_code": "1",
                "note": "Tool change",
            }
        }
    )


class WorkerStateResponse(BaseModel):
    """Derived state of a worker on a work order, with the allowed actions."""

    work_order_id: str
    worker_id: str
    last_event_id: str | None
    last_event_kind: str | None
    last_event_time: datetime | None
    pause_reason_code: str | None
    can_start: bool
    can_stop: bool
    can_resume: bool
    can_finish: bool

    @classmethod
    def from_state(
        cls, work_order_id: str, worker_id: str, state: WorkerActivityState
    ) -> "WorkerStateResponse":
        return cls(work_order_id=work_order_id, worker_id=worker_id, **state.model_dump())


class ActivityActionResponse(BaseModel):
    success: bool = True
    event_id: str
    kind: str
    occurred_at: datetime
    state: WorkerStateResponse

    @classmethod
    def from_event(
        cls, event: ActivityEvent, state: WorkerActivityState
    ) -> "ActivityActionResponse":
        return cls(
            event_id=event.id,
            kind=event.kind,
            occurred_at=event.occurred_at,
            state=WorkerStateResponse.from_state(
                event.work_order_id, event.worker_id, state
            ),
        )


class ActivityHistoryEntry(BaseModel):
    """One row of a work order's activity log, with display labels joined in."""

    event_id: str
    kind: str
    label_tr: str
    label_en: str
    occurred_at: datetime
    worker_id: str
    worker_name: str
    machine_id: str
    pause_reason_code: str | None = None
    pause_reason_name: str | None = None
    note: str | None = None


class ActivityHistoryResponse(BaseModel):
    work_order_id: str
    entries: list[ActivityHistoryEntry]
    total: int
