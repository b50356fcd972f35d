"""Workforce domain entities."""

from .activity_event import ActivityEvent, ActivityEventDraft, latest_event
from .directory import (
    IDLE_POOL_MACHINE_ID,
    IDLE_POOL_MACHINE_NAME,
    Machine,
    PauseReason,
    Worker,
    WorkOrder,
    parse_assignee_codes,
)

__all__ = [
    "ActivityEvent",
    "ActivityEventDraft",
    "IDLE_POOL_MACHINE_ID",
    "IDLE_POOL_MACHINE_NAME",
    "Machine",
    "PauseReason",
    "WorkOrder",
    "Worker",
    "latest_event",
    "parse_assignee_codes",
]
