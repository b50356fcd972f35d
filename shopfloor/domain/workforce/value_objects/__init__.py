"""Workforce domain value objects."""

from .enums import ActivityAction, ActivityKind, ShiftCode, ShiftFilter, WorkerStatus
from .shift import SHIFTS, ShiftDefinition, list_shifts, resolve_shift

__all__ = [
    "SHIFTS",
    "ActivityAction",
    "ActivityKind",
    "ShiftCode",
    "ShiftDefinition",
    "ShiftFilter",
    "WorkerStatus",
    "list_shifts",
    "resolve_shift",
]
