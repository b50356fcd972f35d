"""
Activity State Machine

Derives the action menu of a (worker, work order) pair from the latest
recorded activity event. State is never stored; it is recomputed from the
event log on every query.
"""

from datetime import datetime

from ...shared.base import ValueObject
from ..entities.activity_event import ActivityEvent, latest_event
from ..value_objects.enums import ActivityAction, ActivityKind, WorkerStatus


class WorkerActivityState(ValueObject):
    """Derived state of one (worker, work order) pair."""

    last_event_id: str | None = None
    last_event_kind: str | None = None
    last_event_time: datetime | None = None
    pause_reason_code: str | None = None
    can_start: bool = False
    can_stop: bool = False
    can_resume: bool = False
    can_finish: bool = False

    def allows(self, action: ActivityAction) -> bool:
        """Check whether `action` is in the allowed set of this state."""
        return {
            ActivityAction.START: self.can_start,
            ActivityAction.STOP: self.can_stop,
            ActivityAction.RESUME: self.can_resume,
            ActivityAction.FINISH: self.can_finish,
        }[action]


# (can_start, can_stop, can_resume, can_finish) keyed by the latest event kind
_TRANSITIONS: dict[ActivityKind | None, tuple[bool, bool, bool, bool]] = {
    None: (True, False, False, False),
    ActivityKind.START: (False, True, False, True),
    ActivityKind.RESUME: (False, True, False, True),
    ActivityKind.STOP: (False, False, True, True),
    ActivityKind.FINISH: (True, False, False, False),
}

_START_ONLY = _TRANSITIONS[None]

_STATUS_BY_KIND = {
    ActivityKind.START: WorkerStatus.ASSIGNED,
    ActivityKind.RESUME: WorkerStatus.ASSIGNED,
    ActivityKind.STOP: WorkerStatus.PAUSED,
}


def derive_state(latest: ActivityEvent | None) -> WorkerActivityState:
    """
    Derive the worker state from the single latest event of a pair.

    Unrecognised event kinds degrade to a start-eligible state instead of
    failing, so new kinds in the log never lock a worker out.
    """
    if latest is None:
        return WorkerActivityState(
            can_start=True, can_stop=False, can_resume=False, can_finish=False
        )

    kind = latest.known_kind
    if kind is None:
        flags = _START_ONLY
    else:
        flags = _TRANSITIONS[kind]
    can_start, can_stop, can_resume, can_finish = flags

    return WorkerActivityState(
        last_event_id=latest.id,
        last_event_kind=latest.kind,
        last_event_time=latest.occurred_at,
        pause_reason_code=latest.pause_reason_code
        if kind == ActivityKind.STOP
        else None,
        can_start=can_start,
        can_stop=can_stop,
        can_resume=can_resume,
        can_finish=can_finish,
    )


def derive_state_from_history(events: list[ActivityEvent]) -> WorkerActivityState:
    """Derive state from a pair's event history; only the latest event counts."""
    return derive_state(latest_event(events))


def action_allowed(state: WorkerActivityState, action: ActivityAction) -> bool:
    return state.allows(action)


def classify_worker(latest: ActivityEvent | None) -> WorkerStatus:
    """Collapse the state machine to the three team-view buckets."""
    if latest is None:
        return WorkerStatus.AVAILABLE
    kind = latest.known_kind
    if kind is None:
        return WorkerStatus.AVAILABLE
    return _STATUS_BY_KIND.get(kind, WorkerStatus.AVAILABLE)
