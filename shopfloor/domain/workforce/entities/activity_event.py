"""Activity events: the append-only log of worker actions on work orders."""

from datetime import datetime

from pydantic import Field, model_validator
from typing_extensions import Self

from ...shared.base import ValueObject
from ..value_objects.enums import ActivityKind


class ActivityEventDraft(ValueObject):
    """An event about to be appended; the store assigns id and sequence."""

    work_order_id: str = Field(min_length=1)
    machine_id: str = Field(min_length=1)
    worker_id: str = Field(min_length=1)
    kind: ActivityKind
    occurred_at: datetime
    pause_reason_code: str | None = None
    note: str | None = None

    @model_validator(mode="after")
    def _pause_reason_only_on_stop(self) -> Self:
        if self.kind == ActivityKind.STOP and not self.pause_reason_code:
            raise ValueError("STOP events must carry a pause reason code")
        if self.kind != ActivityKind.STOP and self.pause_reason_code is not None:
            raise ValueError("Only STOP events carry a pause reason code")
        return self


class ActivityEvent(ValueObject):
    """
    An immutable record of one worker action.

    `kind` is kept as the raw string so that events written by newer clients
    with kinds this service does not know still load; `known_kind` gives the
    parsed value. `sequence` is the store's monotonically increasing insertion
    counter and breaks ties between events sharing a timestamp.
    """

    id: str
    sequence: int
    work_order_id: str
    machine_id: str
    worker_id: str
    kind: str
    occurred_at: datetime
    pause_reason_code: str | None = None
    note: str | None = None

    @property
    def known_kind(self) -> ActivityKind | None:
        return ActivityKind.parse(self.kind)

    @property
    def order_key(self) -> tuple[datetime, int]:
        """Total order of events: timestamp, then insertion order."""
        return (self.occurred_at, self.sequence)

    @classmethod
    def from_draft(cls, draft: ActivityEventDraft, event_id: str, sequence: int) -> "ActivityEvent":
        return cls(
            id=event_id,
            sequence=sequence,
            work_order_id=draft.work_order_id,
            machine_id=draft.machine_id,
            worker_id=draft.worker_id,
            kind=draft.kind.value,
            occurred_at=draft.occurred_at,
            pause_reason_code=draft.pause_reason_code,
            note=draft.note,
        )


def latest_event(events: list[ActivityEvent]) -> ActivityEvent | None:
    """Return the maximal event by (occurred_at, sequence), whatever the input order."""
    if not events:
        return None
    return max(events, key=lambda event: event.order_key)
