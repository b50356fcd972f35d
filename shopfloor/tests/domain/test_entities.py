"""Unit tests for activity events and directory records."""

import pytest
from pydantic import ValidationError

from shopfloor.domain.workforce.entities.activity_event import (
    ActivityEvent,
    ActivityEventDraft,
    latest_event,
)
from shopfloor.domain.workforce.entities.directory import Worker
from shopfloor.domain.workforce.value_objects.enums import ActivityAction, ActivityKind
from shopfloor.tests.utils.fakes import at, make_event


class TestActivityEventDraft:
    def _draft(self, **kwargs) -> ActivityEventDraft:
        defaults = {
            "work_order_id": "WO-1",
            "machine_id": "M1",
            "worker_id": "1",
            "kind": ActivityKind.START,
            "occurred_at": at(9),
        }
        return ActivityEventDraft(**{**defaults, **kwargs})

    def test_stop_requires_pause_reason(self):
        with pytest.raises(ValidationError):
            self._draft(kind=ActivityKind.STOP)

    def test_pause_reason_only_on_stop(self):
        with pytest.raises(ValidationError):
            self._draft(kind=ActivityKind.RESUME, pause_reason_code="1")

    def test_from_draft_assigns_identity(self):
        draft = self._draft(kind=ActivityKind.STOP, pause_reason_code="1")
        event = ActivityEvent.from_draft(draft, "abc", 9)

        assert event.id == "abc"
        assert event.sequence == 9
        assert event.kind == "STOP"
        assert event.known_kind == ActivityKind.STOP


class TestLatestEvent:
    def test_empty(self):
        assert latest_event([]) is None

    def test_maximum_by_time_then_sequence(self):
        a = make_event("1", "START", at(9), sequence=10)
        b = make_event("1", "STOP", at(10), sequence=2, pause_reason_code="1")
        c = make_event("1", "RESUME", at(10), sequence=3)

        assert latest_event([c, a, b]) is c


class TestEnums:
    @pytest.mark.parametrize(
        "kind,code",
        [
            (ActivityKind.START, "BAS"),
            (ActivityKind.STOP, "DUR"),
            (ActivityKind.RESUME, "DEV"),
            (ActivityKind.FINISH, "BIT"),
        ],
    )
    def test_erp_codes(self, kind, code):
        assert kind.erp_code == code
        assert ActivityKind.from_erp_code(code) == kind

    def test_unknown_values(self):
        assert ActivityKind.parse("SETUP") is None
        assert ActivityKind.from_erp_code("XYZ") is None

    def test_labels(self):
        assert ActivityKind.START.label_tr == "Başla"
        assert ActivityKind.STOP.label_en == "Stop"

    def test_action_maps_to_kind(self):
        assert ActivityAction.RESUME.kind == ActivityKind.RESUME


def test_worker_without_assignment_is_idle():
    assert Worker(worker_id="1", full_name="A", login_code="1").is_idle
    assert not Worker(
        worker_id="1", full_name="A", login_code="1", assigned_machine_id="M1"
    ).is_idle
