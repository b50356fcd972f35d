"""
ERP encoding of activity events.

The ERP stores an event time as a calendar date plus an HHMM integer
(17:54 is stored as 1754) and the event kind as a three-letter process code.
Both the gateway writer and the SQL read side go through these helpers so a
written event reads back identically, minus sub-minute precision.
"""

from datetime import date, datetime, time, tzinfo
from typing import Any

from shopfloor.domain.workforce.entities.activity_event import (
    ActivityEvent,
    ActivityEventDraft,
)
from shopfloor.domain.workforce.value_objects.enums import ActivityKind
from shopfloor.infrastructure.database.models import ActivityEventRecord


def encode_time(moment: datetime, tz: tzinfo) -> tuple[date, int]:
    local = moment.astimezone(tz)
    return local.date(), local.hour * 100 + local.minute


def decode_time(day: date, hhmm: int, tz: tzinfo) -> datetime:
    hours, minutes = divmod(hhmm, 100)
    return datetime.combine(day, time(hours, minutes), tzinfo=tz)


def decode_kind(proc_type: str) -> str:
    """Map an ERP process code to an event kind; unknown codes pass through."""
    kind = ActivityKind.from_erp_code(proc_type)
    return kind.value if kind else proc_type


def encode_payload(draft: ActivityEventDraft, code: str, tz: tzinfo) -> dict[str, Any]:
    """Build the user-defined object body for a new activity row."""
    day, hhmm = encode_time(draft.occurred_at, tz)
    return {
        "Code": code,
        "Name": code,
        "U_WorkOrder": draft.work_order_id,
        "U_ResCode": draft.machine_id,
        "U_EmpId": draft.worker_id,
        "U_ProcType": draft.kind.erp_code,
        "U_Start": day.isoformat(),
        "U_StartTime": hhmm,
        "U_BreakCode": draft.pause_reason_code,
        "U_Aciklama": draft.note,
    }


def record_from_draft(
    draft: ActivityEventDraft, code: str, tz: tzinfo
) -> ActivityEventRecord:
    day, hhmm = encode_time(draft.occurred_at, tz)
    return ActivityEventRecord(
        code=code,
        name=code,
        u_work_order=draft.work_order_id,
        u_res_code=draft.machine_id,
        u_emp_id=draft.worker_id,
        u_proc_type=draft.kind.erp_code,
        u_start=day,
        u_start_time=hhmm,
        u_break_code=draft.pause_reason_code,
        u_aciklama=draft.note,
    )


def event_from_record(record: ActivityEventRecord, tz: tzinfo) -> ActivityEvent:
    return ActivityEvent(
        id=record.code,
        sequence=record.doc_entry or 0,
        work_order_id=record.u_work_order,
        machine_id=record.u_res_code,
        worker_id=record.u_emp_id,
        kind=decode_kind(record.u_proc_type),
        occurred_at=decode_time(record.u_start, record.u_start_time, tz),
        pause_reason_code=record.u_break_code,
        note=record.u_aciklama,
    )
