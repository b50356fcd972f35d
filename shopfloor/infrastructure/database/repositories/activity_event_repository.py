"""
SQL implementation of the activity event log.

Reads decode the ERP column layout back into domain events in the plant time
zone. `SqlActivityEventWriter` appends rows directly and is used where no ERP
gateway is configured; in production, events are written through the gateway
and read back from here.
"""

import uuid
from datetime import date, tzinfo

from sqlalchemy import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, col, select

from shopfloor.domain.shared.exceptions import WriteRejectedError
from shopfloor.domain.workforce.entities.activity_event import (
    ActivityEvent,
    ActivityEventDraft,
)
from shopfloor.domain.workforce.repositories import (
    ActivityEventRepository,
    ActivityEventWriter,
)
from shopfloor.infrastructure.database.models import ActivityEventRecord
from shopfloor.infrastructure.erp_encoding import event_from_record, record_from_draft

from .base import SqlRepository

_NEWEST_FIRST = (
    col(ActivityEventRecord.u_start).desc(),
    col(ActivityEventRecord.u_start_time).desc(),
    col(ActivityEventRecord.doc_entry).desc(),
)


class SqlActivityEventRepository(SqlRepository, ActivityEventRepository):
    def __init__(self, engine: Engine, tz: tzinfo):
        super().__init__(engine)
        self.tz = tz

    def _decode(self, records) -> list[ActivityEvent]:
        return [event_from_record(record, self.tz) for record in records]

    async def find_latest_events_today(self, today: date) -> list[ActivityEvent]:
        def work(session: Session) -> list[ActivityEvent]:
            statement = select(ActivityEventRecord).where(
                ActivityEventRecord.u_start == today
            )
            return self._decode(session.exec(statement))

        return await self._run("find_latest_events_today", work)

    async def find_events_for(
        self, worker_id: str, work_order_id: str
    ) -> list[ActivityEvent]:
        def work(session: Session) -> list[ActivityEvent]:
            statement = (
                select(ActivityEventRecord)
                .where(ActivityEventRecord.u_work_order == work_order_id)
                .where(ActivityEventRecord.u_emp_id == worker_id)
                .order_by(*_NEWEST_FIRST)
            )
            return self._decode(session.exec(statement))

        return await self._run("find_events_for", work)

    async def find_events_for_work_order(
        self, work_order_id: str
    ) -> list[ActivityEvent]:
        def work(session: Session) -> list[ActivityEvent]:
            statement = (
                select(ActivityEventRecord)
                .where(ActivityEventRecord.u_work_order == work_order_id)
                .order_by(*_NEWEST_FIRST)
            )
            return self._decode(session.exec(statement))

        return await self._run("find_events_for_work_order", work)


class SqlActivityEventWriter(SqlRepository, ActivityEventWriter):
    def __init__(self, engine: Engine, tz: tzinfo):
        super().__init__(engine)
        self.tz = tz

    async def append(self, draft: ActivityEventDraft) -> ActivityEvent:
        def work(session: Session) -> ActivityEvent:
            record = record_from_draft(draft, str(uuid.uuid4()), self.tz)
            try:
                session.add(record)
                session.commit()
                session.refresh(record)
            except IntegrityError as e:
                session.rollback()
                raise WriteRejectedError(str(e.orig)) from e
            except SQLAlchemyError as e:
                session.rollback()
                raise WriteRejectedError(str(e)) from e
            # keep the caller's full-precision timestamp
            return ActivityEvent.from_draft(draft, record.code, record.doc_entry)

        return await self._run("append_activity_event", work)
