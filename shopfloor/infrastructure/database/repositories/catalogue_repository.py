"""SQL implementations of the work order and pause reason lookups."""

from sqlmodel import Session, select

from shopfloor.domain.workforce.entities.directory import PauseReason, WorkOrder
from shopfloor.domain.workforce.repositories import (
    PauseReasonRepository,
    WorkOrderRepository,
)
from shopfloor.infrastructure.database.models import (
    PauseReasonRecord,
    WorkOrderRecord,
)

from .base import SqlRepository


class SqlWorkOrderRepository(SqlRepository, WorkOrderRepository):
    async def exists(self, work_order_id: str) -> bool:
        return await self.get_by_id(work_order_id) is not None

    async def get_by_id(self, work_order_id: str) -> WorkOrder | None:
        def work(session: Session) -> WorkOrder | None:
            record = session.get(WorkOrderRecord, work_order_id)
            if record is None:
                return None
            return WorkOrder(
                work_order_id=record.doc_entry,
                doc_num=record.doc_num,
                item_code=record.item_code,
            )

        return await self._run("get_work_order", work)


class SqlPauseReasonRepository(SqlRepository, PauseReasonRepository):
    async def list_all(self) -> list[PauseReason]:
        def work(session: Session) -> list[PauseReason]:
            statement = select(PauseReasonRecord).order_by(PauseReasonRecord.code)
            return [
                PauseReason(code=record.code, name=record.name)
                for record in session.exec(statement)
            ]

        return await self._run("list_pause_reasons", work)

    async def find_by_code(self, code: str) -> PauseReason | None:
        def work(session: Session) -> PauseReason | None:
            record = session.get(PauseReasonRecord, code)
            return PauseReason(code=record.code, name=record.name) if record else None

        return await self._run("find_pause_reason", work)
