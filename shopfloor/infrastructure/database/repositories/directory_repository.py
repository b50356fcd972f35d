"""SQL implementation of the worker and machine directory."""

from sqlmodel import Session, select

from shopfloor.domain.workforce.entities.directory import Machine, Worker
from shopfloor.domain.workforce.repositories import DirectoryRepository
from shopfloor.infrastructure.database.models import MachineRecord, WorkerRecord

from .base import SqlRepository

MACHINE_RESOURCE_TYPE = "M"


def _to_machine(record: MachineRecord) -> Machine:
    return Machine(
        machine_id=record.res_code,
        machine_name=record.res_name,
        default_assignee_code=record.default_emp,
        secondary_assignee_codes=record.second_emp,
    )


def _to_worker(record: WorkerRecord) -> Worker:
    return Worker(
        worker_id=record.emp_id,
        full_name=record.full_name,
        login_code=record.login_code,
        assigned_machine_id=record.main_station or None,
        active=record.active,
    )


class SqlDirectoryRepository(SqlRepository, DirectoryRepository):
    async def list_machines(self) -> list[Machine]:
        def work(session: Session) -> list[Machine]:
            statement = (
                select(MachineRecord)
                .where(MachineRecord.res_type == MACHINE_RESOURCE_TYPE)
                .order_by(MachineRecord.res_name, MachineRecord.res_code)
            )
            return [_to_machine(record) for record in session.exec(statement)]

        return await self._run("list_machines", work)

    async def list_workers_with_assignment(self) -> list[Worker]:
        def work(session: Session) -> list[Worker]:
            statement = (
                select(WorkerRecord)
                .where(WorkerRecord.active == True)  # noqa: E712
                .order_by(
                    WorkerRecord.last_name, WorkerRecord.first_name, WorkerRecord.emp_id
                )
            )
            return [_to_worker(record) for record in session.exec(statement)]

        return await self._run("list_workers_with_assignment", work)

    async def find_machine(self, machine_id: str) -> Machine | None:
        def work(session: Session) -> Machine | None:
            record = session.get(MachineRecord, machine_id)
            if record is None or record.res_type != MACHINE_RESOURCE_TYPE:
                return None
            return _to_machine(record)

        return await self._run("find_machine", work)

    async def find_worker(self, worker_id: str) -> Worker | None:
        def work(session: Session) -> Worker | None:
            record = session.get(WorkerRecord, worker_id)
            return _to_worker(record) if record else None

        return await self._run("find_worker", work)

    async def find_worker_by_login_code(self, login_code: str) -> Worker | None:
        def work(session: Session) -> Worker | None:
            statement = select(WorkerRecord).where(
                WorkerRecord.login_code == login_code,
                WorkerRecord.active == True,  # noqa: E712
            )
            record = session.exec(statement).first()
            return _to_worker(record) if record else None

        return await self._run("find_worker_by_login_code", work)
