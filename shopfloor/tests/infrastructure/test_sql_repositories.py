"""
Integration tests for the SQL repositories against a file-backed SQLite
database, so that the worker-thread sessions see the same data.
"""

from datetime import date

import pytest
from sqlmodel import Session

from shopfloor.application.services.team_service import WorkforceAggregationEngine
from shopfloor.core.db import build_engine, init_db
from shopfloor.domain.shared.exceptions import DatabaseError
from shopfloor.domain.workforce.entities.activity_event import ActivityEventDraft
from shopfloor.domain.workforce.value_objects.enums import ActivityKind
from shopfloor.infrastructure.database.models import (
    ActivityEventRecord,
    MachineRecord,
    PauseReasonRecord,
    WorkerRecord,
    WorkOrderRecord,
)
from shopfloor.infrastructure.database.repositories import (
    SqlActivityEventRepository,
    SqlActivityEventWriter,
    SqlDirectoryRepository,
    SqlPauseReasonRepository,
    SqlWorkOrderRepository,
)
from shopfloor.tests.utils.fakes import PLANT_TZ, at


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'shopfloor.db'}")
    init_db(engine)
    with Session(engine) as session:
        session.add_all(
            [
                MachineRecord(res_code="M1", res_name="Torna", default_emp="20", second_emp="200,300"),
                MachineRecord(res_code="M2", res_name="Boya", default_emp="200"),
                MachineRecord(res_code="L1", res_name="Hat", res_type="L"),
                WorkerRecord(emp_id="1", first_name="Ahmet", last_name="Yılmaz", login_code="20", main_station="M1"),
                WorkerRecord(emp_id="2", first_name="Mehmet", last_name="Demir", login_code="200", main_station=""),
                WorkerRecord(emp_id="3", first_name="Ali", last_name="Arslan", login_code="300", active=False),
                WorkOrderRecord(doc_entry="1042", doc_num="5001", item_code="P-1"),
                PauseReasonRecord(code="2", name="Arıza"),
                PauseReasonRecord(code="1", name="Mola"),
                ActivityEventRecord(
                    code="old", name="old", u_work_order="1042", u_res_code="M1",
                    u_emp_id="1", u_proc_type="BAS", u_start=date(2026, 3, 1), u_start_time=800,
                ),
                ActivityEventRecord(
                    code="a", name="a", u_work_order="1042", u_res_code="M1",
                    u_emp_id="1", u_proc_type="BAS", u_start=date(2026, 3, 2), u_start_time=800,
                ),
                ActivityEventRecord(
                    code="b", name="b", u_work_order="1042", u_res_code="M1",
                    u_emp_id="1", u_proc_type="DUR", u_start=date(2026, 3, 2), u_start_time=800,
                    u_break_code="1",
                ),
            ]
        )
        session.commit()
    yield engine
    engine.dispose()


class TestSqlDirectoryRepository:
    @pytest.mark.asyncio
    async def test_list_machines_only_machine_resources(self, engine):
        machines = await SqlDirectoryRepository(engine).list_machines()

        assert [m.machine_id for m in machines] == ["M2", "M1"]
        assert machines[1].secondary_codes == frozenset({"200", "300"})

    @pytest.mark.asyncio
    async def test_workers_with_assignment(self, engine):
        workers = await SqlDirectoryRepository(engine).list_workers_with_assignment()

        assert [(w.worker_id, w.full_name, w.assigned_machine_id) for w in workers] == [
            ("2", "Mehmet Demir", None),
            ("1", "Ahmet Yılmaz", "M1"),
        ]

    @pytest.mark.asyncio
    async def test_lookups(self, engine):
        repository = SqlDirectoryRepository(engine)

        assert (await repository.find_machine("M1")).machine_name == "Torna"
        assert await repository.find_machine("L1") is None
        assert (await repository.find_worker("2")).login_code == "200"
        assert (await repository.find_worker_by_login_code("20")).worker_id == "1"
        assert await repository.find_worker("404") is None

    @pytest.mark.asyncio
    async def test_inactive_worker_lookups(self, engine):
        repository = SqlDirectoryRepository(engine)

        assert await repository.find_worker_by_login_code("300") is None
        former = await repository.find_worker("3")
        assert former.full_name == "Ali Arslan"
        assert not former.active

    @pytest.mark.asyncio
    async def test_inactive_worker_left_out_of_snapshot(self, engine):
        snapshot_engine = WorkforceAggregationEngine(
            SqlDirectoryRepository(engine),
            SqlActivityEventRepository(engine, PLANT_TZ),
            read_timeout_seconds=5.0,
            clock=lambda: at(10),
        )

        snapshot = await snapshot_engine.build_snapshot()

        cards = {card.machine_id: card for card in snapshot.machines}
        assert [w.worker_id for w in cards["UNASSIGNED"].available] == ["2"]
        assert [w.worker_id for w in cards["M1"].paused] == ["1"]
        assert snapshot.worker_count == 2


class TestSqlCatalogueRepositories:
    @pytest.mark.asyncio
    async def test_work_order_exists(self, engine):
        repository = SqlWorkOrderRepository(engine)

        assert await repository.exists("1042")
        assert not await repository.exists("9999")
        assert (await repository.get_by_id("1042")).item_code == "P-1"

    @pytest.mark.asyncio
    async def test_pause_reasons(self, engine):
        repository = SqlPauseReasonRepository(engine)

        assert [r.code for r in await repository.list_all()] == ["1", "2"]
        assert (await repository.find_by_code("2")).name == "Arıza"
        assert await repository.find_by_code("9") is None


class TestSqlActivityEventRepository:
    @pytest.mark.asyncio
    async def test_events_of_the_day(self, engine):
        repository = SqlActivityEventRepository(engine, PLANT_TZ)

        events = await repository.find_latest_events_today(date(2026, 3, 2))

        assert sorted(e.id for e in events) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_pair_events_newest_first_with_sequence_tiebreak(self, engine):
        repository = SqlActivityEventRepository(engine, PLANT_TZ)

        events = await repository.find_events_for("1", "1042")

        assert [e.id for e in events] == ["b", "a", "old"]
        assert events[0].kind == "STOP"
        assert events[0].pause_reason_code == "1"
        assert events[0].occurred_at == at(8)

    @pytest.mark.asyncio
    async def test_work_order_events(self, engine):
        repository = SqlActivityEventRepository(engine, PLANT_TZ)

        assert len(await repository.find_events_for_work_order("1042")) == 3
        assert await repository.find_events_for_work_order("9999") == []

    @pytest.mark.asyncio
    async def test_writer_appends_readable_event(self, engine):
        writer = SqlActivityEventWriter(engine, PLANT_TZ)
        repository = SqlActivityEventRepository(engine, PLANT_TZ)

        event = await writer.append(
            ActivityEventDraft(
                work_order_id="1042",
                machine_id="M1",
                worker_id="1",
                kind=ActivityKind.RESUME,
                occurred_at=at(9, 15),
            )
        )

        latest = (await repository.find_events_for("1", "1042"))[0]
        assert latest.id == event.id
        assert latest.kind == "RESUME"
        assert latest.sequence == event.sequence
        assert event.sequence > 3

    @pytest.mark.asyncio
    async def test_database_errors_are_wrapped(self, tmp_path):
        # tables were never created
        engine = build_engine(f"sqlite:///{tmp_path / 'empty.db'}")

        with pytest.raises(DatabaseError):
            await SqlDirectoryRepository(engine).list_machines()
