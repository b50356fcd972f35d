"""
Team View API Routes.

Plant-wide workforce snapshot, shift catalogue, machine authorization
listings and the pause reason catalogue.
"""

from fastapi import APIRouter, Query

from shopfloor.api.deps import AggregationEngineDep, TeamDirectoryServiceDep
from shopfloor.api.errors import to_http_exception
from shopfloor.application.dtos.team_dtos import (
    AuthorizedMachineResponse,
    AuthorizedWorkerResponse,
    PauseReasonResponse,
    ShiftListResponse,
    ShiftResponse,
    WorkforceSnapshotResponse,
)
from shopfloor.domain.shared.exceptions import DomainError
from shopfloor.domain.workforce.value_objects.enums import ShiftFilter

router = APIRouter(tags=["team"])


@router.get(
    "/team/machines",
    response_model=WorkforceSnapshotResponse,
    summary="Get workforce snapshot",
    description="Who is doing what on which machine right now, grouped per machine.",
)
async def get_team_snapshot(
    engine: AggregationEngineDep,
    shift: ShiftFilter = Query(ShiftFilter.ALL, description="Shift filter"),
) -> WorkforceSnapshotResponse:
    try:
        snapshot = await engine.build_snapshot(shift_filter=shift)
    except DomainError as e:
        raise to_http_exception(e) from e
    return WorkforceSnapshotResponse.from_domain(snapshot)


@router.get("/team/shifts", response_model=ShiftListResponse, summary="List shifts")
async def get_shifts(service: TeamDirectoryServiceDep) -> ShiftListResponse:
    shifts, current = service.shifts()
    return ShiftListResponse(
        shifts=[ShiftResponse.from_domain(shift) for shift in shifts],
        current_shift=current,
    )


@router.get(
    "/workers/{login_code}/machines",
    response_model=list[AuthorizedMachineResponse],
    summary="List machines a worker may use",
)
async def get_worker_machines(
    login_code: str, service: TeamDirectoryServiceDep
) -> list[AuthorizedMachineResponse]:
    try:
        machines = await service.machines_for_worker(login_code)
    except DomainError as e:
        raise to_http_exception(e) from e
    return [AuthorizedMachineResponse.from_domain(item) for item in machines]


@router.get(
    "/machines/{machine_id}/workers",
    response_model=list[AuthorizedWorkerResponse],
    summary="List workers authorized for a machine",
)
async def get_machine_workers(
    machine_id: str, service: TeamDirectoryServiceDep
) -> list[AuthorizedWorkerResponse]:
    try:
        workers = await service.workers_for_machine(machine_id)
    except DomainError as e:
        raise to_http_exception(e) from e
    return [AuthorizedWorkerResponse.from_domain(item) for item in workers]


@router.get(
    "/pause-reasons",
    response_model=list[PauseReasonResponse],
    summary="List pause reasons",
)
async def get_pause_reasons(
    service: TeamDirectoryServiceDep,
) -> list[PauseReasonResponse]:
    try:
        reasons = await service.pause_reasons()
    except DomainError as e:
        raise to_http_exception(e) from e
    return [PauseReasonResponse.from_domain(reason) for reason in reasons]
