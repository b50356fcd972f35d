"""
Activity API Routes.

Worker state, the four activity actions and the per-work-order history.
"""

from fastapi import APIRouter

from shopfloor.api.deps import ActivityServiceDep
from shopfloor.api.errors import to_http_exception
from shopfloor.application.dtos.activity_dtos import (
    ActivityActionRequest,
    ActivityActionResponse,
    ActivityHistoryResponse,
    WorkerStateResponse,
)
from shopfloor.core.observability import set_worker_id
from shopfloor.domain.shared.exceptions import DomainError
from shopfloor.domain.workforce.value_objects.enums import ActivityAction

router = APIRouter(prefix="/activities", tags=["activities"])


@router.get(
    "/{work_order_id}/workers/{worker_id}/state",
    response_model=WorkerStateResponse,
    summary="Get worker state",
    description="Derive the allowed actions of a worker on a work order from the latest recorded activity.",
)
async def get_worker_state(
    work_order_id: str, worker_id: str, service: ActivityServiceDep
) -> WorkerStateResponse:
    try:
        return await service.get_worker_state(work_order_id, worker_id)
    except DomainError as e:
        raise to_http_exception(e) from e


async def _perform(
    action: ActivityAction,
    work_order_id: str,
    request: ActivityActionRequest,
    service: ActivityServiceDep,
) -> ActivityActionResponse:
    set_worker_id(request.worker_id)
    try:
        return await service.perform(
            action,
            work_order_id,
            request.worker_id,
            request.machine_id,
            pause_reason_code=request.pause_reason_code,
            note=request.note,
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post(
    "/{work_order_id}/start",
    response_model=ActivityActionResponse,
    summary="Start work",
)
async def start_work(
    work_order_id: str, request: ActivityActionRequest, service: ActivityServiceDep
) -> ActivityActionResponse:
    return await _perform(ActivityAction.START, work_order_id, request, service)


@router.post(
    "/{work_order_id}/stop",
    response_model=ActivityActionResponse,
    summary="Stop work",
    description="Pause work on a work order. A pause reason code is required.",
)
async def stop_work(
    work_order_id: str, request: ActivityActionRequest, service: ActivityServiceDep
) -> ActivityActionResponse:
    return await _perform(ActivityAction.STOP, work_order_id, request, service)


@router.post(
    "/{work_order_id}/resume",
    response_model=ActivityActionResponse,
    summary="Resume work",
)
async def resume_work(
    work_order_id: str, request: ActivityActionRequest, service: ActivityServiceDep
) -> ActivityActionResponse:
    return await _perform(ActivityAction.RESUME, work_order_id, request, service)


@router.post(
    "/{work_order_id}/finish",
    response_model=ActivityActionResponse,
    summary="Finish work",
)
async def finish_work(
    work_order_id: str, request: ActivityActionRequest, service: ActivityServiceDep
) -> ActivityActionResponse:
    return await _perform(ActivityAction.FINISH, work_order_id, request, service)


@router.get(
    "/{work_order_id}/history",
    response_model=ActivityHistoryResponse,
    summary="Get activity history",
    description="List every activity on a work order, newest first.",
)
async def get_history(
    work_order_id: str, service: ActivityServiceDep
) -> ActivityHistoryResponse:
    try:
        return await service.history_for_work_order(work_order_id)
    except DomainError as e:
        raise to_http_exception(e) from e
