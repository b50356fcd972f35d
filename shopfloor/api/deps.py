"""
API dependencies.

Repositories and application services are wired here and can be replaced in
tests through `app.dependency_overrides`.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from shopfloor.application.services.activity_service import ActivityService
from shopfloor.application.services.team_service import (
    TeamDirectoryService,
    WorkforceAggregationEngine,
)
from shopfloor.core.config import settings
from shopfloor.core.db import engine
from shopfloor.domain.workforce.repositories import (
    ActivityEventRepository,
    ActivityEventWriter,
    DirectoryRepository,
    PauseReasonRepository,
    WorkOrderRepository,
)
from shopfloor.domain.workforce.services.collation import sort_key_for_locale
from shopfloor.infrastructure.database.repositories import (
    SqlActivityEventRepository,
    SqlActivityEventWriter,
    SqlDirectoryRepository,
    SqlPauseReasonRepository,
    SqlWorkOrderRepository,
)
from shopfloor.infrastructure.service_layer import (
    ServiceLayerActivityWriter,
    ServiceLayerClient,
)


def get_directory_repository() -> DirectoryRepository:
    return SqlDirectoryRepository(engine)


def get_event_repository() -> ActivityEventRepository:
    return SqlActivityEventRepository(engine, settings.plant_tz)


def get_work_order_repository() -> WorkOrderRepository:
    return SqlWorkOrderRepository(engine)


def get_pause_reason_repository() -> PauseReasonRepository:
    return SqlPauseReasonRepository(engine)


def get_service_layer_client(request: Request) -> ServiceLayerClient:
    client = getattr(request.app.state, "service_layer_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="ERP gateway is not configured",
        )
    return client


def get_event_writer(request: Request) -> ActivityEventWriter:
    if settings.ACTIVITY_WRITE_BACKEND == "database":
        return SqlActivityEventWriter(engine, settings.plant_tz)
    return ServiceLayerActivityWriter(
        get_service_layer_client(request),
        settings.ACTIVITY_UDO_NAME,
        settings.plant_tz,
    )


DirectoryRepositoryDep = Annotated[
    DirectoryRepository, Depends(get_directory_repository)
]
EventRepositoryDep = Annotated[
    ActivityEventRepository, Depends(get_event_repository)
]
EventWriterDep = Annotated[ActivityEventWriter, Depends(get_event_writer)]
WorkOrderRepositoryDep = Annotated[
    WorkOrderRepository, Depends(get_work_order_repository)
]
PauseReasonRepositoryDep = Annotated[
    PauseReasonRepository, Depends(get_pause_reason_repository)
]


def get_activity_service(
    events: EventRepositoryDep,
    writer: EventWriterDep,
    directory: DirectoryRepositoryDep,
    work_orders: WorkOrderRepositoryDep,
    pause_reasons: PauseReasonRepositoryDep,
) -> ActivityService:
    return ActivityService(events, writer, directory, work_orders, pause_reasons)


def get_aggregation_engine(
    directory: DirectoryRepositoryDep, events: EventRepositoryDep
) -> WorkforceAggregationEngine:
    return WorkforceAggregationEngine(
        directory,
        events,
        read_timeout_seconds=settings.SNAPSHOT_READ_TIMEOUT_SECONDS,
        sort_key=sort_key_for_locale(settings.MACHINE_SORT_LOCALE),
    )


def get_team_directory_service(
    directory: DirectoryRepositoryDep, pause_reasons: PauseReasonRepositoryDep
) -> TeamDirectoryService:
    return TeamDirectoryService(
        directory,
        pause_reasons,
        sort_key=sort_key_for_locale(settings.MACHINE_SORT_LOCALE),
    )


ActivityServiceDep = Annotated[ActivityService, Depends(get_activity_service)]
AggregationEngineDep = Annotated[
    WorkforceAggregationEngine, Depends(get_aggregation_engine)
]
TeamDirectoryServiceDep = Annotated[
    TeamDirectoryService, Depends(get_team_directory_service)
]
