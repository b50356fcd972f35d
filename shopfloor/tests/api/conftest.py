from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from shopfloor.api.deps import (
    get_activity_service,
    get_aggregation_engine,
    get_team_directory_service,
)
from shopfloor.application.services.activity_service import ActivityService
from shopfloor.application.services.team_service import (
    TeamDirectoryService,
    WorkforceAggregationEngine,
)
from shopfloor.core.config import settings
from shopfloor.domain.workforce.services.collation import turkish_sort_key
from shopfloor.main import app


@pytest.fixture
def api_prefix() -> str:
    return settings.API_V1_STR


@pytest.fixture
def client(
    event_store, directory, work_orders, pause_reason_repository, clock
) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_activity_service] = lambda: ActivityService(
        event_store, event_store, directory, work_orders, pause_reason_repository, clock
    )
    app.dependency_overrides[get_aggregation_engine] = lambda: WorkforceAggregationEngine(
        directory,
        event_store,
        read_timeout_seconds=1.0,
        sort_key=turkish_sort_key,
        clock=clock,
    )
    app.dependency_overrides[get_team_directory_service] = lambda: TeamDirectoryService(
        directory, pause_reason_repository, sort_key=turkish_sort_key, clock=clock
    )
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
