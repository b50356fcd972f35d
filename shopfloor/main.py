import time
import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from shopfloor.api.main import api_router
from shopfloor.core.config import settings
from shopfloor.core.observability import (
    REQUEST_COUNT,
    REQUEST_DURATION,
    get_logger,
    set_correlation_id,
    set_worker_id,
    setup_structured_logging,
)
from shopfloor.infrastructure.service_layer import ServiceLayerClient

logger = get_logger(__name__)


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Middleware for request observability and metrics collection."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        set_correlation_id(correlation_id)
        set_worker_id(request.headers.get("X-Worker-ID", ""))

        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.perf_counter() - start_time
            REQUEST_COUNT.labels(method=method, endpoint=path, status="500").inc()
            REQUEST_DURATION.labels(method=method, endpoint=path).observe(duration)
            logger.error(
                "Request failed",
                method=method,
                path=path,
                duration_seconds=duration,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            raise

        duration = time.perf_counter() - start_time
        REQUEST_COUNT.labels(
            method=method, endpoint=path, status=str(response.status_code)
        ).inc()
        REQUEST_DURATION.labels(method=method, endpoint=path).observe(duration)
        response.headers["X-Correlation-ID"] = correlation_id

        logger.info(
            "Request completed",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_seconds=round(duration, 4),
        )
        return response


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


def build_service_layer_client() -> ServiceLayerClient:
    return ServiceLayerClient(
        base_url=settings.SERVICE_LAYER_URL,
        company_db=settings.SERVICE_LAYER_COMPANY,
        username=settings.SERVICE_LAYER_USERNAME,
        password=settings.SERVICE_LAYER_PASSWORD,
        session_minutes=settings.SERVICE_LAYER_SESSION_MINUTES,
        refresh_buffer_minutes=settings.SERVICE_LAYER_REFRESH_BUFFER_MINUTES,
        timeout_seconds=settings.SERVICE_LAYER_TIMEOUT_SECONDS,
        verify_ssl=settings.SERVICE_LAYER_VERIFY_SSL,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_structured_logging()

    client = None
    if settings.ACTIVITY_WRITE_BACKEND == "service_layer":
        client = build_service_layer_client()
    app.state.service_layer_client = client

    logger.info(
        "Application started",
        project_name=settings.PROJECT_NAME,
        environment=settings.ENVIRONMENT,
        write_backend=settings.ACTIVITY_WRITE_BACKEND,
        plant_timezone=settings.PLANT_TIMEZONE,
    )
    try:
        yield
    finally:
        if client is not None:
            await client.aclose()
        logger.info("Shutting down application")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    Shop-floor workforce tracking API

    Workers start, stop, resume and finish work on production orders; the
    team view shows who is doing what on which machine right now.
    """,
    version="1.0.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)

app.add_middleware(ObservabilityMiddleware)

if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(api_router, prefix=settings.API_V1_STR)
