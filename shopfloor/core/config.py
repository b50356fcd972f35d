import warnings
from typing import Annotated, Any, Literal
from zoneinfo import ZoneInfo

from pydantic import AnyUrl, BeforeValidator, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "Shopfloor Workforce"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    FRONTEND_HOST: str = "http://localhost:5173"

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS] + [
            self.FRONTEND_HOST
        ]

    # Relational store holding the ERP tables (read side)
    DATABASE_URL: str = "sqlite:///./shopfloor.db"
    DATABASE_POOL_PRE_PING: bool = True

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL.startswith("postgresql://"):
            return self.DATABASE_URL.replace(
                "postgresql://", "postgresql+psycopg://", 1
            )
        elif self.DATABASE_URL.startswith("postgres://"):
            return self.DATABASE_URL.replace("postgres://", "postgresql+psycopg://", 1)
        return self.DATABASE_URL

    # Plant floor
    PLANT_TIMEZONE: str = "Europe/Istanbul"
    MACHINE_SORT_LOCALE: Literal["tr", "default"] = "tr"
    SNAPSHOT_READ_TIMEOUT_SECONDS: float = 10.0

    @property
    def plant_tz(self) -> ZoneInfo:
        return ZoneInfo(self.PLANT_TIMEZONE)

    # ERP Service Layer (write gateway)
    SERVICE_LAYER_URL: str = "https://localhost:50000/b1s/v1"
    SERVICE_LAYER_COMPANY: str = ""
    SERVICE_LAYER_USERNAME: str = ""
    SERVICE_LAYER_PASSWORD: str = "changethis"
    SERVICE_LAYER_SESSION_MINUTES: int = 30
    SERVICE_LAYER_REFRESH_BUFFER_MINUTES: int = 5
    SERVICE_LAYER_TIMEOUT_SECONDS: float = 15.0
    SERVICE_LAYER_VERIFY_SSL: bool = True
    ACTIVITY_UDO_NAME: str = "ATELIERATTN"
    # "database" appends activity rows directly, for installs without a gateway
    ACTIVITY_WRITE_BACKEND: Literal["service_layer", "database"] = "service_layer"

    # Logging / metrics
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "console"
    LOG_SQL: bool = False

    def _check_default_secret(self, var_name: str, value: str | None) -> None:
        if value == "changethis":
            message = (
                f'The value of {var_name} is "changethis", '
                "for security, please change it, at least for deployments."
            )
            if self.ENVIRONMENT == "local":
                warnings.warn(message, stacklevel=1)
            else:
                raise ValueError(message)

    @model_validator(mode="after")
    def _enforce_non_default_secrets(self) -> Self:
        if self.ACTIVITY_WRITE_BACKEND == "service_layer":
            self._check_default_secret(
                "SERVICE_LAYER_PASSWORD", self.SERVICE_LAYER_PASSWORD
            )
        if self.SERVICE_LAYER_REFRESH_BUFFER_MINUTES >= self.SERVICE_LAYER_SESSION_MINUTES:
            raise ValueError(
                "SERVICE_LAYER_REFRESH_BUFFER_MINUTES must be shorter than the session"
            )
        return self


settings = Settings()  # type: ignore
