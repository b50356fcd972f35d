from sqlalchemy import Engine
from sqlmodel import SQLModel, create_engine

from shopfloor.core.config import settings


def build_engine(url: str | None = None, **kwargs) -> Engine:
    database_url = url or settings.SQLALCHEMY_DATABASE_URI
    engine_kwargs = {"pool_pre_ping": settings.DATABASE_POOL_PRE_PING}

    # SQLite connections are shared with the threads running repository queries
    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}

    engine_kwargs.update(kwargs)
    return create_engine(database_url, **engine_kwargs)


engine = build_engine()


# make sure all SQLModel models are imported (shopfloor.infrastructure.database.models)
# before initializing DB, otherwise the metadata is empty
def init_db(target: Engine | None = None) -> None:
    from shopfloor.infrastructure.database import models  # noqa: F401

    SQLModel.metadata.create_all(target or engine)
