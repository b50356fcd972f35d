"""
Base class for SQL-backed repositories.

Each call opens its own session and runs in a worker thread, so independent
reads issued with `asyncio.gather` proceed concurrently without sharing a
session.
"""

import asyncio
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from shopfloor.domain.shared.exceptions import DatabaseError

T = TypeVar("T")


class SqlRepository:
    def __init__(self, engine: Engine):
        """
        Initialize repository with a database engine.

        Args:
            engine: SQLAlchemy engine the sessions are bound to
        """
        self.engine = engine

    def _execute(self, operation: str, work: Callable[[Session], T]) -> T:
        try:
            with Session(self.engine) as session:
                return work(session)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during {operation}: {str(e)}") from e

    async def _run(self, operation: str, work: Callable[[Session], T]) -> T:
        return await asyncio.to_thread(self._execute, operation, work)
