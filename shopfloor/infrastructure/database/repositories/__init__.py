from .activity_event_repository import (
    SqlActivityEventRepository,
    SqlActivityEventWriter,
)
from .base import SqlRepository
from .catalogue_repository import SqlPauseReasonRepository, SqlWorkOrderRepository
from .directory_repository import SqlDirectoryRepository

__all__ = [
    "SqlActivityEventRepository",
    "SqlActivityEventWriter",
    "SqlDirectoryRepository",
    "SqlPauseReasonRepository",
    "SqlRepository",
    "SqlWorkOrderRepository",
]
