from .activity_event_repository import ActivityEventRepository, ActivityEventWriter
from .directory_repository import DirectoryRepository
from .pause_reason_repository import PauseReasonRepository
from .work_order_repository import WorkOrderRepository

__all__ = [
    "ActivityEventRepository",
    "ActivityEventWriter",
    "DirectoryRepository",
    "PauseReasonRepository",
    "WorkOrderRepository",
]
