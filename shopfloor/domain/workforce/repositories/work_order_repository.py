"""Work Order Repository Interface"""

from abc import ABC, abstractmethod

from ..entities.directory import WorkOrder


class WorkOrderRepository(ABC):
    """Abstract read interface for production work orders."""

    @abstractmethod
    async def exists(self, work_order_id: str) -> bool:
        """Check whether a work order with this ID exists."""
        pass

    @abstractmethod
    async def get_by_id(self, work_order_id: str) -> WorkOrder | None:
        """Retrieve a work order by its ID, or None if not found."""
        pass
