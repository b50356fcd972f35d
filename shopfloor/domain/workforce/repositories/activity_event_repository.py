"""
Activity Event Repository Interfaces

Defines the read and append contracts of the activity event log. Reads and
writes are split because events are written through the ERP gateway while
they are read straight from the store.
"""

from abc import ABC, abstractmethod
from datetime import date

from ..entities.activity_event import ActivityEvent, ActivityEventDraft


class ActivityEventRepository(ABC):
    """
    Abstract read interface for the activity event log.

    Implementations return events in the documented order, but callers never
    rely on it to find the latest event; they take an explicit maximum by
    `ActivityEvent.order_key`.
    """

    @abstractmethod
    async def find_latest_events_today(self, today: date) -> list[ActivityEvent]:
        """
        Retrieve every activity event recorded on a plant-local calendar day.

        Args:
            today: Current calendar day in the plant time zone

        Returns:
            All events of the day, in any order

        Raises:
            DatabaseError: If retrieval operation fails
        """
        pass

    @abstractmethod
    async def find_events_for(
        self, worker_id: str, work_order_id: str
    ) -> list[ActivityEvent]:
        """
        Retrieve the events of one (worker, work order) pair.

        Args:
            worker_id: Worker identifier
            work_order_id: Work order identifier

        Returns:
            Events of the pair, newest first

        Raises:
            DatabaseError: If retrieval operation fails
        """
        pass

    @abstractmethod
    async def find_events_for_work_order(
        self, work_order_id: str
    ) -> list[ActivityEvent]:
        """
        Retrieve the events of every worker on a work order.

        Args:
            work_order_id: Work order identifier

        Returns:
            Events of the work order, newest first

        Raises:
            DatabaseError: If retrieval operation fails
        """
        pass


class ActivityEventWriter(ABC):
    """Abstract append interface for the activity event log."""

    @abstractmethod
    async def append(self, draft: ActivityEventDraft) -> ActivityEvent:
        """
        Append a new event to the log.

        Args:
            draft: Validated event without identity

        Returns:
            The stored event with its assigned id and sequence

        Raises:
            WriteRejectedError: If the event could not be stored
        """
        pass
