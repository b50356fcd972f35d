"""
Directory Repository Interface

Defines the contract for reading workers and machines.
"""

from abc import ABC, abstractmethod

from ..entities.directory import Machine, Worker


class DirectoryRepository(ABC):
    """Abstract read interface for the plant worker and machine directory."""

    @abstractmethod
    async def list_machines(self) -> list[Machine]:
        """
        Retrieve all machines.

        Returns:
            List of all machines

        Raises:
            DatabaseError: If retrieval operation fails
        """
        pass

    @abstractmethod
    async def list_workers_with_assignment(self) -> list[Worker]:
        """
        Retrieve all active workers with their current machine assignment.

        Returns:
            Active workers ordered by last name, then first name

        Raises:
            DatabaseError: If retrieval operation fails
        """
        pass

    @abstractmethod
    async def find_machine(self, machine_id: str) -> Machine | None:
        """
        Retrieve a machine by its ID.

        Args:
            machine_id: Machine identifier

        Returns:
            Machine or None if not found
        """
        pass

    @abstractmethod
    async def find_worker(self, worker_id: str) -> Worker | None:
        """
        Retrieve a worker by its ID, including workers no longer active.

        Args:
            worker_id: Worker identifier

        Returns:
            Worker or None if not found
        """
        pass

    @abstractmethod
    async def find_worker_by_login_code(self, login_code: str) -> Worker | None:
        """
        Retrieve an active worker by login code.

        Args:
            login_code: Login code the worker authenticates with

        Returns:
            Worker or None if no active worker has this code
        """
        pass
