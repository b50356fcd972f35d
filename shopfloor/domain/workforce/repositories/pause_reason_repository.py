"""Pause Reason Repository Interface"""

from abc import ABC, abstractmethod

from ..entities.directory import PauseReason


class PauseReasonRepository(ABC):
    """Abstract read interface for the pause reason catalogue."""

    @abstractmethod
    async def list_all(self) -> list[PauseReason]:
        """
        Retrieve the full catalogue.

        Returns:
            Pause reasons ordered by code
        """
        pass

    @abstractmethod
    async def find_by_code(self, code: str) -> PauseReason | None:
        pass
