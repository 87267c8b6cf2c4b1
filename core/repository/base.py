"""
Repository interface shared by the ORM-backed and raw SQL implementations.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, List
from sqlmodel import SQLModel

T = TypeVar("T", bound=SQLModel)


class IRepository(ABC, Generic[T]):
    """Repository interface; defines the five whole-row operations on one table."""

    @abstractmethod
    async def list_all(self) -> List[T]:
        """Get every row of the table (no implied order)."""
        pass

    @abstractmethod
    async def get_by_id(self, id: int) -> Optional[T]:
        """Get entity by ID; None when the row does not exist."""
        pass

    @abstractmethod
    async def add(self, entity: T) -> None:
        """Insert entity; the store assigns the ID."""
        pass

    @abstractmethod
    async def update(self, entity: T) -> None:
        """Replace every non-ID field of the row with the entity's ID (no-op when missing)."""
        pass

    @abstractmethod
    async def delete(self, id: int) -> None:
        """Delete entity by ID (no-op when missing)."""
        pass
