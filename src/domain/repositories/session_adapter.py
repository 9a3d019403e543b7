"""Session adapter port.

The domain defines this interface; infrastructure wraps the concrete
database session (SQLAlchemy AsyncSession) to implement it.
"""

from abc import ABC, abstractmethod
from typing import Any


class ISessionAdapter(ABC):
    """Interface for database session operations used by repositories."""

    @abstractmethod
    async def execute(self, statement: Any, params: dict[str, Any] | None = None) -> Any:
        """Execute a statement."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commit the current transaction."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the current transaction."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the session."""
        pass

    @abstractmethod
    def add(self, instance: Any) -> None:
        """Add instance to session."""
        pass

    @abstractmethod
    async def flush(self) -> None:
        """Flush pending changes."""
        pass

    @abstractmethod
    async def refresh(self, instance: Any) -> None:
        """Refresh instance from database."""
        pass

    @abstractmethod
    async def get(self, entity_type: Any, entity_id: Any) -> Any | None:
        """Get entity by primary key."""
        pass

    @abstractmethod
    async def delete(self, instance: Any) -> None:
        """Delete instance."""
        pass
