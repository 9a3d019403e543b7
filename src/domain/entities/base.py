"""Base entity class for domain entities."""

from typing import Any, TypeAlias
from uuid import UUID


EntityId: TypeAlias = int | UUID


class BaseEntity:
    """Base class for all domain entities.

    Entities are compared by identity (``id``). Entities that have not been
    persisted yet (``id is None``) are only equal to themselves.
    """

    def __init__(self, id: EntityId | None = None) -> None:
        self.id = id

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return id(self)
        return hash((self.__class__.__name__, self.id))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id!r})"
