"""Domain entities."""

from src.domain.entities.base import BaseEntity
from src.domain.entities.candidate import Candidate
from src.domain.entities.like import Like


__all__ = [
    "BaseEntity",
    "Candidate",
    "Like",
]
