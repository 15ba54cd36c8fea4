"""Karma cache repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from ballot.domain.value import EntityRef


class KarmaCacheRepository(ABC):
    """Stores the last computed karma per voter."""

    @abstractmethod
    async def get(self, voter: EntityRef) -> Optional[int]:
        """Cached karma, or None if never computed."""
        pass

    @abstractmethod
    async def store(self, voter: EntityRef, karma: int) -> None:
        """Store a computed karma value."""
        pass
