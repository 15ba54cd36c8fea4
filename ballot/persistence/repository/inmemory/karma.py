"""In-memory karma cache repository for testing."""

from typing import Optional

from ballot.domain.repository.karma import KarmaCacheRepository
from ballot.domain.value import EntityRef


class InMemoryKarmaCacheRepository(KarmaCacheRepository):
    """In-memory implementation of KarmaCacheRepository for testing."""

    def __init__(self) -> None:
        self._karma: dict[tuple[str, str], int] = {}

    async def get(self, voter: EntityRef) -> Optional[int]:
        return self._karma.get(voter.key)

    async def store(self, voter: EntityRef, karma: int) -> None:
        self._karma[voter.key] = karma
