"""Ownership lookup used by karma sources."""

from abc import ABC, abstractmethod
from typing import List

from ballot.domain.model import KarmaSource


class OwnershipRepository(ABC):
    """Resolves which voteables a voter owns for a karma source."""

    @abstractmethod
    async def find_owned_ids(self, source: KarmaSource, owner_id: str) -> List[str]:
        """IDs of ``source.voteable_type`` items whose foreign key is ``owner_id``."""
        pass
