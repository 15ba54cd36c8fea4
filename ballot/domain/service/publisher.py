"""Vote event publishing interface."""

from abc import ABC, abstractmethod

from ballot.domain.model import VoteEvent


class VoteEventPublisher(ABC):
    """Delivers vote events to an external broadcast collaborator.

    Implementations live in the adapter layer.
    """

    @abstractmethod
    async def publish(self, event: VoteEvent) -> None:
        """Publish a vote event.

        Args:
            event: The event, including the post-mutation snapshot
        """
        pass
