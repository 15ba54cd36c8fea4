"""Vote event broadcast providers."""

from dishka import Scope, provide

from ballot.adapter.broadcast import LogfireVoteEventPublisher
from ballot.domain.service import VoteEventPublisher
from ballot.util.di.base import ProviderBase


class BroadcastProvider(ProviderBase):
    """Broadcast component base."""

    __mock_component__ = "broadcast"


class ProdBroadcastProvider(BroadcastProvider):
    """Production broadcast provider emitting events through Logfire."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_publisher(self) -> VoteEventPublisher:
        """Provide vote event publisher."""
        return LogfireVoteEventPublisher()
