"""Domain layer DI providers."""

from dishka import Scope, provide

from ballot.config import KarmaSettings, VotingSettings
from ballot.domain.repository import (
    CounterRepository,
    KarmaCacheRepository,
    OwnershipRepository,
    VoteRepository,
)
from ballot.domain.service import (
    CachedVoteCounter,
    KarmaService,
    LiveVoteCounter,
    TallyService,
    VoteCounter,
    VoteEventPublisher,
    VoteService,
)
from ballot.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each unit of work gets fresh service instances sharing one transaction, so
    a ledger write and its counter update commit together.
    """

    scope = Scope.REQUEST

    @provide
    def get_vote_counter(
        self,
        settings: VotingSettings,
        vote_repository: VoteRepository,
        counter_repository: CounterRepository,
    ) -> VoteCounter:
        """Provide the counter strategy selected by ``counter_cache``."""
        if settings.counter_cache:
            return CachedVoteCounter(
                counter_repository=counter_repository,
                vote_repository=vote_repository,
            )
        return LiveVoteCounter(vote_repository=vote_repository)

    @provide
    def get_tally_service(
        self,
        counter: VoteCounter,
        vote_repository: VoteRepository,
        settings: VotingSettings,
    ) -> TallyService:
        """Provide tally and ranking domain service."""
        return TallyService(
            counter=counter, vote_repository=vote_repository, settings=settings
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        counter: VoteCounter,
        tally_service: TallyService,
        publisher: VoteEventPublisher,
        settings: VotingSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            counter=counter,
            tally_service=tally_service,
            publisher=publisher,
            settings=settings,
        )

    @provide
    def get_karma_service(
        self,
        vote_repository: VoteRepository,
        ownership_repository: OwnershipRepository,
        karma_cache_repository: KarmaCacheRepository,
        settings: KarmaSettings,
    ) -> KarmaService:
        """Provide karma domain service."""
        return KarmaService(
            vote_repository=vote_repository,
            ownership_repository=ownership_repository,
            karma_cache_repository=karma_cache_repository,
            settings=settings,
        )
