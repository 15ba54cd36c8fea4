"""Application layer DI providers."""

from dishka import Scope, provide

from ballot.application.usecase.karma import GetKarmaUseCase
from ballot.application.usecase.ranking import GetTrendingUseCase, RankVoteablesUseCase
from ballot.application.usecase.stats import GetVoteStatsUseCase
from ballot.application.usecase.vote import (
    CastVoteUseCase,
    RemoveVoteUseCase,
    ToggleVoteUseCase,
)
from ballot.domain.service import KarmaService, TallyService, VoteService
from ballot.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self, vote_service: VoteService, tally_service: TallyService
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service, tally_service=tally_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_vote_use_case(self, vote_service: VoteService) -> RemoveVoteUseCase:
        """Provide remove vote use case."""
        return RemoveVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_toggle_vote_use_case(self, vote_service: VoteService) -> ToggleVoteUseCase:
        """Provide toggle vote use case."""
        return ToggleVoteUseCase(vote_service=vote_service)

    # Stats use cases
    @provide(scope=Scope.REQUEST)
    def get_get_vote_stats_use_case(
        self, tally_service: TallyService, vote_service: VoteService
    ) -> GetVoteStatsUseCase:
        """Provide get vote stats use case."""
        return GetVoteStatsUseCase(
            tally_service=tally_service, vote_service=vote_service
        )

    # Ranking use cases
    @provide(scope=Scope.REQUEST)
    def get_rank_voteables_use_case(
        self, tally_service: TallyService
    ) -> RankVoteablesUseCase:
        """Provide rank voteables use case."""
        return RankVoteablesUseCase(tally_service=tally_service)

    @provide(scope=Scope.REQUEST)
    def get_get_trending_use_case(
        self, tally_service: TallyService
    ) -> GetTrendingUseCase:
        """Provide get trending use case."""
        return GetTrendingUseCase(tally_service=tally_service)

    # Karma use cases
    @provide(scope=Scope.REQUEST)
    def get_get_karma_use_case(self, karma_service: KarmaService) -> GetKarmaUseCase:
        """Provide get karma use case."""
        return GetKarmaUseCase(karma_service=karma_service)
