"""Unit tests for stats, ranking and karma use cases."""

from datetime import timedelta

import pytest

from ballot.application.usecase.karma import GetKarmaRequest, GetKarmaUseCase
from ballot.application.usecase.ranking import (
    GetTrendingRequest,
    GetTrendingUseCase,
    RankItem,
    RankVoteablesRequest,
    RankVoteablesUseCase,
)
from ballot.application.usecase.stats import GetVoteStatsRequest, GetVoteStatsUseCase
from ballot.domain.model.common import utcnow
from ballot.domain.service import VoteService
from ballot.domain.value import RankingAlgorithm, VoteDirection
from tests.factories import post, user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetVoteStatsUseCase:
    """Tests for GetVoteStatsUseCase."""

    @pytest.mark.asyncio
    async def test_stats_with_voter(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        use_case = await unit_env.get(GetVoteStatsUseCase)
        await vote_service.upvote(user(1), post(1))
        await vote_service.downvote(user(2), post(1))

        # Act
        response = await use_case.execute(
            GetVoteStatsRequest(
                voteable_type="post", voteable_id="1", voter_type="user", voter_id="2"
            )
        )

        # Assert
        assert response.snapshot.votes_for == 1
        assert response.snapshot.votes_against == 1
        assert response.snapshot.percent_for == 50.0
        assert response.voter_value == -1
        assert response.voter_direction == VoteDirection.DOWN

    @pytest.mark.asyncio
    async def test_stats_without_voter(self, unit_env):
        use_case = await unit_env.get(GetVoteStatsUseCase)

        response = await use_case.execute(
            GetVoteStatsRequest(voteable_type="post", voteable_id="1")
        )

        assert response.snapshot.votes_count == 0
        assert response.voter_value is None

    def test_voter_fields_come_together(self):
        with pytest.raises(ValueError):
            GetVoteStatsRequest(voteable_type="post", voteable_id="1", voter_id="2")


class TestRankVoteablesUseCase:
    """Tests for RankVoteablesUseCase."""

    @pytest.mark.asyncio
    async def test_rank_with_limit(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        use_case = await unit_env.get(RankVoteablesUseCase)
        for voter_id in range(3):
            await vote_service.upvote(user(voter_id), post("b"))
        await vote_service.upvote(user(1), post("c"))

        response = await use_case.execute(
            RankVoteablesRequest(
                voteable_type="post",
                items=[RankItem(id="a"), RankItem(id="b"), RankItem(id="c")],
                algorithm=RankingAlgorithm.SIMPLE,
                limit=2,
            )
        )

        assert response.algorithm == RankingAlgorithm.SIMPLE
        assert [(item.id, item.score) for item in response.items] == [
            ("b", 3.0),
            ("c", 1.0),
        ]

    @pytest.mark.asyncio
    async def test_default_algorithm_is_wilson(self, unit_env):
        use_case = await unit_env.get(RankVoteablesUseCase)

        response = await use_case.execute(
            RankVoteablesRequest(
                voteable_type="post",
                items=[RankItem(id="a", created_at=utcnow() - timedelta(hours=1))],
            )
        )

        assert response.algorithm == RankingAlgorithm.WILSON_SCORE
        assert response.items[0].score == 0.0


class TestGetTrendingUseCase:
    """Tests for GetTrendingUseCase."""

    @pytest.mark.asyncio
    async def test_trending(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        use_case = await unit_env.get(GetTrendingUseCase)
        await vote_service.upvote(user(1), post("x"))
        await vote_service.upvote(user(1), post("y"))
        await vote_service.upvote(user(2), post("y"))

        response = await use_case.execute(
            GetTrendingRequest(voteable_type="post", hours=1, limit=1)
        )

        assert response.voteable_ids == ["y"]


class TestGetKarmaUseCase:
    """Tests for GetKarmaUseCase."""

    @pytest.mark.asyncio
    async def test_voter_without_sources(self, unit_env):
        use_case = await unit_env.get(GetKarmaUseCase)

        response = await use_case.execute(GetKarmaRequest(voter_type="user", voter_id="1"))

        assert response.karma == 0
        assert response.level == "unknown"
        assert response.progress.next_level is None
        assert response.breakdown == []
