"""Unit tests for TallyService aggregates and ranking."""

from datetime import timedelta

import pytest

from ballot.domain.value import RankingAlgorithm, VoteDirection
from tests.factories import build_ballot, post, user


async def _vote(ballot, voteable, up: int = 0, down: int = 0, offset: int = 0):
    """Cast ``up`` upvotes and ``down`` downvotes from distinct users."""
    for i in range(up):
        await ballot.vote_service.upvote(user(offset + i), voteable)
    for i in range(down):
        await ballot.vote_service.downvote(user(offset + up + i), voteable)


class TestAggregates:
    """Tests for aggregate readers."""

    @pytest.mark.asyncio
    async def test_percentages(self):
        ballot = build_ballot()
        await _vote(ballot, post(1), up=5, down=1, offset=100)

        assert await ballot.tally_service.percent_for(post(1)) == 83.3
        assert await ballot.tally_service.percent_against(post(1)) == 16.7
        assert await ballot.tally_service.plusminus(post(1)) == 4

    @pytest.mark.asyncio
    async def test_unvoted_item(self):
        ballot = build_ballot()

        assert await ballot.tally_service.votes_count(post(1)) == 0
        assert await ballot.tally_service.percent_for(post(1)) == 0.0
        assert await ballot.tally_service.wilson_score(post(1)) == 0.0

    @pytest.mark.asyncio
    async def test_wilson_score(self):
        ballot = build_ballot()
        await _vote(ballot, post(1), up=10, down=2, offset=100)

        assert await ballot.tally_service.wilson_score(post(1)) == pytest.approx(
            0.552, abs=1e-3
        )

    @pytest.mark.asyncio
    async def test_snapshot(self):
        ballot = build_ballot()
        await _vote(ballot, post(1), up=3, down=1, offset=100)

        snapshot = await ballot.tally_service.snapshot(post(1))

        assert snapshot.voteable_type == "post"
        assert snapshot.voteable_id == "1"
        assert snapshot.votes_for == 3
        assert snapshot.votes_against == 1
        assert snapshot.votes_count == 4
        assert snapshot.plusminus == 2
        assert snapshot.percent_for == 75.0
        assert 0.0 < snapshot.wilson_score < 0.75

    @pytest.mark.asyncio
    async def test_voters_by_direction(self):
        ballot = build_ballot()
        await ballot.vote_service.upvote(user(1), post(1))
        await ballot.vote_service.upvote(user(2), post(1))
        await ballot.vote_service.downvote(user(3), post(1))

        everyone = await ballot.tally_service.voters(post(1))
        up = await ballot.tally_service.voters(post(1), VoteDirection.UP)
        down = await ballot.tally_service.voters(post(1), VoteDirection.DOWN)

        assert {v.id for v in everyone} == {"1", "2", "3"}
        assert {v.id for v in up} == {"1", "2"}
        assert [v.id for v in down] == ["3"]


class TestRanking:
    """Tests for scoring and ranking voteables."""

    @pytest.mark.asyncio
    async def test_wilson_ranking_prefers_confident_majority(self):
        # Arrange
        ballot = build_ballot()
        await _vote(ballot, post("a"), up=10, down=2, offset=100)
        await _vote(ballot, post("b"), up=1, offset=200)

        # Act
        ranked = await ballot.tally_service.rank(
            [post("b"), post("a")], RankingAlgorithm.WILSON_SCORE
        )

        # Assert
        assert [v.id for v, _ in ranked] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_hacker_news_ranking_favors_recent(self, now):
        ballot = build_ballot()
        fresh, stale = post("fresh", hours_old=1), post("stale", hours_old=10)
        await _vote(ballot, fresh, up=3, offset=100)
        await _vote(ballot, stale, up=3, offset=200)

        ranked = await ballot.tally_service.rank(
            [stale, fresh], RankingAlgorithm.HACKER_NEWS, now=now
        )

        assert [v.id for v, _ in ranked] == ["fresh", "stale"]
        assert ranked[0][1] == pytest.approx(2 / 3**1.8)

    @pytest.mark.asyncio
    async def test_hacker_news_uses_configured_gravity(self, now):
        ballot = build_ballot(hot_ranking_gravity=1.0)
        item = post(1, hours_old=2)
        await _vote(ballot, item, up=5, offset=100)

        score = await ballot.tally_service.hacker_news_score(item, now=now)

        assert score == pytest.approx(4 / 4)

    @pytest.mark.asyncio
    async def test_reddit_hot_ranking_favors_recent_with_equal_score(self):
        ballot = build_ballot()
        new, old = post("new", hours_old=1), post("old", hours_old=48)
        await _vote(ballot, new, up=2, offset=100)
        await _vote(ballot, old, up=2, offset=200)

        ranked = await ballot.tally_service.rank(
            [old, new], RankingAlgorithm.REDDIT_HOT
        )

        assert [v.id for v, _ in ranked] == ["new", "old"]

    @pytest.mark.asyncio
    async def test_hot_score_uses_all_scopes(self):
        ballot = build_ballot()
        item = post(1, hours_old=1)
        scoped = post(2, hours_old=1)
        await ballot.vote_service.upvote(user(1), item, scope="quality")
        await ballot.vote_service.upvote(user(2), item, scope="relevance")
        await ballot.vote_service.upvote(user(1), scoped)
        await ballot.vote_service.upvote(user(2), scoped)

        assert await ballot.tally_service.hot_score(item) == pytest.approx(
            await ballot.tally_service.hot_score(scoped)
        )

    @pytest.mark.asyncio
    async def test_simple_ranking_and_stable_ties(self):
        ballot = build_ballot()
        await _vote(ballot, post("top"), up=3, offset=100)
        await _vote(ballot, post("bottom"), down=2, offset=200)

        ranked = await ballot.tally_service.rank(
            [post("x"), post("bottom"), post("y"), post("top")],
            RankingAlgorithm.SIMPLE,
        )

        assert [v.id for v, _ in ranked] == ["top", "x", "y", "bottom"]
        assert [score for _, score in ranked] == [3.0, 0.0, 0.0, -2.0]

    @pytest.mark.asyncio
    async def test_default_algorithm_from_settings(self):
        ballot = build_ballot(default_ranking=RankingAlgorithm.SIMPLE)
        await _vote(ballot, post(1), up=4, offset=100)

        assert await ballot.tally_service.rank_score(post(1)) == 4.0


class TestTrending:
    """Tests for trending."""

    @pytest.mark.asyncio
    async def test_orders_by_recent_vote_count(self, now):
        ballot = build_ballot()
        await _vote(ballot, post(1), up=1, offset=100)
        await _vote(ballot, post(2), up=3, offset=200)
        await _vote(ballot, post(3), up=1, down=1, offset=300)

        since = now - timedelta(days=3650)
        trending = await ballot.tally_service.trending("post", since)

        assert [ref.id for ref in trending] == ["2", "3", "1"]

    @pytest.mark.asyncio
    async def test_window_excludes_older_votes(self, now):
        ballot = build_ballot()
        await _vote(ballot, post(1), up=2, offset=100)

        trending = await ballot.tally_service.trending(
            "post", now + timedelta(days=36500)
        )

        assert trending == []
