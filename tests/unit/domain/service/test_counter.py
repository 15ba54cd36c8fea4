"""Unit tests for the cached and live vote counters."""

import random

import pytest

from ballot.domain.model import VoteTally
from ballot.domain.service import CachedVoteCounter
from tests.factories import Ballot, build_ballot, make_vote, post, user

VOTEABLES = [post(1), post(2), post(3)]
SCOPES = [None, "quality", "relevance"]


async def _run_scenario(ballot) -> None:
    service = ballot.vote_service
    await service.upvote(user(1), post(1))
    await service.cast_vote(user(2), post(1), 5)
    await service.downvote(user(3), post(1))
    await service.cast_vote(user(2), post(1), -2)
    await service.cast_vote(user(4), post(1), 0)
    await service.upvote(user(5), post(1), scope="quality")
    await service.remove_vote(user(1), post(1))
    await service.toggle_vote(user(6), post(1))


class TestCounterStrategies:
    """Cached counters must always agree with a live aggregation."""

    @pytest.mark.asyncio
    async def test_cached_and_live_counters_agree(self):
        # Arrange
        cached = build_ballot(counter_cache=True)
        live = build_ballot(counter_cache=False)

        # Act
        await _run_scenario(cached)
        await _run_scenario(live)

        # Assert
        for scope in (None, "quality"):
            cached_tally = await cached.tally_service.tally(post(1), scope)
            assert cached_tally == await live.tally_service.tally(post(1), scope)
            assert cached_tally == await cached.votes.tally(post(1), scope)

    @pytest.mark.asyncio
    async def test_scenario_totals(self):
        ballot = build_ballot()

        await _run_scenario(ballot)

        tally = await ballot.tally_service.tally(post(1))
        # Remaining unscoped votes: user 2 (-2), user 3 (-1), user 4 (0), user 6 (+1)
        assert tally == VoteTally.from_values([-2, -1, 0, 1])

    @pytest.mark.asyncio
    async def test_overall_tally_sums_scopes(self):
        ballot = build_ballot()
        await ballot.vote_service.upvote(user(1), post(1))
        await ballot.vote_service.upvote(user(1), post(1), scope="quality")
        await ballot.vote_service.downvote(user(2), post(1), scope="relevance")

        overall = await ballot.counter.overall_tally(post(1))

        assert overall == VoteTally.from_values([1, 1, -1])

    @pytest.mark.asyncio
    async def test_missing_row_is_filled_from_ledger(self):
        """Votes written before the counter existed are picked up on first read."""
        # Arrange
        ballot = build_ballot()
        await ballot.votes.save(make_vote(user(1), post(1), 1))
        await ballot.votes.save(make_vote(user(2), post(1), -1))

        # Act
        tally = await ballot.tally_service.tally(post(1))

        # Assert
        assert tally == VoteTally.from_values([1, -1])
        assert await ballot.counters.get(post(1), None) == tally

    @pytest.mark.asyncio
    async def test_reconcile_repairs_drifted_row(self):
        # Arrange
        ballot = build_ballot()
        await ballot.vote_service.upvote(user(1), post(1))
        await ballot.vote_service.upvote(user(2), post(1))
        await ballot.counters.reset(post(1), None, VoteTally(total_count=7))
        counter = ballot.counter
        assert isinstance(counter, CachedVoteCounter)

        # Act
        repaired = await counter.reconcile(post(1))

        # Assert
        assert repaired is True
        assert await ballot.tally_service.votes_count(post(1)) == 2
        assert await counter.reconcile(post(1)) is False

    @pytest.mark.asyncio
    async def test_reconcile_without_votes_is_noop(self):
        ballot = build_ballot()
        counter = ballot.counter
        assert isinstance(counter, CachedVoteCounter)

        assert await counter.reconcile(post(1)) is False
        assert await ballot.counters.get(post(1), None) is None

    @pytest.mark.asyncio
    async def test_write_before_first_read_seeds_from_ledger(self):
        """A first write to a missing row counts the votes already in the ledger."""
        # Arrange
        ballot = build_ballot()
        await ballot.votes.save(make_vote(user(1), post(1), 1))
        await ballot.votes.save(make_vote(user(2), post(1), -1))

        # Act
        await ballot.vote_service.upvote(user(3), post(1))

        # Assert
        expected = VoteTally.from_values([1, -1, 1])
        assert await ballot.counters.get(post(1), None) == expected
        assert await ballot.tally_service.votes_count(post(1)) == 3
        assert await ballot.counter.overall_tally(post(1)) == expected

    @pytest.mark.asyncio
    async def test_overall_tally_without_rows_reads_ledger(self):
        ballot = build_ballot()
        await ballot.votes.save(make_vote(user(1), post(1), 1))
        await ballot.votes.save(make_vote(user(2), post(1), 1, scope="quality"))

        overall = await ballot.counter.overall_tally(post(1))

        assert overall == VoteTally.from_values([1, 1])
        assert await ballot.counters.get_all_scopes(post(1)) is None

    @pytest.mark.asyncio
    async def test_empty_scope_shares_the_unscoped_partition(self):
        # Arrange
        ballot = build_ballot()
        counter = ballot.counter
        assert isinstance(counter, CachedVoteCounter)

        # Act
        vote = await ballot.vote_service.upvote(user(1), post(1), scope="")
        await ballot.vote_service.downvote(user(2), post(1))

        # Assert
        assert vote.scope is None
        assert await ballot.vote_service.find_vote(user(1), post(1)) == vote
        expected = VoteTally.from_values([1, -1])
        assert await ballot.tally_service.tally(post(1)) == expected
        assert await ballot.tally_service.tally(post(1), "") == expected
        assert await ballot.votes.tally(post(1), None) == expected
        assert await counter.reconcile(post(1)) is False

    @pytest.mark.asyncio
    async def test_remove_with_empty_scope_removes_unscoped_vote(self):
        ballot = build_ballot()
        await ballot.vote_service.upvote(user(1), post(1))

        removed = await ballot.vote_service.remove_vote(user(1), post(1), scope="")

        assert removed is not None
        assert await ballot.tally_service.votes_count(post(1)) == 0


async def _run_random_sequence(ballot: Ballot, seed: int, steps: int = 150) -> None:
    rng = random.Random(seed)
    service = ballot.vote_service
    for _ in range(steps):
        voter = user(rng.randint(1, 5))
        voteable = rng.choice(VOTEABLES)
        scope = rng.choice(SCOPES)
        action = rng.random()
        if action < 0.6:
            await service.cast_vote(voter, voteable, rng.randint(-3, 3), scope)
        elif action < 0.8:
            await service.remove_vote(voter, voteable, scope)
        else:
            await service.toggle_vote(voter, voteable, scope)


async def _assert_counters_match_ledger(ballot: Ballot) -> None:
    for voteable in VOTEABLES:
        for scope in SCOPES:
            assert await ballot.counter.tally(voteable, scope) == (
                await ballot.votes.tally(voteable, scope)
            ), (voteable, scope)
        assert await ballot.counter.overall_tally(voteable) == (
            await ballot.votes.tally_all_scopes(voteable)
        ), voteable


class TestCounterInvariant:
    """Cached counters equal the ledger after any sequence of mutations."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", [1, 7, 42, 2024])
    async def test_random_sequences(self, seed):
        ballot = build_ballot()

        await _run_random_sequence(ballot, seed)

        await _assert_counters_match_ledger(ballot)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", [3, 11])
    async def test_random_sequences_with_duplicate_votes(self, seed):
        ballot = build_ballot(allow_duplicate_votes=True)

        await _run_random_sequence(ballot, seed)

        await _assert_counters_match_ledger(ballot)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", [5, 13])
    async def test_random_sequences_over_existing_votes(self, seed):
        """Votes already in the ledger before the first write are counted."""
        # Arrange
        ballot = build_ballot()
        for voteable in VOTEABLES:
            for scope in SCOPES:
                await ballot.votes.save(make_vote(user(9), voteable, 2, scope))

        # Act
        await _run_random_sequence(ballot, seed)

        # Assert: every partition is touched before reading overall tallies
        for voteable in VOTEABLES:
            for scope in SCOPES:
                await ballot.counter.tally(voteable, scope)
        await _assert_counters_match_ledger(ballot)
