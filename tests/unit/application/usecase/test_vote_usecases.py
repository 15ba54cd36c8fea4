"""Unit tests for vote use cases."""

import pytest

from ballot.adapter.broadcast import RecordingVoteEventPublisher
from ballot.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    RemoveVoteRequest,
    RemoveVoteUseCase,
    ToggleVoteRequest,
    ToggleVoteUseCase,
)
from ballot.domain.error import InvalidVoteValueError, SelfVoteError
from ballot.domain.service import VoteEventPublisher, VoteService
from ballot.domain.value import VoteAction, VoteDirection
from tests.factories import post, user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


def _key(**overrides) -> dict:
    fields = {
        "voter_type": "user",
        "voter_id": "1",
        "voteable_type": "post",
        "voteable_id": "42",
    }
    fields.update(overrides)
    return fields


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_cast_vote_returns_vote_and_snapshot(self, unit_env):
        """Casting should return the stored vote with fresh aggregates."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)

        # Act
        response = await use_case.execute(CastVoteRequest(**_key(), value=1))

        # Assert
        assert response.value == 1
        assert response.direction == VoteDirection.UP
        assert response.scope is None
        assert response.snapshot.votes_for == 1
        assert response.snapshot.votes_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [2.0, True, False, "3", 1.5, None])
    async def test_non_integer_value_is_rejected(self, unit_env, value):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        vote_service = await unit_env.get(VoteService)

        # Act & Assert
        with pytest.raises(InvalidVoteValueError):
            await use_case.execute(CastVoteRequest(**_key(), value=value))
        assert await vote_service.find_vote(user(1), post(42)) is None

    @pytest.mark.asyncio
    async def test_recast_via_use_case(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        first = await use_case.execute(CastVoteRequest(**_key(), value=1))

        second = await use_case.execute(CastVoteRequest(**_key(), value=-1))

        assert second.vote_id == first.vote_id
        assert second.snapshot.votes_for == 0
        assert second.snapshot.votes_against == 1

    @pytest.mark.asyncio
    async def test_scoped_vote(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)

        response = await use_case.execute(
            CastVoteRequest(**_key(), value=3, scope="quality")
        )

        assert response.scope == "quality"
        assert response.snapshot.scope == "quality"
        assert response.snapshot.votes_total == 3

    @pytest.mark.asyncio
    async def test_self_vote_propagates_domain_error(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)

        with pytest.raises(SelfVoteError):
            await use_case.execute(
                CastVoteRequest(**_key(voteable_type="user", voteable_id="1"))
            )

    @pytest.mark.asyncio
    async def test_events_published(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        publisher = await unit_env.get(VoteEventPublisher)
        assert isinstance(publisher, RecordingVoteEventPublisher)

        await use_case.execute(CastVoteRequest(**_key(), value=1))

        assert [e.action for e in publisher.for_stream("ballot:post:42")] == [
            VoteAction.CREATED
        ]


class TestRemoveVoteUseCase:
    """Tests for RemoveVoteUseCase."""

    @pytest.mark.asyncio
    async def test_remove_existing_vote(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        use_case = RemoveVoteUseCase(vote_service=vote_service)
        await vote_service.upvote(user(1), post(42))

        response = await use_case.execute(RemoveVoteRequest(**_key()))

        assert response.success is True
        assert response.message == "Vote removed successfully"
        assert await vote_service.find_vote(user(1), post(42)) is None

    @pytest.mark.asyncio
    async def test_remove_missing_vote(self, unit_env):
        use_case = await unit_env.get(RemoveVoteUseCase)

        response = await use_case.execute(RemoveVoteRequest(**_key()))

        assert response.success is False
        assert response.message == "No vote found to remove"


class TestToggleVoteUseCase:
    """Tests for ToggleVoteUseCase."""

    @pytest.mark.asyncio
    async def test_toggle_twice(self, unit_env):
        use_case = await unit_env.get(ToggleVoteUseCase)

        first = await use_case.execute(ToggleVoteRequest(**_key()))
        second = await use_case.execute(ToggleVoteRequest(**_key()))

        assert first.voted is True
        assert first.vote_id is not None
        assert second.voted is False
        assert second.vote_id is None
