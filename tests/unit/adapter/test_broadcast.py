"""Unit tests for vote event publishers."""

import pytest

from ballot.adapter.broadcast import (
    LogfireVoteEventPublisher,
    RecordingVoteEventPublisher,
    stream_name,
)
from ballot.domain.model import VoteEvent, VoteSnapshot
from ballot.domain.value import VoteAction
from tests.factories import make_vote, post, user


def _event(scope: str | None = None) -> VoteEvent:
    vote = make_vote(user(1), post(9), scope=scope)
    snapshot = VoteSnapshot(
        voteable_type="post",
        voteable_id="9",
        scope=scope,
        votes_for=1,
        votes_against=0,
        votes_total=1,
        votes_count=1,
        plusminus=1,
        percent_for=100.0,
        percent_against=0.0,
        wilson_score=0.206549,
    )
    return VoteEvent(action=VoteAction.CREATED, vote=vote, snapshot=snapshot)


class TestStreamName:
    """Tests for stream_name."""

    def test_unscoped(self):
        assert stream_name(post(9)) == "ballot:post:9"

    def test_scoped(self):
        assert stream_name(post(9), "quality") == "ballot:post:9:quality"


class TestPublishers:
    """Tests for publisher implementations."""

    @pytest.mark.asyncio
    async def test_recording_publisher(self):
        publisher = RecordingVoteEventPublisher()

        await publisher.publish(_event())
        await publisher.publish(_event("quality"))

        assert len(publisher.events) == 2
        assert len(publisher.for_stream("ballot:post:9:quality")) == 1

        publisher.clear()
        assert publisher.events == []

    @pytest.mark.asyncio
    async def test_logfire_publisher_accepts_events(self):
        publisher = LogfireVoteEventPublisher()

        await publisher.publish(_event())
