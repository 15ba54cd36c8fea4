"""Vote event broadcast adapters.

Events are addressed to a stream per voteable (and scope), named
``ballot:<type>:<id>`` or ``ballot:<type>:<id>:<scope>``. Subscribers of a
stream receive the post-mutation snapshot with every event.
"""

import logfire

from ballot.adapter.error import PublishError
from ballot.domain.model import VoteEvent
from ballot.domain.service.publisher import VoteEventPublisher
from ballot.domain.value import EntityRef
from ballot.util.logging import get_logger

logger = get_logger(__name__)

STREAM_PREFIX = "ballot"


def stream_name(voteable: EntityRef, scope: str | None = None) -> str:
    """Stream name for a voteable and optional scope."""
    name = f"{STREAM_PREFIX}:{voteable.type}:{voteable.id}"
    return f"{name}:{scope}" if scope else name


class LogfireVoteEventPublisher(VoteEventPublisher):
    """Emits every vote event as a structured Logfire record.

    Downstream consumers (log pipelines, websocket relays) subscribe by
    stream name.
    """

    async def publish(self, event: VoteEvent) -> None:
        stream = stream_name(event.vote.voteable, event.vote.scope)
        try:
            payload = event.snapshot.model_dump(mode="json")
        except ValueError as e:
            raise PublishError(f"Cannot serialize vote event for {stream}") from e

        logfire.info(
            "Vote event",
            stream=stream,
            action=event.action.value,
            vote_id=str(event.vote.id),
            voter=str(event.vote.voter),
            value=event.vote.value,
            snapshot=payload,
        )
        logger.debug(f"Published {event.action.value} on {stream}")


class RecordingVoteEventPublisher(VoteEventPublisher):
    """Mock publisher for development and testing; keeps events in memory."""

    def __init__(self) -> None:
        self.events: list[VoteEvent] = []

    async def publish(self, event: VoteEvent) -> None:
        self.events.append(event)

    def for_stream(self, stream: str) -> list[VoteEvent]:
        """Events published on one stream, oldest first."""
        return [
            event
            for event in self.events
            if stream_name(event.vote.voteable, event.vote.scope) == stream
        ]

    def clear(self) -> None:
        self.events.clear()
