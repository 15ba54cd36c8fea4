"""Vote aggregate and ranking domain service."""

from datetime import datetime
from typing import Sequence

import logfire

from ballot.config import VotingSettings
from ballot.domain import ranking
from ballot.domain.model import VoteSnapshot, VoteTally
from ballot.domain.model.common import utcnow
from ballot.domain.repository import VoteRepository
from ballot.domain.value import EntityRef, RankingAlgorithm, Voteable, VoteDirection

from .base import Service
from .counter import VoteCounter


class TallyService(Service):
    """Domain service for reading vote aggregates and ranking voteables."""

    def __init__(
        self,
        counter: VoteCounter,
        vote_repository: VoteRepository,
        settings: VotingSettings,
    ) -> None:
        """Initialize tally service.

        Args:
            counter: Counter strategy (cached or live)
            vote_repository: Vote ledger
            settings: Voting settings (default algorithm and gravity)
        """
        self.counter = counter
        self.vote_repository = vote_repository
        self.settings = settings

    async def tally(self, voteable: EntityRef, scope: str | None = None) -> VoteTally:
        return await self.counter.tally(voteable, scope)

    async def votes_for(self, voteable: EntityRef, scope: str | None = None) -> int:
        return (await self.tally(voteable, scope)).positive_count

    async def votes_against(self, voteable: EntityRef, scope: str | None = None) -> int:
        return (await self.tally(voteable, scope)).negative_count

    async def votes_count(self, voteable: EntityRef, scope: str | None = None) -> int:
        return (await self.tally(voteable, scope)).total_count

    async def votes_total(self, voteable: EntityRef, scope: str | None = None) -> int:
        return (await self.tally(voteable, scope)).total_value

    async def plusminus(self, voteable: EntityRef, scope: str | None = None) -> int:
        return (await self.tally(voteable, scope)).plusminus

    async def percent_for(self, voteable: EntityRef, scope: str | None = None) -> float:
        return (await self.tally(voteable, scope)).percent_for

    async def percent_against(
        self, voteable: EntityRef, scope: str | None = None
    ) -> float:
        return (await self.tally(voteable, scope)).percent_against

    async def snapshot(self, voteable: EntityRef, scope: str | None = None) -> VoteSnapshot:
        """Aggregate snapshot of one (voteable, scope), as sent with vote events."""
        tally = await self.tally(voteable, scope)
        return VoteSnapshot(
            voteable_type=voteable.type,
            voteable_id=voteable.id,
            scope=scope,
            votes_for=tally.positive_count,
            votes_against=tally.negative_count,
            votes_total=tally.total_value,
            votes_count=tally.total_count,
            plusminus=tally.plusminus,
            percent_for=tally.percent_for,
            percent_against=tally.percent_against,
            wilson_score=ranking.wilson_score(tally.positive_count, tally.total_count),
        )

    async def wilson_score(
        self,
        voteable: EntityRef,
        confidence: float = 0.95,
        scope: str | None = None,
    ) -> float:
        """Wilson score lower bound of the scope's up/total ratio."""
        tally = await self.tally(voteable, scope)
        return ranking.wilson_score(tally.positive_count, tally.total_count, confidence)

    async def hot_score(self, voteable: Voteable) -> float:
        """Reddit hot score from the net score across all scopes."""
        tally = await self.counter.overall_tally(voteable)
        return ranking.reddit_hot(tally.plusminus, voteable.created_at or utcnow())

    async def hacker_news_score(
        self,
        voteable: Voteable,
        gravity: float | None = None,
        now: datetime | None = None,
    ) -> float:
        """Hacker News score from the net score across all scopes."""
        if gravity is None:
            gravity = self.settings.hot_ranking_gravity
        now = now or utcnow()
        tally = await self.counter.overall_tally(voteable)
        return ranking.hacker_news(
            tally.plusminus, voteable.created_at or now, now=now, gravity=gravity
        )

    async def rank_score(
        self,
        voteable: Voteable,
        algorithm: RankingAlgorithm | None = None,
        now: datetime | None = None,
    ) -> float:
        """Score a voteable with the given (or configured default) algorithm."""
        algorithm = algorithm or self.settings.default_ranking
        if algorithm == RankingAlgorithm.WILSON_SCORE:
            return await self.wilson_score(voteable)
        if algorithm == RankingAlgorithm.REDDIT_HOT:
            return await self.hot_score(voteable)
        if algorithm == RankingAlgorithm.HACKER_NEWS:
            return await self.hacker_news_score(voteable, now=now)
        tally = await self.counter.overall_tally(voteable)
        return ranking.simple(tally.plusminus)

    async def rank(
        self,
        voteables: Sequence[Voteable],
        algorithm: RankingAlgorithm | None = None,
        now: datetime | None = None,
    ) -> list[tuple[Voteable, float]]:
        """Score and sort voteables, best first.

        Ties keep their input order.
        """
        algorithm = algorithm or self.settings.default_ranking
        with logfire.span(
            "tally_service.rank", algorithm=algorithm.value, count=len(voteables)
        ):
            now = now or utcnow()
            scored = [
                (voteable, await self.rank_score(voteable, algorithm, now=now))
                for voteable in voteables
            ]
            return sorted(scored, key=lambda pair: pair[1], reverse=True)

    async def voters(
        self,
        voteable: EntityRef,
        direction: VoteDirection | None = None,
        scope: str | None = None,
    ) -> list[EntityRef]:
        """Distinct voters of an item, optionally only those voting one way."""
        votes = await self.vote_repository.find_by_voteable(voteable, scope)
        seen: dict[tuple[str, str], EntityRef] = {}
        for vote in votes:
            if direction is not None and vote.direction != direction:
                continue
            seen.setdefault(vote.voter.key, vote.voter)
        return list(seen.values())

    async def trending(self, voteable_type: str, since: datetime) -> list[EntityRef]:
        """Items of a type ordered by the number of votes received since a time."""
        counts = await self.vote_repository.count_since(voteable_type, since)
        return [EntityRef(type=voteable_type, id=voteable_id) for voteable_id, _ in counts]
