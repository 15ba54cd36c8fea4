"""Karma domain service.

Karma is the reputation a voter earns from votes received on the content it
owns. Each voter type declares karma sources (owned collections with
weights, optional scope filter and optional time decay); source values add
up and the total is rounded once.
"""

import math
from datetime import datetime, timedelta
from typing import Sequence

import logfire

from ballot.config import KarmaSettings
from ballot.domain.model import (
    KarmaBreakdown,
    KarmaDecay,
    KarmaLevel,
    KarmaProgress,
    KarmaSource,
    Vote,
)
from ballot.domain.model.common import utcnow
from ballot.domain.repository import (
    KarmaCacheRepository,
    OwnershipRepository,
    VoteRepository,
)
from ballot.domain.value import EntityRef

from .base import Service

SECONDS_PER_DAY = 86400


def round_karma(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class KarmaService(Service):
    """Domain service for karma computation and levels."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        ownership_repository: OwnershipRepository,
        karma_cache_repository: KarmaCacheRepository,
        settings: KarmaSettings,
    ) -> None:
        """Initialize karma service.

        Args:
            vote_repository: Vote ledger
            ownership_repository: Resolves owned voteables per source
            karma_cache_repository: Last computed karma per voter
            settings: Karma sources and levels per voter type
        """
        self.vote_repository = vote_repository
        self.ownership_repository = ownership_repository
        self.karma_cache_repository = karma_cache_repository
        self.settings = settings

    def sources_for(self, voter: EntityRef) -> list[KarmaSource]:
        return self.settings.sources.get(voter.type, [])

    def levels_for(self, voter: EntityRef) -> list[KarmaLevel]:
        return sorted(
            self.settings.levels.get(voter.type, []), key=lambda level: level.threshold
        )

    async def karma(
        self,
        voter: EntityRef,
        force_recompute: bool = False,
        now: datetime | None = None,
    ) -> int:
        """Total karma of a voter.

        A cached value is returned as-is unless ``force_recompute`` is set;
        a forced computation refreshes the cache.

        Args:
            voter: The voter
            force_recompute: Ignore and refresh the cached value
            now: Reference time for decay

        Returns:
            Karma rounded to the nearest integer
        """
        sources = self.sources_for(voter)
        if not sources:
            return 0

        if not force_recompute:
            cached = await self.karma_cache_repository.get(voter)
            if cached is not None:
                return cached

        with logfire.span("karma_service.karma", voter=str(voter)):
            now = now or utcnow()
            total = 0.0
            for source in sources:
                total += await self._source_value(voter, source, now=now)
            karma = round_karma(total)

            if force_recompute:
                await self.karma_cache_repository.store(voter, karma)
                logfire.info("Karma recomputed", voter=str(voter), karma=karma)
            return karma

    async def recompute_karma(self, voter: EntityRef, now: datetime | None = None) -> int:
        """Recompute karma from the ledger and refresh the cache."""
        return await self.karma(voter, force_recompute=True, now=now)

    async def karma_for(
        self, voter: EntityRef, source_name: str, now: datetime | None = None
    ) -> int:
        """Karma from a single source; 0 for an unknown source."""
        source = next(
            (s for s in self.sources_for(voter) if s.name == source_name), None
        )
        if source is None:
            return 0
        return round_karma(await self._source_value(voter, source, now=now or utcnow()))

    async def karma_breakdown(
        self, voter: EntityRef, now: datetime | None = None
    ) -> list[KarmaBreakdown]:
        """Per-source karma, with the value restricted to recent votes."""
        now = now or utcnow()
        since = now - timedelta(days=self.settings.recent_days)
        breakdown = []
        for source in self.sources_for(voter):
            value = await self._source_value(voter, source, now=now)
            recent = await self._source_value(voter, source, now=now, since=since)
            breakdown.append(
                KarmaBreakdown(
                    source=source.name,
                    value=round_karma(value),
                    recent_value=round_karma(recent),
                )
            )
        return breakdown

    async def recent_karma(
        self, voter: EntityRef, days: int | None = None, now: datetime | None = None
    ) -> int:
        """Karma from votes cast in the last ``days`` days."""
        now = now or utcnow()
        days = self.settings.recent_days if days is None else days
        since = now - timedelta(days=days)
        total = 0.0
        for source in self.sources_for(voter):
            total += await self._source_value(voter, source, now=now, since=since)
        return round_karma(total)

    async def karma_level(self, voter: EntityRef) -> str:
        """Label of the highest level whose threshold the voter's karma reaches."""
        level = self._level_at(self.levels_for(voter), await self.karma(voter))
        return level.label if level else self.settings.unknown_level

    async def karma_progress(self, voter: EntityRef) -> KarmaProgress:
        """Progress from the current level towards the next one."""
        levels = self.levels_for(voter)
        karma = await self.karma(voter)
        current = self._level_at(levels, karma)
        following = [level for level in levels if level.threshold > karma]
        next_level = following[0] if following else None

        current_label = current.label if current else self.settings.unknown_level
        if next_level is None:
            return KarmaProgress(
                current_level=current_label,
                next_level=None,
                progress_percent=100.0,
                karma_needed=0,
            )

        floor = current.threshold if current else 0
        span = next_level.threshold - floor
        progress = max((karma - floor) / span * 100, 0.0)
        return KarmaProgress(
            current_level=current_label,
            next_level=next_level.label,
            progress_percent=round(progress, 1),
            karma_needed=next_level.threshold - karma,
        )

    async def has_karma_level(self, voter: EntityRef, label: str) -> bool:
        """Whether the voter's karma reaches the threshold of a level."""
        level = next((lv for lv in self.levels_for(voter) if lv.label == label), None)
        if level is None:
            return False
        return await self.karma(voter) >= level.threshold

    async def rank_by_karma(
        self, voters: Sequence[EntityRef]
    ) -> list[tuple[EntityRef, int]]:
        """Voters with their karma, highest first."""
        scored = [(voter, await self.karma(voter)) for voter in voters]
        return sorted(scored, key=lambda pair: pair[1], reverse=True)

    @staticmethod
    def _level_at(levels: list[KarmaLevel], karma: int) -> KarmaLevel | None:
        reached = [level for level in levels if level.threshold <= karma]
        return reached[-1] if reached else None

    async def _source_value(
        self,
        voter: EntityRef,
        source: KarmaSource,
        now: datetime,
        since: datetime | None = None,
    ) -> float:
        owned_ids = await self.ownership_repository.find_owned_ids(source, voter.id)
        if not owned_ids:
            return 0.0

        if source.decay is None:
            tally = await self.vote_repository.tally_by_voteables(
                source.voteable_type, owned_ids, scope=source.scope, since=since
            )
            return (
                tally.positive_count * source.positive_weight
                - tally.negative_count * source.negative_weight
            )

        # Decay needs every vote's age, counters cannot help here
        votes = await self.vote_repository.find_by_voteables(
            source.voteable_type, owned_ids, scope=source.scope, since=since
        )
        return sum(
            self._decayed_contribution(vote, source, source.decay, now)
            for vote in votes
        )

    @staticmethod
    def _decayed_contribution(
        vote: Vote, source: KarmaSource, decay: KarmaDecay, now: datetime
    ) -> float:
        if vote.is_up:
            weight = source.positive_weight
        elif vote.is_down:
            weight = -source.negative_weight
        else:
            return 0.0

        age_days = max((now - vote.created_at).total_seconds(), 0) / SECONDS_PER_DAY
        factor = max(2 ** (-age_days / decay.half_life_days), decay.floor)
        return weight * factor
