"""PostgreSQL implementation of Vote repository."""

from datetime import datetime
from typing import Any, List, Optional, Sequence

import logfire
from sqlalchemy import and_, delete, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from ballot.domain.model import Vote, VoteTally
from ballot.domain.repository import VoteRepository
from ballot.domain.value import EntityRef, VoteId, normalize_scope
from ballot.persistence.mappers import row_to_tally, row_to_vote, vote_to_dict
from ballot.persistence.tables import votes_table

# Aggregate columns shared by every tally query
_TALLY_COLUMNS = (
    func.count().label("votes_count"),
    func.coalesce(func.sum(votes_table.c.value), 0).label("votes_total"),
    func.count().filter(votes_table.c.value > 0).label("upvotes_count"),
    func.count().filter(votes_table.c.value < 0).label("downvotes_count"),
)


def _scope_is(scope: str | None) -> ColumnElement[bool]:
    scope = normalize_scope(scope)
    if scope is None:
        return votes_table.c.scope.is_(None)
    return votes_table.c.scope == scope


def _voteable_is(voteable: EntityRef) -> ColumnElement[bool]:
    return and_(
        votes_table.c.voteable_type == voteable.type,
        votes_table.c.voteable_id == voteable.id,
    )


def _batch_filter(
    voteable_type: str,
    voteable_ids: Sequence[str],
    scope: str | None,
    since: datetime | None,
) -> list[Any]:
    clauses: list[Any] = [
        votes_table.c.voteable_type == voteable_type,
        votes_table.c.voteable_id.in_(list(voteable_ids)),
    ]
    scope = normalize_scope(scope)
    if scope is not None:
        clauses.append(votes_table.c.scope == scope)
    if since is not None:
        clauses.append(votes_table.c.created_at >= since)
    return clauses


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository.

    Uniqueness of (voter, voteable, scope) is enforced by the partial
    ``uq_votes_key`` index over rows with ``is_unique`` set. Votes saved with
    ``enforce_unique=False`` are stored with ``is_unique = false`` and never
    collide.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID."""
        stmt = select(votes_table).where(votes_table.c.id == vote_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_key(
        self, voter: EntityRef, voteable: EntityRef, scope: str | None
    ) -> Optional[Vote]:
        """Find the earliest vote on a (voter, voteable, scope) key."""
        stmt = (
            select(votes_table)
            .where(
                and_(
                    votes_table.c.voter_type == voter.type,
                    votes_table.c.voter_id == voter.id,
                    _voteable_is(voteable),
                    _scope_is(scope),
                )
            )
            .order_by(votes_table.c.created_at)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_voter(self, voter: EntityRef) -> List[Vote]:
        """Find all votes by a voter."""
        stmt = (
            select(votes_table)
            .where(
                and_(
                    votes_table.c.voter_type == voter.type,
                    votes_table.c.voter_id == voter.id,
                )
            )
            .order_by(votes_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_voteable(
        self, voteable: EntityRef, scope: str | None
    ) -> List[Vote]:
        """Find all votes on an item within a scope."""
        stmt = (
            select(votes_table)
            .where(and_(_voteable_is(voteable), _scope_is(scope)))
            .order_by(votes_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_voteables(
        self,
        voteable_type: str,
        voteable_ids: Sequence[str],
        scope: str | None = None,
        since: datetime | None = None,
    ) -> List[Vote]:
        """Find votes on several items (batch query)."""
        if not voteable_ids:
            return []

        stmt = select(votes_table).where(
            and_(*_batch_filter(voteable_type, voteable_ids, scope, since))
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def tally(self, voteable: EntityRef, scope: str | None) -> VoteTally:
        stmt = select(*_TALLY_COLUMNS).where(
            and_(_voteable_is(voteable), _scope_is(scope))
        )
        result = await self.session.execute(stmt)
        return row_to_tally(result.one()._asdict())

    async def tally_all_scopes(self, voteable: EntityRef) -> VoteTally:
        stmt = select(*_TALLY_COLUMNS).where(_voteable_is(voteable))
        result = await self.session.execute(stmt)
        return row_to_tally(result.one()._asdict())

    async def tally_by_voteables(
        self,
        voteable_type: str,
        voteable_ids: Sequence[str],
        scope: str | None = None,
        since: datetime | None = None,
    ) -> VoteTally:
        if not voteable_ids:
            return VoteTally()

        stmt = select(*_TALLY_COLUMNS).where(
            and_(*_batch_filter(voteable_type, voteable_ids, scope, since))
        )
        result = await self.session.execute(stmt)
        return row_to_tally(result.one()._asdict())

    async def count_since(
        self, voteable_type: str, since: datetime
    ) -> List[tuple[str, int]]:
        """Count recent votes per item, most votes first."""
        vote_count = func.count().label("vote_count")
        stmt = (
            select(votes_table.c.voteable_id, vote_count)
            .where(
                and_(
                    votes_table.c.voteable_type == voteable_type,
                    votes_table.c.created_at >= since,
                )
            )
            .group_by(votes_table.c.voteable_id)
            .order_by(desc(vote_count))
        )
        result = await self.session.execute(stmt)
        return [(row.voteable_id, row.vote_count) for row in result.fetchall()]

    async def save(self, vote: Vote, enforce_unique: bool = True) -> Vote:
        """Save a vote (create).

        The insert runs in a savepoint so a unique violation leaves the
        surrounding transaction usable.
        """
        stmt = insert(votes_table).values(
            **vote_to_dict(vote), is_unique=enforce_unique
        )
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        await self.session.flush()
        return vote

    async def update(self, vote: Vote) -> Vote:
        """Persist a recast vote."""
        stmt = (
            update(votes_table)
            .where(votes_table.c.id == vote.id)
            .values(value=vote.value, updated_at=vote.updated_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            logfire.warn("Recast of missing vote", vote_id=str(vote.id))
        return vote

    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote."""
        stmt = delete(votes_table).where(votes_table.c.id == vote_id)
        await self.session.execute(stmt)
        await self.session.flush()
