"""PostgreSQL implementation of the counter cache repository."""

from typing import Optional

from sqlalchemy import and_, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from ballot.domain.model import TallyDelta, VoteTally
from ballot.domain.repository import CounterRepository
from ballot.domain.value import EntityRef
from ballot.persistence.mappers import row_to_tally, scope_to_column
from ballot.persistence.tables import vote_counters_table

_KEY_COLUMNS = ["voteable_type", "voteable_id", "scope"]


class PostgresCounterRepository(CounterRepository):
    """Counter rows updated with single-statement upserts.

    ``apply`` never reads before writing: concurrent mutations on the same
    voteable serialize on the row lock taken by ``ON CONFLICT DO UPDATE``.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def get(self, voteable: EntityRef, scope: str | None) -> Optional[VoteTally]:
        stmt = select(vote_counters_table).where(
            and_(
                vote_counters_table.c.voteable_type == voteable.type,
                vote_counters_table.c.voteable_id == voteable.id,
                vote_counters_table.c.scope == scope_to_column(scope),
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tally(row._asdict()) if row else None

    async def get_all_scopes(self, voteable: EntityRef) -> Optional[VoteTally]:
        c = vote_counters_table.c
        stmt = select(
            func.count().label("counter_rows"),
            func.sum(c.votes_count).label("votes_count"),
            func.sum(c.votes_total).label("votes_total"),
            func.sum(c.upvotes_count).label("upvotes_count"),
            func.sum(c.downvotes_count).label("downvotes_count"),
        ).where(and_(c.voteable_type == voteable.type, c.voteable_id == voteable.id))
        result = await self.session.execute(stmt)
        row = result.one()
        if row.counter_rows == 0:
            return None
        return row_to_tally(row._asdict())

    async def apply(
        self, voteable: EntityRef, scope: str | None, delta: TallyDelta
    ) -> None:
        c = vote_counters_table.c
        stmt = pg_insert(vote_counters_table).values(
            voteable_type=voteable.type,
            voteable_id=voteable.id,
            scope=scope_to_column(scope),
            votes_count=delta.count,
            votes_total=delta.total,
            upvotes_count=delta.up,
            downvotes_count=delta.down,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=_KEY_COLUMNS,
            set_={
                "votes_count": c.votes_count + stmt.excluded.votes_count,
                "votes_total": c.votes_total + stmt.excluded.votes_total,
                "upvotes_count": c.upvotes_count + stmt.excluded.upvotes_count,
                "downvotes_count": c.downvotes_count + stmt.excluded.downvotes_count,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def seed(
        self,
        voteable: EntityRef,
        scope: str | None,
        tally: VoteTally,
        delta: TallyDelta | None = None,
    ) -> None:
        c = vote_counters_table.c
        stmt = pg_insert(vote_counters_table).values(
            voteable_type=voteable.type,
            voteable_id=voteable.id,
            scope=scope_to_column(scope),
            votes_count=tally.total_count,
            votes_total=tally.total_value,
            upvotes_count=tally.positive_count,
            downvotes_count=tally.negative_count,
        )
        if delta is None:
            stmt = stmt.on_conflict_do_nothing(index_elements=_KEY_COLUMNS)
        else:
            stmt = stmt.on_conflict_do_update(
                index_elements=_KEY_COLUMNS,
                set_={
                    "votes_count": c.votes_count + delta.count,
                    "votes_total": c.votes_total + delta.total,
                    "upvotes_count": c.upvotes_count + delta.up,
                    "downvotes_count": c.downvotes_count + delta.down,
                },
            )
        await self.session.execute(stmt)
        await self.session.flush()

    async def reset(
        self, voteable: EntityRef, scope: str | None, tally: VoteTally
    ) -> None:
        stmt = pg_insert(vote_counters_table).values(
            voteable_type=voteable.type,
            voteable_id=voteable.id,
            scope=scope_to_column(scope),
            votes_count=tally.total_count,
            votes_total=tally.total_value,
            upvotes_count=tally.positive_count,
            downvotes_count=tally.negative_count,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=_KEY_COLUMNS,
            set_={
                "votes_count": stmt.excluded.votes_count,
                "votes_total": stmt.excluded.votes_total,
                "upvotes_count": stmt.excluded.upvotes_count,
                "downvotes_count": stmt.excluded.downvotes_count,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
