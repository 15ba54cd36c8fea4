"""PostgreSQL implementation of the karma cache repository."""

from typing import Optional

from sqlalchemy import and_, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from ballot.domain.repository import KarmaCacheRepository
from ballot.domain.value import EntityRef
from ballot.persistence.tables import karma_cache_table


class PostgresKarmaCacheRepository(KarmaCacheRepository):
    """PostgreSQL implementation of KarmaCacheRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, voter: EntityRef) -> Optional[int]:
        stmt = select(karma_cache_table.c.karma).where(
            and_(
                karma_cache_table.c.voter_type == voter.type,
                karma_cache_table.c.voter_id == voter.id,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def store(self, voter: EntityRef, karma: int) -> None:
        stmt = pg_insert(karma_cache_table).values(
            voter_type=voter.type, voter_id=voter.id, karma=karma
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["voter_type", "voter_id"],
            set_={"karma": stmt.excluded.karma, "computed_at": func.now()},
        )
        await self.session.execute(stmt)
        await self.session.flush()
