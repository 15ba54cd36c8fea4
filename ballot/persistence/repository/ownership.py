"""PostgreSQL ownership lookup over the host application's tables."""

from typing import List

from sqlalchemy import String, cast, column, select, table
from sqlalchemy.ext.asyncio import AsyncSession

from ballot.domain.model import KarmaSource
from ballot.domain.repository import OwnershipRepository


class PostgresOwnershipRepository(OwnershipRepository):
    """Reads owned item ids from ``source.owner_table`` by foreign key.

    Ids are compared as text so integer and UUID keys both work.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_owned_ids(self, source: KarmaSource, owner_id: str) -> List[str]:
        owned = table(source.owner_table, column("id"), column(source.foreign_key))
        stmt = select(cast(owned.c.id, String)).where(
            cast(owned.c[source.foreign_key], String) == owner_id
        )
        result = await self.session.execute(stmt)
        return [row[0] for row in result.fetchall()]
