"""In-memory ownership repository for testing."""

from collections import defaultdict

from ballot.domain.model import KarmaSource
from ballot.domain.repository.ownership import OwnershipRepository


class InMemoryOwnershipRepository(OwnershipRepository):
    """Keeps owned items as rows of ``{"id": ..., <foreign_key>: ...}`` per table."""

    def __init__(self) -> None:
        self._rows: dict[str, list[dict[str, str]]] = defaultdict(list)

    def add(self, table: str, item_id: object, **columns: object) -> None:
        """Register an owned item, e.g. ``add("posts", 1, author_id=7)``."""
        row = {"id": str(item_id)}
        row.update({name: str(value) for name, value in columns.items()})
        self._rows[table].append(row)

    async def find_owned_ids(self, source: KarmaSource, owner_id: str) -> list[str]:
        return [
            row["id"]
            for row in self._rows.get(source.owner_table, [])
            if row.get(source.foreign_key) == owner_id
        ]
