"""SQLAlchemy table definitions for ballot.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# VOTES TABLE (the ledger)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("voter_type", String(100), nullable=False),
    Column("voter_id", String(255), nullable=False),
    Column("voteable_type", String(100), nullable=False),
    Column("voteable_id", String(255), nullable=False),
    Column("value", Integer, nullable=False, server_default="1"),
    Column("scope", String(100), nullable=True),  # NULL is its own partition
    # False for rows inserted while duplicate votes are allowed
    Column("is_unique", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# One vote per (voter, voteable, scope) among unique rows; NULL scopes collide too
Index(
    "uq_votes_key",
    votes_table.c.voter_type,
    votes_table.c.voter_id,
    votes_table.c.voteable_type,
    votes_table.c.voteable_id,
    votes_table.c.scope,
    unique=True,
    postgresql_nulls_not_distinct=True,
    postgresql_where=votes_table.c.is_unique,
)
Index(
    "idx_votes_voteable",
    votes_table.c.voteable_type,
    votes_table.c.voteable_id,
    votes_table.c.scope,
    votes_table.c.created_at,
)
Index("idx_votes_voter", votes_table.c.voter_type, votes_table.c.voter_id)

# ============================================================================
# VOTE COUNTERS TABLE (counter cache, one row per voteable and scope)
# ============================================================================
# scope uses '' for the NULL partition so the primary key stays total
vote_counters_table = Table(
    "vote_counters",
    metadata,
    Column("voteable_type", String(100), primary_key=True),
    Column("voteable_id", String(255), primary_key=True),
    Column("scope", String(100), primary_key=True, server_default=""),
    Column("votes_count", Integer, nullable=False, server_default="0"),
    Column("votes_total", BigInteger, nullable=False, server_default="0"),
    Column("upvotes_count", Integer, nullable=False, server_default="0"),
    Column("downvotes_count", Integer, nullable=False, server_default="0"),
)

# ============================================================================
# KARMA CACHE TABLE
# ============================================================================
karma_cache_table = Table(
    "karma_cache",
    metadata,
    Column("voter_type", String(100), primary_key=True),
    Column("voter_id", String(255), primary_key=True),
    Column("karma", Integer, nullable=False, server_default="0"),
    Column(
        "computed_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)
