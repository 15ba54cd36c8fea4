"""initial_schema

Create the ballot schema:
- Votes (the ledger; signed values, polymorphic voter and voteable, optional scope)
- Vote counters (counter cache per voteable and scope)
- Karma cache (last computed karma per voter)

Revision ID: 3c1f0b7d9a2e
Revises:
Create Date: 2026-10-17 09:12:44.218305

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0b7d9a2e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # VOTES
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column("voter_type", sa.String(100), nullable=False),
        sa.Column("voter_id", sa.String(255), nullable=False),
        sa.Column("voteable_type", sa.String(100), nullable=False),
        sa.Column("voteable_id", sa.String(255), nullable=False),
        sa.Column("value", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("scope", sa.String(100), nullable=True),
        sa.Column(
            "is_unique", sa.Boolean(), nullable=False, server_default=sa.text("true")
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )

    # NULLS NOT DISTINCT (PostgreSQL 15+) makes the unscoped partition unique too.
    # Rows inserted with duplicate votes allowed carry is_unique = false.
    op.execute("""
        CREATE UNIQUE INDEX uq_votes_key
        ON votes (voter_type, voter_id, voteable_type, voteable_id, scope)
        NULLS NOT DISTINCT
        WHERE is_unique
    """)
    op.create_index(
        "idx_votes_voteable",
        "votes",
        ["voteable_type", "voteable_id", "scope", "created_at"],
    )
    op.create_index("idx_votes_voter", "votes", ["voter_type", "voter_id"])

    # ========================================================================
    # VOTE COUNTERS
    # ========================================================================
    op.create_table(
        "vote_counters",
        sa.Column("voteable_type", sa.String(100), nullable=False),
        sa.Column("voteable_id", sa.String(255), nullable=False),
        sa.Column("scope", sa.String(100), nullable=False, server_default=""),
        sa.Column("votes_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("votes_total", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("upvotes_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "downvotes_count", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.PrimaryKeyConstraint("voteable_type", "voteable_id", "scope"),
    )

    # ========================================================================
    # KARMA CACHE
    # ========================================================================
    op.create_table(
        "karma_cache",
        sa.Column("voter_type", sa.String(100), nullable=False),
        sa.Column("voter_id", sa.String(255), nullable=False),
        sa.Column("karma", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "computed_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("voter_type", "voter_id"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("karma_cache")
    op.drop_table("vote_counters")
    op.drop_index("idx_votes_voter", table_name="votes")
    op.drop_index("idx_votes_voteable", table_name="votes")
    op.execute("DROP INDEX IF EXISTS uq_votes_key")
    op.drop_table("votes")
