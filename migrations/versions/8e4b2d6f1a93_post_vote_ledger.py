"""post vote ledger

Revision ID: 8e4b2d6f1a93
Revises: 3c1f0a9d2b7e
Create Date: 2026-10-19 14:03:21.087455

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "8e4b2d6f1a93"
down_revision: Union[str, Sequence[str], None] = "3c1f0a9d2b7e"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_ID = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    """Create the per-identity post vote table."""
    op.create_table(
        "post_vote",
        sa.Column("post_id", _ID, nullable=False),
        sa.Column("voter_id", sa.String(length=128), nullable=False),
        sa.Column("direction", sa.SmallInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("direction IN (1, -1)", name="ck_post_vote_direction"),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id", "voter_id"),
    )
    op.create_index("ix_post_vote_post_id", "post_vote", ["post_id"], unique=False)


def downgrade() -> None:
    """Drop the post vote table."""
    op.drop_index("ix_post_vote_post_id", table_name="post_vote")
    op.drop_table("post_vote")
