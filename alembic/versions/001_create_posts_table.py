"""Create posts table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `posts` table backing SqlAlchemyPostStore.
Rollback: downgrade() drops the table (all posts are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the posts table and its listing index (see blog_api/models/post.py)."""
    op.create_table(
        "posts",
        sa.Column(
            "id",
            sa.String(255),
            nullable=False,
            comment="Opaque post identifier chosen by the client",
        ),
        sa.Column("title", sa.String(255), nullable=False, comment="Post title"),
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            server_default=sa.text("''"),
            comment="Post body",
        ),
        sa.Column("author", sa.String(255), nullable=True, comment="Display name of the author"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this post was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this post was last changed (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Matches the listing order: newest first, ties by id
    op.create_index(
        "idx_posts_created_at_id",
        "posts",
        [sa.text("created_at DESC"), "id"],
    )


def downgrade() -> None:
    op.drop_index("idx_posts_created_at_id", table_name="posts")
    op.drop_table("posts")
