"""
Blog API — Post SQLAlchemy Model
==================================

What:  ORM model for the `posts` table.
Who:   Used by SqlAlchemyPostStore and by Alembic for schema management.

Table Design:
    - id: the client-chosen opaque string from the URL, primary key
    - title / content / author: content fields replaced on every update
    - created_at: set on insert, never changed
    - updated_at: set on insert and whenever a content field changes

Index on (created_at DESC, id) matches the listing order.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from blog_api.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PostRecord(Base):
    """A stored blog post row."""

    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        comment="Opaque post identifier chosen by the client",
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Post title",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Post body",
    )

    author: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default=None,
        comment="Display name of the author",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        comment="When this post was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        comment="When this post was last changed (UTC)",
    )

    __table_args__ = (
        Index("idx_posts_created_at_id", created_at.desc(), id),
    )

    def __repr__(self) -> str:
        return f"<PostRecord(id='{self.id}', title='{self.title}', created_at='{self.created_at}')>"
