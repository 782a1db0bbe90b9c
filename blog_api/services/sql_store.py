"""
Blog API — SQLAlchemy Post Store
==================================

What:  PostStore backed by the `posts` table through async SQLAlchemy.
How:   Every call opens its own session. Writes run inside one transaction
       (`session.begin()`), which commits on exit and rolls back on any
       exception, cancellation included, so a write either fully commits or
       has no effect. Per-id writes are also serialized in-process with
       KeyedLock.
Who:   Built by build_post_store() when STORE_BACKEND=database.

Error Handling:
    SQLAlchemy errors are logged with context and re-raised as StoreError.
    Missing rows are not errors here: find() returns None, remove() False.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy import asc, desc, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from blog_api.exceptions import StoreError
from blog_api.models.post import PostRecord
from blog_api.schemas.post import Post, PostSummary, PostUpdate
from blog_api.services.locking import KeyedLock
from blog_api.services.post_store import PostStore, page_bounds

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SqlAlchemyPostStore(PostStore):
    """
    Relational post store.

    Args:
        session_factory: async_sessionmaker bound to the target engine.
        page_size:       Posts per listing page.
        clock:           Timestamp source, injectable for deterministic tests.
        engine:          Engine owned by this store and disposed by close().
                         None when the caller manages the engine itself.
    """

    backend_name = "database"

    def __init__(
        self,
        session_factory: async_sessionmaker,
        page_size: int = 20,
        clock: Callable[[], datetime] = _utcnow,
        engine: Optional[AsyncEngine] = None,
    ):
        self._session_factory = session_factory
        self.page_size = page_size
        self._clock = clock
        self._locks = KeyedLock()
        self._engine = engine

    async def list(self, page: int) -> List[PostSummary]:
        offset, limit = page_bounds(page, self.page_size)
        query = (
            select(PostRecord)
            .order_by(desc(PostRecord.created_at), asc(PostRecord.id))
            .offset(offset)
            .limit(limit)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                rows = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing posts (page=%d): %s", page, str(e))
            raise StoreError(
                message="Could not retrieve posts. Please try again.",
                context={"page": page, "error_type": type(e).__name__},
            ) from e
        return [PostSummary.model_validate(row) for row in rows]

    async def find(self, post_id: str) -> Optional[Post]:
        try:
            async with self._session_factory() as session:
                row = await session.get(PostRecord, post_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching post %s: %s", post_id, str(e))
            raise StoreError(
                message="Could not retrieve the post. Please try again.",
                context={"post_id": post_id, "error_type": type(e).__name__},
            ) from e
        return Post.model_validate(row) if row is not None else None

    async def upsert(self, post_id: str, update: PostUpdate) -> Post:
        async with self._locks.hold(post_id):
            try:
                async with self._session_factory() as session:
                    async with session.begin():
                        row = await session.get(PostRecord, post_id)
                        if row is None:
                            now = self._clock()
                            row = PostRecord(
                                id=post_id,
                                title=update.title,
                                content=update.content,
                                author=update.author,
                                created_at=now,
                                updated_at=now,
                            )
                            session.add(row)
                            logger.info("Creating post %s", post_id)
                        elif (row.title, row.content, row.author) != (
                            update.title, update.content, update.author
                        ):
                            row.title = update.title
                            row.content = update.content
                            row.author = update.author
                            row.updated_at = self._clock()
                            logger.info("Updating post %s", post_id)
            except SQLAlchemyError as e:
                logger.error("Database error writing post %s: %s", post_id, str(e))
                raise StoreError(
                    message="Could not save the post. Please try again.",
                    context={"post_id": post_id, "error_type": type(e).__name__},
                ) from e
        return Post.model_validate(row)

    async def remove(self, post_id: str) -> bool:
        async with self._locks.hold(post_id):
            try:
                async with self._session_factory() as session:
                    async with session.begin():
                        row = await session.get(PostRecord, post_id)
                        if row is None:
                            return False
                        await session.delete(row)
            except SQLAlchemyError as e:
                logger.error("Database error removing post %s: %s", post_id, str(e))
                raise StoreError(
                    message="Could not delete the post. Please try again.",
                    context={"post_id": post_id, "error_type": type(e).__name__},
                ) from e
        logger.info("Removed post %s", post_id)
        return True

    async def health_check(self) -> bool:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.warning("Health check: database unreachable: %s", str(e))
            return False
        return True

    async def close(self) -> None:
        """Release pooled connections of the owned engine, if any."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database engine disposed")
