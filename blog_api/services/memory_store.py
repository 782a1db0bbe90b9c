"""
Blog API — In-Memory Post Store
=================================

What:  Dict-backed PostStore for development and tests.
How:   Posts live in a dict keyed by id. Mutations take the per-id KeyedLock
       and then apply in a single step with no await in between, so a
       cancelled write has either not started or fully committed.

Data is process-local and lost on restart; run a single worker with it.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from blog_api.schemas.post import Post, PostSummary, PostUpdate
from blog_api.services.locking import KeyedLock
from blog_api.services.post_store import PostStore, page_bounds

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryPostStore(PostStore):
    """
    Process-local post store.

    Args:
        page_size: Posts per listing page.
        clock:     Timestamp source, injectable for deterministic tests.
    """

    backend_name = "memory"

    def __init__(self, page_size: int = 20, clock: Callable[[], datetime] = _utcnow):
        self.page_size = page_size
        self._clock = clock
        self._posts: Dict[str, Post] = {}
        self._locks = KeyedLock()

    async def list(self, page: int) -> List[PostSummary]:
        offset, limit = page_bounds(page, self.page_size)
        ordered = sorted(self._posts.values(), key=lambda p: p.id)
        ordered.sort(key=lambda p: p.created_at, reverse=True)
        return [PostSummary.from_post(p) for p in ordered[offset:offset + limit]]

    async def find(self, post_id: str) -> Optional[Post]:
        return self._posts.get(post_id)

    async def upsert(self, post_id: str, update: PostUpdate) -> Post:
        async with self._locks.hold(post_id):
            existing = self._posts.get(post_id)
            if existing is None:
                now = self._clock()
                post = Post(
                    id=post_id,
                    title=update.title,
                    content=update.content,
                    author=update.author,
                    created_at=now,
                    updated_at=now,
                )
                logger.info("Created post %s", post_id)
            elif _same_content(existing, update):
                return existing
            else:
                post = existing.model_copy(
                    update={
                        "title": update.title,
                        "content": update.content,
                        "author": update.author,
                        "updated_at": self._clock(),
                    }
                )
                logger.info("Updated post %s", post_id)
            self._posts[post_id] = post
            return post

    async def remove(self, post_id: str) -> bool:
        async with self._locks.hold(post_id):
            removed = self._posts.pop(post_id, None) is not None
        if removed:
            logger.info("Removed post %s", post_id)
        return removed

    def __len__(self) -> int:
        return len(self._posts)


def _same_content(post: Post, update: PostUpdate) -> bool:
    return (
        post.title == update.title
        and post.content == update.content
        and post.author == update.author
    )
