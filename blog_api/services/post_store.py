"""
Blog API — Abstract Post Store Interface
==========================================

What:  Abstract base class defining the persistence contract behind
       PostResource, plus the null store used while no backend exists.
How:   Concrete stores inherit from PostStore and implement its coroutines.
Who:   Called by PostResource; built by build_post_store() from settings.

Contract:
    list(page)               → posts on that page, possibly empty
    find(post_id)            → the post, or None when absent
    upsert(post_id, update)  → the stored post after create-or-replace
    remove(post_id)          → True if a post was removed, False if absent

    Absence is never an exception at this layer. Any other failure is raised
    as StoreError. upsert/remove on the same id are serialized by the store,
    and each either commits fully or has no effect.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from blog_api.exceptions import StoreError
from blog_api.schemas.post import Post, PostSummary, PostUpdate

logger = logging.getLogger(__name__)


class PostStore(ABC):
    """
    Abstract persistence interface for blog posts.

    Implementations:
        - NullPostStore: no backend (default)
        - InMemoryPostStore: process-local dict
        - SqlAlchemyPostStore: async SQLAlchemy `posts` table
    """

    #: Name reported by the health endpoint
    backend_name: str = "abstract"

    @abstractmethod
    async def list(self, page: int) -> List[PostSummary]:
        """
        Return the summaries on listing page `page` (0-based).

        Ordering is newest created_at first, ties broken by id. A page past
        the end returns an empty list.
        """
        ...

    @abstractmethod
    async def find(self, post_id: str) -> Optional[Post]:
        """Return the post with `post_id`, or None."""
        ...

    @abstractmethod
    async def upsert(self, post_id: str, update: PostUpdate) -> Post:
        """
        Create the post if absent, otherwise replace its content fields.

        created_at is preserved on replace. updated_at changes only when a
        content field actually changes, so repeating an identical update
        leaves the stored post unchanged.
        """
        ...

    @abstractmethod
    async def remove(self, post_id: str) -> bool:
        """Delete the post; return whether one existed."""
        ...

    async def health_check(self) -> bool:
        """Lightweight reachability probe for the health endpoint."""
        return True

    async def close(self) -> None:
        """Release backend resources on shutdown."""
        return None


class NullPostStore(PostStore):
    """
    Store with no backend: nothing is ever present and nothing can be written.

    This is what the resource runs against until persistence is configured.
    """

    backend_name = "none"

    async def list(self, page: int) -> List[PostSummary]:
        return []

    async def find(self, post_id: str) -> Optional[Post]:
        return None

    async def upsert(self, post_id: str, update: PostUpdate) -> Post:
        logger.error("Write for post %s reached a store with no backend", post_id)
        raise StoreError(
            message="No post store is configured.",
            context={"post_id": post_id, "backend": self.backend_name},
        )

    async def remove(self, post_id: str) -> bool:
        return False


def page_bounds(page: int, page_size: int) -> tuple:
    """Return (offset, limit) for a 0-based page index."""
    if page < 0:
        raise ValueError(f"page must be >= 0, got {page}")
    return page * page_size, page_size
