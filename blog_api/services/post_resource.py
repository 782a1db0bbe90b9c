"""
Blog API — Post Resource (Handler Core)
=========================================

What:  Maps the four /posts operations onto the post store and the current
       access policy.
How:   Each operation is a coroutine returning one value or raising one of
       the application exceptions; routes await it and the global handlers
       in main.py turn failures into responses.
Who:   Called by routes/posts.py through the get_post_resource dependency.

Access Policy (write gate):
    writes_enabled=False (default):
        create_or_update_post → NotAllowedError for every input
        delete_post           → NotFoundError for every input
    writes_enabled=True:
        both operations go to the store

    The gate is checked before the store is touched. The two rejected
    outcomes are kept distinct until a product decision merges them.

PostResource keeps no mutable state of its own. Per-id write serialization
and atomicity are the store's job (see services/locking.py).
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from fastapi import Request

from blog_api.config import Settings, settings
from blog_api.exceptions import NotAllowedError, NotFoundError
from blog_api.schemas.post import Post, PostSummary, PostUpdate, SuccessResponse
from blog_api.services.memory_store import InMemoryPostStore
from blog_api.services.post_store import NullPostStore, PostStore

logger = logging.getLogger(__name__)

# Methods still served on /posts/{id} while writes are disabled
READ_METHODS = ("GET",)


class BlogApi(ABC):
    """
    Capability set of the /posts resource: one coroutine per operation.

    Any implementation can be mounted behind routes/posts.py.
    """

    @abstractmethod
    async def list_posts(self, page: int) -> List[PostSummary]:
        """Return the summaries on `page`; never fails for a valid page."""
        ...

    @abstractmethod
    async def get_post(self, post_id: str) -> Post:
        """Return the post, or raise NotFoundError."""
        ...

    @abstractmethod
    async def create_or_update_post(self, post_id: str, update: PostUpdate) -> SuccessResponse:
        """Create or replace the post; raise NotAllowedError when writes are disabled."""
        ...

    @abstractmethod
    async def delete_post(self, post_id: str) -> SuccessResponse:
        """Remove the post; raise NotFoundError when it is absent or writes are disabled."""
        ...


class PostResource(BlogApi):
    """
    Default BlogApi implementation over a PostStore.

    Args:
        store:          Persistence collaborator.
        writes_enabled: State of the write policy gate.
    """

    def __init__(self, store: PostStore, writes_enabled: bool = False):
        self.store = store
        self.writes_enabled = writes_enabled

    async def list_posts(self, page: int) -> List[PostSummary]:
        posts = await self.store.list(page)
        logger.debug("Listed %d posts on page %d", len(posts), page)
        return posts

    async def get_post(self, post_id: str) -> Post:
        post = await self.store.find(post_id)
        if post is None:
            raise NotFoundError(resource="post", resource_id=post_id)
        return post

    async def create_or_update_post(self, post_id: str, update: PostUpdate) -> SuccessResponse:
        if not self.writes_enabled:
            logger.info("Rejected create_or_update_post for %s: writes disabled", post_id)
            raise NotAllowedError(
                operation="create_or_update_post",
                allowed_methods=READ_METHODS,
                context={"post_id": post_id},
            )

        await self.store.upsert(post_id, update)
        return SuccessResponse(message=f"Post '{post_id}' saved")

    async def delete_post(self, post_id: str) -> SuccessResponse:
        if not self.writes_enabled:
            logger.info("Rejected delete_post for %s: writes disabled", post_id)
            raise NotFoundError(
                resource="post",
                resource_id=post_id,
                context={"writes_enabled": False},
            )

        removed = await self.store.remove(post_id)
        if not removed:
            raise NotFoundError(resource="post", resource_id=post_id)
        return SuccessResponse(message=f"Post '{post_id}' deleted")


# ══════════════════════════════════════════════════════════════════════════
# Assembly
# ══════════════════════════════════════════════════════════════════════════

def build_post_store(app_settings: Settings = settings) -> PostStore:
    """Construct the store named by STORE_BACKEND."""
    backend = app_settings.store_backend
    if backend == "memory":
        return InMemoryPostStore(page_size=app_settings.page_size)
    if backend == "database":
        # Imported here so the none/memory backends never load a DB driver
        from blog_api.database import create_engine_from_settings, create_session_factory
        from blog_api.services.sql_store import SqlAlchemyPostStore

        engine = create_engine_from_settings(app_settings)
        return SqlAlchemyPostStore(
            create_session_factory(engine),
            page_size=app_settings.page_size,
            engine=engine,
        )
    return NullPostStore()


def build_post_resource(app_settings: Settings = settings) -> PostResource:
    """Construct the resource from settings."""
    store = build_post_store(app_settings)
    logger.info(
        "Post resource ready (store=%s, writes_enabled=%s)",
        store.backend_name,
        app_settings.writes_enabled,
    )
    return PostResource(store=store, writes_enabled=app_settings.writes_enabled)


def get_post_resource(request: Request) -> PostResource:
    """FastAPI dependency: the resource attached to the running app."""
    return request.app.state.post_resource
