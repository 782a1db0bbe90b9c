"""
Blog API — Post Route Handlers
================================

What:  HTTP binding of the four BlogApi operations under /posts.
How:   Each handler validates path/query/body (FastAPI + Pydantic), awaits one
       resource operation, and returns its value. Failures raised by the
       resource are rendered by the global exception handlers in main.py.

Route Inventory:
    GET    /posts?page={n}   → list_posts
    GET    /posts/{id}       → get_post
    PUT    /posts/{id}       → create_or_update_post
    POST   /posts/{id}       → create_or_update_post
    DELETE /posts/{id}       → delete_post
"""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, Query

from blog_api.schemas.post import (
    ErrorResponse,
    Post,
    PostSummary,
    PostUpdate,
    SuccessResponse,
)
from blog_api.services.post_resource import PostResource, get_post_resource

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])

PostId = Annotated[
    str, Path(min_length=1, max_length=255, description="Opaque post identifier")
]


@router.get(
    "",
    response_model=List[PostSummary],
    summary="List posts",
    description=(
        "Returns one page of post summaries, newest first. An empty array means "
        "there are no posts or the page is past the end."
    ),
)
async def list_posts(
    page: int = Query(default=0, ge=0, description="0-based page index"),
    resource: PostResource = Depends(get_post_resource),
) -> List[PostSummary]:
    return await resource.list_posts(page)


@router.get(
    "/{post_id}",
    response_model=Post,
    responses={404: {"description": "Post not found", "model": ErrorResponse}},
    summary="Get a single post by ID",
)
async def get_post(
    post_id: PostId,
    resource: PostResource = Depends(get_post_resource),
) -> Post:
    return await resource.get_post(post_id)


_WRITE_ROUTE = dict(
    response_model=SuccessResponse,
    responses={405: {"description": "Writes are disabled", "model": ErrorResponse}},
    summary="Create or update a post",
    description=(
        "Creates the post if it does not exist, otherwise replaces its title, "
        "content and author. Rejected with 405 while writes are disabled."
    ),
)


@router.put("/{post_id}", **_WRITE_ROUTE)
@router.post("/{post_id}", **_WRITE_ROUTE)
async def create_or_update_post(
    post_id: PostId,
    update: PostUpdate,
    resource: PostResource = Depends(get_post_resource),
) -> SuccessResponse:
    return await resource.create_or_update_post(post_id, update)


@router.delete(
    "/{post_id}",
    response_model=SuccessResponse,
    responses={404: {"description": "Post not found", "model": ErrorResponse}},
    summary="Delete a post",
)
async def delete_post(
    post_id: PostId,
    resource: PostResource = Depends(get_post_resource),
) -> SuccessResponse:
    return await resource.delete_post(post_id)
