"""
Blog API — Health Check Route
===============================

What:  Health endpoint for container probes and load balancers.
How:   Asks the configured store for a lightweight reachability check.

Status levels:
    - healthy:   store reachable (HTTP 200)
    - unhealthy: store unreachable (HTTP 503)

The null store always reports available: having no backend is the
configured state, not a fault.
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from blog_api import __version__
from blog_api.schemas.post import HealthResponse
from blog_api.services.post_resource import PostResource, get_post_resource

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    resource: PostResource = Depends(get_post_resource),
) -> HealthResponse:
    store_ok = await resource.store.health_check()
    if not store_ok:
        response.status_code = 503

    return HealthResponse(
        status="healthy" if store_ok else "unhealthy",
        version=__version__,
        store_backend=resource.store.backend_name,
        store="available" if store_ok else "unavailable",
        writes_enabled=resource.writes_enabled,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
