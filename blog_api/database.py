"""
Blog API — Database Engine & Session Management
=================================================

What:  Async SQLAlchemy engine, session factory and declarative base.
How:   Each database store gets its own engine built from the settings it was
       created with, and disposes it on close(). Importing this module never
       opens a connection or loads a driver.
Who:   build_post_store() for STORE_BACKEND=database, alembic/env.py.

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from settings.
    pool_recycle=3600 recycles connections every hour.
    SQLite URLs (tests, local runs) skip the pool arguments, which the
    SQLite dialect does not accept.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from blog_api.config import Settings, settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for Alembic)."""
    pass


def create_engine_from_settings(app_settings: Settings = settings) -> AsyncEngine:
    """Build an async engine for `app_settings.database_url`."""
    url = app_settings.database_url
    kwargs = {"echo": app_settings.log_level == "DEBUG"}
    if not url.startswith("sqlite"):
        kwargs.update(
            pool_size=app_settings.db_pool_size,
            max_overflow=app_settings.db_max_overflow,
            pool_pre_ping=app_settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Session factory bound to `engine`.

    expire_on_commit=False keeps row attributes readable after the
    transaction closes, which the store relies on when building responses.
    """
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

