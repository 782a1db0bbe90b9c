"""
Blog API — Configuration & Assembly Tests
===========================================

What:  Settings validation and building the resource from settings.
"""

import pytest
from pydantic import ValidationError
from starlette.requests import Request

from blog_api.config import Settings
from blog_api.main import create_app
from blog_api.services.memory_store import InMemoryPostStore
from blog_api.services.post_resource import (
    PostResource,
    build_post_resource,
    build_post_store,
    get_post_resource,
)
from blog_api.services.post_store import NullPostStore


class TestSettings:

    def test_defaults_are_read_only(self):
        s = Settings(_env_file=None)
        assert s.writes_enabled is False
        assert s.store_backend == "none"
        assert s.page_size == 20

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_store_backend_normalized(self):
        assert Settings(store_backend=" Memory ").store_backend == "memory"

    def test_invalid_store_backend(self):
        with pytest.raises(ValidationError, match="store_backend"):
            Settings(store_backend="redis")

    def test_writes_need_a_store(self):
        with pytest.raises(ValidationError, match="WRITES_ENABLED"):
            Settings(store_backend="none", writes_enabled=True)

    def test_writes_with_memory_store(self):
        s = Settings(store_backend="memory", writes_enabled=True)
        assert s.writes_enabled is True

    def test_page_size_bounds(self):
        with pytest.raises(ValidationError):
            Settings(page_size=0)

    def test_cors_origins_list(self):
        s = Settings(cors_origins="http://a.test, http://b.test,")
        assert s.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_env_variables(self, monkeypatch):
        monkeypatch.setenv("STORE_BACKEND", "memory")
        monkeypatch.setenv("WRITES_ENABLED", "true")
        s = Settings()
        assert s.store_backend == "memory"
        assert s.writes_enabled is True


class TestAssembly:

    def test_null_store_by_default(self):
        store = build_post_store(Settings(store_backend="none"))
        assert isinstance(store, NullPostStore)

    def test_memory_store_uses_page_size(self):
        store = build_post_store(Settings(store_backend="memory", page_size=7))
        assert isinstance(store, InMemoryPostStore)
        assert store.page_size == 7

    @pytest.mark.asyncio
    async def test_database_store(self):
        from blog_api.services.sql_store import SqlAlchemyPostStore

        store = build_post_store(
            Settings(store_backend="database", database_url="sqlite+aiosqlite:///:memory:")
        )
        try:
            assert isinstance(store, SqlAlchemyPostStore)
            assert await store.health_check() is True
        finally:
            await store.close()

    @pytest.mark.asyncio
    async def test_database_stores_bind_their_own_urls(self, tmp_path):
        """Each settings object gets its own engine; closing one leaves the other usable."""
        store_a = build_post_store(
            Settings(store_backend="database", database_url=f"sqlite+aiosqlite:///{tmp_path / 'a.db'}")
        )
        store_b = build_post_store(
            Settings(store_backend="database", database_url=f"sqlite+aiosqlite:///{tmp_path / 'b.db'}")
        )
        try:
            assert store_a._engine is not store_b._engine
            assert store_a._engine.url.database.endswith("a.db")
            assert store_b._engine.url.database.endswith("b.db")

            await store_a.close()
            assert await store_b.health_check() is True
        finally:
            await store_a.close()
            await store_b.close()

    def test_dependency_returns_app_resource(self):
        app = create_app(Settings(store_backend="memory", writes_enabled=True))
        request = Request({"type": "http", "app": app})

        resource = get_post_resource(request)

        assert isinstance(resource, PostResource)
        assert resource is app.state.post_resource
        assert resource.writes_enabled is True
        assert resource.store.backend_name == "memory"

    def test_resource_carries_gate(self):
        resource = build_post_resource(Settings(store_backend="memory", writes_enabled=True))
        assert resource.writes_enabled is True
        assert resource.store.backend_name == "memory"
