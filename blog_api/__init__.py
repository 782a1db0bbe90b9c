"""
Blog API — Application Package Initializer
============================================

What: Server-side handlers for the blog post resource (/posts).
Who:  Imported by uvicorn (blog_api.main:app), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← decode request, encode result
    ├─────────────────────────────────────┤
    │     PostResource (Handler Core)     │  ← policy gate, error mapping
    ├─────────────────────────────────────┤
    │        PostStore (Persistence)      │  ← none | memory | database
    └─────────────────────────────────────┘

    Routes never talk to a store directly, and the resource never sees HTTP.
    A persistence backend can be swapped in without changing the public
    contract of the resource.
"""

__version__ = "0.1.0"
