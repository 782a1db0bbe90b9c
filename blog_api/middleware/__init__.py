# Middleware package init
"""
Blog API — Middleware Package
===============================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line and any error body can
    carry the correlation ID.
"""
