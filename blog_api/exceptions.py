"""
Blog API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the failure outcomes of the post
       resource.
How:   Each exception carries a client-safe message and an optional context
       dict. Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by PostResource and the stores; caught by global handlers.

Exception Hierarchy:
    BlogApiError (base)
    ├── NotFoundError     → 404 Not Found
    ├── NotAllowedError   → 405 Method Not Allowed (write policy gate)
    └── StoreError        → 500 Internal Server Error

Every error is scoped to the request that raised it; none is retried.
"""

from typing import Any, Dict, Iterable, Optional


class BlogApiError(Exception):
    """
    Base exception for all Blog API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(BlogApiError):
    """
    Raised when a referenced post does not exist.

    When:    GET or DELETE /posts/{id} for an id the store does not hold, and
             every DELETE while the write gate is closed.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class NotAllowedError(BlogApiError):
    """
    Raised when an operation is disabled by the current access policy.

    When:    PUT/POST /posts/{id} while writes_enabled is False.
    HTTP:    405 Method Not Allowed, with an Allow header naming the methods
             that are still served.

    Example response:
        {
            "error": "not_allowed",
            "message": "Operation 'create_or_update_post' is not allowed",
            "details": {"operation": "create_or_update_post", "allowed_methods": ["GET"]}
        }
    """

    def __init__(
        self,
        operation: str,
        allowed_methods: Iterable[str] = ("GET",),
        context: Optional[Dict[str, Any]] = None,
    ):
        self.operation = operation
        self.allowed_methods = list(allowed_methods)
        ctx = context or {}
        ctx["operation"] = operation
        ctx["allowed_methods"] = self.allowed_methods
        super().__init__(message=f"Operation '{operation}' is not allowed", context=ctx)


class StoreError(BlogApiError):
    """
    Raised when the post store fails for a reason other than absence.

    When:    Connection lost mid-query, constraint violation, or a write
             against a store that has no backend.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the context
    (query, driver error type) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "The post store is unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
