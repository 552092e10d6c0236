# app/api/__init__.py
"""HTTP boundary: dependencies, exception handlers and versioned routers."""

from app.api.v1 import api_router

__all__ = ["api_router"]
