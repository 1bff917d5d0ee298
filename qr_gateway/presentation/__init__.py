"""
Presentation layer - HTTP surface.

Contains:
- FastAPI application factory
- API routes
- Exception handlers
"""

from .app import create_app


__all__ = ["create_app"]
