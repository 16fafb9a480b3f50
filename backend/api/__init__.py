"""
Finearr API package.

Provides the FastAPI application for the Finearr media request service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
