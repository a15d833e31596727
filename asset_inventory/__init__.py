"""
Asset inventory package initialization.

Exposes the Flask application factory, the default application instance
(`app`) for WSGI servers, and the in-memory `AssetStore`.
"""

from .app import app, create_app
from .store import AssetStore

__all__ = ["app", "create_app", "AssetStore"]
