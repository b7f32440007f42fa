"""
API route modules.

Import all route modules here for easy access.
"""

from app.api.routes import content

__all__ = ["content"]
