"""Transfer session API package."""

from .router import router

__all__ = ["router"]
