"""API v1 package."""

from . import transfer

__all__ = ["transfer"]
