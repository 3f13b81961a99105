"""Services module."""

from .lookup_service import LookupService

__all__ = ["LookupService"]
