"""Resolve MAC addresses to vendors using the IEEE OUI registry."""

from .core.exceptions import OUILookupError, InvalidFormat, MalformedEntry
from .core.mac_address import MacAddress, format_prefix
from .core.models import VendorRecord, NoMatch, PrivateMatch, VendorMatch
from .services.lookup_service import LookupService

__all__ = [
    "OUILookupError",
    "InvalidFormat",
    "MalformedEntry",
    "MacAddress",
    "format_prefix",
    "VendorRecord",
    "NoMatch",
    "PrivateMatch",
    "VendorMatch",
    "LookupService",
]

__version__ = "1.0.0"
