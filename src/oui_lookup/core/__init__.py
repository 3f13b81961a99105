"""Core module containing data models, storage and configuration."""

from .exceptions import (
    OUILookupError,
    InvalidFormat,
    MalformedEntry,
    EmptyRegistry,
    RegistryFetchError,
    CacheError,
    CacheNotFound,
)
from .models import VendorRecord, NoMatch, PrivateMatch, VendorMatch
from .mac_address import MacAddress
from .vendor_store import VendorStore

__all__ = [
    "OUILookupError",
    "InvalidFormat",
    "MalformedEntry",
    "EmptyRegistry",
    "RegistryFetchError",
    "CacheError",
    "CacheNotFound",
    "VendorRecord",
    "NoMatch",
    "PrivateMatch",
    "VendorMatch",
    "MacAddress",
    "VendorStore",
]
