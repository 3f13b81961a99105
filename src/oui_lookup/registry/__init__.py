"""Registry module for downloading and parsing the IEEE OUI export."""

from .parser import split_entries, parse_entry, parse_registry
from .fetcher import RegistryFetcher, fetch_registry_text

__all__ = [
    "split_entries",
    "parse_entry",
    "parse_registry",
    "RegistryFetcher",
    "fetch_registry_text",
]
