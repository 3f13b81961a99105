"""
Error types raised by the OUI lookup package.

Everything derives from OUILookupError so the CLI and the web API can
catch a single type at their boundary.
"""


class OUILookupError(Exception):
    """Base class for all lookup errors."""


class InvalidFormat(OUILookupError, ValueError):
    """MAC address text does not match the accepted pattern."""


class MalformedEntry(OUILookupError, ValueError):
    """A registry entry does not have the expected two header lines."""

    def __init__(self, message: str, entry: str = ""):
        super().__init__(message)
        self.entry = entry


class EmptyRegistry(OUILookupError):
    """Registry text produced no vendor records."""


class RegistryFetchError(OUILookupError, IOError):
    """Downloading the registry failed."""


class CacheError(OUILookupError, IOError):
    """Reading or writing a cache failed."""


class CacheNotFound(CacheError):
    """The requested cache does not exist yet."""
