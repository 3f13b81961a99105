"""
Lookup Service - resolves MAC addresses to registered vendors.

Coordinates the MAC parser, the in-memory vendor store, the persisted
caches and the registry fetcher.
"""

import logging
import threading
from datetime import datetime, timedelta
from typing import List, Optional, Protocol

from ..core.cache import JsonVendorCache, RawTextCache
from ..core.config import Config
from ..core.database import SQLiteVendorCache
from ..core.exceptions import CacheNotFound, EmptyRegistry, InvalidFormat, OUILookupError
from ..core.mac_address import MacAddress
from ..core.models import LookupResult, NoMatch, PrivateMatch, VendorMatch, VendorRecord
from ..core.vendor_store import VendorStore
from ..registry.fetcher import RegistryFetcher
from ..registry.parser import parse_registry_report


logger = logging.getLogger(__name__)


class VendorCache(Protocol):
    def load(self) -> List[VendorRecord]: ...

    def save(self, records: List[VendorRecord]) -> None: ...

    def saved_at(self) -> Optional[datetime]: ...


class Fetcher(Protocol):
    def fetch(self, url: Optional[str] = None) -> str: ...


def build_vendor_cache(config: Config):
    """Create the record cache selected by configuration."""
    backend = config.cache.backend
    if backend == "sqlite":
        return SQLiteVendorCache(config.cache.sqlite_path)
    if backend == "json":
        return JsonVendorCache(config.cache.json_path)
    raise ValueError(f"Unknown cache backend: {backend!r}")


class LookupService:
    """
    Resolves MAC addresses against the IEEE OUI registry.

    The store is loaded lazily on the first registry lookup: from the
    record cache if present, else from the raw dump if one is
    configured, else by downloading the registry. Only one refresh runs
    at a time; a failed refresh leaves the loaded store untouched.
    """

    def __init__(
        self,
        store: VendorStore,
        fetcher: Fetcher,
        cache: VendorCache,
        raw_cache: Optional[RawTextCache] = None,
        strict: bool = False,
        max_age: Optional[timedelta] = None,
        refresh_cooldown: timedelta = timedelta(minutes=15),
    ):
        self.store = store
        self.fetcher = fetcher
        self.cache = cache
        self.raw_cache = raw_cache
        self.strict = strict
        self.max_age = max_age
        self.refresh_cooldown = refresh_cooldown
        self.skipped_entries = 0
        self._refresh_failed_at: Optional[datetime] = None
        self._refresh_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Config) -> "LookupService":
        """Build a service and its collaborators from configuration."""
        fetcher = RegistryFetcher(
            url=config.registry.url,
            timeout=config.registry.timeout_seconds,
            retries=config.registry.retries,
            backoff_seconds=config.registry.backoff_seconds,
            user_agent=config.registry.user_agent,
        )
        raw_cache = RawTextCache(config.cache.raw_path) if config.cache.raw_path else None
        max_age = None
        if config.cache.max_age_hours is not None:
            max_age = timedelta(hours=config.cache.max_age_hours)

        return cls(
            store=VendorStore(),
            fetcher=fetcher,
            cache=build_vendor_cache(config),
            raw_cache=raw_cache,
            strict=config.parser.strict,
            max_age=max_age,
            refresh_cooldown=timedelta(minutes=config.cache.refresh_cooldown_minutes),
        )

    def lookup(self, mac_text: str) -> LookupResult:
        """
        Look up the vendor a MAC address belongs to.

        Args:
            mac_text: MAC address with ``:`` or ``-`` separators

        Returns:
            NoMatch for invalid or unknown addresses, PrivateMatch for
            locally administered ones, otherwise VendorMatch
        """
        try:
            mac = MacAddress.parse(mac_text)
        except InvalidFormat as e:
            logger.debug(f"Rejected MAC address: {e}")
            return NoMatch()

        prefix = mac.canonical_prefix()
        if mac.is_private():
            return PrivateMatch(mac=prefix)

        self.ensure_loaded()

        record = self.store.lookup(prefix)
        if record is None:
            logger.debug(f"No registry entry for {prefix}")
            return NoMatch()
        return VendorMatch.from_record(record)

    def ensure_loaded(self):
        """Load the store if empty and refresh it when stale."""
        if not self.store.is_loaded():
            with self._refresh_lock:
                # Another thread may have loaded it while we waited
                if not self.store.is_loaded():
                    self._load_initial()

        if self.store.is_stale(self.max_age) and not self._in_cooldown():
            self._refresh_stale()

    def update(self) -> int:
        """
        Download, parse and persist the registry, then swap the store.

        Returns:
            Number of records now loaded
        """
        with self._refresh_lock:
            return self._install(self._download())

    def update_raw(self) -> str:
        """Download the registry and save only the raw dump."""
        if self.raw_cache is None:
            raise OUILookupError("No raw dump path configured")
        text = self.fetcher.fetch()
        self.raw_cache.save(text)
        return text

    def rebuild_from_raw(self) -> int:
        """Parse the saved raw dump and persist it without downloading."""
        if self.raw_cache is None:
            raise OUILookupError("No raw dump path configured")
        with self._refresh_lock:
            return self._install(self.raw_cache.load())

    def _load_initial(self):
        try:
            records = self.cache.load()
        except CacheNotFound:
            logger.info("No vendor cache found")
        else:
            if records:
                # Age the snapshot by when the cache was written, not when it was read
                self.store.replace_all(records, loaded_at=self.cache.saved_at())
                return

        if self.raw_cache is not None and self.raw_cache.exists():
            logger.info(f"Building vendor cache from raw dump {self.raw_cache.path}")
            self._install(self.raw_cache.load())
            return

        self._install(self._download())

    def _refresh_stale(self):
        # Skip if a refresh is already running; readers keep the current snapshot
        if not self._refresh_lock.acquire(blocking=False):
            return
        try:
            if not self.store.is_stale(self.max_age):
                return
            logger.info("Vendor store is stale, refreshing registry")
            self._install(self._download())
        except OUILookupError as e:
            self._refresh_failed_at = datetime.now()
            logger.warning(
                f"Registry refresh failed, serving stale data for the next "
                f"{self.refresh_cooldown}: {e}"
            )
        finally:
            self._refresh_lock.release()

    def _in_cooldown(self) -> bool:
        if self._refresh_failed_at is None:
            return False
        return datetime.now() - self._refresh_failed_at < self.refresh_cooldown

    def _download(self) -> str:
        text = self.fetcher.fetch()
        if self.raw_cache is not None:
            self.raw_cache.save(text)
        return text

    def _install(self, raw_text: str) -> int:
        report = parse_registry_report(raw_text, strict=self.strict)
        records = report.records
        if not records:
            raise EmptyRegistry("Registry text contained no vendor records")
        self.cache.save(records)
        self.store.replace_all(records)
        self.skipped_entries = report.skipped
        self._refresh_failed_at = None
        return len(records)
