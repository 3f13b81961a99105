"""
Vendor Store - in-memory registry snapshot.

Holds the parsed vendor records and answers prefix lookups. The
collection is only ever replaced as a whole.
"""

import logging
import threading
from datetime import datetime, timedelta
from typing import Dict, Iterable, Optional, Tuple

from .models import VendorRecord


logger = logging.getLogger(__name__)


class VendorStore:
    """
    Central store of vendor records keyed by 3-octet prefix.

    Records and index are immutable once built; replace_all swaps both
    references together under a lock, so readers always see one
    complete snapshot.
    """

    def __init__(self, records: Optional[Iterable[VendorRecord]] = None):
        self._lock = threading.Lock()
        self._snapshot: Tuple[Tuple[VendorRecord, ...], Dict[str, VendorRecord]] = ((), {})
        self._loaded_at: Optional[datetime] = None
        if records is not None:
            self.replace_all(records)

    @property
    def records(self) -> Tuple[VendorRecord, ...]:
        """All records in stored order."""
        return self._snapshot[0]

    @property
    def loaded_at(self) -> Optional[datetime]:
        """When the current snapshot was installed."""
        return self._loaded_at

    def lookup(self, prefix: str) -> Optional[VendorRecord]:
        """Get the record for a canonical ``XX:XX:XX`` prefix."""
        return self._snapshot[1].get(prefix)

    def replace_all(self, records: Iterable[VendorRecord], loaded_at: Optional[datetime] = None):
        """Swap in a new collection, discarding the old one."""
        ordered = tuple(records)
        index: Dict[str, VendorRecord] = {}
        for record in ordered:
            # First match in stored order wins
            if record.mac in index:
                logger.debug(f"Duplicate registry prefix {record.mac}, keeping first entry")
                continue
            index[record.mac] = record

        with self._lock:
            self._snapshot = (ordered, index)
            self._loaded_at = loaded_at or datetime.now()
        logger.info(f"Vendor store loaded with {len(ordered)} records")

    def is_loaded(self) -> bool:
        return bool(self._snapshot[0])

    def is_stale(self, max_age: Optional[timedelta]) -> bool:
        """Check whether the snapshot is older than ``max_age``."""
        if max_age is None or self._loaded_at is None:
            return False
        return datetime.now() - self._loaded_at > max_age

    def clear(self):
        """Drop all records."""
        with self._lock:
            self._snapshot = ((), {})
            self._loaded_at = None
        logger.info("Cleared vendor store")

    def __len__(self) -> int:
        return len(self._snapshot[0])
