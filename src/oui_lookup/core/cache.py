"""
File caches for parsed vendor records and the raw registry dump.
"""

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from .exceptions import CacheError, CacheNotFound
from .models import VendorRecord


logger = logging.getLogger(__name__)


def _write_atomic(path: Path, data: str):
    """Write through a temporary file so readers never see a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except OSError:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class JsonVendorCache:
    """Stores vendor records as a JSON list of objects."""

    def __init__(self, path: str = "data/vendors.json"):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def saved_at(self) -> Optional[datetime]:
        """When the cache file was last written."""
        if not self.path.exists():
            return None
        return datetime.fromtimestamp(self.path.stat().st_mtime)

    def load(self) -> List[VendorRecord]:
        """
        Load vendor records from the JSON file.

        Raises:
            CacheNotFound: If the file does not exist
            CacheError: If the file cannot be read or decoded
        """
        if not self.path.exists():
            raise CacheNotFound(f"No vendor cache at {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            records = [VendorRecord.from_dict(item) for item in data]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise CacheError(f"Failed to read vendor cache {self.path}: {e}") from e

        logger.info(f"Loaded {len(records)} records from {self.path}")
        return records

    def save(self, records: Iterable[VendorRecord]):
        """Save vendor records, replacing the file."""
        data = [record.to_dict() for record in records]
        try:
            _write_atomic(self.path, json.dumps(data, indent=1))
        except OSError as e:
            raise CacheError(f"Failed to write vendor cache {self.path}: {e}") from e
        logger.info(f"Saved {len(data)} records to {self.path}")


class RawTextCache:
    """Keeps the unparsed registry dump on disk to avoid re-downloading."""

    def __init__(self, path: str = "data/oui.txt"):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> str:
        if not self.path.exists():
            raise CacheNotFound(f"No raw registry dump at {self.path}")
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CacheError(f"Failed to read raw registry dump {self.path}: {e}") from e

    def save(self, text: str):
        try:
            _write_atomic(self.path, text)
        except OSError as e:
            raise CacheError(f"Failed to write raw registry dump {self.path}: {e}") from e
        logger.info(f"Saved raw registry dump to {self.path}")
