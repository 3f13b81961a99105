import sqlite3
import logging
import threading
from datetime import datetime
from typing import Iterable, List, Optional
from pathlib import Path

from .exceptions import CacheError, CacheNotFound
from .models import VendorRecord

logger = logging.getLogger(__name__)

class SQLiteVendorCache:
    """Persists vendor records in a SQLite database."""
    
    def __init__(self, db_path: str = "data/vendors.db"):
        self.db_path = db_path
        self._lock = threading.Lock()
        self._init_db()

    def _init_db(self):
        """Initialize database tables."""
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        
        with self._lock, sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()
            
            # position keeps registry order for first-match semantics
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS vendors (
                    position INTEGER PRIMARY KEY,
                    mac TEXT NOT NULL,
                    company_id TEXT NOT NULL,
                    organization TEXT NOT NULL,
                    address TEXT NOT NULL DEFAULT ''
                )
            """)
            cursor.execute("CREATE INDEX IF NOT EXISTS idx_vendors_mac ON vendors (mac)")

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS metadata (
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
            """)
            
            conn.commit()
            logger.info(f"Database initialized at {self.db_path}")

    def exists(self) -> bool:
        return self.count() > 0

    def count(self) -> int:
        with self._lock, sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM vendors")
            return cursor.fetchone()[0]

    def saved_at(self) -> Optional[datetime]:
        """When the vendor records were last saved."""
        with self._lock, sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM metadata WHERE key = 'saved_at'")
            row = cursor.fetchone()
        return datetime.fromisoformat(row[0]) if row else None

    def load(self) -> List[VendorRecord]:
        """Load all vendor records in registry order."""
        try:
            with self._lock, sqlite3.connect(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "SELECT mac, company_id, organization, address FROM vendors ORDER BY position"
                )
                rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise CacheError(f"Failed to read vendor database {self.db_path}: {e}") from e

        if not rows:
            raise CacheNotFound(f"No vendor records in {self.db_path}")

        records = [VendorRecord(*row) for row in rows]
        logger.info(f"Loaded {len(records)} records from {self.db_path}")
        return records

    def save(self, records: Iterable[VendorRecord]):
        """Replace all stored vendor records in one transaction."""
        rows = [
            (position, r.mac, r.company_id, r.organization, r.address)
            for position, r in enumerate(records)
        ]
        try:
            with self._lock, sqlite3.connect(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute("DELETE FROM vendors")
                cursor.executemany("""
                    INSERT INTO vendors (position, mac, company_id, organization, address)
                    VALUES (?, ?, ?, ?, ?)
                """, rows)
                cursor.execute("""
                    INSERT OR REPLACE INTO metadata (key, value)
                    VALUES ('saved_at', ?)
                """, (datetime.now().isoformat(),))
                conn.commit()
        except sqlite3.Error as e:
            raise CacheError(f"Failed to write vendor database {self.db_path}: {e}") from e
        logger.info(f"Saved {len(rows)} records to {self.db_path}")
