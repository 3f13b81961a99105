"""
IEEE OUI Registry Text Parser.

Converts the plain-text registry export into VendorRecord values.
An entry in the export looks like:

    30-23-03   (hex)		Belkin International Inc.
    302303     (base 16)		Belkin International Inc.
    				12045 East Waterfront Drive
    				Playa Vista    null  90094
    				US

Entries have no terminator; the ``(hex)`` line of the next entry ends
the previous one. Everything before the first ``(hex)`` line is the
table caption.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List

from ..core.exceptions import MalformedEntry
from ..core.models import VendorRecord


logger = logging.getLogger(__name__)


ENTRY_MARKER = "(hex)"
BASE16_MARKER = "(base 16)"

# Fields on the two header lines are separated by 2+ whitespace characters
FIELD_SEPARATOR = re.compile(r"\s{2,}")

PREFIX_PATTERN = re.compile(r"[0-9A-Fa-f]{2}-[0-9A-Fa-f]{2}-[0-9A-Fa-f]{2}")
COMPANY_ID_PATTERN = re.compile(r"[0-9A-Fa-f]{6}")


@dataclass
class ParseReport:
    """Records parsed from a registry dump plus the entries that were skipped."""

    records: List[VendorRecord] = field(default_factory=list)
    errors: List[MalformedEntry] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return len(self.errors)


def split_entries(raw_text: str) -> List[str]:
    """
    Split raw registry text into individual entry strings.

    The first element is the table header. Each following element starts
    with its ``(hex)`` line.

    Args:
        raw_text: Registry text as downloaded or loaded from disk

    Returns:
        Trimmed entry strings in file order
    """
    entries: List[str] = []
    buffer: List[str] = []
    if not raw_text:
        return entries

    # Only \n ends a line; organization names may hold other control characters
    for line in raw_text.split("\n"):
        line = line.rstrip("\r")
        if ENTRY_MARKER in line and buffer:
            entries.append("\n".join(buffer).strip())
            buffer = []
        buffer.append(line)

    if buffer:
        entries.append("\n".join(buffer).strip())

    return entries


def _split_header_line(line: str, marker: str, entry: str) -> List[str]:
    fields = FIELD_SEPARATOR.split(line.strip(), maxsplit=2)
    if len(fields) != 3 or fields[1] != marker:
        raise MalformedEntry(f"Expected '<value>  {marker}  <organization>', got {line.strip()!r}", entry)
    return fields


def parse_address(lines: List[str]) -> str:
    """Join address lines, dropping blanks and surrounding whitespace."""
    kept = [line.strip() for line in lines if line.strip()]
    return "\n".join(kept).strip()


def parse_entry(raw_entry: str) -> VendorRecord:
    """
    Parse one registry entry into a VendorRecord.

    Raises:
        MalformedEntry: If the two header lines are missing or do not
            split into three fields, or if they disagree on the block
    """
    rows = [row.rstrip("\r") for row in raw_entry.strip().split("\n")]
    if len(rows) < 2:
        raise MalformedEntry("Entry has fewer than two header lines", raw_entry)

    prefix, _, organization = _split_header_line(rows[0], ENTRY_MARKER, raw_entry)
    company_id, _, _ = _split_header_line(rows[1], BASE16_MARKER, raw_entry)

    if not PREFIX_PATTERN.fullmatch(prefix):
        raise MalformedEntry(f"Invalid block prefix {prefix!r}", raw_entry)
    if not COMPANY_ID_PATTERN.fullmatch(company_id):
        raise MalformedEntry(f"Invalid company id {company_id!r}", raw_entry)

    mac = prefix.upper().replace("-", ":")
    company_id = company_id.upper()
    if mac.replace(":", "") != company_id:
        raise MalformedEntry(f"Prefix {mac} does not match company id {company_id}", raw_entry)

    return VendorRecord(
        mac=mac,
        company_id=company_id,
        organization=organization.strip(),
        address=parse_address(rows[2:]),
    )


def parse_registry_report(raw_text: str, strict: bool = False) -> ParseReport:
    """
    Parse a full registry dump, keeping track of skipped entries.

    Each entry is parsed on its own. A malformed entry is logged and
    skipped unless ``strict`` is set, in which case it is re-raised.
    """
    report = ParseReport()
    entries = split_entries(raw_text)

    for entry in entries[1:]:  # first element is the header
        try:
            report.records.append(parse_entry(entry))
        except MalformedEntry as e:
            if strict:
                raise
            first_line = entry.split("\n")[0] if entry else ""
            logger.warning(f"Skipping malformed registry entry {first_line!r}: {e}")
            report.errors.append(e)

    logger.info(f"Parsed {len(report.records)} vendor records ({report.skipped} skipped)")
    return report


def parse_registry(raw_text: str, strict: bool = False) -> List[VendorRecord]:
    """Convert raw IEEE vendor data into a list of VendorRecord."""
    return parse_registry_report(raw_text, strict=strict).records
