"""
Data models for vendor records and lookup results.

A lookup yields exactly one of NoMatch, PrivateMatch or VendorMatch.
Each variant carries only the fields that make sense for it.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class VendorRecord:
    """One registered OUI block from the IEEE registry."""

    mac: str  # XX:XX:XX
    company_id: str  # XXXXXX
    organization: str
    address: str = ""

    def to_dict(self) -> dict:
        """Convert record to dictionary for serialization."""
        return {
            "mac": self.mac,
            "company_id": self.company_id,
            "organization": self.organization,
            "address": self.address,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "VendorRecord":
        return cls(
            mac=data["mac"],
            company_id=data["company_id"],
            organization=data["organization"],
            address=data.get("address", ""),
        )


@dataclass(frozen=True)
class NoMatch:
    """Invalid address, or no registry entry for its block."""

    kind = "no_match"

    def to_dict(self) -> dict:
        return {"result": self.kind}


@dataclass(frozen=True)
class PrivateMatch:
    """Locally administered address; never has a vendor."""

    mac: str
    organization: str = "Private"

    kind = "private"

    def to_dict(self) -> dict:
        return {"result": self.kind, "mac": self.mac, "organization": self.organization}


@dataclass(frozen=True)
class VendorMatch:
    """Registered block found in the registry."""

    mac: str
    company_id: str
    organization: str
    address: str

    kind = "vendor"

    @classmethod
    def from_record(cls, record: VendorRecord) -> "VendorMatch":
        return cls(
            mac=record.mac,
            company_id=record.company_id,
            organization=record.organization,
            address=record.address,
        )

    def to_dict(self) -> dict:
        return {
            "result": self.kind,
            "mac": self.mac,
            "company_id": self.company_id,
            "organization": self.organization,
            "address": self.address,
        }


LookupResult = Union[NoMatch, PrivateMatch, VendorMatch]
