"""
MAC address validation and normalization.

Accepts addresses that leave out leading zeros in octets, such as
``30:f3:3:3A:f3:01``, and produces the canonical uppercase form used
as the registry lookup key.
"""

import re
from dataclasses import dataclass
from typing import Tuple

from .exceptions import InvalidFormat


# Six 1-2 digit hex groups, one separator kind throughout
MAC_PATTERN = re.compile(
    r"[0-9A-Fa-f]{1,2}([:-])[0-9A-Fa-f]{1,2}(?:\1[0-9A-Fa-f]{1,2}){4}"
)

# Second hex digit of the first octet for locally administered addresses
PRIVATE_MARKERS = frozenset("26AE")


def validate_mac(text: str) -> bool:
    """Check that a MAC address is valid."""
    if not isinstance(text, str):
        return False
    return MAC_PATTERN.fullmatch(text) is not None


def normalize_pairs(text: str) -> str:
    """
    Left-pad octets shorter than two digits with a zero.

    Groups may be separated by ``:`` or ``-``; the result is always
    colon-separated. Case is left untouched.
    """
    groups = re.split(r"[:-]", text)
    return ":".join(group.rjust(2, "0") for group in groups)


@dataclass(frozen=True)
class MacAddress:
    """An immutable six-octet hardware address."""

    octets: Tuple[int, ...]

    def __post_init__(self):
        if len(self.octets) != 6 or any(not 0 <= o <= 255 for o in self.octets):
            raise InvalidFormat(f"Invalid octets: {self.octets!r}")

    @classmethod
    def parse(cls, text: str) -> "MacAddress":
        """Build a MacAddress from untrusted text."""
        if not validate_mac(text):
            raise InvalidFormat(f"Invalid MAC address: {text!r}")
        pairs = normalize_pairs(text).split(":")
        return cls(tuple(int(pair, 16) for pair in pairs))

    @property
    def canonical(self) -> str:
        """Full address as ``XX:XX:XX:XX:XX:XX``."""
        return ":".join(f"{octet:02X}" for octet in self.octets)

    def canonical_prefix(self) -> str:
        """The 3-octet block used as the registry key, ``XX:XX:XX``."""
        return ":".join(f"{octet:02X}" for octet in self.octets[:3])

    def is_private(self) -> bool:
        """Check whether this is a locally administered address."""
        return f"{self.octets[0]:02X}"[1] in PRIVATE_MARKERS

    def __str__(self) -> str:
        return self.canonical


def format_prefix(text: str) -> str:
    """Return the canonical vendor prefix of a MAC address string."""
    return MacAddress.parse(text).canonical_prefix()
