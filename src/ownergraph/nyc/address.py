"""
Business mailing address normalization.

The normalized form is only a matching key: two contacts that give the
same mail drop with different punctuation or suite numbers must collide.
"""

import re
from dataclasses import dataclass
from typing import Optional

# Shorter keys are too ambiguous to link owners through
MIN_ADDRESS_KEY_LENGTH = 10

_PUNCTUATION = re.compile(r"[,.'\"#‘’“”]")
# Unit markers and everything after them
_UNIT_MARKERS = re.compile(r"\b(APT|APARTMENT|SUITE|STE|UNIT)\b.*$")
_WHITESPACE = re.compile(r"\s+")


def normalize_address(raw: Optional[str]) -> str:
    """
    Canonicalize an address string into a dedup key.

    Examples:
        >>> normalize_address("123 Main St., Suite 400")
        '123 MAIN ST'
        >>> normalize_address("45 W. 34th St  New York, NY 10001")
        '45 W 34TH ST NEW YORK NY 10001'
    """
    if not raw:
        return ""
    text = _PUNCTUATION.sub("", str(raw).upper())
    text = _UNIT_MARKERS.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def is_significant_address(key: str) -> bool:
    """True when a normalized key is long enough to identify a mail drop."""
    return len(key) > MIN_ADDRESS_KEY_LENGTH


@dataclass(frozen=True)
class AddressSearchKey:
    """House number plus street-name prefix used to find co-located contacts."""

    street_number: str
    street_prefix: str


def address_search_key(key: str) -> Optional[AddressSearchKey]:
    """
    Split a normalized address into a house number and the first two
    street-name tokens.

    Returns None when the key has no street after the number.
    """
    parts = key.split()
    if len(parts) < 2:
        return None
    return AddressSearchKey(street_number=parts[0], street_prefix=" ".join(parts[1:3]))
