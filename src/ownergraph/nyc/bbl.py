"""
NYC Borough-Block-Lot (BBL) parcel identifiers.

BBLs arrive from several datasets in slightly different shapes
("00123" vs "123", integers vs strings). Every source goes through
this module so that one parcel always yields the same key.
"""

from dataclasses import dataclass
from typing import Any, Optional

BOROUGH_NAMES = {
    "1": "Manhattan",
    "2": "Bronx",
    "3": "Brooklyn",
    "4": "Queens",
    "5": "Staten Island",
}


class InvalidSeedError(ValueError):
    """Raised when a crawl is requested for a malformed property identifier."""


def _canonical_part(value: Any) -> str:
    """Strip whitespace and leading zeros from a numeric BBL component."""
    text = str(value if value is not None else "").strip()
    if text.endswith(".0"):
        # Some exports serialize block/lot as floats
        text = text[:-2]
    if text.isdigit():
        return str(int(text))
    return text


@dataclass(frozen=True)
class BBL:
    """A tax parcel identifier: borough code, block and lot."""

    boro_code: str
    block: str
    lot: str

    @property
    def key(self) -> str:
        """Dash-joined key, e.g. ``1-1234-56``."""
        return f"{self.boro_code}-{self.block}-{self.lot}"

    @property
    def borough(self) -> str:
        return BOROUGH_NAMES.get(self.boro_code, "")

    @property
    def is_complete(self) -> bool:
        return bool(self.boro_code and self.block and self.lot)

    @classmethod
    def coerce(cls, boro_code: Any, block: Any, lot: Any) -> "BBL":
        """Build a BBL from untrusted record fields without raising."""
        return cls(
            boro_code=_canonical_part(boro_code),
            block=_canonical_part(block),
            lot=_canonical_part(lot),
        )

    @classmethod
    def parse(cls, boro_code: Any, block: Any, lot: Any) -> "BBL":
        """
        Build a BBL from caller input, validating every component.

        Raises:
            InvalidSeedError: if the borough is not 1-5 or block/lot are
                not positive integers
        """
        bbl = cls.coerce(boro_code, block, lot)
        if bbl.boro_code not in BOROUGH_NAMES:
            raise InvalidSeedError(f"Unknown borough code: {boro_code!r}")
        for part_name, part in (("block", bbl.block), ("lot", bbl.lot)):
            if not part.isdigit() or int(part) == 0:
                raise InvalidSeedError(f"Invalid {part_name}: {part!r}")
        return bbl

    @classmethod
    def from_key(cls, key: str) -> Optional["BBL"]:
        """Inverse of :attr:`key`. Returns None for malformed keys."""
        parts = (key or "").split("-")
        if len(parts) != 3:
            return None
        return cls.coerce(*parts)

    def __str__(self) -> str:
        return self.key
