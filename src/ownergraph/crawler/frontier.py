"""
Frontier, crawl limits and crawl-scoped state.

Everything here lives for exactly one crawl and is discarded afterwards.
"""

import time
from dataclasses import dataclass, field
from typing import Optional, Union

from ownergraph.config import settings
from ownergraph.nyc.bbl import BBL


@dataclass(frozen=True)
class PropertyTask:
    """Expand a parcel through its registrations and their contacts."""

    bbl: BBL


@dataclass(frozen=True)
class NameTask:
    """Expand a normalized name through a contact search."""

    normalized_name: str


FrontierItem = Union[PropertyTask, NameTask]


@dataclass
class Frontier:
    """Work queued for one round."""

    round_number: int
    items: list[FrontierItem] = field(default_factory=list)

    @property
    def property_tasks(self) -> list[PropertyTask]:
        return [i for i in self.items if isinstance(i, PropertyTask)]

    @property
    def name_tasks(self) -> list[NameTask]:
        return [i for i in self.items if isinstance(i, NameTask)]

    def __bool__(self) -> bool:
        return bool(self.items)


@dataclass
class CrawlLimits:
    """Per-round fan-out caps."""

    max_property_tasks: int = 8  # Property tasks expanded per round
    max_name_tasks: int = 5  # Name tasks expanded per round
    max_shared_addresses: int = 1  # Shared-address searches per name task
    registration_batch_size: int = 10  # Registration ids fetched per name task

    @classmethod
    def from_settings(cls) -> "CrawlLimits":
        return cls(
            max_property_tasks=settings.crawl_max_property_tasks,
            max_name_tasks=settings.crawl_max_name_tasks,
            max_shared_addresses=settings.crawl_max_shared_addresses,
            registration_batch_size=settings.crawl_registration_batch_size,
        )


class CrawlDeadline:
    """
    Wall-clock budget for a whole crawl.

    ``seconds=None`` (or 0) means no deadline.
    """

    def __init__(self, seconds: Optional[float] = None):
        self.seconds = seconds or None
        self._started = time.monotonic()

    def remaining(self) -> Optional[float]:
        """Seconds left, or None when unbounded."""
        if self.seconds is None:
            return None
        return max(0.0, self.seconds - (time.monotonic() - self._started))

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0


@dataclass
class CrawlState:
    """
    Visited sets for one crawl.

    The ``claim_*`` methods mark a key visited and report whether the
    caller is the first to see it. They never await, so concurrent tasks
    in a round cannot both claim the same key.
    """

    visited_properties: set[str] = field(default_factory=set)
    visited_registrations: set[str] = field(default_factory=set)
    visited_names: set[str] = field(default_factory=set)
    failed_lookups: int = 0

    @staticmethod
    def _claim(visited: set[str], key: str) -> bool:
        if key in visited:
            return False
        visited.add(key)
        return True

    def claim_property(self, bbl: BBL) -> bool:
        return self._claim(self.visited_properties, bbl.key)

    def claim_registration(self, registration_id: str) -> bool:
        return self._claim(self.visited_registrations, registration_id)

    def claim_name(self, normalized_name: str) -> bool:
        return self._claim(self.visited_names, normalized_name)
