"""
Ownership graph crawler.

Round-indexed BFS from a seed parcel through registrations, contacts and
shared business addresses.
"""

from ownergraph.crawler.frontier import (
    CrawlDeadline,
    CrawlLimits,
    CrawlState,
    Frontier,
    FrontierItem,
    NameTask,
    PropertyTask,
)
from ownergraph.crawler.engine import CrawlResult, FrontierCrawler, is_site_manager

__all__ = [
    "CrawlDeadline",
    "CrawlLimits",
    "CrawlState",
    "Frontier",
    "FrontierItem",
    "NameTask",
    "PropertyTask",
    "CrawlResult",
    "FrontierCrawler",
    "is_site_manager",
]
