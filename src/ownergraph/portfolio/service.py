"""
Ownership graph entry point.

crawl -> component extraction -> aggregation, as one call.
"""

import logging
from typing import Any, Optional, Sequence, Union

from ownergraph.config import settings
from ownergraph.crawler.engine import FrontierCrawler
from ownergraph.crawler.frontier import CrawlDeadline, CrawlLimits
from ownergraph.graph.component import extract_component
from ownergraph.ingestion.base_adapter import EnrichmentSource, HousingRegistrySource
from ownergraph.nyc.bbl import BBL, InvalidSeedError
from ownergraph.nyc.names import EntityClassifier
from ownergraph.portfolio.aggregator import Aggregator
from ownergraph.portfolio.models import GraphSummary, PortfolioResult

logger = logging.getLogger(__name__)

SeedInput = Union[BBL, Sequence[Any]]


def validate_seed(seed: SeedInput) -> BBL:
    """
    Validate a seed given as a BBL or a ``(boro_code, block, lot)`` triple.

    Raises:
        InvalidSeedError: for any malformed identifier
    """
    if isinstance(seed, BBL):
        return BBL.parse(seed.boro_code, seed.block, seed.lot)
    if isinstance(seed, str) or len(seed) != 3:
        raise InvalidSeedError(f"Seed must be (boro_code, block, lot), got {seed!r}")
    return BBL.parse(*seed)


def validate_depth(max_depth: Any) -> int:
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise InvalidSeedError(f"max_depth must be a positive integer, got {max_depth!r}")
    return max_depth


class PortfolioService:
    """
    Builds portfolios against a fixed pair of data sources.

    Holds no per-request state.
    """

    def __init__(
        self,
        registry: HousingRegistrySource,
        enrichment: Optional[EnrichmentSource] = None,
        classifier: Optional[EntityClassifier] = None,
        limits: Optional[CrawlLimits] = None,
    ):
        self.registry = registry
        self.enrichment = enrichment
        self.crawler = FrontierCrawler(registry, classifier=classifier, limits=limits)

    async def build(
        self,
        seed: SeedInput,
        max_depth: Optional[int] = None,
        deadline_seconds: Optional[float] = None,
    ) -> PortfolioResult:
        """
        Crawl from ``seed`` and return the ranked portfolio.

        Validation happens before any lookup is issued.

        Raises:
            InvalidSeedError: for a malformed seed or max_depth
        """
        bbl = validate_seed(seed)
        depth = validate_depth(settings.crawl_max_depth if max_depth is None else max_depth)
        if deadline_seconds is None:
            deadline_seconds = settings.crawl_deadline_seconds

        crawl = await self.crawler.crawl(bbl, max_depth=depth, deadline=CrawlDeadline(deadline_seconds))
        component = extract_component(crawl.store, crawl.seed_id)

        aggregator = Aggregator(self.enrichment)
        result = await aggregator.aggregate(component)
        result.graph = GraphSummary(
            node_count=crawl.store.node_count,
            edge_count=crawl.store.edge_count,
            rounds_run=crawl.rounds_run,
            timed_out=crawl.timed_out,
            failed_lookups=crawl.failed_lookups + aggregator.failed_lookups,
        )

        logger.info(
            f"Portfolio for {bbl.key}: {len(result.properties)} properties, "
            f"{len(result.people)} people, {len(result.entities)} entities"
        )
        return result


async def build_ownership_graph(
    seed: SeedInput,
    max_depth: int = 2,
    *,
    registry: HousingRegistrySource,
    enrichment: Optional[EnrichmentSource] = None,
    classifier: Optional[EntityClassifier] = None,
    limits: Optional[CrawlLimits] = None,
    deadline_seconds: Optional[float] = None,
) -> PortfolioResult:
    """
    Build the ownership graph around one property.

    Args:
        seed: BBL or ``(boro_code, block, lot)``
        max_depth: Number of crawl rounds
        registry: Registration/contact source
        enrichment: Tax lot source; properties keep zeroed facts without one
        classifier: Person/entity strategy (keyword heuristic by default)
        limits: Per-round fan-out caps (settings by default)
        deadline_seconds: Wall-clock budget; 0 disables

    Raises:
        InvalidSeedError: before any crawling, for malformed input
    """
    service = PortfolioService(registry, enrichment, classifier=classifier, limits=limits)
    return await service.build(seed, max_depth=max_depth, deadline_seconds=deadline_seconds)
