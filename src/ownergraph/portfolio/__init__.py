"""Portfolio results: aggregation of a crawl into ranked properties, owners and addresses."""

from ownergraph.portfolio.models import (
    CommonAddress,
    GraphSummary,
    PortfolioParty,
    PortfolioProperty,
    PortfolioResult,
)
from ownergraph.portfolio.aggregator import Aggregator
from ownergraph.portfolio.service import (
    PortfolioService,
    build_ownership_graph,
    validate_seed,
)

__all__ = [
    "CommonAddress",
    "GraphSummary",
    "PortfolioParty",
    "PortfolioProperty",
    "PortfolioResult",
    "Aggregator",
    "PortfolioService",
    "build_ownership_graph",
    "validate_seed",
]
