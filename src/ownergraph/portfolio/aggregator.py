"""
Portfolio aggregation.

Turns the extracted component into a ranked PortfolioResult: properties
enriched with tax lot facts, people and entities ranked by how many
properties they touch, and the busiest shared business addresses.
"""

import asyncio
import logging
from collections import defaultdict
from typing import Optional

from ownergraph.graph.schema import Node, NodeKind
from ownergraph.graph.store import GraphStore
from ownergraph.ingestion.base_adapter import Enrichment, EnrichmentSource, SourceError
from ownergraph.nyc.bbl import BBL
from ownergraph.portfolio.models import (
    CommonAddress,
    PortfolioParty,
    PortfolioProperty,
    PortfolioResult,
)

logger = logging.getLogger(__name__)

MAX_CONNECTED_VIA = 3
MAX_COMMON_ADDRESSES = 5


def _unique(values) -> list:
    return list(dict.fromkeys(values))


def node_bbl(node: Node) -> BBL:
    attrs = node.attributes
    if attrs.get("boro_code"):
        return BBL.coerce(attrs.get("boro_code"), attrs.get("block"), attrs.get("lot"))
    return BBL.from_key(node.label) or BBL.coerce("", "", "")


class Aggregator:
    """Builds the ranked portfolio from a component graph."""

    def __init__(self, enrichment: Optional[EnrichmentSource] = None):
        self.enrichment = enrichment
        self.failed_lookups = 0

    async def aggregate(self, component: GraphStore) -> PortfolioResult:
        """
        Summarize a component.

        The ``graph`` block is left for the caller, which knows the size
        of the whole crawl.
        """
        self.failed_lookups = 0
        # A parcel with no edges is a seed nothing was found for
        properties = [
            n for n in component.nodes(NodeKind.PROPERTY) if component.incident_edges(n.id)
        ]

        return PortfolioResult(
            properties=await self.build_properties(component, properties),
            people=self.build_parties(component, NodeKind.PERSON),
            entities=self.build_parties(component, NodeKind.ENTITY),
            common_addresses=self.build_common_addresses(component),
        )

    async def enrich(self, bbls: list[BBL]) -> dict[BBL, Enrichment]:
        """Fetch enrichment one batch per borough, concurrently."""
        if self.enrichment is None or not bbls:
            return {}

        by_borough: dict[str, list[BBL]] = defaultdict(list)
        for bbl in bbls:
            by_borough[bbl.boro_code].append(bbl)

        async def fetch(boro_code: str, group: list[BBL]) -> dict[BBL, Enrichment]:
            try:
                return await self.enrichment.lookup_enrichment_batch(boro_code, group)
            except SourceError as e:
                logger.warning(f"Enrichment for borough {boro_code} failed: {e}")
            except Exception:
                logger.exception(f"Enrichment for borough {boro_code} raised unexpectedly")
            self.failed_lookups += 1
            return {}

        found: dict[BBL, Enrichment] = {}
        for batch in await asyncio.gather(*(fetch(b, g) for b, g in by_borough.items())):
            found.update(batch)
        return found

    async def build_properties(
        self, component: GraphStore, nodes: list[Node]
    ) -> list[PortfolioProperty]:
        bbls = [node_bbl(n) for n in nodes]
        found = await self.enrich(bbls)
        empty = Enrichment()

        properties = []
        for node, bbl in zip(nodes, bbls):
            enrichment = found.get(bbl, empty)
            connected = _unique(n.label for n in component.neighbors(node.id))
            properties.append(
                PortfolioProperty(
                    bbl=bbl.key,
                    address=enrichment.address or node.attributes.get("address", ""),
                    borough=bbl.borough,
                    boro_code=bbl.boro_code,
                    block=bbl.block,
                    lot=bbl.lot,
                    units=enrichment.units,
                    year_built=enrichment.year_built,
                    assessed_value=enrichment.assessed_value,
                    num_floors=enrichment.floors,
                    bldg_area=enrichment.building_area,
                    zoning=enrichment.zoning,
                    owner_name=enrichment.owner_name,
                    connected_via=connected[:MAX_CONNECTED_VIA],
                )
            )

        properties.sort(key=lambda p: p.assessed_value, reverse=True)
        return properties

    def build_parties(self, component: GraphStore, kind: NodeKind) -> list[PortfolioParty]:
        parties = []
        for node in component.nodes(kind):
            edges = component.incident_edges(node.id)
            others = [component.get_node(e.other(node.id)) for e in edges]
            parties.append(
                PortfolioParty(
                    name=node.label,
                    roles=_unique(e.role for e in edges),
                    addresses=_unique(o.label for o in others if o.kind == NodeKind.ADDRESS),
                    property_count=sum(1 for o in others if o.kind == NodeKind.PROPERTY),
                )
            )

        parties.sort(key=lambda p: p.property_count, reverse=True)
        return parties

    def build_common_addresses(self, component: GraphStore) -> list[CommonAddress]:
        counts = [
            CommonAddress(address=n.label, count=len(component.incident_edges(n.id)))
            for n in component.nodes(NodeKind.ADDRESS)
        ]
        counts.sort(key=lambda a: a.count, reverse=True)
        return counts[:MAX_COMMON_ADDRESSES]
