"""
MapPLUTO enrichment adapter.

PLUTO carries one row per tax lot with assessment and building facts.
Lots are looked up in per-borough batches to keep the query count low.
"""

import logging
from typing import Any, Optional, Sequence

from ownergraph.config import settings
from ownergraph.ingestion.base_adapter import Enrichment, EnrichmentSource
from ownergraph.ingestion.socrata import SocrataClient, soql_literal
from ownergraph.nyc.bbl import BBL

logger = logging.getLogger(__name__)

PLUTO_FIELDS = (
    "borocode,block,lot,address,ownername,unitsres,yearbuilt,"
    "assesstot,numfloors,bldgarea,zonedist1"
)


def _int(value: Any) -> int:
    """Parse PLUTO numerics, which may be blank or carry decimals."""
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def parse_enrichment(row: dict[str, Any]) -> Enrichment:
    return Enrichment(
        address=str(row.get("address") or "").strip(),
        owner_name=str(row.get("ownername") or "").strip(),
        units=_int(row.get("unitsres")),
        year_built=_int(row.get("yearbuilt")),
        assessed_value=_int(row.get("assesstot")),
        floors=_int(row.get("numfloors")),
        building_area=_int(row.get("bldgarea")),
        zoning=str(row.get("zonedist1") or "").strip(),
    )


class PlutoAdapter(EnrichmentSource):
    """Adapter for MapPLUTO tax lot facts."""

    def __init__(self, client: Optional[SocrataClient] = None, dataset: Optional[str] = None):
        self._socrata = client or SocrataClient(source_name=self.source_name)
        self.dataset = dataset or settings.pluto_dataset

    @property
    def source_name(self) -> str:
        return "PLUTO"

    async def lookup_enrichment(self, bbl: BBL) -> Optional[Enrichment]:
        found = await self.lookup_enrichment_batch(bbl.boro_code, [bbl])
        return found.get(bbl)

    async def lookup_enrichment_batch(
        self, boro_code: str, bbls: Sequence[BBL]
    ) -> dict[BBL, Enrichment]:
        """
        Look up many lots in one borough.

        Lots are split into chunks of ``pluto_lots_per_query``; a failed
        chunk raises SourceError for the whole batch.
        """
        results: dict[BBL, Enrichment] = {}
        wanted = {(b.block, b.lot): b for b in bbls}
        chunk_size = settings.pluto_lots_per_query
        keys = list(wanted)

        for start in range(0, len(keys), chunk_size):
            chunk = keys[start:start + chunk_size]
            conditions = " OR ".join(
                f"(block={soql_literal(block)} AND lot={soql_literal(lot)})"
                for block, lot in chunk
            )
            rows = await self._socrata.query(
                self.dataset,
                f"borocode={soql_literal(boro_code)} AND ({conditions})",
                select=PLUTO_FIELDS,
                limit=len(chunk) * 2,
            )
            for row in rows:
                bbl = BBL.coerce(boro_code, row.get("block"), row.get("lot"))
                match = wanted.get((bbl.block, bbl.lot))
                if match is not None and match not in results:
                    results[match] = parse_enrichment(row)

        return results

    async def close(self) -> None:
        await self._socrata.close()
