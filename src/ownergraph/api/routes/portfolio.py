"""
Portfolio API routes.

Builds the ownership graph around one NYC parcel and returns the ranked
portfolio: properties, people, entities and shared business addresses.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from ownergraph.api.deps import PortfolioServiceDep
from ownergraph.config import settings
from ownergraph.nyc.bbl import InvalidSeedError
from ownergraph.portfolio.models import PortfolioResult

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{boro_code}/{block}/{lot}", response_model=PortfolioResult)
async def get_portfolio(
    boro_code: str,
    block: str,
    lot: str,
    service: PortfolioServiceDep,
    max_depth: Optional[int] = Query(
        None, ge=1, le=settings.api_max_depth, description="Crawl rounds"
    ),
) -> PortfolioResult:
    """
    Crawl outward from a parcel and return its portfolio.

    Returns 422 for a malformed BBL. A parcel with no filings yields an
    empty portfolio, not an error.
    """
    try:
        return await service.build((boro_code, block, lot), max_depth=max_depth)
    except InvalidSeedError as e:
        raise HTTPException(status_code=422, detail=str(e))
