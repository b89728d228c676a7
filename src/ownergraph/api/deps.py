"""
FastAPI dependencies.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from ownergraph.portfolio.service import PortfolioService


async def get_portfolio_service(request: Request) -> PortfolioService:
    """Service created by the application lifespan."""
    service = getattr(request.app.state, "portfolio_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Data sources are not initialised")
    return service


PortfolioServiceDep = Annotated[PortfolioService, Depends(get_portfolio_service)]
