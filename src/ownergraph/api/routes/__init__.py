"""
API route modules.
"""

from ownergraph.api.routes.portfolio import router as portfolio_router

__all__ = [
    "portfolio_router",
]
