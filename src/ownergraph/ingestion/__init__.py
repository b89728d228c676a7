"""
Data ingestion module for Ownergraph.

Provides adapters for NYC Open Data sources:
- HPD Multiple Dwelling Registrations and Registration Contacts
- MapPLUTO tax lot enrichment
"""

from ownergraph.ingestion.base_adapter import (
    BusinessAddress,
    Contact,
    ContactName,
    Enrichment,
    EnrichmentSource,
    HousingRegistrySource,
    OrganizationName,
    PersonName,
    Registration,
    SourceError,
)
from ownergraph.ingestion.rate_limiter import (
    RateLimitConfig,
    RateLimitedClient,
    RateLimiter,
    RateLimitExhausted,
)
from ownergraph.ingestion.socrata import SocrataClient
from ownergraph.ingestion.hpd import HPDAdapter
from ownergraph.ingestion.pluto import PlutoAdapter

__all__ = [
    # Contracts and records
    "BusinessAddress",
    "Contact",
    "ContactName",
    "Enrichment",
    "EnrichmentSource",
    "HousingRegistrySource",
    "OrganizationName",
    "PersonName",
    "Registration",
    "SourceError",
    # Rate limiting
    "RateLimitConfig",
    "RateLimitedClient",
    "RateLimiter",
    "RateLimitExhausted",
    # NYC Open Data
    "SocrataClient",
    "HPDAdapter",
    "PlutoAdapter",
]
