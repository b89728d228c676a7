"""NYC-specific utilities for parcel identifiers, owner names and mailing addresses."""

from ownergraph.nyc.bbl import (
    BBL,
    BOROUGH_NAMES,
    InvalidSeedError,
)
from ownergraph.nyc.names import (
    ENTITY_KEYWORDS,
    EntityClassifier,
    KeywordEntityClassifier,
    is_business_entity,
    normalize_name,
    surname_token,
)
from ownergraph.nyc.address import (
    MIN_ADDRESS_KEY_LENGTH,
    AddressSearchKey,
    address_search_key,
    is_significant_address,
    normalize_address,
)

__all__ = [
    # BBL
    "BBL",
    "BOROUGH_NAMES",
    "InvalidSeedError",
    # Names
    "ENTITY_KEYWORDS",
    "EntityClassifier",
    "KeywordEntityClassifier",
    "is_business_entity",
    "normalize_name",
    "surname_token",
    # Addresses
    "MIN_ADDRESS_KEY_LENGTH",
    "AddressSearchKey",
    "address_search_key",
    "is_significant_address",
    "normalize_address",
]
