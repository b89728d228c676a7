"""
Base contracts for external data sources.

The crawler only depends on these abstract sources. Each lookup may be
slow, may come back empty, or may raise SourceError; callers decide how
to degrade.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Annotated, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field

from ownergraph.nyc.address import normalize_address
from ownergraph.nyc.bbl import BBL


class SourceError(Exception):
    """An external lookup failed (transport, HTTP status or payload)."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")


class PersonName(BaseModel):
    """Contact filed as a natural person."""

    kind: Literal["person"] = "person"
    first: str = ""
    last: str = ""

    @property
    def display(self) -> str:
        return " ".join(p for p in (self.first.strip(), self.last.strip()) if p)


class OrganizationName(BaseModel):
    """Contact filed as a corporation."""

    kind: Literal["organization"] = "organization"
    name: str = ""

    @property
    def display(self) -> str:
        return self.name.strip()


ContactName = Annotated[Union[PersonName, OrganizationName], Field(discriminator="kind")]


class BusinessAddress(BaseModel):
    """Business mailing address given on a registration contact."""

    house_number: str = ""
    street_name: str = ""
    apartment: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""

    @property
    def street_line(self) -> str:
        return " ".join(p for p in (self.house_number, self.street_name) if p).strip()

    @property
    def readable(self) -> str:
        """Human-readable single line, unit included."""
        street = " ".join(p for p in (self.street_line, self.apartment) if p)
        locality = " ".join(p for p in (self.city, self.state, self.zip) if p)
        return ", ".join(p for p in (street, locality) if p)

    @property
    def key(self) -> str:
        """
        Normalized matching key: street line plus city, state and zip.

        The unit is left out so tenants of one mail drop collide.
        """
        if not self.street_line:
            return ""
        return normalize_address(f"{self.street_line} {self.city} {self.state} {self.zip}")


class Registration(BaseModel):
    """A housing registration filed for one parcel."""

    registration_id: str
    boro_code: str = ""
    block: str = ""
    lot: str = ""
    house_number: str = ""
    street_name: str = ""
    zip: str = ""

    @property
    def bbl(self) -> BBL:
        return BBL.coerce(self.boro_code, self.block, self.lot)

    @property
    def street_address(self) -> str:
        if not self.house_number:
            return ""
        return f"{self.house_number} {self.street_name}".strip()


class Contact(BaseModel):
    """A named person or corporation appearing on a registration."""

    registration_id: str = ""
    role: str = ""
    name: ContactName = Field(default_factory=PersonName)
    business_address: Optional[BusinessAddress] = None

    @property
    def display_name(self) -> str:
        return self.name.display


class Enrichment(BaseModel):
    """Tax/assessment facts for one parcel."""

    address: str = ""
    owner_name: str = ""
    units: int = 0
    year_built: int = 0
    assessed_value: int = 0
    floors: int = 0
    building_area: int = 0
    zoning: str = ""


class _SourceBase(ABC):
    """Shared lifecycle for sources."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """
        Unique identifier for this data source.

        Recorded as edge provenance and used for logging.
        """
        pass

    async def close(self) -> None:
        """Clean up any resources (connections, etc.)"""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False


class HousingRegistrySource(_SourceBase):
    """Registration and contact lookups."""

    @abstractmethod
    async def lookup_registrations(self, bbl: BBL) -> list[Registration]:
        """Registrations filed for a parcel, newest first."""
        pass

    @abstractmethod
    async def lookup_registrations_by_id(
        self, registration_ids: Sequence[str]
    ) -> list[Registration]:
        """Batch fetch of registrations by id."""
        pass

    @abstractmethod
    async def lookup_contacts(self, registration_id: str) -> list[Contact]:
        """Contacts named on one registration."""
        pass

    @abstractmethod
    async def lookup_contacts_by_name(self, term: str, *, business: bool) -> list[Contact]:
        """
        Contacts whose business name (``business=True``) or surname
        contains ``term``.
        """
        pass

    @abstractmethod
    async def lookup_contacts_by_address(
        self, street_number: str, street_prefix: str
    ) -> list[Contact]:
        """Contacts whose business address has this number and street prefix."""
        pass


class EnrichmentSource(_SourceBase):
    """Tax/assessment lookups."""

    @abstractmethod
    async def lookup_enrichment(self, bbl: BBL) -> Optional[Enrichment]:
        """Facts for one parcel, or None when the parcel is unknown."""
        pass

    async def lookup_enrichment_batch(
        self, boro_code: str, bbls: Sequence[BBL]
    ) -> dict[BBL, Enrichment]:
        """
        Facts for many parcels in one borough.

        The default issues one lookup per parcel; sources that can batch
        should override it.
        """
        results = await asyncio.gather(*(self.lookup_enrichment(b) for b in bbls))
        return {bbl: found for bbl, found in zip(bbls, results) if found is not None}
