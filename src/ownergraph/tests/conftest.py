"""
Pytest configuration and shared fixtures for Ownergraph tests.

The fakes below stand in for HPD and PLUTO. They answer from in-memory
records with the same matching rules the real adapters send as SoQL.
"""

import asyncio
from typing import Optional, Sequence, Union

import pytest

from ownergraph.crawler.frontier import CrawlLimits
from ownergraph.ingestion.base_adapter import (
    BusinessAddress,
    Contact,
    Enrichment,
    EnrichmentSource,
    HousingRegistrySource,
    OrganizationName,
    PersonName,
    Registration,
    SourceError,
)
from ownergraph.nyc.bbl import BBL


class FakeRegistry(HousingRegistrySource):
    """In-memory housing registry."""

    def __init__(self):
        self.registrations: dict[str, Registration] = {}
        self.contacts: list[Contact] = []
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()  # method names that raise SourceError
        self.delay: float = 0.0

    @property
    def source_name(self) -> str:
        return "HPD"

    def add_registration(
        self,
        registration_id: str,
        boro_code: str,
        block: str,
        lot: str,
        house_number: str = "",
        street_name: str = "",
        zip: str = "",
    ) -> Registration:
        registration = Registration(
            registration_id=registration_id,
            boro_code=boro_code,
            block=block,
            lot=lot,
            house_number=house_number,
            street_name=street_name,
            zip=zip,
        )
        self.registrations[registration_id] = registration
        return registration

    def add_contact(
        self,
        registration_id: str,
        name: Union[str, tuple[str, str]],
        role: str = "Head Officer",
        address: Optional[BusinessAddress] = None,
    ) -> Contact:
        """Add a contact; a ``(first, last)`` tuple files it as a person."""
        if isinstance(name, tuple):
            contact_name = PersonName(first=name[0], last=name[1])
        else:
            contact_name = OrganizationName(name=name)
        contact = Contact(
            registration_id=registration_id,
            role=role,
            name=contact_name,
            business_address=address,
        )
        self.contacts.append(contact)
        return contact

    def calls_to(self, method: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == method]

    async def _enter(self, method: str, *args) -> None:
        self.calls.append((method, *args))
        if self.delay:
            await asyncio.sleep(self.delay)
        if method in self.fail_on:
            raise SourceError("HPD", f"{method} unavailable")

    async def lookup_registrations(self, bbl: BBL) -> list[Registration]:
        await self._enter("lookup_registrations", bbl.key)
        return [r for r in self.registrations.values() if r.bbl == bbl]

    async def lookup_registrations_by_id(
        self, registration_ids: Sequence[str]
    ) -> list[Registration]:
        await self._enter("lookup_registrations_by_id", tuple(registration_ids))
        return [self.registrations[i] for i in registration_ids if i in self.registrations]

    async def lookup_contacts(self, registration_id: str) -> list[Contact]:
        await self._enter("lookup_contacts", registration_id)
        return [c for c in self.contacts if c.registration_id == registration_id]

    async def lookup_contacts_by_name(self, term: str, *, business: bool) -> list[Contact]:
        await self._enter("lookup_contacts_by_name", term, business)
        term = term.upper()
        if business:
            return [
                c for c in self.contacts
                if isinstance(c.name, OrganizationName) and term in c.name.name.upper()
            ]
        return [
            c for c in self.contacts
            if isinstance(c.name, PersonName) and term in c.name.last.upper()
        ]

    async def lookup_contacts_by_address(
        self, street_number: str, street_prefix: str
    ) -> list[Contact]:
        await self._enter("lookup_contacts_by_address", street_number, street_prefix)
        return [
            c for c in self.contacts
            if c.business_address is not None
            and c.business_address.house_number == street_number
            and street_prefix.upper() in c.business_address.street_name.upper()
        ]


class FakeEnrichment(EnrichmentSource):
    """In-memory tax lot facts."""

    def __init__(self, records: Optional[dict[BBL, Enrichment]] = None):
        self.records = dict(records or {})
        self.batches: list[tuple[str, tuple[BBL, ...]]] = []
        self.fail = False

    @property
    def source_name(self) -> str:
        return "PLUTO"

    async def lookup_enrichment(self, bbl: BBL) -> Optional[Enrichment]:
        if self.fail:
            raise SourceError("PLUTO", "unavailable")
        return self.records.get(bbl)

    async def lookup_enrichment_batch(
        self, boro_code: str, bbls: Sequence[BBL]
    ) -> dict[BBL, Enrichment]:
        self.batches.append((boro_code, tuple(bbls)))
        return await super().lookup_enrichment_batch(boro_code, bbls)


MAIN_ST = BusinessAddress(
    house_number="123",
    street_name="MAIN ST",
    city="NEW YORK",
    state="NY",
    zip="10001",
)


@pytest.fixture
def registry() -> FakeRegistry:
    """Empty fake registry."""
    return FakeRegistry()


@pytest.fixture
def enrichment() -> FakeEnrichment:
    """Empty fake enrichment source."""
    return FakeEnrichment()


@pytest.fixture
def limits() -> CrawlLimits:
    """Default fan-out caps, independent of the environment."""
    return CrawlLimits()


@pytest.fixture
def main_st() -> BusinessAddress:
    """A business address two shell entities share."""
    return MAIN_ST


@pytest.fixture
def single_owner_registry(registry: FakeRegistry) -> FakeRegistry:
    """
    One parcel, one filing, one corporate owner with no business address.

    Seed: 1-1000-10
    """
    registry.add_registration("R1", "1", "1000", "10", "10", "WEST ST", "10014")
    registry.add_contact("R1", "ABC Realty, LLC.", role="Head Officer")
    return registry


@pytest.fixture
def shared_address_registry(registry: FakeRegistry, main_st: BusinessAddress) -> FakeRegistry:
    """
    Two parcels whose owners share a mail drop but no filing.

    Seed 1-100-1 is owned by ABC REALTY LLC; 3-200-2 by XYZ HOLDINGS LLC.
    Both give 123 Main St, Suite 400 / 123 Main St as business address.
    """
    registry.add_registration("R1", "1", "100", "1", "1", "FIRST AVE", "10003")
    registry.add_registration("R2", "3", "200", "2", "2", "SECOND AVE", "11201")
    registry.add_contact(
        "R1", "ABC REALTY LLC", role="Corporate Owner",
        address=main_st.model_copy(update={"apartment": "SUITE 400"}),
    )
    registry.add_contact("R2", "XYZ HOLDINGS LLC", role="Corporate Owner", address=main_st)
    return registry
