"""
HPD (Housing Preservation & Development) registration adapter.

Datasets on NYC Open Data:
- Multiple Dwelling Registrations (tesw-yqqr): one row per filing per parcel
- Registration Contacts (feu5-w2e2): owners, officers and agents per filing

Contact rows name either a corporation (``corporationname``) or a person
(``firstname``/``lastname``); that choice is made once here.
"""

import logging
import re
from typing import Any, Optional, Sequence

from ownergraph.config import settings
from ownergraph.ingestion.base_adapter import (
    BusinessAddress,
    Contact,
    HousingRegistrySource,
    OrganizationName,
    PersonName,
    Registration,
)
from ownergraph.ingestion.socrata import (
    SocrataClient,
    soql_in,
    soql_like_contains,
    soql_literal,
)
from ownergraph.nyc.bbl import BBL

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z])(?=[A-Z])")


def _text(row: dict[str, Any], key: str) -> str:
    value = row.get(key)
    return str(value).strip() if value is not None else ""


def humanize_contact_type(value: str) -> str:
    """
    Turn HPD's CamelCase contact types into readable roles.

    >>> humanize_contact_type("HeadOfficer")
    'Head Officer'
    """
    return _CAMEL_BOUNDARY.sub(" ", value.strip())


def parse_registration(row: dict[str, Any]) -> Optional[Registration]:
    """Parse a registrations row. Rows without an id are skipped."""
    registration_id = _text(row, "registrationid")
    if not registration_id:
        return None
    return Registration(
        registration_id=registration_id,
        boro_code=_text(row, "boroid"),
        block=_text(row, "block"),
        lot=_text(row, "lot"),
        house_number=_text(row, "housenumber"),
        street_name=_text(row, "streetname"),
        zip=_text(row, "zip"),
    )


def parse_contact(row: dict[str, Any]) -> Contact:
    """Parse a contacts row into a Contact with a typed name."""
    corporation = _text(row, "corporationname")
    if corporation:
        name = OrganizationName(name=corporation)
    else:
        name = PersonName(first=_text(row, "firstname"), last=_text(row, "lastname"))

    address = BusinessAddress(
        house_number=_text(row, "businesshousenumber"),
        street_name=_text(row, "businessstreetname"),
        apartment=_text(row, "businessapartment"),
        city=_text(row, "businesscity"),
        state=_text(row, "businessstate"),
        zip=_text(row, "businesszip"),
    )

    role = _text(row, "type") or _text(row, "contactdescription")
    return Contact(
        registration_id=_text(row, "registrationid"),
        role=humanize_contact_type(role),
        name=name,
        business_address=address if address.street_line else None,
    )


class HPDAdapter(HousingRegistrySource):
    """Adapter for HPD registrations and registration contacts."""

    def __init__(
        self,
        client: Optional[SocrataClient] = None,
        registrations_dataset: Optional[str] = None,
        contacts_dataset: Optional[str] = None,
    ):
        self._socrata = client or SocrataClient(source_name=self.source_name)
        self.registrations_dataset = registrations_dataset or settings.hpd_registrations_dataset
        self.contacts_dataset = contacts_dataset or settings.hpd_contacts_dataset

    @property
    def source_name(self) -> str:
        return "HPD"

    async def lookup_registrations(self, bbl: BBL) -> list[Registration]:
        where = (
            f"boroid={soql_literal(bbl.boro_code)} "
            f"AND block={soql_literal(bbl.block)} "
            f"AND lot={soql_literal(bbl.lot)}"
        )
        rows = await self._socrata.query(
            self.registrations_dataset,
            where,
            order="registrationenddate DESC",
            limit=settings.hpd_registrations_per_property,
        )
        return [r for r in map(parse_registration, rows) if r is not None]

    async def lookup_registrations_by_id(
        self, registration_ids: Sequence[str]
    ) -> list[Registration]:
        if not registration_ids:
            return []
        rows = await self._socrata.query(
            self.registrations_dataset,
            f"registrationid in({soql_in(registration_ids)})",
            limit=settings.hpd_registration_batch_rows,
        )
        return [r for r in map(parse_registration, rows) if r is not None]

    async def lookup_contacts(self, registration_id: str) -> list[Contact]:
        rows = await self._socrata.query(
            self.contacts_dataset,
            f"registrationid={soql_literal(registration_id)}",
            limit=settings.hpd_contacts_per_registration,
        )
        return [parse_contact(r) for r in rows]

    async def lookup_contacts_by_name(self, term: str, *, business: bool) -> list[Contact]:
        field = "corporationname" if business else "lastname"
        rows = await self._socrata.query(
            self.contacts_dataset,
            f"upper({field}) like {soql_like_contains(term.upper())}",
            limit=settings.hpd_contacts_per_name,
        )
        return [parse_contact(r) for r in rows]

    async def lookup_contacts_by_address(
        self, street_number: str, street_prefix: str
    ) -> list[Contact]:
        where = (
            f"businesshousenumber={soql_literal(street_number)} "
            f"AND upper(businessstreetname) like {soql_like_contains(street_prefix.upper())}"
        )
        rows = await self._socrata.query(
            self.contacts_dataset,
            where,
            limit=settings.hpd_contacts_per_address,
        )
        return [parse_contact(r) for r in rows]

    async def close(self) -> None:
        await self._socrata.close()
