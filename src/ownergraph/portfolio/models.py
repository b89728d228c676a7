"""
Portfolio result schemas.

Attributes are snake_case in Python and camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PortfolioProperty(_CamelModel):
    """A parcel in the subject's portfolio, with tax lot facts."""

    bbl: str
    address: str = ""
    borough: str = ""
    boro_code: str = ""
    block: str = ""
    lot: str = ""
    units: int = 0
    year_built: int = 0
    assessed_value: int = 0
    num_floors: int = 0
    bldg_area: int = 0
    zoning: str = ""
    owner_name: str = ""
    connected_via: list[str] = Field(default_factory=list)


class PortfolioParty(_CamelModel):
    """A person or business entity in the component."""

    name: str
    roles: list[str] = Field(default_factory=list)
    addresses: list[str] = Field(default_factory=list)
    property_count: int = 0


class CommonAddress(_CamelModel):
    """A business address and how many edges point at it."""

    address: str
    count: int


class GraphSummary(_CamelModel):
    """Size of the crawl that produced the result."""

    node_count: int = 0
    edge_count: int = 0
    rounds_run: int = 0
    timed_out: bool = False
    failed_lookups: int = 0


class PortfolioResult(_CamelModel):
    """Everything found connected to one subject property."""

    properties: list[PortfolioProperty] = Field(default_factory=list)
    people: list[PortfolioParty] = Field(default_factory=list)
    entities: list[PortfolioParty] = Field(default_factory=list)
    common_addresses: list[CommonAddress] = Field(default_factory=list)
    graph: GraphSummary = Field(default_factory=GraphSummary)

    def to_dict(self) -> dict:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(by_alias=True)
