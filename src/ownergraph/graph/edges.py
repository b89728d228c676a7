"""
Ownership Graph Edge Types.

Edges are directed and labeled but never deduplicated: two filings that
link the same owner to the same parcel are two edges, because the
multiplicity is itself a signal.
"""

from dataclasses import dataclass


class EdgeRole:
    """Relation kinds produced by the crawler itself."""

    BUSINESS_ADDRESS = "business_address"
    SHARED_BUSINESS_ADDRESS = "shared_business_address"
    REGISTRATION = "registration"
    CONTACT = "contact"  # fallback when a filing gives no role
    # Contact edges carry the filing's own role ("Head Officer", ...)


@dataclass(frozen=True)
class Edge:
    """
    A relation between two nodes.

    ``source`` records which adapter produced the edge; ``role`` records
    the relation kind.
    """
    from_id: str
    to_id: str
    source: str
    role: str

    def other(self, node_id: str) -> str:
        """The endpoint opposite ``node_id``."""
        return self.to_id if self.from_id == node_id else self.from_id

    def to_dict(self) -> dict:
        return {
            "from": self.from_id,
            "to": self.to_id,
            "source": self.source,
            "role": self.role,
        }
