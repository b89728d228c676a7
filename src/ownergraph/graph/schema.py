"""
Ownership Graph Node Types.

Nodes are keyed by a deterministic id so that every mention of the same
owner, mail drop or parcel collapses onto one node within a crawl.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ownergraph.nyc.bbl import BBL
from ownergraph.nyc.names import normalize_name


class NodeKind(str, Enum):
    """Kinds of node in the ownership graph."""

    PERSON = "person"
    ENTITY = "entity"  # business entity
    ADDRESS = "address"
    PROPERTY = "property"


def make_node_id(kind: NodeKind, label: str) -> str:
    """
    Deterministic node id: ``kind:normalized-label``.

    Property labels are BBL keys (``1-1234-56``), which normalization
    leaves untouched.
    """
    return f"{kind.value}:{normalize_name(label)}"


@dataclass
class Node:
    """
    A node in the ownership graph.

    ``attributes`` is a kind-specific payload filled in opportunistically,
    e.g. borough/block/lot/address/zip for properties.
    """
    id: str
    kind: NodeKind
    label: str
    attributes: dict[str, Any] = field(default_factory=dict)

    def merge_attributes(self, attributes: Optional[dict[str, Any]]) -> None:
        """Fill in attributes this node does not have a value for yet."""
        for key, value in (attributes or {}).items():
            if value in (None, ""):
                continue
            if self.attributes.get(key) in (None, ""):
                self.attributes[key] = value


def name_node(label: str, is_entity: bool) -> Node:
    """Person or Entity node for an already-normalized name."""
    kind = NodeKind.ENTITY if is_entity else NodeKind.PERSON
    normalized = normalize_name(label)
    return Node(id=make_node_id(kind, normalized), kind=kind, label=normalized)


def address_node(key: str, display: Optional[str] = None) -> Node:
    """Address node for a normalized address key."""
    attributes = {"display": display} if display else {}
    return Node(
        id=make_node_id(NodeKind.ADDRESS, key),
        kind=NodeKind.ADDRESS,
        label=key,
        attributes=attributes,
    )


def property_node(bbl: BBL, **attributes: Any) -> Node:
    """Property node for a parcel, carrying whatever fields are known."""
    attrs = {
        "boro_code": bbl.boro_code,
        "borough": bbl.borough,
        "block": bbl.block,
        "lot": bbl.lot,
    }
    attrs.update({k: v for k, v in attributes.items() if v not in (None, "")})
    return Node(
        id=make_node_id(NodeKind.PROPERTY, bbl.key),
        kind=NodeKind.PROPERTY,
        label=bbl.key,
        attributes=attrs,
    )
