"""
Ownership graph package.

In-memory node/edge model, store and component extraction for one crawl.
"""

from ownergraph.graph.schema import (
    Node,
    NodeKind,
    address_node,
    make_node_id,
    name_node,
    property_node,
)
from ownergraph.graph.edges import Edge, EdgeRole
from ownergraph.graph.store import DanglingEdgeError, GraphStore
from ownergraph.graph.component import component_ids, extract_component

__all__ = [
    "Node",
    "NodeKind",
    "address_node",
    "make_node_id",
    "name_node",
    "property_node",
    "Edge",
    "EdgeRole",
    "DanglingEdgeError",
    "GraphStore",
    "component_ids",
    "extract_component",
]
