"""
In-memory graph store for a single crawl.

Backed by a NetworkX MultiDiGraph so parallel edges survive and graph
algorithms are available to later stages. Nothing here is persisted.
"""

import logging
from typing import Iterable, Iterator, Optional

import networkx as nx

from ownergraph.graph.edges import Edge
from ownergraph.graph.schema import Node, NodeKind

logger = logging.getLogger(__name__)


class DanglingEdgeError(ValueError):
    """Raised when an edge references a node that is not in the store."""


class GraphStore:
    """
    Node/edge set built during one crawl.

    Invariants:
    - nodes are keyed by id; re-inserting an id merges attributes
    - edges are a multigraph; duplicates are kept
    - both endpoints exist before an edge is added
    """

    def __init__(self):
        self.graph = nx.MultiDiGraph()
        self._edges: list[Edge] = []

    def __contains__(self, node_id: str) -> bool:
        return self.graph.has_node(node_id)

    @property
    def node_count(self) -> int:
        return self.graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def add_node(self, node: Node) -> Node:
        """
        Insert a node, or merge its attributes into the existing one.

        Returns:
            The stored node (the pre-existing instance on re-insert)
        """
        existing = self.get_node(node.id)
        if existing is not None:
            existing.merge_attributes(node.attributes)
            return existing
        self.graph.add_node(node.id, node=node)
        return node

    def add_edge(self, edge: Edge) -> Edge:
        """Append an edge. Both endpoints must already be stored."""
        for endpoint in (edge.from_id, edge.to_id):
            if endpoint not in self:
                raise DanglingEdgeError(f"Edge endpoint {endpoint!r} is not in the graph")
        self.graph.add_edge(edge.from_id, edge.to_id, edge=edge)
        self._edges.append(edge)
        return edge

    def get_node(self, node_id: str) -> Optional[Node]:
        if node_id not in self:
            return None
        return self.graph.nodes[node_id]["node"]

    def nodes(self, kind: Optional[NodeKind] = None) -> list[Node]:
        """All nodes in insertion order, optionally filtered by kind."""
        result = [data["node"] for _, data in self.graph.nodes(data=True)]
        if kind is not None:
            result = [n for n in result if n.kind == kind]
        return result

    def edges(self) -> list[Edge]:
        """All edges in insertion order."""
        return list(self._edges)

    def incident_edges(self, node_id: str) -> list[Edge]:
        """Edges in either direction touching ``node_id``."""
        if node_id not in self:
            return []
        out_edges = [d["edge"] for _, _, d in self.graph.out_edges(node_id, data=True)]
        in_edges = [
            d["edge"]
            for u, _, d in self.graph.in_edges(node_id, data=True)
            if u != node_id  # self-loops already counted as outgoing
        ]
        return out_edges + in_edges

    def neighbors(self, node_id: str) -> Iterator[Node]:
        """Distinct adjacent nodes, direction-agnostic."""
        seen: set[str] = set()
        for edge in self.incident_edges(node_id):
            other = edge.other(node_id)
            if other not in seen:
                seen.add(other)
                yield self.get_node(other)

    def subgraph(self, node_ids: Iterable[str]) -> "GraphStore":
        """
        Copy of the store restricted to ``node_ids``.

        Edges are kept only when both endpoints are inside the set.
        Node objects are shared with this store.
        """
        keep = set(node_ids)
        result = GraphStore()
        for node in self.nodes():
            if node.id in keep:
                result.graph.add_node(node.id, node=node)
        for edge in self._edges:
            if edge.from_id in keep and edge.to_id in keep:
                result.add_edge(edge)
        return result

    def to_dict(self) -> dict:
        return {
            "nodes": [
                {"id": n.id, "kind": n.kind.value, "label": n.label, "attributes": n.attributes}
                for n in self.nodes()
            ],
            "edges": [e.to_dict() for e in self._edges],
        }
