"""
Tests for connected-component extraction.
"""

import pytest

from ownergraph.graph.component import component_ids, extract_component
from ownergraph.graph.edges import Edge
from ownergraph.graph.schema import address_node, name_node, property_node
from ownergraph.graph.store import GraphStore
from ownergraph.nyc.bbl import BBL


@pytest.fixture
def two_clusters() -> GraphStore:
    """
    Seed cluster: P1 <- ACME LLC -> ADDR <- SHELL LLC -> P2
    Detached:     P3 <- OTHER LLC
    """
    store = GraphStore()
    p1 = store.add_node(property_node(BBL("1", "1", "1")))
    p2 = store.add_node(property_node(BBL("1", "2", "2")))
    p3 = store.add_node(property_node(BBL("2", "3", "3")))
    acme = store.add_node(name_node("ACME LLC", True))
    shell = store.add_node(name_node("SHELL LLC", True))
    other = store.add_node(name_node("OTHER LLC", True))
    addr = store.add_node(address_node("123 MAIN ST NEW YORK NY 10001"))

    store.add_edge(Edge(acme.id, p1.id, "HPD", "Owner"))
    store.add_edge(Edge(acme.id, addr.id, "HPD", "business_address"))
    store.add_edge(Edge(shell.id, addr.id, "HPD", "shared_business_address"))
    store.add_edge(Edge(shell.id, p2.id, "HPD", "registration"))
    store.add_edge(Edge(other.id, p3.id, "HPD", "Owner"))
    return store


class TestComponentExtraction:
    """Only the seed's cluster survives."""

    def test_component_ignores_edge_direction(self, two_clusters):
        ids = component_ids(two_clusters, "property:1-1-1")

        assert ids == {
            "property:1-1-1",
            "property:1-2-2",
            "entity:ACME LLC",
            "entity:SHELL LLC",
            "address:123 MAIN ST NEW YORK NY 10001",
        }

    def test_detached_cluster_dropped(self, two_clusters):
        extracted = extract_component(two_clusters, "property:1-1-1")

        assert extracted.node_count == 5
        assert extracted.edge_count == 4
        assert "entity:OTHER LLC" not in extracted
        assert "property:2-3-3" not in extracted

    def test_no_dangling_edges_after_extraction(self, two_clusters):
        extracted = extract_component(two_clusters, "property:1-1-1")

        for edge in extracted.edges():
            assert edge.from_id in extracted
            assert edge.to_id in extracted

    def test_isolated_seed(self):
        store = GraphStore()
        store.add_node(property_node(BBL("1", "1", "1")))

        extracted = extract_component(store, "property:1-1-1")
        assert extracted.node_count == 1
        assert extracted.edge_count == 0

    def test_missing_seed(self):
        assert component_ids(GraphStore(), "property:9-9-9") == {"property:9-9-9"}
        assert extract_component(GraphStore(), "property:9-9-9").node_count == 0
