"""
Connected-component extraction.

After a crawl, keeps only the nodes reachable from the seed property,
treating edges as undirected. Under a correct crawl this is a no-op, but
it is not assumed.
"""

import logging

import networkx as nx

from ownergraph.graph.store import GraphStore

logger = logging.getLogger(__name__)


def component_ids(store: GraphStore, seed_id: str) -> set[str]:
    """Ids of every node reachable from ``seed_id`` in either direction."""
    if seed_id not in store:
        return {seed_id}
    undirected = store.graph.to_undirected(as_view=True)
    # node_connected_component is a breadth-first search from the seed
    return set(nx.node_connected_component(undirected, seed_id))


def extract_component(store: GraphStore, seed_id: str) -> GraphStore:
    """Filter the store down to the seed's connected component."""
    component = component_ids(store, seed_id)
    extracted = store.subgraph(component)

    dropped = store.node_count - extracted.node_count
    if dropped:
        logger.warning(
            f"Dropped {dropped} nodes not connected to {seed_id} "
            f"({extracted.node_count} kept)"
        )
    return extracted
