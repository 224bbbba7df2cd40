"""Minimum-latency spanning tree (eager Prim).

For every vertex outside the tree the queue holds the lowest latency of an
edge joining it to the tree. A key is replaced only by a strictly smaller
latency, so among equal-weight candidates the first edge discovered wins.
On a disconnected graph the tree covers only the start vertex's component.
"""

from __future__ import annotations

import math
from typing import List, Optional

from netlat.algorithms.pq import IndexMinPQ
from netlat.graph import Edge, Graph
from netlat.logging import get_logger

LOGGER = get_logger(__name__)


class MinimumSpanningTree:
    """Spanning tree of the start vertex's component."""

    def __init__(self, graph: Graph, start: Optional[int], edges: List[Edge]) -> None:
        self._graph = graph
        self._start = start
        self._edges = edges

    @property
    def start(self) -> Optional[int]:
        return self._start

    def edges(self) -> List[Edge]:
        """Tree edges in the order their far endpoint joined the tree."""
        return list(self._edges)

    def weight(self) -> float:
        """Sum of tree edge latencies."""
        return math.fsum(edge.latency for edge in self._edges)

    def vertices(self) -> List[int]:
        """Vertices covered by the tree, sorted."""
        if self._start is None:
            return []
        covered = {self._start}
        for edge in self._edges:
            covered.add(edge.v)
            covered.add(edge.w)
        return sorted(covered)

    def spans_graph(self) -> bool:
        """True if the tree reaches every vertex of the graph."""
        return len(self._edges) == max(self._graph.num_vertices - 1, 0)


def minimum_spanning_tree(graph: Graph, start: int = 0) -> MinimumSpanningTree:
    """Grow a minimum-latency spanning tree from ``start``.

    Args:
        graph: Topology; not modified.
        start: Root vertex. Ignored for an empty graph.

    Returns:
        MinimumSpanningTree over the component containing ``start``.

    Raises:
        ValidationError: If ``start`` is out of range on a non-empty graph.
    """
    n = graph.num_vertices
    if n == 0:
        return MinimumSpanningTree(graph, None, [])
    graph.validate_vertex(start)

    dist_to = [math.inf] * n
    edge_to: List[Optional[Edge]] = [None] * n
    in_tree = [False] * n
    tree: List[Edge] = []

    pq = IndexMinPQ(n)
    dist_to[start] = 0.0
    pq.insert(start, 0.0)
    while pq:
        vertex, _ = pq.pop_min()
        in_tree[vertex] = True
        joining = edge_to[vertex]
        if joining is not None:
            tree.append(joining)
        _scan(graph, vertex, dist_to, edge_to, in_tree, pq)

    LOGGER.debug(
        "Spanning tree from %d covers %d of %d vertices", start, len(tree) + 1, n
    )
    return MinimumSpanningTree(graph, start, tree)


def _scan(
    graph: Graph,
    vertex: int,
    dist_to: List[float],
    edge_to: List[Optional[Edge]],
    in_tree: List[bool],
    pq: IndexMinPQ,
) -> None:
    """Offer every edge from ``vertex`` to a non-tree neighbor."""
    for edge in graph.adj(vertex):
        neighbor = edge.other(vertex)
        if in_tree[neighbor]:
            continue
        weight = edge.latency
        if weight < dist_to[neighbor]:
            dist_to[neighbor] = weight
            edge_to[neighbor] = edge
            if neighbor in pq:
                pq.decrease_key(neighbor, weight)
            else:
                pq.insert(neighbor, weight)
