"""Lowest-latency paths from a single source (Dijkstra).

Edge weight is the link latency. Non-negative weights are checked up front.
Each call allocates its own priority queue and
distance/predecessor arrays and hands them to the returned `ShortestPaths`.

Notes:
    The optimality check after the search verifies, for every edge (x, y),
    ``dist[y] <= dist[x] + latency(x, y)`` and exact equality along
    predecessor edges. A failure raises ``InternalInconsistencyError``.
"""

from __future__ import annotations

import math
from typing import List, Optional

from netlat.algorithms.pq import IndexMinPQ
from netlat.config import ANALYSIS_CONFIG, AnalysisConfig
from netlat.errors import InternalInconsistencyError, ValidationError
from netlat.graph import Edge, Graph
from netlat.logging import get_logger
from netlat.types import Cost

LOGGER = get_logger(__name__)


class ShortestPaths:
    """Shortest-path tree rooted at ``source``.

    Built by `shortest_paths`; holds the per-vertex distances and predecessor
    edges of one query.
    """

    def __init__(
        self,
        graph: Graph,
        source: int,
        dist_to: List[float],
        edge_to: List[Optional[Edge]],
    ) -> None:
        self._graph = graph
        self._source = source
        self._dist_to = dist_to
        self._edge_to = edge_to

    @property
    def source(self) -> int:
        return self._source

    def dist_to(self, vertex: int) -> float:
        """Return the latency of the lowest-latency path, ``math.inf`` if none."""
        self._graph.validate_vertex(vertex)
        return self._dist_to[vertex]

    def has_path_to(self, vertex: int) -> bool:
        """Return True if ``vertex`` is reachable from the source."""
        self._graph.validate_vertex(vertex)
        return self._dist_to[vertex] < math.inf

    def path_to(self, vertex: int) -> Optional[List[Edge]]:
        """Return the edges from the source to ``vertex`` in travel order.

        Returns None when ``vertex`` is unreachable and an empty list for the
        source itself.
        """
        if not self.has_path_to(vertex):
            return None
        path: List[Edge] = []
        current = vertex
        edge = self._edge_to[current]
        while edge is not None:
            path.append(edge)
            current = edge.other(current)
            edge = self._edge_to[current]
        path.reverse()
        return path

    def bottleneck_bandwidth(self, vertex: int) -> Optional[int]:
        """Return the smallest bandwidth along ``path_to(vertex)``.

        None when the vertex is unreachable or is the source.
        """
        path = self.path_to(vertex)
        if not path:
            return None
        return min(edge.bandwidth for edge in path)

    def check(self) -> None:
        """Verify the optimality conditions of the shortest-path tree.

        Raises:
            InternalInconsistencyError: On the first violated condition.
        """
        graph = self._graph
        source = self._source
        dist_to = self._dist_to
        edge_to = self._edge_to

        if dist_to[source] != 0.0 or edge_to[source] is not None:
            raise InternalInconsistencyError("dist_to[source] and edge_to[source] inconsistent")

        for vertex in graph.vertices():
            if vertex == source:
                continue
            if edge_to[vertex] is None and dist_to[vertex] != math.inf:
                raise InternalInconsistencyError(
                    f"dist_to and edge_to inconsistent at vertex {vertex}"
                )

        for edge in graph.edges():
            weight = edge.latency
            for x in (edge.v, edge.w):
                y = edge.other(x)
                if dist_to[x] + weight < dist_to[y]:
                    raise InternalInconsistencyError(f"Edge {edge} not relaxed")

        for y in graph.vertices():
            edge = edge_to[y]
            if edge is None:
                continue
            x = edge.other(y)
            if dist_to[x] + edge.latency != dist_to[y]:
                raise InternalInconsistencyError(
                    f"Edge {edge} on the shortest-path tree is not tight"
                )


def shortest_paths(
    graph: Graph,
    source: int,
    config: Optional[AnalysisConfig] = None,
) -> ShortestPaths:
    """Compute lowest-latency paths from ``source`` to every vertex.

    Args:
        graph: Topology to search; not modified.
        source: Source vertex.
        config: Analysis settings; defaults to ``ANALYSIS_CONFIG``.

    Returns:
        ShortestPaths with distance and path queries.

    Raises:
        ValidationError: If ``source`` is out of range or an edge has negative
            latency.
        InternalInconsistencyError: If the self-check fails.
    """
    config = config or ANALYSIS_CONFIG
    graph.validate_vertex(source)

    for edge in graph.edges():
        if edge.latency < 0:
            raise ValidationError(f"Edge {edge} has negative latency")

    n = graph.num_vertices
    dist_to: List[float] = [math.inf] * n
    edge_to: List[Optional[Edge]] = [None] * n
    dist_to[source] = 0.0

    pq = IndexMinPQ(n)
    pq.insert(source, 0.0)
    settled = 0
    while pq:
        vertex, _ = pq.pop_min()
        settled += 1
        for edge in graph.adj(vertex):
            _relax(edge, vertex, dist_to, edge_to, pq)

    LOGGER.debug(
        "Shortest paths from %d settled %d of %d vertices", source, settled, n
    )

    result = ShortestPaths(graph, source, dist_to, edge_to)
    if config.check_optimality:
        result.check()
    return result


def _relax(
    edge: Edge,
    vertex: int,
    dist_to: List[float],
    edge_to: List[Optional[Edge]],
    pq: IndexMinPQ,
) -> None:
    """Relax ``edge`` leaving ``vertex`` and update the queue on improvement."""
    neighbor = edge.other(vertex)
    candidate: Cost = dist_to[vertex] + edge.latency
    if candidate < dist_to[neighbor]:
        dist_to[neighbor] = candidate
        edge_to[neighbor] = edge
        if neighbor in pq:
            pq.decrease_key(neighbor, candidate)
        else:
            pq.insert(neighbor, candidate)
