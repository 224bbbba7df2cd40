"""Brute-force search for vertex pairs whose removal disconnects the network.

Every unordered pair ``(i, j)`` is tested by relabeling components on the
shared edge array with both vertices and their incident edges masked out. The
scan is O(V^2 * (V + E)); it reports pairs, not single articulation points.
"""

from __future__ import annotations

from itertools import combinations
from typing import List, Optional, Set, Tuple

import numpy as np

from netlat.algorithms.components import connected_components
from netlat.config import ANALYSIS_CONFIG, AnalysisConfig
from netlat.graph import Graph
from netlat.logging import get_logger

LOGGER = get_logger(__name__)

VertexPair = Tuple[int, int]


class CutPairs:
    """Set of disconnecting vertex pairs found by `find_cut_pairs`."""

    def __init__(self, graph: Graph, pairs: Set[VertexPair]) -> None:
        self._graph = graph
        self._pairs = pairs

    def disconnects(self, i: int, j: int) -> bool:
        """True if removing both ``i`` and ``j`` leaves more than one component."""
        self._graph.validate_vertex(i)
        self._graph.validate_vertex(j)
        if i == j:
            return False
        return (min(i, j), max(i, j)) in self._pairs

    def pairs(self) -> List[VertexPair]:
        """All disconnecting pairs as sorted ``(i, j)`` tuples with ``i < j``."""
        return sorted(self._pairs)

    def count(self) -> int:
        return len(self._pairs)


def find_cut_pairs(graph: Graph, config: Optional[AnalysisConfig] = None) -> CutPairs:
    """Test every vertex pair for disconnection.

    Args:
        graph: Topology; not modified.
        config: Analysis settings; defaults to ``ANALYSIS_CONFIG``.

    Returns:
        CutPairs with the disconnecting pairs.
    """
    config = config or ANALYSIS_CONFIG
    n = graph.num_vertices
    if n > config.cut_pair_warn_vertices:
        LOGGER.warning(
            "Cut-pair scan over %d vertices visits about %d elements",
            n,
            config.cut_pair_work(n, graph.num_edges),
        )

    # Incident edge indices per vertex, built once over the shared edge array
    incident = [np.asarray(graph.adj_indices(v), dtype=np.intp) for v in range(n)]
    full_edges = np.ones(graph.num_edges, dtype=bool)
    full_nodes = np.ones(n, dtype=bool)

    found: Set[VertexPair] = set()
    for i, j in combinations(range(n), 2):
        node_mask = full_nodes.copy()
        node_mask[[i, j]] = False
        edge_mask = full_edges.copy()
        edge_mask[incident[i]] = False
        edge_mask[incident[j]] = False

        components = connected_components(graph, node_mask=node_mask, edge_mask=edge_mask)
        if components.count() > 1:
            found.add((i, j))

    LOGGER.debug("Cut-pair scan over %d vertices found %d pairs", n, len(found))
    return CutPairs(graph, found)
