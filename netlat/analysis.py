"""Network analysis API.

Usage:
    from netlat import analyze, read_topology

    ctx = analyze(read_topology("network.txt"))
    paths = ctx.lowest_latency_path(0)
    flow = ctx.max_flow(0, 3)
    pairs = ctx.cut_pairs()

Building the context ends the graph's load phase. Every method runs one
analysis to completion and returns a fresh result object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from netlat.algorithms.components import Components, connected_components
from netlat.algorithms.cut_pairs import CutPairs, find_cut_pairs
from netlat.algorithms.max_flow import MaxFlowResult, calc_max_flow
from netlat.algorithms.mst import MinimumSpanningTree, minimum_spanning_tree
from netlat.algorithms.spf import ShortestPaths, shortest_paths
from netlat.config import ANALYSIS_CONFIG, AnalysisConfig
from netlat.graph import Graph
from netlat.types import Medium


@dataclass
class AnalysisContext:
    """Frozen topology plus the settings used for every analysis.

    Attributes:
        graph: Topology under analysis (frozen on construction).
        config: Analysis settings.
    """

    graph: Graph
    config: AnalysisConfig = field(default_factory=lambda: ANALYSIS_CONFIG)

    def __post_init__(self) -> None:
        self.graph.freeze()

    @property
    def num_vertices(self) -> int:
        return self.graph.num_vertices

    @property
    def num_edges(self) -> int:
        return self.graph.num_edges

    def lowest_latency_path(self, source: int) -> ShortestPaths:
        """Lowest-latency paths from ``source`` to every vertex."""
        return shortest_paths(self.graph, source, config=self.config)

    def components(self, medium: Optional[Medium] = None) -> Components:
        """Connected components, optionally restricted to one medium."""
        return connected_components(self.graph, medium=medium)

    def copper_connectivity(self) -> Components:
        """Connected components using copper links only."""
        return self.components(Medium.COPPER)

    def max_flow(self, source: int, sink: int) -> MaxFlowResult:
        """Maximum flow and minimum cut between two vertices."""
        return calc_max_flow(self.graph, source, sink, config=self.config)

    def minimum_spanning_tree(self, start: int = 0) -> MinimumSpanningTree:
        """Minimum-latency spanning tree of ``start``'s component."""
        return minimum_spanning_tree(self.graph, start)

    def cut_pairs(self) -> CutPairs:
        """Vertex pairs whose joint removal disconnects the network."""
        return find_cut_pairs(self.graph, config=self.config)


def analyze(graph: Graph, config: Optional[AnalysisConfig] = None) -> AnalysisContext:
    """Create an analysis context for ``graph``.

    Args:
        graph: Topology to analyze; frozen by this call.
        config: Analysis settings; defaults to ``ANALYSIS_CONFIG``.
    """
    return AnalysisContext(graph, config or ANALYSIS_CONFIG)
