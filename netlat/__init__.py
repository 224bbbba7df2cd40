"""netlat: latency, connectivity and capacity analysis of link topologies.

A topology is an undirected graph whose links carry a medium (copper or
optical), a physical length and a bandwidth. Analyses run over the frozen
graph and return independent result objects.

Example:
    from netlat import Graph, analyze

    g = Graph(4)
    g.add_link(0, 1, "copper", 10, 100)
    g.add_link(1, 2, "optical", 10, 100)
    g.add_link(0, 3, "copper", 5, 50)

    ctx = analyze(g)
    ctx.lowest_latency_path(0).dist_to(2)
    ctx.max_flow(0, 2).value()
"""

from __future__ import annotations

from netlat import logging
from netlat.algorithms import (
    Components,
    CutPairs,
    MaxFlowResult,
    MinimumSpanningTree,
    ShortestPaths,
    calc_max_flow,
    connected_components,
    copper_connectivity,
    find_cut_pairs,
    minimum_spanning_tree,
    shortest_paths,
)
from netlat.analysis import AnalysisContext, analyze
from netlat.config import ANALYSIS_CONFIG, AnalysisConfig
from netlat.errors import InternalInconsistencyError, ValidationError
from netlat.graph import Edge, Graph
from netlat.io import load_topology_yaml, parse_topology, read_topology
from netlat.latency import latency
from netlat.types import Medium

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Model
    "Edge",
    "Graph",
    "Medium",
    "latency",
    # Loaders
    "parse_topology",
    "load_topology_yaml",
    "read_topology",
    # Analysis
    "analyze",
    "AnalysisContext",
    "AnalysisConfig",
    "ANALYSIS_CONFIG",
    "shortest_paths",
    "connected_components",
    "copper_connectivity",
    "calc_max_flow",
    "minimum_spanning_tree",
    "find_cut_pairs",
    # Results
    "ShortestPaths",
    "Components",
    "MaxFlowResult",
    "MinimumSpanningTree",
    "CutPairs",
    # Errors
    "ValidationError",
    "InternalInconsistencyError",
    # Utilities
    "logging",
]
