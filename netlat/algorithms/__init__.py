"""Graph algorithms over the link topology."""

from netlat.algorithms.components import (
    Components,
    build_edge_mask,
    build_node_mask,
    connected_components,
    copper_connectivity,
)
from netlat.algorithms.cut_pairs import CutPairs, find_cut_pairs
from netlat.algorithms.max_flow import FlowEdge, FlowNetwork, MaxFlowResult, calc_max_flow
from netlat.algorithms.mst import MinimumSpanningTree, minimum_spanning_tree
from netlat.algorithms.pq import IndexMinPQ
from netlat.algorithms.spf import ShortestPaths, shortest_paths

__all__ = [
    "Components",
    "CutPairs",
    "FlowEdge",
    "FlowNetwork",
    "IndexMinPQ",
    "MaxFlowResult",
    "MinimumSpanningTree",
    "ShortestPaths",
    "build_edge_mask",
    "build_node_mask",
    "calc_max_flow",
    "connected_components",
    "copper_connectivity",
    "find_cut_pairs",
    "minimum_spanning_tree",
    "shortest_paths",
]
