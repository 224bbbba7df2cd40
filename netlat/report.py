"""Tabular views of topologies and analysis results as pandas DataFrames."""

from __future__ import annotations

from typing import List

import pandas as pd

from netlat.algorithms.components import Components
from netlat.algorithms.cut_pairs import CutPairs
from netlat.algorithms.max_flow import MaxFlowResult
from netlat.algorithms.mst import MinimumSpanningTree
from netlat.algorithms.spf import ShortestPaths
from netlat.graph import Edge, Graph

EDGE_COLUMNS = ["index", "v", "w", "medium", "bandwidth", "length", "latency"]


def _edge_rows(edges: List[Edge]) -> List[dict]:
    return [
        {
            "index": edge.index,
            "v": edge.v,
            "w": edge.w,
            "medium": edge.medium.value,
            "bandwidth": edge.bandwidth,
            "length": edge.length,
            "latency": edge.latency,
        }
        for edge in edges
    ]


def edges_frame(graph: Graph) -> pd.DataFrame:
    """One row per topology edge."""
    return pd.DataFrame(_edge_rows(list(graph.edges())), columns=EDGE_COLUMNS)


def path_frame(paths: ShortestPaths, target: int) -> pd.DataFrame:
    """Edges of the lowest-latency path to ``target`` with cumulative latency.

    Empty when ``target`` is unreachable or is the source.
    """
    frame = pd.DataFrame(_edge_rows(paths.path_to(target) or []), columns=EDGE_COLUMNS)
    frame["cumulative_latency"] = frame["latency"].cumsum()
    return frame


def components_frame(components: Components) -> pd.DataFrame:
    """One row per labeled vertex with its component id and component size."""
    rows = [
        {"vertex": vertex, "component": component_id, "size": len(members)}
        for component_id, members in enumerate(components.members())
        for vertex in members
    ]
    frame = pd.DataFrame(rows, columns=["vertex", "component", "size"])
    return frame.sort_values("vertex").reset_index(drop=True)


def flow_frame(result: MaxFlowResult) -> pd.DataFrame:
    """One row per flow edge with flow, capacity and min-cut membership."""
    rows = [
        {
            "index": fe.edge.index if fe.edge is not None else None,
            "source": fe.source,
            "target": fe.target,
            "capacity": fe.capacity,
            "flow": fe.flow,
            "in_min_cut": result.in_cut(fe.source) and not result.in_cut(fe.target),
        }
        for fe in result.flow_edges()
    ]
    return pd.DataFrame(
        rows, columns=["index", "source", "target", "capacity", "flow", "in_min_cut"]
    )


def mst_frame(tree: MinimumSpanningTree) -> pd.DataFrame:
    """Tree edges in the order they joined the tree."""
    return pd.DataFrame(_edge_rows(tree.edges()), columns=EDGE_COLUMNS)


def cut_pairs_frame(cut_pairs: CutPairs) -> pd.DataFrame:
    """One row per disconnecting vertex pair."""
    return pd.DataFrame(cut_pairs.pairs(), columns=["i", "j"])
