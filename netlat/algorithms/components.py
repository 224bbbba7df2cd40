"""Connected-component labeling over full or filtered topology views.

A filtered view is a pair of boolean numpy masks over the graph's vertex and
edge arrays (True = included). Edges incident to an excluded vertex are
ignored, and excluded vertices receive no component id.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

import numpy as np

from netlat.errors import ValidationError
from netlat.graph import Graph
from netlat.logging import get_logger
from netlat.types import Medium

LOGGER = get_logger(__name__)


class Components:
    """Component labeling produced by `connected_components`."""

    def __init__(self, graph: Graph, ids: List[Optional[int]], count: int) -> None:
        self._graph = graph
        self._ids = ids
        self._count = count
        self._sizes: Dict[int, int] = {}
        for component in ids:
            if component is not None:
                self._sizes[component] = self._sizes.get(component, 0) + 1

    def count(self) -> int:
        """Number of components among included vertices."""
        return self._count

    def id(self, vertex: int) -> Optional[int]:
        """Component id of ``vertex`` in ``[0, count())``; None if excluded."""
        self._graph.validate_vertex(vertex)
        return self._ids[vertex]

    def size(self, vertex: int) -> int:
        """Number of vertices in the component of ``vertex`` (0 if excluded)."""
        component = self.id(vertex)
        if component is None:
            return 0
        return self._sizes[component]

    def connected(self, v: int, w: int) -> bool:
        """Return True if both vertices are included and share a component."""
        component = self.id(v)
        return component is not None and component == self.id(w)

    def members(self) -> List[List[int]]:
        """Return the vertices of each component, indexed by component id."""
        groups: List[List[int]] = [[] for _ in range(self._count)]
        for vertex, component in enumerate(self._ids):
            if component is not None:
                groups[component].append(vertex)
        return groups


def build_node_mask(
    graph: Graph, excluded_vertices: Optional[Iterable[int]] = None
) -> np.ndarray:
    """Build a vertex mask with ``excluded_vertices`` set to False."""
    mask = np.ones(graph.num_vertices, dtype=bool)
    if excluded_vertices is not None:
        for vertex in excluded_vertices:
            mask[graph.validate_vertex(vertex)] = False
    return mask


def build_edge_mask(
    graph: Graph,
    medium: Optional[Medium] = None,
    excluded_edges: Optional[Iterable[int]] = None,
) -> np.ndarray:
    """Build an edge mask keeping only ``medium`` edges and dropping ``excluded_edges``."""
    mask = np.ones(graph.num_edges, dtype=bool)
    if medium is not None:
        medium = Medium.from_string(medium)
        for edge in graph.edges():
            if edge.medium is not medium:
                mask[edge.index] = False
    if excluded_edges is not None:
        for index in excluded_edges:
            if index < 0 or index >= graph.num_edges:
                raise ValidationError(
                    f"Edge index {index} is not between 0 and {graph.num_edges - 1}"
                )
            mask[index] = False
    return mask


def connected_components(
    graph: Graph,
    medium: Optional[Medium] = None,
    excluded_vertices: Optional[Iterable[int]] = None,
    excluded_edges: Optional[Iterable[int]] = None,
    node_mask: Optional[np.ndarray] = None,
    edge_mask: Optional[np.ndarray] = None,
) -> Components:
    """Label the connected components of a (filtered) graph.

    Args:
        graph: Topology; not modified.
        medium: Keep only edges of this medium.
        excluded_vertices: Vertices to drop together with their incident edges.
        excluded_edges: Edge indices to drop.
        node_mask: Precomputed vertex mask; combined with ``excluded_vertices``.
        edge_mask: Precomputed edge mask; combined with ``medium`` and
            ``excluded_edges``.

    Returns:
        Components with count and per-vertex ids.
    """
    n = graph.num_vertices
    if node_mask is None:
        node_mask = build_node_mask(graph, excluded_vertices)
    elif excluded_vertices is not None:
        node_mask = node_mask & build_node_mask(graph, excluded_vertices)
    if edge_mask is None:
        edge_mask = build_edge_mask(graph, medium, excluded_edges)
    elif medium is not None or excluded_edges is not None:
        edge_mask = edge_mask & build_edge_mask(graph, medium, excluded_edges)

    if node_mask.shape != (n,):
        raise ValidationError(f"Node mask must have shape ({n},), got {node_mask.shape}")
    if edge_mask.shape != (graph.num_edges,):
        raise ValidationError(
            f"Edge mask must have shape ({graph.num_edges},), got {edge_mask.shape}"
        )

    ids: List[Optional[int]] = [None] * n
    count = 0
    for start in range(n):
        if not node_mask[start] or ids[start] is not None:
            continue
        _label_from(graph, start, count, ids, node_mask, edge_mask)
        count += 1

    LOGGER.debug(
        "Labeled %d components over %d included vertices",
        count,
        int(node_mask.sum()),
    )
    return Components(graph, ids, count)


def copper_connectivity(graph: Graph) -> Components:
    """Components reachable over copper links only."""
    return connected_components(graph, medium=Medium.COPPER)


def _label_from(
    graph: Graph,
    start: int,
    component: int,
    ids: List[Optional[int]],
    node_mask: np.ndarray,
    edge_mask: np.ndarray,
) -> None:
    """Assign ``component`` to every vertex reachable from ``start``."""
    ids[start] = component
    stack = [start]
    while stack:
        vertex = stack.pop()
        for index in graph.adj_indices(vertex):
            if not edge_mask[index]:
                continue
            neighbor = graph.edge(index).other(vertex)
            if node_mask[neighbor] and ids[neighbor] is None:
                ids[neighbor] = component
                stack.append(neighbor)
