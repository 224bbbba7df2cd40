"""Maximum flow and minimum cut over link bandwidths.

Implements Ford-Fulkerson with breadth-first augmenting-path selection
(Edmonds-Karp), which bounds the number of augmentations by O(V*E).

Each undirected topology edge becomes exactly one directed `FlowEdge`
oriented ``edge.v -> edge.w`` (input endpoint order), with capacity equal to
the edge bandwidth. Flow can only travel from ``v`` to ``w``; the residual
arc ``w -> v`` exists only to cancel flow already placed.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from numbers import Integral
from typing import Dict, List, Optional, Tuple, Union

from netlat.config import ANALYSIS_CONFIG, AnalysisConfig
from netlat.errors import InternalInconsistencyError, ValidationError
from netlat.graph import Edge, Graph
from netlat.logging import get_logger
from netlat.types import Cost

LOGGER = get_logger(__name__)


@dataclass
class FlowEdge:
    """Directed capacitated edge carrying a mutable flow.

    Attributes:
        source: Tail vertex.
        target: Head vertex.
        capacity: Non-negative capacity.
        flow: Current flow, kept within ``[0, capacity]``.
        edge: Topology edge this flow edge was derived from.
    """

    source: int
    target: int
    capacity: int
    flow: Cost = 0
    edge: Optional[Edge] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise ValidationError(f"Edge capacity must be non-negative, got {self.capacity}")

    def other(self, vertex: int) -> int:
        """Return the endpoint opposite ``vertex``."""
        if vertex == self.source:
            return self.target
        if vertex == self.target:
            return self.source
        raise ValidationError(f"Vertex {vertex} is not an endpoint of {self}")

    def residual_capacity_to(self, vertex: int) -> Cost:
        """Residual capacity of the arc pointing at ``vertex``."""
        if vertex == self.source:
            return self.flow
        if vertex == self.target:
            return self.capacity - self.flow
        raise ValidationError(f"Vertex {vertex} is not an endpoint of {self}")

    def add_residual_flow_to(self, vertex: int, delta: Cost) -> None:
        """Push ``delta`` units along the residual arc pointing at ``vertex``."""
        if delta < 0:
            raise ValueError(f"Delta must be non-negative, got {delta}")
        if vertex == self.source:
            self.flow -= delta
        elif vertex == self.target:
            self.flow += delta
        else:
            raise ValidationError(f"Vertex {vertex} is not an endpoint of {self}")


class FlowNetwork:
    """Flow edges plus per-vertex adjacency of flow edge indices."""

    def __init__(self, vertices: int) -> None:
        self.num_vertices = vertices
        self.edges: List[FlowEdge] = []
        self._adj: List[List[int]] = [[] for _ in range(vertices)]

    @classmethod
    def from_graph(cls, graph: Graph) -> "FlowNetwork":
        """Derive one flow edge per topology edge, oriented ``v -> w``."""
        network = cls(graph.num_vertices)
        for edge in graph.edges():
            network.add_edge(FlowEdge(edge.v, edge.w, edge.bandwidth, edge=edge))
        return network

    def add_edge(self, flow_edge: FlowEdge) -> int:
        """Append a flow edge and return its index."""
        index = len(self.edges)
        self.edges.append(flow_edge)
        self._adj[flow_edge.source].append(index)
        if flow_edge.target != flow_edge.source:
            self._adj[flow_edge.target].append(index)
        return index

    def adj(self, vertex: int) -> List[FlowEdge]:
        """Flow edges incident to ``vertex`` (either direction)."""
        return [self.edges[i] for i in self._adj[vertex]]


class MaxFlowResult:
    """Outcome of `calc_max_flow`."""

    def __init__(
        self,
        network: FlowNetwork,
        source: int,
        sink: int,
        value: Cost,
        reachable: List[bool],
        augmentations: int,
    ) -> None:
        self._network = network
        self._source = source
        self._sink = sink
        self._value = value
        self._reachable = reachable
        self.augmentations = augmentations
        self._by_edge: Dict[int, FlowEdge] = {
            fe.edge.index: fe
            for fe in network.edges
            if fe.edge is not None and fe.edge.index is not None
        }

    @property
    def source(self) -> int:
        return self._source

    @property
    def sink(self) -> int:
        return self._sink

    def value(self) -> Cost:
        """Total flow from source to sink."""
        return self._value

    def flow_on(self, edge: Union[Edge, int]) -> Cost:
        """Flow carried by a topology edge (or edge index) in ``v -> w`` direction."""
        if isinstance(edge, Integral) and not isinstance(edge, bool):
            index = int(edge)
        else:
            index = edge.index
        if index not in self._by_edge:
            raise ValidationError(f"Edge {edge} does not belong to this flow network")
        return self._by_edge[index].flow

    def in_cut(self, vertex: int) -> bool:
        """True if ``vertex`` is on the source side of the minimum cut."""
        if vertex < 0 or vertex >= len(self._reachable):
            raise ValidationError(
                f"Vertex {vertex} is not between 0 and {len(self._reachable) - 1}"
            )
        return self._reachable[vertex]

    def source_side(self) -> List[int]:
        """Vertices on the source side of the minimum cut."""
        return [v for v, inside in enumerate(self._reachable) if inside]

    def flow_edges(self) -> List[FlowEdge]:
        """All flow edges in topology edge order."""
        return list(self._network.edges)

    def min_cut_edges(self) -> List[FlowEdge]:
        """Flow edges leading from the source side to the sink side."""
        return [
            fe
            for fe in self._network.edges
            if self._reachable[fe.source] and not self._reachable[fe.target]
        ]

    def cut_capacity(self) -> Cost:
        """Total capacity of the minimum-cut edges."""
        return sum(fe.capacity for fe in self.min_cut_edges())

    def check(self, tolerance: float = 0.0) -> None:
        """Verify capacity bounds, conservation and max-flow/min-cut equality.

        Raises:
            InternalInconsistencyError: On the first violated condition.
        """
        network = self._network
        for fe in network.edges:
            if fe.flow < -tolerance or fe.flow > fe.capacity + tolerance:
                raise InternalInconsistencyError(f"Flow on {fe} violates capacity bounds")

        excess = [0] * network.num_vertices
        for fe in network.edges:
            excess[fe.source] -= fe.flow
            excess[fe.target] += fe.flow
        for vertex, balance in enumerate(excess):
            if vertex == self._source:
                expected = -self._value
            elif vertex == self._sink:
                expected = self._value
            else:
                expected = 0
            if abs(balance - expected) > tolerance:
                raise InternalInconsistencyError(
                    f"Flow conservation violated at vertex {vertex}"
                )

        if not self._reachable[self._source]:
            raise InternalInconsistencyError("Source is not on the source side of the cut")
        if self._reachable[self._sink]:
            raise InternalInconsistencyError("Sink is on the source side of the cut")
        if abs(self.cut_capacity() - self._value) > tolerance:
            raise InternalInconsistencyError(
                f"Max flow {self._value} differs from min cut capacity {self.cut_capacity()}"
            )


def calc_max_flow(
    graph: Graph,
    source: int,
    sink: int,
    config: Optional[AnalysisConfig] = None,
) -> MaxFlowResult:
    """Compute the maximum flow from ``source`` to ``sink``.

    Args:
        graph: Topology; capacities are link bandwidths. Not modified.
        source: Source vertex.
        sink: Sink vertex.
        config: Analysis settings; defaults to ``ANALYSIS_CONFIG``.

    Returns:
        MaxFlowResult with flow value, per-edge flow and min-cut partition.

    Raises:
        ValidationError: If a vertex is out of range or ``source == sink``.
        InternalInconsistencyError: If the self-check fails.
    """
    config = config or ANALYSIS_CONFIG
    graph.validate_vertex(source)
    graph.validate_vertex(sink)
    if source == sink:
        raise ValidationError("Source equals sink")

    network = FlowNetwork.from_graph(graph)
    value: Cost = 0
    augmentations = 0

    while True:
        edge_to = _augmenting_path(network, source, sink)
        if edge_to[sink] is None:
            break

        path = _path_arcs(edge_to, source, sink)
        bottleneck = min(fe.residual_capacity_to(head) for fe, head in path)
        for fe, head in path:
            fe.add_residual_flow_to(head, bottleneck)

        value += bottleneck
        augmentations += 1

    reachable = [fe is not None for fe in edge_to]
    reachable[source] = True

    LOGGER.debug(
        "Max flow %d -> %d: value=%s after %d augmenting paths",
        source,
        sink,
        value,
        augmentations,
    )

    result = MaxFlowResult(network, source, sink, value, reachable, augmentations)
    if config.check_optimality:
        result.check(config.flow_tolerance)
    return result


def _path_arcs(
    edge_to: List[Optional[FlowEdge]], source: int, sink: int
) -> List[Tuple[FlowEdge, int]]:
    """Walk ``edge_to`` back from ``sink`` as (flow edge, vertex it points at) pairs."""
    arcs: List[Tuple[FlowEdge, int]] = []
    vertex = sink
    while vertex != source:
        fe = edge_to[vertex]
        if fe is None:
            raise InternalInconsistencyError(
                f"Augmenting path to {sink} is broken at vertex {vertex}"
            )
        arcs.append((fe, vertex))
        vertex = fe.other(vertex)
    return arcs


def _augmenting_path(
    network: FlowNetwork, source: int, sink: int
) -> List[Optional[FlowEdge]]:
    """Breadth-first search over arcs with positive residual capacity.

    Returns the last flow edge on the shortest residual path to each reached
    vertex (None for unreached vertices and for the source). The search stops
    early once the sink is reached.
    """
    edge_to: List[Optional[FlowEdge]] = [None] * network.num_vertices
    marked = [False] * network.num_vertices
    marked[source] = True
    queue = deque([source])
    while queue and not marked[sink]:
        vertex = queue.popleft()
        for fe in network.adj(vertex):
            neighbor = fe.other(vertex)
            if not marked[neighbor] and fe.residual_capacity_to(neighbor) > 0:
                edge_to[neighbor] = fe
                marked[neighbor] = True
                queue.append(neighbor)
    return edge_to
