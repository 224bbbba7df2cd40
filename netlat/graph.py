"""Undirected edge-weighted graph of network links.

`Edge` is an immutable link record validated on construction. `Graph` stores
edges in a single append-only array and keeps, for each vertex, the indices of
its incident edges. Analyses refer to edges by their index in that array, which
lets filtered views (medium-only, vertices removed) be expressed as boolean
masks instead of new graph objects.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from numbers import Integral, Real
from typing import Iterator, List, Optional, Tuple, Union

from netlat.errors import ValidationError
from netlat.latency import latency
from netlat.logging import get_logger
from netlat.types import Medium

LOGGER = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class Edge:
    """One physical link between two vertices.

    Edges compare by identity so that parallel links with identical fields
    remain distinct.

    Attributes:
        v: One endpoint.
        w: The other endpoint.
        medium: Transmission medium. A string token is parsed with
            ``Medium.from_string``.
        bandwidth: Capacity of the link, a non-negative integer.
        length: Physical length, a finite non-negative number.
        index: Position in the owning graph's edge array, assigned by
            ``Graph.add_edge``; None for a detached edge.
    """

    v: int
    w: int
    medium: Medium
    bandwidth: int
    length: float
    index: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate fields and normalize the medium."""
        for endpoint in (self.v, self.w):
            if isinstance(endpoint, bool) or not isinstance(endpoint, Integral):
                raise ValidationError(f"Vertex index must be an integer, got {endpoint!r}")
            if endpoint < 0:
                raise ValidationError(
                    f"Vertex index must be a non-negative integer, got {endpoint}"
                )
        object.__setattr__(self, "medium", Medium.from_string(self.medium))

        if isinstance(self.bandwidth, bool) or not isinstance(self.bandwidth, Integral):
            raise ValidationError(f"Bandwidth must be an integer, got {self.bandwidth!r}")
        if self.bandwidth < 0:
            raise ValidationError(f"Bandwidth must be non-negative, got {self.bandwidth}")

        if isinstance(self.length, bool) or not isinstance(self.length, Real):
            raise ValidationError(f"Length must be a number, got {self.length!r}")
        if not math.isfinite(self.length) or self.length < 0:
            raise ValidationError(
                f"Length must be a finite non-negative number, got {self.length}"
            )

    @property
    def latency(self) -> float:
        """Propagation delay over this link."""
        return latency(self)

    def either(self) -> int:
        """Return one endpoint of the edge."""
        return self.v

    def other(self, vertex: int) -> int:
        """Return the endpoint that is not ``vertex``.

        Raises:
            ValidationError: If ``vertex`` is not an endpoint of this edge.
        """
        if vertex == self.v:
            return self.w
        if vertex == self.w:
            return self.v
        raise ValidationError(f"Vertex {vertex} is not an endpoint of edge {self}")

    def __str__(self) -> str:
        return f"{self.v}-{self.w} {self.medium} {self.bandwidth} {self.length:g}"


class Graph:
    """Vertex/edge store with adjacency lists.

    The graph is filled during a load phase and then frozen. Analyses only
    read from it.

    Args:
        vertices: Number of vertices; vertices are the integers ``[0, vertices)``.
    """

    def __init__(self, vertices: int) -> None:
        if isinstance(vertices, bool) or not isinstance(vertices, Integral):
            raise ValidationError(f"Vertex count must be an integer, got {vertices!r}")
        if vertices < 0:
            raise ValidationError(f"Vertex count must be non-negative, got {vertices}")
        self._vertices = int(vertices)
        self._edges: List[Edge] = []
        self._adj: List[List[int]] = [[] for _ in range(self._vertices)]
        self._frozen = False

    @property
    def num_vertices(self) -> int:
        """Number of vertices (V)."""
        return self._vertices

    @property
    def num_edges(self) -> int:
        """Number of edges (E)."""
        return len(self._edges)

    @property
    def frozen(self) -> bool:
        """True once the load phase has ended."""
        return self._frozen

    def freeze(self) -> "Graph":
        """End the load phase. Further ``add_edge`` calls raise."""
        if not self._frozen:
            LOGGER.debug(
                "Graph frozen with %d vertices and %d edges",
                self._vertices,
                len(self._edges),
            )
        self._frozen = True
        return self

    def validate_vertex(self, vertex: int) -> int:
        """Return ``vertex`` if it lies in ``[0, V)``.

        Raises:
            ValidationError: If the vertex is out of range or not an integer.
        """
        if isinstance(vertex, bool) or not isinstance(vertex, Integral):
            raise ValidationError(f"Vertex index must be an integer, got {vertex!r}")
        if vertex < 0 or vertex >= self._vertices:
            raise ValidationError(
                f"Vertex {vertex} is not between 0 and {self._vertices - 1}"
            )
        return int(vertex)

    def add_edge(self, edge: Edge) -> Edge:
        """Append an edge and register it with both endpoints.

        Returns:
            The stored edge, carrying its index in the edge array.

        Raises:
            ValidationError: If an endpoint is out of range or the graph is frozen.
        """
        if self._frozen:
            raise ValidationError("Cannot add edges to a frozen graph")
        self.validate_vertex(edge.v)
        self.validate_vertex(edge.w)

        stored = replace(edge, index=len(self._edges))
        self._edges.append(stored)
        self._adj[stored.v].append(stored.index)
        if stored.w != stored.v:
            self._adj[stored.w].append(stored.index)
        return stored

    def add_link(
        self,
        v: int,
        w: int,
        medium: Union[Medium, str],
        bandwidth: int,
        length: float,
    ) -> Edge:
        """Construct and add an edge from raw fields."""
        return self.add_edge(Edge(v, w, medium, bandwidth, length))  # type: ignore[arg-type]

    def edge(self, index: int) -> Edge:
        """Return the edge stored at ``index``."""
        return self._edges[index]

    def edges(self) -> Tuple[Edge, ...]:
        """Return all edges in insertion order."""
        return tuple(self._edges)

    def adj(self, vertex: int) -> Tuple[Edge, ...]:
        """Return the edges incident to ``vertex`` in insertion order."""
        self.validate_vertex(vertex)
        return tuple(self._edges[i] for i in self._adj[vertex])

    def adj_indices(self, vertex: int) -> Tuple[int, ...]:
        """Return the indices of edges incident to ``vertex``."""
        self.validate_vertex(vertex)
        return tuple(self._adj[vertex])

    def degree(self, vertex: int) -> int:
        """Return the number of edges incident to ``vertex``."""
        self.validate_vertex(vertex)
        return len(self._adj[vertex])

    def vertices(self) -> range:
        """Return the vertex range ``[0, V)``."""
        return range(self._vertices)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self._edges)

    def __repr__(self) -> str:
        return f"Graph(vertices={self._vertices}, edges={len(self._edges)})"
