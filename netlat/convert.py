"""NetworkX export of a link topology.

Example:
    >>> from netlat import Graph
    >>> from netlat.convert import to_networkx
    >>> g = Graph(2)
    >>> _ = g.add_link(0, 1, "copper", 10, 100.0)
    >>> G = to_networkx(g)
    >>> G.edges[0, 1, 0]["bandwidth"]
    10
"""

from __future__ import annotations

import networkx as nx

from netlat.graph import Graph


def to_networkx(graph: Graph) -> nx.MultiGraph:
    """Convert ``graph`` to an undirected ``networkx.MultiGraph``.

    Nodes are ``0..V-1``. Each edge is keyed by its index in the edge array and
    carries ``medium`` (string), ``bandwidth``, ``length`` and ``latency``.
    """
    G = nx.MultiGraph()
    G.add_nodes_from(graph.vertices())
    for edge in graph.edges():
        G.add_edge(
            edge.v,
            edge.w,
            key=edge.index,
            medium=edge.medium.value,
            bandwidth=edge.bandwidth,
            length=edge.length,
            latency=edge.latency,
        )
    return G


def to_flow_digraph(graph: Graph) -> nx.DiGraph:
    """Convert ``graph`` to a ``networkx.DiGraph`` with ``capacity`` per arc.

    Arcs follow the max-flow orientation (``edge.v -> edge.w``); parallel
    links are merged by summing their bandwidth. Self-loops are dropped.
    """
    G = nx.DiGraph()
    G.add_nodes_from(graph.vertices())
    for edge in graph.edges():
        if edge.v == edge.w:
            continue
        if G.has_edge(edge.v, edge.w):
            G[edge.v][edge.w]["capacity"] += edge.bandwidth
        else:
            G.add_edge(edge.v, edge.w, capacity=edge.bandwidth)
    return G
