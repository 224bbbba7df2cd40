import networkx as nx
import pytest

from netlat.convert import to_flow_digraph, to_networkx
from netlat.graph import Graph


def test_to_networkx_attributes(scenario_graph):
    G = to_networkx(scenario_graph)
    assert isinstance(G, nx.MultiGraph)
    assert sorted(G.nodes) == [0, 1, 2, 3]
    assert G.number_of_edges() == 3
    data = G.edges[1, 2, 1]
    assert data["medium"] == "optical"
    assert data["bandwidth"] == 10
    assert data["length"] == 100
    assert data["latency"] == pytest.approx(scenario_graph.edge(1).latency)


def test_to_networkx_keeps_parallel_links_and_isolated_vertices():
    g = Graph(3)
    g.add_link(0, 1, "copper", 1, 1)
    g.add_link(0, 1, "optical", 2, 1)
    G = to_networkx(g)
    assert G.number_of_edges(0, 1) == 2
    assert set(G[0][1]) == {0, 1}
    assert 2 in G
    assert G.degree(2) == 0


def test_to_flow_digraph_merges_parallel_links():
    g = Graph(3)
    g.add_link(0, 1, "copper", 3, 1)
    g.add_link(0, 1, "optical", 4, 1)
    g.add_link(2, 1, "copper", 5, 1)
    g.add_link(2, 2, "copper", 9, 1)
    G = to_flow_digraph(g)
    assert G[0][1]["capacity"] == 7
    assert G.has_edge(2, 1)
    assert not G.has_edge(1, 2)
    assert not G.has_edge(2, 2)
