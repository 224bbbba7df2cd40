import networkx as nx
import pytest

from netlat.algorithms.components import connected_components
from netlat.algorithms.mst import minimum_spanning_tree
from netlat.convert import to_networkx
from netlat.errors import ValidationError
from netlat.graph import Graph


def _is_forest(edges, vertices):
    G = nx.MultiGraph()
    G.add_nodes_from(vertices)
    G.add_edges_from((e.v, e.w) for e in edges)
    return nx.is_forest(G)


def test_tree_on_connected_graph(scenario_graph):
    tree = minimum_spanning_tree(scenario_graph)
    assert tree.start == 0
    assert len(tree.edges()) == 3
    assert tree.spans_graph()
    assert tree.vertices() == [0, 1, 2, 3]
    expected = sum(e.latency for e in scenario_graph.edges())
    assert tree.weight() == pytest.approx(expected)


def test_edges_in_join_order(diamond):
    tree = minimum_spanning_tree(diamond, start=0)
    # 0-1 (10 copper), 1-2 (1 copper), 1-3 (10 copper)
    assert [e.index for e in tree.edges()] == [0, 4, 2]


def test_disconnected_graph_spans_start_component(split_graph):
    tree = minimum_spanning_tree(split_graph, start=0)
    assert len(tree.edges()) == 2
    assert not tree.spans_graph()
    assert tree.vertices() == [0, 1, 2]

    lonely = minimum_spanning_tree(split_graph, start=3)
    assert lonely.edges() == []
    assert lonely.weight() == 0.0
    assert lonely.vertices() == [3]


def test_first_discovered_edge_wins_ties():
    g = Graph(2)
    g.add_link(0, 1, "copper", 1, 100)
    g.add_link(0, 1, "copper", 9, 100)
    tree = minimum_spanning_tree(g)
    assert [e.index for e in tree.edges()] == [0]


def test_cheaper_later_edge_replaces_key():
    g = Graph(3)
    g.add_link(0, 2, "optical", 1, 100)
    g.add_link(0, 1, "copper", 1, 1)
    g.add_link(1, 2, "copper", 1, 1)
    tree = minimum_spanning_tree(g)
    assert sorted(e.index for e in tree.edges()) == [1, 2]


def test_empty_and_single_vertex_graphs():
    empty = minimum_spanning_tree(Graph(0))
    assert empty.start is None
    assert empty.edges() == []
    assert empty.vertices() == []
    assert empty.spans_graph()

    single = minimum_spanning_tree(Graph(1))
    assert single.edges() == []
    assert single.spans_graph()


def test_invalid_start(scenario_graph):
    with pytest.raises(ValidationError):
        minimum_spanning_tree(scenario_graph, start=4)


def test_tree_is_minimal_and_acyclic(random_graph):
    tree = minimum_spanning_tree(random_graph, start=0)
    cc = connected_components(random_graph)
    component = [v for v in random_graph.vertices() if cc.connected(0, v)]

    assert len(tree.edges()) == len(component) - 1
    assert tree.vertices() == component
    assert _is_forest(tree.edges(), component)

    G = to_networkx(random_graph).subgraph(component)
    expected = nx.minimum_spanning_tree(G, weight="latency").size(weight="latency")
    assert tree.weight() == pytest.approx(expected)
