import pytest

from netlat import analyze
from netlat.config import ANALYSIS_CONFIG, AnalysisConfig
from netlat.errors import ValidationError


def test_analyze_freezes_graph(scenario_graph):
    ctx = analyze(scenario_graph)
    assert scenario_graph.frozen
    assert ctx.config is ANALYSIS_CONFIG
    assert ctx.num_vertices == 4
    assert ctx.num_edges == 3
    with pytest.raises(ValidationError):
        scenario_graph.add_link(2, 3, "copper", 1, 1)


def test_scenario_queries(scenario_graph):
    ctx = analyze(scenario_graph)

    paths = ctx.lowest_latency_path(0)
    assert paths.has_path_to(2)
    assert paths.dist_to(2) == pytest.approx(
        scenario_graph.edge(0).latency + scenario_graph.edge(1).latency
    )

    assert ctx.components().count() == 1
    assert ctx.copper_connectivity().count() == 2

    flow = ctx.max_flow(0, 2)
    assert flow.value() == 10
    assert flow.source_side() == [0, 3]

    tree = ctx.minimum_spanning_tree()
    assert len(tree.edges()) == 3

    # star-like shape: removing 0 and 1 isolates 2 from 3
    assert ctx.cut_pairs().disconnects(0, 1)


def test_results_are_independent(diamond):
    ctx = analyze(diamond)
    first = ctx.max_flow(0, 3)
    second = ctx.max_flow(0, 3)
    assert first is not second
    assert first.value() == second.value() == 5
    assert [fe.flow for fe in first.flow_edges()] == [fe.flow for fe in second.flow_edges()]


def test_custom_config(scenario_graph):
    config = AnalysisConfig(check_optimality=False)
    ctx = analyze(scenario_graph, config=config)
    assert ctx.config is config
    assert ctx.max_flow(0, 3).value() == 5
