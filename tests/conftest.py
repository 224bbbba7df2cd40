"""Shared topology fixtures.

Diagrams show ``vertex --medium/bandwidth/length-- vertex``; ``C`` is copper
and ``O`` is optical.
"""

from __future__ import annotations

import random

import pytest

from netlat.graph import Graph


@pytest.fixture
def scenario_graph():
    #        C/10/100      O/10/100
    #   0 ────────────► 1 ──────────► 2
    #   │
    #   │ C/5/50
    #   ▼
    #   3
    g = Graph(4)
    g.add_link(0, 1, "copper", 10, 100)
    g.add_link(1, 2, "optical", 10, 100)
    g.add_link(0, 3, "copper", 5, 50)
    return g


@pytest.fixture
def split_graph():
    # Same as scenario_graph without the 0-3 link; vertex 3 is isolated.
    g = Graph(4)
    g.add_link(0, 1, "copper", 10, 100)
    g.add_link(1, 2, "optical", 10, 100)
    return g


@pytest.fixture
def single_link():
    #      C/7/1
    #   0 ───────► 1
    g = Graph(2)
    g.add_link(0, 1, "copper", 7, 1)
    return g


@pytest.fixture
def diamond():
    #            C/3/10
    #        ┌──────────► 1 ─────┐ C/2/10
    #        │            │      ▼
    #        0            │C/1/1  3
    #        │            ▼      ▲
    #        └──────────► 2 ─────┘ O/3/10
    #            O/2/30
    g = Graph(4)
    g.add_link(0, 1, "copper", 3, 10)
    g.add_link(0, 2, "optical", 2, 30)
    g.add_link(1, 3, "copper", 2, 10)
    g.add_link(2, 3, "optical", 3, 10)
    g.add_link(1, 2, "copper", 1, 1)
    return g


@pytest.fixture
def ring4():
    #   0 ── 1
    #   │    │
    #   3 ── 2
    g = Graph(4)
    g.add_link(0, 1, "copper", 1, 10)
    g.add_link(1, 2, "copper", 1, 10)
    g.add_link(2, 3, "optical", 1, 10)
    g.add_link(3, 0, "optical", 1, 10)
    return g


@pytest.fixture
def line4():
    #   0 ── 1 ── 2 ── 3
    g = Graph(4)
    g.add_link(0, 1, "copper", 4, 10)
    g.add_link(1, 2, "copper", 4, 10)
    g.add_link(2, 3, "copper", 4, 10)
    return g


def make_random_graph(seed: int, vertices: int = 8, edges: int = 16) -> Graph:
    """Random multigraph with mixed media, integer bandwidths and lengths."""
    rng = random.Random(seed)
    g = Graph(vertices)
    for _ in range(edges):
        v = rng.randrange(vertices)
        w = rng.randrange(vertices)
        g.add_link(
            v,
            w,
            rng.choice(["copper", "optical"]),
            rng.randint(0, 20),
            float(rng.randint(1, 500)),
        )
    return g


@pytest.fixture(params=range(6))
def random_graph(request):
    return make_random_graph(request.param)
