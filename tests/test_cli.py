import json
import logging
import runpy
from pathlib import Path

import pandas as pd
import pytest

from netlat import cli

SCENARIO = """\
4
0 1 copper 10 100
1 2 optical 10 100
0 3 copper 5 50
"""


@pytest.fixture
def topology(tmp_path: Path) -> Path:
    path = tmp_path / "scenario.txt"
    path.write_text(SCENARIO)
    return path


@pytest.fixture
def ring_yaml(tmp_path: Path) -> Path:
    path = tmp_path / "ring.yaml"
    path.write_text(
        """
vertices: 4
edges:
  - {source: 0, target: 1, medium: copper, bandwidth: 1, length: 10}
  - {source: 1, target: 2, medium: copper, bandwidth: 1, length: 10}
  - {source: 2, target: 3, medium: optical, bandwidth: 1, length: 10}
  - {source: 3, target: 0, medium: optical, bandwidth: 1, length: 10}
"""
    )
    return path


def test_no_arguments_prints_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 0
    assert "usage: netlat" in capsys.readouterr().out


def test_inspect(topology, capsys):
    cli.main(["inspect", str(topology)])
    out = capsys.readouterr().out
    assert "Vertices: 4" in out
    assert "Edges: 3" in out
    assert "Media: copper=2, optical=1" in out
    assert "Total bandwidth: 25" in out


def test_inspect_json(topology, capsys):
    cli.main(["inspect", str(topology), "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["vertices"] == 4
    assert len(data["edges"]) == 3
    assert data["copper_connected"] is False


def test_path(topology, capsys):
    cli.main(["path", str(topology), "0", "2"])
    out = capsys.readouterr().out
    assert out.startswith("0 to 2 (")
    assert "copper" in out and "optical" in out
    assert "Minimum bandwidth: 10" in out


def test_path_json(topology, capsys):
    cli.main(["path", str(topology), "0", "2", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["reachable"] is True
    assert [edge["index"] for edge in data["path"]] == [0, 1]
    assert data["latency"] == pytest.approx(100 / 2.3e8 + 100 / 2.0e8)


def test_path_unreachable(tmp_path, capsys):
    path = tmp_path / "split.txt"
    path.write_text("3\n0 1 copper 1 1\n")
    cli.main(["path", str(path), "0", "2"])
    assert capsys.readouterr().out.strip() == "0 to 2: no path"


def test_path_to_self(topology, capsys):
    cli.main(["path", str(topology), "1", "1", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["latency"] == 0
    assert data["path"] == []


def test_copper(topology, capsys):
    cli.main(["copper", str(topology)])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Graph is not copper connected: 2 components"
    assert lines[1:] == ["0 1 3", "2"]


def test_maxflow(topology, capsys):
    cli.main(["maxflow", str(topology), "0", "2"])
    out = capsys.readouterr().out
    assert "Max flow from 0 to 2" in out
    assert "Min cut: 0 3" in out
    assert "Max flow value = 10" in out


def test_mst(topology, capsys):
    cli.main(["mst", str(topology), "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["start"] == 0
    assert data["spans_graph"] is True
    assert len(data["edges"]) == 3


def test_cut_pairs(ring_yaml, capsys):
    cli.main(["cut-pairs", str(ring_yaml)])
    out = capsys.readouterr().out
    assert "2 disconnecting vertex pairs:" in out
    assert "0 2" in out and "1 3" in out


def test_csv_output(ring_yaml, tmp_path, capsys):
    out_file = tmp_path / "out" / "pairs.csv"
    cli.main(["cut-pairs", str(ring_yaml), "--csv", str(out_file)])
    frame = pd.read_csv(out_file)
    assert frame.values.tolist() == [[0, 2], [1, 3]]


def test_missing_file_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["inspect", str(tmp_path / "absent.txt")])
    assert exc_info.value.code == 1
    assert "ERROR: Topology file not found" in capsys.readouterr().out


def test_invalid_topology_exits(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text("2\n0 1 wifi 1 1\n")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["inspect", str(path)])
    assert exc_info.value.code == 1
    assert "ERROR: Line 2: Invalid medium 'wifi'" in capsys.readouterr().out


def test_vertex_out_of_range_exits(topology, capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["maxflow", str(topology), "0", "9"])
    assert exc_info.value.code == 1
    assert "ERROR: Vertex 9" in capsys.readouterr().out


def test_source_equals_sink_exits(topology, capsys):
    with pytest.raises(SystemExit):
        cli.main(["maxflow", str(topology), "2", "2"])
    assert "Source equals sink" in capsys.readouterr().out


def test_logging_default_level(topology, caplog):
    with caplog.at_level(logging.DEBUG, logger="netlat"):
        cli.main(["inspect", str(topology)])
    assert any("Loading topology from" in r.message for r in caplog.records)
    assert not any("Debug logging enabled" in r.message for r in caplog.records)


def test_logging_verbose(topology, caplog):
    with caplog.at_level(logging.DEBUG, logger="netlat"):
        cli.main(["--verbose", "inspect", str(topology)])
    assert any("Debug logging enabled" in r.message for r in caplog.records)


def test_logging_quiet(topology, caplog):
    with caplog.at_level(logging.DEBUG, logger="netlat"):
        cli.main(["--quiet", "inspect", str(topology)])
    assert not [r for r in caplog.records if r.levelname == "INFO"]


def test_module_entrypoint(monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["netlat", "--help"])
    with pytest.raises(SystemExit) as exc_info:
        runpy.run_module("netlat", run_name="__main__")
    assert exc_info.value.code == 0
    assert "cut-pairs" in capsys.readouterr().out
