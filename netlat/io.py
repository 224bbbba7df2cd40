"""Topology loaders.

Two input formats build the same `Graph`:

Text (whitespace separated, ``#`` starts a comment)::

    4
    0 1 copper 10 100
    1 2 optical 10 100

YAML, validated against ``netlat/schemas/topology.json``::

    vertices: 4
    edges:
      - {source: 0, target: 1, medium: copper, bandwidth: 10, length: 100}

Both loaders return a frozen graph.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, Union

import jsonschema
import yaml

from netlat.errors import ValidationError
from netlat.graph import Graph
from netlat.logging import get_logger

LOGGER = get_logger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


def parse_topology(lines: Union[str, Iterable[str]]) -> Graph:
    """Build a graph from the text topology format.

    Args:
        lines: Whole document or an iterable of lines.

    Returns:
        Frozen graph.

    Raises:
        ValidationError: On malformed lines, with the 1-based line number.
    """
    if isinstance(lines, str):
        lines = lines.splitlines()

    graph = None
    for lineno, raw in enumerate(lines, start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        tokens = line.split()

        if graph is None:
            if len(tokens) != 1:
                raise ValidationError(
                    f"Line {lineno}: expected the vertex count, got '{line}'"
                )
            graph = Graph(_parse_int(tokens[0], "vertex count", lineno))
            continue

        if len(tokens) != 5:
            raise ValidationError(
                f"Line {lineno}: expected 'v w medium bandwidth length', got '{line}'"
            )
        v_tok, w_tok, medium, bandwidth_tok, length_tok = tokens
        try:
            graph.add_link(
                _parse_int(v_tok, "vertex", lineno),
                _parse_int(w_tok, "vertex", lineno),
                medium,
                _parse_int(bandwidth_tok, "bandwidth", lineno),
                _parse_float(length_tok, "length", lineno),
            )
        except ValidationError as exc:
            if str(exc).startswith("Line "):
                raise
            raise ValidationError(f"Line {lineno}: {exc}") from exc

    if graph is None:
        raise ValidationError("Topology is empty: missing vertex count")

    LOGGER.debug(
        "Parsed topology with %d vertices and %d edges",
        graph.num_vertices,
        graph.num_edges,
    )
    return graph.freeze()


def load_topology_yaml(yaml_str: str) -> Graph:
    """Build a graph from a YAML topology document.

    Raises:
        ValidationError: If the YAML does not parse, violates the schema, or
            contains invalid edges.
    """
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        raise ValidationError(f"Invalid YAML topology: {exc}") from exc
    if not isinstance(data, dict):
        raise ValidationError("The provided YAML must map to a dictionary at top-level.")
    _coerce_numeric_lengths(data)

    try:
        jsonschema.validate(data, _topology_schema())
    except jsonschema.ValidationError as exc:
        location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise ValidationError(f"Topology schema violation at {location}: {exc.message}") from exc

    graph = Graph(data["vertices"])
    for position, entry in enumerate(data.get("edges") or []):
        try:
            graph.add_link(
                entry["source"],
                entry["target"],
                entry["medium"],
                entry["bandwidth"],
                entry["length"],
            )
        except ValidationError as exc:
            raise ValidationError(f"Edge {position}: {exc}") from exc

    LOGGER.debug(
        "Loaded YAML topology with %d vertices and %d edges",
        graph.num_vertices,
        graph.num_edges,
    )
    return graph.freeze()


def read_topology(path: Union[str, Path]) -> Graph:
    """Load a topology file, choosing the format from its suffix.

    ``.yaml``/``.yml`` files use the YAML loader; anything else is parsed as
    the text format.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in _YAML_SUFFIXES:
        return load_topology_yaml(text)
    return parse_topology(text)


def graph_to_dict(graph: Graph) -> Dict[str, Any]:
    """Return the YAML/JSON document form of ``graph``."""
    return {
        "vertices": graph.num_vertices,
        "edges": [
            {
                "source": edge.v,
                "target": edge.w,
                "medium": edge.medium.value,
                "bandwidth": edge.bandwidth,
                "length": edge.length,
            }
            for edge in graph.edges()
        ],
    }


def _coerce_numeric_lengths(data: Dict[str, Any]) -> None:
    """Convert string lengths such as ``1e3`` to floats in place.

    YAML 1.1 only resolves exponent floats written with a dot (``1.0e3``), so
    PyYAML hands ``1e3`` over as a string. Strings that are not numbers are
    left for the schema to reject.
    """
    edges = data.get("edges")
    if not isinstance(edges, list):
        return
    for entry in edges:
        if isinstance(entry, dict) and isinstance(entry.get("length"), str):
            try:
                entry["length"] = float(entry["length"])
            except ValueError:
                continue


def _topology_schema() -> Dict[str, Any]:
    with (
        resources.files("netlat.schemas")
        .joinpath("topology.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def _parse_int(token: str, what: str, lineno: int) -> int:
    try:
        return int(token)
    except ValueError:
        raise ValidationError(f"Line {lineno}: {what} must be an integer, got '{token}'") from None


def _parse_float(token: str, what: str, lineno: int) -> float:
    try:
        return float(token)
    except ValueError:
        raise ValidationError(f"Line {lineno}: {what} must be a number, got '{token}'") from None
