"""Command-line interface for netlat."""

from __future__ import annotations

import argparse
import json
import sys
from collections import Counter
from pathlib import Path
from time import perf_counter
from typing import Any, Callable, Dict, List, Optional, Tuple

import pandas as pd

from netlat import report
from netlat.analysis import AnalysisContext, analyze
from netlat.errors import ValidationError
from netlat.graph import Edge
from netlat.io import graph_to_dict, read_topology
from netlat.logging import get_logger, level_for_flags, set_global_log_level

logger = get_logger(__name__)

# payload for --json, text for the console, optional frame for --csv
CommandOutput = Tuple[Dict[str, Any], str, Optional[pd.DataFrame]]


def _format_table(headers: List[str], rows: List[List[Any]], min_width: int = 6) -> str:
    """Format rows as a simple ASCII table."""
    if not rows:
        return ""
    all_data = [headers] + [[str(item) for item in row] for row in rows]
    widths = [
        max(max(len(row[i]) for row in all_data), min_width)
        for i in range(len(headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(f"{item:<{widths[i]}}" for i, item in enumerate(row_data))

    lines = [format_row(all_data[0])]
    lines.append("   " + "-+-".join("-" * width for width in widths))
    lines.extend(format_row(row) for row in all_data[1:])
    return "\n".join(lines)


def _format_latency(value: float) -> str:
    """Return latency in seconds with four significant digits."""
    return f"{value:.4g} s"


def _edge_dict(edge: Edge) -> Dict[str, Any]:
    return {
        "index": edge.index,
        "v": edge.v,
        "w": edge.w,
        "medium": edge.medium.value,
        "bandwidth": edge.bandwidth,
        "length": edge.length,
        "latency": edge.latency,
    }


def _edge_row(edge: Edge) -> List[Any]:
    return [
        edge.index,
        f"{edge.v}-{edge.w}",
        edge.medium.value,
        edge.bandwidth,
        f"{edge.length:g}",
        _format_latency(edge.latency),
    ]


_EDGE_HEADERS = ["#", "Link", "Medium", "Bandwidth", "Length", "Latency"]


def _cmd_inspect(ctx: AnalysisContext, args: argparse.Namespace) -> CommandOutput:
    graph = ctx.graph
    media = Counter(edge.medium.value for edge in graph.edges())
    copper = ctx.copper_connectivity()
    payload = {
        **graph_to_dict(graph),
        "media": dict(media),
        "total_bandwidth": sum(edge.bandwidth for edge in graph.edges()),
        "copper_connected": copper.count() <= 1,
    }
    lines = [
        f"Vertices: {graph.num_vertices}",
        f"Edges: {graph.num_edges}",
        "Media: " + (", ".join(f"{k}={v}" for k, v in sorted(media.items())) or "none"),
        f"Total bandwidth: {payload['total_bandwidth']}",
    ]
    table = _format_table(_EDGE_HEADERS, [_edge_row(e) for e in graph.edges()])
    if table:
        lines.extend(["", table])
    return payload, "\n".join(lines), report.edges_frame(graph)


def _cmd_path(ctx: AnalysisContext, args: argparse.Namespace) -> CommandOutput:
    ctx.graph.validate_vertex(args.dst)
    paths = ctx.lowest_latency_path(args.src)
    if not paths.has_path_to(args.dst):
        payload = {"source": args.src, "target": args.dst, "reachable": False}
        return payload, f"{args.src} to {args.dst}: no path", report.path_frame(paths, args.dst)

    path = paths.path_to(args.dst) or []
    latency = paths.dist_to(args.dst)
    bottleneck = paths.bottleneck_bandwidth(args.dst)
    payload = {
        "source": args.src,
        "target": args.dst,
        "reachable": True,
        "latency": latency,
        "min_bandwidth": bottleneck,
        "path": [_edge_dict(edge) for edge in path],
    }
    lines = [f"{args.src} to {args.dst} ({_format_latency(latency)})"]
    table = _format_table(_EDGE_HEADERS, [_edge_row(e) for e in path])
    if table:
        lines.append(table)
    if bottleneck is not None:
        lines.append(f"Minimum bandwidth: {bottleneck}")
    return payload, "\n".join(lines), report.path_frame(paths, args.dst)


def _cmd_copper(ctx: AnalysisContext, args: argparse.Namespace) -> CommandOutput:
    components = ctx.copper_connectivity()
    members = components.members()
    connected = components.count() <= 1
    payload = {
        "copper_connected": connected,
        "count": components.count(),
        "components": members,
    }
    heading = "Graph is copper connected" if connected else "Graph is not copper connected"
    lines = [f"{heading}: {components.count()} components"]
    lines.extend(" ".join(str(v) for v in group) for group in members)
    return payload, "\n".join(lines), report.components_frame(components)


def _cmd_maxflow(ctx: AnalysisContext, args: argparse.Namespace) -> CommandOutput:
    result = ctx.max_flow(args.src, args.dst)
    carrying = [fe for fe in result.flow_edges() if fe.flow > 0]
    payload = {
        "source": args.src,
        "target": args.dst,
        "value": result.value(),
        "flows": [
            {
                "index": fe.edge.index if fe.edge is not None else None,
                "from": fe.source,
                "to": fe.target,
                "flow": fe.flow,
                "capacity": fe.capacity,
            }
            for fe in carrying
        ],
        "min_cut": result.source_side(),
    }
    lines = [f"Max flow from {args.src} to {args.dst}"]
    table = _format_table(
        ["#", "Arc", "Flow", "Capacity"],
        [
            [
                fe.edge.index if fe.edge is not None else "-",
                f"{fe.source}->{fe.target}",
                fe.flow,
                fe.capacity,
            ]
            for fe in carrying
        ],
    )
    if table:
        lines.append(table)
    lines.append("Min cut: " + " ".join(str(v) for v in result.source_side()))
    lines.append(f"Max flow value = {result.value()}")
    return payload, "\n".join(lines), report.flow_frame(result)


def _cmd_mst(ctx: AnalysisContext, args: argparse.Namespace) -> CommandOutput:
    tree = ctx.minimum_spanning_tree(args.start)
    edges = tree.edges()
    payload = {
        "start": tree.start,
        "weight": tree.weight(),
        "spans_graph": tree.spans_graph(),
        "vertices": tree.vertices(),
        "edges": [_edge_dict(edge) for edge in edges],
    }
    lines = [f"Minimum-latency spanning tree from {tree.start}"]
    table = _format_table(_EDGE_HEADERS, [_edge_row(e) for e in edges])
    if table:
        lines.append(table)
    lines.append(f"Total latency: {_format_latency(tree.weight())}")
    if not tree.spans_graph():
        lines.append(
            f"Tree covers {len(tree.vertices())} of {ctx.num_vertices} vertices"
        )
    return payload, "\n".join(lines), report.mst_frame(tree)


def _cmd_cut_pairs(ctx: AnalysisContext, args: argparse.Namespace) -> CommandOutput:
    cut_pairs = ctx.cut_pairs()
    pairs = cut_pairs.pairs()
    payload = {"count": cut_pairs.count(), "pairs": [list(p) for p in pairs]}
    if not pairs:
        text = "No vertex pair disconnects the network"
    else:
        text = "\n".join(
            [f"{len(pairs)} disconnecting vertex pairs:"]
            + [f"   {i} {j}" for i, j in pairs]
        )
    return payload, text, report.cut_pairs_frame(cut_pairs)


_COMMANDS: Dict[str, Callable[[AnalysisContext, argparse.Namespace], CommandOutput]] = {
    "inspect": _cmd_inspect,
    "path": _cmd_path,
    "copper": _cmd_copper,
    "maxflow": _cmd_maxflow,
    "mst": _cmd_mst,
    "cut-pairs": _cmd_cut_pairs,
}


def _run_command(args: argparse.Namespace) -> None:
    """Load the topology, run one analysis and print its result."""
    start = perf_counter()
    try:
        logger.info(f"Loading topology from: {args.topology}")
        ctx = analyze(read_topology(args.topology))
        payload, text, frame = _COMMANDS[args.command](ctx, args)
    except FileNotFoundError:
        logger.error(f"Topology file not found: {args.topology}")
        print(f"ERROR: Topology file not found: {args.topology}")
        sys.exit(1)
    except ValidationError as e:
        logger.error(f"Invalid input: {e}")
        print(f"ERROR: {e}")
        sys.exit(1)

    if args.csv is not None and frame is not None:
        args.csv.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(args.csv, index=False)
        logger.info(f"Wrote table to: {args.csv}")

    if args.json:
        print(json.dumps(payload, indent=2, default=str))
    else:
        print(text)
    logger.debug(f"Command '{args.command}' finished in {perf_counter() - start:.3f} s")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``netlat`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="netlat",
        description="Analyze latency, connectivity and capacity of a link topology.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{" + ",".join(_COMMANDS) + "}",
        help="Available commands",
    )

    def add_command(name: str, help_text: str) -> argparse.ArgumentParser:
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("topology", type=Path, help="Topology file (.txt or .yaml)")
        p.add_argument("--json", action="store_true", help="Print results as JSON")
        p.add_argument(
            "--csv", type=Path, default=None, help="Also write the result table to CSV"
        )
        return p

    add_command("inspect", "Summarize a topology")
    path_parser = add_command("path", "Find the lowest-latency path")
    path_parser.add_argument("src", type=int, help="Starting vertex")
    path_parser.add_argument("dst", type=int, help="Ending vertex")
    add_command("copper", "Check whether the topology is connected over copper only")
    maxflow_parser = add_command("maxflow", "Compute maximum bandwidth flow and minimum cut")
    maxflow_parser.add_argument("src", type=int, help="Source vertex")
    maxflow_parser.add_argument("dst", type=int, help="Sink vertex")
    mst_parser = add_command("mst", "Build the minimum-latency spanning tree")
    mst_parser.add_argument(
        "--start", type=int, default=0, help="Root vertex of the tree (default: 0)"
    )
    add_command(
        "cut-pairs", "List vertex pairs whose removal disconnects the topology"
    )

    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    set_global_log_level(level_for_flags(args.verbose, args.quiet))
    logger.debug("Debug logging enabled")

    _run_command(args)


if __name__ == "__main__":
    main()
