"""Tabular allocation summary for a dump."""

from __future__ import annotations

from typing import Any, Dict, List

from tabulate import tabulate

from .model import Graph
from .segments import families

INTERVAL_HEADERS = ["row", "value", "physical", "fragments", "ranges", "uses", "live", "span"]
BLOCK_HEADERS = ["block", "columns", "loop_depth", "successors"]


def interval_rows(graph: Graph) -> List[List[Any]]:
    rows: List[List[Any]] = []
    for family in families(graph):
        root = family.root
        ranges = [r for member in family for r in member.ranges]
        live = sum(r.end - r.start for r in ranges)
        span = f"[{ranges[0].start}, {family.end})" if ranges else "-"
        rows.append(
            [
                root.id,
                root.label,
                "yes" if root.physical else "no",
                len(family),
                len(ranges),
                sum(len(member.uses) for member in family),
                live,
                span,
            ]
        )
    return rows


def block_rows(graph: Graph) -> List[List[Any]]:
    return [
        [
            block.id,
            f"[{block.start}, {block.end})",
            block.loop_depth,
            ", ".join(str(succ) for succ in block.successors) or "-",
        ]
        for block in graph.blocks
    ]


def totals(graph: Graph) -> Dict[str, int]:
    return {
        "blocks": len(graph.blocks),
        "instructions": len(graph.instructions),
        "intervals": len(graph.intervals),
        "rows": len(graph.rows),
        "split_rows": sum(1 for family in families(graph) if len(family) > 1),
        "edges": sum(len(block.successors) for block in graph.blocks),
        "max_loop_depth": graph.max_loop_depth,
    }


def format_summary(graph: Graph, *, tablefmt: str = "github") -> str:
    parts = [
        tabulate(block_rows(graph), headers=BLOCK_HEADERS, tablefmt=tablefmt),
        tabulate(interval_rows(graph), headers=INTERVAL_HEADERS, tablefmt=tablefmt),
        tabulate(sorted(totals(graph).items()), headers=["metric", "value"], tablefmt=tablefmt),
    ]
    return "\n\n".join(parts)
