"""Family and listing commands."""

from __future__ import annotations

import argparse
from typing import List

from tabulate import tabulate

from .base import Command, parse_args
from ..context import InspectContext
from ..output import emit_error, emit_result
from ...segments import family_of


class FamilyCommand(Command):
    def __init__(self) -> None:
        super().__init__("family", "Show the column segments of a split interval", aliases=("f",))
        self._parser = argparse.ArgumentParser(prog="family", add_help=False)
        self._parser.add_argument("interval", type=int)

    def run(self, ctx: InspectContext, argv: List[str]) -> int:
        args = parse_args(self._parser, argv)
        if args is None:
            return 1
        if not ctx.graph.has_interval(args.interval):
            emit_error(ctx, message=f"unknown interval {args.interval}")
            return 1
        family = family_of(ctx.graph, args.interval)
        rows = [
            [seg.interval, ctx.graph.label(seg.interval), seg.start, seg.end]
            for seg in family.segments
        ]
        table = tabulate(rows, headers=["interval", "value", "start", "end"], tablefmt="github")
        data = {"segments": [{"interval": r[0], "start": r[2], "end": r[3]} for r in rows]}
        emit_result(ctx, message=table, data=data)
        return 0


class ListingCommand(Command):
    def __init__(self) -> None:
        super().__init__("list", "Print instruction listing lines", aliases=("ls",))
        self._parser = argparse.ArgumentParser(prog="list", add_help=False)
        self._parser.add_argument("cols", nargs="*", type=int)

    def run(self, ctx: InspectContext, argv: List[str]) -> int:
        args = parse_args(self._parser, argv)
        if args is None:
            return 1
        instructions = ctx.graph.instructions
        cols = args.cols or list(instructions)
        lines = []
        for col in cols:
            instr = instructions.get(col)
            lines.append(ctx.formatter.format(instr) if instr else f"{col}: empty")
        emit_result(ctx, message="\n".join(lines), data={"lines": lines})
        return 0
