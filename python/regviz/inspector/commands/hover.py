"""Hover commands: simulate pointer-over on rows, columns and cells."""

from __future__ import annotations

import argparse
from typing import List, Optional

from .base import Command, parse_args
from ..context import InspectContext
from ..output import describe_highlight, emit_error, emit_result, highlight_payload


def _report(ctx: InspectContext) -> int:
    emit_result(ctx, message=describe_highlight(ctx), data=highlight_payload(ctx))
    return 0


class _HoverCommand(Command):
    def _hover(self, ctx: InspectContext, *, row: Optional[int] = None, col: Optional[int] = None) -> int:
        if row is not None and not ctx.graph.has_interval(row):
            emit_error(ctx, message=f"unknown interval {row}")
            return 1
        if col is not None and not 0 <= col < max(ctx.graph.column_count, 1):
            emit_error(ctx, message=f"column {col} outside [0, {ctx.graph.column_count})")
            return 1
        ctx.hover(row=row, col=col)
        return _report(ctx)


class ColumnCommand(_HoverCommand):
    def __init__(self) -> None:
        super().__init__("col", "Hover an instruction column", aliases=("c",))
        self._parser = argparse.ArgumentParser(prog="col", add_help=False)
        self._parser.add_argument("col", type=int)

    def run(self, ctx: InspectContext, argv: List[str]) -> int:
        args = parse_args(self._parser, argv)
        if args is None:
            return 1
        return self._hover(ctx, col=args.col)


class RowCommand(_HoverCommand):
    def __init__(self) -> None:
        super().__init__("row", "Hover an interval row", aliases=("r",))
        self._parser = argparse.ArgumentParser(prog="row", add_help=False)
        self._parser.add_argument("row", type=int)

    def run(self, ctx: InspectContext, argv: List[str]) -> int:
        args = parse_args(self._parser, argv)
        if args is None:
            return 1
        return self._hover(ctx, row=args.row)


class CellCommand(_HoverCommand):
    def __init__(self) -> None:
        super().__init__("cell", "Hover one grid cell (row, column)")
        self._parser = argparse.ArgumentParser(prog="cell", add_help=False)
        self._parser.add_argument("row", type=int)
        self._parser.add_argument("col", type=int)

    def run(self, ctx: InspectContext, argv: List[str]) -> int:
        args = parse_args(self._parser, argv)
        if args is None:
            return 1
        return self._hover(ctx, row=args.row, col=args.col)


class ClearCommand(Command):
    def __init__(self) -> None:
        super().__init__("clear", "Move the pointer away (undo all highlights)")

    def run(self, ctx: InspectContext, argv: List[str]) -> int:
        ctx.clear()
        emit_result(ctx, message="cleared", data=highlight_payload(ctx))
        return 0


class HintCommand(Command):
    def __init__(self) -> None:
        super().__init__("hint", "Show the current hint text")

    def run(self, ctx: InspectContext, argv: List[str]) -> int:
        return _report(ctx)
