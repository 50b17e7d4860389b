"""Hover highlighting over the rendered element tags.

This is the Python model of the behaviour the embedded script implements
in the browser (see :mod:`regviz.script`).  It works against an
:class:`ElementIndex` built from the layout's shapes, so the whole
interaction can be exercised without a DOM.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .config import RenderConfig
from .model import Graph
from .segments import OperandResolver
from .shapes import Shape

LOGGER = logging.getLogger("regviz.highlight")

COLOR_CLASSES = ("interval", "output", "input", "tmp")


@dataclass(frozen=True)
class Target:
    row: Optional[int] = None
    col: Optional[int] = None


class ElementIndex:
    """Row/column tag lookup over a shape tree."""

    def __init__(self, shapes: Iterable[Shape]) -> None:
        self.rows: Dict[int, List[Shape]] = {}
        self.cols: Dict[int, List[Shape]] = {}
        self.elements: List[Shape] = []
        for shape in shapes:
            for element in shape.walk():
                if element.row is None and element.col is None:
                    continue
                self.elements.append(element)
                if element.row is not None:
                    self.rows.setdefault(element.row, []).append(element)
                if element.col is not None:
                    self.cols.setdefault(element.col, []).append(element)

    def by_row(self, row: int) -> List[Shape]:
        return self.rows.get(row, [])

    def by_col(self, col: int) -> List[Shape]:
        return self.cols.get(col, [])

    def fills(self) -> List[Optional[str]]:
        return [element.fill for element in self.elements]


def hint_text(graph: Graph, col: int) -> str:
    """``"<col>: <out>=<kind>(<inputs>) | tmp: <temporaries>"``."""
    text = f"{col}: "
    instr = graph.instructions.get(col)
    if instr is None:
        return text + "empty"
    if instr.output is not None:
        text += f"{graph.label(instr.output)}="
    text += f"{instr.kind}(" + ", ".join(graph.label(i) for i in instr.inputs) + ")"
    if instr.temporary:
        text += " | tmp: " + ", ".join(graph.label(t) for t in instr.temporary)
    return text


class HighlightController:
    """Applies highlight colours and keeps an undo stack to restore them."""

    def __init__(
        self,
        graph: Graph,
        index: ElementIndex,
        config: RenderConfig,
        resolver: Optional[OperandResolver] = None,
    ) -> None:
        self.graph = graph
        self.index = index
        self.config = config
        self.resolver = resolver or OperandResolver(graph)
        self.undo: List[Tuple[Shape, Optional[str]]] = []
        self.applied: List[Tuple[str, int, str]] = []
        self.hint = ""

    def _paint(self, elements: Iterable[Shape], color_class: str) -> None:
        color = self.config.color(f"highlight:{color_class}")
        for element in elements:
            self.undo.append((element, element.fill))
            element.fill = color

    def clear(self) -> None:
        while self.undo:
            element, fill = self.undo.pop()
            element.fill = fill
        self.applied = []
        self.hint = ""

    def highlight(self, target: Target, color_class: str = "interval", clear_first: bool = True) -> None:
        if color_class not in COLOR_CLASSES:
            raise ValueError(f"unknown highlight class {color_class!r}")
        if clear_first:
            self.clear()
        if target.row is not None:
            self._paint(self.index.by_row(target.row), color_class)
            self.applied.append(("row", target.row, color_class))
        if target.col is None:
            return
        col = target.col
        self._paint(self.index.by_col(col), color_class)
        self.applied.append(("col", col, color_class))
        instr = self.graph.instructions.get(col)
        if instr is not None:
            if instr.output is not None:
                self.highlight(Target(row=self.resolver.resolve(instr.output, col)), "output", False)
            for interval_id in instr.inputs:
                self.highlight(Target(row=self.resolver.resolve(interval_id, col)), "input", False)
            for interval_id in instr.temporary:
                self.highlight(Target(row=self.resolver.resolve(interval_id, col)), "tmp", False)
        self.hint = hint_text(self.graph, col)
        LOGGER.debug("hover col %d: %d pending restores", col, len(self.undo))

    def hover(self, row: Optional[int] = None, col: Optional[int] = None) -> str:
        self.highlight(Target(row=row, col=col))
        return self.hint

    def hover_out(self) -> None:
        self.clear()

    def rows_by_class(self) -> Dict[str, List[int]]:
        result: Dict[str, List[int]] = {}
        for kind, ident, color_class in self.applied:
            if kind == "row":
                result.setdefault(color_class, []).append(ident)
        return result
