"""Instruction listing with tagged operand tokens."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .config import RenderConfig
from .model import GapAction, Graph, Instruction
from .segments import OperandResolver
from .shapes import Shape, tspan

Token = Tuple[str, Optional[int]]

_GAP_ARROWS = {"move": "->", "swap": "<->"}


class InstructionFormatter:
    """Turns instructions into text tokens; operand tokens carry their row.

    Operands are resolved to the split fragment live at the instruction's
    column, so a use of a split value links to the segment that actually
    holds it there.
    """

    def __init__(self, graph: Graph, resolver: Optional[OperandResolver] = None) -> None:
        self.graph = graph
        self.resolver = resolver or OperandResolver(graph)

    def _operand(self, interval_id: int, col: int) -> Token:
        resolved = self.resolver.resolve(interval_id, col)
        return self.graph.label(resolved), resolved

    def _operand_list(self, ids: Sequence[int], col: int) -> List[Token]:
        tokens: List[Token] = []
        for idx, interval_id in enumerate(ids):
            if idx:
                tokens.append((", ", None))
            tokens.append(self._operand(interval_id, col))
        return tokens

    def _gap(self, actions: Sequence[GapAction], col: int) -> List[Token]:
        tokens: List[Token] = [(" [", None)]
        for idx, action in enumerate(actions):
            if idx:
                tokens.append(("; ", None))
            tokens.append(self._operand(action.source, col))
            tokens.append((f" {_GAP_ARROWS[action.kind]} ", None))
            tokens.append(self._operand(action.target, col))
        tokens.append(("]", None))
        return tokens

    def tokens(self, instr: Instruction) -> List[Token]:
        col = instr.id
        tokens: List[Token] = [(f"{col}: ", None)]
        if instr.output is not None:
            tokens.append(self._operand(instr.output, col))
            tokens.append((" = ", None))
        tokens.append((f"{instr.kind}(", None))
        tokens.extend(self._operand_list(instr.inputs, col))
        tokens.append((")", None))
        if instr.temporary:
            tokens.append((" tmp: ", None))
            tokens.extend(self._operand_list(instr.temporary, col))
        if instr.gap_actions:
            tokens.extend(self._gap(instr.gap_actions, col))
        return tokens

    def format(self, instr: Instruction) -> str:
        return "".join(token for token, _ in self.tokens(instr))

    def lines(self) -> List[str]:
        return [self.format(instr) for instr in self.graph.instructions.values()]


class ListingRenderer:
    def __init__(self, graph: Graph, config: RenderConfig, formatter: Optional[InstructionFormatter] = None) -> None:
        self.graph = graph
        self.config = config
        self.formatter = formatter or InstructionFormatter(graph)

    def height(self) -> float:
        return len(self.graph.instructions) * self.config.layout.line_height

    def draw(self, top: float) -> List[Shape]:
        layout = self.config.layout
        shapes: List[Shape] = []
        for index, instr in enumerate(self.graph.instructions.values()):
            line = Shape(
                "text",
                {
                    "x": layout.left,
                    "y": top + (index + 1) * layout.line_height,
                    "font-family": self.config.font_family,
                    "style": "white-space: pre",
                },
                col=instr.id,
            )
            for body, row in self.formatter.tokens(instr):
                if row is None:
                    line.children.append(tspan(body))
                else:
                    line.children.append(tspan(body, row=row, col=instr.id))
            shapes.append(line)
        return shapes
