"""Logical-to-surface coordinate mapping."""

from __future__ import annotations

from dataclasses import dataclass

from .config import Layout
from .model import Block


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


class Geometry:
    """Pure coordinate arithmetic for one diagram.

    ``rows`` is the number of display rows; every block box is tall enough
    to host all of them even though the grid is drawn once for the whole
    diagram.
    """

    def __init__(self, layout: Layout, rows: int) -> None:
        self.layout = layout
        self.rows = rows

    def get_x(self, x: float) -> float:
        return self.layout.left + x

    def get_y(self, y: float) -> float:
        return self.layout.top + y

    def column_x(self, col: int) -> float:
        return self.get_x(col * self.layout.cell_width)

    def row_y(self, row: int) -> float:
        return self.get_y(self.layout.title_height + row * self.layout.cell_height)

    def cell_width(self, narrowed: bool = False) -> float:
        width = self.layout.cell_width
        return width - self.layout.padding_x if narrowed else width

    @property
    def cell_height(self) -> float:
        return self.layout.cell_height - self.layout.padding_y

    @property
    def block_height(self) -> float:
        return self.layout.title_height + self.rows * self.layout.cell_height + self.layout.block_radius

    def block_rect(self, block: Block) -> Rect:
        span = block.end - block.start
        return Rect(
            x=self.column_x(block.start),
            y=self.get_y(0),
            width=span * self.layout.cell_width - self.layout.padding_x,
            height=self.block_height,
        )

    def title_y(self) -> float:
        return self.get_y(self.layout.title_height / 2)

    @property
    def grid_bottom(self) -> float:
        return self.get_y(self.block_height) + self.layout.block_radius
