"""Block boxes and the per-row interval grid."""

from __future__ import annotations

import logging
from typing import List

from .config import RenderConfig
from .geometry import Geometry
from .model import Block, Graph, Interval, Use
from .segments import Family, families
from .shapes import Shape, rect, text

LOGGER = logging.getLogger("regviz.grid")


def use_title(interval: Interval, use: Use) -> str:
    """Tooltip for a use marker, e.g. ``"v5 @3: fixed r{0}3 (group 1)"``."""
    label = f"{interval.label} @{use.pos}: {use.kind}"
    if use.value is not None:
        label += f" {use.value}"
    if use.group is not None:
        label += f" (group {use.group})"
    return label


class GridRenderer:
    def __init__(self, graph: Graph, geometry: Geometry, config: RenderConfig) -> None:
        self.graph = graph
        self.geometry = geometry
        self.config = config

    def draw_blocks(self) -> List[Shape]:
        shapes: List[Shape] = []
        for block in self.graph.blocks:
            shapes.extend(self.draw_block(block))
        return shapes

    def draw_block(self, block: Block) -> List[Shape]:
        box = self.geometry.block_rect(block)
        radius = self.config.layout.block_radius
        return [
            rect(
                box.x,
                box.y,
                box.width,
                box.height,
                self.config.color("block:fill"),
                rx=radius,
                ry=radius,
            ),
            text(
                box.x + radius,
                self.geometry.title_y(),
                str(block.id),
                **{"dominant-baseline": "middle", "font-family": self.config.font_family},
            ),
        ]

    def draw_rows(self) -> List[Shape]:
        shapes: List[Shape] = []
        for index, family in enumerate(families(self.graph)):
            shapes.extend(self.draw_row(family, index))
        LOGGER.debug("grid: %d rows, %d shapes", len(self.graph.rows), len(shapes))
        return shapes

    def draw_row(self, family: Family, index: int) -> List[Shape]:
        """Background cells, then range cells, then use markers for one row."""
        y = self.geometry.row_y(index)
        shapes = self._background(family, y)
        for member in family:
            shapes.extend(self._ranges(member, y))
        for member in family:
            shapes.extend(self._uses(member, y))
        return shapes

    def _background(self, family: Family, y: float) -> List[Shape]:
        geo = self.geometry
        fill = self.config.color("interval:empty")
        cells = []
        for block in self.graph.blocks:
            for col in block.columns:
                cells.append(
                    rect(
                        geo.column_x(col),
                        y,
                        geo.cell_width(narrowed=col == block.end - 1),
                        geo.cell_height,
                        fill,
                        row=family.owner_at(col),
                        col=col,
                    )
                )
        return cells

    def _ranges(self, interval: Interval, y: float) -> List[Shape]:
        geo = self.geometry
        fill = self.config.color("interval:physical" if interval.physical else "interval:normal")
        cells = []
        for live in interval.ranges:
            for col in range(live.start, live.end):
                cells.append(
                    rect(
                        geo.column_x(col),
                        y,
                        geo.cell_width(narrowed=col == live.end - 1),
                        geo.cell_height,
                        fill,
                        row=interval.id,
                        col=col,
                    )
                )
        return cells

    def _uses(self, interval: Interval, y: float) -> List[Shape]:
        geo = self.geometry
        markers = []
        for use in interval.uses:
            marker = rect(
                geo.column_x(use.pos),
                y,
                self.config.layout.use_width,
                geo.cell_height,
                self.config.color(f"use:{use.kind}"),
                row=interval.id,
                col=use.pos,
            )
            marker.children.append(Shape("title", text=use_title(interval, use)))
            markers.append(marker)
        return markers
