"""Control-flow edge routing.

Every successor edge is a cubic Bezier hanging below the blocks.  The sag
grows with the horizontal span and with how deeply the two blocks are
nested, so stacked loop back-edges separate visually while short forward
edges stay flat.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

from .config import RenderConfig
from .geometry import Geometry
from .model import Block, Graph
from .shapes import Shape

LOGGER = logging.getLogger("regviz.edges")

ARROW_MARKER_ID = "arrow"


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Edge:
    source: int
    target: int
    start: Point
    end: Point
    control1: Point
    control2: Point
    bulge: float
    fall_through: bool

    def path_data(self) -> str:
        coords = [
            self.start.x, self.start.y,
            self.control1.x, self.control1.y,
            self.control2.x, self.control2.y,
            self.end.x, self.end.y,
        ]
        text = [f"{value:.3f}".rstrip("0").rstrip(".") for value in coords]
        return "M {} {} C {} {}, {} {}, {} {}".format(*text)

    @property
    def lowest_y(self) -> float:
        # the curve stays inside the hull of its control polygon
        return max(self.start.y, self.end.y, self.control1.y, self.control2.y)


def is_fall_through(block: Block, successor: int) -> bool:
    return successor == block.id + 1


def depth_factor(source_depth: int, target_depth: int, max_loop_depth: int) -> float:
    """``ln(e * (1 + nesting))`` where ``nesting`` is the shared loop depth.

    ``max_loop_depth - min(depths)`` is the distance to the deepest loop of
    the diagram; the closer an edge sits to it the larger the factor.
    """
    relative = max_loop_depth - min(source_depth, target_depth)
    return math.log(math.e * (1 + max_loop_depth - relative))


def distance_factor(dx: float) -> float:
    return math.log(abs(dx) + 1)


class EdgeRouter:
    def __init__(self, graph: Graph, geometry: Geometry, config: RenderConfig) -> None:
        self.graph = graph
        self.geometry = geometry
        self.config = config
        self.max_loop_depth = graph.max_loop_depth

    def route_all(self) -> List[Edge]:
        edges = [self.route(block, succ) for block in self.graph.blocks for succ in block.successors]
        LOGGER.debug("routed %d edges (max loop depth %d)", len(edges), self.max_loop_depth)
        return edges

    def anchors(self, block: Block, successor: int) -> Tuple[Point, Point]:
        layout = self.config.layout
        source = self.geometry.block_rect(block)
        target = self.geometry.block_rect(self.graph.blocks[successor])
        fall_through = is_fall_through(block, successor)
        offset = source.height / 2 if fall_through else 0
        start = Point(source.right, source.bottom + layout.block_radius - offset)
        end_x = target.x if fall_through else target.x + target.width / 2
        end = Point(end_x, target.bottom + layout.block_radius - offset)
        return start, end

    def route(self, block: Block, successor: int) -> Edge:
        start, end = self.anchors(block, successor)
        target = self.graph.blocks[successor]
        bulge = 4 * depth_factor(block.loop_depth, target.loop_depth, self.max_loop_depth) * distance_factor(end.x - start.x)

        # leave room for the arrowhead at the end anchor
        arrow = self.config.layout.arrow_width
        start_x, end_x = start.x, end.x
        if end_x > start_x:
            end_x -= arrow
            if start_x > end_x:
                start_x -= arrow
        else:
            end_x += arrow
            if start_x < end_x:
                start_x += arrow

        span = end_x - start_x
        middle_y = (start.y + end.y) / 2 + bulge
        return Edge(
            source=block.id,
            target=successor,
            start=Point(start_x, start.y),
            end=Point(end_x, end.y),
            control1=Point(start_x + span / 4, middle_y),
            control2=Point(start_x + 3 * span / 4, middle_y),
            bulge=bulge,
            fall_through=is_fall_through(block, successor),
        )

    def draw(self, edges: List[Edge]) -> List[Shape]:
        stroke = self.config.color("arrow")
        return [
            Shape(
                "path",
                {
                    "d": edge.path_data(),
                    "fill": "transparent",
                    "stroke": stroke,
                    "stroke-width": 2,
                    "marker-end": f"url(#{ARROW_MARKER_ID})",
                },
            )
            for edge in edges
        ]

    def marker(self) -> Shape:
        width = self.config.layout.arrow_width
        return Shape(
            "marker",
            {
                "id": ARROW_MARKER_ID,
                "refX": 0,
                "refY": 2,
                "fill": self.config.color("arrow"),
                "markerUnits": "strokeWidth",
                "markerWidth": 6,
                "markerHeight": 6,
                "orient": "auto",
            },
            children=[Shape("path", {"d": f"M 0 0 L {width} 2 L 0 4 Z"})],
        )
