"""Assemble the layout passes into one SVG document."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .config import RenderConfig
from .edges import Edge, EdgeRouter
from .geometry import Geometry
from .grid import GridRenderer
from .highlight import ElementIndex
from .legend import draw_legend, legend_height
from .listing import InstructionFormatter, ListingRenderer
from .model import Graph
from .script import HINT_ELEMENT_ID, data_script, embedded_instructions, interaction_script
from .segments import OperandResolver
from .shapes import Shape

LOGGER = logging.getLogger("regviz.document")

SVG_NS = "http://www.w3.org/2000/svg"
_CHAR_WIDTH = 8
_LEGEND_WIDTH = 220
_STYLE = 'text {{ font-family: "{font}", sans-serif; font-size: 12px; }}'
_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


@dataclass
class Diagram:
    """Every shape of one rendering pass, plus the canvas size."""

    width: float
    height: float
    marker: Shape
    blocks: List[Shape] = field(default_factory=list)
    rows: List[Shape] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    edge_shapes: List[Shape] = field(default_factory=list)
    listing: List[Shape] = field(default_factory=list)
    legend: List[Shape] = field(default_factory=list)

    def visuals(self) -> List[Shape]:
        return self.blocks + self.rows + self.edge_shapes + self.listing

    def index(self) -> ElementIndex:
        return ElementIndex(self.visuals())


def layout_diagram(graph: Graph, config: RenderConfig, resolver: Optional[OperandResolver] = None) -> Diagram:
    """Run the geometry, grid, edge and listing passes; no output is written."""

    layout = config.layout
    resolver = resolver or OperandResolver(graph)
    geometry = Geometry(layout, len(graph.rows))
    grid = GridRenderer(graph, geometry, config)
    router = EdgeRouter(graph, geometry, config)
    formatter = InstructionFormatter(graph, resolver)
    listing = ListingRenderer(graph, config, formatter)

    edges = router.route_all()
    edges_bottom = max([geometry.grid_bottom] + [edge.lowest_y for edge in edges]) + layout.arrow_width
    listing_top = edges_bottom + layout.margin
    listing_bottom = listing_top + listing.height()
    diagram = Diagram(width=0, height=0, marker=router.marker())
    diagram.blocks = grid.draw_blocks()
    diagram.rows = grid.draw_rows()
    diagram.edges = edges
    diagram.edge_shapes = router.draw(edges)
    diagram.listing = listing.draw(listing_top)
    bottom = listing_bottom
    if config.legend:
        legend_top = listing_bottom + layout.margin
        diagram.legend = draw_legend(config, legend_top)
        bottom = legend_top + legend_height(config)

    longest = max((len(line) for line in formatter.lines()), default=0)
    widths = [geometry.column_x(graph.column_count), layout.left + longest * _CHAR_WIDTH]
    if config.legend:
        widths.append(layout.left + _LEGEND_WIDTH)
    diagram.width = max(widths) + layout.margin
    diagram.height = bottom + layout.margin
    LOGGER.debug(
        "layout: %d blocks, %d rows, %d columns, %d edges, %.0fx%.0f",
        len(graph.blocks),
        len(graph.rows),
        graph.column_count,
        len(edges),
        diagram.width,
        diagram.height,
    )
    return diagram


def _element(parent: ET.Element, shape: Shape) -> ET.Element:
    node = ET.SubElement(parent, shape.tag, shape.svg_attrs())
    if shape.text is not None:
        node.text = shape.text
    for child in shape.children:
        _element(node, child)
    return node


def _extend(parent: ET.Element, shapes: Iterable[Shape]) -> None:
    for shape in shapes:
        _element(parent, shape)


def _script(parent: ET.Element, body: str) -> None:
    node = ET.SubElement(parent, "script", {"type": "text/ecmascript"})
    node.text = body


def build_svg(graph: Graph, config: RenderConfig) -> ET.Element:
    resolver = OperandResolver(graph)
    diagram = layout_diagram(graph, config, resolver)
    layout = config.layout
    root = ET.Element(
        "svg",
        {
            "version": "1.1",
            "baseProfile": "full",
            "xmlns": SVG_NS,
            "width": f"{diagram.width:g}",
            "height": f"{diagram.height:g}",
        },
    )
    defs = ET.SubElement(root, "defs")
    _element(defs, diagram.marker)
    style = ET.SubElement(root, "style")
    style.text = _STYLE.format(font=config.font_family)
    _extend(root, diagram.legend)
    hint = ET.SubElement(
        root,
        "text",
        {
            "id": HINT_ELEMENT_ID,
            "x": f"{layout.left:g}",
            "y": f"{layout.top / 2:g}",
            "dominant-baseline": "central",
            "font-family": config.font_family,
        },
    )
    hint.text = " "
    _script(root, data_script("instructions", embedded_instructions(graph.raw)))
    if config.interactive:
        _script(root, data_script("intervals", list(graph.raw.get("intervals") or [])))
        _script(root, data_script("resolved", resolver.table()))
    _extend(root, diagram.blocks)
    _extend(root, diagram.rows)
    _extend(root, diagram.edge_shapes)
    _extend(root, diagram.listing)
    if config.interactive:
        _script(root, interaction_script(config))
    return root


def render_svg(graph: Graph, config: RenderConfig) -> str:
    root = build_svg(graph, config)
    return _XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def write_svg(graph: Graph, config: RenderConfig, path: Path) -> Path:
    path = Path(path)
    path.write_text(render_svg(graph, config), encoding="utf-8")
    LOGGER.info("wrote %s", path)
    return path
