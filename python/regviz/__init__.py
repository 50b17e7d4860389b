"""
regviz - register allocation dump visualiser.

Lays out a register allocator's blocks, instructions and live intervals as
an SVG diagram whose cells, operands and control-flow edges respond to
hover.  Each concern lives in its own module:

    model.py     → dump entities, loading and precondition checks
    geometry.py  → logical to surface coordinates
    segments.py  → split-interval ownership per column
    grid.py      → block boxes and the interval grid
    edges.py     → curved control-flow edges
    listing.py   → instruction text with tagged operands
    highlight.py → hover highlight state machine
    document.py  → SVG assembly

Use ``regviz render DUMP.json -o out.svg``.
"""

from .config import ConfigError, Layout, RenderConfig, load_config  # noqa: F401
from .document import Diagram, build_svg, layout_diagram, render_svg, write_svg  # noqa: F401
from .edges import Edge, EdgeRouter, depth_factor, distance_factor  # noqa: F401
from .geometry import Geometry, Rect  # noqa: F401
from .highlight import ElementIndex, HighlightController, Target, hint_text  # noqa: F401
from .model import (  # noqa: F401
    Block,
    GapAction,
    Graph,
    GraphError,
    Instruction,
    Interval,
    LiveRange,
    Use,
    load_graph,
    loads_graph,
    parse_graph,
    validate_graph,
)
from .segments import Family, OperandResolver, Segment, families, family_of, owner_at  # noqa: F401

__all__ = [
    "Block",
    "ConfigError",
    "Diagram",
    "Edge",
    "EdgeRouter",
    "ElementIndex",
    "Family",
    "GapAction",
    "Geometry",
    "Graph",
    "GraphError",
    "HighlightController",
    "Instruction",
    "Interval",
    "Layout",
    "LiveRange",
    "OperandResolver",
    "Rect",
    "RenderConfig",
    "Segment",
    "Target",
    "Use",
    "build_svg",
    "depth_factor",
    "distance_factor",
    "families",
    "family_of",
    "hint_text",
    "layout_diagram",
    "load_config",
    "load_graph",
    "loads_graph",
    "owner_at",
    "parse_graph",
    "render_svg",
    "validate_graph",
    "write_svg",
]

__version__ = "0.1.0"
