"""Legend swatches for the grid colours."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .config import RenderConfig
from .shapes import Shape, rect, text

LEGEND_ENTRIES: Sequence[Tuple[str, str]] = (
    ("interval:empty", "not live"),
    ("interval:normal", "live (virtual)"),
    ("interval:physical", "live (physical register)"),
    ("use:any", "use: any"),
    ("use:register", "use: register"),
    ("use:fixed", "use: fixed"),
    ("highlight:output", "hover: output"),
    ("highlight:input", "hover: input"),
    ("highlight:tmp", "hover: temporary"),
)


def legend_height(config: RenderConfig) -> float:
    return len(LEGEND_ENTRIES) * (config.layout.cell_height + config.layout.padding_y)


def draw_legend(config: RenderConfig, top: float) -> List[Shape]:
    layout = config.layout
    step = layout.cell_height + layout.padding_y
    shapes: List[Shape] = []
    for index, (color, label) in enumerate(LEGEND_ENTRIES):
        y = top + index * step
        shapes.append(rect(layout.left, y, layout.cell_width, layout.cell_height - layout.padding_y, config.color(color)))
        shapes.append(
            text(
                layout.left + layout.cell_width + 2 * layout.padding_x,
                y + layout.cell_height / 2,
                label,
                **{"dominant-baseline": "middle", "font-family": config.font_family},
            )
        )
    return shapes
