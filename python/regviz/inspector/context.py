"""Inspector state: the loaded dump and its highlight controller."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..config import RenderConfig
from ..document import Diagram, layout_diagram
from ..highlight import HighlightController
from ..listing import InstructionFormatter
from ..model import Graph
from ..segments import OperandResolver

LOGGER = logging.getLogger("regviz.inspector.context")


@dataclass
class InspectContext:
    """Holds the laid-out diagram shared by all inspector commands."""

    graph: Graph
    config: RenderConfig = field(default_factory=RenderConfig)
    json_output: bool = False
    resolver: OperandResolver = field(init=False, repr=False)
    diagram: Diagram = field(init=False, repr=False)
    controller: HighlightController = field(init=False, repr=False)
    formatter: InstructionFormatter = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.resolver = OperandResolver(self.graph)
        self.diagram = layout_diagram(self.graph, self.config, self.resolver)
        self.controller = HighlightController(self.graph, self.diagram.index(), self.config, self.resolver)
        self.formatter = InstructionFormatter(self.graph, self.resolver)
        LOGGER.debug("indexed %d tagged elements", len(self.controller.index.elements))

    def hover(self, row: Optional[int] = None, col: Optional[int] = None) -> str:
        return self.controller.hover(row=row, col=col)

    def clear(self) -> None:
        self.controller.hover_out()
