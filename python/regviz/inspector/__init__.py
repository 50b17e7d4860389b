"""
Terminal hover explorer for allocator dumps.

Runs the same highlight state machine the SVG script runs in the browser,
driven by typed commands (``col 3``, ``row 7``, ``clear``) instead of the
pointer.  Use ``regviz inspect DUMP.json``.
"""

from __future__ import annotations

from .commands import CommandRegistry, build_registry
from .context import InspectContext
from .repl import InspectREPL

__all__ = ["CommandRegistry", "InspectContext", "InspectREPL", "build_registry"]
