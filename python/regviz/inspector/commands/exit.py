"""``exit``: drop any highlight and leave the inspector."""

from __future__ import annotations

from typing import List

from .base import Command
from ..context import InspectContext


class ExitCommand(Command):
    def __init__(self) -> None:
        super().__init__("exit", "Clear the highlight and leave the inspector", aliases=("quit", "q"))

    def run(self, ctx: InspectContext, argv: List[str]) -> int:
        ctx.clear()
        raise SystemExit(0)
