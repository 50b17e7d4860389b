"""Command base classes for the inspector."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..context import InspectContext


@dataclass
class Command:
    """Abstract command description."""

    name: str
    description: str
    aliases: Sequence[str] = field(default_factory=tuple)

    def run(self, ctx: InspectContext, argv: List[str]) -> int:
        raise NotImplementedError("Command must implement run()")

    def format_help(self) -> str:
        names = self.name
        if self.aliases:
            names += " (" + ", ".join(self.aliases) + ")"
        return f"{names:<14} {self.description}"


def parse_args(parser: argparse.ArgumentParser, argv: List[str]) -> Optional[argparse.Namespace]:
    """Parse ``argv``; ``None`` when argparse rejects it."""
    try:
        return parser.parse_args(argv)
    except SystemExit:
        return None
