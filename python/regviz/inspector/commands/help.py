"""``help [COMMAND]``: list commands, or describe one."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from .base import Command
from ..context import InspectContext
from ..output import emit_error, emit_result

if TYPE_CHECKING:  # pragma: no cover
    from . import CommandRegistry


class HelpCommand(Command):
    def __init__(self) -> None:
        super().__init__("help", "List commands, or describe one", aliases=("?",))
        self._registry: Optional["CommandRegistry"] = None

    def bind(self, registry: "CommandRegistry") -> None:
        self._registry = registry

    def run(self, ctx: InspectContext, argv: List[str]) -> int:
        if self._registry is None:
            return 1
        if argv:
            command = self._registry.get(argv[0])
            if command is None:
                emit_error(ctx, message=f"unknown command {argv[0]!r}")
                return 1
            commands = [command]
        else:
            commands = list(self._registry.list_commands())
        data = {
            "commands": [
                {"name": c.name, "aliases": list(c.aliases), "description": c.description} for c in commands
            ]
        }
        emit_result(ctx, message="\n".join(c.format_help() for c in commands), data=data)
        return 0
