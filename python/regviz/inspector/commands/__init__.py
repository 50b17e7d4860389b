"""Command registry for the inspector."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .base import Command
from .exit import ExitCommand
from .family import FamilyCommand, ListingCommand
from .help import HelpCommand
from .hover import CellCommand, ClearCommand, ColumnCommand, HintCommand, RowCommand


class CommandRegistry:
    """Stores the known commands and resolves aliases."""

    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}
        self._ordered: List[Command] = []

    def register(self, command: Command) -> None:
        self._ordered.append(command)
        self._commands[command.name] = command
        for alias in command.aliases:
            self._commands[alias] = command

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name)

    def list_commands(self) -> Iterable[Command]:
        return self._ordered

    def names(self) -> List[str]:
        return sorted(self._commands)


def build_registry() -> CommandRegistry:
    registry = CommandRegistry()
    commands = [
        HelpCommand(),
        ColumnCommand(),
        RowCommand(),
        CellCommand(),
        ClearCommand(),
        HintCommand(),
        FamilyCommand(),
        ListingCommand(),
        ExitCommand(),
    ]
    for command in commands:
        registry.register(command)
        bind = getattr(command, "bind", None)
        if callable(bind):
            bind(registry)
    return registry


__all__ = ["CommandRegistry", "build_registry"]
