"""Interactive prompt for the inspector."""

from __future__ import annotations

import logging
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory, History, InMemoryHistory

from .commands import CommandRegistry
from .context import InspectContext
from .output import emit_error
from .parser import CommandParseError, split_command

LOGGER = logging.getLogger("regviz.inspector.repl")


class InspectREPL:
    """prompt_toolkit loop dispatching to the command registry."""

    def __init__(
        self,
        ctx: InspectContext,
        registry: CommandRegistry,
        *,
        history_path: Optional[str] = None,
    ) -> None:
        self.ctx = ctx
        self.registry = registry
        self.history_path = history_path

    def _history(self) -> History:
        if self.history_path:
            return FileHistory(self.history_path)
        return InMemoryHistory()

    def run(self) -> int:
        completer = WordCompleter(self.registry.names(), sentence=True)
        session: PromptSession[str] = PromptSession("regviz> ", history=self._history(), completer=completer)
        while True:
            try:
                line = session.prompt()
            except (EOFError, KeyboardInterrupt):
                print()
                return 0
            self.dispatch(line)

    def dispatch(self, line: str) -> int:
        try:
            argv = split_command(line)
        except CommandParseError as exc:
            emit_error(self.ctx, message=f"cannot parse command: {exc}")
            return 1
        if not argv:
            return 0
        cmd_name, *cmd_args = argv
        command = self.registry.get(cmd_name)
        if not command:
            emit_error(self.ctx, message=f"unknown command {cmd_name!r}", data={"known": self.registry.names()})
            return 1
        try:
            return command.run(self.ctx, cmd_args)
        except SystemExit:
            raise
        except Exception as exc:  # pragma: no cover
            LOGGER.exception("command failed")
            print(f"Command '{cmd_name}' failed: {exc}")
            return 1
