"""Tokenising for inspector command lines."""

from __future__ import annotations

import shlex
from typing import List


class CommandParseError(ValueError):
    """The command line could not be tokenised (unbalanced quotes)."""


def split_command(line: str) -> List[str]:
    """Split ``line`` into argv tokens; ``#`` starts a comment."""
    if not line.strip():
        return []
    try:
        return shlex.split(line, comments=True, posix=True)
    except ValueError as exc:
        raise CommandParseError(str(exc)) from exc
