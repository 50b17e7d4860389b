#!/usr/bin/env python3
"""Entry point for the regviz command line."""

from __future__ import annotations

from regviz.cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
