"""regviz command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConfigError, RenderConfig, default_log_level, load_config
from .document import render_svg, write_svg
from .model import Graph, GraphError, load_graph, loads_graph
from .summary import format_summary

LOG = logging.getLogger("regviz.cli")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render register allocator dumps as interactive SVG")
    parser.add_argument("--log-level", default=default_log_level(), help="Logging level (default INFO, env REGVIZ_LOG)")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Write the SVG diagram")
    render.add_argument("input", help="Allocator JSON dump ('-' for stdin)")
    render.add_argument("-o", "--output", type=Path, help="SVG output path (default stdout)")
    render.add_argument("--config", type=Path, help="JSON file with layout/colors overrides")
    render.add_argument("--static", action="store_true", help="Omit the hover script and interval metadata")
    render.add_argument("--legend", action="store_true", help="Draw the colour legend under the listing")

    summary = sub.add_parser("summary", help="Print block and interval tables")
    summary.add_argument("input", help="Allocator JSON dump ('-' for stdin)")
    summary.add_argument("--format", default="github", help="tabulate table format (default github)")

    inspect = sub.add_parser("inspect", help="Explore hover highlighting from the terminal")
    inspect.add_argument("input", help="Allocator JSON dump")
    inspect.add_argument("--config", type=Path, help="JSON file with layout/colors overrides")
    inspect.add_argument("--json", action="store_true", help="Emit JSON results")
    inspect.add_argument(
        "-c",
        "--command",
        dest="commands",
        action="append",
        help="Run a command non-interactively (repeatable)",
    )
    inspect.add_argument("--history", type=Path, help="Persist prompt history to this file")
    return parser


def read_graph(source: str) -> Graph:
    if source == "-":
        return loads_graph(sys.stdin.read())
    return load_graph(Path(source))


def _render(args: argparse.Namespace) -> int:
    graph = read_graph(args.input)
    config = load_config(args.config, interactive=not args.static, legend=args.legend)
    if args.output:
        write_svg(graph, config, args.output)
    else:
        sys.stdout.write(render_svg(graph, config))
    return 0


def _summary(args: argparse.Namespace) -> int:
    graph = read_graph(args.input)
    print(format_summary(graph, tablefmt=args.format))
    return 0


def _inspect(args: argparse.Namespace) -> int:
    from .inspector import InspectContext, InspectREPL, build_registry

    graph = read_graph(args.input)
    config: RenderConfig = load_config(args.config)
    ctx = InspectContext(graph, config, json_output=args.json)
    registry = build_registry()
    repl = InspectREPL(ctx, registry, history_path=str(args.history) if args.history else None)
    if args.commands:
        status = 0
        for line in args.commands:
            status = repl.dispatch(line) or status
        return status
    return repl.run()


_HANDLERS = {"render": _render, "summary": _summary, "inspect": _inspect}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    try:
        return _HANDLERS[args.command](args)
    except (GraphError, ConfigError) as exc:
        LOG.error("%s", exc)
        return 1
    except FileNotFoundError as exc:
        LOG.error("input not found: %s", exc.filename or exc)
        return 1
    except SystemExit as exc:
        return int(exc.code or 0)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
