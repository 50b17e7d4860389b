"""Output helpers for the inspector."""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

from .context import InspectContext


def _json_dump(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, indent=2, sort_keys=True)


def emit_result(ctx: InspectContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Emit a successful command result."""
    if ctx.json_output:
        payload: Dict[str, Any] = {"status": "ok"}
        if data is not None:
            payload["result"] = data
        else:
            payload["message"] = message
        print(_json_dump(payload))
    else:
        print(message)


def emit_error(ctx: InspectContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Emit an error message respecting JSON mode."""
    payload: Dict[str, Any] = {"status": "error", "error": message}
    if data:
        payload["details"] = dict(data)
    if ctx.json_output:
        print(_json_dump(payload))
    else:
        print(f"error: {message}")


def describe_highlight(ctx: InspectContext) -> str:
    """Render the controller's current highlight as indented text."""
    controller = ctx.controller
    lines = [controller.hint or "(no hint)"]
    for kind, ident, color_class in controller.applied:
        if kind == "col":
            lines.append(f"  {color_class:<9}: column {ident}")
    for color_class, rows in controller.rows_by_class().items():
        joined = ", ".join(ctx.graph.label(row) for row in rows)
        lines.append(f"  {color_class:<9}: {joined}")
    lines.append(f"  elements : {len(controller.undo)}")
    return "\n".join(lines)


def highlight_payload(ctx: InspectContext) -> Dict[str, Any]:
    controller = ctx.controller
    return {
        "hint": controller.hint,
        "rows": controller.rows_by_class(),
        "columns": [ident for kind, ident, _ in controller.applied if kind == "col"],
        "elements": len(controller.undo),
    }


__all__ = ["emit_result", "emit_error", "describe_highlight", "highlight_payload"]
