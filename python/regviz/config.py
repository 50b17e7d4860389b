"""Render configuration: spacing constants, palette and JSON overrides."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

LOG_ENV = "REGVIZ_LOG"

DEFAULT_COLORS: Dict[str, str] = {
    "default": "black",
    "arrow": "rgba(0,0,0,0.6)",
    "highlight:interval": "#16DDD7",
    "highlight:output": "#A40B04",
    "highlight:input": "#0CF471",
    "highlight:tmp": "#601D61",
    "block:fill": "#4CBFCB",
    "interval:empty": "#A4EEE8",
    "interval:physical": "#FD6218",
    "interval:normal": "#FBA42B",
    "use:any": "#F6E575",
    "use:register": "#BCDD70",
    "use:fixed": "#FD6218",
}


class ConfigError(ValueError):
    """Raised when a configuration file cannot be applied."""


@dataclass(frozen=True)
class Layout:
    """Spacing constants, in SVG user units."""

    left: float = 8
    top: float = 32
    cell_width: float = 16
    cell_height: float = 16
    padding_x: float = 2
    padding_y: float = 2
    block_radius: float = 3
    title_height: float = 24
    use_width: float = 5
    arrow_width: float = 5
    line_height: float = 14
    margin: float = 16


@dataclass(frozen=True)
class RenderConfig:
    layout: Layout = field(default_factory=Layout)
    palette: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COLORS))
    interactive: bool = True
    legend: bool = False
    font_family: str = "Raleway"

    def color(self, name: str) -> str:
        return self.palette.get(name) or self.palette.get("default", "black")


def _apply_layout(layout: Layout, overrides: Mapping[str, Any]) -> Layout:
    known = {f.name for f in fields(Layout)}
    values: Dict[str, float] = {}
    for key, raw in overrides.items():
        if key not in known:
            raise ConfigError(f"layout.{key} is not a known spacing constant")
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise ConfigError(f"layout.{key} must be numeric (got {raw!r})")
        values[key] = raw
    return replace(layout, **values)


def load_config(path: Optional[Path] = None, **options: Any) -> RenderConfig:
    """Build a :class:`RenderConfig`, optionally merging a JSON file.

    The file may carry ``layout`` (spacing overrides) and ``colors`` (palette
    overrides) objects.  Keyword ``options`` (``interactive``, ``legend``,
    ``font_family``) win over both.
    """

    config = RenderConfig()
    if path is not None:
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{path}: invalid JSON ({exc})") from exc
        if not isinstance(data, Mapping):
            raise ConfigError(f"{path}: top level must be an object")
        layout_overrides = data.get("layout") or {}
        color_overrides = data.get("colors") or {}
        if not isinstance(layout_overrides, Mapping):
            raise ConfigError("layout must be an object")
        if not isinstance(color_overrides, Mapping):
            raise ConfigError("colors must be an object")
        palette = dict(config.palette)
        palette.update({str(k): str(v) for k, v in color_overrides.items()})
        config = replace(
            config,
            layout=_apply_layout(config.layout, layout_overrides),
            palette=palette,
        )
    present = {key: value for key, value in options.items() if value is not None}
    if present:
        config = replace(config, **present)
    return config


def default_log_level() -> str:
    return os.environ.get(LOG_ENV, "INFO")
