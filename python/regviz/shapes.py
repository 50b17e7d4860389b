"""Intermediate drawing primitives shared by the layout passes.

Layout code produces :class:`Shape` trees; :mod:`regviz.document` turns
them into SVG elements and :mod:`regviz.highlight` indexes them by their
row/column tags.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


def _fmt(value: Any) -> str:
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return "0" if text == "-0" else text
    return str(value)


@dataclass
class Shape:
    tag: str
    attrs: Dict[str, Any] = field(default_factory=dict)
    text: Optional[str] = None
    children: List["Shape"] = field(default_factory=list)
    row: Optional[int] = None
    col: Optional[int] = None

    @property
    def fill(self) -> Optional[str]:
        return self.attrs.get("fill")

    @fill.setter
    def fill(self, value: Optional[str]) -> None:
        if value is None:
            self.attrs.pop("fill", None)
        else:
            self.attrs["fill"] = value

    @property
    def classes(self) -> List[str]:
        names = []
        if self.row is not None:
            names.append(f"r-{self.row}")
        if self.col is not None:
            names.append(f"c-{self.col}")
        extra = self.attrs.get("class")
        if extra:
            names.append(str(extra))
        return names

    def svg_attrs(self) -> Dict[str, str]:
        out = {key: _fmt(value) for key, value in self.attrs.items() if key != "class" and value is not None}
        classes = self.classes
        if classes:
            out["class"] = " ".join(classes)
        if self.row is not None:
            out["data-r"] = str(self.row)
        if self.col is not None:
            out["data-c"] = str(self.col)
        return out

    def walk(self) -> Iterator["Shape"]:
        yield self
        for child in self.children:
            yield from child.walk()


def rect(x: float, y: float, width: float, height: float, fill: str, **extra: Any) -> Shape:
    row = extra.pop("row", None)
    col = extra.pop("col", None)
    attrs: Dict[str, Any] = {"x": x, "y": y, "width": width, "height": height, "fill": fill}
    attrs.update(extra)
    return Shape("rect", attrs, row=row, col=col)


def text(x: float, y: float, body: str, **extra: Any) -> Shape:
    row = extra.pop("row", None)
    col = extra.pop("col", None)
    attrs: Dict[str, Any] = {"x": x, "y": y}
    attrs.update(extra)
    return Shape("text", attrs, text=body, row=row, col=col)


def tspan(body: str, *, row: Optional[int] = None, col: Optional[int] = None, **attrs: Any) -> Shape:
    return Shape("tspan", dict(attrs), text=body, row=row, col=col)
