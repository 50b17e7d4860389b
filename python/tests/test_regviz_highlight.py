"""Tests for the hover highlight state machine."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
PYTHON_SRC = REPO_ROOT / "python"
if str(PYTHON_SRC) not in sys.path:
    sys.path.append(str(PYTHON_SRC))

from regviz.config import DEFAULT_COLORS, RenderConfig
from regviz.document import layout_diagram
from regviz.highlight import HighlightController, Target, hint_text
from regviz.model import parse_graph
from regviz.shapes import rect


def _controller(graph):
    config = RenderConfig()
    index = layout_diagram(graph, config).index()
    return HighlightController(graph, index, config)


def test_column_hover_cascades_to_operands(split_graph):
    controller = _controller(split_graph)
    hint = controller.hover(col=3)
    assert hint == "3: v7=mul(v2, v4)"
    assert controller.rows_by_class() == {"output": [7], "input": [2, 4]}
    index = controller.index
    assert all(el.fill == DEFAULT_COLORS["highlight:output"] for el in index.by_row(7))
    assert all(el.fill == DEFAULT_COLORS["highlight:input"] for el in index.by_row(2))
    assert all(el.fill == DEFAULT_COLORS["highlight:input"] for el in index.by_row(4))
    untouched = [el for el in index.by_col(3) if el.row not in (2, 4, 7)]
    assert untouched
    assert all(el.fill == DEFAULT_COLORS["highlight:interval"] for el in untouched)


def test_hover_out_restores_every_element(split_graph):
    controller = _controller(split_graph)
    before = controller.index.fills()
    controller.hover(row=5, col=3)
    assert controller.index.fills() != before
    controller.hover_out()
    assert controller.index.fills() == before
    assert controller.undo == []
    assert controller.hint == ""


def test_round_trip_for_every_column(split_graph):
    controller = _controller(split_graph)
    before = controller.index.fills()
    for col in range(split_graph.column_count):
        controller.hover(col=col)
    controller.hover_out()
    assert controller.index.fills() == before


def test_row_hover_has_no_hint(split_graph):
    controller = _controller(split_graph)
    controller.hover(row=6)
    assert controller.hint == ""
    painted = {el.col for el in controller.index.by_row(6) if el.fill == DEFAULT_COLORS["highlight:interval"]}
    assert painted == {2, 3}


def test_new_hover_clears_previous(split_graph):
    controller = _controller(split_graph)
    controller.hover(col=3)
    controller.hover(row=1)
    assert controller.rows_by_class() == {"interval": [1]}
    assert all(el.fill != DEFAULT_COLORS["highlight:output"] for el in controller.index.by_row(7))


def test_highlight_without_clear_stacks(split_graph):
    controller = _controller(split_graph)
    controller.highlight(Target(row=1))
    controller.highlight(Target(row=3), "tmp", clear_first=False)
    assert controller.rows_by_class() == {"interval": [1], "tmp": [3]}


def test_split_operand_highlights_live_fragment(split_payload):
    split_payload["instructions"]["3"]["temporary"] = [5]
    graph = parse_graph(split_payload)
    controller = _controller(graph)
    hint = controller.hover(col=3)
    assert hint == "3: v7=mul(v2, v4) | tmp: v5"
    assert controller.rows_by_class()["tmp"] == [6]


def test_empty_column_hint(two_block_graph):
    controller = _controller(two_block_graph)
    assert controller.hover(col=2) == "2: empty"


def test_gap_hint_omits_output(split_graph):
    assert hint_text(split_graph, 2) == "2: ~gap()"


def test_unknown_colour_class_rejected(split_graph):
    controller = _controller(split_graph)
    with pytest.raises(ValueError):
        controller.highlight(Target(row=1), "bogus")


def test_undo_restores_in_reverse_order(two_block_graph):
    from regviz.highlight import ElementIndex

    cell = rect(0, 0, 1, 1, "#000000", row=0, col=0)
    controller = HighlightController(two_block_graph, ElementIndex([cell]), RenderConfig())
    controller.highlight(Target(row=0, col=0))
    assert len(controller.undo) == 2
    controller.clear()
    assert cell.fill == "#000000"
