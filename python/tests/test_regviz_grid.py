"""Tests for block boxes and the interval grid."""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
PYTHON_SRC = REPO_ROOT / "python"
if str(PYTHON_SRC) not in sys.path:
    sys.path.append(str(PYTHON_SRC))

from regviz.config import DEFAULT_COLORS, RenderConfig
from regviz.geometry import Geometry
from regviz.grid import GridRenderer, use_title
from regviz.model import parse_graph
from regviz.segments import family_of


def _renderer(graph, config=None):
    config = config or RenderConfig()
    return GridRenderer(graph, Geometry(config.layout, len(graph.rows)), config)


def _by_fill(shapes, key):
    return [s for s in shapes if s.fill == DEFAULT_COLORS[key]]


def test_blocks_draw_box_and_title(two_block_graph):
    shapes = _renderer(two_block_graph).draw_blocks()
    assert [s.tag for s in shapes] == ["rect", "text", "rect", "text"]
    assert shapes[1].text == "0" and shapes[3].text == "1"
    assert shapes[0].attrs["rx"] == 3


def test_unsplit_range_is_one_continuous_run(two_block_graph):
    """Two blocks, one interval live across both, no uses."""
    shapes = _renderer(two_block_graph).draw_rows()
    ranges = _by_fill(shapes, "interval:normal")
    assert [s.col for s in ranges] == [0, 1, 2, 3]
    for left, right in zip(ranges, ranges[1:]):
        assert left.attrs["x"] + left.attrs["width"] == right.attrs["x"]
    assert ranges[-1].attrs["width"] == 14
    uses = [s for s in shapes if s.attrs["width"] == 5]
    assert uses == []


def test_background_cells_narrowed_at_block_end(two_block_graph):
    shapes = _renderer(two_block_graph).draw_rows()
    background = _by_fill(shapes, "interval:empty")
    assert [s.col for s in background] == [0, 1, 2, 3]
    assert [s.attrs["width"] for s in background] == [16, 14, 16, 14]
    assert {s.row for s in background} == {0}


def test_background_tagged_with_segment_owner(split_graph):
    renderer = _renderer(split_graph)
    row = renderer.draw_row(family_of(split_graph, 5), 5)
    background = _by_fill(row, "interval:empty")
    assert [(s.row, s.col) for s in background] == [(5, 0), (5, 1), (6, 2), (6, 3)]


def test_child_ranges_share_parent_row(split_graph):
    renderer = _renderer(split_graph)
    row = renderer.draw_row(family_of(split_graph, 5), 5)
    ranges = _by_fill(row, "interval:normal")
    assert [(s.row, s.col) for s in ranges] == [(5, 0), (5, 1), (6, 2), (6, 3)]
    assert {s.attrs["y"] for s in row} == {renderer.geometry.row_y(5)}


def test_physical_ranges_and_use_kind_colours(split_graph):
    renderer = _renderer(split_graph)
    row = renderer.draw_row(family_of(split_graph, 0), 0)
    physical = [s for s in _by_fill(row, "interval:physical") if s.attrs["width"] != 5]
    assert [(s.row, s.col) for s in physical] == [(0, 0)]
    markers = [s for s in row if s.attrs["width"] == 5]
    assert [m.fill for m in markers] == [DEFAULT_COLORS["use:fixed"]]

    row2 = renderer.draw_row(family_of(split_graph, 2), 2)
    markers = [s for s in row2 if s.attrs["width"] == 5]
    assert [(m.col, m.fill) for m in markers] == [(1, DEFAULT_COLORS["use:register"]), (3, DEFAULT_COLORS["use:register"])]


def test_row_emission_order(split_graph):
    row = _renderer(split_graph).draw_row(family_of(split_graph, 4), 4)
    fills = [s.fill for s in row]
    assert fills == (
        [DEFAULT_COLORS["interval:empty"]] * 4
        + [DEFAULT_COLORS["interval:normal"]] * 2
        + [DEFAULT_COLORS["use:any"]] * 2
    )


def test_draw_rows_covers_every_row(split_graph):
    shapes = _renderer(split_graph).draw_rows()
    background = _by_fill(shapes, "interval:empty")
    assert len(background) == 7 * 4


def test_use_markers_carry_register_constraint_title(two_block_payload):
    two_block_payload["intervals"][0]["uses"] = [
        {"pos": 1, "kind": {"type": "reg"}, "group": 1},
        {"pos": 2, "kind": {"type": "fixed", "value": "r{0}3"}},
    ]
    graph = parse_graph(two_block_payload)
    row = _renderer(graph).draw_row(family_of(graph, 0), 0)
    markers = [s for s in row if s.attrs["width"] == 5]
    titles = [m.children[0] for m in markers]
    assert [t.tag for t in titles] == ["title", "title"]
    assert [t.text for t in titles] == ["v0 @1: register (group 1)", "v0 @2: fixed r{0}3"]
    assert all(t.row is None and t.col is None for t in titles)


def test_use_title_for_plain_use(split_graph):
    interval = split_graph.interval(2)
    assert use_title(interval, interval.uses[0]) == "v2 @1: register"
