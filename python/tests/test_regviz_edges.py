"""Tests for control-flow edge routing."""

from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
PYTHON_SRC = REPO_ROOT / "python"
if str(PYTHON_SRC) not in sys.path:
    sys.path.append(str(PYTHON_SRC))

from regviz.config import RenderConfig
from regviz.edges import EdgeRouter, depth_factor, distance_factor, is_fall_through
from regviz.geometry import Geometry
from regviz.model import parse_graph


def _graph(depths, successors):
    blocks = []
    for idx, depth in enumerate(depths):
        blocks.append(
            {
                "id": idx,
                "start": 2 * idx,
                "end": 2 * idx + 2,
                "successors": successors.get(idx, []),
                "loop_depth": depth,
            }
        )
    payload = {
        "blocks": blocks,
        "intervals": [{"id": 0, "ranges": [{"start": 0, "end": 1}], "uses": []}],
        "instructions": {},
    }
    return parse_graph(payload)


def _router(graph, config=None):
    config = config or RenderConfig()
    return EdgeRouter(graph, Geometry(config.layout, len(graph.rows)), config)


def test_fall_through_rule_is_positional():
    graph = _graph([0, 0, 0], {0: [1, 2]})
    block = graph.blocks[0]
    assert is_fall_through(block, 1)
    assert not is_fall_through(block, 2)
    assert not is_fall_through(graph.blocks[1], 0)


def test_fall_through_anchor_raised_by_half_block_height():
    graph = _graph([0, 0, 0], {0: [1, 2]})
    router = _router(graph)
    height = router.geometry.block_rect(graph.blocks[0]).height
    ft_start, ft_end = router.anchors(graph.blocks[0], 1)
    far_start, far_end = router.anchors(graph.blocks[0], 2)
    assert far_start.y - ft_start.y == pytest.approx(height / 2)
    assert far_end.y - ft_end.y == pytest.approx(height / 2)
    assert ft_start.y == pytest.approx(32 + 43 + 3 - 21.5)


def test_end_anchor_x_depends_on_edge_kind():
    graph = _graph([0, 0, 0], {0: [1, 2]})
    router = _router(graph)
    _, ft_end = router.anchors(graph.blocks[0], 1)
    _, far_end = router.anchors(graph.blocks[0], 2)
    target = router.geometry.block_rect(graph.blocks[2])
    assert ft_end.x == router.geometry.block_rect(graph.blocks[1]).x
    assert far_end.x == pytest.approx(target.x + target.width / 2)


def test_two_block_fall_through_bulge():
    graph = _graph([0, 0], {0: [1]})
    edge = _router(graph).route_all()[0]
    assert edge.fall_through
    assert edge.bulge == pytest.approx(4 * math.log(3))


def test_control_points_at_quarter_spans():
    graph = _graph([0, 1, 1, 0], {2: [1]})
    edge = _router(graph).route_all()[0]
    span = edge.end.x - edge.start.x
    assert edge.control1.x == pytest.approx(edge.start.x + span / 4)
    assert edge.control2.x == pytest.approx(edge.start.x + 3 * span / 4)
    middle = (edge.start.y + edge.end.y) / 2 + edge.bulge
    assert edge.control1.y == pytest.approx(middle)
    assert edge.control2.y == pytest.approx(middle)


def test_arrowhead_room_at_end_anchor():
    graph = _graph([0, 0, 0], {0: [2], 2: [0]})
    router = _router(graph)
    forward, backward = router.route_all()
    _, forward_anchor = router.anchors(graph.blocks[0], 2)
    _, backward_anchor = router.anchors(graph.blocks[2], 0)
    assert forward.end.x == pytest.approx(forward_anchor.x - 5)
    assert backward.end.x == pytest.approx(backward_anchor.x + 5)


def test_depth_factor_values():
    assert depth_factor(0, 0, 0) == pytest.approx(1.0)
    assert depth_factor(2, 3, 3) == pytest.approx(1 + math.log(3))
    assert distance_factor(0) == 0
    assert distance_factor(-9) == pytest.approx(math.log(10))


def test_bulge_grows_with_shared_nesting():
    bulges = []
    for depth in range(4):
        graph = _graph([depth, 0, depth, 3], {0: [2]})
        bulges.append(_router(graph).route_all()[0].bulge)
    assert all(a <= b for a, b in zip(bulges, bulges[1:]))
    assert bulges[0] < bulges[-1]


def test_bulge_uses_shallower_endpoint():
    deep_pair = _router(_graph([2, 0, 2], {0: [2]})).route_all()[0]
    mixed_pair = _router(_graph([2, 0, 0, 2], {0: [2]})).route_all()[0]
    assert mixed_pair.bulge < deep_pair.bulge


def test_edges_emitted_in_block_then_successor_order():
    graph = _graph([0, 1, 1, 0], {0: [1, 3], 1: [2], 2: [1, 3]})
    edges = _router(graph).route_all()
    assert [(e.source, e.target) for e in edges] == [(0, 1), (0, 3), (1, 2), (2, 1), (2, 3)]


def test_draw_paths_reference_marker():
    graph = _graph([0, 0], {0: [1]})
    router = _router(graph)
    shapes = router.draw(router.route_all())
    assert shapes[0].tag == "path"
    assert shapes[0].attrs["marker-end"] == "url(#arrow)"
    assert shapes[0].attrs["d"].startswith("M ")
    assert " C " in shapes[0].attrs["d"]
    marker = router.marker()
    assert marker.attrs["id"] == "arrow"
    assert marker.children[0].attrs["d"] == "M 0 0 L 5 2 L 0 4 Z"
