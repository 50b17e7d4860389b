"""
Pytest configuration and shared allocator-dump fixtures for regviz tests.
"""

from __future__ import annotations

import copy
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
PYTHON_SRC = REPO_ROOT / "python"
if str(PYTHON_SRC) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC))

from regviz.model import Graph, parse_graph  # noqa: E402


def _interval(ident: int, ranges, uses=(), *, value: str = "v", physical: bool = False, parent=None, children=()) -> Dict[str, Any]:
    return {
        "id": ident,
        "value": value,
        "physical": physical,
        "parent": parent,
        "children": list(children),
        "ranges": [{"start": s, "end": e} for s, e in ranges],
        "uses": [{"pos": pos, "kind": kind} for pos, kind in uses],
    }


TWO_BLOCK_PAYLOAD: Dict[str, Any] = {
    "blocks": [
        {"id": 0, "start": 0, "end": 2, "successors": [1], "loop_depth": 0},
        {"id": 1, "start": 2, "end": 4, "successors": [], "loop_depth": 0},
    ],
    "intervals": [_interval(0, [(0, 4)])],
    "instructions": {},
}

# Interval 5 is split: parent [0, 2) and child 6 [2, 4).  Column 3 holds
# v7 = mul(v2, v4).
SPLIT_PAYLOAD: Dict[str, Any] = {
    "blocks": [
        {"id": 0, "start": 0, "end": 2, "successors": [1], "loop_depth": 0},
        {"id": 1, "start": 2, "end": 4, "successors": [1], "loop_depth": 1},
    ],
    "intervals": [
        _interval(0, [(0, 1)], [(0, "fixed")], value="r{0}0", physical=True),
        _interval(1, [(0, 2)], [(1, "any")]),
        _interval(2, [(1, 4)], [(1, "register"), (3, "register")]),
        _interval(3, [(2, 3)], [(2, "any")]),
        _interval(4, [(2, 4)], [(2, "any"), (3, "any")]),
        _interval(5, [(0, 2)], [(0, "register")], children=[6]),
        _interval(6, [(2, 4)], [(3, "any")], parent=5),
        _interval(7, [(3, 4)], [(3, "register")]),
    ],
    "instructions": {
        "0": {"id": 0, "block": 0, "kind": "const", "output": 5, "inputs": [], "temporary": []},
        "1": {"id": 1, "block": 0, "kind": "add", "output": 2, "inputs": [1, 0], "temporary": []},
        "2": {
            "id": 2,
            "block": 1,
            "kind": "~gap",
            "output": None,
            "inputs": [],
            "temporary": [],
            "gap_state": {"actions": [{"type": "move", "from": 3, "to": 4}]},
        },
        "3": {"id": 3, "block": 1, "kind": "mul", "output": 7, "inputs": [2, 4], "temporary": []},
    },
}


@pytest.fixture
def two_block_payload() -> Dict[str, Any]:
    return copy.deepcopy(TWO_BLOCK_PAYLOAD)


@pytest.fixture
def split_payload() -> Dict[str, Any]:
    return copy.deepcopy(SPLIT_PAYLOAD)


@pytest.fixture
def two_block_graph(two_block_payload) -> Graph:
    return parse_graph(two_block_payload)


@pytest.fixture
def split_graph(split_payload) -> Graph:
    return parse_graph(split_payload)
