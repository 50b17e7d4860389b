"""Allocator dump entities and payload loading.

The register allocator exports one JSON object with ``blocks``,
``intervals`` and ``instructions`` sections.  :func:`load_graph` turns it
into frozen dataclasses and checks the structural preconditions the layout
engine relies on, so malformed dumps are rejected before any SVG is
written.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

USE_KINDS = ("any", "register", "fixed")
_USE_KIND_ALIASES = {"reg": "register"}
GAP_ACTIONS = ("move", "swap")


class GraphError(ValueError):
    """The dump violates a structural precondition."""


@dataclass(frozen=True)
class LiveRange:
    start: int
    end: int

    def covers(self, col: int) -> bool:
        return self.start <= col < self.end


@dataclass(frozen=True)
class Use:
    pos: int
    kind: str = "any"
    value: Optional[str] = None
    group: Optional[int] = None


@dataclass(frozen=True)
class Block:
    id: int
    start: int
    end: int
    successors: Tuple[int, ...] = ()
    loop_depth: int = 0

    @property
    def columns(self) -> range:
        return range(self.start, self.end)


@dataclass(frozen=True)
class GapAction:
    kind: str
    source: int
    target: int


@dataclass(frozen=True)
class Instruction:
    id: int
    block: int
    kind: str
    output: Optional[int] = None
    inputs: Tuple[int, ...] = ()
    temporary: Tuple[int, ...] = ()
    gap_actions: Tuple[GapAction, ...] = ()


@dataclass(frozen=True)
class Interval:
    id: int
    value: str = "v"
    physical: bool = False
    parent: Optional[int] = None
    children: Tuple[int, ...] = ()
    ranges: Tuple[LiveRange, ...] = ()
    uses: Tuple[Use, ...] = ()

    @property
    def is_virtual(self) -> bool:
        return self.value == "v" or self.value.startswith("v{")

    @property
    def label(self) -> str:
        return f"v{self.id}" if self.is_virtual else self.value

    @property
    def end(self) -> int:
        return self.ranges[-1].end if self.ranges else 0

    def covers(self, col: int) -> bool:
        return any(r.covers(col) for r in self.ranges)


@dataclass(frozen=True)
class Graph:
    blocks: Tuple[Block, ...]
    intervals: Tuple[Interval, ...]
    instructions: Dict[int, Instruction]
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)
    _by_id: Dict[int, Interval] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_id", {iv.id: iv for iv in self.intervals})

    def interval(self, interval_id: int) -> Interval:
        try:
            return self._by_id[interval_id]
        except KeyError:
            raise GraphError(f"unknown interval id {interval_id}") from None

    def has_interval(self, interval_id: int) -> bool:
        return interval_id in self._by_id

    @property
    def rows(self) -> List[Interval]:
        """Top-level intervals in listed order; split children share a row."""
        return [iv for iv in self.intervals if iv.parent is None]

    @property
    def max_loop_depth(self) -> int:
        return max((b.loop_depth for b in self.blocks), default=0)

    @property
    def column_count(self) -> int:
        return self.blocks[-1].end if self.blocks else 0

    def label(self, interval_id: int) -> str:
        if not self.has_interval(interval_id):
            return f"v{interval_id}"
        return self.interval(interval_id).label


def _int(value: Any, where: str) -> int:
    if isinstance(value, bool):
        raise GraphError(f"{where} must be an integer, got boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            pass
    raise GraphError(f"{where} must be an integer (got {value!r})")


def _opt_int(value: Any, where: str) -> Optional[int]:
    return None if value is None else _int(value, where)


def _int_list(values: Any, where: str) -> Tuple[int, ...]:
    if values is None:
        return ()
    if not isinstance(values, (list, tuple)):
        raise GraphError(f"{where} must be a sequence")
    return tuple(_int(v, f"{where}[{idx}]") for idx, v in enumerate(values))


def _require(entry: Mapping[str, Any], key: str, where: str) -> Any:
    if not isinstance(entry, Mapping):
        raise GraphError(f"{where} must be an object")
    if key not in entry:
        raise GraphError(f"{where} missing required field '{key}'")
    return entry[key]


def _parse_use(entry: Any, where: str) -> Use:
    pos = _int(_require(entry, "pos", where), f"{where}.pos")
    raw_kind = entry.get("kind", "any")
    value = None
    if isinstance(raw_kind, Mapping):
        value = raw_kind.get("value")
        raw_kind = raw_kind.get("type", "any")
    kind = _USE_KIND_ALIASES.get(str(raw_kind), str(raw_kind))
    if kind not in USE_KINDS:
        raise GraphError(f"{where}.kind must be one of {list(USE_KINDS)} (got {raw_kind!r})")
    return Use(
        pos=pos,
        kind=kind,
        value=None if value is None else str(value),
        group=_opt_int(entry.get("group"), f"{where}.group"),
    )


def _parse_block(entry: Any, where: str) -> Block:
    return Block(
        id=_int(_require(entry, "id", where), f"{where}.id"),
        start=_int(_require(entry, "start", where), f"{where}.start"),
        end=_int(_require(entry, "end", where), f"{where}.end"),
        successors=_int_list(entry.get("successors"), f"{where}.successors"),
        loop_depth=_int(entry.get("loop_depth", 0), f"{where}.loop_depth"),
    )


def _parse_interval(entry: Any, where: str) -> Interval:
    ident = _int(_require(entry, "id", where), f"{where}.id")
    ranges = []
    for idx, item in enumerate(entry.get("ranges") or []):
        rwhere = f"{where}.ranges[{idx}]"
        ranges.append(
            LiveRange(
                start=_int(_require(item, "start", rwhere), f"{rwhere}.start"),
                end=_int(_require(item, "end", rwhere), f"{rwhere}.end"),
            )
        )
    uses = [_parse_use(item, f"{where}.uses[{idx}]") for idx, item in enumerate(entry.get("uses") or [])]
    return Interval(
        id=ident,
        value=str(entry.get("value", "v")),
        physical=bool(entry.get("physical", False)),
        parent=_opt_int(entry.get("parent"), f"{where}.parent"),
        children=_int_list(entry.get("children"), f"{where}.children"),
        ranges=tuple(ranges),
        uses=tuple(uses),
    )


def _parse_gap(entry: Any, where: str) -> Tuple[GapAction, ...]:
    if entry is None:
        return ()
    actions = []
    for idx, item in enumerate(_require(entry, "actions", where) or []):
        awhere = f"{where}.actions[{idx}]"
        kind = str(_require(item, "type", awhere))
        if kind not in GAP_ACTIONS:
            raise GraphError(f"{awhere}.type must be one of {list(GAP_ACTIONS)} (got {kind!r})")
        actions.append(
            GapAction(
                kind=kind,
                source=_int(_require(item, "from", awhere), f"{awhere}.from"),
                target=_int(_require(item, "to", awhere), f"{awhere}.to"),
            )
        )
    return tuple(actions)


def _parse_instruction(key: Any, entry: Any, where: str) -> Instruction:
    ident = _int(entry.get("id", key), f"{where}.id") if isinstance(entry, Mapping) else _int(key, where)
    return Instruction(
        id=ident,
        block=_int(_require(entry, "block", where), f"{where}.block"),
        kind=str(_require(entry, "kind", where)),
        output=_opt_int(entry.get("output"), f"{where}.output"),
        inputs=_int_list(entry.get("inputs"), f"{where}.inputs"),
        temporary=_int_list(entry.get("temporary"), f"{where}.temporary"),
        gap_actions=_parse_gap(entry.get("gap_state"), f"{where}.gap_state"),
    )


def _instruction_items(section: Any) -> Iterable[Tuple[Any, Any]]:
    if isinstance(section, Mapping):
        return section.items()
    if isinstance(section, list):
        return ((entry.get("id") if isinstance(entry, Mapping) else idx, entry) for idx, entry in enumerate(section))
    raise GraphError("instructions must be an object keyed by instruction id")


def parse_graph(payload: Mapping[str, Any], *, validate: bool = True) -> Graph:
    """Build a :class:`Graph` from a decoded JSON payload."""

    if not isinstance(payload, Mapping):
        raise GraphError("payload must be an object")
    blocks_raw = payload.get("blocks")
    intervals_raw = payload.get("intervals")
    if not isinstance(blocks_raw, list):
        raise GraphError("blocks must be a list")
    if not isinstance(intervals_raw, list):
        raise GraphError("intervals must be a list")
    blocks = tuple(_parse_block(entry, f"blocks[{idx}]") for idx, entry in enumerate(blocks_raw))
    intervals = tuple(_parse_interval(entry, f"intervals[{idx}]") for idx, entry in enumerate(intervals_raw))
    instructions: Dict[int, Instruction] = {}
    for key, entry in _instruction_items(payload.get("instructions") or {}):
        instr = _parse_instruction(key, entry, f"instructions[{key}]")
        instructions[instr.id] = instr
    graph = Graph(
        blocks=blocks,
        intervals=intervals,
        instructions=dict(sorted(instructions.items())),
        raw=payload,
    )
    if validate:
        validate_graph(graph)
    return graph


def load_graph(path: Union[Path, str], *, validate: bool = True) -> Graph:
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise GraphError(f"{path}: invalid JSON ({exc})") from exc
    return parse_graph(payload, validate=validate)


def loads_graph(text: str, *, validate: bool = True) -> Graph:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise GraphError(f"invalid JSON ({exc})") from exc
    return parse_graph(payload, validate=validate)


def _check_blocks(blocks: Tuple[Block, ...]) -> None:
    expected_start = blocks[0].start if blocks else 0
    for idx, block in enumerate(blocks):
        where = f"blocks[{idx}]"
        if block.id != idx:
            raise GraphError(f"{where}.id must equal its position {idx} (got {block.id})")
        if block.start >= block.end:
            raise GraphError(f"{where} must satisfy start < end (got [{block.start}, {block.end}))")
        if block.start != expected_start:
            raise GraphError(f"{where}.start must continue the previous block at {expected_start}")
        if block.loop_depth < 0:
            raise GraphError(f"{where}.loop_depth must be non-negative")
        expected_start = block.end
        for sidx, succ in enumerate(block.successors):
            if not 0 <= succ < len(blocks):
                raise GraphError(f"{where}.successors[{sidx}] references unknown block {succ}")


def _check_intervals(graph: Graph) -> None:
    seen = set()
    for idx, interval in enumerate(graph.intervals):
        where = f"intervals[{idx}]"
        if interval.id in seen:
            raise GraphError(f"{where}.id {interval.id} is duplicated")
        seen.add(interval.id)
        previous_end = None
        for ridx, rng in enumerate(interval.ranges):
            if rng.start >= rng.end:
                raise GraphError(f"{where}.ranges[{ridx}] must satisfy start < end")
            if previous_end is not None and rng.start < previous_end:
                raise GraphError(f"{where}.ranges must be sorted and disjoint (at index {ridx})")
            previous_end = rng.end
    for idx, interval in enumerate(graph.intervals):
        where = f"intervals[{idx}]"
        if interval.parent is not None and not graph.has_interval(interval.parent):
            raise GraphError(f"{where}.parent references unknown interval {interval.parent}")
        if interval.parent is not None:
            parent = graph.interval(interval.parent)
            if interval.id not in parent.children:
                raise GraphError(f"{where}.parent {parent.id} does not list {interval.id} among its children")
            if parent.parent is not None:
                raise GraphError(f"{where}.parent {parent.id} is itself a split child; families are single-level")
            if interval.children:
                raise GraphError(f"{where}.children must be empty for a split child of {parent.id}")
        for cidx, child in enumerate(interval.children):
            if not graph.has_interval(child):
                raise GraphError(f"{where}.children[{cidx}] references unknown interval {child}")
            if graph.interval(child).parent != interval.id:
                raise GraphError(f"{where}.children[{cidx}] does not name {interval.id} as parent")


def _check_instructions(graph: Graph) -> None:
    for instr in graph.instructions.values():
        where = f"instructions[{instr.id}]"
        if not 0 <= instr.block < len(graph.blocks):
            raise GraphError(f"{where}.block references unknown block {instr.block}")
        block = graph.blocks[instr.block]
        if instr.id not in block.columns:
            raise GraphError(f"{where} lies outside block {block.id} columns [{block.start}, {block.end})")
        operands: List[Tuple[str, int]] = []
        if instr.output is not None:
            operands.append(("output", instr.output))
        operands.extend((f"inputs[{i}]", v) for i, v in enumerate(instr.inputs))
        operands.extend((f"temporary[{i}]", v) for i, v in enumerate(instr.temporary))
        for aidx, action in enumerate(instr.gap_actions):
            operands.append((f"gap_state.actions[{aidx}].from", action.source))
            operands.append((f"gap_state.actions[{aidx}].to", action.target))
        for name, interval_id in operands:
            if not graph.has_interval(interval_id):
                raise GraphError(f"{where}.{name} references unknown interval {interval_id}")


def validate_graph(graph: Graph) -> None:
    """Raise :class:`GraphError` on the first violated precondition."""

    _check_blocks(graph.blocks)
    _check_intervals(graph)
    _check_instructions(graph)
