"""Split-interval segmentation.

A split interval and its children share one display row.  The row is cut
into consecutive segments, one per family member (parent first, children in
listed order), so every column has exactly one owning interval.  The owner
decides which ``r-<id>`` tag a grid cell carries and which fragment an
instruction operand links to.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .model import Graph, Interval


@dataclass(frozen=True)
class Segment:
    interval: int
    start: int
    end: int

    def __contains__(self, col: int) -> bool:
        return self.start <= col < self.end


class Family:
    """A top-level interval plus its direct children."""

    def __init__(self, members: Sequence[Interval]) -> None:
        if not members:
            raise ValueError("family needs at least one member")
        self.members: Tuple[Interval, ...] = tuple(members)
        self.segments: Tuple[Segment, ...] = self._partition(self.members)
        self._ends = [seg.end for seg in self.segments]

    @property
    def root(self) -> Interval:
        return self.members[0]

    @property
    def ids(self) -> List[int]:
        return [m.id for m in self.members]

    @property
    def end(self) -> int:
        return self.segments[-1].end

    @staticmethod
    def _partition(members: Sequence[Interval]) -> Tuple[Segment, ...]:
        segments = []
        cursor = 0
        for member in members:
            end = max(cursor, member.end)
            segments.append(Segment(member.id, cursor, end))
            cursor = end
        return tuple(segments)

    def owner_at(self, col: int) -> int:
        """Return the id of the member owning ``col``.

        Columns past the family's last end belong to the last segment.
        """
        idx = bisect_right(self._ends, col)
        if idx >= len(self.segments):
            return self.segments[-1].interval
        return self.segments[idx].interval

    def __iter__(self):
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)


def family_of(graph: Graph, interval_id: int) -> Family:
    """Return the family ``interval_id`` belongs to."""
    interval = graph.interval(interval_id)
    root = graph.interval(interval.parent) if interval.parent is not None else interval
    return Family([root] + [graph.interval(child) for child in root.children])


def families(graph: Graph) -> List[Family]:
    """One family per display row, in row order."""
    return [family_of(graph, row.id) for row in graph.rows]


def owner_at(family: Family, col: int) -> int:
    return family.owner_at(col)


class OperandResolver:
    """Maps an operand reference at a column to the fragment live there."""

    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self._families: Dict[int, Family] = {}

    def family(self, interval_id: int) -> Family:
        cached = self._families.get(interval_id)
        if cached is None:
            cached = family_of(self.graph, interval_id)
            for member in cached.members:
                self._families[member.id] = cached
        return cached

    def resolve(self, interval_id: int, col: int) -> int:
        interval = self.graph.interval(interval_id)
        if interval.covers(col):
            return interval_id
        family = self.family(interval_id)
        for member in family.members:
            if member.covers(col):
                return member.id
        # a use at the very end of a half-open range still belongs to it
        for member in family.members:
            if any(r.end == col for r in member.ranges):
                return member.id
        return family.owner_at(col)

    def table(self) -> Dict[str, Dict[str, int]]:
        """Per-column operand remapping, only where it differs from the raw id."""
        result: Dict[str, Dict[str, int]] = {}
        for instr in self.graph.instructions.values():
            operands = list(instr.inputs) + list(instr.temporary)
            if instr.output is not None:
                operands.append(instr.output)
            for action in instr.gap_actions:
                operands.extend((action.source, action.target))
            for operand in operands:
                resolved = self.resolve(operand, instr.id)
                if resolved != operand:
                    result.setdefault(str(instr.id), {})[str(operand)] = resolved
        return result
