"""Grouping traced paths into sets, sharing the ants out and listing their moves."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import pairwise, zip_longest
from typing import Optional, Protocol, Sequence

from .farm import Room


class RouteGraph(Protocol):
    """What set building needs to know about a partly solved farm."""

    rooms: Sequence[Room]
    weight: Sequence[int]
    sh: Sequence[int]
    start: int
    end: int
    ants: int


@dataclass
class Way:
    """One path: the rooms after the start, ending at the end room."""

    nodes: list[int]
    turns: int = 0

    @property
    def length(self) -> int:
        """Number of moves an ant makes along this way."""
        return len(self.nodes) - 1

    @property
    def ants(self) -> int:
        """Ants this way is meant to carry."""
        return self.turns - self.length if self.turns else 0


@dataclass
class WaySet:
    """Ways kept in order of length, with the turns they need together."""

    ways: list[Way] = field(default_factory=list)
    turns: int = 0

    def add(self, way: Way) -> None:
        """Insert a way after every way that is not longer than it."""
        at = next(
            (i for i, cur in enumerate(self.ways) if way.length < cur.length),
            len(self.ways),
        )
        self.ways.insert(at, way)


def is_sorted(ways: Sequence[Way]) -> bool:
    """True when no way needs more turns than the one after it."""
    for cur, nxt in pairwise(ways):
        limit = nxt.turns if nxt.turns else nxt.length
        if cur.turns > limit:
            return False
    return True


def calculate_turns(ants: int, wayset: WaySet) -> int:
    """Share ants between the ways and return the turns the set needs."""
    ways = wayset.ways
    if ways:
        ways[0].turns = ants + ways[0].length
        while not is_sorted(ways):
            for cur, nxt in pairwise(ways):
                if not nxt.turns and cur.turns > nxt.length:
                    cur.turns -= 1
                    nxt.turns = nxt.length + 1
                while nxt.turns and cur.turns > nxt.turns:
                    cur.turns -= 1
                    nxt.turns += 1
    wayset.turns = max([0, *(way.turns for way in ways)])
    return wayset.turns


def trace_way(farm: RouteGraph, first: int) -> Way:
    """Follow the rooms marked with the same step from ``first`` to the end."""

    def following(cur: int) -> Optional[int]:
        mark = farm.sh[cur]
        return next(
            (
                link
                for link in farm.rooms[cur].links
                if link == farm.end
                or (mark and farm.sh[link] == mark and farm.weight[link] > farm.weight[cur])
            ),
            None,
        )

    nodes = [first]
    cur = first
    while (nxt := following(cur)) is not None:
        nodes.append(nxt)
        cur = nxt
        if cur == farm.end:
            break
    return Way(nodes)


def find_sets(farm: RouteGraph) -> Optional[WaySet]:
    """Build the set of ways leaving the start, or None if there is none."""
    firsts = [
        link
        for link in farm.rooms[farm.start].links
        if link == farm.end or farm.sh[link] != 0
    ]
    if not firsts:
        return None
    wayset = WaySet()
    for first in firsts:
        wayset.add(trace_way(farm, first))
    calculate_turns(farm.ants, wayset)
    return wayset


def format_solution(wayset: WaySet, farm) -> str:
    """One line of ``L<ant>-<room>`` moves for every turn of the set."""
    ways = wayset.ways
    slots = [[0] * len(way.nodes) for way in ways]
    sent = 0
    lines = []
    for _ in range(wayset.turns):
        for way_slots in slots:
            entering = 0
            if sent < farm.ants:
                sent += 1
                entering = sent
            way_slots.insert(0, entering)
            way_slots.pop()
        per_way = [
            [(ant, node) for ant, node in zip(reversed(way_slots), reversed(way.nodes)) if ant]
            for way_slots, way in zip(slots, ways)
        ]
        moves = (
            f"L{ant}-{farm.rooms[node].name}"
            for rnd in zip_longest(*per_way)
            for move in rnd
            if move is not None
            for ant, node in (move,)
        )
        lines.append(" ".join(moves) + "\n")
    return "".join(lines)