"""Building the ant farm graph from its text description."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .validation import END, START, find_ants, is_link, is_room

_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?)(\d*)")


class FarmError(ValueError):
    """Raised when a farm cannot be read or built."""


@dataclass
class Room:
    """A room with its coordinates, role and neighbour indexes."""

    name: str
    x: int
    y: int
    start: bool = False
    end: bool = False
    links: list[int] = field(default_factory=list)


@dataclass
class Farm:
    """The ant count and the rooms of a farm."""

    ants: int
    rooms: list[Room] = field(default_factory=list)

    def index_by_name(self, name: str) -> Optional[int]:
        """Index of the room called ``name``, or None."""
        return next((i for i, room in enumerate(self.rooms) if room.name == name), None)

    def find_start(self) -> Optional[int]:
        """Index of the start room, or None."""
        return next((i for i, room in enumerate(self.rooms) if room.start), None)

    def find_end(self) -> Optional[int]:
        """Index of the end room, or None."""
        return next((i for i, room in enumerate(self.rooms) if room.end), None)


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    sign, digits = match.groups()
    value = int(digits) if digits else 0
    return -value if sign == "-" else value


def _lines(text: str) -> list[str]:
    return [line for line in text.split("\n") if line]


def read_input(stream: Iterable[str]) -> str:
    """Read a farm description, rejecting empty lines and move lines."""
    lines = []
    for raw in stream:
        line = raw[:-1] if raw.endswith("\n") else raw
        if not line or line[0] in ("L", "-"):
            raise FarmError(f"invalid input line: {line!r}")
        lines.append(line)
    if not lines:
        raise FarmError("empty input")
    return "\n".join(lines) + "\n"


def check_duplicates(rooms: Sequence[Room]) -> None:
    """Reject two rooms sharing a name or a position."""
    for i, room in enumerate(rooms):
        for other in rooms[i + 1 :]:
            if room.name == other.name:
                raise FarmError(f"duplicate room name: {room.name!r}")
            if (room.x, room.y) == (other.x, other.y):
                raise FarmError(f"rooms {room.name!r} and {other.name!r} share a position")


def parse_rooms(lines: Iterable[str]) -> list[Room]:
    """Build the rooms, marking the ones announced by start and end commands."""
    rooms = []
    start = end = False
    for line in lines:
        if line == START:
            start = True
        if line == END:
            end = True
        if is_room(line):
            name, x, y = (part for part in line.split(" ") if part)
            rooms.append(Room(name, _atoi(x), _atoi(y), start, end))
            start = end = False
    check_duplicates(rooms)
    return rooms


def parse_links(lines: Iterable[str]) -> list[tuple[str, str]]:
    """Name pairs of all links; a repeated link keeps its last occurrence."""
    pairs = []
    for line in lines:
        if is_link(line):
            first, _, second = line.partition("-")
            if first == second:
                raise FarmError(f"room linked to itself: {line!r}")
            pairs.append((first, second))
    seen: set[frozenset[str]] = set()
    kept = []
    for pair in reversed(pairs):
        key = frozenset(pair)
        if key not in seen:
            seen.add(key)
            kept.append(pair)
    kept.reverse()
    return kept


def parse_farm(text: str) -> Farm:
    """Build a farm, with linked rooms, from its text description."""
    lines = _lines(text)
    ants_at = find_ants(lines)
    if ants_at < 0:
        raise FarmError("ant count missing")
    farm = Farm(_atoi(lines[ants_at]), parse_rooms(lines))
    resolved = []
    for first, second in parse_links(lines):
        n1, n2 = farm.index_by_name(first), farm.index_by_name(second)
        if n1 is None or n2 is None:
            raise FarmError(f"link to unknown room: {first}-{second}")
        resolved.append((n1, n2))
    for n1, n2 in resolved:
        farm.rooms[n2].links.append(n1)
        farm.rooms[n1].links.append(n2)
    return farm