"""Checks that an ant-farm description is well formed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

START = "##start"
END = "##end"
_DIGITS = frozenset("0123456789")


class ValidationError(ValueError):
    """Raised when a farm description is malformed."""


@dataclass(frozen=True)
class Sections:
    """Line indexes where the ant count, the rooms and the links begin."""

    ants: int
    rooms: int
    links: int


def _fields(line: str, sep: str) -> list[str]:
    return [part for part in line.split(sep) if part]


def _lines(text: str) -> list[str]:
    return _fields(text, "\n")


def is_number(line: Optional[str]) -> bool:
    """True for an optional sign followed only by ASCII digits."""
    if line is None:
        return False
    body = line[1:] if line[:1] in ("-", "+") else line
    return all(ch in _DIGITS for ch in body)


def is_link(line: Optional[str]) -> bool:
    """True for a line made of exactly two dash-separated names."""
    if not line or line.startswith("#"):
        return False
    return len(_fields(line, "-")) == 2


def is_room(line: Optional[str]) -> bool:
    """True for a line holding a name and two integer coordinates."""
    if not line or line.startswith("#"):
        return False
    fields = _fields(line, " ")
    return len(fields) == 3 and is_number(fields[1]) and is_number(fields[2])


def is_ant(line: Optional[str]) -> bool:
    """True for a line holding a positive ant count."""
    if not line or not is_number(line):
        return False
    body = line.lstrip("+-")
    value = int(body) if body else 0
    if line.startswith("-"):
        value = -value
    return value > 0


def _first_index(lines: Sequence[str], predicate) -> int:
    return next((i for i, line in enumerate(lines) if predicate(line)), -1)


def find_ants(lines: Sequence[str]) -> int:
    """Index of the first ant-count line, or -1."""
    return _first_index(lines, is_ant)


def find_rooms(lines: Sequence[str]) -> int:
    """Index of the first room line, or -1."""
    return _first_index(lines, is_room)


def find_links(lines: Sequence[str]) -> int:
    """Index of the first link line that is not also a room line, or -1."""
    return _first_index(lines, lambda line: not is_room(line) and is_link(line))


def check_order(lines: Sequence[str]) -> Sections:
    """Locate the three sections and check they come in order."""
    sections = Sections(find_ants(lines), find_rooms(lines), find_links(lines))
    if (
        sections.ants < 0
        or sections.ants > sections.rooms
        or sections.ants > sections.links
    ):
        raise ValidationError("ant count missing or out of place")
    if sections.rooms < 0 or sections.rooms > sections.links:
        raise ValidationError("rooms missing or out of place")
    return sections


def check_header(lines: Sequence[str], sections: Sections) -> None:
    """Everything before the rooms, except the ant count, must be a comment."""
    for i, line in enumerate(lines[: sections.rooms]):
        if i != sections.ants and not line.startswith("#"):
            raise ValidationError(f"unexpected line before rooms: {line!r}")


def check_rooms(lines: Sequence[str], sections: Sections) -> None:
    """Every non-comment line of the room section must be a room."""
    for line in lines[sections.rooms + 1 : sections.links]:
        if not line.startswith("#") and not is_room(line):
            raise ValidationError(f"bad room line: {line!r}")


def check_links(lines: Sequence[str], sections: Sections) -> None:
    """Every non-comment line after the first link must be a link."""
    for line in lines[sections.links + 1 :]:
        if not line.startswith("#") and not is_link(line):
            raise ValidationError(f"bad link line: {line!r}")


def check_start_end(lines: Sequence[str]) -> None:
    """Exactly one start and one end command, each followed by a room."""
    seen = {START: 0, END: 0}
    following = list(lines[1:]) + [None]
    for line, nxt in zip(lines, following):
        if line in seen:
            if not is_room(nxt) or seen[line]:
                raise ValidationError(f"misplaced {line} command")
            seen[line] += 1
    if seen[START] + seen[END] != 2:
        raise ValidationError("start or end room missing")


def validate(text: Optional[str]) -> Sections:
    """Validate a whole farm description; return where its sections start."""
    if text is None:
        raise ValidationError("no input")
    lines = _lines(text)
    sections = check_order(lines)
    check_header(lines, sections)
    check_rooms(lines, sections)
    check_links(lines, sections)
    check_start_end(lines)
    return sections