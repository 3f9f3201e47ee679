"""Replaying a solution's moves as ants gliding between rooms."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from .farm import Farm, FarmError
from .render import Canvas, View, ant_sprite, draw_farm

STEPS_PER_TURN = 100
_NUMBER = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Ant:
    """An ant's screen position and its velocity per step."""

    x: float = 0.0
    y: float = 0.0
    dx: float = 0.0
    dy: float = 0.0


def split_input(text: str) -> tuple[str, list[str]]:
    """Split input at its first ``L`` into the farm text and the move lines."""
    at = text.find("L")
    if at < 0:
        at = len(text)
    return text[:at], [line for line in text[at:].split("\n") if line]


class Animation:
    """Moves ants one step at a time, a hundred steps per turn."""

    def __init__(
        self,
        farm: Farm,
        turns: Iterable[str],
        view: Optional[View] = None,
        canvas: Optional[Canvas] = None,
    ):
        self.farm = farm
        self.turns = list(turns)
        if view is None:
            view = View()
            view.fit(farm.rooms)
        self.view = view
        self.canvas = canvas
        self.turn = 0
        self.step = 0
        self.ants = [Ant() for _ in range(farm.ants)]
        self._sprite = ant_sprite()
        self.reset()

    def reset(self) -> None:
        """Put every ant, at rest, on the start room."""
        start = self.farm.find_start()
        if start is None:
            raise FarmError("farm has no start room")
        x0, y0 = self.view.project(self.farm.rooms[start])
        for ant in self.ants:
            ant.x, ant.y = float(x0), float(y0)
            ant.dx = ant.dy = 0.0

    def stop(self) -> None:
        """Bring every ant to rest."""
        for ant in self.ants:
            ant.dx = ant.dy = 0.0

    def exec_turn(self, line: str) -> None:
        """Aim each ant named in a move line at its destination room."""
        for token in (part for part in line.split(" ") if part):
            parts = [part for part in token.split("-") if part]
            if len(parts) < 2 or not parts[0].startswith("L"):
                raise ValueError(f"bad move: {token!r}")
            match = _NUMBER.match(parts[0][1:])
            if match is None:
                raise ValueError(f"bad ant number in move: {token!r}")
            index = int(match.group(1)) - 1
            if not 0 <= index < len(self.ants):
                raise ValueError(f"no such ant in move: {token!r}")
            ant = self.ants[index]
            room = self.farm.index_by_name(parts[1])
            if room is None:
                ant.dx = ant.dy = 0.0
                continue
            x0, y0 = self.view.project(self.farm.rooms[room])
            ant.dx = (x0 - ant.x) / STEPS_PER_TURN
            ant.dy = (y0 - ant.y) / STEPS_PER_TURN

    def advance(self) -> None:
        """Move every ant by its velocity."""
        for ant in self.ants:
            ant.x += ant.dx
            ant.y += ant.dy

    def _render(self) -> None:
        if self.canvas is None:
            return
        draw_farm(self.canvas, self.view, self.farm)
        for ant in self.ants:
            self.canvas.paste(self._sprite, int(ant.x) - 5, int(ant.y) - 7)

    def tick(self) -> bool:
        """Run one frame; False once every turn has been played out."""
        if self.step == STEPS_PER_TURN or self.turn == 0:
            if self.turn >= len(self.turns):
                return False
            self.stop()
            self.exec_turn(self.turns[self.turn])
            self.turn += 1
            self.step = 0
        elif self.step < STEPS_PER_TURN:
            self.advance()
            self._render()
            self.step += 1
        return True