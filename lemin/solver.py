"""Searching the farm for a good set of paths."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .farm import Farm, FarmError
from .routes import WaySet, find_sets, format_solution

_STALL_LIMIT = 50


class Search(Enum):
    """Outcome of one search for an overlapping path."""

    EXHAUSTED = 0
    FOUND = 1
    CONFLICT = -1


class Solver:
    """Path search state over one farm.

    ``pipes[a][b]`` is the one-way mark on the pipe between rooms ``a`` and
    ``b``: 0 when free, -1 when used; a pipe marked both ways is blocked.
    """

    def __init__(self, farm: Farm):
        start, end = farm.find_start(), farm.find_end()
        if start is None or end is None:
            raise FarmError("farm needs a start and an end room")
        size = len(farm.rooms)
        self.farm = farm
        self.rooms = farm.rooms
        self.ants = farm.ants
        self.start = start
        self.end = end
        self.weight = [-1] * size
        self.sh = [0] * size
        self.pipes = [[0] * size for _ in range(size)]
        self.step = 1
        self.best: Optional[WaySet] = None
        self._queue: list[tuple[int, int]] = []

    def is_blocked(self, cur: int, nxt: int) -> bool:
        """True when the pipe is marked in both directions."""
        return self.pipes[cur][nxt] == -1 and self.pipes[nxt][cur] == -1

    def block_pipe(self, cur: int, nxt: int, blocked: bool) -> None:
        """Mark the pipe both ways as blocked, or free it both ways."""
        mark = -1 if blocked else 0
        self.pipes[cur][nxt] = mark
        self.pipes[nxt][cur] = mark

    def _push(self, room: int) -> None:
        weight = self.weight[room]
        at = next(
            (i for i, (queued, _) in enumerate(self._queue) if queued > weight),
            len(self._queue),
        )
        self._queue.insert(at, (weight, room))

    def _pop(self) -> Optional[int]:
        if not self._queue:
            return None
        _, room = self._queue.pop(0)
        return None if room == self.end else room

    def dijkstra(self) -> None:
        """Weigh rooms by their distance from the start over open pipes."""
        cur: Optional[int] = self.start
        self.weight[self.start] = 0
        for _ in range(len(self.rooms)):
            if cur is not None:
                for link in self.rooms[cur].links:
                    if self.is_blocked(cur, link):
                        continue
                    if self.weight[link] == -1 or self.weight[cur] + 1 < self.weight[link]:
                        self.weight[link] = self.weight[cur] + 1
                        self._push(link)
            cur = self._pop()

    def clear_graph(self) -> None:
        """Free every pipe that is not blocked, forget marks and reweigh."""
        for cur, room in enumerate(self.rooms):
            for link in room.links:
                if not self.is_blocked(cur, link):
                    self.block_pipe(cur, link, False)
            if room.links:
                self.sh[cur] = 0
                self.weight[cur] = -1
        self.dijkstra()

    def find_min_weight(self, cur: int) -> Optional[int]:
        """The lightest weighed neighbour reachable into ``cur``, or None."""
        best: Optional[int] = None
        for link in self.rooms[cur].links:
            if (
                (best is None or self.weight[best] > self.weight[link])
                and self.weight[link] != -1
                and self.pipes[link][cur] == 0
            ):
                best = link
        return best

    def _downhill(self, cur: int) -> Optional[int]:
        return next(
            (
                link
                for link in self.rooms[cur].links
                if self.weight[link] >= 0
                and self.weight[cur] > self.weight[link]
                and self.pipes[cur][link] == 0
            ),
            None,
        )

    def find_way(self) -> bool:
        """Walk back from the end to the start, marking a new way."""
        cur = self.find_min_weight(self.end)
        if cur is None:
            return False
        self.pipes[cur][self.end] = -1
        while cur != self.start:
            nxt = self._downhill(cur)
            if nxt is None:
                break
            self.sh[cur] = self.step
            self.pipes[nxt][cur] = -1
            cur = nxt
        return True

    def break_way(self, cur: int) -> None:
        """Block the marked way running from ``cur`` towards the end."""
        blocked = True
        while cur != self.end:
            nxt = next(
                (
                    link
                    for link in self.rooms[cur].links
                    if (self.sh[cur] == self.sh[link] and self.weight[cur] < self.weight[link])
                    or link == self.end
                ),
                None,
            )
            if nxt is None:
                return
            self.block_pipe(cur, nxt, blocked)
            if len(self.rooms[nxt].links) > 2:
                blocked = False
            cur = nxt

    def find_overlapping_ways(self) -> Search:
        """Like find_way, but break an older way met on the walk back."""
        cur = self.find_min_weight(self.end)
        if cur is None:
            return Search.EXHAUSTED
        self.pipes[cur][self.end] = -1
        while cur != self.start:
            nxt = self._downhill(cur)
            if nxt is None:
                break
            if self.sh[nxt] and self.sh[nxt] != self.step:
                self.break_way(nxt)
                return Search.CONFLICT
            self.sh[cur] = self.step
            self.pipes[nxt][cur] = -1
            cur = nxt
        return Search.FOUND

    def _collect(self) -> None:
        wayset = find_sets(self)
        self.step += 1
        if wayset is not None and (self.best is None or self.best.turns > wayset.turns):
            self.best = wayset

    def _refine(self) -> None:
        previous = -1
        stall = 0
        while stall < _STALL_LIMIT:
            outcome = self.find_overlapping_ways()
            if outcome is Search.EXHAUSTED:
                break
            if outcome is Search.FOUND:
                self._collect()
                if self.best and (previous < 0 or previous < self.best.turns):
                    stall = 0
                    previous = self.best.turns
                elif self.best and previous == self.best.turns:
                    stall += 1
            else:
                self.clear_graph()

    def solve(self) -> Optional[WaySet]:
        """Search for the best set of ways; raise if the end is unreachable."""
        self.clear_graph()
        if self.weight[self.end] < 0:
            raise FarmError("no path from start to end")
        while self.find_way():
            self._collect()
        self.clear_graph()
        self._refine()
        return self.best


def solve(farm: Farm) -> str:
    """The move lines of the best solution found for ``farm``."""
    best = Solver(farm).solve()
    return format_solution(best, farm) if best else ""