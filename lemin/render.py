"""Drawing a farm, its pipes and its ants onto a pixel canvas."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .farm import Farm, Room

WIDTH = 1000
HEIGHT = 1000
RADIUS = 20

_ANT_WIDTH = 11
_ANT_HEIGHT = 16
_ANT_PATTERN = (
    "0010000010000100000100000100010000"
    "000111000010001110001010011100100010010010"
    "00001010100011110101111000101010000010"
    "0100100010011100101000101000100001010"
    "0000000101000000001110000"
)


def set_colors(o, r, g, b) -> int:
    """Pack four byte components into one 0xOORRGGBB pixel value."""
    return (
        ((int(o) & 0xFF) << 24)
        | ((int(r) & 0xFF) << 16)
        | ((int(g) & 0xFF) << 8)
        | (int(b) & 0xFF)
    )


@dataclass
class Canvas:
    """A row-major grid of packed pixel values."""

    width: int = WIDTH
    height: int = HEIGHT
    pixels: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("canvas needs a positive size")
        self.pixels = [0] * (self.width * self.height)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def __getitem__(self, pos: tuple[int, int]) -> int:
        x, y = pos
        if not self._inside(x, y):
            raise IndexError(f"pixel {pos} outside the canvas")
        return self.pixels[x + y * self.width]

    def plot(self, x: int, y: int, color: int) -> None:
        """Set a pixel; points outside the canvas are ignored."""
        if self._inside(x, y):
            self.pixels[x + y * self.width] = color

    def _blend(self, x: int, y: int, opacity: float) -> None:
        color = set_colors(int(255 * opacity), 255, 255, 255)
        if self._inside(x, y) and self.pixels[x + y * self.width] == 0:
            self.pixels[x + y * self.width] = color

    def clear(self) -> None:
        """Reset every pixel to zero."""
        self.pixels = [0] * (self.width * self.height)

    def paste(self, sprite: "Canvas", x: int, y: int) -> None:
        """Copy a whole sprite with its top-left corner at (x, y), clipped."""
        for i, color in enumerate(sprite.pixels):
            self.plot(x + i % sprite.width, y + i // sprite.width, color)


@dataclass
class View:
    """Maps farm coordinates onto screen pixels."""

    screen_width: int = WIDTH
    screen_height: int = HEIGHT
    dx: int = 0
    dy: int = 0
    zoom: int = 1
    width: int = 0
    height: int = 0

    def fit(self, rooms: Iterable[Room]) -> None:
        """Scale so that the rooms' bounding box fills most of the screen."""
        rooms = list(rooms)
        if not rooms:
            raise ValueError("no rooms to fit")
        xs = [room.x for room in rooms]
        ys = [room.y for room in rooms]
        self.width = abs(max(xs) - min(xs))
        self.height = abs(max(ys) - min(ys))
        span = max(self.width, self.height) or 1
        zoom = self.screen_width // span
        self.zoom = zoom - zoom // 4

    def project(self, room: Room) -> tuple[int, int]:
        """Screen position of a room's centre."""
        return (
            (room.x - self.width // 2) * self.zoom + self.screen_width // 2 + self.dx,
            (room.y - self.height // 2) * self.zoom + self.screen_height // 2 + self.dy,
        )


def wu_low(canvas: Canvas, x0: int, y0: int, x1: int, y1: int) -> None:
    """Antialiased line for slopes under one, drawn left to right."""
    grad = (y1 - y0) / (x1 - x0) if x1 - x0 else 0.0
    canvas._blend(x0, y0, 0)
    canvas._blend(x1, y1, 0)
    y = y0 + grad
    for x in range(x0 + 1, x1):
        frac = y - math.floor(y)
        canvas._blend(x, int(y), frac)
        canvas._blend(x, int(y) + 1, 1 - frac)
        y += grad


def wu_high(canvas: Canvas, x0: int, y0: int, x1: int, y1: int) -> None:
    """Antialiased line for steep slopes, drawn top to bottom."""
    grad = (x1 - x0) / (y1 - y0) if x1 - x0 else 0.0
    canvas._blend(x0, y0, 0)
    canvas._blend(x1, y1, 0)
    x = x0 + grad
    for y in range(y0 + 1, y1):
        frac = x - math.floor(x)
        canvas._blend(int(x), y, frac)
        canvas._blend(int(x + 1), y, 1 - frac)
        x += grad


def draw_line(canvas: Canvas, view: View, room0: Room, room1: Room) -> None:
    """Draw the pipe between two rooms unless it lies wholly off screen."""
    x0, y0 = view.project(room0)
    x1, y1 = view.project(room1)
    if (x0 >= canvas.width and x1 >= canvas.width) or (
        y0 >= canvas.height and y1 >= canvas.height
    ):
        return
    if (x0 < 0 and x1 < 0) or (y0 < 0 and y1 < 0):
        return
    if abs(y1 - y0) < abs(x1 - x0):
        if x0 > x1:
            wu_low(canvas, x1, y1, x0, y0)
        else:
            wu_low(canvas, x0, y0, x1, y1)
    elif y0 > y1:
        wu_high(canvas, x1, y1, x0, y0)
    else:
        wu_high(canvas, x0, y0, x1, y1)


def _room_color(room: Room) -> int:
    if room.start:
        return set_colors(0, 0, 255, 0)
    if room.end:
        return set_colors(0, 255, 255, 0)
    return set_colors(0, 255, 0, 0)


def draw_room(canvas: Canvas, view: View, room: Room, rooms: Sequence[Room]) -> None:
    """Draw a room as a circle, then the pipes leaving it."""
    cx, cy = view.project(room)
    color = _room_color(room)
    x, y, err = RADIUS, 0, 0
    while x >= y:
        for px, py in (
            (cx - y, cy + x), (cx + y, cy + x), (cx - x, cy + y), (cx + x, cy + y),
            (cx - y, cy - x), (cx + y, cy - x), (cx - x, cy - y), (cx + x, cy - y),
        ):
            canvas.plot(px, py, color)
        if err <= 0:
            y += 1
            err += 2 * y + 1
        if err > 0:
            x -= 1
            err -= 2 * x + 1
    for link in room.links:
        draw_line(canvas, view, room, rooms[link])


def draw_farm(canvas: Canvas, view: View, farm: Farm) -> list[tuple[int, int, str]]:
    """Redraw the whole farm; return where each room's name goes."""
    canvas.clear()
    labels = []
    for room in farm.rooms:
        draw_room(canvas, view, room, farm.rooms)
        cx, cy = view.project(room)
        labels.append((cx + RADIUS, cy, room.name))
    return labels


def ant_sprite() -> Canvas:
    """The small red ant drawn for every moving ant."""
    sprite = Canvas(_ANT_WIDTH, _ANT_HEIGHT)
    color = set_colors(0, 255, 0, 0)
    for i, cell in enumerate(_ANT_PATTERN):
        if cell == "1":
            sprite.plot(i % _ANT_WIDTH, i // _ANT_WIDTH, color)
    return sprite