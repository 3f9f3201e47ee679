import pytest

from lemin.farm import Farm, Room
from lemin.render import (
    Canvas,
    View,
    ant_sprite,
    draw_farm,
    draw_line,
    draw_room,
    set_colors,
    wu_high,
    wu_low,
)

WHITE = set_colors(0, 255, 255, 255)
RED = set_colors(0, 255, 0, 0)


def small_view(size=100):
    return View(screen_width=size, screen_height=size, zoom=1)


@pytest.mark.parametrize("o,r,g,b", [(0, 255, 0, 0), (1, 2, 3, 4), (255, 0, 128, 7)])
def test_set_colors_components(o, r, g, b):
    color = set_colors(o, r, g, b)
    assert (color >> 24) & 0xFF == o
    assert (color >> 16) & 0xFF == r
    assert (color >> 8) & 0xFF == g
    assert color & 0xFF == b


def test_set_colors_masks_to_bytes():
    assert set_colors(256, 0, 0, 0) == set_colors(0, 0, 0, 0)


def test_canvas_rejects_empty_size():
    with pytest.raises(ValueError):
        Canvas(0, 10)


def test_canvas_plot_clear_and_bounds():
    canvas = Canvas(10, 10)
    canvas.plot(3, 4, RED)
    canvas.plot(-1, 0, RED)
    canvas.plot(10, 0, RED)
    assert canvas[(3, 4)] == RED
    assert sum(1 for p in canvas.pixels if p) == 1
    canvas.clear()
    assert not any(canvas.pixels)
    with pytest.raises(IndexError):
        canvas[(10, 0)]


def test_paste_copies_sprite():
    sprite = ant_sprite()
    canvas = Canvas(30, 30)
    canvas.paste(sprite, 3, 4)
    for sy in range(sprite.height):
        for sx in range(sprite.width):
            assert canvas[(3 + sx, 4 + sy)] == sprite[(sx, sy)]


def test_paste_clips_at_edge():
    canvas = Canvas(30, 30)
    canvas.paste(ant_sprite(), 25, 25)
    assert canvas[(27, 25)] == RED


def test_ant_sprite_shape_and_colors():
    sprite = ant_sprite()
    assert (sprite.width, sprite.height) == (11, 16)
    assert sprite[(2, 0)] == RED
    assert sprite[(0, 0)] == 0
    assert set(sprite.pixels) == {0, RED}


def test_wu_low_horizontal():
    canvas = Canvas(50, 50)
    wu_low(canvas, 5, 10, 20, 10)
    assert all(canvas[(x, 10)] == WHITE for x in range(5, 21))
    assert all(canvas[(x, 11)] == set_colors(255, 255, 255, 255) for x in range(6, 20))


def test_wu_high_vertical():
    canvas = Canvas(50, 50)
    wu_high(canvas, 10, 5, 10, 20)
    assert all(canvas[(10, y)] == WHITE for y in range(5, 21))


def test_wu_does_not_overwrite():
    canvas = Canvas(50, 50)
    canvas.plot(12, 10, RED)
    wu_low(canvas, 5, 10, 20, 10)
    assert canvas[(12, 10)] == RED


def test_wu_low_covers_every_column():
    canvas = Canvas(20, 20)
    wu_low(canvas, 0, 0, 10, 5)
    for x in range(11):
        assert any(canvas[(x, y)] for y in range(20))


def test_view_fit_keeps_rooms_on_screen():
    rooms = [Room("a", 0, 0), Room("b", 100, 50), Room("c", 40, 20)]
    view = View()
    view.fit(rooms)
    assert view.zoom > 0
    for room in rooms:
        x, y = view.project(room)
        assert 0 <= x < view.screen_width
        assert 0 <= y < view.screen_height
    assert view.project(Room("m", 50, 25)) == (500, 500)


def test_view_fit_requires_rooms():
    with pytest.raises(ValueError):
        View().fit([])


def test_draw_line_between_rooms():
    canvas = Canvas(100, 100)
    draw_line(canvas, small_view(), Room("a", -40, 0), Room("b", 40, 0))
    assert canvas[(50, 50)] == WHITE


def test_draw_line_off_screen_is_skipped():
    canvas = Canvas(100, 100)
    draw_line(canvas, small_view(), Room("a", 100, 0), Room("b", 200, 10))
    assert list(canvas.pixels) == [0] * (100 * 100)
    assert canvas[(99, 50)] == 0


@pytest.mark.parametrize(
    "room,color",
    [
        (Room("s", 0, 0, start=True), set_colors(0, 0, 255, 0)),
        (Room("e", 0, 0, end=True), set_colors(0, 255, 255, 0)),
        (Room("r", 0, 0), set_colors(0, 255, 0, 0)),
    ],
)
def test_draw_room_circle(room, color):
    canvas = Canvas(100, 100)
    draw_room(canvas, small_view(), room, [room])
    assert canvas[(70, 50)] == color
    assert canvas[(50, 30)] == color
    assert canvas[(50, 50)] == 0


def test_draw_farm_labels_and_pipes():
    farm = Farm(1, [Room("a", -40, 0, start=True, links=[1]), Room("b", 40, 0, end=True, links=[0])])
    canvas = Canvas(100, 100)
    view = small_view()
    canvas.plot(0, 0, RED)
    labels = draw_farm(canvas, view, farm)
    assert [name for _, _, name in labels] == ["a", "b"]
    assert labels[0][:2] == (view.project(farm.rooms[0])[0] + 20, view.project(farm.rooms[0])[1])
    assert canvas[(50, 50)] == WHITE
    assert canvas[(0, 0)] == 0