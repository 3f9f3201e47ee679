import pytest

from lemin.animation import Animation, split_input
from lemin.farm import Farm, FarmError, Room
from lemin.render import Canvas, set_colors


def make_farm(ants=2):
    return Farm(
        ants,
        [
            Room("a", 0, 0, start=True, links=[1]),
            Room("b", 100, 0, end=True, links=[0]),
        ],
    )


def test_split_input():
    text = "2\n##start\na 0 0\n##end\nb 1 0\na-b\nL1-b\nL2-b\n"
    farm_text, turns = split_input(text)
    assert farm_text == "2\n##start\na 0 0\n##end\nb 1 0\na-b\n"
    assert turns == ["L1-b", "L2-b"]


def test_split_input_without_moves():
    assert split_input("1\na 0 0\n") == ("1\na 0 0\n", [])


def test_reset_places_ants_on_start():
    anim = Animation(make_farm(), [])
    start = anim.view.project(anim.farm.rooms[0])
    assert [(ant.x, ant.y) for ant in anim.ants] == [start, start]
    assert all(ant.dx == 0 and ant.dy == 0 for ant in anim.ants)


def test_missing_start_room():
    farm = Farm(1, [Room("a", 0, 0, end=True), Room("b", 5, 5)])
    with pytest.raises(FarmError):
        Animation(farm, [])


def test_exec_turn_and_advance_reach_room():
    anim = Animation(make_farm(), [])
    ax, ay = anim.view.project(anim.farm.rooms[0])
    bx, by = anim.view.project(anim.farm.rooms[1])
    anim.exec_turn("L1-b")
    assert anim.ants[0].dx == pytest.approx((bx - ax) / 100)
    assert anim.ants[1].dx == 0
    for _ in range(100):
        anim.advance()
    assert anim.ants[0].x == pytest.approx(bx)
    assert anim.ants[0].y == pytest.approx(by)
    assert anim.ants[1].x == ax


def test_exec_turn_unknown_room_stops_ant():
    anim = Animation(make_farm(), [])
    anim.ants[0].dx = 3.0
    anim.exec_turn("L1-zzz")
    assert (anim.ants[0].dx, anim.ants[0].dy) == (0.0, 0.0)


@pytest.mark.parametrize("line", ["X1-b", "L9-b", "Lx-b", "L1"])
def test_exec_turn_rejects_bad_moves(line):
    anim = Animation(make_farm(), [])
    with pytest.raises(ValueError):
        anim.exec_turn(line)


def test_stop_zeroes_velocities():
    anim = Animation(make_farm(), [])
    anim.exec_turn("L1-b L2-b")
    anim.stop()
    assert all((ant.dx, ant.dy) == (0.0, 0.0) for ant in anim.ants)


def test_tick_plays_all_turns():
    anim = Animation(make_farm(), ["L1-b", "L2-b"])
    bx, _ = anim.view.project(anim.farm.rooms[1])
    assert anim.tick() is True
    assert (anim.turn, anim.step) == (1, 0)
    assert anim.ants[0].dx != 0
    for _ in range(100):
        assert anim.tick() is True
    assert anim.step == 100
    assert anim.ants[0].x == pytest.approx(bx)
    assert anim.tick() is True
    assert anim.turn == 2
    assert anim.ants[0].dx == 0
    assert anim.ants[1].dx != 0
    for _ in range(100):
        anim.tick()
    assert anim.tick() is False
    assert anim.turn == 2
    assert anim.ants[1].x == pytest.approx(bx)


def test_tick_renders_ants_on_canvas():
    canvas = Canvas()
    anim = Animation(make_farm(1), ["L1-b"], canvas=canvas)
    anim.tick()
    anim.tick()
    ant = anim.ants[0]
    assert canvas[(int(ant.x) - 5 + 2, int(ant.y) - 7)] == set_colors(0, 255, 0, 0)