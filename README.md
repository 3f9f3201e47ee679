# lemin

`lemin` solves the lem-in ant farm puzzle. A farm is a set of rooms joined by tunnels. One room is the start and one is the end. Every ant begins in the start room, and the goal is to bring all of them to the end in as few turns as possible. A room other than the start or the end holds at most one ant at a time.

The solver looks for sets of routes that do not share rooms. It shares the ants out among the routes of each set and keeps the set that needs the fewest turns. It then lists every turn's moves.

## Installing

```
pip install .
```

With the test dependencies:

```
pip install .[test]
```

## Input format

The farm is read from standard input, one item per line, in this order:

1. The number of ants, a positive integer.
2. The rooms, each written as `name x y`. The line `##start` marks the room after it as the start; `##end` marks the room after it as the end.
3. The tunnels, each written as `name1-name2`.

Any other line beginning with `#` is a comment.

```
3
##start
start 0 0
a 1 0
b 1 1
##end
end 2 0
start-a
start-b
a-end
b-end
```

`Error` is printed, and the exit status is 1, when:

- a line is empty, or begins with `L` or `-`;
- the ant count, the rooms and the tunnels are missing or out of order;
- a line in the rooms or tunnels section is neither a comment nor of the right form;
- there is not exactly one `##start` and one `##end`, each followed by a room;
- two rooms share a name or a pair of coordinates;
- a tunnel joins a room to itself or names a room that does not exist;
- there is no route from the start to the end.

A tunnel given more than once is counted once.

## Running

```
lem-in < farm.txt
```

The farm is echoed as read, followed by a blank line and one line per turn. Each move is written `L<ant>-<room>`. For the farm above:

```
L1-a L2-b
L1-end L2-end L3-a
L3-end
```

## Using it from Python

- `lemin.cli.run(text)` returns the whole output for a farm given as text; it raises `ValidationError` or `FarmError` for bad input.
- `lemin.validation.validate(text)` checks the layout of the input and returns the `Sections` where the ant count, rooms and links begin.
- `lemin.farm.read_input(stream)` reads a description from lines of text; `lemin.farm.parse_farm(text)` builds a `Farm` of `Room` objects.
- `lemin.solver.Solver(farm).solve()` returns the best `WaySet` found (or `None`); `lemin.solver.solve(farm)` returns the move lines for it as one string.
- `lemin.routes.format_solution(wayset, farm)` turns a `WaySet` into the move lines.

`lemin.render` draws a farm onto a pixel `Canvas`: rooms as circles, tunnels as antialiased lines, and an ant sprite from `ant_sprite()`, placed through a `View` that fits the rooms to the canvas. `lemin.animation` replays move lines: `split_input(text)` separates a farm from its moves, and `Animation.tick()` advances the ants a hundredth of a turn per call, redrawing onto a `Canvas` if one is given.

## What it does not do

There is no window or viewer command. The drawing and animation modules only fill an in-memory `Canvas`; showing the frames, and drawing room names (returned as positions by `draw_farm`), is left to the caller.

## Running the tests

```
pytest
```