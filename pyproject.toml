[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lemin"
version = "0.1.0"
description = "Route a colony of ants through an ant farm in as few turns as possible"
requires-python = ">=3.10"
dependencies = []
keywords = ["lem-in", "ants", "graph", "pathfinding", "puzzle"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lem-in = "lemin.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["lemin"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
