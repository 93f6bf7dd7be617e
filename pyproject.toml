[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oursweeper"
version = "0.1.0"
description = "An endless, chunked minesweeper board: game rules, JSON save files and curses views."
requires-python = ">=3.10"
dependencies = []
keywords = ["minesweeper", "game", "puzzle", "curses", "terminal", "infinite board"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
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

[tool.hatch.build.targets.wheel]
packages = ["oursweeper"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
