[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "brickgame"
version = "1.0.0"
description = "Snake and Tetris brick games with a terminal and a desktop interface"
requires-python = ">=3.10"
dependencies = []
keywords = ["snake", "tetris", "brick game", "arcade", "curses", "tkinter"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console :: Curses",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
brickgame = "brickgame.desktop:main"
brickgame-cli = "brickgame.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["brickgame"]

[tool.pytest.ini_options]
addopts = "-ra"
