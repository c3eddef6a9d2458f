[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pigchase"
version = "0.1.0"
description = "A small tile-based maze game: gather every pig, dodge the cat, reach the portal."
requires-python = ">=3.10"
keywords = ["game", "puzzle", "maze", "tile", "xpm", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pigchase = "pigchase.app:main"

[tool.hatch.build.targets.wheel]
packages = ["pigchase"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
