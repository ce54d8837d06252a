[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pnmgrid"
version = "1.0.0"
description = "Tile filtered copies of a plain PGM/PPM image into an n x n grid"
requires-python = ">=3.10"
dependencies = []
keywords = ["pnm", "pgm", "ppm", "netpbm", "image", "filter", "grid", "collage"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pnmgrid = "pnmgrid.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pnmgrid"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
