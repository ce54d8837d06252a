"""Tile filtered copies of a plain PGM/PPM image into an n x n grid."""

__version__ = "1.0.0"