"""Rendering filtered copies of an image and stitching them into a grid."""

from __future__ import annotations

from collections.abc import Sequence

from .filters import apply_filters
from .image import GREY, RGB, Image

RESULT_IDENT = -1


def render_copies(original: Image, matrix: Sequence[str]) -> list[Image]:
    """Make one copy of ``original`` per filter code and apply the code to it.

    Copies are numbered from 1 in their ``ident``; ``original`` is untouched.
    """
    copies = []
    for number, code in enumerate(matrix, start=1):
        copy = original.copy()
        copy.ident = number
        apply_filters(copy, code)
        copies.append(copy)
    return copies


def stitch_copies(copies: Sequence[Image], grid_size: int) -> Image:
    """Lay out ``grid_size`` x ``grid_size`` copies row by row in one image.

    If any copy needs colour the result is P3, otherwise P2; the copies are
    converted in place to that format. All copies must share the size of the
    first one.
    """
    if grid_size < 1:
        raise ValueError(f"invalid grid size: {grid_size}")
    if len(copies) != grid_size * grid_size:
        raise ValueError(
            f"expected {grid_size * grid_size} copies, got {len(copies)}"
        )
    colour = any(copy.optimal_format == RGB for copy in copies)
    for copy in copies:
        if colour:
            copy.to_rgb()
        else:
            copy.to_grey()

    fmt = RGB if colour else GREY
    first = copies[0]
    result = Image(
        fmt=fmt,
        optimal_format=fmt,
        width=first.width * grid_size,
        height=first.height * grid_size,
        depth=first.depth,
        pixels=[],
        ident=RESULT_IDENT,
    )
    row_len = first.width * (3 if colour else 1)
    for grid_row in range(grid_size):
        row_copies = copies[grid_row * grid_size:(grid_row + 1) * grid_size]
        for y in range(first.height):
            for copy in row_copies:
                result.pixels.extend(copy.pixels[y * row_len:(y + 1) * row_len])
    return result