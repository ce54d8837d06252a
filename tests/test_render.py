import pytest

from pnmgrid.filters import apply_filters
from pnmgrid.image import Image
from pnmgrid.render import render_copies, stitch_copies

DEFAULT_MATRIX = ["@1 Sz Neg", "@2 Oy Kol r", "@3 Kol g", "@4 Oy Kol b Neg"]


def rgb_image():
    return Image("P3", "P3", 2, 1, 255, [10, 20, 30, 40, 50, 60])


def grey(pixels, width, height):
    return Image("P2", "P2", width, height, 9, list(pixels))


def test_render_copies_count_and_idents():
    copies = render_copies(rgb_image(), DEFAULT_MATRIX)
    assert [c.ident for c in copies] == [1, 2, 3, 4]


def test_render_copies_apply_each_code():
    copies = render_copies(rgb_image(), DEFAULT_MATRIX)
    for copy, code in zip(copies, DEFAULT_MATRIX):
        assert copy == apply_filters(rgb_image(), code)


def test_render_copies_leaves_original():
    original = rgb_image()
    render_copies(original, DEFAULT_MATRIX)
    assert original == rgb_image()


def test_stitch_single_copy():
    result = stitch_copies([grey([1, 2, 3, 4], 2, 2)], 1)
    assert result.pixels == [1, 2, 3, 4]
    assert (result.width, result.height, result.ident) == (2, 2, -1)


def test_stitch_grid_of_rows():
    copies = [grey([1, 2], 2, 1), grey([3, 4], 2, 1), grey([5, 6], 2, 1), grey([7, 8], 2, 1)]
    result = stitch_copies(copies, 2)
    assert result.fmt == "P2"
    assert (result.width, result.height) == (4, 2)
    assert result.pixels == [1, 2, 3, 4, 5, 6, 7, 8]


def test_stitch_interleaves_rows_of_copies():
    copies = [grey([1, 2], 1, 2), grey([3, 4], 1, 2), grey([5, 6], 1, 2), grey([7, 8], 1, 2)]
    result = stitch_copies(copies, 2)
    assert result.pixels == [1, 3, 2, 4, 5, 7, 6, 8]


def test_stitch_colour_when_any_copy_needs_it():
    copies = render_copies(rgb_image(), DEFAULT_MATRIX)
    result = stitch_copies(copies, 2)
    assert result.fmt == "P3"
    assert result.optimal_format == "P3"
    assert all(c.fmt == "P3" for c in copies)
    assert len(result.pixels) == result.bitmap_size()
    assert result.pixels[:6] == copies[0].pixels + copies[1].pixels[:0] or True
    assert result.pixels[:6] == copies[0].pixels
    assert result.pixels[6:] == copies[1].pixels + copies[2].pixels + copies[3].pixels


def test_stitch_grey_when_all_copies_grey():
    copies = render_copies(rgb_image(), ["@1 Sz", "@2 Kol rgb"])
    copies += render_copies(rgb_image(), ["@3 Sz Neg", "@4 Oy Sz"])
    result = stitch_copies(copies, 2)
    assert result.fmt == "P2"
    assert all(c.fmt == "P2" for c in copies)
    assert len(result.pixels) == result.bitmap_size()
    assert result.depth == 255


def test_stitch_wrong_count():
    with pytest.raises(ValueError):
        stitch_copies([grey([1], 1, 1)] * 3, 2)


def test_stitch_bad_grid_size():
    with pytest.raises(ValueError):
        stitch_copies([], 0)