"""Filters applied to copies of an image, and the parser for filter codes.

A filter code is a whitespace-separated list of words. Words starting with
``@`` label the copy and are skipped. The filters are:

``Oy``
    mirror the image about its vertical axis;
``Neg``
    negative;
``Sz``
    greyscale (kept in the current format);
``Kol <colours>``
    zero the listed colour channels: any of ``r``, ``g``, ``b``.

Unknown words are ignored.
"""

from __future__ import annotations

from .image import GREY, RGB, Image, ImageError

_CHANNELS = {"r": 0, "g": 1, "b": 2}


def apply_filters(image: Image, code: str) -> Image:
    """Apply every filter named in ``code`` to ``image``, in order."""
    words = iter(code.split())
    for word in words:
        if word.startswith("@"):
            continue
        if word == "Oy":
            mirror_oy(image)
        elif word == "Neg":
            negative(image)
        elif word == "Sz":
            greyscale(image)
        elif word == "Kol":
            remove_colours(image, next(words, ""))
    return image


def mirror_oy(image: Image) -> Image:
    """Reverse the order of pixels in every row, keeping RGB triples intact."""
    if image.fmt == GREY:
        step = 1
    elif image.fmt == RGB:
        step = 3
    else:
        raise ImageError(f"unsupported format {image.fmt!r}")
    row_len = image.width * step
    samples = image.pixels
    mirrored: list[int] = []
    for start in range(0, image.bitmap_size(), row_len):
        row = samples[start:start + row_len]
        pixels = [row[i:i + step] for i in range(0, row_len, step)]
        for pixel in reversed(pixels):
            mirrored.extend(pixel)
    image.pixels = mirrored
    return image


def negative(image: Image) -> Image:
    """Replace every sample ``v`` by ``depth - v``."""
    image.pixels = [image.depth - value for value in image.pixels]
    return image


def greyscale(image: Image) -> Image:
    """Turn an RGB image grey while keeping it in P3.

    Each pixel becomes the rounded mean of its three samples, repeated. A P2
    image is already grey and is left alone.
    """
    if image.fmt != RGB:
        return image
    image.optimal_format = GREY
    samples = image.pixels
    grey: list[int] = []
    for r, g, b in zip(samples[0::3], samples[1::3], samples[2::3]):
        mean = int((r + g + b) / 3 + 0.5)
        grey.extend((mean, mean, mean))
    image.pixels = grey
    return image


def remove_colours(image: Image, colours: str) -> Image:
    """Zero the channels listed in ``colours`` (letters r, g, b, any case).

    Naming more than two colours turns the image grey instead. A P2 image
    has no colour and is left unchanged.
    """
    if image.fmt == GREY:
        return image
    if not colours:
        raise ImageError("the colours to remove are empty")
    for letter in colours:
        if letter.lower() not in _CHANNELS:
            raise ImageError(f"unsupported colour {letter!r}")
    if len(colours) > 2:
        return greyscale(image)
    samples = list(image.pixels)
    for letter in colours:
        offset = _CHANNELS[letter.lower()]
        samples[offset::3] = [0] * len(samples[offset::3])
    image.pixels = samples
    return image