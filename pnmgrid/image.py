"""Plain-text PGM (P2) and PPM (P3) images held as flat lists of samples."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

GREY = "P2"
RGB = "P3"
SUPPORTED_FORMATS = (GREY, RGB)
KNOWN_EXTENSIONS = (".pgm", ".ppm")
HEADER_FIELDS = 4
COMMENT_LINE = "# Generated by pnmgrid"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class ImageError(ValueError):
    """Raised when an image cannot be read, written or interpreted."""


def _atoi(token: str) -> int:
    """Parse the leading integer of a token; 0 when there is none."""
    match = _LEADING_INT.match(token)
    return int(match.group(1)) if match else 0


@dataclass
class Image:
    """A PNM image.

    ``fmt`` says how ``pixels`` is laid out: one sample per pixel for P2,
    three (red, green, blue) for P3. ``optimal_format`` is the smallest
    format able to hold the picture: an RGB image whose pixels are all grey
    has ``fmt`` P3 but ``optimal_format`` P2. ``depth`` is the maximum
    sample value, not a bit count.
    """

    fmt: str
    optimal_format: str
    width: int
    height: int
    depth: int
    pixels: list[int] | None = None
    path: str = ""
    ident: int = field(default=-2, compare=False)

    def __post_init__(self) -> None:
        if self.pixels is None:
            self.pixels = [0] * max(self.bitmap_size(), 0)

    def bitmap_size(self) -> int:
        """Number of samples the bitmap holds for the current format."""
        return self.width * self.height * (3 if self.fmt == RGB else 1)

    def copy(self) -> Image:
        """Return an independent copy with no file path attached."""
        return Image(
            fmt=self.fmt,
            optimal_format=self.optimal_format,
            width=self.width,
            height=self.height,
            depth=self.depth,
            pixels=list(self.pixels),
            path="",
            ident=self.ident,
        )

    def to_grey(self) -> None:
        """Convert to P2, replacing each RGB pixel by its rounded mean."""
        if self.fmt == GREY:
            return
        self.fmt = GREY
        self.optimal_format = GREY
        samples = self.pixels
        self.pixels = [
            int((r + g + b) / 3 + 0.5)
            for r, g, b in zip(samples[0::3], samples[1::3], samples[2::3])
        ]

    def to_rgb(self) -> None:
        """Convert to P3 by repeating each grey sample three times."""
        if self.fmt == RGB:
            return
        self.fmt = RGB
        self.optimal_format = GREY
        self.pixels = [value for value in self.pixels for _ in range(3)]

    def format_text(self, crlf: bool = True) -> str:
        """Render the image as plain PNM text, one sample per line."""
        eol = "\r\n" if crlf else "\n"
        lines = [
            self.fmt,
            COMMENT_LINE,
            f"{self.width} {self.height}",
            str(self.depth),
            *(str(value) for value in self.pixels),
        ]
        return eol.join(lines) + eol

    def save(self, path: str | Path | None = None, crlf: bool = True) -> str:
        """Write the image, fixing the extension to match the format.

        Returns the path actually written, which is also stored in ``path``.
        """
        target = with_extension(str(self.path if path is None else path), self.fmt)
        self.path = target
        try:
            with open(target, "wb") as stream:
                stream.write(self.format_text(crlf).encode("utf-8"))
        except OSError as exc:
            raise ImageError(f"cannot write image file {target!r}") from exc
        return target


def with_extension(path: str, fmt: str) -> str:
    """Give ``path`` the extension belonging to ``fmt``.

    Only ``.pgm`` and ``.ppm`` are recognised as extensions and replaced;
    anything else after a dot is taken to be part of the name.
    """
    path = str(path)
    name = path[:-4] if len(path) >= 4 and path[-4:] in KNOWN_EXTENSIONS else path
    if fmt == GREY:
        return name + ".pgm"
    if fmt == RGB:
        return name + ".ppm"
    raise ImageError(f"unsupported format for file {path!r}: {fmt!r}")


def _tokens(text: str):
    for line in text.split("\n"):
        if line.startswith("#"):
            continue
        yield from line.split()


def parse_image(text: str, source: str = "") -> Image:
    """Parse plain P2/P3 text; ``source`` names the input in errors.

    The resulting image's path is ``source`` prefixed with ``K`` so that
    saving it does not overwrite the original.
    """
    path = "K" + source
    header: list[int] = []
    fmt = ""
    pixels: list[int] = []
    count = 0
    expected: int | None = None

    for token in _tokens(text):
        count += 1
        if count == 1:
            if token not in SUPPORTED_FORMATS:
                raise ImageError(f"file {path!r} has unsupported format {token!r}")
            fmt = token
        elif count <= HEADER_FIELDS:
            header.append(_atoi(token))
            if count == HEADER_FIELDS:
                width, height, _ = header
                expected = width * height * (3 if fmt == RGB else 1)
        else:
            value = _atoi(token)
            depth = header[2]
            if value < 0 or value > depth:
                raise ImageError(
                    f"token {count} holds a disallowed sample value: {value}"
                )
            if expected is not None and len(pixels) >= expected:
                raise ImageError(
                    f"read more than {HEADER_FIELDS + expected} values from {path!r}"
                )
            pixels.append(value)

    if expected is None or count != HEADER_FIELDS + expected:
        wanted = "a full header" if expected is None else HEADER_FIELDS + expected
        raise ImageError(f"read {count} values, expected {wanted}")

    width, height, depth = header
    return Image(
        fmt=fmt,
        optimal_format=fmt,
        width=width,
        height=height,
        depth=depth,
        pixels=pixels,
        path=path,
    )


def read_image(path: str | Path) -> Image:
    """Read a plain P2/P3 file."""
    source = str(path)
    try:
        with open(source, encoding="utf-8", errors="replace", newline="") as stream:
            text = stream.read()
    except OSError as exc:
        raise ImageError(f"cannot read image file {source!r}") from exc
    return parse_image(text, source)