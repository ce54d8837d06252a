"""Run settings: the grid size, the filter matrix and where images live.

Settings come either from an initialisation file or from an interactive
dialogue. An initialisation file holds whitespace-separated words: the path
of the original image, the path of the result, the grid size ``n`` and then
``n * n`` filter codes. Each code starts with its copy number prefixed by
``@``, for example::

    in.ppm out 2
    @1 Sz Neg @2 Oy Kol r @3 Kol g @4 Oy Kol b Neg
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .image import Image, read_image

QUIT = "quit"
LARGE_GRID = 4

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class ConfigError(ValueError):
    """Raised when settings are missing or malformed."""


def default_filter_matrix() -> list[str]:
    """The filter codes used for the default 2 x 2 grid."""
    return ["@1 Sz Neg", "@2 Oy Kol r", "@3 Kol g", "@4 Oy Kol b Neg"]


@dataclass
class Settings:
    """Everything needed to render and stitch the copies.

    ``original`` may hold the already loaded original image.
    """

    original_path: str
    result_path: str
    grid_size: int = 2
    matrix: list[str] = field(default_factory=default_filter_matrix)
    crlf: bool = True
    original: Image | None = field(default=None, compare=False, repr=False)


def _leading_int(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def parse_filter_matrix(words: Iterable[str], grid_size: int) -> list[str]:
    """Group filter words into one code per copy.

    Copy labels must run ``@1``, ``@2`` ... up to ``grid_size ** 2`` in order.
    """
    total = grid_size * grid_size
    matrix: list[str] = []
    for word in words:
        if word.startswith("@"):
            number = _leading_int(word[1:]) or 0
            if number == len(matrix) + 1:
                if number > total:
                    break
                matrix.append(word)
            elif number < 1:
                raise ConfigError(
                    f"copy numbers in the filter matrix start from 1, not {word!r}"
                )
            else:
                raise ConfigError(
                    f"in the filter matrix copy @{len(matrix)} is followed by {word!r}"
                )
        else:
            if not matrix:
                raise ConfigError(
                    f"filter word {word!r} appears before the first copy label"
                )
            matrix[-1] += " " + word
    else:
        if len(matrix) == total:
            return matrix
    raise ConfigError(
        f"expected {total} filter sequences; reading stopped at {len(matrix)}"
    )


def parse_ini(text: str) -> Settings:
    """Parse the contents of an initialisation file."""
    words = text.split()
    if len(words) < 3:
        raise ConfigError("the initialisation file needs two paths and a grid size")
    original_path, result_path, size_word, *rest = words
    grid_size = _leading_int(size_word)
    if grid_size is None or grid_size < 1:
        raise ConfigError(f"invalid grid size: {size_word!r}")
    return Settings(
        original_path=original_path,
        result_path=result_path,
        grid_size=grid_size,
        matrix=parse_filter_matrix(rest, grid_size),
    )


def read_ini(path: str | Path) -> Settings:
    """Read settings from an initialisation file."""
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ConfigError(f"cannot read initialisation file {str(path)!r}") from exc
    return parse_ini(text)


def _word(answer: str) -> str:
    parts = answer.split()
    return parts[0] if parts else ""


_MENU = (
    "Enter the number on the left to add the matching filter:",
    "=========================================================",
    "[1]    Mirror vertically",
    "[2]    Negative",
    "[3]    Greyscale",
    "[4]    Remove colour",
    "[-6]   -> EDIT NEXT COPY",
    "[-4]   EDIT PREVIOUS COPY <-",
    "[-2]   # QUIT #",
)

_FILTER_CHOICES = {1: " Oy", 2: " Neg", 3: " Sz"}


def _ask_grid_size(ask: Callable[[str], str], say: Callable[[str], None]) -> int:
    size = 0
    while size < 1:
        size = _leading_int(_word(ask("Enter the copy grid size n for an n x n grid:"))) or 0
        if size < 1:
            say("It cannot be less than 1!")
        if size > LARGE_GRID:
            answer = _word(ask(f"You are about to make {size * size} images! Enter 0 to back out."))
            if answer == "0":
                size = 0
    return size


def _edit_matrix(
    ask: Callable[[str], str], say: Callable[[str], None], total: int
) -> list[str] | None:
    matrix = [f"@{number}" for number in range(1, total + 1)]
    current = 1
    while current <= total:
        say("\n" * 24)
        for number, code in enumerate(matrix, start=1):
            marker = "!!!" if number == current else "   "
            say(f"{marker}Copy >{code}<")
        say(f"EDITING COPY NO: {current} OF {total}")
        for line in _MENU:
            say(line)
        choice = _leading_int(_word(ask(""))) or 0
        if choice == -6:
            current += 1
            if current <= total:
                matrix[current - 1] = f"@{current}"
        elif choice == -4:
            if current > 1:
                current -= 1
                matrix[current - 1] = f"@{current}"
        elif choice == -2:
            return None
        elif choice in _FILTER_CHOICES:
            matrix[current - 1] += _FILTER_CHOICES[choice]
        elif choice == 4:
            colours = _word(
                ask("Enter the colour(s) to remove: r = red, g = green, b = blue")
            )
            matrix[current - 1] += " Kol " + colours
    return matrix


def _ask_choice(ask: Callable[[str], str], prompt: str, options: str) -> str | None:
    while True:
        answer = _word(ask(prompt))
        if answer == QUIT:
            return None
        if len(answer) == 1 and answer.lower() in options:
            return answer.lower()


def prompt_settings(
    ask: Callable[[str], str], say: Callable[[str], None]
) -> Settings | None:
    """Collect settings interactively.

    ``ask`` shows a prompt and returns the answer; ``say`` shows a message.
    The original image is loaded as soon as its path is known. Returns
    ``None`` when the user chooses to quit.
    """
    original_path = _word(ask("Enter the name of the image file to read:"))
    result_path = _word(ask("Enter the name of the image file to write:"))
    original = read_image(original_path)

    mode = _ask_choice(
        ask,
        f'Choose manual or automatic mode. Type "{QUIT}" to end the program. [M/A/{QUIT}]?',
        "ma",
    )
    if mode is None:
        return None
    if mode == "a":
        return Settings(
            original_path=original_path,
            result_path=result_path,
            grid_size=2,
            matrix=default_filter_matrix(),
            original=original,
        )

    grid_size = _ask_grid_size(ask, say)
    matrix = _edit_matrix(ask, say, grid_size * grid_size)
    if matrix is None:
        return None

    endings = _ask_choice(
        ask,
        f"Should line endings be Unix (LF) or Windows (CRLF)? [U/W/{QUIT}]",
        "uw",
    )
    if endings is None:
        return None
    return Settings(
        original_path=original_path,
        result_path=result_path,
        grid_size=grid_size,
        matrix=matrix,
        crlf=endings == "w",
        original=original,
    )