"""Command line entry point: build a grid of filtered copies of an image."""

from __future__ import annotations

import sys

from .config import ConfigError, Settings, prompt_settings, read_ini
from .image import ImageError, read_image
from .render import render_copies, stitch_copies

ORIGINAL_IDENT = 0


def run(settings: Settings) -> str:
    """Render, stitch and save according to ``settings``.

    Returns the path of the written result.
    """
    original = settings.original
    if original is None:
        original = read_image(settings.original_path)
    original.ident = ORIGINAL_IDENT
    copies = render_copies(original, settings.matrix)
    result = stitch_copies(copies, settings.grid_size)
    return result.save(settings.result_path, settings.crlf)


def _ask(prompt: str) -> str:
    return input(f"{prompt}\n> ")


def main(argv: list[str] | None = None) -> int:
    """Run with an initialisation file as the first argument, or interactively."""
    args = sys.argv[1:] if argv is None else argv
    try:
        if args:
            settings = read_ini(args[0])
        else:
            settings = prompt_settings(_ask, print)
            if settings is None:
                return 0
        run(settings)
    except EOFError:
        return 0
    except (ConfigError, ImageError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())