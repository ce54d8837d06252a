# pnmgrid

`pnmgrid` reads a plain-text Netpbm image (greyscale `P2` or colour `P3`).
It makes `n × n` copies of the image and runs a chain of filters over each
copy. It then stitches the copies together, row by row, into a single output
image.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and run pytest:

```
pip install .[test]
pytest
```

## Running

With a settings file:

```
pnmgrid settings.ini
```

With no argument, `pnmgrid` works as a dialogue:

1. It asks for the input file name and the output file name, and loads the input image straight away.
2. It asks you to choose a mode with `M` or `A`. Typing `quit` ends the program.
3. In the automatic mode (`A`) it uses the default 2 × 2 filter matrix, shown below.
4. In the manual mode (`M`) it asks for the grid size. If you enter a size above 4 it asks you to confirm, and entering `0` backs out.
5. You then build each copy's filter code from a numbered menu:
   - `1` adds `Oy`, `2` adds `Neg`, `3` adds `Sz`.
   - `4` adds `Kol` and asks for the colours.
   - `-6` moves to the next copy and `-4` to the previous one. Either move clears the filters of the copy it moves to.
   - `-2` quits.
6. Once every copy is done, it asks for Unix (`U`) or Windows (`W`) line endings.

Errors in the input are printed to standard error as `Error: ...`, and the command then exits with status 1.

## Settings file

The file holds, separated by any whitespace:

1. the path of the input image,
2. the path of the output image,
3. the grid size `n` (at least 1),
4. the filter matrix, one code for each of the `n × n` copies. Each code starts with `@k`, where `k` is the copy number, followed by the filters for that copy. The copies must be numbered from 1, in order.

```
photo.ppm
result.ppm
2
@1 Sz Neg
@2 Oy Kol r
@3 Kol g
@4 Oy Kol b Neg
```

Copies are laid out left to right, then top to bottom. A run from a settings file always writes Windows (CRLF) line endings.

## Filters

| Code        | Effect                                                                  |
|-------------|-------------------------------------------------------------------------|
| `Oy`        | mirror each row (flip around the vertical axis)                          |
| `Neg`       | negative: every value `v` becomes `depth - v`                            |
| `Sz`        | greyscale: each RGB pixel becomes the rounded mean of its three samples; the image stays `P3` |
| `Kol <rgb>` | zero the named channels (`r`, `g`, `b`, in any case), e.g. `Kol rb`; naming more than two letters turns the copy grey instead |

How the filters behave:

- Filters run in the order written, so `Neg Kol r` gives a different result from `Kol r Neg`.
- Words the parser does not recognise are ignored.
- `Sz` and `Kol` leave a `P2` image unchanged.
- `Kol` with a letter other than r, g or b raises `ImageError` when it is applied to a `P3` image. So does `Kol` with no colours.

## Input images

The input must be a plain-text `P2` or `P3` file with the following rules:

- Lines that begin with `#` are skipped.
- Every sample must lie between 0 and the maximum value given in the header.
- The number of samples must match the width and height exactly.

## Output

The format of the result depends on the copies:

- If any copy still carries colour, every copy is converted to `P3` and the result is written as `P3`.
- Otherwise every copy is reduced to `P2` and the result is written as `P2`.

The output file's extension is set to match the format, `.ppm` or `.pgm`:

- A `.pgm` or `.ppm` suffix already on the name is replaced.
- Any other name has the right extension appended.

The file holds the header, a `# Generated by pnmgrid` comment line, and then one sample per line.

## Library use

```python
from pnmgrid.image import read_image
from pnmgrid.render import render_copies, stitch_copies
from pnmgrid.config import default_filter_matrix

original = read_image("photo.ppm")
copies = render_copies(original, default_filter_matrix())
result = stitch_copies(copies, 2)
path = result.save("result", crlf=False)   # writes and returns "result.ppm"
```

The modules are:

- `pnmgrid.image` provides:
  - the `Image` class, with `copy`, `bitmap_size`, `to_grey`, `to_rgb`, `format_text` and `save`;
  - `parse_image`, `read_image` and `with_extension`.
- `pnmgrid.filters` provides `apply_filters` and the individual filters `mirror_oy`, `negative`, `greyscale` and `remove_colours`.
- `pnmgrid.config` provides:
  - `parse_ini` and `read_ini`, which build a `Settings` object from a settings file;
  - `parse_filter_matrix`, which checks and groups the filter words;
  - `prompt_settings(ask, say)`, which runs the interactive dialogue through the two callables you pass in.
- `pnmgrid.cli.run(settings)` carries a whole job through and returns the path written.

Bad images raise `pnmgrid.image.ImageError`. Bad settings raise `pnmgrid.config.ConfigError`.

## Limitations

Only the plain-text `P2` and `P3` formats are read and written. Binary Netpbm images (`P5`, `P6`) and bitmaps (`P1`, `P4`) are not supported. Comments are recognised only as whole lines.