import pytest

from pnmgrid.cli import main, run
from pnmgrid.config import Settings, default_filter_matrix
from pnmgrid.image import read_image


@pytest.fixture
def grey_file(tmp_path):
    path = tmp_path / "in.pgm"
    path.write_text("P2\n2 1\n9\n1 2\n")
    return str(path)


@pytest.fixture
def colour_file(tmp_path):
    path = tmp_path / "in.ppm"
    path.write_text("P3\n2 2\n255\n10 20 30 40 50 60\n70 80 90 100 110 120\n")
    return str(path)


def test_run_single_copy(grey_file, tmp_path):
    settings = Settings(
        original_path=grey_file,
        result_path=str(tmp_path / "out"),
        grid_size=1,
        matrix=["@1 Oy"],
    )
    written = run(settings)
    assert written == str(tmp_path / "out.pgm")
    assert read_image(written).pixels == [2, 1]


def test_run_default_grid_keeps_colour(colour_file, tmp_path):
    settings = Settings(
        original_path=colour_file,
        result_path=str(tmp_path / "out.pgm"),
    )
    written = run(settings)
    assert written.endswith("out.ppm")
    result = read_image(written)
    original = read_image(colour_file)
    assert result.fmt == "P3"
    assert result.width == original.width * 2
    assert result.height == original.height * 2
    assert result.depth == original.depth


def test_run_leaves_original_untouched(grey_file, tmp_path):
    original = read_image(grey_file)
    settings = Settings(
        original_path=grey_file,
        result_path=str(tmp_path / "out"),
        grid_size=1,
        matrix=["@1 Neg"],
        original=original,
    )
    run(settings)
    assert original.pixels == [1, 2]


def test_run_line_endings(grey_file, tmp_path):
    unix = Settings(grey_file, str(tmp_path / "unix"), 1, ["@1"], crlf=False)
    windows = Settings(grey_file, str(tmp_path / "windows"), 1, ["@1"], crlf=True)
    unix_bytes = open(run(unix), "rb").read()
    windows_bytes = open(run(windows), "rb").read()
    assert b"\r" not in unix_bytes
    assert windows_bytes.replace(b"\r\n", b"\n") == unix_bytes


def test_main_with_ini(colour_file, tmp_path):
    out = tmp_path / "result"
    ini = tmp_path / "run.ini"
    codes = " ".join(default_filter_matrix())
    ini.write_text(f"{colour_file}\n{out}\n2\n{codes}\n")
    assert main([str(ini)]) == 0
    assert read_image(tmp_path / "result.ppm").width == 4


def test_main_missing_ini(tmp_path, capsys):
    assert main([str(tmp_path / "absent.ini")]) == 1
    assert "Error" in capsys.readouterr().err


def test_main_bad_image(tmp_path, capsys):
    image = tmp_path / "bad.pgm"
    image.write_text("P5\n1 1\n9\n1\n")
    ini = tmp_path / "run.ini"
    ini.write_text(f"{image} {tmp_path / 'out'} 1 @1")
    assert main([str(ini)]) == 1
    assert "Error" in capsys.readouterr().err
    assert not (tmp_path / "out.pgm").exists()


def test_main_interactive_quit(grey_file, tmp_path, monkeypatch):
    answers = iter([grey_file, str(tmp_path / "out"), "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    assert main([]) == 0
    assert not (tmp_path / "out.pgm").exists()


def test_main_interactive_automatic(grey_file, tmp_path, monkeypatch):
    answers = iter([grey_file, str(tmp_path / "out"), "a"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    assert main([]) == 0
    result = read_image(tmp_path / "out.pgm")
    assert (result.width, result.height) == (4, 2)


def test_main_interactive_end_of_input(grey_file, tmp_path, monkeypatch):
    def no_more(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", no_more)
    assert main([]) == 0
    assert list(tmp_path.iterdir()) == [tmp_path / "in.pgm"]