import pytest
from PIL import Image

from blockpic.cli import build_parser, main, options_from_args, parse_oil
from blockpic.glyphs import FULL
from blockpic.options import RenderMode


@pytest.fixture
def red_png(tmp_path):
    path = tmp_path / "red.png"
    Image.new("RGB", (2, 2), (255, 0, 0)).save(path)
    return path


def test_renders_to_stdout(red_png, capsys):
    main([str(red_png), "--ansi24", "--qb", "-w", "2"])
    out = capsys.readouterr().out
    assert out == "\033[38;2;255;0;0m\033[48;2;255;0;0m" + FULL + "\033[0m\n"


def test_irc_is_default(red_png, capsys):
    main([str(red_png), "-w", "2"])
    assert capsys.readouterr().out.startswith("\x034,4")


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "nope.png")])
    assert exc.value.code == 1
    assert "File not found" in capsys.readouterr().err


def test_not_an_image(tmp_path, capsys):
    path = tmp_path / "junk.png"
    path.write_bytes(b"not an image")
    with pytest.raises(SystemExit) as exc:
        main([str(path)])
    assert exc.value.code == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_invalid_option_value(red_png, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(red_png), "--brightness", "300"])
    assert exc.value.code == 1
    assert "brightness" in capsys.readouterr().err


def test_modes_are_exclusive(red_png):
    with pytest.raises(SystemExit) as exc:
        main([str(red_png), "--irc", "--ansi"])
    assert exc.value.code == 2


def test_options_from_args():
    argv = ["x.png", "--ansi", "--nograyscale", "-w", "30", "--sepia", "--gaussian-blur", "2"]
    args = build_parser().parse_args(argv)
    render_options, effects = options_from_args(args)
    assert render_options.mode is RenderMode.ANSI256
    assert render_options.no_grayscale
    assert not render_options.quadrant
    assert effects.resize.width == 30
    assert effects.stylize.sepia
    assert effects.stylize.gaussian_blur == 2
    assert not effects.stylize.invert


def test_parse_oil():
    assert parse_oil("2,5") == (2, 5.0)


def test_bad_oil_value_is_a_usage_error(red_png, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(red_png), "--oil", "bad"])
    assert exc.value.code == 2
    assert "<radius>,<intensity>" in capsys.readouterr().err


def test_extra_stylize_flags():
    argv = ["x.png", "--oil", "2,5", "--halftone", "--frosted-glass", "--noise-reduction"]
    _, effects = options_from_args(build_parser().parse_args(argv))
    assert effects.stylize.oil == (2, 5.0)
    assert effects.stylize.halftone
    assert effects.stylize.frosted_glass
    assert effects.stylize.noise_reduction
