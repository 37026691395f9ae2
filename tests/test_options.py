import pytest

from blockpic.halfblock import ColourSpace
from blockpic.options import RenderMode, RenderOptions


@pytest.mark.parametrize(
    "mode, no_grayscale, space",
    [
        (RenderMode.TRUECOLOUR, False, ColourSpace.TRUECOLOUR),
        (RenderMode.TRUECOLOUR, True, ColourSpace.TRUECOLOUR),
        (RenderMode.ANSI256, False, ColourSpace.ANSI256),
        (RenderMode.ANSI256, True, ColourSpace.ANSI232),
        (RenderMode.IRC, False, ColourSpace.IRC99),
        (RenderMode.IRC, True, ColourSpace.IRC88),
    ],
)
def test_colour_space(mode, no_grayscale, space):
    assert RenderOptions(mode=mode, no_grayscale=no_grayscale).colour_space is space


def test_mode_from_string():
    assert RenderOptions(mode="ansi-truecolor").mode is RenderMode.TRUECOLOUR


def test_unknown_mode():
    with pytest.raises(ValueError):
        RenderOptions(mode="sixel")


def test_defaults():
    options = RenderOptions()
    assert options.mode is RenderMode.IRC
    assert not options.quadrant
    assert not options.no_grayscale
