import logging
from typing import Iterator

from blockpic.glyphs import UP, Glyph, select_half_block, select_quadrant
from blockpic.halfblock import ColourSpace, HalfBlockGrid
from blockpic.options import RenderMode, RenderOptions
from blockpic.palette import make_rgb_u8

log = logging.getLogger(__name__)

ANSI_RESET = "\033[0m"
IRC_COLOUR = "\x03"
IRC_RESET = "\x0f"


def glyph_rows(grid: HalfBlockGrid, space: ColourSpace, quadrant: bool = False) -> Iterator[list[Glyph]]:
    """Yield one list of glyph decisions per output line."""
    last = len(grid) - 1
    for y, row in enumerate(grid):
        if not quadrant:
            yield [select_half_block(cell, space) for cell in row]
            continue
        glyphs = []
        for x in range(0, len(row), 2):
            right = row[x + 1] if x + 1 < len(row) else None
            glyph = select_quadrant(row[x], right, space)
            if grid.padded and y == last:
                # the bottom half of this row is padding, any pattern would be an artifact
                glyph = glyph._replace(char=UP)
            glyphs.append(glyph)
        yield glyphs


def _format_truecolour(glyph: Glyph) -> str:
    fr, fg, fb = make_rgb_u8(glyph.fg)
    br, bg, bb = make_rgb_u8(glyph.bg)
    return f"\033[38;2;{fr};{fg};{fb}m\033[48;2;{br};{bg};{bb}m{glyph.char}"


def _format_ansi256(glyph: Glyph) -> str:
    return f"\033[38;5;{glyph.fg}m\033[48;5;{glyph.bg}m{glyph.char}"


def _irc_line(glyphs: list[Glyph]) -> str:
    """Format one line of mIRC colours, skipping codes that would repeat the current state."""
    parts = []
    last: tuple[int, int] | None = None
    for glyph in glyphs:
        if last is None or glyph.bg != last[1]:
            parts.append(f"{IRC_COLOUR}{glyph.fg},{glyph.bg}{glyph.char}")
        elif glyph.fg != last[0]:
            parts.append(f"{IRC_COLOUR}{glyph.fg}{glyph.char}")
        else:
            parts.append(glyph.char)
        last = (glyph.fg, glyph.bg)
    parts.append(IRC_RESET)
    return "".join(parts)


def _ansi_line(glyphs: list[Glyph], truecolour: bool) -> str:
    format_glyph = _format_truecolour if truecolour else _format_ansi256
    return "".join(format_glyph(g) for g in glyphs) + ANSI_RESET


def render(grid: HalfBlockGrid, options: RenderOptions) -> str:
    log.debug("Rendering %d rows as %s (quadrant=%s)", len(grid), options.mode.value, options.quadrant)
    rows = glyph_rows(grid, options.colour_space, options.quadrant)
    if options.mode is RenderMode.IRC:
        return "\n".join(_irc_line(glyphs) for glyphs in rows)
    truecolour = options.mode is RenderMode.TRUECOLOUR
    return "\n".join(_ansi_line(glyphs, truecolour) for glyphs in rows)


def render_truecolour(grid: HalfBlockGrid, quadrant: bool = False) -> str:
    return render(grid, RenderOptions(RenderMode.TRUECOLOUR, quadrant))


def render_ansi256(grid: HalfBlockGrid, quadrant: bool = False, no_grayscale: bool = False) -> str:
    return render(grid, RenderOptions(RenderMode.ANSI256, quadrant, no_grayscale))


def render_irc(grid: HalfBlockGrid, quadrant: bool = False, no_grayscale: bool = False) -> str:
    return render(grid, RenderOptions(RenderMode.IRC, quadrant, no_grayscale))
