from typing import Callable, NamedTuple

from blockpic.halfblock import ColourSpace, HalfBlockCell

UP = "\u2580"  # ▀
DOWN = "\u2584"  # ▄
FULL = "\u2588"  # █
LEFT = "\u258C"  # ▌
RIGHT = "\u2590"  # ▐
DIAG_LEFT = "\u259A"  # ▚
DIAG_RIGHT = "\u259E"  # ▞
DOWN_LEFT = "\u2599"  # ▙
DOWN_RIGHT = "\u259F"  # ▟
UP_LEFT = "\u259B"  # ▛
UP_RIGHT = "\u259C"  # ▜

# Every glyph the selector can produce
BLOCKS = FULL + UP_LEFT + UP_RIGHT + UP + DOWN_LEFT + DOWN_RIGHT + DOWN + LEFT + RIGHT + DIAG_LEFT + DIAG_RIGHT


class Glyph(NamedTuple):
    char: str
    fg: int
    bg: int


class Corners(NamedTuple):
    """Equalities between the four corners of a 2x2 tile."""

    ups: bool  # top-left == top-right
    downs: bool  # bottom-left == bottom-right
    lefts: bool  # top-left == bottom-left
    rights: bool  # top-right == bottom-right
    left_diag: bool  # top-left == bottom-right
    right_diag: bool  # top-right == bottom-left

    @classmethod
    def compare(cls, top_left: int, bottom_left: int, top_right: int, bottom_right: int) -> "Corners":
        return cls(
            ups=top_left == top_right,
            downs=bottom_left == bottom_right,
            lefts=top_left == bottom_left,
            rights=top_right == bottom_right,
            left_diag=top_left == bottom_right,
            right_diag=top_right == bottom_left,
        )


# Evaluated top to bottom, first match wins.
QUADRANT_RULES: list[tuple[Callable[[Corners], bool], str]] = [
    (lambda c: c.ups and c.lefts and c.rights, FULL),
    (lambda c: c.ups and c.lefts, UP_LEFT),
    (lambda c: c.ups and c.rights, UP_RIGHT),
    (lambda c: c.ups, UP),
    (lambda c: c.downs and c.lefts, DOWN_LEFT),
    (lambda c: c.downs and c.rights, DOWN_RIGHT),
    (lambda c: c.downs, DOWN),
    (lambda c: c.lefts and not c.rights, LEFT),
    (lambda c: c.rights and not c.lefts, RIGHT),
    (lambda c: c.left_diag, DIAG_LEFT),
    (lambda c: c.right_diag, DIAG_RIGHT),
]
FALLBACK = UP


def match_quadrant(corners: Corners) -> str:
    for predicate, char in QUADRANT_RULES:
        if predicate(corners):
            return char
    return FALLBACK


def select_half_block(cell: HalfBlockCell, space: ColourSpace) -> Glyph:
    return Glyph(UP, cell.top.colour(space), cell.bottom.colour(space))


def select_quadrant(left: HalfBlockCell, right: HalfBlockCell | None, space: ColourSpace) -> Glyph:
    """Pick the block glyph for a 2x2 tile made of two adjacent half-block cells.

    Only the left cell's colours are painted; the right cell just shapes the
    glyph. A missing right cell (odd width) mirrors the left one.
    """
    if right is None:
        right = left
    corners = Corners.compare(
        left.top.index(space),
        left.bottom.index(space),
        right.top.index(space),
        right.bottom.index(space),
    )
    return Glyph(match_quadrant(corners), left.top.colour(space), left.bottom.colour(space))
