from dataclasses import replace

import pytest

from blockpic.glyphs import (
    BLOCKS,
    DIAG_LEFT,
    DIAG_RIGHT,
    DOWN,
    DOWN_LEFT,
    DOWN_RIGHT,
    FULL,
    LEFT,
    QUADRANT_RULES,
    RIGHT,
    UP,
    UP_LEFT,
    UP_RIGHT,
    Corners,
    match_quadrant,
    select_half_block,
    select_quadrant,
)
from blockpic.halfblock import ColourSpace, HalfBlockCell
from tests.conftest import cell, px


@pytest.mark.parametrize(
    "top_left, bottom_left, top_right, bottom_right, expected",
    [
        (1, 1, 1, 1, FULL),
        (1, 1, 1, 2, UP_LEFT),
        (1, 2, 1, 1, UP_RIGHT),
        (1, 2, 1, 3, UP),
        (1, 1, 2, 1, DOWN_LEFT),
        (2, 1, 1, 1, DOWN_RIGHT),
        (1, 3, 2, 3, DOWN),
        (1, 1, 2, 3, LEFT),
        (2, 3, 1, 1, RIGHT),
        (1, 2, 3, 1, DIAG_LEFT),
        (2, 1, 1, 3, DIAG_RIGHT),
        (1, 2, 3, 4, UP),
    ],
)
def test_quadrant_rules(top_left, bottom_left, top_right, bottom_right, expected):
    glyph = select_quadrant(cell(top_left, bottom_left), cell(top_right, bottom_right), ColourSpace.IRC99)
    assert glyph.char == expected


def test_checkerboard_prefers_left_diagonal():
    assert select_quadrant(cell(1, 2), cell(2, 1), ColourSpace.IRC99).char == DIAG_LEFT


def test_two_flat_columns_fall_back_to_upper_half():
    # lefts and rights both equal, but rule 8 and 9 each need the other side to differ
    assert select_quadrant(cell(1, 1), cell(2, 2), ColourSpace.IRC99).char == UP


def test_rule_table_order():
    chars = [char for _, char in QUADRANT_RULES]
    assert chars == [FULL, UP_LEFT, UP_RIGHT, UP, DOWN_LEFT, DOWN_RIGHT, DOWN, LEFT, RIGHT, DIAG_LEFT, DIAG_RIGHT]


def test_every_corner_pattern_maps_to_a_known_glyph():
    for tl in range(4):
        for bl in range(4):
            for tr in range(4):
                for br in range(4):
                    assert match_quadrant(Corners.compare(tl, bl, tr, br)) in BLOCKS


def test_colours_come_from_left_cell():
    glyph = select_quadrant(cell(5, 6), cell(7, 8), ColourSpace.IRC99)
    assert (glyph.fg, glyph.bg) == (5, 6)


def test_missing_right_cell_mirrors_left():
    assert select_quadrant(cell(1, 1), None, ColourSpace.IRC99).char == FULL
    assert select_quadrant(cell(1, 2), None, ColourSpace.IRC99).char == UP


def test_equality_uses_palette_index_not_rgb():
    left = HalfBlockCell(px(3, rgb=0x100000), px(3, rgb=0x110000))
    right = HalfBlockCell(px(3, rgb=0x120000), px(3, rgb=0x130000))
    glyph = select_quadrant(left, right, ColourSpace.TRUECOLOUR)
    assert glyph.char == FULL
    assert (glyph.fg, glyph.bg) == (0x100000, 0x110000)


def test_equality_follows_active_space():
    plain = px(3)
    odd_ansi = replace(plain, ansi256=9)
    left = HalfBlockCell(plain, plain)
    right = HalfBlockCell(plain, odd_ansi)
    assert select_quadrant(left, right, ColourSpace.IRC99).char == FULL
    assert select_quadrant(left, right, ColourSpace.ANSI256).char == UP_LEFT


def test_half_block_uses_top_and_bottom():
    glyph = select_half_block(cell(4, 2), ColourSpace.IRC99)
    assert glyph == (UP, 4, 2)
