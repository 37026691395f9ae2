from blockpic.halfblock import HalfBlockCell, QuantizedPixel
from blockpic.palette import make_rgb_u8

RED = 0xFF0000
BLUE = 0x0000FF
BLACK = 0x000000
NAVY = 0x00007F  # mIRC 2


def rgba_buffer(rows):
    """Flatten rows of 0xRRGGBB values into an opaque RGBA byte buffer."""
    return bytes(b for row in rows for rgb in row for b in (*make_rgb_u8(rgb), 255))


def solid(width, height, rgb):
    return rgba_buffer([[rgb] * width for _ in range(height)])


def px(index, rgb=None):
    """A quantized pixel with the same index in every palette."""
    return QuantizedPixel(rgb=index if rgb is None else rgb, ansi256=index, ansi232=index, irc99=index, irc88=index)


def cell(top, bottom):
    return HalfBlockCell(px(top), px(bottom))
