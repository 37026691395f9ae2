from dataclasses import dataclass
from functools import cached_property
from typing import Sequence

import numpy as np


def make_rgb_u8(rgb: int) -> tuple[int, int, int]:
    """Split a packed 0xRRGGBB value into its (r, g, b) channels."""
    return ((rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF)


def make_rgb_u32(channels: Sequence[int]) -> int:
    """Pack the first three channels of a pixel into 0xRRGGBB. Alpha is ignored."""
    r, g, b = int(channels[0]), int(channels[1]), int(channels[2])
    return (r << 16) + (g << 8) + b


@dataclass(frozen=True)
class Palette:
    name: str
    entries: tuple[tuple[int, int], ...]  # (colour code, 0xRRGGBB) in declaration order

    def __post_init__(self):
        if not self.entries:
            raise ValueError(f"Palette {self.name!r} has no entries")

    def __len__(self) -> int:
        return len(self.entries)

    @cached_property
    def codes(self) -> np.ndarray:
        return np.array([code for code, _ in self.entries], dtype=np.int32)

    @cached_property
    def colours(self) -> np.ndarray:
        """Entry colours as an (N, 3) int32 array."""
        return np.array([make_rgb_u8(rgb) for _, rgb in self.entries], dtype=np.int32)

    def find_nearest(self, rgb: int) -> int:
        best_code = self.entries[0][0]
        best_dist = None
        pixel = make_rgb_u8(rgb)
        for code, entry_rgb in self.entries:
            dist = sum((a - b) ** 2 for a, b in zip(pixel, make_rgb_u8(entry_rgb)))
            if best_dist is None or dist < best_dist:
                best_dist = dist
                best_code = code
        return best_code

    def find_nearest_grid(self, pixels: np.ndarray) -> np.ndarray:
        """Vectorised find_nearest over an (..., 3) array of channels.

        Returns an int32 array of colour codes with the leading shape of `pixels`.
        argmin keeps the first minimum, so ties resolve the same way as find_nearest.
        """
        pixels = np.asarray(pixels, dtype=np.int32)
        diff = pixels[..., None, :] - self.colours
        dist = (diff * diff).sum(axis=-1)
        return self.codes[dist.argmin(axis=-1)]


def nearest_index(rgb: int, palette: Palette) -> int:
    return palette.find_nearest(rgb)


def _indexed(colours: Sequence[int]) -> tuple[tuple[int, int], ...]:
    return tuple(enumerate(colours))


# mIRC colours 0-15 followed by the extended colours 16-98
_MIRC_COLOURS = [
    0xFFFFFF, 0x000000, 0x00007F, 0x009300, 0xFF0000, 0x7F0000, 0x9C009C, 0xFC7F00,
    0xFFFF00, 0x00FC00, 0x009393, 0x00FFFF, 0x0000FC, 0xFF00FF, 0x7F7F7F, 0xD2D2D2,
    0x470000, 0x472100, 0x474700, 0x324700, 0x004700, 0x00472C, 0x004747, 0x002747,
    0x000047, 0x2E0047, 0x470047, 0x47002A, 0x740000, 0x743A00, 0x747400, 0x517400,
    0x007400, 0x007449, 0x007474, 0x004074, 0x000074, 0x4B0074, 0x740074, 0x740045,
    0xB50000, 0xB56300, 0xB5B500, 0x7DB500, 0x00B500, 0x00B571, 0x00B5B5, 0x0063B5,
    0x0000B5, 0x7500B5, 0xB500B5, 0xB5006B, 0xFF0000, 0xFF8C00, 0xFFFF00, 0xB2FF00,
    0x00FF00, 0x00FFA0, 0x00FFFF, 0x008CFF, 0x0000FF, 0xA500FF, 0xFF00FF, 0xFF0098,
    0xFF5959, 0xFFB459, 0xFFFF71, 0xCFFF60, 0x6FFF6F, 0x65FFC9, 0x6DFFFF, 0x59B4FF,
    0x5959FF, 0xC459FF, 0xFF66FF, 0xFF59BC, 0xFF9C9C, 0xFFD39C, 0xFFFF9C, 0xE2FF9C,
    0x9CFF9C, 0x9CFFDB, 0x9CFFFF, 0x9CD3FF, 0x9C9CFF, 0xDC9CFF, 0xFF9CFF, 0xFF94D3,
    0x000000, 0x131313, 0x282828, 0x363636, 0x4D4D4D, 0x656565, 0x818181, 0x9F9F9F,
    0xBCBCBC, 0xE2E2E2, 0xFFFFFF,
]

_XTERM_SYSTEM = [
    0x000000, 0x800000, 0x008000, 0x808000, 0x000080, 0x800080, 0x008080, 0xC0C0C0,
    0x808080, 0xFF0000, 0x00FF00, 0xFFFF00, 0x0000FF, 0xFF00FF, 0x00FFFF, 0xFFFFFF,
]
_XTERM_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)
_XTERM_CUBE = [
    make_rgb_u32((r, g, b)) for r in _XTERM_CUBE_LEVELS for g in _XTERM_CUBE_LEVELS for b in _XTERM_CUBE_LEVELS
]
_XTERM_GRAYS = [make_rgb_u32((v, v, v)) for v in range(8, 248, 10)]
_XTERM_COLOURS = _XTERM_SYSTEM + _XTERM_CUBE + _XTERM_GRAYS

IRC99 = Palette("irc99", _indexed(_MIRC_COLOURS))
# Without the 88-98 grayscale ramp
IRC88 = Palette("irc88", _indexed(_MIRC_COLOURS[:88]))
ANSI256 = Palette("ansi256", _indexed(_XTERM_COLOURS))
# Without the 232-255 grayscale ramp
ANSI232 = Palette("ansi232", _indexed(_XTERM_COLOURS[:232]))
