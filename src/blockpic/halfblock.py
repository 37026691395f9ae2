import logging
from dataclasses import dataclass, field
from enum import Enum

import numpy as np
from PIL import Image

from blockpic.palette import ANSI232, ANSI256, IRC88, IRC99

log = logging.getLogger(__name__)

CHANNELS = 4  # decoded buffers are RGBA


class EmptyImageError(ValueError):
    pass


class InvalidGridError(ValueError):
    pass


class ColourSpace(Enum):
    """Which value of a QuantizedPixel a renderer paints with."""

    TRUECOLOUR = "rgb"
    ANSI256 = "ansi256"
    ANSI232 = "ansi232"
    IRC99 = "irc99"
    IRC88 = "irc88"


@dataclass(frozen=True)
class QuantizedPixel:
    rgb: int
    ansi256: int
    ansi232: int
    irc99: int
    irc88: int

    def colour(self, space: ColourSpace) -> int:
        return getattr(self, space.value)

    def index(self, space: ColourSpace) -> int:
        """Palette index used for equality tests; true colour compares IRC99 slots."""
        if space is ColourSpace.TRUECOLOUR:
            return self.irc99
        return getattr(self, space.value)


@dataclass(frozen=True)
class HalfBlockCell:
    top: QuantizedPixel
    bottom: QuantizedPixel


@dataclass
class HalfBlockGrid:
    width: int
    cells: list[list[HalfBlockCell]] = field(default_factory=list)
    padded: bool = False  # last row's bottom pixels are synthetic black

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)


def to_pixel_grid(buffer: bytes | np.ndarray, width: int) -> np.ndarray:
    """Reshape a flat RGBA buffer into a (rows, width, 3) uint8 array, dropping alpha."""
    data = np.frombuffer(buffer, dtype=np.uint8) if isinstance(buffer, (bytes, bytearray)) else np.asarray(buffer)
    data = data.astype(np.uint8, copy=False).ravel()
    if width <= 0 or data.size == 0:
        raise EmptyImageError(f"Empty image: {data.size} bytes at width {width}")
    row_bytes = width * CHANNELS
    if data.size % row_bytes:
        raise InvalidGridError(f"Invalid grid dimensions: {data.size} bytes is not a whole number of {width}px rows")
    return data.reshape(-1, width, CHANNELS)[:, :, :3]


def quantize_row(row: np.ndarray) -> list[QuantizedPixel]:
    """Quantize one (width, 3) row of pixels against every palette."""
    rgbs = (row[:, 0].astype(np.int64) << 16) + (row[:, 1].astype(np.int64) << 8) + row[:, 2]
    ansi256 = ANSI256.find_nearest_grid(row)
    ansi232 = ANSI232.find_nearest_grid(row)
    irc99 = IRC99.find_nearest_grid(row)
    irc88 = IRC88.find_nearest_grid(row)
    return [
        QuantizedPixel(int(rgb), int(a), int(a232), int(i), int(i88))
        for rgb, a, a232, i, i88 in zip(rgbs, ansi256, ansi232, irc99, irc88)
    ]


def build_grid(buffer: bytes | np.ndarray, width: int) -> HalfBlockGrid:
    pixels = to_pixel_grid(buffer, width)
    padded = pixels.shape[0] % 2 != 0
    if padded:
        pixels = np.pad(pixels, ((0, 1), (0, 0), (0, 0)), constant_values=0)
    log.debug("Building half-block grid from %dx%d pixels (padded=%s)", width, pixels.shape[0], padded)

    quantized = [quantize_row(row) for row in pixels]
    cells = [
        [HalfBlockCell(top, bottom) for top, bottom in zip(top_row, bottom_row)]
        for top_row, bottom_row in zip(quantized[0::2], quantized[1::2])
    ]
    return HalfBlockGrid(width=width, cells=cells, padded=padded)


def grid_from_image(image: Image.Image) -> HalfBlockGrid:
    image = image.convert("RGBA")
    return build_grid(image.tobytes(), image.width)
