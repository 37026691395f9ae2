from dataclasses import dataclass
from enum import Enum

from blockpic.halfblock import ColourSpace


class RenderMode(str, Enum):
    IRC = "irc"
    ANSI256 = "ansi256"
    TRUECOLOUR = "ansi-truecolor"


@dataclass(frozen=True)
class RenderOptions:
    """Render configuration. `no_grayscale` is the grayscale-bias switch: True selects ANSI232/IRC88."""

    mode: RenderMode = RenderMode.IRC
    quadrant: bool = False
    no_grayscale: bool = False  # use the palettes without their grayscale ramps

    def __post_init__(self):
        # Raises ValueError for unknown mode names
        object.__setattr__(self, "mode", RenderMode(self.mode))

    @property
    def colour_space(self) -> ColourSpace:
        if self.mode is RenderMode.TRUECOLOUR:
            return ColourSpace.TRUECOLOUR
        if self.mode is RenderMode.ANSI256:
            return ColourSpace.ANSI232 if self.no_grayscale else ColourSpace.ANSI256
        return ColourSpace.IRC88 if self.no_grayscale else ColourSpace.IRC99
