import logging
from dataclasses import dataclass, field, fields

import numpy as np
from PIL import Image, ImageEnhance, ImageFilter, ImageOps

log = logging.getLogger(__name__)

LAPLACE_KERNEL = ImageFilter.Kernel((3, 3), [0, -1, 0, -1, 4, -1, 0, -1, 0], scale=1)
SEPIA_MATRIX = np.array(
    [
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ]
)


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class ResizeOptions:
    width: int | None = None

    def __post_init__(self):
        if self.width is not None and self.width < 1:
            raise ValueError(f"width must be positive, got {self.width}")


@dataclass(frozen=True)
class AdjustOptions:
    brightness: float = 0.0
    contrast: float = 0.0
    saturation: float = 0.0
    hue: float = 0.0
    gamma: float = 0.0

    def __post_init__(self):
        _check_range("brightness", self.brightness, -255, 255)
        _check_range("contrast", self.contrast, -255, 255)
        _check_range("saturation", self.saturation, -255, 255)
        _check_range("hue", self.hue, 0, 360)
        if self.gamma < 0:
            raise ValueError(f"gamma must not be negative, got {self.gamma}")


@dataclass(frozen=True)
class StylizeOptions:
    dither: int = 0
    pixelize: int = 0
    gaussian_blur: int = 0
    invert: bool = False
    grayscale: bool = False
    sepia: bool = False
    solarize: bool = False
    normalize: bool = False
    noise: bool = False
    sharpen: bool = False
    edge_detection: bool = False
    emboss: bool = False
    box_blur: bool = False
    laplace: bool = False
    halftone: bool = False
    frosted_glass: bool = False
    noise_reduction: bool = False
    oil: tuple[int, float] | None = None  # (radius, intensity levels)

    def __post_init__(self):
        _check_range("dither", self.dither, 0, 8)
        if self.pixelize < 0:
            raise ValueError(f"pixelize must not be negative, got {self.pixelize}")
        if self.gaussian_blur < 0:
            raise ValueError(f"gaussian_blur must not be negative, got {self.gaussian_blur}")
        if self.oil is not None:
            radius, levels = self.oil
            if radius < 1 or levels < 2:
                raise ValueError(f"oil needs radius >= 1 and intensity >= 2, got {self.oil}")

    def enabled(self) -> list[str]:
        return [f.name for f in fields(self) if getattr(self, f.name)]


@dataclass(frozen=True)
class EffectOptions:
    resize: ResizeOptions = field(default_factory=ResizeOptions)
    adjust: AdjustOptions = field(default_factory=AdjustOptions)
    stylize: StylizeOptions = field(default_factory=StylizeOptions)


def resize(image: Image.Image, width: int) -> Image.Image:
    height = max(1, int(width / image.width * image.height))
    return image.resize((width, height), Image.LANCZOS)


def _map_channels(image: Image.Image, func) -> Image.Image:
    arr = np.asarray(image, dtype=np.float64)
    return Image.fromarray(np.clip(func(arr), 0, 255).astype(np.uint8))


def adjust_brightness(image: Image.Image, amount: float) -> Image.Image:
    return _map_channels(image, lambda arr: arr + amount)


def adjust_contrast(image: Image.Image, amount: float) -> Image.Image:
    factor = (259 * (amount + 255)) / (255 * (259 - amount))
    return _map_channels(image, lambda arr: factor * (arr - 128) + 128)


def adjust_saturation(image: Image.Image, amount: float) -> Image.Image:
    return ImageEnhance.Color(image).enhance(1 + amount / 255)


def rotate_hue(image: Image.Image, degrees: float) -> Image.Image:
    shift = round(degrees / 360 * 256)
    h, s, v = image.convert("HSV").split()
    h = h.point(lambda x: (x + shift) % 256)
    return Image.merge("HSV", (h, s, v)).convert("RGB")


def adjust_gamma(image: Image.Image, gamma: float) -> Image.Image:
    return _map_channels(image, lambda arr: 255 * (arr / 255) ** (1 / gamma))


def dither(image: Image.Image, depth: int) -> Image.Image:
    return image.quantize(colors=2**depth, dither=Image.Dither.FLOYDSTEINBERG).convert("RGB")


def pixelize(image: Image.Image, size: int) -> Image.Image:
    small = image.resize((max(1, image.width // size), max(1, image.height // size)), Image.NEAREST)
    return small.resize(image.size, Image.NEAREST)


def sepia(image: Image.Image) -> Image.Image:
    return _map_channels(image, lambda arr: arr @ SEPIA_MATRIX.T)


def add_noise(image: Image.Image, rng: np.random.Generator | None = None) -> Image.Image:
    rng = rng if rng is not None else np.random.default_rng()
    return _map_channels(image, lambda arr: arr + rng.integers(-32, 33, size=arr.shape))


def halftone(image: Image.Image) -> Image.Image:
    """Dither each channel down to on/off dots."""
    return Image.merge("RGB", [band.convert("1").convert("L") for band in image.split()])


def frosted_glass(image: Image.Image, distance: int = 3) -> Image.Image:
    return image.effect_spread(distance)


def oil_paint(image: Image.Image, radius: int, levels: float) -> Image.Image:
    """Posterize to `levels` intensities, then take the most common value around each pixel."""
    steps = levels - 1
    image = _map_channels(image, lambda arr: np.round(np.round(arr / 255 * steps) * 255 / steps))
    mode = ImageFilter.ModeFilter(2 * radius + 1)
    # ModeFilter only handles single-band images
    return Image.merge("RGB", [band.filter(mode) for band in image.split()])


def apply_adjustments(image: Image.Image, options: AdjustOptions) -> Image.Image:
    if options.brightness:
        image = adjust_brightness(image, options.brightness)
    if options.hue:
        image = rotate_hue(image, options.hue)
    if options.contrast:
        image = adjust_contrast(image, options.contrast)
    if options.saturation:
        image = adjust_saturation(image, options.saturation)
    if options.gamma:
        image = adjust_gamma(image, options.gamma)
    return image


def apply_stylize(image: Image.Image, options: StylizeOptions) -> Image.Image:
    if options.dither:
        image = dither(image, options.dither)
    if options.gaussian_blur:
        image = image.filter(ImageFilter.GaussianBlur(options.gaussian_blur))
    if options.pixelize:
        image = pixelize(image, options.pixelize)
    if options.halftone:
        image = halftone(image)
    if options.invert:
        image = ImageOps.invert(image)
    if options.sepia:
        image = sepia(image)
    if options.solarize:
        image = ImageOps.solarize(image)
    if options.normalize:
        image = ImageOps.autocontrast(image)
    if options.noise:
        image = add_noise(image)
    if options.noise_reduction:
        image = image.filter(ImageFilter.MedianFilter(3))
    if options.sharpen:
        image = image.filter(ImageFilter.SHARPEN)
    if options.edge_detection:
        image = image.filter(ImageFilter.FIND_EDGES)
    if options.emboss:
        image = image.filter(ImageFilter.EMBOSS)
    if options.frosted_glass:
        image = frosted_glass(image)
    if options.box_blur:
        image = image.filter(ImageFilter.BoxBlur(1))
    if options.grayscale:
        image = ImageOps.grayscale(image).convert("RGB")
    if options.laplace:
        image = image.filter(LAPLACE_KERNEL)
    if options.oil is not None:
        image = oil_paint(image, *options.oil)
    return image


def apply_effects(image: Image.Image, options: EffectOptions) -> Image.Image:
    """Resize, then adjust, then stylize. Always returns an RGB image."""
    image = image.convert("RGB")
    if options.resize.width is not None:
        image = resize(image, options.resize.width)
    image = apply_adjustments(image, options.adjust)
    image = apply_stylize(image, options.stylize)
    log.debug("Applied effects %s to %dx%d image", options.stylize.enabled(), image.width, image.height)
    return image
