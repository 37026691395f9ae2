import argparse
import logging
import sys
from pathlib import Path

from blockpic.converter import image_to_text
from blockpic.effects import AdjustOptions, EffectOptions, ResizeOptions, StylizeOptions
from blockpic.options import RenderMode, RenderOptions

STYLIZE_FLAGS = [
    ("invert", "Invert colours"),
    ("grayscale", "Convert to grayscale"),
    ("sepia", "Sepia tone"),
    ("solarize", "Solarize"),
    ("normalize", "Stretch contrast to the full range"),
    ("noise", "Add random noise"),
    ("sharpen", "Sharpen"),
    ("edge_detection", "Edge detection"),
    ("emboss", "Emboss"),
    ("box_blur", "Box blur"),
    ("laplace", "Laplace filter"),
    ("halftone", "Halftone dots"),
    ("frosted_glass", "Frosted glass"),
    ("noise_reduction", "Median noise reduction"),
]


def parse_oil(value: str) -> tuple[int, float]:
    try:
        radius, intensity = value.split(",")
        return int(radius), float(intensity)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected <radius>,<intensity>, got {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an image as block art for IRC or ANSI terminals")
    parser.add_argument("image", help="Path to input image")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--irc", dest="mode", action="store_const", const=RenderMode.IRC, help="mIRC colours (default)")
    mode.add_argument("--ansi", dest="mode", action="store_const", const=RenderMode.ANSI256, help="256-colour ANSI")
    mode.add_argument(
        "--ansi24", dest="mode", action="store_const", const=RenderMode.TRUECOLOUR, help="24-bit truecolor ANSI"
    )
    parser.set_defaults(mode=RenderMode.IRC)
    parser.add_argument("--qb", action="store_true", help="Quadrant blocks (2x2 pixels per character)")
    parser.add_argument(
        "--nograyscale", action="store_true", help="Use the palettes without their grayscale ramps"
    )
    parser.add_argument("-w", "--width", type=int, default=50, help="Image width to resize to (default: 50)")

    adjust = parser.add_argument_group("adjustments")
    adjust.add_argument("-b", "--brightness", type=float, default=0.0, help="Brightness (-255 to 255)")
    adjust.add_argument("-c", "--contrast", type=float, default=0.0, help="Contrast (-255 to 255)")
    adjust.add_argument("-s", "--saturation", type=float, default=0.0, help="Saturation (-255 to 255)")
    adjust.add_argument("-H", "--hue", type=float, default=0.0, help="Hue rotation in degrees (0 to 360)")
    adjust.add_argument("-g", "--gamma", type=float, default=0.0, help="Gamma correction (0 disables)")

    stylize = parser.add_argument_group("stylize")
    stylize.add_argument("--dither", type=int, default=0, help="Dither to this many bits of colour (1 to 8)")
    stylize.add_argument("--pixelize", type=int, default=0, help="Pixelize block size")
    stylize.add_argument("--gaussian-blur", type=int, default=0, help="Gaussian blur radius")
    stylize.add_argument("--oil", type=parse_oil, default=None, help="Oil painting as <radius>,<intensity>")
    for name, text in STYLIZE_FLAGS:
        stylize.add_argument(f"--{name.replace('_', '-')}", action="store_true", help=text)

    parser.add_argument("--debug", action="store_true", help="Log debug output to stderr")
    return parser


def setup_logging(debug: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root = logging.getLogger("blockpic")
    root.setLevel(logging.DEBUG if debug else logging.WARNING)
    root.handlers[:] = [handler]


def options_from_args(args: argparse.Namespace) -> tuple[RenderOptions, EffectOptions]:
    render_options = RenderOptions(mode=args.mode, quadrant=args.qb, no_grayscale=args.nograyscale)
    effects = EffectOptions(
        resize=ResizeOptions(width=args.width),
        adjust=AdjustOptions(
            brightness=args.brightness,
            contrast=args.contrast,
            saturation=args.saturation,
            hue=args.hue,
            gamma=args.gamma,
        ),
        stylize=StylizeOptions(
            dither=args.dither,
            pixelize=args.pixelize,
            gaussian_blur=args.gaussian_blur,
            oil=args.oil,
            **{name: getattr(args, name) for name, _ in STYLIZE_FLAGS},
        ),
    )
    return render_options, effects


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)

    try:
        render_options, effects = options_from_args(args)
        text = image_to_text(image_path, render_options, effects)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    print(text)
