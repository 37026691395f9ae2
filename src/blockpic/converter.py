from pathlib import Path

from PIL import Image

from blockpic.effects import EffectOptions, apply_effects
from blockpic.halfblock import grid_from_image
from blockpic.options import RenderOptions
from blockpic.renderers import render


def image_to_text(
    image: Image.Image | str | Path,
    render_options: RenderOptions | None = None,
    effects: EffectOptions | None = None,
) -> str:
    if not isinstance(image, Image.Image):
        image = Image.open(image)
    image = apply_effects(image, effects or EffectOptions())
    return render(grid_from_image(image), render_options or RenderOptions())
