"""Color swatches for shot reference images."""

import time
from typing import List, Tuple

from PIL import Image

Color = Tuple[int, int, int]

SWATCH_SIZE = 5
THUMBNAIL = (96, 96)


def dominant_colors(image: Image.Image, count: int = SWATCH_SIZE) -> List[Color]:
    """Reduce the image to ``count`` colors and return them, most used first."""
    thumb = image.convert("RGB")
    thumb.thumbnail(THUMBNAIL)
    reduced = thumb.quantize(colors=count, method=Image.Quantize.MEDIANCUT)

    flat = reduced.getpalette() or []
    usage = sorted(reduced.getcolors(), key=lambda c: c[0], reverse=True)
    return [tuple(flat[index * 3:index * 3 + 3]) for _, index in usage]


def swatch_for_file(path: str, count: int = SWATCH_SIZE) -> List[Color]:
    start = time.time()
    with Image.open(path) as img:
        colors = dominant_colors(img, count)
    print(f"[Palette] {len(colors)} colors from {path} in {time.time() - start:.2f}s")
    return colors
