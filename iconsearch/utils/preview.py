"""
Terminal previews of SVG icons as block or braille text art
"""

from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image

from iconsearch.core.exceptions import RasterizationError
from iconsearch.utils.image_utils import render_svg

# Dark to light; fully transparent pixels are always blank
BLOCKS = np.array(['█', '▓', '▒', '░', ' '])
BRIGHTNESS_BANDS = [64, 128, 192, 240]
ALPHA_CUTOFF = 50

BRAILLE_BASE = 0x2800
# (dx, dy, bit) for the 2x4 dot grid of one braille character
BRAILLE_DOTS = [
    (0, 0, 0x01), (0, 1, 0x02), (0, 2, 0x04), (0, 3, 0x40),
    (1, 0, 0x08), (1, 1, 0x10), (1, 2, 0x20), (1, 3, 0x80),
]
BRAILLE_ALPHA_CUTOFF = 100
BRAILLE_DARKNESS = 180

CELL_ASPECT = 2  # terminal cells are roughly twice as tall as wide
RENDER_WIDTH = 256


def _rows_for(image: Image.Image, width: int) -> int:
    aspect = image.height / image.width
    return max(1, round(width * aspect / CELL_ASPECT))


def _pixels(image: Image.Image, width: int, height: int) -> np.ndarray:
    """RGBA pixels of image stretched to width x height"""
    resized = image.resize((width, height), Image.Resampling.LANCZOS)
    return np.asarray(resized, dtype=np.float32)


def svg_to_ascii(svg_path: Path, width: int = 32, height: Optional[int] = None) -> str:
    """Render an SVG file as rows of block characters"""
    try:
        image = render_svg(Path(svg_path).read_bytes(), width=RENDER_WIDTH)
        rows = height or _rows_for(image, width)
        pixels = _pixels(image, width, rows)
    except (OSError, ValueError, RasterizationError) as e:
        return f"[Preview unavailable: {e}]"

    brightness = pixels[..., :3].mean(axis=2)
    chars = BLOCKS[np.digitize(brightness, BRIGHTNESS_BANDS)]
    chars[pixels[..., 3] < ALPHA_CUTOFF] = ' '

    return '\n'.join(''.join(row) for row in chars)


def svg_to_braille(svg_path: Path, width: int = 40, height: Optional[int] = None) -> str:
    """Render an SVG file as braille characters, 2x4 dots per cell"""
    try:
        image = render_svg(Path(svg_path).read_bytes(), width=RENDER_WIDTH)
        rows = height or _rows_for(image, width)
        pixels = _pixels(image, width * 2, rows * 4)
    except (OSError, ValueError, RasterizationError) as e:
        return f"[Braille preview unavailable: {e}]"

    brightness = pixels[..., :3].mean(axis=2)
    dots = (pixels[..., 3] > BRAILLE_ALPHA_CUTOFF) & (brightness < BRAILLE_DARKNESS)

    codes = np.zeros((rows, width), dtype=np.int32)
    for dx, dy, bit in BRAILLE_DOTS:
        codes |= dots[dy::4, dx::2].astype(np.int32) * bit

    return '\n'.join(''.join(chr(BRAILLE_BASE + int(c)) for c in row) for row in codes)
