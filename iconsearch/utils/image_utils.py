"""
Image utility functions
"""

import re
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image

from iconsearch.core.exceptions import RasterizationError

try:  # pragma: no cover - needs the native cairo library
    import cairosvg  # type: ignore
except Exception:  # pragma: no cover
    cairosvg = None  # type: ignore[assignment]

_VIEW_BOX = re.compile(r'viewBox="[^"]*"')


def svg_to_png_bytes(svg_bytes: bytes, width: Optional[int] = None) -> bytes:
    """Rasterize SVG markup to PNG bytes, optionally at a given pixel width"""
    if cairosvg is None:
        raise RasterizationError("SVG rendering unavailable: install cairosvg and the cairo library")
    try:
        return cairosvg.svg2png(bytestring=svg_bytes, output_width=width)
    except Exception as e:
        raise RasterizationError(f"Could not render SVG: {e}") from e


def render_svg(svg_bytes: bytes, width: Optional[int] = None) -> Image.Image:
    """Rasterize SVG markup into an RGBA Pillow image"""
    if not svg_bytes:
        raise RasterizationError("Empty SVG payload cannot be rendered")
    data = svg_to_png_bytes(svg_bytes, width)
    with Image.open(BytesIO(data)) as img:
        return img.convert("RGBA")


def fit_contain(image: Image.Image, size: int) -> Image.Image:
    """Scale image to fit a size x size transparent square, centred"""
    if size <= 0:
        raise RasterizationError(f"PNG size must be a positive number of pixels, got {size}")

    scale = min(size / image.width, size / image.height)
    new_w = max(1, round(image.width * scale))
    new_h = max(1, round(image.height * scale))
    resized = image.convert("RGBA").resize((new_w, new_h), Image.Resampling.LANCZOS)

    canvas = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    canvas.paste(resized, ((size - new_w) // 2, (size - new_h) // 2), mask=resized)
    return canvas


def rasterize_svg(svg_bytes: bytes, size: int = 64) -> Image.Image:
    """Render SVG to a square RGBA image of size x size pixels"""
    return fit_contain(render_svg(svg_bytes, width=size), size)


def png_bytes(svg_path: Path, size: int = 64) -> bytes:
    """PNG encoding of an SVG file rendered at size x size"""
    image = rasterize_svg(Path(svg_path).read_bytes(), size)
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def export_png(svg_path: Path, destination: Path, size: int = 64) -> Path:
    """Write an SVG file out as a size x size PNG"""
    destination = Path(destination)
    destination.write_bytes(png_bytes(svg_path, size))
    return destination


def svg_view_box(svg_text: str) -> Optional[str]:
    """The viewBox attribute of an SVG document, e.g. 'viewBox="0 0 24 24"'"""
    match = _VIEW_BOX.search(svg_text)
    return match.group(0) if match else None
