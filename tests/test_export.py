# tests/test_export.py

from io import BytesIO

import pytest
from PIL import Image

from conftest import SVG
from iconsearch.core.exceptions import RasterizationError
from iconsearch.utils import image_utils, preview
from iconsearch.utils.file_utils import copy_svg, prepare_destination, sanitize_filename


def _png(image):
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def svg_file(tmp_path):
    path = tmp_path / "7.svg"
    path.write_text(SVG)
    return path


def test_fit_contain_centres_on_transparent_square():
    wide = Image.new("RGBA", (20, 10), (255, 0, 0, 255))

    fitted = image_utils.fit_contain(wide, 64)

    assert fitted.size == (64, 64)
    assert fitted.getpixel((32, 32))[3] == 255
    assert fitted.getpixel((0, 0))[3] == 0
    assert fitted.getpixel((32, 2))[3] == 0


def test_fit_contain_rejects_bad_size():
    with pytest.raises(RasterizationError):
        image_utils.fit_contain(Image.new("RGBA", (4, 4)), 0)


def test_export_png_with_stub_renderer(monkeypatch, svg_file, tmp_path):
    rendered = Image.new("RGBA", (24, 24), (0, 0, 0, 255))
    monkeypatch.setattr(image_utils, "svg_to_png_bytes", lambda data, width=None: _png(rendered))

    out = image_utils.export_png(svg_file, tmp_path / "home.png", size=48)

    with Image.open(out) as img:
        assert img.size == (48, 48)
        assert img.mode == "RGBA"


def test_empty_svg_is_rejected():
    with pytest.raises(RasterizationError):
        image_utils.render_svg(b"")


@pytest.mark.skipif(image_utils.cairosvg is None, reason="cairosvg not available")
def test_rasterize_real_svg():
    image = image_utils.rasterize_svg(SVG.encode(), size=32)

    assert image.size == (32, 32)
    assert image.getpixel((16, 16))[3] == 255
    assert image.getpixel((0, 0))[3] == 0


@pytest.mark.skipif(image_utils.cairosvg is None, reason="cairosvg not available")
def test_invalid_svg_raises_rasterization_error():
    with pytest.raises(RasterizationError):
        image_utils.rasterize_svg(b"<not really svg", size=16)


def test_svg_view_box():
    assert image_utils.svg_view_box(SVG) == 'viewBox="0 0 24 24"'
    assert image_utils.svg_view_box("<svg></svg>") is None


def test_sanitize_filename():
    assert sanitize_filename("../../etc/passwd") == "_.._etc_passwd"
    assert sanitize_filename("arrow-right.svg") == "arrow-right.svg"
    assert sanitize_filename("we<ird>:name?.png") == "weirdname.png"
    assert sanitize_filename("...") == "icon"


def test_copy_svg_creates_destination(svg_file, tmp_path):
    dest_dir, created = prepare_destination(tmp_path / "out" / "icons")
    assert created
    assert prepare_destination(dest_dir) == (dest_dir, False)

    target = copy_svg(svg_file, dest_dir, "home.svg")

    assert target == dest_dir / "home.svg"
    assert target.read_text() == SVG


def test_ascii_preview(monkeypatch, svg_file):
    image = Image.new("RGBA", (4, 2), (0, 0, 0, 0))
    for y in range(2):
        image.putpixel((0, y), (0, 0, 0, 255))
        image.putpixel((1, y), (0, 0, 0, 255))
        image.putpixel((2, y), (150, 150, 150, 255))
    monkeypatch.setattr(preview, "render_svg", lambda data, width=None: image)

    art = preview.svg_to_ascii(svg_file, width=4, height=2)

    assert art.split("\n") == ["██▒ ", "██▒ "]


def test_braille_preview(monkeypatch, svg_file):
    image = Image.new("RGBA", (2, 4), (0, 0, 0, 0))
    for y in range(4):
        image.putpixel((0, y), (0, 0, 0, 255))
    monkeypatch.setattr(preview, "render_svg", lambda data, width=None: image)

    art = preview.svg_to_braille(svg_file, width=1, height=1)

    assert art == chr(0x2800 + 0x01 + 0x02 + 0x04 + 0x40)


def test_preview_reports_missing_file(tmp_path):
    art = preview.svg_to_ascii(tmp_path / "missing.svg")
    assert art.startswith("[Preview unavailable:")
