from __future__ import annotations

import re
from pathlib import Path

import pytest

from easel import (
    BackendKind,
    FileKind,
    Font,
    FontResolutionFailure,
    Style,
    TextAlign,
    create_image,
    draw_circle,
    draw_line,
    draw_polyline,
    draw_raster,
    draw_rectangle,
    draw_text,
    get_text_extent,
    write_file,
)
from easel.core.color import pack_argb
from easel.image import Image


def pdf(tmp_path: Path, w: int = 200, h: int = 100) -> Image:
    return create_image(tmp_path / "doc.pdf", w, h, BackendKind.VECTOR, FileKind.PDF)


def test_writes_single_page_pdf(tmp_path: Path) -> None:
    img = pdf(tmp_path)
    style = Style(color=(0, 0, 0), fill_color=(255, 0, 0, 128), line_width=2)
    draw_rectangle(img, 10, 10, 50, 30, style)
    draw_rectangle(img, 10, 10, 50, 30, style, rotate=30)
    draw_line(img, (0, 0), (200, 100), style, rotate_angle=(45, (100, 50)))
    draw_polyline(img, [(10, 90), (40, 60), (70, 90)], style)
    draw_circle(img, (150, 50), 20, style)
    draw_text(img, "Hi", Font(family="default", size=12), (100, 50))
    draw_raster(
        img, 120, 10, 40, 20, 2, 2, lambda: [pack_argb(255, 0, 0, 255)] * 4
    )
    assert not (tmp_path / "doc.pdf").exists()

    out = write_file(img)
    data = out.read_bytes()
    assert data.startswith(b"%PDF")
    assert re.search(rb"/MediaBox\s*\[\s*0 0 200 100\s*\]", data)
    assert img.closed


def test_transform_is_reset_between_calls(tmp_path: Path) -> None:
    img = pdf(tmp_path)
    draw_rectangle(img, 10, 10, 20, 20, Style(), rotate=45)
    assert img.context.transform.is_identity
    assert not img.context.last_transform.is_identity


def test_text_extent_with_default_font(tmp_path: Path) -> None:
    img = pdf(tmp_path)
    font = Font(family="default", size=20)
    ext = get_text_extent(img, "Hello", font)
    assert ext.width > 0
    assert ext.height > 0
    assert get_text_extent(img, "WWWW", font).width > get_text_extent(
        img, "iiii", font
    ).width
    assert get_text_extent(img, "", font).width == 0


def test_standard_font_names_pass_through(tmp_path: Path) -> None:
    img = pdf(tmp_path)
    small = get_text_extent(img, "abc", Font(family="Courier", size=10))
    big = get_text_extent(img, "abc", Font(family="Courier", size=20))
    assert big.width == pytest.approx(2 * small.width)
    draw_text(
        img, "abc", Font(family="Times-Roman", size=10), (5, 5), TextAlign.RIGHT
    )


def test_unknown_family_raises(tmp_path: Path) -> None:
    img = pdf(tmp_path)
    with pytest.raises(FontResolutionFailure):
        draw_text(img, "x", Font(family="no-such-family-ZZ9"), (10, 10))
    assert img.context.transform.is_identity
