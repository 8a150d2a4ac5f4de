from __future__ import annotations

from pathlib import Path

import pytest

from easel import (
    BackendKind,
    FileKind,
    Font,
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
from easel.backends.null_backend import NullContext
from easel.core.color import RGBA, pack_argb
from easel.core.geometry import Affine
from easel.image import Image


def null(tmp_path: Path, file_kind: FileKind = FileKind.PNG) -> Image:
    return create_image(tmp_path / "x.png", 64, 48, BackendKind.NULL, file_kind)


def ops(img: Image) -> list:
    ctx = img.context
    assert isinstance(ctx, NullContext)
    return ctx.ops


@pytest.mark.parametrize("fk", list(FileKind))
def test_accepts_every_file_kind(tmp_path: Path, fk: FileKind) -> None:
    assert null(tmp_path, fk).file_kind is fk


def test_records_primitives_in_order(tmp_path: Path) -> None:
    img = null(tmp_path)
    s = Style(color=(1, 2, 3), line_width=2)
    draw_line(img, (0, 0), (10, 10), s)
    draw_polyline(img, [(0, 0), (5, 5), (9, 0)], s)
    draw_circle(img, (5, 5), 3, s)
    draw_rectangle(img, 1, 2, 3, 4, s)
    draw_text(img, "t", Font(family="default"), (4, 4), TextAlign.CENTER)
    assert [op.name for op in ops(img)] == ["line", "path", "circle", "rect", "text"]
    line = ops(img)[0]
    assert line.args == ((0, 0), (10, 10))
    assert line.paint.stroke.color == RGBA(1, 2, 3, 255)
    assert line.paint.line_width == 2
    assert ops(img)[3].args == (1, 2, 3, 4)
    assert ops(img)[4].args[3] is TextAlign.CENTER


def test_text_uses_font_color_not_previous_style(tmp_path: Path) -> None:
    img = null(tmp_path)
    draw_rectangle(img, 0, 0, 5, 5, Style(fill_color=(0, 255, 0)))
    draw_text(img, "t", Font(family="default", color=(9, 8, 7)), (1, 1))
    paint = ops(img)[1].paint
    assert paint.fill.color == RGBA(9, 8, 7, 255)
    assert not paint.strokes


def test_each_call_sees_only_its_own_rotation(tmp_path: Path) -> None:
    img = null(tmp_path)
    draw_line(img, (0, 0), (1, 0), Style(), rotate_angle=(90, (0, 0)))
    draw_line(img, (0, 0), (1, 0), Style())
    draw_rectangle(img, 5, 5, 2, 2, Style(), rotate=30)
    first, second, third = ops(img)
    assert all(
        abs(a - b) < 1e-12 for a, b in zip(first.transform, Affine.rotation(90))
    )
    assert second.transform.is_identity
    assert all(
        abs(a - b) < 1e-12
        for a, b in zip(third.transform, Affine.rotation_about(30, (5, 5)))
    )
    assert img.context.transform.is_identity


def test_raster_provider_called_once(tmp_path: Path) -> None:
    img = null(tmp_path)
    calls = []

    def provider() -> list[int]:
        calls.append(1)
        return [pack_argb(255, 255, 0, 0), pack_argb(255, 0, 0, 255)]

    draw_raster(img, 10, 5, 8, 4, 2, 1, provider)
    assert len(calls) == 1
    op = ops(img)[0]
    assert op.name == "blit"
    raster, x, y = op.args
    assert raster.size == (8, 4)
    assert (x, y) == (10, 5)


def test_raster_negative_extent_blits_at_min_edge(tmp_path: Path) -> None:
    img = null(tmp_path)
    draw_raster(img, 10, 5, -8, -4, 1, 1, lambda: [0xFF000000])
    _, x, y = ops(img)[0].args
    assert (x, y) == (2, 1)


def test_text_extent_estimate(tmp_path: Path) -> None:
    img = null(tmp_path)
    ext = get_text_extent(img, "abcd", Font(family="default", size=10))
    assert ext.width == pytest.approx(0.6 * 10 * 4)
    assert ext.height == 10


def test_write_creates_nothing(tmp_path: Path) -> None:
    img = null(tmp_path)
    draw_line(img, (0, 0), (1, 1), Style())
    out = write_file(img)
    assert not out.exists()
    assert img.closed
