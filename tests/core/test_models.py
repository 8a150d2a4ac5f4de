from __future__ import annotations

import pytest
from pydantic import ValidationError

from easel.core.color import RGBA
from easel.core.errors import (
    BackendNotImplemented,
    EaselError,
    NotSupported,
    UnsupportedFileKind,
)
from easel.core.models import (
    BackendKind,
    FileKind,
    Font,
    HAlign,
    Style,
    TextAlign,
    VAlign,
)


@pytest.mark.parametrize(
    "align,h",
    [
        (TextAlign.LEFT, HAlign.LEFT),
        (TextAlign.CENTER, HAlign.CENTER),
        (TextAlign.RIGHT, HAlign.RIGHT),
    ],
)
def test_text_align_anchors_on_vertical_middle(align: TextAlign, h: HAlign) -> None:
    assert align.anchors() == (h, VAlign.MIDDLE)


def test_style_defaults() -> None:
    s = Style()
    assert s.color == RGBA(0, 0, 0, 255)
    assert s.fill_color.a == 0
    assert s.line_width == 1.0
    assert s.font is None


def test_style_coerces_color_sequences() -> None:
    s = Style(color=[10, 20, 30], fill_color=(1, 2, 3, 4))
    assert s.color == RGBA(10, 20, 30, 255)
    assert s.fill_color == RGBA(1, 2, 3, 4)


def test_style_rejects_negative_width() -> None:
    with pytest.raises(ValidationError):
        Style(line_width=-1)


def test_style_is_frozen() -> None:
    s = Style()
    with pytest.raises(ValidationError):
        s.line_width = 3  # type: ignore[misc]


def test_font_validation() -> None:
    f = Font(family="sans", size=10, color=(255, 0, 0))
    assert f.color == RGBA(255, 0, 0, 255)
    with pytest.raises(ValidationError):
        Font(family="", size=10)
    with pytest.raises(ValidationError):
        Font(family="sans", size=0)


def test_error_messages_name_the_parties() -> None:
    e = UnsupportedFileKind(FileKind.PDF, BackendKind.RASTER)
    assert "pdf" in str(e) and "raster" in str(e)
    assert isinstance(e, ValueError) and isinstance(e, EaselError)
    assert "getTextExtent" in str(NotSupported("getTextExtent", BackendKind.RASTER))
    assert isinstance(BackendNotImplemented("x"), NotImplementedError)
