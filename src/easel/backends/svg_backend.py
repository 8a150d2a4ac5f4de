"""drawsvg-backed markup context.

Emits one SVG element per primitive. SVG already uses a top-left, y-down
coordinate system, so geometry is written as given and the context transform
becomes the element's ``transform="matrix(...)"`` attribute.
``paint-order="stroke"`` keeps the stroke-then-fill order of the other
backends.

Fonts are referenced by family name only; the viewer resolves them. For the
same reason text extents cannot be measured here.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any, Dict, Sequence

import drawsvg as draw
from PIL import Image

from easel.core.color import RGBA
from easel.core.geometry import Affine
from easel.core.models import BackendKind, FileKind, Font, HAlign, PointLike, TextAlign
from easel.render.backend import BackendContext
from easel.render.fonts import DEFAULT_FAMILY, FontLoader
from easel.settings.schema import RenderSettings

logger = logging.getLogger(__name__)

_TEXT_ANCHOR = {HAlign.LEFT: "start", HAlign.CENTER: "middle", HAlign.RIGHT: "end"}


def _css(c: RGBA) -> str:
    return f"rgb({c.r},{c.g},{c.b})"


def _opacity(c: RGBA) -> float:
    return round(c.a / 255.0, 4)


def _matrix(t: Affine) -> str:
    return "matrix({})".format(" ".join(f"{round(v, 6):g}" for v in t))


class SvgContext(BackendContext):
    kind = BackendKind.MARKUP
    file_kinds = frozenset({FileKind.SVG})

    def __init__(
        self,
        width: int,
        height: int,
        file_kind: FileKind,
        *,
        settings: RenderSettings,
        fonts: FontLoader,
    ) -> None:
        super().__init__(width, height, file_kind, settings=settings, fonts=fonts)
        self._d = draw.Drawing(self.width, self.height)

    def _attrs(self, *, fill: bool = True) -> Dict[str, Any]:
        p = self.paint
        attrs: Dict[str, Any] = {}
        if fill and p.fills:
            attrs["fill"] = _css(p.fill.color)
            if p.fill.color.a < 255:
                attrs["fill_opacity"] = _opacity(p.fill.color)
        else:
            attrs["fill"] = "none"
        if p.strokes:
            attrs["stroke"] = _css(p.stroke.color)
            attrs["stroke_width"] = p.line_width
            if p.stroke.color.a < 255:
                attrs["stroke_opacity"] = _opacity(p.stroke.color)
            attrs["paint_order"] = "stroke"
        else:
            attrs["stroke"] = "none"
        if not self.transform.is_identity:
            attrs["transform"] = _matrix(self.transform)
        return attrs

    def as_svg(self) -> str:
        """Return the document markup as it would be written."""
        return self._d.as_svg()

    # --- primitives -------------------------------------------------------
    def line(self, start: PointLike, stop: PointLike) -> None:
        if not self.paint.strokes:
            return
        self._d.append(
            draw.Line(
                float(start[0]),
                float(start[1]),
                float(stop[0]),
                float(stop[1]),
                **self._attrs(fill=False),
            )
        )

    def path(self, points: Sequence[PointLike]) -> None:
        coords: list[float] = []
        for pt in points:
            coords.extend((float(pt[0]), float(pt[1])))
        self._d.append(draw.Lines(*coords, close=False, **self._attrs()))

    def circle(self, center: PointLike, radius: float) -> None:
        self._d.append(
            draw.Circle(
                float(center[0]), float(center[1]), float(radius), **self._attrs()
            )
        )

    def rect(self, left: float, top: float, width: float, height: float) -> None:
        # SVG rejects negative extents; normalize to the same covered area
        x = min(left, left + width)
        y = min(top, top + height)
        self._d.append(draw.Rectangle(x, y, abs(width), abs(height), **self._attrs()))

    def text(self, s: str, font: Font, at: PointLike, align: TextAlign) -> None:
        h_align, _ = align.anchors()
        attrs: Dict[str, Any] = {
            "fill": _css(font.color),
            "text_anchor": _TEXT_ANCHOR[h_align],
            "dominant_baseline": "middle",
        }
        if font.family.lower() != DEFAULT_FAMILY:
            attrs["font_family"] = font.family
        if font.color.a < 255:
            attrs["fill_opacity"] = _opacity(font.color)
        if not self.transform.is_identity:
            attrs["transform"] = _matrix(self.transform)
        self._d.append(
            draw.Text(s, font.size, float(at[0]), float(at[1]), **attrs)
        )

    def blit(self, raster: Image.Image, x: float, y: float) -> None:
        w, h = raster.size
        if w == 0 or h == 0:
            return
        buf = io.BytesIO()
        raster.save(buf, format="PNG")
        attrs: Dict[str, Any] = {"image_rendering": "pixelated"}
        if not self.transform.is_identity:
            attrs["transform"] = _matrix(self.transform)
        self._d.append(
            draw.Image(x, y, w, h, data=buf.getvalue(), mime_type="image/png", **attrs)
        )

    # --- lifecycle --------------------------------------------------------
    def write(self, path: Path) -> None:
        self._d.save_svg(str(path))
        logger.debug("wrote %dx%d SVG to %s", self.width, self.height, path)
