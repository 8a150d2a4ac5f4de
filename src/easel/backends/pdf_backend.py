"""ReportLab-backed vector context producing a single-page PDF.

PDF user space has its origin at the bottom-left with y up. The page is
flipped once at creation (``translate(0, h)``, ``scale(1, -1)``) so all
primitives use the same top-left, y-down canvas space as the other
backends. Each draw call runs inside ``saveState``/``restoreState`` with the
context transform concatenated on top, which restores the flipped base state
afterwards.

Text and images are drawn in a locally unflipped frame so glyphs and pixels
are not mirrored.
"""

from __future__ import annotations

import io
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Sequence

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas as rl_canvas

from easel.core.color import RGBA
from easel.core.errors import FontResolutionFailure
from easel.core.models import (
    BackendKind,
    FileKind,
    Font,
    HAlign,
    PointLike,
    TextAlign,
    TextExtent,
)
from easel.render.backend import BackendContext
from easel.render.fonts import DEFAULT_FAMILY, FontLoader
from easel.settings.schema import RenderSettings

logger = logging.getLogger(__name__)

# Face used when the caller asks for the backend's default font
DEFAULT_PDF_FONT = "Helvetica"


def _unit(c: RGBA) -> tuple[float, float, float, float]:
    return c.r / 255.0, c.g / 255.0, c.b / 255.0, c.a / 255.0


class ReportLabContext(BackendContext):
    kind = BackendKind.VECTOR
    file_kinds = frozenset({FileKind.PDF})

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
        self._buf = io.BytesIO()
        self._c = rl_canvas.Canvas(self._buf, pagesize=(self.width, self.height))
        self._c.translate(0, self.height)
        self._c.scale(1, -1)
        self._registered: dict[str, str] = {}

    @contextmanager
    def _scoped(self) -> Iterator[rl_canvas.Canvas]:
        c = self._c
        c.saveState()
        try:
            t = self.transform
            if not t.is_identity:
                c.transform(*t)
            self._apply_paint()
            yield c
        finally:
            c.restoreState()

    def _apply_paint(self) -> None:
        fr, fg, fb, fa = _unit(self.paint.fill.color)
        sr, sg, sb, sa = _unit(self.paint.stroke.color)
        self._c.setFillColorRGB(fr, fg, fb, alpha=fa)
        self._c.setStrokeColorRGB(sr, sg, sb, alpha=sa)
        self._c.setLineWidth(self.paint.line_width)

    def _font_name(self, font: Font) -> str:
        family = font.family
        if family.lower() == DEFAULT_FAMILY:
            return DEFAULT_PDF_FONT
        if family in pdfmetrics.standardFonts:
            return family
        name = self._registered.get(family)
        if name is not None:
            return name
        path = self.fonts.resolve_path(family)
        if path is None:  # pragma: no cover - only the default has no file
            return DEFAULT_PDF_FONT
        name = f"easel-{path.stem}"
        if name not in pdfmetrics.getRegisteredFontNames():
            try:
                pdfmetrics.registerFont(TTFont(name, str(path)))
            except TTFError as e:
                raise FontResolutionFailure(family, str(e)) from e
            logger.debug("registered TrueType font %s from %s", name, path)
        self._registered[family] = name
        return name

    # --- primitives -------------------------------------------------------
    def line(self, start: PointLike, stop: PointLike) -> None:
        if not self.paint.strokes:
            return
        with self._scoped() as c:
            c.line(float(start[0]), float(start[1]), float(stop[0]), float(stop[1]))

    def path(self, points: Sequence[PointLike]) -> None:
        with self._scoped() as c:
            p = c.beginPath()
            p.moveTo(float(points[0][0]), float(points[0][1]))
            for pt in points[1:]:
                p.lineTo(float(pt[0]), float(pt[1]))
            if self.paint.strokes:
                c.drawPath(p, stroke=1, fill=0)
            if self.paint.fills:
                c.drawPath(p, stroke=0, fill=1)

    def circle(self, center: PointLike, radius: float) -> None:
        cx, cy = float(center[0]), float(center[1])
        with self._scoped() as c:
            if self.paint.strokes:
                c.circle(cx, cy, radius, stroke=1, fill=0)
            if self.paint.fills:
                c.circle(cx, cy, radius, stroke=0, fill=1)

    def rect(self, left: float, top: float, width: float, height: float) -> None:
        with self._scoped() as c:
            if self.paint.strokes:
                c.rect(left, top, width, height, stroke=1, fill=0)
            if self.paint.fills:
                c.rect(left, top, width, height, stroke=0, fill=1)

    def text(self, s: str, font: Font, at: PointLike, align: TextAlign) -> None:
        name = self._font_name(font)
        ascent, descent = pdfmetrics.getAscentDescent(name, font.size)
        # Baseline that puts the vertical middle of the glyph box on `at`
        baseline = -(ascent + descent) / 2.0
        h_align, _ = align.anchors()
        with self._scoped() as c:
            r, g, b, a = _unit(font.color)
            c.setFillColorRGB(r, g, b, alpha=a)
            c.translate(float(at[0]), float(at[1]))
            c.scale(1, -1)
            c.setFont(name, font.size)
            if h_align is HAlign.CENTER:
                c.drawCentredString(0, baseline, s)
            elif h_align is HAlign.RIGHT:
                c.drawRightString(0, baseline, s)
            else:
                c.drawString(0, baseline, s)

    def blit(self, raster: Image.Image, x: float, y: float) -> None:
        w, h = raster.size
        if w == 0 or h == 0:
            return
        with self._scoped() as c:
            c.translate(x, y + h)
            c.scale(1, -1)
            img = ImageReader(raster.convert("RGBA"))
            c.drawImage(img, 0, 0, width=w, height=h, mask="auto")

    def text_extent(self, s: str, font: Font) -> TextExtent:
        name = self._font_name(font)
        width = pdfmetrics.stringWidth(s, name, font.size)
        ascent, descent = pdfmetrics.getAscentDescent(name, font.size)
        return TextExtent(width=float(width), height=float(ascent - descent))

    # --- lifecycle --------------------------------------------------------
    def write(self, path: Path) -> None:
        self._c.showPage()
        self._c.save()
        path.write_bytes(self._buf.getvalue())
        logger.debug("wrote %dx%d PDF to %s", self.width, self.height, path)

    def close(self) -> None:
        super().close()
        self._buf.close()
