"""Pillow-backed raster context.

Renders into an in-memory RGBA image and encodes it as PNG on write. Pillow
has no transform stack, so geometry is mapped through the context transform
in Python before it reaches ImageDraw. Text and raster blits, which Pillow
cannot draw rotated, are rendered onto a block just large enough to hold
them, and that block is resampled onto the canvas with an affine warp.

Fills and strokes wider than one pixel are scan converted with the pixel
center rule: a pixel is painted when its center lies inside the shape. Right
and bottom edges are therefore exclusive, and a 50 wide rectangle covers
exactly 50 columns. Hairlines (width <= 1) use ImageDraw's line.

Each stroke and each fill is drawn on its own transparent layer and
alpha-composited onto the canvas, so translucent paints blend the way they
do in the vector and markup backends.

Example:
    from easel import BackendKind, FileKind, Style
    from easel import create_image, draw_line, write_file

    img = create_image("out.png", 320, 240, BackendKind.RASTER, FileKind.PNG)
    draw_line(img, (10, 10), (310, 10), Style(color=(255, 255, 0, 255)))
    write_file(img)
"""

from __future__ import annotations

import logging
from math import ceil, floor, hypot, sqrt
from pathlib import Path
from typing import Callable, Dict, Iterable, Sequence, Tuple

from PIL import Image, ImageDraw

from easel.core.geometry import Affine
from easel.core.models import BackendKind, FileKind, Font, PointLike, TextAlign
from easel.render.backend import BackendContext, rect_corners
from easel.render.fonts import FontLoader
from easel.settings.schema import RenderSettings

logger = logging.getLogger(__name__)

Pt = Tuple[float, float]
Box = Tuple[int, int, int, int]
# (row, first column, end column exclusive)
Span = Tuple[int, int, int]

_ANCHORS = {
    TextAlign.LEFT: "lm",
    TextAlign.CENTER: "mm",
    TextAlign.RIGHT: "rm",
}


def _bounds(pts: Sequence[Pt], pad: float) -> Box:
    xs = [p[0] for p in pts]
    ys = [p[1] for p in pts]
    return (
        floor(min(xs) - pad) - 1,
        floor(min(ys) - pad) - 1,
        ceil(max(xs) + pad) + 2,
        ceil(max(ys) + pad) + 2,
    )


def _segment_quad(p: Pt, q: Pt, half: float) -> list[Pt] | None:
    dx, dy = q[0] - p[0], q[1] - p[1]
    n = hypot(dx, dy)
    if n == 0.0:
        return None
    nx, ny = -dy / n * half, dx / n * half
    return [
        (p[0] + nx, p[1] + ny),
        (q[0] + nx, q[1] + ny),
        (q[0] - nx, q[1] - ny),
        (p[0] - nx, p[1] - ny),
    ]


def _rounded(pts: Sequence[Pt]) -> list[Tuple[int, int]]:
    return [(int(round(x)), int(round(y))) for x, y in pts]


def _polygon_spans(pts: Sequence[Pt]) -> list[Span]:
    """Pixels whose centers fall inside the polygon (even-odd rule)."""
    n = len(pts)
    if n < 3:
        return []
    edges = [
        (pts[i], pts[(i + 1) % n])
        for i in range(n)
        if pts[i][1] != pts[(i + 1) % n][1]
    ]
    ys = [p[1] for p in pts]
    spans: list[Span] = []
    for j in range(ceil(min(ys) - 0.5), ceil(max(ys) - 0.5)):
        yc = j + 0.5
        xs = sorted(
            xa + (yc - ya) * (xb - xa) / (yb - ya)
            for (xa, ya), (xb, yb) in edges
            if ya <= yc < yb or yb <= yc < ya
        )
        for a, b in zip(xs[::2], xs[1::2]):
            i0, i1 = ceil(a - 0.5), ceil(b - 0.5)
            if i1 > i0:
                spans.append((j, i0, i1))
    return spans


def _disc_rows(cx: float, cy: float, r: float) -> Dict[int, Tuple[int, int]]:
    rows: Dict[int, Tuple[int, int]] = {}
    if r <= 0:
        return rows
    for j in range(ceil(cy - r - 0.5), ceil(cy + r - 0.5)):
        dy = j + 0.5 - cy
        d = r * r - dy * dy
        if d <= 0:
            continue
        dx = sqrt(d)
        i0, i1 = ceil(cx - dx - 0.5), ceil(cx + dx - 0.5)
        if i1 > i0:
            rows[j] = (i0, i1)
    return rows


def _disc_spans(cx: float, cy: float, r: float) -> list[Span]:
    return [(j, a, b) for j, (a, b) in _disc_rows(cx, cy, r).items()]


def _ring_spans(cx: float, cy: float, inner: float, outer: float) -> list[Span]:
    hole = _disc_rows(cx, cy, inner)
    spans: list[Span] = []
    for j, (a, b) in _disc_rows(cx, cy, outer).items():
        h = hole.get(j)
        if h is None:
            spans.append((j, a, b))
            continue
        if h[0] > a:
            spans.append((j, a, h[0]))
        if b > h[1]:
            spans.append((j, h[1], b))
    return spans


class PillowContext(BackendContext):
    kind = BackendKind.RASTER
    file_kinds = frozenset({FileKind.PNG})

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
        self._img: Image.Image = Image.new(
            "RGBA", (self.width, self.height), tuple(self.settings.background)
        )

    @property
    def image(self) -> Image.Image:
        """The live canvas. Callers must not keep it past :meth:`close`."""
        return self._img

    # --- compositing helpers ---------------------------------------------
    def _clip(self, box: Box) -> Box | None:
        x0, y0, x1, y1 = box
        x0, y0 = max(0, x0), max(0, y0)
        x1, y1 = min(self.width, x1), min(self.height, y1)
        if x1 <= x0 or y1 <= y0:
            return None
        return (x0, y0, x1, y1)

    def _layer(
        self, box: Box, render: Callable[[ImageDraw.ImageDraw, Callable], None]
    ) -> None:
        """Draw on a transparent layer covering *box* and composite it."""
        clipped = self._clip(box)
        if clipped is None:
            return
        x0, y0, x1, y1 = clipped
        layer = Image.new("RGBA", (x1 - x0, y1 - y0), (0, 0, 0, 0))

        def shift(pts: Sequence[Pt]) -> list[Tuple[int, int]]:
            return _rounded([(x - x0, y - y0) for x, y in pts])

        render(ImageDraw.Draw(layer), shift)
        self._img.alpha_composite(layer, dest=(x0, y0))

    def _paint_spans(self, spans: Iterable[Span], color: Tuple[int, ...]) -> None:
        """Composite one layer holding every pixel in *spans*."""
        spans = list(spans)
        if not spans:
            return
        rows = [s[0] for s in spans]
        box = (
            min(s[1] for s in spans),
            min(rows),
            max(s[2] for s in spans),
            max(rows) + 1,
        )
        clipped = self._clip(box)
        if clipped is None:
            return
        x0, y0, x1, y1 = clipped
        layer = Image.new("RGBA", (x1 - x0, y1 - y0), (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        for j, a, b in spans:
            a, b = max(a, x0), min(b, x1)
            if y0 <= j < y1 and b > a:
                draw.rectangle((a - x0, j - y0, b - 1 - x0, j - y0), fill=color)
        self._img.alpha_composite(layer, dest=(x0, y0))

    def _paste(self, layer: Image.Image, x: int, y: int) -> None:
        w, h = layer.size
        clipped = self._clip((x, y, x + w, y + h))
        if clipped is None:
            return
        x0, y0, x1, y1 = clipped
        part = layer.crop((x0 - x, y0 - y, x1 - x, y1 - y))
        self._img.alpha_composite(part, dest=(x0, y0))

    def _place(self, block: Image.Image, x: float, y: float) -> None:
        """Composite *block* with its top-left corner at ``(x, y)``.

        The block is resampled through the current transform; its output
        box is the transformed outline, so content that starts off canvas
        still lands where the rotation puts it.
        """
        w, h = block.size
        if w == 0 or h == 0:
            return
        m = self.transform @ Affine.translation(x, y)
        if m.is_translation:
            self._paste(block, int(round(m.e)), int(round(m.f)))
            return
        corners = m.apply_all([(0, 0), (w, 0), (w, h), (0, h)])
        clipped = self._clip(_bounds(corners, 0.0))
        if clipped is None:
            return
        x0, y0, x1, y1 = clipped
        # output pixel -> canvas -> block
        src = m.inverse() @ Affine.translation(x0, y0)
        warped = block.transform(
            (x1 - x0, y1 - y0),
            Image.Transform.AFFINE,
            (src.a, src.c, src.e, src.b, src.d, src.f),
            resample=Image.Resampling.NEAREST,
        )
        self._img.alpha_composite(warped, dest=(x0, y0))

    # --- stroking ---------------------------------------------------------
    def _stroke(self, pts: Sequence[Pt], closed: bool) -> None:
        paint = self.paint
        if not paint.strokes or len(pts) < 2:
            return
        color = tuple(paint.stroke.color)
        width = paint.line_width
        ring = list(pts) + [pts[0]] if closed else list(pts)

        if width <= 1.0:

            def hairline(draw: ImageDraw.ImageDraw, shift: Callable) -> None:
                draw.line(shift(ring), fill=color, width=1)

            self._layer(_bounds(pts, 0.0), hairline)
            return

        half = width / 2.0
        spans: list[Span] = []
        for p, q in zip(ring, ring[1:]):
            quad = _segment_quad(p, q, half)
            if quad is not None:
                spans.extend(_polygon_spans(quad))
        # Round joins at interior vertices (every vertex when closed)
        joints = ring[:-1] if closed else ring[1:-1]
        for jx, jy in joints:
            spans.extend(_disc_spans(jx, jy, half))
        self._paint_spans(spans, color)

    def _fill(self, pts: Sequence[Pt]) -> None:
        if not self.paint.fills:
            return
        self._paint_spans(_polygon_spans(pts), tuple(self.paint.fill.color))

    # --- primitives -------------------------------------------------------
    def line(self, start: PointLike, stop: PointLike) -> None:
        self._stroke(self.transform.apply_all([start, stop]), closed=False)

    def path(self, points: Sequence[PointLike]) -> None:
        pts = self.transform.apply_all(list(points))
        self._stroke(pts, closed=False)
        self._fill(pts)

    def circle(self, center: PointLike, radius: float) -> None:
        cx, cy = self.transform.apply(center)
        r = float(radius)
        paint = self.paint
        if paint.strokes:
            # hairlines still get a one pixel ring
            half = max(paint.line_width, 1.0) / 2.0
            spans = _ring_spans(cx, cy, r - half, r + half)
            self._paint_spans(spans, tuple(paint.stroke.color))
        if paint.fills:
            self._paint_spans(_disc_spans(cx, cy, r), tuple(paint.fill.color))

    def rect(self, left: float, top: float, width: float, height: float) -> None:
        pts = self.transform.apply_all(rect_corners(left, top, width, height))
        self._stroke(pts, closed=True)
        self._fill(pts)

    def text(self, s: str, font: Font, at: PointLike, align: TextAlign) -> None:
        face = self.fonts.load(font.family, font.size)
        anchor = _ANCHORS[align]
        bl, bt, br, bb = face.getbbox(s, anchor=anchor)
        left, top = floor(bl), floor(bt)
        right, bottom = ceil(br), ceil(bb)
        if right <= left or bottom <= top:
            return
        block = Image.new("RGBA", (right - left, bottom - top), (0, 0, 0, 0))
        ImageDraw.Draw(block).text(
            (-left, -top), s, fill=tuple(font.color), font=face, anchor=anchor
        )
        self._place(block, float(at[0]) + left, float(at[1]) + top)

    def blit(self, raster: Image.Image, x: float, y: float) -> None:
        self._place(raster.convert("RGBA"), x, y)

    # --- lifecycle --------------------------------------------------------
    def write(self, path: Path) -> None:
        self._img.save(path, format="PNG")
        logger.debug("wrote %dx%d PNG to %s", self.width, self.height, path)
