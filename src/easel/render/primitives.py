"""Primitive drawing operations.

Each operation is one atomic draw call against an Image: it opens a
transform scope with the call's optional rotations, installs the paint
derived from the call's Style, draws, and leaves the context with the
identity transform on return (also when the backend raises).

Coordinates are absolute canvas units with the origin at the top-left and y
increasing downward. ``bottom`` arguments name the edge the layout engine
anchors a shape on, which is the smaller y for positive heights.

Rotations come in two flavors:

- ``rotate_in_view`` / ``rotate_angle``: ``(angle_deg, pivot)`` around an
  arbitrary canvas point
- ``rotate``: a plain angle around the shape's own anchor, applied after
  ``rotate_in_view``
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional, Sequence

from easel.core.errors import EmptyGeometry
from easel.core.models import (
    Font,
    PointLike,
    RotationSpec,
    Style,
    TextAlign,
    TextExtent,
)

from .compositor import composite_grid
from .style import apply_style, text_paint
from .transform import transform_scope

if TYPE_CHECKING:  # pragma: no cover
    from easel.image import Image


def draw_line(
    image: "Image",
    start: PointLike,
    stop: PointLike,
    style: Style,
    rotate_angle: Optional[RotationSpec] = None,
) -> None:
    """Stroke a single segment from *start* to *stop*."""
    ctx = image.context
    with transform_scope(ctx, rotate_in_view=rotate_angle):
        apply_style(ctx, style)
        ctx.line(start, stop)


def draw_polyline(
    image: "Image",
    points: Sequence[PointLike],
    style: Style,
    rotate_angle: Optional[RotationSpec] = None,
) -> None:
    """Stroke the path through *points* in order, then fill it.

    The fill is applied even when the path is open (first point != last
    point); the filled region is that of the implicitly closed polygon. Use a
    transparent ``fill_color`` for an outline-only polyline.

    Raises:
        EmptyGeometry: *points* is empty.
    """
    pts = list(points)
    if not pts:
        raise EmptyGeometry("draw_polyline requires at least one point")
    ctx = image.context
    with transform_scope(ctx, rotate_in_view=rotate_angle):
        apply_style(ctx, style)
        ctx.path(pts)


def draw_circle(
    image: "Image",
    center: PointLike,
    radius: float,
    style: Style,
    rotate_angle: Optional[RotationSpec] = None,
) -> None:
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")
    ctx = image.context
    with transform_scope(ctx, rotate_in_view=rotate_angle):
        apply_style(ctx, style)
        ctx.circle(center, radius)


def draw_rectangle(
    image: "Image",
    left: float,
    bottom: float,
    width: float,
    height: float,
    style: Style,
    rotate: Optional[float] = None,
    rotate_in_view: Optional[RotationSpec] = None,
) -> None:
    """Stroke, then fill, an axis-aligned rectangle anchored at (left, bottom).

    *rotate_in_view* is applied first; *rotate* then turns the rectangle
    around its own ``(left, bottom)`` corner.
    """
    ctx = image.context
    with transform_scope(ctx, rotate, rotate_in_view, origin=(left, bottom)):
        apply_style(ctx, style)
        ctx.rect(left, bottom, width, height)


def draw_text(
    image: "Image",
    text: str,
    font: Font,
    at: PointLike,
    align: TextAlign = TextAlign.LEFT,
    rotate: Optional[float] = None,
    rotate_in_view: Optional[RotationSpec] = None,
) -> None:
    """Render *text* anchored at *at*.

    The horizontal anchor follows *align*; the vertical anchor is always the
    middle of the text. *rotate* turns the text around *at*.

    Raises:
        FontResolutionFailure: the backend cannot resolve ``font.family``.
    """
    ctx = image.context
    with transform_scope(ctx, rotate, rotate_in_view, origin=at):
        ctx.set_paint(text_paint(font.color))
        ctx.text(text, font, at, TextAlign(align))


def get_text_extent(image: "Image", text: str, font: Font) -> TextExtent:
    """Measure *text* in *font* on the image's backend.

    Raises:
        NotSupported: the backend cannot measure text (raster, markup).
    """
    return image.context.text_extent(text, font)


def draw_raster(
    image: "Image",
    left: float,
    bottom: float,
    width: float,
    height: float,
    num_x: int,
    num_y: int,
    colors: Callable[[], Sequence[int]],
    rotate: Optional[float] = None,
    rotate_in_view: Optional[RotationSpec] = None,
) -> None:
    """Draw a ``num_x`` by ``num_y`` grid of packed colors.

    *colors* is called exactly once and must return at least
    ``num_x * num_y`` packed ``AARRGGBB`` values in row-major order. The grid
    is stretched over ``|width|`` by ``|height|`` pixels with
    nearest-neighbor tiling; a negative extent lays tiles out in the reverse
    direction along that axis. *rotate* turns the block around
    ``(left, bottom)``.
    """
    ctx = image.context
    raster = composite_grid(width, height, num_x, num_y, colors())
    x = min(left, left + width)
    y = min(bottom, bottom + height)
    with transform_scope(ctx, rotate, rotate_in_view, origin=(left, bottom)):
        ctx.blit(raster, x, y)


__all__ = [
    "draw_line",
    "draw_polyline",
    "draw_circle",
    "draw_rectangle",
    "draw_text",
    "get_text_extent",
    "draw_raster",
]
