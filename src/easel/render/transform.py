"""Per-call transform control.

Rotations are applied to a context immediately before a single draw call and
undone right after it, so no draw call ever observes a transform left behind
by another. :func:`transform_scope` is the guard every primitive uses.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from easel.core.models import PointLike, RotationSpec

from .backend import BackendContext


def rotate(ctx: BackendContext, angle_deg: float, pivot: PointLike) -> None:
    """Rotate the active transform of *ctx* by *angle_deg* around *pivot*."""
    ctx.rotate(float(angle_deg), pivot)


def save_and_reset(ctx: BackendContext) -> None:
    """Remember the current transform and reset *ctx* to identity."""
    ctx.save_and_reset()


@contextmanager
def transform_scope(
    ctx: BackendContext,
    rotate_angle: Optional[float] = None,
    rotate_in_view: Optional[RotationSpec] = None,
    origin: Optional[PointLike] = None,
) -> Iterator[BackendContext]:
    """Apply optional rotations for the duration of one draw call.

    *rotate_in_view* (angle, pivot) is applied first; then *rotate_angle*
    around *origin*. The transform is reset to identity on every exit path.
    """
    try:
        if rotate_in_view is not None:
            angle, pivot = rotate_in_view
            rotate(ctx, angle, pivot)
        if rotate_angle is not None:
            if origin is None:
                raise ValueError("rotate_angle requires an origin to rotate around")
            rotate(ctx, rotate_angle, origin)
        yield ctx
    finally:
        save_and_reset(ctx)
