"""Style mapping from the abstract Style record to backend paint state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from easel.core.color import RGBA
from easel.core.models import Style

if TYPE_CHECKING:  # pragma: no cover
    from .backend import BackendContext


class PaintKind(str, Enum):
    SOLID = "solid"
    # Gradient and pattern paints would slot in here


@dataclass(frozen=True, slots=True)
class Paint:
    color: RGBA
    kind: PaintKind = PaintKind.SOLID

    @property
    def visible(self) -> bool:
        return self.color.a > 0


@dataclass(frozen=True, slots=True)
class PaintState:
    fill: Paint
    stroke: Paint
    line_width: float

    @property
    def strokes(self) -> bool:
        return self.line_width > 0 and self.stroke.visible

    @property
    def fills(self) -> bool:
        return self.fill.visible


DEFAULT_PAINT = PaintState(
    fill=Paint(RGBA(0, 0, 0, 0)),
    stroke=Paint(RGBA(0, 0, 0, 255)),
    line_width=1.0,
)


def derive_paint(style: Style) -> PaintState:
    return PaintState(
        fill=Paint(style.fill_color),
        stroke=Paint(style.color),
        line_width=float(style.line_width),
    )


def apply_style(ctx: "BackendContext", style: Style) -> PaintState:
    """Install the paints derived from *style* on *ctx* and return them."""
    paint = derive_paint(style)
    ctx.set_paint(paint)
    return paint


def text_paint(color: RGBA) -> PaintState:
    """Paint state for glyphs: filled with *color*, no outline."""
    return PaintState(fill=Paint(color), stroke=Paint(color), line_width=0.0)


__all__ = [
    "PaintKind",
    "Paint",
    "PaintState",
    "DEFAULT_PAINT",
    "derive_paint",
    "apply_style",
    "text_paint",
]
