from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .color import RGBA, as_rgba


class Point(NamedTuple):
    x: float
    y: float


PointLike = Union[Point, Tuple[float, float], Sequence[float]]

# (angle in degrees, pivot)
RotationSpec = Tuple[float, PointLike]


class TextExtent(NamedTuple):
    width: float
    height: float


class BackendKind(str, Enum):
    RASTER = "raster"
    VECTOR = "vector"
    MARKUP = "markup"
    NULL = "null"

    def __str__(self) -> str:
        return self.value


class FileKind(str, Enum):
    PNG = "png"
    PDF = "pdf"
    SVG = "svg"

    def __str__(self) -> str:
        return self.value


class HAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VAlign(str, Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class TextAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    def anchors(self) -> Tuple[HAlign, VAlign]:
        """Return the (horizontal, vertical) anchor pair.

        Text is always anchored on its vertical middle.
        """
        return HAlign(self.value), VAlign.MIDDLE


class Font(BaseModel):
    """Font reference resolved by the backend's font provider."""

    model_config = ConfigDict(frozen=True)

    family: str = Field(..., min_length=1)
    size: float = Field(12.0, gt=0)
    color: RGBA = Field(default=RGBA(0, 0, 0, 255))

    @field_validator("color", mode="before")
    @classmethod
    def _coerce_color(cls, v: object) -> RGBA:
        return as_rgba(v)  # type: ignore[arg-type]


class Style(BaseModel):
    """Paint description for a single draw call.

    Parameters
    ----------
    color: Stroke color.
    fill_color: Fill color. Transparent by default, so paths are outlined
        only unless a fill is requested.
    line_width: Stroke width in canvas units. Zero disables the stroke.
    font: Optional font reference carried along for text-bearing elements.
    """

    model_config = ConfigDict(frozen=True)

    color: RGBA = Field(default=RGBA(0, 0, 0, 255))
    fill_color: RGBA = Field(default=RGBA(0, 0, 0, 0))
    line_width: float = Field(1.0, ge=0)
    font: Optional[Font] = None

    @field_validator("color", "fill_color", mode="before")
    @classmethod
    def _coerce_color(cls, v: object) -> RGBA:
        return as_rgba(v)  # type: ignore[arg-type]


__all__ = [
    "Point",
    "PointLike",
    "RotationSpec",
    "TextExtent",
    "BackendKind",
    "FileKind",
    "HAlign",
    "VAlign",
    "TextAlign",
    "Font",
    "Style",
]
