"""Backend context contract shared by every output engine.

A BackendContext is the drawing surface owned by one Image. Shape methods
receive geometry in canvas space (origin top-left, y down) and must honor
the context's current :attr:`transform` and :attr:`paint`. Every shape
method strokes first and then fills, so the fill covers the inner half of
the stroke.

Concrete contexts register themselves in :mod:`easel.backends`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar, FrozenSet, Sequence, Tuple

from PIL import Image as PILImage

from easel.core.errors import NotSupported
from easel.core.geometry import Affine
from easel.core.models import (
    BackendKind,
    FileKind,
    Font,
    PointLike,
    TextAlign,
    TextExtent,
)
from easel.settings.schema import RenderSettings

from .fonts import FontLoader
from .style import DEFAULT_PAINT, PaintState


class BackendContext(ABC):
    kind: ClassVar[BackendKind]
    file_kinds: ClassVar[FrozenSet[FileKind]] = frozenset()

    def __init__(
        self,
        width: int,
        height: int,
        file_kind: FileKind,
        *,
        settings: RenderSettings,
        fonts: FontLoader,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.file_kind = file_kind
        self.settings = settings
        self.fonts = fonts
        self.paint: PaintState = DEFAULT_PAINT
        self.last_transform = Affine.identity()
        self._transform = Affine.identity()
        self._closed = False

    @classmethod
    def supports(cls, file_kind: FileKind) -> bool:
        return file_kind in cls.file_kinds

    # --- state ------------------------------------------------------------
    @property
    def transform(self) -> Affine:
        return self._transform

    @property
    def closed(self) -> bool:
        return self._closed

    def rotate(self, angle_deg: float, pivot: PointLike) -> None:
        self._transform = self._transform @ Affine.rotation_about(angle_deg, pivot)

    def save_and_reset(self) -> None:
        self.last_transform = self._transform
        self._transform = Affine.identity()

    def set_paint(self, paint: PaintState) -> None:
        self.paint = paint

    # --- primitives -------------------------------------------------------
    @abstractmethod
    def line(self, start: PointLike, stop: PointLike) -> None:
        ...

    @abstractmethod
    def path(self, points: Sequence[PointLike]) -> None:
        """Stroke the open path through *points*, then fill its region."""

    @abstractmethod
    def circle(self, center: PointLike, radius: float) -> None:
        ...

    @abstractmethod
    def rect(self, left: float, top: float, width: float, height: float) -> None:
        ...

    @abstractmethod
    def text(self, s: str, font: Font, at: PointLike, align: TextAlign) -> None:
        ...

    @abstractmethod
    def blit(self, raster: PILImage.Image, x: float, y: float) -> None:
        """Draw *raster* with its top-left corner at ``(x, y)``."""

    def text_extent(self, s: str, font: Font) -> TextExtent:
        raise NotSupported("getTextExtent", self.kind)

    # --- lifecycle --------------------------------------------------------
    @abstractmethod
    def write(self, path: Path) -> None:
        ...

    def close(self) -> None:
        self._closed = True


def rect_corners(
    left: float, top: float, width: float, height: float
) -> list[Tuple[float, float]]:
    return [
        (left, top),
        (left + width, top),
        (left + width, top + height),
        (left, top + height),
    ]
