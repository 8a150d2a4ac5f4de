"""Recording no-op context for tests and dry runs.

Nothing is rasterized or written. Every primitive is appended to
:attr:`NullContext.ops` together with the transform and paint that were
active for the call, which makes transform and style isolation directly
observable.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, NamedTuple, Sequence, Tuple

from PIL import Image

from easel.core.geometry import Affine
from easel.core.models import (
    BackendKind,
    FileKind,
    Font,
    PointLike,
    TextAlign,
    TextExtent,
)
from easel.render.backend import BackendContext
from easel.render.fonts import FontLoader
from easel.render.style import PaintState
from easel.settings.schema import RenderSettings

logger = logging.getLogger(__name__)


class DrawOp(NamedTuple):
    name: str
    args: Tuple[Any, ...]
    transform: Affine
    paint: PaintState


class NullContext(BackendContext):
    kind = BackendKind.NULL
    file_kinds = frozenset(FileKind)

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
        self.ops: list[DrawOp] = []

    def _record(self, name: str, *args: Any) -> None:
        self.ops.append(DrawOp(name, args, self.transform, self.paint))

    def line(self, start: PointLike, stop: PointLike) -> None:
        self._record("line", tuple(start), tuple(stop))

    def path(self, points: Sequence[PointLike]) -> None:
        self._record("path", [tuple(p) for p in points])

    def circle(self, center: PointLike, radius: float) -> None:
        self._record("circle", tuple(center), radius)

    def rect(self, left: float, top: float, width: float, height: float) -> None:
        self._record("rect", left, top, width, height)

    def text(self, s: str, font: Font, at: PointLike, align: TextAlign) -> None:
        self._record("text", s, font, tuple(at), align)

    def blit(self, raster: Image.Image, x: float, y: float) -> None:
        self._record("blit", raster.copy(), x, y)

    def text_extent(self, s: str, font: Font) -> TextExtent:
        # Fixed-advance estimate; there are no glyph metrics to consult
        advance = self.settings.text_advance * font.size
        return TextExtent(width=advance * len(s), height=float(font.size))

    def write(self, path: Path) -> None:
        logger.debug("null backend: skipping write of %s (%d ops)", path, len(self.ops))
