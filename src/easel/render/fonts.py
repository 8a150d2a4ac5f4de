"""Font resource provider.

Resolves a font family name to a Pillow ``FreeTypeFont`` at a given size.
Backends that rasterize glyphs themselves (raster) or embed TrueType files
(vector) go through :class:`FontLoader`; the markup backend only names the
family and leaves resolution to the viewer.

Resolution order for a family:

1. ``"default"``: Pillow's bundled font
2. an existing file path
3. an alias from settings (``sans``, ``serif``, ``mono`` ...)
4. ``<family>.ttf|.otf|.ttc`` in the configured font directories
5. FreeType's own search (system font directories)

A family that none of these resolve raises FontResolutionFailure. There is
no silent substitution of another face.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Sequence, Tuple

from PIL import ImageFont

from easel.core.errors import FontResolutionFailure

logger = logging.getLogger(__name__)

DEFAULT_FAMILY = "default"
_SUFFIXES = (".ttf", ".otf", ".ttc")


class FontLoader:
    def __init__(
        self,
        font_dirs: Sequence[str] = (),
        aliases: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self._dirs = [Path(d).expanduser() for d in font_dirs]
        self._aliases = {k.lower(): list(v) for k, v in (aliases or {}).items()}
        self._fonts: Dict[Tuple[str, int], Any] = {}
        self._paths: Dict[str, Path | None] = {}

    def load(self, family: str, size: float) -> Any:
        """Return a FreeTypeFont for *family* at *size* pixels."""
        size_px = max(1, int(round(size)))
        key = (family, size_px)
        f = self._fonts.get(key)
        if f is None:
            f = self._load_uncached(family, size_px)
            self._fonts[key] = f
        return f

    def resolve_path(self, family: str) -> Path | None:
        """Return the font file backing *family*, if it maps to one.

        ``None`` is returned for the bundled default font, which has no
        file on disk.
        """
        if family.lower() == DEFAULT_FAMILY:
            return None
        if family in self._paths:
            return self._paths[family]
        for cand in self._candidates(family):
            if cand.is_file():
                self._paths[family] = cand
                return cand
        raise FontResolutionFailure(family, "no matching font file")

    def _candidates(self, family: str) -> Iterator[Path]:
        p = Path(family).expanduser()
        if p.suffix.lower() in _SUFFIXES:
            yield p
        for alias in self._aliases.get(family.lower(), ()):
            yield Path(alias).expanduser()
        for d in self._dirs:
            for suffix in _SUFFIXES:
                yield d / f"{family}{suffix}"

    def _load_uncached(self, family: str, size_px: int) -> Any:
        if family.lower() == DEFAULT_FAMILY:
            logger.debug("using bundled default font at %dpx", size_px)
            return ImageFont.load_default(size=size_px)
        try:
            path = self.resolve_path(family)
        except FontResolutionFailure:
            path = None
        if path is not None:
            logger.debug("font %r resolved to %s", family, path)
            return ImageFont.truetype(str(path), size_px)
        # Let FreeType search the platform font directories
        try:
            return ImageFont.truetype(family, size_px)
        except OSError as e:
            raise FontResolutionFailure(family, str(e)) from e
