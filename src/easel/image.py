"""Image lifecycle: creation, ownership of the backend context, and writing.

An :class:`Image` exclusively owns one backend context for its lifetime. The
backend is chosen once, in :func:`create_image`, and never changes. Nothing
touches the filesystem until :func:`write_file` is called; writing releases
the context, after which the image can no longer be drawn on.

Images are not safe for concurrent use. Callers that draw from several
threads must use one Image per worker or serialize access themselves.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from types import TracebackType
from typing import Optional, Type, Union

from easel.backends import context_class
from easel.config import get_settings
from easel.core.errors import ImageClosed, UnsupportedFileKind
from easel.core.models import BackendKind, FileKind
from easel.render.backend import BackendContext
from easel.render.fonts import FontLoader
from easel.settings.schema import RenderSettings

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class Image:
    def __init__(
        self,
        filename: PathLike,
        width: int,
        height: int,
        backend: BackendKind,
        file_kind: FileKind,
        context: BackendContext,
    ) -> None:
        self.filename = Path(filename)
        self.width = width
        self.height = height
        self.backend = backend
        self.file_kind = file_kind
        self._ctx: Optional[BackendContext] = context

    @property
    def context(self) -> BackendContext:
        """The owned backend context.

        Raises ImageClosed once the image has been written or closed.
        """
        ctx = self._ctx
        if ctx is None:
            raise ImageClosed(f"image {self.filename} is closed")
        return ctx

    @property
    def closed(self) -> bool:
        return self._ctx is None

    def close(self) -> None:
        """Release the backend context without writing. Idempotent."""
        ctx = self._ctx
        if ctx is not None:
            self._ctx = None
            ctx.close()

    def __enter__(self) -> "Image":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def __repr__(self) -> str:  # pragma: no cover
        state = "closed" if self.closed else "open"
        return (
            f"Image({str(self.filename)!r}, {self.width}x{self.height}, "
            f"{self.backend.value}/{self.file_kind.value}, {state})"
        )


def create_image(
    filename: PathLike,
    width: int,
    height: int,
    backend: Union[BackendKind, str],
    file_kind: Union[FileKind, str],
    *,
    settings: Optional[RenderSettings] = None,
    fonts: Optional[FontLoader] = None,
) -> Image:
    """Allocate an Image with a fresh context for *backend*.

    Raises:
        BackendNotImplemented: no context is registered for *backend*.
        UnsupportedFileKind: *backend* cannot encode *file_kind*.
        ValueError: non-positive or non-integer dimensions.
    """
    backend = BackendKind(backend)
    file_kind = FileKind(file_kind)
    for name, v in (("width", width), ("height", height)):
        if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
            raise ValueError(f"{name} must be a positive int, got {v!r}")

    cls = context_class(backend)
    if not cls.supports(file_kind):
        raise UnsupportedFileKind(file_kind, backend)

    if settings is None:
        settings = get_settings()
    if fonts is None:
        fonts = FontLoader(settings.font_dirs, settings.font_aliases)

    ctx = cls(width, height, file_kind, settings=settings, fonts=fonts)
    logger.debug(
        "created %s context %dx%d for %s", backend.value, width, height, filename
    )
    return Image(filename, width, height, backend, file_kind, ctx)


def write_file(image: Image, filename: Optional[PathLike] = None) -> Path:
    """Serialize *image* to *filename* (default: ``image.filename``).

    Blocks until the file is written, overwriting any existing file, then
    closes the image. Returns the path written. If writing raises, the image
    stays open and can be written again.
    """
    ctx = image.context
    path = Path(filename) if filename is not None else image.filename
    if ctx.kind is not BackendKind.NULL:
        path.parent.mkdir(parents=True, exist_ok=True)
    ctx.write(path)
    image.close()
    return path
