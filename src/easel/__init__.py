"""Easel package root.

Pluggable 2D drawing backends behind one drawing API. The project version is
defined here as the single source of truth and read by the packaging
configuration (``version = { attr = "easel.__version__" }``).
"""

from easel.core.color import RGBA, pack_argb, unpack_argb
from easel.core.errors import (
    BackendNotImplemented,
    EaselError,
    EmptyGeometry,
    FontResolutionFailure,
    ImageClosed,
    NotSupported,
    UnsupportedFileKind,
)
from easel.core.models import (
    BackendKind,
    FileKind,
    Font,
    Point,
    Style,
    TextAlign,
    TextExtent,
)
from easel.image import Image, create_image, write_file
from easel.render.primitives import (
    draw_circle,
    draw_line,
    draw_polyline,
    draw_raster,
    draw_rectangle,
    draw_text,
    get_text_extent,
)

__all__ = [
    "__version__",
    "Image",
    "create_image",
    "write_file",
    "draw_line",
    "draw_polyline",
    "draw_circle",
    "draw_rectangle",
    "draw_text",
    "draw_raster",
    "get_text_extent",
    "Point",
    "Style",
    "Font",
    "TextAlign",
    "TextExtent",
    "BackendKind",
    "FileKind",
    "RGBA",
    "pack_argb",
    "unpack_argb",
    "EaselError",
    "UnsupportedFileKind",
    "BackendNotImplemented",
    "EmptyGeometry",
    "FontResolutionFailure",
    "NotSupported",
    "ImageClosed",
]

# Keep in sync with release tags until setuptools-scm or similar is adopted.
__version__ = "0.1.0"
