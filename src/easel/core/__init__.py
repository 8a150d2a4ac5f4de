"""Core value types: colors, geometry, style models and errors."""

from .color import RGBA, pack_argb, unpack_argb
from .errors import (
    BackendNotImplemented,
    EaselError,
    EmptyGeometry,
    FontResolutionFailure,
    ImageClosed,
    NotSupported,
    UnsupportedFileKind,
)
from .geometry import Affine
from .models import (
    BackendKind,
    FileKind,
    Font,
    Point,
    Style,
    TextAlign,
    TextExtent,
)

__all__ = [
    "RGBA",
    "pack_argb",
    "unpack_argb",
    "Affine",
    "BackendKind",
    "FileKind",
    "Font",
    "Point",
    "Style",
    "TextAlign",
    "TextExtent",
    "EaselError",
    "UnsupportedFileKind",
    "BackendNotImplemented",
    "EmptyGeometry",
    "FontResolutionFailure",
    "NotSupported",
    "ImageClosed",
]
