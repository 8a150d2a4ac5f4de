"""Error types raised by the drawing core.

Every error also derives from the closest builtin exception so callers that
do not import easel can still catch them (e.g. ``except ValueError``).
"""

from __future__ import annotations

from typing import Any


class EaselError(Exception):
    """Base class for all drawing errors."""


class UnsupportedFileKind(EaselError, ValueError):
    """The backend has no encoder for the requested output file kind."""

    def __init__(self, file_kind: Any, backend: Any = None) -> None:
        self.file_kind = file_kind
        self.backend = backend
        msg = f"Unsupported file kind {file_kind}"
        if backend is not None:
            msg += f" for backend {backend}"
        super().__init__(msg)


class BackendNotImplemented(EaselError, NotImplementedError):
    """No context implementation is registered for a backend kind."""

    def __init__(self, backend: Any) -> None:
        self.backend = backend
        super().__init__(f"Backend {backend} has no implementation")


class EmptyGeometry(EaselError, ValueError):
    """A path-based primitive received no points."""


class FontResolutionFailure(EaselError, LookupError):
    """The font provider could not resolve a family name."""

    def __init__(self, family: str, detail: str | None = None) -> None:
        self.family = family
        msg = f"Could not resolve font family {family!r}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class NotSupported(EaselError, NotImplementedError):
    """The operation is not available on this backend."""

    def __init__(self, operation: str, backend: Any) -> None:
        self.operation = operation
        self.backend = backend
        super().__init__(f"`{operation}` is not supported by the {backend} backend")


class ImageClosed(EaselError, RuntimeError):
    """The image was already written or closed."""


__all__ = [
    "EaselError",
    "UnsupportedFileKind",
    "BackendNotImplemented",
    "EmptyGeometry",
    "FontResolutionFailure",
    "NotSupported",
    "ImageClosed",
]
