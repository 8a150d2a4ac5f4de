"""Backend context implementations and the registry used by create_image."""

from __future__ import annotations

from typing import Dict, Type

from easel.core.errors import BackendNotImplemented
from easel.core.models import BackendKind
from easel.render.backend import BackendContext

from .null_backend import NullContext
from .pdf_backend import ReportLabContext
from .pillow_backend import PillowContext
from .svg_backend import SvgContext

BACKENDS: Dict[BackendKind, Type[BackendContext]] = {
    BackendKind.RASTER: PillowContext,
    BackendKind.VECTOR: ReportLabContext,
    BackendKind.MARKUP: SvgContext,
    BackendKind.NULL: NullContext,
}


def context_class(kind: BackendKind) -> Type[BackendContext]:
    """Return the context implementation registered for *kind*."""
    try:
        return BACKENDS[kind]
    except KeyError:
        raise BackendNotImplemented(kind) from None


__all__ = [
    "BACKENDS",
    "context_class",
    "NullContext",
    "PillowContext",
    "ReportLabContext",
    "SvgContext",
]
