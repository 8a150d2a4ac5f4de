"""Pydantic model for render settings."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from easel.core.color import RGBA, as_rgba

from .values import BACKGROUND, FONT_ALIASES, FONT_DIRS, TEXT_ADVANCE_EM


class RenderSettings(BaseModel):
    """Process-wide rendering defaults.

    Parameters
    ----------
    background: Initial pixel value of a new raster canvas.
    font_dirs: Directories searched for ``<family>.ttf|.otf|.ttc``.
    font_aliases: Family aliases mapped to candidate font files, tried in
        order.
    text_advance: Per-character advance (fraction of font size) used by
        backends that estimate text extents instead of measuring them.
    """

    background: RGBA = Field(default=RGBA(*BACKGROUND))
    font_dirs: List[str] = Field(default_factory=lambda: list(FONT_DIRS))
    font_aliases: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in FONT_ALIASES.items()}
    )
    text_advance: float = Field(default=TEXT_ADVANCE_EM)

    @field_validator("background", mode="before")
    @classmethod
    def _chk_background(cls, v: object) -> RGBA:
        return as_rgba(v)  # type: ignore[arg-type]

    @field_validator("text_advance")
    @classmethod
    def _chk_advance(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("text_advance must be > 0")
        return v
