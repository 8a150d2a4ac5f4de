"""Centralized rendering defaults loaded from YAML.

The master source is ``values.yml`` in this package. On import we parse the
YAML and expose plain constants. Sections that are missing or malformed fall
back to the literals below so a damaged install still renders.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import yaml

logger = logging.getLogger(__name__)

_PKG_DIR = Path(__file__).parent
_YAML_PATH = _PKG_DIR / "values.yml"

# --- Fallback literals ---------------------------------------------------
_FALLBACK_BACKGROUND = (0, 0, 0, 0)
_FALLBACK_FONT_DIRS = [
    "/usr/share/fonts/truetype/dejavu",
    "/usr/share/fonts/truetype/liberation",
]
_FALLBACK_FONT_ALIASES = {
    "sans": ["/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"],
    "serif": ["/usr/share/fonts/truetype/dejavu/DejaVuSerif.ttf"],
    "mono": ["/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf"],
}
_FALLBACK_ADVANCE_EM = 0.6


def _load_raw(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("failed to read %s: %s", path, e)
        return {}
    return raw if isinstance(raw, dict) else {}


_background: Tuple[int, int, int, int] = _FALLBACK_BACKGROUND
_font_dirs: List[str] = list(_FALLBACK_FONT_DIRS)
_font_aliases: Dict[str, List[str]] = {
    k: list(v) for k, v in _FALLBACK_FONT_ALIASES.items()
}
_advance_em: float = _FALLBACK_ADVANCE_EM

_raw = _load_raw(_YAML_PATH)

canvas = _raw.get("canvas", {})
if isinstance(canvas, dict):
    bg = canvas.get("background")
    if isinstance(bg, list) and len(bg) == 4 and all(isinstance(x, int) for x in bg):
        _background = (bg[0], bg[1], bg[2], bg[3])

fonts = _raw.get("fonts", {})
if isinstance(fonts, dict):
    dirs = fonts.get("dirs")
    if isinstance(dirs, list) and all(isinstance(x, str) for x in dirs):
        _font_dirs = list(dirs)
    aliases = fonts.get("aliases")
    if isinstance(aliases, dict):
        for name, files in aliases.items():
            if isinstance(files, list) and all(isinstance(x, str) for x in files):
                _font_aliases[str(name)] = list(files)

text = _raw.get("text", {})
if isinstance(text, dict) and isinstance(text.get("advance_em"), (int, float)):
    _advance_em = float(text["advance_em"])

# --- Public accessors ----------------------------------------------------
BACKGROUND: Tuple[int, int, int, int] = _background
FONT_DIRS: Sequence[str] = tuple(_font_dirs)
FONT_ALIASES: Dict[str, Sequence[str]] = {k: tuple(v) for k, v in _font_aliases.items()}
TEXT_ADVANCE_EM: float = _advance_em

__all__ = [
    "BACKGROUND",
    "FONT_DIRS",
    "FONT_ALIASES",
    "TEXT_ADVANCE_EM",
]
