"""Runtime configuration helpers.

Merges the packaged defaults from :mod:`easel.settings.values` with an
optional override file and environment variables, and keeps one cached
:class:`RenderSettings` for the process.

Sources, lowest to highest precedence:

- ``values.yml`` shipped with the package
- a YAML or JSON file named by *path* or ``EASEL_CONFIG``
- ``EASEL_FONT_DIRS`` (``os.pathsep`` separated), prepended to ``font_dirs``
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .settings.schema import RenderSettings

logger = logging.getLogger(__name__)

ENV_CONFIG = "EASEL_CONFIG"
ENV_FONT_DIRS = "EASEL_FONT_DIRS"


def _read_override(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"expected a mapping at top level of {path}")
    return data


def load_settings(path: str | os.PathLike[str] | None = None) -> RenderSettings:
    """Build RenderSettings from defaults, an override file and the env.

    A missing or corrupt override file is logged and ignored so rendering
    can proceed with defaults.
    """
    if path is None:
        path = os.environ.get(ENV_CONFIG) or None

    settings = RenderSettings()
    if path is not None:
        p = Path(path).expanduser()
        try:
            data = _read_override(p)
            settings = RenderSettings.model_validate(
                settings.model_dump() | data
            )
        except FileNotFoundError:
            logger.warning("config file not found: %s", p)
        except (OSError, ValueError, yaml.YAMLError, ValidationError) as e:
            logger.warning("ignoring invalid config %s: %s", p, e)

    extra = os.environ.get(ENV_FONT_DIRS)
    if extra:
        dirs = [d for d in extra.split(os.pathsep) if d]
        settings = settings.model_copy(
            update={"font_dirs": dirs + list(settings.font_dirs)}
        )
    return settings


# Runtime singleton -------------------------------------------------------
_SETTINGS: RenderSettings | None = None


def get_settings() -> RenderSettings:
    """Return the process settings, loading them on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = load_settings()
    return _SETTINGS


def reset_settings() -> None:
    """Drop cached settings so the next call reloads them."""
    global _SETTINGS
    _SETTINGS = None
