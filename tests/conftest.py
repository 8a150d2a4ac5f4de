from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from easel import config
from easel.settings.schema import RenderSettings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    # Keep the developer's environment out of the cached settings
    monkeypatch.delenv(config.ENV_CONFIG, raising=False)
    monkeypatch.delenv(config.ENV_FONT_DIRS, raising=False)
    config.reset_settings()
    yield
    config.reset_settings()


@pytest.fixture
def render_settings() -> RenderSettings:
    """Defaults with an opaque white canvas, easier to assert against."""
    return RenderSettings(background=(255, 255, 255, 255))


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"
