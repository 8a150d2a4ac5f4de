from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import pytest

from easel import config
from easel.core.color import RGBA
from easel.image import create_image
from easel.settings import values
from easel.settings.schema import RenderSettings


def test_packaged_values() -> None:
    assert values.BACKGROUND == (0, 0, 0, 0)
    assert values.TEXT_ADVANCE_EM == pytest.approx(0.6)
    assert "sans" in values.FONT_ALIASES
    assert len(values.FONT_DIRS) > 0


def test_defaults_without_override() -> None:
    s = config.load_settings()
    assert s == RenderSettings()
    assert s.background == RGBA(0, 0, 0, 0)


def test_yaml_override(tmp_path: Path) -> None:
    p = tmp_path / "easel.yml"
    p.write_text("background: [1, 2, 3, 4]\ntext_advance: 0.5\n")
    s = config.load_settings(p)
    assert s.background == RGBA(1, 2, 3, 4)
    assert s.text_advance == 0.5
    # untouched keys keep their defaults
    assert s.font_aliases == RenderSettings().font_aliases


def test_json_override_from_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    p = tmp_path / "easel.json"
    p.write_text(json.dumps({"font_dirs": ["/opt/fonts"]}))
    monkeypatch.setenv(config.ENV_CONFIG, str(p))
    assert config.load_settings().font_dirs == ["/opt/fonts"]


@pytest.mark.parametrize(
    "content",
    [
        "{broken: [",
        "- just\n- a list\n",
        "text_advance: -1\n",
        "background: [1, 2]\n",
    ],
)
def test_invalid_override_falls_back(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, content: str
) -> None:
    p = tmp_path / "bad.yml"
    p.write_text(content)
    with caplog.at_level(logging.WARNING, logger="easel.config"):
        s = config.load_settings(p)
    assert s == RenderSettings()
    assert "ignoring invalid config" in caplog.text


def test_missing_override_falls_back(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="easel.config"):
        s = config.load_settings(tmp_path / "nope.yml")
    assert s == RenderSettings()
    assert "not found" in caplog.text


def test_font_dirs_env_is_prepended(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(config.ENV_FONT_DIRS, os.pathsep.join(["/a", "/b"]))
    s = config.load_settings()
    assert s.font_dirs[:2] == ["/a", "/b"]
    assert s.font_dirs[2:] == list(values.FONT_DIRS)


def test_get_settings_is_cached() -> None:
    s1 = config.get_settings()
    assert config.get_settings() is s1
    config.reset_settings()
    assert config.get_settings() is not s1


def test_create_image_uses_process_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    p = tmp_path / "easel.yml"
    p.write_text("background: [255, 0, 0, 255]\n")
    monkeypatch.setenv(config.ENV_CONFIG, str(p))
    config.reset_settings()
    img = create_image(tmp_path / "f.png", 4, 4, "raster", "png")
    assert img.context.image.getpixel((0, 0)) == (255, 0, 0, 255)
