from __future__ import annotations

from pathlib import Path

import pytest

from easel.core.errors import FontResolutionFailure
from easel.render.fonts import FontLoader


def test_default_family_uses_bundled_font() -> None:
    loader = FontLoader()
    face = loader.load("default", 14)
    left, top, right, bottom = face.getbbox("Hello")
    assert right > left and bottom > top
    assert loader.resolve_path("default") is None


def test_faces_are_cached_per_size() -> None:
    loader = FontLoader()
    assert loader.load("default", 12) is loader.load("default", 12.2)
    assert loader.load("default", 12) is not loader.load("default", 20)


def test_unknown_family_raises() -> None:
    loader = FontLoader(font_dirs=[], aliases={})
    with pytest.raises(FontResolutionFailure) as ei:
        loader.load("no-such-family-ZZ9", 12)
    assert ei.value.family == "no-such-family-ZZ9"
    with pytest.raises(FontResolutionFailure):
        loader.resolve_path("no-such-family-ZZ9")


def test_resolve_from_font_dirs(tmp_path: Path) -> None:
    f = tmp_path / "Acme.otf"
    f.write_bytes(b"")
    loader = FontLoader(font_dirs=[str(tmp_path)])
    assert loader.resolve_path("Acme") == f


def test_alias_wins_over_font_dirs(tmp_path: Path) -> None:
    (tmp_path / "sans.ttf").write_bytes(b"")
    aliased = tmp_path / "Real-Sans.ttf"
    aliased.write_bytes(b"")
    missing = tmp_path / "missing.ttf"
    loader = FontLoader(
        font_dirs=[str(tmp_path)],
        aliases={"Sans": [str(missing), str(aliased)]},
    )
    assert loader.resolve_path("sans") == aliased


def test_explicit_path(tmp_path: Path) -> None:
    f = tmp_path / "face.ttc"
    f.write_bytes(b"")
    assert FontLoader().resolve_path(str(f)) == f
