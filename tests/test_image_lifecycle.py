from __future__ import annotations

from pathlib import Path

import pytest

from easel import (
    BackendKind,
    BackendNotImplemented,
    FileKind,
    ImageClosed,
    Style,
    UnsupportedFileKind,
    create_image,
    draw_line,
    write_file,
)
from easel import backends


@pytest.mark.parametrize(
    "backend,file_kind",
    [
        (BackendKind.RASTER, FileKind.PDF),
        (BackendKind.RASTER, FileKind.SVG),
        (BackendKind.VECTOR, FileKind.PNG),
        (BackendKind.MARKUP, FileKind.PDF),
    ],
)
def test_unsupported_file_kind(
    tmp_path: Path, backend: BackendKind, file_kind: FileKind
) -> None:
    with pytest.raises(UnsupportedFileKind) as ei:
        create_image(tmp_path / "f", 10, 10, backend, file_kind)
    assert ei.value.file_kind is file_kind
    assert file_kind.value in str(ei.value)


def test_missing_backend_implementation(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delitem(backends.BACKENDS, BackendKind.MARKUP)
    with pytest.raises(BackendNotImplemented):
        create_image(tmp_path / "f.svg", 10, 10, BackendKind.MARKUP, FileKind.SVG)


@pytest.mark.parametrize("w,h", [(0, 10), (10, -1), (1.5, 10), (True, 10)])
def test_rejects_bad_dimensions(tmp_path: Path, w, h) -> None:
    with pytest.raises(ValueError):
        create_image(tmp_path / "f.png", w, h, BackendKind.RASTER, FileKind.PNG)


def test_kinds_accept_plain_strings(tmp_path: Path) -> None:
    img = create_image(tmp_path / "f.png", 4, 4, "raster", "png")
    assert img.backend is BackendKind.RASTER
    assert img.file_kind is FileKind.PNG
    with pytest.raises(ValueError):
        create_image(tmp_path / "f.png", 4, 4, "opengl", "png")


def test_create_does_not_touch_filesystem(tmp_path: Path) -> None:
    target = tmp_path / "sub" / "f.png"
    create_image(target, 4, 4, BackendKind.RASTER, FileKind.PNG)
    assert not target.parent.exists()


def test_write_closes_image(tmp_path: Path) -> None:
    img = create_image(tmp_path / "sub" / "f.png", 4, 4, "raster", "png")
    out = write_file(img)
    assert out.is_file()
    assert img.closed
    with pytest.raises(ImageClosed):
        draw_line(img, (0, 0), (1, 1), Style())
    with pytest.raises(ImageClosed):
        write_file(img)


def test_failed_write_keeps_image_open(tmp_path: Path) -> None:
    img = create_image(tmp_path / "f.png", 4, 4, "raster", "png")
    draw_line(img, (0, 0), (3, 3), Style())
    blocked = tmp_path / "taken"
    blocked.mkdir()
    with pytest.raises(OSError):
        write_file(img, blocked)
    assert not img.closed
    out = write_file(img, tmp_path / "retry.png")
    assert out.read_bytes().startswith(b"\x89PNG")
    assert img.closed


def test_write_overwrites(tmp_path: Path) -> None:
    target = tmp_path / "f.png"
    target.write_bytes(b"stale")
    write_file(create_image(target, 4, 4, "raster", "png"))
    assert target.read_bytes().startswith(b"\x89PNG")


def test_context_manager_releases(tmp_path: Path) -> None:
    with create_image(tmp_path / "f.png", 4, 4, "raster", "png") as img:
        ctx = img.context
        assert not img.closed
    assert img.closed
    assert ctx.closed
    img.close()  # idempotent
