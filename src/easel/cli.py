"""Command-line interface for Easel.

``easel demo`` renders a small sample scene that exercises every primitive
on the chosen backend. It is mainly a smoke test for an installation: the
same scene should look the same in the PNG, PDF and SVG outputs.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from easel import __version__
from easel.core.color import pack_argb
from easel.core.errors import EaselError
from easel.core.models import BackendKind, FileKind, Font, Style, TextAlign
from easel.image import Image, create_image, write_file
from easel.render.primitives import (
    draw_circle,
    draw_line,
    draw_polyline,
    draw_raster,
    draw_rectangle,
    draw_text,
)

logger = logging.getLogger(__name__)

DEFAULT_FILE_KIND = {
    BackendKind.RASTER: FileKind.PNG,
    BackendKind.VECTOR: FileKind.PDF,
    BackendKind.MARKUP: FileKind.SVG,
    BackendKind.NULL: FileKind.PNG,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="easel", description=__doc__.splitlines()[0])
    p.add_argument("--version", action="store_true", help="print version and exit")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity (default: WARNING)",
    )
    sub = p.add_subparsers(dest="command")

    demo = sub.add_parser("demo", help="render the sample scene")
    demo.add_argument(
        "--backend",
        type=BackendKind,
        choices=list(BackendKind),
        default=BackendKind.RASTER,
    )
    demo.add_argument(
        "--file-kind",
        type=FileKind,
        choices=list(FileKind),
        default=None,
        help="output encoding (default follows the backend)",
    )
    demo.add_argument("--out", type=Path, required=True, help="output file path")
    demo.add_argument("--width", type=int, default=320)
    demo.add_argument("--height", type=int, default=240)
    return p


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def render_demo(img: Image) -> None:
    """Draw the sample scene on *img*."""
    w, h = img.width, img.height
    frame = Style(
        color=(40, 40, 40, 255), fill_color=(245, 245, 240, 255), line_width=2
    )
    draw_rectangle(img, 4, 4, w - 8, h - 8, frame)

    # 8x4 color ramp in the top-left quadrant
    nx, ny = 8, 4
    ramp = [
        pack_argb(255, int(255 * c / (nx - 1)), int(255 * r / (ny - 1)), 160)
        for r in range(ny)
        for c in range(nx)
    ]
    draw_raster(img, 16, 16, w / 2 - 24, h / 2 - 24, nx, ny, lambda: ramp)

    axis = Style(color=(0, 0, 0, 255), line_width=1)
    draw_line(img, (16, h - 16), (w - 16, h - 16), axis)
    draw_line(img, (16, h - 16), (16, h / 2 + 8), axis)

    trend = [(16 + i * (w - 32) / 6, h - 24 - (i * i) * 2.5) for i in range(7)]
    draw_polyline(img, trend, Style(color=(200, 40, 40, 255), line_width=2))

    dot = Style(
        color=(20, 60, 160, 255), fill_color=(90, 140, 230, 200), line_width=1.5
    )
    draw_circle(img, (w * 0.75, h * 0.3), min(w, h) * 0.12, dot)

    tilted = Style(
        color=(0, 120, 60, 255), fill_color=(0, 200, 100, 120), line_width=1
    )
    draw_rectangle(img, w * 0.6, h * 0.55, w * 0.2, h * 0.12, tilted, rotate=15.0)

    font = Font(family="default", size=14, color=(20, 20, 20, 255))
    draw_text(img, "easel", font, (w * 0.75, h * 0.3), align=TextAlign.CENTER)
    draw_text(
        img,
        "rotated",
        font,
        (w - 24, h / 2),
        align=TextAlign.RIGHT,
        rotate_in_view=(-90.0, (w - 24, h / 2)),
    )


def run_demo(args: argparse.Namespace) -> Path:
    file_kind = args.file_kind or DEFAULT_FILE_KIND[args.backend]
    img = create_image(args.out, args.width, args.height, args.backend, file_kind)
    with img:
        render_demo(img)
        out = write_file(img)
    logger.info("demo written to %s", out)
    return out


def main(argv: list[str] | None = None) -> int:
    """Synchronous entrypoint for the easel CLI. Returns an exit status."""
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.version:
        print(f"easel {__version__}")
        return 0
    if args.command != "demo":
        build_parser().print_help()
        return 0

    try:
        out = run_demo(args)
    except (EaselError, ValueError, OSError) as e:
        print(f"easel: error: {e}", file=sys.stderr)
        return 2
    print(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
