"""Nearest-neighbor compositing of logical color grids onto pixel rasters.

A grid of ``num_x`` by ``num_y`` packed ``AARRGGBB`` colors, stored row-major
(``index = row * num_x + col``), is stretched over a ``|width|`` by
``|height|`` pixel block. Every pixel takes the color of the tile it falls
in. A negative extent reverses the direction in which tiles are laid out
along that axis: tile 0 lands at the far edge of the block.
"""

from __future__ import annotations

from math import floor
from typing import List, Sequence

from PIL import Image

from easel.core.color import to_rgba


def _tile_indices(extent: float, num: int) -> List[int]:
    """Map each destination pixel along one axis to its tile index."""
    n_px = int(abs(extent))
    if n_px == 0:
        return []
    tile = abs(extent) / float(num)
    idx = [min(num - 1, max(0, floor(p / tile))) for p in range(n_px)]
    if extent < 0:
        idx = [num - 1 - t for t in idx]
    return idx


def composite_grid(
    width: float,
    height: float,
    num_x: int,
    num_y: int,
    colors: Sequence[int],
) -> Image.Image:
    """Return an RGBA raster of ``|width|`` x ``|height|`` pixels."""
    if num_x <= 0 or num_y <= 0:
        raise ValueError(f"grid dimensions must be positive: {num_x}x{num_y}")
    if len(colors) < num_x * num_y:
        raise ValueError(
            f"expected {num_x * num_y} colors for a {num_x}x{num_y} grid, "
            f"got {len(colors)}"
        )

    cols = _tile_indices(width, num_x)
    rows = _tile_indices(height, num_y)
    raster = Image.new("RGBA", (len(cols), len(rows)), (0, 0, 0, 0))
    if not cols or not rows:
        return raster

    # Unpack each grid cell once; pixels only look up the cached tuples
    rgba = [tuple(to_rgba(int(v))) for v in colors[: num_x * num_y]]

    data = []
    for t_y in rows:
        base = t_y * num_x
        data.extend(rgba[base + t_x] for t_x in cols)
    raster.putdata(data)
    return raster
