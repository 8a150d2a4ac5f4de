"""Packed 32-bit color codec.

Colors travel between the layout engine and the backends either as
:class:`RGBA` channel tuples or as packed ``AARRGGBB`` integers (raster
grids use the packed form since they may carry many thousands of cells).
"""

from __future__ import annotations

from typing import NamedTuple, Sequence, Tuple, Union


class RGBA(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255


ColorLike = Union[RGBA, Tuple[int, int, int, int], Sequence[int]]

_MAX_PACKED = 0xFFFFFFFF


def pack_argb(a: int, r: int, g: int, b: int) -> int:
    """Pack four 8-bit channels into an ``AARRGGBB`` integer."""
    for name, v in (("alpha", a), ("red", r), ("green", g), ("blue", b)):
        if not 0 <= int(v) <= 255:
            raise ValueError(f"{name} channel out of range: {v}")
    return (int(a) << 24) | (int(r) << 16) | (int(g) << 8) | int(b)


def unpack_argb(v: int) -> Tuple[int, int, int, int]:
    """Split a packed color into ``(alpha, red, green, blue)``."""
    if not 0 <= v <= _MAX_PACKED:
        raise ValueError(f"packed color out of range: {v:#x}")
    # no mask on alpha, the higher bits are already zero
    return v >> 24, (v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF


def to_rgba(v: int) -> RGBA:
    a, r, g, b = unpack_argb(v)
    return RGBA(r, g, b, a)


def as_rgba(c: ColorLike) -> RGBA:
    """Coerce a 3- or 4-sequence of ints into :class:`RGBA`."""
    if isinstance(c, RGBA):
        return c
    vals = [int(x) for x in c]
    if len(vals) == 3:
        vals.append(255)
    if len(vals) != 4:
        raise ValueError(f"expected 3 or 4 color channels, got {len(vals)}")
    for x in vals:
        if not 0 <= x <= 255:
            raise ValueError(f"color channel out of range: {x}")
    return RGBA(*vals)


__all__ = [
    "RGBA",
    "ColorLike",
    "pack_argb",
    "unpack_argb",
    "to_rgba",
    "as_rgba",
]
