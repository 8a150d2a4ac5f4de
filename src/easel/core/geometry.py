"""2D affine transforms in canvas space.

Canvas space has its origin at the top-left corner with y increasing
downward, so a positive rotation angle turns clockwise on screen. Matrices
use the ``(a, b, c, d, e, f)`` ordering shared by PDF, SVG and cairo::

    x' = a*x + c*y + e
    y' = b*x + d*y + f

Implementations use only the Python standard library (math).
"""

from __future__ import annotations

from math import cos, isclose, radians, sin
from typing import NamedTuple, Tuple

from .models import PointLike

__all__ = ["Affine"]


class Affine(NamedTuple):
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> "Affine":
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> "Affine":
        return cls(1.0, 0.0, 0.0, 1.0, float(tx), float(ty))

    @classmethod
    def rotation(cls, angle_deg: float) -> "Affine":
        """Rotation about the origin by *angle_deg* degrees."""
        t = radians(angle_deg)
        ct, st = cos(t), sin(t)
        return cls(ct, st, -st, ct, 0.0, 0.0)

    @classmethod
    def rotation_about(cls, angle_deg: float, pivot: PointLike) -> "Affine":
        """Rotation by *angle_deg* around *pivot*.

        Equivalent to ``translate(pivot) @ rotate(angle) @ translate(-pivot)``.
        """
        px, py = float(pivot[0]), float(pivot[1])
        return (
            cls.translation(px, py)
            @ cls.rotation(angle_deg)
            @ cls.translation(-px, -py)
        )

    def __matmul__(self, other: "Affine") -> "Affine":  # type: ignore[override]
        # self applied after other
        a1, b1, c1, d1, e1, f1 = self
        a2, b2, c2, d2, e2, f2 = other
        return Affine(
            a1 * a2 + c1 * b2,
            b1 * a2 + d1 * b2,
            a1 * c2 + c1 * d2,
            b1 * c2 + d1 * d2,
            a1 * e2 + c1 * f2 + e1,
            b1 * e2 + d1 * f2 + f1,
        )

    def apply(self, p: PointLike) -> Tuple[float, float]:
        x, y = float(p[0]), float(p[1])
        return (self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)

    def apply_all(self, pts: "list[PointLike]") -> list[Tuple[float, float]]:
        return [self.apply(p) for p in pts]

    def inverse(self) -> "Affine":
        det = self.a * self.d - self.b * self.c
        if det == 0.0:
            raise ValueError("affine transform is not invertible")
        a = self.d / det
        b = -self.b / det
        c = -self.c / det
        d = self.a / det
        e = -(a * self.e + c * self.f)
        f = -(b * self.e + d * self.f)
        return Affine(a, b, c, d, e, f)

    @property
    def is_identity(self) -> bool:
        return all(
            isclose(v, w, abs_tol=1e-12) for v, w in zip(self, Affine.identity())
        )

    @property
    def is_translation(self) -> bool:
        """True when the linear part is the identity (no rotation)."""
        return all(
            isclose(v, w, abs_tol=1e-12)
            for v, w in zip(self[:4], (1.0, 0.0, 0.0, 1.0))
        )
