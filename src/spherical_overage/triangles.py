"""Triangle angles from three side lengths, on a sphere and on a plane.

Sides must be passed in order: angle ``a`` is the one opposite side ``A``.
Nothing is reordered. See https://en.wikipedia.org/wiki/Solution_of_triangles

By default invalid geometry (zero sides, broken triangle inequality) is not
rejected: the offending angles come back as NaN or inf. Pass ``strict=True``
to validate first and raise ``InvalidTriangleError`` instead.
"""

from __future__ import annotations

import logging
import math
from typing import Iterator, NamedTuple

import numpy as np

from spherical_overage.config import EARTH_RADIUS

logger = logging.getLogger(__name__)

RAD_TO_DEG = 180.0 / math.pi


class InvalidTriangleError(Exception):
    """Raised in strict mode when three sides cannot form a triangle."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Invalid triangle: {'; '.join(errors)}")


class TriangleAngles(NamedTuple):
    """Interior angles in degrees; ``a`` is opposite side A."""

    a: float
    b: float
    c: float
    total: float

    @property
    def excess(self) -> float:
        """Degrees above a flat triangle's 180."""
        return self.total - 180.0

    @property
    def is_degenerate(self) -> bool:
        return not all(math.isfinite(x) for x in self)

    def angles(self) -> Iterator[float]:
        yield from (self.a, self.b, self.c)


def _solve(cos_a: float, cos_b: float, cos_c: float) -> TriangleAngles:
    a = float(np.arccos(cos_a)) * RAD_TO_DEG
    b = float(np.arccos(cos_b)) * RAD_TO_DEG
    c = float(np.arccos(cos_c)) * RAD_TO_DEG
    return TriangleAngles(a, b, c, a + b + c)


def _check_sides(A: float, B: float, C: float) -> list[str]:
    errors: list[str] = []
    for name, side in (("A", A), ("B", B), ("C", C)):
        if not math.isfinite(side):
            errors.append(f"side {name}={side} is not finite")
        elif side <= 0:
            errors.append(f"side {name}={side} must be positive")
    if errors:
        return errors

    for name, side, rest in (("A", A, B + C), ("B", B, A + C), ("C", C, A + B)):
        if side >= rest:
            errors.append(f"side {name}={side} violates the triangle inequality (other sides sum to {rest})")
    return errors


def validate_plane_triangle(A: float, B: float, C: float) -> list[str]:
    """Return a list of problems with the sides (empty = valid)."""
    return _check_sides(A, B, C)


def validate_spherical_triangle(A: float, B: float, C: float, radius: float = EARTH_RADIUS) -> list[str]:
    """Return a list of problems with the sides on a sphere (empty = valid)."""
    if not radius > 0:
        return [f"radius {radius} must be positive"]

    errors = _check_sides(A, B, C)
    if errors:
        return errors

    half_circle = math.pi * radius
    for name, side in (("A", A), ("B", B), ("C", C)):
        if side >= half_circle:
            errors.append(f"side {name}={side} is not shorter than half a great circle ({half_circle:.6g})")
    if A + B + C >= 2 * half_circle:
        errors.append(f"perimeter {A + B + C} is not shorter than a great circle ({2 * half_circle:.6g})")
    return errors


def _finish(kind: str, sides: tuple[float, float, float], result: TriangleAngles) -> TriangleAngles:
    if result.is_degenerate:
        logger.warning("Degenerate %s triangle for sides %s: %s", kind, sides, result)
    else:
        logger.debug("%s angles for sides %s: %s", kind, sides, result)
    return result


def spherical_angles(
    A: float,
    B: float,
    C: float,
    radius: float = EARTH_RADIUS,
    strict: bool = False,
) -> TriangleAngles:
    """Angles of a spherical triangle via the spherical law of cosines.

    Side lengths are in the unit of ``radius`` and are turned into angular
    sides by dividing by it.
    """
    if strict:
        errors = validate_spherical_triangle(A, B, C, radius)
        if errors:
            raise InvalidTriangleError(errors)

    with np.errstate(divide="ignore", invalid="ignore"):
        a, b, c = np.float64(A) / radius, np.float64(B) / radius, np.float64(C) / radius
        cosa, cosb, cosc = np.cos(a), np.cos(b), np.cos(c)
        sina, sinb, sinc = np.sin(a), np.sin(b), np.sin(c)
        result = _solve(
            (cosa - cosb * cosc) / (sinb * sinc),
            (cosb - cosa * cosc) / (sina * sinc),
            (cosc - cosa * cosb) / (sina * sinb),
        )
    return _finish("spherical", (A, B, C), result)


def plane_angles(A: float, B: float, C: float, strict: bool = False) -> TriangleAngles:
    """Angles of a flat triangle via the law of cosines."""
    if strict:
        errors = validate_plane_triangle(A, B, C)
        if errors:
            raise InvalidTriangleError(errors)

    with np.errstate(divide="ignore", invalid="ignore"):
        A, B, C = np.float64(A), np.float64(B), np.float64(C)
        result = _solve(
            (B * B + C * C - A * A) / (2.0 * B * C),
            (A * A + C * C - B * B) / (2.0 * A * C),
            (A * A + B * B - C * C) / (2.0 * A * B),
        )
    return _finish("plane", (float(A), float(B), float(C)), result)
