"""Wires distances into the angle solvers to compare sphere against plane.

A triangle is named by its three vertices. The side opposite each vertex is
the great-circle distance between the other two, so angle ``a`` of each
``TriangleAngles`` is the angle at the first vertex.
"""

from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass

from spherical_overage.airports import get_airport
from spherical_overage.config import EARTH_RADIUS
from spherical_overage.geo import Coordinates, distance
from spherical_overage.triangles import TriangleAngles, plane_angles, spherical_angles

logger = logging.getLogger(__name__)

# Airports compared in the default distance table.
DEFAULT_CODES = ["HND", "JFK", "LHR", "SFO", "SYD"]


class PointParseError(ValueError):
    """Raised when a point is neither an airport code nor a LAT,LON pair."""


def resolve_point(text: str) -> tuple[str, Coordinates]:
    """Turn ``"JFK"`` or ``"40.64,-73.78"`` into a label and coordinates."""
    if "," in text:
        lat_s, _, lon_s = text.partition(",")
        try:
            lat, lon = float(lat_s), float(lon_s)
        except ValueError:
            raise PointParseError(f"Cannot parse '{text}' as LAT,LON degrees") from None
        return f"({lat:g}, {lon:g})", Coordinates.from_degrees(lat, lon)

    airport = get_airport(text)
    return airport.code, airport.coordinates


def distance_matrix(
    codes: list[str] | None = None,
    radius: float = EARTH_RADIUS,
) -> dict[tuple[str, str], float]:
    """Great-circle distance for every unordered pair of airports."""
    airports = [get_airport(c) for c in (codes or DEFAULT_CODES)]
    matrix: dict[tuple[str, str], float] = {}
    for p, q in itertools.combinations(airports, 2):
        matrix[(p.code, q.code)] = distance(p.coordinates, q.coordinates, radius)
    logger.debug("Computed %d pairwise distances", len(matrix))
    return matrix


@dataclass
class TriangleComparison:
    """Spherical and planar angles for the same three side lengths."""

    vertices: tuple[str, str, str]
    sides: tuple[float, float, float]
    spherical: TriangleAngles
    plane: TriangleAngles

    @property
    def overage(self) -> float:
        """How many degrees the sphere's angle sum exceeds the plane's."""
        return self.spherical.total - self.plane.total


def compare_sides(
    sides: tuple[float, float, float],
    vertices: tuple[str, str, str] = ("A", "B", "C"),
    radius: float = EARTH_RADIUS,
    strict: bool = False,
) -> TriangleComparison:
    A, B, C = sides
    return TriangleComparison(
        vertices=vertices,
        sides=sides,
        spherical=spherical_angles(A, B, C, radius=radius, strict=strict),
        plane=plane_angles(A, B, C, strict=strict),
    )


def compare_triangle(
    p: str,
    q: str,
    r: str,
    radius: float = EARTH_RADIUS,
    strict: bool = False,
) -> TriangleComparison:
    """Compare the triangle through three points (codes or LAT,LON pairs)."""
    (lp, cp), (lq, cq), (lr, cr) = resolve_point(p), resolve_point(q), resolve_point(r)
    sides = (distance(cq, cr, radius), distance(cp, cr, radius), distance(cp, cq, radius))
    result = compare_sides(sides, vertices=(lp, lq, lr), radius=radius, strict=strict)
    logger.info("Triangle %s/%s/%s overage %.6f deg", lp, lq, lr, result.overage)
    return result


@dataclass
class SanityCheck:
    """A named computation with the angle sum it is expected to land near."""

    label: str
    angles: TriangleAngles
    expected_total: float | None = None

    @property
    def passed(self) -> bool | None:
        if self.expected_total is None:
            return None
        return math.isclose(self.angles.total, self.expected_total, abs_tol=1e-4)


def sanity_checks(radius: float = EARTH_RADIUS) -> list[SanityCheck]:
    """The fixed set of checks used to eyeball the math."""
    quarter_circle = radius * math.pi / 2.0
    checks = [
        SanityCheck("plane 1,1,1", plane_angles(1.0, 1.0, 1.0), 180.0),
        SanityCheck("spherical 1,1,1", spherical_angles(1.0, 1.0, 1.0, radius=radius), 180.0),
        SanityCheck(
            "spherical octant",
            spherical_angles(quarter_circle, quarter_circle, quarter_circle, radius=radius),
            270.0,
        ),
    ]
    for vertices in (("HND", "SFO", "SYD"), ("JFK", "SFO", "LHR"), ("NPOLE", "PER", "SYD")):
        cmp = compare_triangle(*vertices, radius=radius)
        name = "/".join(vertices)
        checks.append(SanityCheck(f"plane {name}", cmp.plane, 180.0))
        checks.append(SanityCheck(f"spherical {name}", cmp.spherical))
    return checks
