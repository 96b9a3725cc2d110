"""Spherical-earth coordinates and great-circle distance.

Earth is modelled as a perfect sphere of radius ``EARTH_RADIUS`` (no WGS84
correction). All trig runs through numpy so that domain errors surface as
NaN instead of exceptions.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from spherical_overage.config import EARTH_RADIUS

logger = logging.getLogger(__name__)

DEG_TO_RAD = math.pi / 180.0


@dataclass(frozen=True)
class Coordinates:
    """A point on the sphere, stored in radians."""

    lat: float
    lon: float

    @classmethod
    def from_degrees(cls, lat: float, lon: float) -> Coordinates:
        # Out-of-range degrees are accepted as given.
        return cls(lat=lat * DEG_TO_RAD, lon=lon * DEG_TO_RAD)

    @property
    def lat_degrees(self) -> float:
        return self.lat / DEG_TO_RAD

    @property
    def lon_degrees(self) -> float:
        return self.lon / DEG_TO_RAD


def make_coordinate(lat_deg: float, lon_deg: float) -> Coordinates:
    """Build a Coordinates value from decimal degrees."""
    return Coordinates.from_degrees(lat_deg, lon_deg)


def hav(x: float) -> float:
    """Haversine function, sin(x/2)^2."""
    s = np.sin(x / 2.0)
    return s * s


def distance(p: Coordinates, q: Coordinates, radius: float = EARTH_RADIUS) -> float:
    """Great-circle distance between two points, in the unit of ``radius``.

    Haversine formula, see https://en.wikipedia.org/wiki/Great-circle_distance.
    The argument to ``sqrt`` is not clamped, so a rounding overshoot past 1.0
    for near-antipodal points yields NaN.
    """
    with np.errstate(invalid="ignore"):
        h = hav(abs(p.lat - q.lat)) + np.cos(p.lat) * np.cos(q.lat) * hav(abs(p.lon - q.lon))
        d = float(radius * 2.0 * np.arcsin(np.sqrt(h)))

    if math.isnan(d):
        logger.warning("distance(%s, %s) is NaN (haversine term %r)", p, q, float(h))
    return d
