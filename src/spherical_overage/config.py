"""Runtime configuration: Earth radius units and logging level."""

from __future__ import annotations

import os

# Mean radius of a spherical Earth, keyed by distance unit.
EARTH_RADII: dict[str, float] = {
    "mi": 3959.0,
    "km": 6371.0,
}

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def normalize_unit(unit: str) -> str:
    return unit.strip().lower()


DEFAULT_UNIT = normalize_unit(os.getenv("OVERAGE_UNIT", "mi"))
LOG_LEVEL = os.getenv("OVERAGE_LOG_LEVEL", "WARNING").strip().upper()


class UnknownUnitError(ValueError):
    """Raised when a distance unit has no configured Earth radius."""

    def __init__(self, unit: str):
        self.unit = unit
        super().__init__(f"Unknown unit '{unit}' (expected one of: {', '.join(EARTH_RADII)})")


def earth_radius(unit: str | None = None) -> float:
    """Mean Earth radius in the given unit (defaults to ``DEFAULT_UNIT``)."""
    unit = unit or DEFAULT_UNIT
    try:
        return EARTH_RADII[normalize_unit(unit)]
    except KeyError:
        raise UnknownUnitError(unit) from None


EARTH_RADIUS = earth_radius()
