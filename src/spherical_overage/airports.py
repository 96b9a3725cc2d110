"""Registry of named points used to build example triangles.

Airport coordinates come from WolframAlpha.
"""

from __future__ import annotations

from dataclasses import dataclass

from spherical_overage.geo import Coordinates


@dataclass(frozen=True)
class Airport:
    """A named location given in decimal degrees."""

    code: str
    name: str
    lat_deg: float
    lon_deg: float

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates.from_degrees(self.lat_deg, self.lon_deg)


class UnknownAirportError(KeyError):
    """Raised when a code is not in the registry."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown airport code '{code}' (known: {', '.join(AIRPORTS)})")

    def __str__(self) -> str:
        return self.args[0]


AIRPORTS: dict[str, Airport] = {
    "HND": Airport("HND", "Tokyo International Airport", 35.55, 139.8),
    "JFK": Airport("JFK", "New York JFK Airport", 40.64, -73.78),
    "LHR": Airport("LHR", "London Heathrow Airport", 51.48, -0.4614),
    "SFO": Airport("SFO", "San Francisco International Airport", 37.62, -122.4),
    "SYD": Airport("SYD", "Sydney International Airport", -33.95, 151.2),
    "PER": Airport("PER", "Perth Airport", -31.96, 115.8),
    "NPOLE": Airport("NPOLE", "North Pole", 90.0, 0.0),
}


def get_airport(code: str) -> Airport:
    """Look up an airport by code, ignoring case."""
    try:
        return AIRPORTS[code.strip().upper()]
    except KeyError:
        raise UnknownAirportError(code) from None
