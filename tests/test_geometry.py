"""Tests for coordinates, great-circle distance and the angle solvers."""

from __future__ import annotations

import math

import pytest

from spherical_overage.airports import AIRPORTS, UnknownAirportError, get_airport
from spherical_overage.config import EARTH_RADII, UnknownUnitError, earth_radius, normalize_unit
from spherical_overage.geo import Coordinates, distance, hav, make_coordinate
from spherical_overage.report import (
    PointParseError,
    compare_sides,
    compare_triangle,
    distance_matrix,
    resolve_point,
    sanity_checks,
)
from spherical_overage.triangles import (
    InvalidTriangleError,
    TriangleAngles,
    plane_angles,
    spherical_angles,
    validate_plane_triangle,
    validate_spherical_triangle,
)

MILES = EARTH_RADII["mi"]
KM = EARTH_RADII["km"]


def _reference_haversine(lat1, lon1, lat2, lon2, radius):
    rlat1, rlon1 = math.radians(lat1), math.radians(lon1)
    rlat2, rlon2 = math.radians(lat2), math.radians(lon2)
    a = math.sin((rlat2 - rlat1) / 2) ** 2 + math.cos(rlat1) * math.cos(rlat2) * math.sin((rlon2 - rlon1) / 2) ** 2
    return radius * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


# ── Config tests ─────────────────────────────────────────────────────────


class TestConfig:
    def test_known_units(self):
        assert earth_radius("mi") == 3959.0
        assert earth_radius("km") == 6371.0

    def test_unit_case_and_whitespace(self):
        assert normalize_unit(" KM ") == "km"
        assert earth_radius(" KM ") == 6371.0
        assert earth_radius("Mi") == 3959.0

    def test_unknown_unit(self):
        with pytest.raises(UnknownUnitError, match="furlong"):
            earth_radius("furlong")

    def test_unknown_unit_is_value_error(self):
        with pytest.raises(ValueError):
            earth_radius("nm")


# ── Coordinate tests ─────────────────────────────────────────────────────


class TestCoordinates:
    def test_degrees_to_radians(self):
        c = make_coordinate(90.0, -180.0)
        assert c.lat == pytest.approx(math.pi / 2)
        assert c.lon == pytest.approx(-math.pi)

    def test_degree_properties(self):
        c = Coordinates.from_degrees(35.55, 139.8)
        assert c.lat_degrees == pytest.approx(35.55)
        assert c.lon_degrees == pytest.approx(139.8)

    def test_out_of_range_accepted(self):
        c = make_coordinate(120.0, 400.0)
        assert c.lat == pytest.approx(120.0 * math.pi / 180)
        assert c.lon == pytest.approx(400.0 * math.pi / 180)

    def test_immutable(self):
        c = make_coordinate(1.0, 2.0)
        with pytest.raises(AttributeError):
            c.lat = 0.0

    def test_value_equality(self):
        assert make_coordinate(1.0, 2.0) == make_coordinate(1.0, 2.0)


# ── Distance tests ───────────────────────────────────────────────────────


class TestDistance:
    def test_hav(self):
        assert hav(0.0) == 0.0
        assert hav(math.pi) == pytest.approx(1.0)

    def test_same_point(self):
        for airport in AIRPORTS.values():
            assert distance(airport.coordinates, airport.coordinates) == 0.0

    def test_symmetric(self):
        coords = [a.coordinates for a in AIRPORTS.values()]
        for p in coords:
            for q in coords:
                assert distance(p, q) == distance(q, p)

    def test_non_negative(self):
        coords = [a.coordinates for a in AIRPORTS.values()]
        assert all(distance(p, q) >= 0 for p in coords for q in coords)

    def test_tokyo_to_jfk(self):
        d = distance(get_airport("HND").coordinates, get_airport("JFK").coordinates, radius=MILES)
        assert 6700 < d < 6800
        assert d == pytest.approx(_reference_haversine(35.55, 139.8, 40.64, -73.78, MILES), rel=1e-9)

    def test_pole_to_pole_is_half_circumference(self):
        d = distance(make_coordinate(90, 0), make_coordinate(-90, 0), radius=KM)
        assert d == pytest.approx(math.pi * KM)

    def test_equator_one_degree(self):
        d = distance(make_coordinate(0, 0), make_coordinate(0, 1), radius=KM)
        assert 110 < d < 113

    def test_unit_scales_with_radius(self):
        p, q = get_airport("LHR").coordinates, get_airport("SFO").coordinates
        assert distance(p, q, radius=KM) / distance(p, q, radius=MILES) == pytest.approx(KM / MILES)


# ── Planar solver tests ──────────────────────────────────────────────────


class TestPlaneAngles:
    def test_equilateral(self):
        result = plane_angles(1.0, 1.0, 1.0)
        for angle in result.angles():
            assert angle == pytest.approx(60.0, abs=1e-6)
        assert result.total == pytest.approx(180.0, abs=1e-6)

    def test_right_triangle_ordering(self):
        # 3-4-5: the right angle is opposite the side of length 5.
        a, b, c, total = plane_angles(3.0, 4.0, 5.0)
        assert c == pytest.approx(90.0)
        assert a == pytest.approx(math.degrees(math.asin(3 / 5)))
        assert total == pytest.approx(180.0)

    def test_triangle_inequality_gives_nan(self):
        result = plane_angles(1.0, 1.0, 10.0)
        assert any(math.isnan(x) for x in result.angles())
        assert result.is_degenerate

    def test_zero_side_does_not_raise(self):
        result = plane_angles(0.0, 1.0, 1.0)
        assert result.is_degenerate

    def test_strict_rejects(self):
        with pytest.raises(InvalidTriangleError) as exc_info:
            plane_angles(1.0, 1.0, 10.0, strict=True)
        assert any("triangle inequality" in e for e in exc_info.value.errors)

    def test_strict_accepts_valid(self):
        assert plane_angles(3.0, 4.0, 5.0, strict=True) == plane_angles(3.0, 4.0, 5.0)


# ── Spherical solver tests ───────────────────────────────────────────────


class TestSphericalAngles:
    def test_octant(self):
        quarter_circle = MILES * math.pi / 2
        result = spherical_angles(quarter_circle, quarter_circle, quarter_circle, radius=MILES)
        for angle in result.angles():
            assert angle == pytest.approx(90.0, abs=1e-4)
        assert result.total == pytest.approx(270.0, abs=1e-4)

    def test_small_triangle_approaches_plane(self):
        result = spherical_angles(1.0, 1.0, 1.0, radius=MILES)
        for angle in result.angles():
            assert angle == pytest.approx(60.0, abs=1e-4)
        assert result.total == pytest.approx(180.0, abs=1e-3)

    def test_excess_grows_with_size(self):
        small = spherical_angles(100.0, 100.0, 100.0, radius=MILES)
        large = spherical_angles(1000.0, 1000.0, 1000.0, radius=MILES)
        assert 0 < small.excess < large.excess

    def test_radius_is_explicit(self):
        sides = (1000.0, 1200.0, 900.0)
        in_km = spherical_angles(*(s * KM / MILES for s in sides), radius=KM)
        in_mi = spherical_angles(*sides, radius=MILES)
        assert in_km.total == pytest.approx(in_mi.total)

    def test_zero_side_does_not_raise(self):
        assert spherical_angles(0.0, 0.0, 0.0).is_degenerate

    def test_strict_rejects_long_side(self):
        errors = validate_spherical_triangle(MILES * 3.5, MILES * 3.4, MILES * 0.2, radius=MILES)
        assert any("half a great circle" in e for e in errors)
        with pytest.raises(InvalidTriangleError):
            spherical_angles(MILES * 3.5, MILES * 3.4, MILES * 0.2, radius=MILES, strict=True)

    def test_strict_rejects_bad_radius(self):
        assert validate_spherical_triangle(1.0, 1.0, 1.0, radius=0.0)


class TestValidation:
    def test_valid(self):
        assert validate_plane_triangle(3, 4, 5) == []
        assert validate_spherical_triangle(3, 4, 5, radius=MILES) == []

    def test_non_positive(self):
        errors = validate_plane_triangle(-1, 0, 5)
        assert len(errors) == 2

    def test_nan_side(self):
        assert validate_plane_triangle(float("nan"), 1, 1)

    def test_error_message(self):
        exc = InvalidTriangleError(["a", "b"])
        assert str(exc) == "Invalid triangle: a; b"


# ── Named record tests ───────────────────────────────────────────────────


class TestTriangleAngles:
    def test_unpacks_like_tuple(self):
        a, b, c, total = TriangleAngles(30.0, 60.0, 90.0, 180.0)
        assert (a, b, c, total) == (30.0, 60.0, 90.0, 180.0)

    def test_excess(self):
        assert TriangleAngles(90.0, 90.0, 90.0, 270.0).excess == 90.0

    def test_degenerate(self):
        assert TriangleAngles(float("nan"), 1.0, 1.0, float("nan")).is_degenerate
        assert not TriangleAngles(60.0, 60.0, 60.0, 180.0).is_degenerate


# ── Airport / report tests ───────────────────────────────────────────────


class TestAirports:
    def test_case_insensitive(self):
        assert get_airport("jfk") is AIRPORTS["JFK"]

    def test_unknown(self):
        with pytest.raises(UnknownAirportError, match="XYZ"):
            get_airport("XYZ")


class TestReport:
    def test_resolve_code(self):
        label, coords = resolve_point("SYD")
        assert label == "SYD"
        assert coords == AIRPORTS["SYD"].coordinates

    def test_resolve_lat_lon(self):
        label, coords = resolve_point("40.64,-73.78")
        assert coords == AIRPORTS["JFK"].coordinates
        assert "40.64" in label

    def test_resolve_garbage(self):
        with pytest.raises(PointParseError):
            resolve_point("north,east")

    def test_distance_matrix_pairs(self):
        matrix = distance_matrix(radius=MILES)
        assert len(matrix) == 10
        assert matrix[("HND", "JFK")] == distance(
            AIRPORTS["HND"].coordinates, AIRPORTS["JFK"].coordinates, MILES
        )

    def test_compare_triangle_angle_at_vertex(self):
        cmp = compare_triangle("HND", "SFO", "SYD", radius=MILES)
        hnd, sfo, syd = (AIRPORTS[c].coordinates for c in ("HND", "SFO", "SYD"))
        assert cmp.sides == (distance(sfo, syd, MILES), distance(hnd, syd, MILES), distance(hnd, sfo, MILES))
        assert cmp.plane.total == pytest.approx(180.0)
        assert cmp.spherical.total > 180.0
        assert cmp.overage == pytest.approx(cmp.spherical.total - cmp.plane.total)
        assert cmp.overage > 0

    def test_compare_sides_strict(self):
        with pytest.raises(InvalidTriangleError):
            compare_sides((1.0, 1.0, 10.0), strict=True)

    def test_sanity_checks_pass(self):
        checks = sanity_checks(MILES)
        assert all(c.passed in (True, None) for c in checks)
        labels = [c.label for c in checks]
        assert "spherical octant" in labels
        assert "spherical NPOLE/PER/SYD" in labels
