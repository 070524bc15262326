import math

import pytest

from visiontrack.core.errors import MalformedZoneError
from visiontrack.core.geodesy.utm_projection import (
    FALSE_EASTING,
    FALSE_NORTHING_SOUTH,
    infer_zone,
    parse_zone_descriptor,
    project,
    project_sample,
    resolve_zone,
    unproject,
)
from visiontrack.domain.geo_types import GeoSample, ZoneDescriptor


@pytest.mark.parametrize(
    "text, number, north",
    [("17S", 17, False), ("3N", 3, True), ("3n", 3, True), (" 60s ", 60, False), ("1N", 1, True)],
)
def test_parse_zone_descriptor_accepts_compact_forms(text, number, north):
    zone = parse_zone_descriptor(text)
    assert zone == ZoneDescriptor(number, north)


@pytest.mark.parametrize("text", ["", "   ", "X", "17", "N", "61N", "0S", "-3N", "1.5N", None])
def test_parse_zone_descriptor_rejects_malformed(text):
    with pytest.raises(MalformedZoneError):
        parse_zone_descriptor(text)


def test_malformed_zone_is_a_value_error():
    with pytest.raises(ValueError):
        parse_zone_descriptor("abc")


def test_zone_str_and_central_meridian():
    zone = ZoneDescriptor(17, False)
    assert str(zone) == "17S"
    assert zone.central_meridian == -81


@pytest.mark.parametrize(
    "lat, lon, expected",
    [
        (40.0, -81.0, ZoneDescriptor(17, True)),
        (-33.9, 151.2, ZoneDescriptor(56, False)),
        (0.0, -180.0, ZoneDescriptor(1, True)),
        (10.0, 180.0, ZoneDescriptor(60, True)),
        (-0.5, 2.0, ZoneDescriptor(31, False)),
    ],
)
def test_infer_zone(lat, lon, expected):
    assert infer_zone(lat, lon) == expected


def test_resolve_zone_blank_text_infers_from_reference():
    ref = GeoSample(latitude=-12.0, longitude=-77.0)
    assert resolve_zone("  ", ref) == ZoneDescriptor(18, False)
    assert resolve_zone("17N", ref) == ZoneDescriptor(17, True)


def test_project_on_central_meridian_at_equator():
    point = project(0.0, -81.0, ZoneDescriptor(17, True))
    assert point.easting == pytest.approx(FALSE_EASTING, abs=1e-6)
    assert point.northing == pytest.approx(0.0, abs=1e-6)


def test_southern_zone_adds_false_northing_regardless_of_latitude_sign():
    north = project(1.0, -80.0, ZoneDescriptor(17, True))
    south = project(1.0, -80.0, ZoneDescriptor(17, False))
    assert south.northing - north.northing == pytest.approx(FALSE_NORTHING_SOUTH)
    assert south.easting == pytest.approx(north.easting)


def test_easting_is_symmetric_about_central_meridian():
    zone = ZoneDescriptor(17, True)
    east = project(45.0, -79.0, zone)
    west = project(45.0, -83.0, zone)
    assert east.easting - FALSE_EASTING == pytest.approx(FALSE_EASTING - west.easting, abs=1e-6)
    assert east.northing == pytest.approx(west.northing, abs=1e-6)


def test_project_rejects_out_of_range_zone():
    with pytest.raises(MalformedZoneError):
        project(10.0, 10.0, ZoneDescriptor(0, True))


def test_project_sample_uses_zero_for_missing_elevation():
    zone = ZoneDescriptor(17, True)
    assert project_sample(GeoSample(40.0, -81.0), zone).elevation == 0.0
    assert project_sample(GeoSample(40.0, -81.0, elevation=250.5), zone).elevation == 250.5


@pytest.mark.parametrize("lat", [-60.0, -33.9, -1.0, 0.5, 25.0, 48.8, 70.0])
@pytest.mark.parametrize("offset", [-2.9, -1.0, 0.0, 1.5, 2.9])
def test_round_trip_within_a_zone(lat, offset):
    zone = ZoneDescriptor(17, lat >= 0)
    lon = zone.central_meridian + offset
    point = project(lat, lon, zone)
    lat2, lon2 = unproject(point.easting, point.northing, zone)
    # 2e-7 degré ~ 2 cm
    assert lat2 == pytest.approx(lat, abs=2e-7)
    assert lon2 == pytest.approx(lon, abs=2e-7)


def test_planar_distance_matches_ground_distance_near_meridian():
    zone = ZoneDescriptor(17, True)
    a = project(40.0, -81.0, zone)
    b = project(40.001, -81.0, zone)
    # 0.001° de latitude ~ 111 m, facteur d'échelle 0.9996
    assert math.isclose(b.northing - a.northing, 111.0, rel_tol=0.01)
