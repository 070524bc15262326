"""Projection UTM (Transverse Mercator) sur l'ellipsoïde WGS84.

Variante "rapide" à séries fermées (formules USGS classiques):
- arc méridien au 6e ordre en e²
- termes auxiliaires T, C, A jusqu'à A^5 / A^6
- aucune itération, double précision, trigonométrie en radians

Précision centimétrique à l'intérieur d'une zone (±3° du méridien central).
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from visiontrack.core.errors import MalformedZoneError
from visiontrack.domain.geo_types import GeoSample, PlanarPoint, ZoneDescriptor

# Ellipsoïde WGS84
SEMI_MAJOR_AXIS: float = 6378137.0
FLATTENING: float = 1.0 / 298.257223563
E2: float = FLATTENING * (2.0 - FLATTENING)  # ≈ 6.69438e-3
EP2: float = E2 / (1.0 - E2)                  # excentricité seconde au carré

SCALE_FACTOR: float = 0.9996
FALSE_EASTING: float = 500000.0
FALSE_NORTHING_SOUTH: float = 10000000.0

MIN_ZONE: int = 1
MAX_ZONE: int = 60


def deg2rad(degrees: float) -> float:
    return degrees * math.pi / 180.0


def rad2deg(radians: float) -> float:
    return radians * 180.0 / math.pi


def _check_zone(zone: ZoneDescriptor) -> None:
    if not MIN_ZONE <= zone.zone_number <= MAX_ZONE:
        raise MalformedZoneError(zone.zone_number, f"numéro hors de {MIN_ZONE}..{MAX_ZONE}")


def _meridional_arc(lat_rad: float) -> float:
    e4 = E2 * E2
    e6 = e4 * E2
    return SEMI_MAJOR_AXIS * (
        (1 - E2 / 4 - 3 * e4 / 64 - 5 * e6 / 256) * lat_rad
        - (3 * E2 / 8 + 3 * e4 / 32 + 45 * e6 / 1024) * math.sin(2 * lat_rad)
        + (15 * e4 / 256 + 45 * e6 / 1024) * math.sin(4 * lat_rad)
        - (35 * e6 / 3072) * math.sin(6 * lat_rad)
    )


def project(lat: float, lon: float, zone: ZoneDescriptor, elevation: float = 0.0) -> PlanarPoint:
    """
    Projette (lat, lon) en coordonnées UTM dans la zone donnée.

    Le faux nord de 10 000 km est appliqué selon l'hémisphère de la zone,
    pas selon le signe de la latitude: une zone fixée pour la session donne
    un repère plan continu.

    Args:
        lat: Latitude en degrés
        lon: Longitude en degrés
        zone: Zone de projection
        elevation: Altitude recopiée dans le point plan

    Returns:
        PlanarPoint (easting, northing, elevation)

    Raises:
        MalformedZoneError: Numéro de zone hors de 1..60
    """
    _check_zone(zone)

    lat_rad = deg2rad(lat)
    lon_rad = deg2rad(lon)
    lon_origin_rad = deg2rad(zone.central_meridian)

    sin_lat = math.sin(lat_rad)
    cos_lat = math.cos(lat_rad)
    tan_lat = math.tan(lat_rad)

    n = SEMI_MAJOR_AXIS / math.sqrt(1 - E2 * sin_lat * sin_lat)
    t = tan_lat * tan_lat
    c = EP2 * cos_lat * cos_lat
    a = cos_lat * (lon_rad - lon_origin_rad)
    m = _meridional_arc(lat_rad)

    easting = SCALE_FACTOR * n * (
        a
        + (1 - t + c) * a ** 3 / 6
        + (5 - 18 * t + t * t + 72 * c - 58 * EP2) * a ** 5 / 120
    ) + FALSE_EASTING

    northing = SCALE_FACTOR * (
        m
        + n * tan_lat * (
            a * a / 2
            + (5 - t + 9 * c + 4 * c * c) * a ** 4 / 24
            + (61 - 58 * t + t * t + 600 * c - 330 * EP2) * a ** 6 / 720
        )
    )

    if not zone.hemisphere_north:
        northing += FALSE_NORTHING_SOUTH

    return PlanarPoint(easting=easting, northing=northing, elevation=elevation)


def project_sample(sample: GeoSample, zone: ZoneDescriptor) -> PlanarPoint:
    """Projette un GeoSample (altitude absente -> 0)."""
    elevation = sample.elevation if sample.elevation is not None else 0.0
    return project(sample.latitude, sample.longitude, zone, elevation)


def unproject(easting: float, northing: float, zone: ZoneDescriptor) -> Tuple[float, float]:
    """
    Projection inverse UTM -> (lat, lon) en degrés (série du point pied).

    Raises:
        MalformedZoneError: Numéro de zone hors de 1..60
    """
    _check_zone(zone)

    x = easting - FALSE_EASTING
    y = northing if zone.hemisphere_north else northing - FALSE_NORTHING_SOUTH

    e4 = E2 * E2
    e6 = e4 * E2
    mu = (y / SCALE_FACTOR) / (SEMI_MAJOR_AXIS * (1 - E2 / 4 - 3 * e4 / 64 - 5 * e6 / 256))

    sqrt_1_e2 = math.sqrt(1 - E2)
    e1 = (1 - sqrt_1_e2) / (1 + sqrt_1_e2)
    phi1 = (
        mu
        + (3 * e1 / 2 - 27 * e1 ** 3 / 32) * math.sin(2 * mu)
        + (21 * e1 ** 2 / 16 - 55 * e1 ** 4 / 32) * math.sin(4 * mu)
        + (151 * e1 ** 3 / 96) * math.sin(6 * mu)
        + (1097 * e1 ** 4 / 512) * math.sin(8 * mu)
    )

    sin_phi1 = math.sin(phi1)
    cos_phi1 = math.cos(phi1)
    tan_phi1 = math.tan(phi1)

    c1 = EP2 * cos_phi1 * cos_phi1
    t1 = tan_phi1 * tan_phi1
    denom = 1 - E2 * sin_phi1 * sin_phi1
    n1 = SEMI_MAJOR_AXIS / math.sqrt(denom)
    r1 = SEMI_MAJOR_AXIS * (1 - E2) / denom ** 1.5
    d = x / (n1 * SCALE_FACTOR)

    lat_rad = phi1 - (n1 * tan_phi1 / r1) * (
        d * d / 2
        - (5 + 3 * t1 + 10 * c1 - 4 * c1 * c1 - 9 * EP2) * d ** 4 / 24
        + (61 + 90 * t1 + 298 * c1 + 45 * t1 * t1 - 252 * EP2 - 3 * c1 * c1) * d ** 6 / 720
    )
    lon_rad = (
        d
        - (1 + 2 * t1 + c1) * d ** 3 / 6
        + (5 - 2 * c1 + 28 * t1 - 3 * c1 * c1 + 8 * EP2 + 24 * t1 * t1) * d ** 5 / 120
    ) / cos_phi1

    return rad2deg(lat_rad), zone.central_meridian + rad2deg(lon_rad)


def parse_zone_descriptor(text: Optional[str]) -> ZoneDescriptor:
    """
    Parse une zone compacte "<numéro><N|S>" (ex: "17S", "3n").

    Raises:
        MalformedZoneError: Chaîne vide, lettre d'hémisphère absente,
            numéro non entier ou hors de 1..60
    """
    if text is None:
        raise MalformedZoneError(text, "zone absente")

    s = text.strip().upper()
    if not s:
        raise MalformedZoneError(text, "zone vide")

    hemisphere = s[-1]
    if hemisphere not in ("N", "S"):
        raise MalformedZoneError(text, "hémisphère attendu N ou S")

    try:
        number = int(s[:-1])
    except ValueError:
        raise MalformedZoneError(text, "numéro de zone non entier") from None

    zone = ZoneDescriptor(zone_number=number, hemisphere_north=(hemisphere == "N"))
    _check_zone(zone)
    return zone


def infer_zone(lat: float, lon: float) -> ZoneDescriptor:
    """Déduit la zone UTM d'un point: floor((lon+180)/6)+1, nord si lat >= 0."""
    number = int(math.floor((lon + 180.0) / 6.0)) + 1
    number = max(MIN_ZONE, min(MAX_ZONE, number))
    return ZoneDescriptor(zone_number=number, hemisphere_north=(lat >= 0))


def resolve_zone(text: Optional[str], reference: GeoSample) -> ZoneDescriptor:
    """Zone explicite si renseignée, sinon auto-détection sur le point de référence."""
    if text is None or not text.strip():
        return infer_zone(reference.latitude, reference.longitude)
    return parse_zone_descriptor(text)
