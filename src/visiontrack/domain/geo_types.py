#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Types de données géographiques pour VisionTrack.
Définit les dataclasses utilisées dans toute l'application.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional


# Instant "le plus ancien possible" affecté aux points sans horodatage.
EPOCH_SENTINEL: datetime = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class GeoSample:
    """
    Représente un point de trace unique.

    Attributes:
        latitude: Latitude en degrés décimaux (-90..90)
        longitude: Longitude en degrés décimaux (-180..180)
        elevation: Altitude en mètres (None si absente de la source)
        timestamp: Horodatage UTC (EPOCH_SENTINEL si absent de la source)
    """
    latitude: float
    longitude: float
    elevation: Optional[float] = None
    timestamp: datetime = EPOCH_SENTINEL

    def has_time(self) -> bool:
        """Vérifie si la source fournissait un horodatage."""
        return self.timestamp != EPOCH_SENTINEL

    def is_valid(self) -> bool:
        """Vérifie si le point a des coordonnées dans les bornes."""
        return -90 <= self.latitude <= 90 and -180 <= self.longitude <= 180


@dataclass(frozen=True)
class ZoneDescriptor:
    """Zone UTM (numéro 1..60 + hémisphère) utilisée pour une session."""
    zone_number: int
    hemisphere_north: bool

    @property
    def central_meridian(self) -> float:
        """Méridien central de la zone, en degrés."""
        return self.zone_number * 6 - 183

    def __str__(self) -> str:
        return f"{self.zone_number}{'N' if self.hemisphere_north else 'S'}"


@dataclass(frozen=True)
class PlanarPoint:
    """Coordonnées planes (UTM) d'un point, en mètres."""
    easting: float
    northing: float
    elevation: float = 0.0

    def distance_to(self, other: "PlanarPoint") -> float:
        """Distance euclidienne 3D entre deux points plans."""
        return math.sqrt(
            (self.easting - other.easting) ** 2
            + (self.northing - other.northing) ** 2
            + (self.elevation - other.elevation) ** 2
        )


@dataclass
class MarkerState:
    """
    État du marqueur "position courante".

    Attributes:
        identity: Référence opaque vers l'entité de la scène (None = absent)
        last_planar_position: Dernière position écrite dans la scène
    """
    identity: Optional[Any] = None
    last_planar_position: Optional[PlanarPoint] = None

    @property
    def is_present(self) -> bool:
        return self.identity is not None

    def reset(self) -> None:
        """Repasse à l'état absent (entité effacée côté scène)."""
        self.identity = None
        self.last_planar_position = None
