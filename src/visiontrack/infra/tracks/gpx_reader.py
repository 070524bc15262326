#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Lecteur de fichiers .gpx pour VisionTrack.
Extrait les points de trace (trkpt) dans l'ordre du fichier.
"""

import logging
import os
from typing import List

import gpxpy
import gpxpy.gpx

from visiontrack.core.errors import TrackParseError
from visiontrack.domain.geo_types import GeoSample
from visiontrack.infra.tracks.timestamps import ensure_utc

logger = logging.getLogger(__name__)


class GpxTrackReader:
    """
    Lecteur GPX basé sur gpxpy.

    Tous les segments de toutes les traces sont concaténés dans l'ordre du
    fichier; à défaut de trace, les points de route (rtept) sont utilisés.
    """

    def __init__(self, local_timezone: str = "UTC") -> None:
        self.local_timezone = local_timezone

    def read(self, path: str) -> List[GeoSample]:
        """
        Raises:
            TrackParseError: Fichier absent, illisible ou XML invalide
        """
        if not os.path.exists(path):
            raise TrackParseError(path, "fichier introuvable")

        try:
            with open(path, "r", encoding="utf-8") as f:
                gpx = gpxpy.parse(f)
        except (gpxpy.gpx.GPXException, UnicodeDecodeError, OSError) as e:
            raise TrackParseError(path, str(e)) from e

        samples: List[GeoSample] = []
        for track in gpx.tracks:
            for segment in track.segments:
                for p in segment.points:
                    samples.append(self._to_sample(p))

        if not samples:
            for route in gpx.routes:
                for p in route.points:
                    samples.append(self._to_sample(p))

        missing_time = sum(1 for s in samples if not s.has_time())
        if missing_time:
            logger.warning("%s: %d point(s) sans horodatage", os.path.basename(path), missing_time)

        logger.info("Fichier .gpx lu: %d points", len(samples))
        return samples

    def _to_sample(self, p) -> GeoSample:
        return GeoSample(
            latitude=float(p.latitude),
            longitude=float(p.longitude),
            elevation=float(p.elevation) if p.elevation is not None else None,
            timestamp=ensure_utc(p.time, self.local_timezone),
        )
