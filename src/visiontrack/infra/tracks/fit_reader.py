#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Lecteur de fichiers Garmin .fit pour VisionTrack.
Extrait les points GPS des messages "record".
"""

import logging
import os
from datetime import timezone
from typing import List, Optional

from fitparse import FitFile, FitParseError

from visiontrack.core.errors import TrackParseError
from visiontrack.domain.geo_types import EPOCH_SENTINEL, GeoSample


# Constante de conversion semicircles -> degrés
SEMICIRCLES_TO_DEGREES: float = 180.0 / (2 ** 31)

logger = logging.getLogger(__name__)


class FitTrackReader:
    """Lecteur .fit basé sur la bibliothèque fitparse."""

    def read(self, path: str) -> List[GeoSample]:
        """
        Raises:
            TrackParseError: Fichier absent, illisible ou corrompu
        """
        if not os.path.exists(path):
            raise TrackParseError(path, "fichier introuvable")

        try:
            fit_file = FitFile(path)
            samples: List[GeoSample] = []
            # Parcourir les messages "record" qui contiennent les données GPS
            for record in fit_file.get_messages("record"):
                sample = self._extract_sample_from_record(record)
                if sample is not None and sample.is_valid():
                    samples.append(sample)
        except (FitParseError, OSError) as e:
            raise TrackParseError(path, str(e)) from e

        logger.info("Fichier .fit lu: %d points GPS trouvés", len(samples))
        return samples

    def _extract_sample_from_record(self, record) -> Optional[GeoSample]:
        """Convertit un enregistrement fitparse; None sans position."""
        lat_semicircles = None
        lon_semicircles = None
        elevation = None
        timestamp = None

        for field in record:
            if field.value is None:
                continue
            if field.name == "position_lat":
                lat_semicircles = field.value
            elif field.name == "position_long":
                lon_semicircles = field.value
            elif field.name in ("altitude", "enhanced_altitude"):
                elevation = float(field.value)
            elif field.name == "timestamp":
                # Les timestamps .fit sont en UTC
                timestamp = field.value
                if timestamp.tzinfo is None:
                    timestamp = timestamp.replace(tzinfo=timezone.utc)

        if lat_semicircles is None or lon_semicircles is None:
            return None

        return GeoSample(
            latitude=lat_semicircles * SEMICIRCLES_TO_DEGREES,
            longitude=lon_semicircles * SEMICIRCLES_TO_DEGREES,
            elevation=elevation,
            timestamp=timestamp if timestamp is not None else EPOCH_SENTINEL,
        )
