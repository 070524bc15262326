#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Export CSV de la correspondance point GPS <-> coordonnées UTM <-> seconde vidéo.
"""

import csv
import logging
import os
from typing import Sequence

from visiontrack.core.models.track_timeline import TrackTimeline
from visiontrack.domain.geo_types import PlanarPoint

logger = logging.getLogger(__name__)

CSV_HEADER = ["Index", "Latitude", "Longitude", "Easting", "Northing", "Altitude", "Time", "VideoSecond"]


def mapping_csv_path(track_path: str) -> str:
    """Chemin `<dossier>/<nom>_mapping.csv` à côté du fichier de trace."""
    folder = os.path.dirname(track_path)
    stem, _ = os.path.splitext(os.path.basename(track_path))
    return os.path.join(folder, f"{stem}_mapping.csv")


def export_mapping_csv(path: str, timeline: TrackTimeline, route: Sequence[PlanarPoint]) -> str:
    """
    Écrit une ligne par point (altitude vide si absente, temps ISO 8601).

    Returns:
        Le chemin écrit
    """
    if len(route) != len(timeline):
        raise ValueError("La route projetée ne correspond pas à la trace")

    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for i, (sample, point) in enumerate(zip(timeline, route)):
            writer.writerow([
                i,
                repr(sample.latitude),
                repr(sample.longitude),
                repr(point.easting),
                repr(point.northing),
                repr(sample.elevation) if sample.elevation is not None else "",
                sample.timestamp.isoformat() if sample.has_time() else "",
                repr(timeline.relative_seconds(i)),
            ])

    logger.info("CSV généré: %s", path)
    return path
