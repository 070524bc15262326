from __future__ import annotations

import os
from typing import List

from visiontrack.app.config import DEFAULT_TIMEZONE
from visiontrack.core.errors import TrackParseError
from visiontrack.domain.geo_types import GeoSample
from visiontrack.infra.tracks.fit_reader import FitTrackReader
from visiontrack.infra.tracks.gpx_reader import GpxTrackReader


class TrackFileReader:
    """Source de trace: choisit le lecteur selon l'extension (.gpx / .fit)."""

    def __init__(self, local_timezone: str = DEFAULT_TIMEZONE) -> None:
        self._readers = {
            ".gpx": GpxTrackReader(local_timezone),
            ".fit": FitTrackReader(),
        }

    def read(self, path: str) -> List[GeoSample]:
        _, ext = os.path.splitext(path)
        reader = self._readers.get(ext.lower())
        if reader is None:
            raise TrackParseError(path, f"extension non supportée: {ext or '(aucune)'}")
        return reader.read(path)
