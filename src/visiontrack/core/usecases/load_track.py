from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from visiontrack.core.geodesy.utm_projection import project_sample, resolve_zone
from visiontrack.core.models.sync_models import TrackLoadResult, TrackSummary
from visiontrack.core.models.track_timeline import TrackTimeline
from visiontrack.core.ports.track_source import TrackSourcePort

logger = logging.getLogger(__name__)


@dataclass
class LoadTrackUseCase:
    """Use-case: lire une trace, construire la timeline et projeter la route."""

    track_source: TrackSourcePort

    def execute(self, path: str, zone_text: Optional[str]) -> TrackLoadResult:
        """
        Raises:
            TrackParseError: Fichier illisible
            EmptyTrackError: Aucun point dans le fichier
            MalformedZoneError: Zone renseignée invalide
        """
        samples = self.track_source.read(path)
        name = os.path.basename(path)
        timeline = TrackTimeline.build(samples, name=name)

        # Zone fixée une fois pour toute la session (explicite ou auto-détectée)
        zone = resolve_zone(zone_text, timeline[0])
        route = tuple(project_sample(s, zone) for s in timeline)

        summary = TrackSummary(
            name=name,
            point_count=len(timeline),
            start_time=timeline.start_time if timeline[0].has_time() else None,
            end_time=timeline.end_time if timeline[-1].has_time() else None,
            has_elevation=timeline.has_elevation(),
            total_distance_km=timeline.total_distance_km,
            zone=zone,
        )
        logger.info(
            "Route importée: %d points | Zone UTM %s | Altitude: %s",
            summary.point_count, zone, "activée" if summary.has_elevation else "non disponible",
        )
        return TrackLoadResult(timeline=timeline, zone=zone, route=route, summary=summary)
