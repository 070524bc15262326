#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Façade "application" utilisée par l'UI.

Objectif: l'UI PyQt ne doit pas connaître l'infra (gpxpy/fitparse/fs).
Le calcul est déporté dans `visiontrack.core` (usecases + ports).
"""

import logging
import threading
from dataclasses import replace
from typing import Optional, Tuple

from visiontrack.app.config import DEFAULT_TIMEZONE
from visiontrack.core.geodesy.utm_projection import parse_zone_descriptor, project_sample, resolve_zone
from visiontrack.core.models.sync_models import SyncSettings, SyncSnapshot, TrackLoadResult
from visiontrack.core.models.track_timeline import TrackTimeline
from visiontrack.core.ports.track_source import TrackSourcePort
from visiontrack.core.usecases.load_track import LoadTrackUseCase
from visiontrack.domain.geo_types import PlanarPoint, ZoneDescriptor
from visiontrack.infra.export.csv_export import export_mapping_csv, mapping_csv_path
from visiontrack.infra.tracks.track_reader import TrackFileReader

logger = logging.getLogger(__name__)


class SyncSession:
    """
    État partagé d'une session: trace courante, zone fixée, réglages.

    Toute mutation (chargement de trace, changement de zone) et chaque
    placement de marqueur passent par `lock`: la scène n'accepte qu'un
    écrivain à la fois.
    """

    def __init__(
        self,
        settings: Optional[SyncSettings] = None,
        track_source: Optional[TrackSourcePort] = None,
        local_timezone: str = DEFAULT_TIMEZONE,
    ) -> None:
        self.lock = threading.RLock()
        self._settings = settings or SyncSettings()
        self._track_source = track_source or TrackFileReader(local_timezone)

        self.track_path: Optional[str] = None
        self._timeline: Optional[TrackTimeline] = None
        self._zone: Optional[ZoneDescriptor] = None
        self._route: Tuple[PlanarPoint, ...] = ()

    @property
    def settings(self) -> SyncSettings:
        return self._settings

    @property
    def timeline(self) -> Optional[TrackTimeline]:
        return self._timeline

    @property
    def zone(self) -> Optional[ZoneDescriptor]:
        return self._zone

    @property
    def route(self) -> Tuple[PlanarPoint, ...]:
        return self._route

    def has_track(self) -> bool:
        return self._timeline is not None

    def load_track(self, path: str) -> TrackLoadResult:
        """
        Charge une trace et remplace la précédente.

        En cas d'échec l'exception remonte à l'appelant et la trace
        précédente (et le marqueur) restent inchangés.
        """
        usecase = LoadTrackUseCase(track_source=self._track_source)
        result = usecase.execute(path, self._settings.utm_zone)

        with self.lock:
            self.track_path = path
            self._timeline = result.timeline
            self._zone = result.zone
            self._route = result.route
        return result

    def update_settings(self, settings: SyncSettings) -> None:
        """
        Remplace les réglages. Un changement de zone re-projette la route.

        Raises:
            MalformedZoneError: Nouvelle zone invalide (réglages inchangés)
        """
        with self.lock:
            if settings.utm_zone != self._settings.utm_zone:
                if self._timeline is not None:
                    zone = resolve_zone(settings.utm_zone, self._timeline[0])
                    self._zone = zone
                    self._route = tuple(project_sample(s, zone) for s in self._timeline)
                    logger.info("Zone UTM %s sélectionnée", zone)
                elif settings.utm_zone.strip():
                    # Pas de trace: valider quand même la saisie
                    parse_zone_descriptor(settings.utm_zone)
            self._settings = settings

    def update_style(
        self,
        route_color: Optional[str] = None,
        marker_color: Optional[str] = None,
        marker_size: Optional[float] = None,
    ) -> SyncSettings:
        """Change couleurs / taille du marqueur; la zone et la route restent inchangées."""
        changes = {
            key: value
            for key, value in (
                ("route_color", route_color),
                ("marker_color", marker_color),
                ("marker_size", marker_size),
            )
            if value is not None
        }
        with self.lock:
            self._settings = replace(self._settings, **changes)
            return self._settings

    def set_zone(self, zone_text: str) -> Optional[ZoneDescriptor]:
        """Raccourci UI; renvoie la zone effective (None sans trace)."""
        self.update_settings(replace(self._settings, utm_zone=zone_text))
        return self._zone

    def snapshot(self) -> Optional[SyncSnapshot]:
        """Instantané pour un tick; None si aucune trace n'est chargée."""
        with self.lock:
            if self._timeline is None or self._zone is None:
                return None
            return SyncSnapshot(timeline=self._timeline, zone=self._zone, settings=self._settings)

    def export_csv(self, path: Optional[str] = None) -> Optional[str]:
        """Exporte la correspondance points/UTM/secondes (à côté de la trace par défaut)."""
        with self.lock:
            if self._timeline is None or self.track_path is None:
                return None
            target = path or mapping_csv_path(self.track_path)
            return export_mapping_csv(target, self._timeline, self._route)

    def get_summary(self) -> dict:
        """Retourne un résumé de la trace chargée."""
        timeline = self._timeline
        return {
            "track_points": len(timeline) if timeline else 0,
            "zone": str(self._zone) if self._zone else "",
            "total_distance_km": timeline.total_distance_km if timeline else 0.0,
            "duration_seconds": timeline.duration_seconds if timeline else 0.0,
            "has_elevation": timeline.has_elevation() if timeline else False,
        }
