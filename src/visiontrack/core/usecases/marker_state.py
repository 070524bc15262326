#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Contrôleur du marqueur "position courante".

Machine à deux états (Absent / Présent):
- Absent  -> Présent : CreateMarker, la scène renvoie une identité opaque
- Présent -> Présent : UpdateMarker si déplacement >= seuil, sinon NoOp
- Présent -> Absent  : la scène signale l'identité invalide (entité effacée)

Les échecs d'écriture dans la scène sont journalisés et jamais propagés:
le tick suivant réessaie avec des données fraîches.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from visiontrack.core.errors import SceneWriteError
from visiontrack.core.geodesy.utm_projection import project_sample
from visiontrack.core.models.sync_models import (
    CreateMarker,
    NoOp,
    PlacementCommand,
    SyncSettings,
    UpdateMarker,
)
from visiontrack.core.models.track_timeline import TrackTimeline
from visiontrack.core.ports.scene_sink import SceneSinkPort
from visiontrack.domain.geo_types import MarkerState, PlanarPoint, ZoneDescriptor

logger = logging.getLogger(__name__)

DEFAULT_MOVE_THRESHOLD = 0.1


def compute_heading(timeline: TrackTimeline, index: int, zone: ZoneDescriptor) -> float:
    """
    Cap en radians (0 = est, pi/2 = nord) dans le plan projeté.

    Utilise le point suivant s'il existe, sinon le précédent (sens inversé),
    sinon 0 pour une trace d'un seul point.
    """
    current = project_sample(timeline[index], zone)
    if index < len(timeline) - 1:
        nxt = project_sample(timeline[index + 1], zone)
        return math.atan2(nxt.northing - current.northing, nxt.easting - current.easting)
    if index > 0:
        prev = project_sample(timeline[index - 1], zone)
        return math.atan2(current.northing - prev.northing, current.easting - prev.easting)
    return 0.0


class MarkerStateController:
    """Possède l'unique MarkerState et décide création / mise à jour / rien."""

    def __init__(
        self,
        state: Optional[MarkerState] = None,
        move_threshold: float = DEFAULT_MOVE_THRESHOLD,
    ) -> None:
        self.state = state if state is not None else MarkerState()
        self.move_threshold = move_threshold

    def place(
        self,
        timeline: TrackTimeline,
        index: int,
        zone: ZoneDescriptor,
        scene: Optional[SceneSinkPort] = None,
        settings: Optional[SyncSettings] = None,
    ) -> PlacementCommand:
        """
        Calcule la commande de placement pour le point `index`.

        Ne modifie l'état que pour le repasser à Absent quand la scène
        déclare l'identité invalide; la position n'est mémorisée qu'après
        une écriture réussie (voir apply()).
        """
        if index < 0 or index >= len(timeline):
            return NoOp("index hors limites")

        if self.state.is_present and scene is not None and not scene.is_valid(self.state.identity):
            logger.info("Marqueur effacé de la scène, il sera recréé")
            self.state.reset()

        point = project_sample(timeline[index], zone)
        heading = compute_heading(timeline, index, zone)

        if not self.state.is_present:
            return CreateMarker(point=point, heading=heading)

        threshold = settings.move_threshold if settings is not None else self.move_threshold
        last = self.state.last_planar_position
        if last is not None and last.distance_to(point) < threshold:
            return NoOp("déplacement sous le seuil")

        return UpdateMarker(identity=self.state.identity, point=point, heading=heading)

    def apply(
        self,
        command: PlacementCommand,
        scene: SceneSinkPort,
        settings: Optional[SyncSettings] = None,
    ) -> None:
        """
        Exécute la commande dans la scène et valide l'état.

        Raises:
            SceneWriteError: La scène a levé une exception ou refusé la mise à jour
        """
        if isinstance(command, NoOp):
            return

        try:
            if isinstance(command, CreateMarker):
                identity = scene.create_marker_entity(command.point, command.heading, settings)
                if identity is None:
                    raise SceneWriteError("La scène n'a pas renvoyé d'identité")
                self._commit(identity, command.point)
            else:
                if not scene.update_marker_entity(command.identity, command.point, command.heading, settings):
                    raise SceneWriteError("La scène a refusé la mise à jour du marqueur")
                self._commit(command.identity, command.point)
        except SceneWriteError:
            raise
        except Exception as e:
            raise SceneWriteError(f"{type(e).__name__}: {e}") from e

    def sync(
        self,
        timeline: TrackTimeline,
        index: int,
        zone: ZoneDescriptor,
        scene: SceneSinkPort,
        settings: Optional[SyncSettings] = None,
    ) -> PlacementCommand:
        """place() + apply(); un échec de la scène est journalisé et renvoie NoOp."""
        command = self.place(timeline, index, zone, scene, settings)
        try:
            self.apply(command, scene, settings)
        except SceneWriteError as e:
            logger.error("Échec du placement du marqueur (index %d): %s", index, e)
            return NoOp("échec d'écriture")

        if isinstance(command, CreateMarker):
            logger.debug("Marqueur créé: UTM(%.1f, %.1f)", command.point.easting, command.point.northing)
        elif isinstance(command, UpdateMarker):
            logger.debug(
                "Marqueur: UTM(%.1f, %.1f), Z=%.1f, Ang=%.1f°",
                command.point.easting, command.point.northing,
                command.point.elevation, math.degrees(command.heading),
            )
        return command

    def _commit(self, identity: object, point: PlanarPoint) -> None:
        self.state.identity = identity
        self.state.last_planar_position = point
