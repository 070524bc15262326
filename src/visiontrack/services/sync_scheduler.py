#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Planificateur de synchronisation vidéo <-> trace.

À chaque tick (QTimer, 100 ms par défaut): lit l'horloge du lecteur, cherche
le point le plus proche, place le marqueur et publie la télémétrie.
Un seul fil d'exécution (boucle d'événements Qt), ticks non réentrants.
"""

import logging
import threading
from typing import Callable, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from visiontrack.app.config import SYNC_INTERVAL_MS
from visiontrack.core.models.sync_models import SchedulerState, SyncSnapshot, TickReport
from visiontrack.core.ports.playback_clock import PlaybackClockPort
from visiontrack.core.ports.scene_sink import SceneSinkPort
from visiontrack.core.ports.telemetry import TelemetrySinkPort
from visiontrack.core.usecases.marker_state import MarkerStateController
from visiontrack.core.usecases.nearest_sample import NearestSampleMatcher

logger = logging.getLogger(__name__)

NOTHING_TO_SYNC_MESSAGE = "Reproduisez une vidéo ou chargez une trace pour synchroniser."


class SyncScheduler(QObject):
    """
    Processus périodique à deux états (Stopped / Running).

    start() et stop() sont idempotents. Après stop(), aucun tick déjà en
    file dans la boucle d'événements n'est exécuté.
    """

    running_changed = pyqtSignal(bool)
    nothing_to_sync = pyqtSignal(str)

    def __init__(
        self,
        clock: PlaybackClockPort,
        snapshot_provider: Callable[[], Optional[SyncSnapshot]],
        marker_controller: MarkerStateController,
        scene: SceneSinkPort,
        telemetry: TelemetrySinkPort,
        interval_ms: int = SYNC_INTERVAL_MS,
        lock: Optional[threading.RLock] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.clock = clock
        self.snapshot_provider = snapshot_provider
        self.marker_controller = marker_controller
        self.scene = scene
        self.telemetry = telemetry
        self.matcher = NearestSampleMatcher()

        self._lock = lock or threading.RLock()
        self._state = SchedulerState.STOPPED
        self._in_tick = False

        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == SchedulerState.RUNNING

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def start(self) -> bool:
        """
        Stopped -> Running si une vidéo est en lecture ou une trace chargée.

        Returns:
            True si le planificateur tourne après l'appel
        """
        if self.is_running:
            return True

        video_playing = self.clock.has_media() and self.clock.is_playing()
        has_track = self.snapshot_provider() is not None
        if not (video_playing or has_track):
            logger.info("AutoSync: rien à synchroniser")
            self.nothing_to_sync.emit(NOTHING_TO_SYNC_MESSAGE)
            return False

        self._state = SchedulerState.RUNNING
        self._timer.start()
        logger.info("AutoSync: ON")
        self.running_changed.emit(True)
        return True

    def stop(self) -> None:
        """Running -> Stopped, sans condition."""
        if not self.is_running:
            return
        # L'état passe en premier: un timeout déjà en file sera ignoré
        self._state = SchedulerState.STOPPED
        self._timer.stop()
        logger.info("AutoSync: OFF")
        self.running_changed.emit(False)

    def toggle(self) -> bool:
        if self.is_running:
            self.stop()
            return False
        return self.start()

    def _on_timeout(self) -> None:
        if not self.is_running:
            return
        self.tick()

    def tick(self) -> Optional[TickReport]:
        """
        Un pas de synchronisation. Ne lève jamais: une erreur est journalisée
        et le tick suivant repart de zéro.

        Returns:
            TickReport, ou None si le tick n'a rien fait
        """
        if not self.is_running or self._in_tick:
            return None

        self._in_tick = True
        try:
            return self._run_tick()
        except Exception:
            logger.exception("Erreur pendant le tick de synchronisation")
            return None
        finally:
            self._in_tick = False

    def _run_tick(self) -> Optional[TickReport]:
        if not self.clock.is_playing():
            return None

        video_seconds = self.clock.current_seconds()
        snapshot = self.snapshot_provider()
        if snapshot is None:
            logger.debug("Sync: Video=%.2fs (sans trace)", video_seconds)
            return None

        timeline = snapshot.timeline
        with self._lock:
            index = self.matcher.find(timeline, video_seconds)
            command = self.marker_controller.sync(
                timeline, index, snapshot.zone, self.scene, snapshot.settings
            )

        distance_km = timeline.cumulative_distance_km(index)
        self.telemetry.publish(index, distance_km)

        logger.debug(
            "Sync OK: Video=%.2fs -> point %d (%.3fs d'écart)",
            video_seconds, index, abs(timeline.relative_seconds(index) - video_seconds),
        )
        return TickReport(
            video_seconds=video_seconds,
            active_index=index,
            distance_km=distance_km,
            command=command,
        )
