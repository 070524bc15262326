#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Worker QThread pour VisionTrack.
Charge la trace en arrière-plan pour ne pas bloquer l'UI.
"""

from PyQt6.QtCore import QThread, pyqtSignal

from visiontrack.core.errors import VisionTrackError
from visiontrack.services.sync_session import SyncSession


class TrackLoadWorker(QThread):
    """Worker dédié au chargement d'un fichier .gpx / .fit."""

    loaded = pyqtSignal(object)  # TrackLoadResult
    error = pyqtSignal(str)

    def __init__(self, session: SyncSession, track_path: str) -> None:
        super().__init__()
        self.session = session
        self.track_path = track_path

    def run(self) -> None:
        # Trace vide, zone invalide, fichier illisible: la trace précédente reste en place
        try:
            result = self.session.load_track(self.track_path)
        except VisionTrackError as e:
            self.error.emit(str(e))
        else:
            self.loaded.emit(result)
