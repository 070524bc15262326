#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Persistance des réglages utilisateur de VisionTrack.
Zone UTM, style du marqueur et de la route, fichiers récents (QSettings).
"""

import os
from dataclasses import replace
from typing import List, Optional

from PyQt6.QtCore import QSettings

from visiontrack.app.config import (
    APP_NAME,
    DEFAULT_UTM_ZONE,
    MARKER_COLOR,
    MARKER_SIZE,
    MARKER_SIZE_MAX,
    MARKER_SIZE_MIN,
    MOVE_THRESHOLD,
    ROUTE_COLOR,
)
from visiontrack.core.models.sync_models import SyncSettings

MAX_RECENT_FILES = 10


class SettingsStore:
    """Lit et écrit les réglages; chaque lecture renvoie un instantané immuable."""

    def __init__(self, settings: Optional[QSettings] = None):
        self.settings = settings or QSettings(APP_NAME, f"{APP_NAME}_App")

    def load(self) -> SyncSettings:
        size = self.settings.value("marker/size", MARKER_SIZE, type=float)
        return SyncSettings(
            utm_zone=self.settings.value("sync/utm_zone", DEFAULT_UTM_ZONE, type=str),
            marker_size=min(MARKER_SIZE_MAX, max(MARKER_SIZE_MIN, size)),
            marker_color=self.settings.value("marker/color", MARKER_COLOR, type=str),
            route_color=self.settings.value("route/color", ROUTE_COLOR, type=str),
            move_threshold=MOVE_THRESHOLD,
        )

    def save(self, settings: SyncSettings) -> None:
        self.settings.setValue("sync/utm_zone", settings.utm_zone)
        self.settings.setValue("marker/size", float(settings.marker_size))
        self.settings.setValue("marker/color", settings.marker_color)
        self.settings.setValue("route/color", settings.route_color)
        self.settings.sync()

    def update(self, **changes) -> SyncSettings:
        """Applique des modifications (ex: utm_zone="18N") et les enregistre."""
        settings = replace(self.load(), **changes)
        self.save(settings)
        return settings

    def get_recent_files(self, key: str = "tracks") -> List[str]:
        """Fichiers récents encore présents sur le disque."""
        # QSettings retourne parfois une string simple si 1 seul élément
        recents = self.settings.value(f"recent/{key}", [], type=list)
        return [p for p in recents if os.path.exists(p)]

    def add_recent_file(self, filepath: str, key: str = "tracks") -> None:
        recents = self.get_recent_files(key)
        if filepath in recents:
            recents.remove(filepath)
        recents.insert(0, filepath)
        self.settings.setValue(f"recent/{key}", recents[:MAX_RECENT_FILES])
