from __future__ import annotations

import os
from typing import List


def user_data_dir() -> str:
    """Dossier de données utilisateur (LOCALAPPDATA sous Windows, XDG ailleurs)."""
    base = os.environ.get("LOCALAPPDATA") or os.environ.get("XDG_DATA_HOME")
    if not base:
        base = os.path.join(os.path.expanduser("~"), ".local", "share")
    return os.path.join(base, APP_NAME)


TRACK_EXTENSIONS: List[str] = [".gpx", ".fit"]
VIDEO_EXTENSIONS: List[str] = [".mp4", ".avi"]

DEFAULT_TIMEZONE: str = "UTC"
DEFAULT_UTM_ZONE: str = "17S"

# Synchronisation
SYNC_INTERVAL_MS: int = 100
MOVE_THRESHOLD: float = 0.1   # unités du plan (m): en dessous, pas de réécriture
SEEK_STEP_SECONDS: int = 5

# Style du marqueur et de la route
MARKER_SIZE: float = 2.0
MARKER_SIZE_MIN: float = 0.1
MARKER_SIZE_MAX: float = 10.0
MARKER_COLOR: str = "#ff0000"
ROUTE_COLOR: str = "#0000ff"

LOG_FILE_NAME: str = "debug.log"
LOG_LEVEL_ENV: str = "VISIONTRACK_LOG_LEVEL"

APP_NAME: str = "VisionTrack"
APP_VERSION: str = "1.0.0"
