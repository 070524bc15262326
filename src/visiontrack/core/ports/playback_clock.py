from __future__ import annotations

from typing import Protocol


class PlaybackClockPort(Protocol):
    """Horloge du lecteur vidéo, interrogée à chaque tick (jamais poussée)."""

    def current_seconds(self) -> float: ...

    def is_playing(self) -> bool: ...

    def has_media(self) -> bool: ...
