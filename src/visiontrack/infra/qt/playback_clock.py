from __future__ import annotations

from PyQt6.QtMultimedia import QMediaPlayer


class QtPlaybackClock:
    """Horloge de lecture lue sur un QMediaPlayer (position en ms)."""

    def __init__(self, media_player: QMediaPlayer) -> None:
        self.media_player = media_player

    def current_seconds(self) -> float:
        return self.media_player.position() / 1000.0

    def is_playing(self) -> bool:
        return self.media_player.playbackState() == QMediaPlayer.PlaybackState.PlayingState

    def has_media(self) -> bool:
        return not self.media_player.source().isEmpty()
