#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Lecteur vidéo intégré pour VisionTrack.
Fournit l'horloge de lecture lue par le planificateur de synchronisation.
"""

import logging
import os

from PyQt6.QtCore import Qt, QUrl
from PyQt6.QtMultimedia import QAudioOutput, QMediaPlayer
from PyQt6.QtMultimediaWidgets import QVideoWidget
from PyQt6.QtWidgets import QGroupBox, QHBoxLayout, QLabel, QPushButton, QSlider, QStyle, QVBoxLayout

from visiontrack.app.config import SEEK_STEP_SECONDS
from visiontrack.infra.qt.playback_clock import QtPlaybackClock

from .theme.styles import GROUPBOX_STYLE

logger = logging.getLogger(__name__)


class VideoPlayerWidget(QGroupBox):
    """Widget de lecture vidéo (lecture/pause, ±5 s, curseur de position)."""

    def __init__(self, parent=None):
        super().__init__("Lecteur Vidéo", parent)
        self.setStyleSheet(GROUPBOX_STYLE)

        self.media_player = QMediaPlayer()
        self.audio_output = QAudioOutput()
        self.audio_output.setVolume(0.5)
        self.media_player.setAudioOutput(self.audio_output)

        self.video_widget = QVideoWidget()
        self.video_widget.setMinimumHeight(200)
        self.media_player.setVideoOutput(self.video_widget)

        self.clock = QtPlaybackClock(self.media_player)
        self.current_video_path = None

        self._init_ui()

        self.media_player.positionChanged.connect(self._on_position_changed)
        self.media_player.durationChanged.connect(self._on_duration_changed)
        self.media_player.playbackStateChanged.connect(self._update_buttons)
        self.media_player.errorOccurred.connect(self._on_error)

    def _init_ui(self):
        layout = QVBoxLayout(self)
        layout.setSpacing(5)
        layout.setContentsMargins(10, 15, 10, 10)

        self.lbl_video_name = QLabel("—")
        self.lbl_video_name.setToolTip("Vidéo sélectionnée")
        layout.addWidget(self.lbl_video_name)
        layout.addWidget(self.video_widget)

        controls_layout = QHBoxLayout()
        controls_layout.setContentsMargins(0, 0, 0, 0)

        self.btn_play = QPushButton()
        self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPlay))
        self.btn_play.setFixedSize(30, 30)
        self.btn_play.clicked.connect(self.play_pause)
        self.btn_play.setEnabled(False)

        self.btn_back = QPushButton(f"< {SEEK_STEP_SECONDS}s")
        self.btn_back.clicked.connect(self.seek_backward)
        self.btn_forward = QPushButton(f"> {SEEK_STEP_SECONDS}s")
        self.btn_forward.clicked.connect(self.seek_forward)

        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setRange(0, 0)
        self.slider.sliderMoved.connect(self.media_player.setPosition)

        self.lbl_current = QLabel("00:00")
        self.lbl_duration = QLabel("00:00")

        controls_layout.addWidget(self.btn_play)
        controls_layout.addWidget(self.btn_back)
        controls_layout.addWidget(self.btn_forward)
        controls_layout.addWidget(self.lbl_current)
        controls_layout.addWidget(self.slider)
        controls_layout.addWidget(self.lbl_duration)
        layout.addLayout(controls_layout)

    def load_video(self, path: str, autoplay: bool = True) -> bool:
        """Charge une vidéo; False si le fichier n'existe pas."""
        if not os.path.exists(path):
            logger.error("Vidéo introuvable: %s", path)
            return False

        self.media_player.stop()
        self.current_video_path = path
        self.lbl_video_name.setText(os.path.basename(path))
        self.lbl_video_name.setToolTip(path)
        self.media_player.setSource(QUrl.fromLocalFile(path))
        self.btn_play.setEnabled(True)
        logger.info("Vidéo chargée: %s", path)

        if autoplay:
            self.media_player.play()
        return True

    def play_pause(self):
        if self.media_player.mediaStatus() == QMediaPlayer.MediaStatus.EndOfMedia:
            # Relancer depuis le début une vidéo terminée
            self.media_player.setPosition(0)
            self.media_player.play()
        elif self.media_player.playbackState() == QMediaPlayer.PlaybackState.PlayingState:
            self.media_player.pause()
        else:
            self.media_player.play()

    def seek_backward(self):
        self.seek_to(max(0.0, self.clock.current_seconds() - SEEK_STEP_SECONDS))

    def seek_forward(self):
        self.seek_to(self.clock.current_seconds() + SEEK_STEP_SECONDS)

    def seek_to(self, seconds: float, play: bool = False):
        """Positionne la lecture (secondes depuis le début de la vidéo)."""
        self.media_player.setPosition(int(seconds * 1000))
        if play and not self.clock.is_playing():
            self.media_player.play()

    def _update_buttons(self):
        if self.clock.is_playing():
            self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPause))
        else:
            self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPlay))

    def _on_position_changed(self, position):
        if not self.slider.isSliderDown():
            self.slider.setValue(position)
        self.lbl_current.setText(self._format_time(position))

    def _on_duration_changed(self, duration):
        self.slider.setRange(0, duration)
        self.lbl_duration.setText(self._format_time(duration))

    def _format_time(self, ms):
        seconds = (ms // 1000) % 60
        minutes = (ms // 60000)
        return f"{minutes:02}:{seconds:02}"

    def _on_error(self):
        logger.error("Erreur lecture vidéo: %s - %s", self.media_player.error(), self.media_player.errorString())

    def close_player(self):
        """Arrête la lecture."""
        self.media_player.stop()
        self.media_player.setSource(QUrl())
        self.current_video_path = None
