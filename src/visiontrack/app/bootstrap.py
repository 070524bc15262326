from __future__ import annotations

import os
from typing import Sequence

from PyQt6.QtWidgets import QApplication

from visiontrack.app.config import APP_NAME, APP_VERSION, TRACK_EXTENSIONS, VIDEO_EXTENSIONS
from visiontrack.app.logging_setup import clear_log_file, default_log_file, setup_logging


def _first_with_extension(args: Sequence[str], extensions: Sequence[str]):
    for arg in args:
        if os.path.splitext(arg)[1].lower() in extensions:
            return arg
    return None


def run(argv: Sequence[str]) -> int:
    # Un debug.log neuf par session
    log_file = default_log_file()
    clear_log_file(log_file)
    setup_logging(log_file=log_file)

    app = QApplication(list(argv))
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    app.setOrganizationName(APP_NAME)
    app.setStyle("Fusion")

    from visiontrack.ui.main_window import MainWindow

    window = MainWindow()

    # `visiontrack sortie.gpx video.mp4`
    track_path = _first_with_extension(argv[1:], TRACK_EXTENSIONS)
    if track_path:
        window.load_track(track_path)
    video_path = _first_with_extension(argv[1:], VIDEO_EXTENSIONS)
    if video_path:
        window.video_player.load_video(video_path)

    window.show()
    return app.exec()
