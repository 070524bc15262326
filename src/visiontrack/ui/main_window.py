#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Fenêtre principale de l'application VisionTrack.
Orchestre le lecteur vidéo, la scène (route + marqueur), la grille des
points et le planificateur de synchronisation.
"""

import logging
import os
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QBrush, QColor, QIcon, QPixmap
from PyQt6.QtWidgets import (
    QColorDialog, QDockWidget, QFileDialog, QGraphicsScene, QHBoxLayout, QInputDialog, QLabel,
    QLineEdit, QMainWindow, QMenu, QMessageBox, QTableWidget, QTableWidgetItem, QToolBar,
    QToolButton, QWidget,
)

from visiontrack.app.config import (
    APP_NAME,
    APP_VERSION,
    MARKER_SIZE_MAX,
    MARKER_SIZE_MIN,
    TRACK_EXTENSIONS,
    VIDEO_EXTENSIONS,
)
from visiontrack.core.errors import MalformedZoneError
from visiontrack.core.models.sync_models import TrackLoadResult
from visiontrack.core.usecases.marker_state import MarkerStateController
from visiontrack.infra.qt.graphics_scene_sink import GraphicsSceneSink, scene_to_latlon, to_scene
from visiontrack.infra.qt.telemetry import SignalTelemetrySink
from visiontrack.services.settings_store import SettingsStore
from visiontrack.services.sync_scheduler import SyncScheduler
from visiontrack.services.sync_session import SyncSession
from visiontrack.workers.track_loader import TrackLoadWorker

from .route_view import RouteView
from .theme.styles import COLOR_SCENE_BG, WINDOW_STYLE
from .video_player import VideoPlayerWidget

logger = logging.getLogger(__name__)

GRID_COLUMNS = ["Idx", "Dist (km)", "Lat", "Lon", "Ele", "Time", "Seconds"]


def _file_filter(label: str, extensions) -> str:
    patterns = " ".join(f"*{ext}" for ext in extensions)
    return f"{label} ({patterns});;Tous les fichiers (*)"


def _swatch_icon(color: str) -> QIcon:
    pixmap = QPixmap(16, 16)
    pixmap.fill(QColor(color))
    return QIcon(pixmap)


class MainWindow(QMainWindow):
    """Fenêtre principale de l'application."""

    def __init__(self, settings_store: Optional[SettingsStore] = None) -> None:
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION} - Synchronisation GPX & Vidéo")
        self.resize(1400, 900)
        self.setStyleSheet(WINDOW_STYLE)

        self.settings_store = settings_store or SettingsStore()
        self.session = SyncSession(settings=self.settings_store.load())
        self.worker: Optional[TrackLoadWorker] = None

        self.scene = QGraphicsScene(self)
        self.scene_sink = GraphicsSceneSink(self.scene, self.session.settings)
        self.telemetry = SignalTelemetrySink(self)
        self.marker_controller = MarkerStateController()

        self._init_ui()

        self.scheduler = SyncScheduler(
            clock=self.video_player.clock,
            snapshot_provider=self.session.snapshot,
            marker_controller=self.marker_controller,
            scene=self.scene_sink,
            telemetry=self.telemetry,
            lock=self.session.lock,
            parent=self,
        )
        self.scheduler.running_changed.connect(self._on_sync_state_changed)
        self.scheduler.nothing_to_sync.connect(
            lambda msg: QMessageBox.information(self, "Sync", msg)
        )
        self.telemetry.updated.connect(self._on_telemetry)

    def _init_ui(self) -> None:
        # Scène centrale (route + marqueur)
        self.view = RouteView(self.scene)
        self.view.cursor_moved.connect(self._on_cursor_moved)
        self.view.setBackgroundBrush(QBrush(QColor(COLOR_SCENE_BG)))
        self.setCentralWidget(self.view)

        # Lecteur vidéo
        self.dock_video = QDockWidget("Vidéo", self)
        self.video_player = VideoPlayerWidget()
        self.dock_video.setWidget(self.video_player)
        self.addDockWidget(Qt.DockWidgetArea.LeftDockWidgetArea, self.dock_video)

        # Grille des points
        self.dock_grid = QDockWidget("Points GPX", self)
        self.grid = QTableWidget(0, len(GRID_COLUMNS))
        self.grid.setHorizontalHeaderLabels(GRID_COLUMNS)
        self.grid.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.grid.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.grid.cellDoubleClicked.connect(self._seek_to_row)
        self.dock_grid.setWidget(self.grid)
        self.addDockWidget(Qt.DockWidgetArea.BottomDockWidgetArea, self.dock_grid)

        # Barre d'outils
        toolbar = QToolBar("Synchronisation", self)
        self.addToolBar(toolbar)

        act_track = QAction("Importer trace", self)
        act_track.triggered.connect(self._import_track_dialog)
        toolbar.addAction(act_track)

        act_video = QAction("Importer vidéo", self)
        act_video.triggered.connect(self._import_video_dialog)
        toolbar.addAction(act_video)

        self.recent_menu = QMenu(self)
        self.recent_menu.aboutToShow.connect(self._populate_recent_menu)
        btn_recent = QToolButton(self)
        btn_recent.setText("Récents")
        btn_recent.setMenu(self.recent_menu)
        btn_recent.setPopupMode(QToolButton.ToolButtonPopupMode.InstantPopup)
        toolbar.addWidget(btn_recent)

        self.act_sync = QAction("Sync ON/OFF", self)
        self.act_sync.setCheckable(True)
        self.act_sync.triggered.connect(self._toggle_sync)
        toolbar.addAction(self.act_sync)

        act_csv = QAction("Exporter CSV", self)
        act_csv.triggered.connect(self._export_csv)
        toolbar.addAction(act_csv)

        toolbar.addSeparator()
        zone_box = QWidget()
        zone_layout = QHBoxLayout(zone_box)
        zone_layout.setContentsMargins(4, 0, 4, 0)
        zone_layout.addWidget(QLabel("Zone UTM:"))
        self.zone_edit = QLineEdit(self.session.settings.utm_zone)
        self.zone_edit.setPlaceholderText("auto")
        self.zone_edit.setFixedWidth(60)
        self.zone_edit.editingFinished.connect(self._on_zone_edited)
        zone_layout.addWidget(self.zone_edit)
        toolbar.addWidget(zone_box)

        toolbar.addSeparator()
        settings = self.session.settings
        self.act_route_color = QAction(_swatch_icon(settings.route_color), "Couleur route", self)
        self.act_route_color.triggered.connect(self._choose_route_color)
        toolbar.addAction(self.act_route_color)

        self.act_marker_color = QAction(_swatch_icon(settings.marker_color), "Couleur marqueur", self)
        self.act_marker_color.triggered.connect(self._choose_marker_color)
        toolbar.addAction(self.act_marker_color)

        act_marker_size = QAction("Taille marqueur", self)
        act_marker_size.triggered.connect(self._choose_marker_size)
        toolbar.addAction(act_marker_size)

        # Télémétrie
        self.lbl_route_info = QLabel("Aucune trace")
        self.lbl_track_info = QLabel("")
        self.lbl_cursor_info = QLabel("")
        self.lbl_dist_info = QLabel("0.000 km")
        self.statusBar().addWidget(self.lbl_route_info, 1)
        self.statusBar().addPermanentWidget(self.lbl_track_info)
        self.statusBar().addPermanentWidget(self.lbl_cursor_info)
        self.statusBar().addPermanentWidget(self.lbl_dist_info)

    # ------------------------------------------------------------------
    # Trace
    # ------------------------------------------------------------------

    def _import_track_dialog(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Importer une trace", "", _file_filter("Traces", TRACK_EXTENSIONS)
        )
        if path:
            self.load_track(path)

    def load_track(self, path: str) -> None:
        """Charge la trace en arrière-plan (QThread)."""
        if self.worker and self.worker.isRunning():
            return
        self.lbl_route_info.setText(f"Chargement: {os.path.basename(path)}...")
        self.worker = TrackLoadWorker(self.session, path)
        self.worker.loaded.connect(self._on_track_loaded)
        self.worker.error.connect(self._on_track_error)
        self.worker.start()

    def _on_track_loaded(self, result: TrackLoadResult) -> None:
        self.settings_store.add_recent_file(self.session.track_path or "")
        self.scene_sink.draw_route(result.route, self.session.settings.route_color)
        self.view.fitInView(self.scene.itemsBoundingRect(), Qt.AspectRatioMode.KeepAspectRatio)
        self._populate_grid()

        self.lbl_route_info.setText(os.path.basename(self.session.track_path or ""))
        self.lbl_track_info.setText(self._track_info_text())
        try:
            self.session.export_csv()
        except OSError as e:
            logger.warning("CSV non généré: %s", e)

        if not self.scheduler.is_running:
            self.scheduler.start()

    def _on_track_error(self, message: str) -> None:
        logger.error("Import de trace: %s", message)
        if self.session.has_track():
            self.lbl_route_info.setText(os.path.basename(self.session.track_path or ""))
        else:
            self.lbl_route_info.setText("Aucune trace")
        QMessageBox.warning(self, "Import", message)

    def _track_info_text(self) -> str:
        summary = self.session.get_summary()
        return (
            f"{summary['track_points']} pts | {summary['total_distance_km']:.2f} km"
            f" | Zone {summary['zone']}"
        )

    def _populate_recent_menu(self) -> None:
        self.recent_menu.clear()
        tracks = self.settings_store.get_recent_files("tracks")
        videos = self.settings_store.get_recent_files("videos")
        if not tracks and not videos:
            self.recent_menu.addAction("(aucun)").setEnabled(False)
            return
        for path in tracks:
            action = self.recent_menu.addAction(os.path.basename(path))
            action.setToolTip(path)
            action.triggered.connect(lambda _checked=False, p=path: self.load_track(p))
        if tracks and videos:
            self.recent_menu.addSeparator()
        for path in videos:
            action = self.recent_menu.addAction(os.path.basename(path))
            action.setToolTip(path)
            action.triggered.connect(lambda _checked=False, p=path: self._open_video(p))

    def _populate_grid(self) -> None:
        timeline = self.session.timeline
        self.grid.setRowCount(0)
        if timeline is None:
            return
        self.grid.setRowCount(len(timeline))
        for row in timeline.rows():
            values = [
                str(row.index),
                f"{row.distance_km:.3f}",
                f"{row.latitude:.6f}",
                f"{row.longitude:.6f}",
                f"{row.elevation:.1f}" if row.elevation is not None else "",
                row.time_text,
                f"{row.seconds:.1f}",
            ]
            for col, value in enumerate(values):
                self.grid.setItem(row.index, col, QTableWidgetItem(value))

    def _seek_to_row(self, row: int, _column: int) -> None:
        timeline = self.session.timeline
        if timeline is None or not 0 <= row < len(timeline):
            return
        seconds = timeline.relative_seconds(row)
        self.video_player.seek_to(max(0.0, seconds), play=True)
        logger.info("Seek a %.2fs", seconds)

    # ------------------------------------------------------------------
    # Vidéo / synchronisation
    # ------------------------------------------------------------------

    def _import_video_dialog(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Sélectionner une vidéo", "", _file_filter("Vidéos", VIDEO_EXTENSIONS)
        )
        if path:
            self._open_video(path)

    def _open_video(self, path: str) -> None:
        if self.video_player.load_video(path):
            self.settings_store.add_recent_file(path, key="videos")

    def _toggle_sync(self) -> None:
        self.scheduler.toggle()
        self.act_sync.setChecked(self.scheduler.is_running)

    def _on_sync_state_changed(self, running: bool) -> None:
        self.act_sync.setChecked(running)

    def _on_telemetry(self, index: int, distance_km: float) -> None:
        name = os.path.basename(self.video_player.current_video_path or "") or "Aucune vidéo"
        self.lbl_route_info.setText(f"Fichier: {name}")
        self.lbl_dist_info.setText(f"{distance_km:.3f} km")

        if index < self.grid.rowCount() and self.grid.currentRow() != index:
            self.grid.selectRow(index)
            self.grid.scrollToItem(self.grid.item(index, 0))

        position = self.marker_controller.state.last_planar_position
        if position is not None:
            self.view.centerOn(to_scene(position))

    def _on_zone_edited(self) -> None:
        text = self.zone_edit.text().strip()
        if text == self.session.settings.utm_zone:
            return
        try:
            zone = self.session.set_zone(text)
        except MalformedZoneError as e:
            QMessageBox.warning(self, "Zone UTM", str(e))
            self.zone_edit.setText(self.session.settings.utm_zone)
            return

        self.settings_store.update(utm_zone=text)
        if zone is not None:
            self.scene_sink.draw_route(self.session.route, self.session.settings.route_color)
            self.lbl_track_info.setText(self._track_info_text())
            self.statusBar().showMessage(f"Zone UTM {zone}", 3000)

    def _on_cursor_moved(self, x: float, y: float) -> None:
        zone = self.session.zone
        if zone is None:
            return
        lat, lon = scene_to_latlon(x, y, zone)
        self.lbl_cursor_info.setText(f"{lat:.6f}, {lon:.6f}")

    # ------------------------------------------------------------------
    # Style route / marqueur
    # ------------------------------------------------------------------

    def _choose_route_color(self) -> None:
        color = QColorDialog.getColor(QColor(self.session.settings.route_color), self, "Couleur de la route")
        if color.isValid():
            self.apply_style(route_color=color.name())

    def _choose_marker_color(self) -> None:
        color = QColorDialog.getColor(QColor(self.session.settings.marker_color), self, "Couleur du marqueur")
        if color.isValid():
            self.apply_style(marker_color=color.name())

    def _choose_marker_size(self) -> None:
        size, ok = QInputDialog.getDouble(
            self, "Taille du marqueur", "Taille:",
            self.session.settings.marker_size, MARKER_SIZE_MIN, MARKER_SIZE_MAX, 1,
        )
        if ok:
            self.apply_style(marker_size=size)

    def apply_style(self, **changes) -> None:
        """Enregistre le style et l'applique tout de suite à la route et au marqueur."""
        settings = self.session.update_style(**changes)
        self.settings_store.save(settings)
        with self.session.lock:
            self.scene_sink.settings = settings
            self.scene_sink.set_route_color(settings.route_color)
            self.scene_sink.restyle_marker(self.marker_controller.state.identity, settings)
        self.act_route_color.setIcon(_swatch_icon(settings.route_color))
        self.act_marker_color.setIcon(_swatch_icon(settings.marker_color))

    def _export_csv(self) -> None:
        if not self.session.has_track():
            QMessageBox.information(self, "Export", "Aucune trace chargée.")
            return
        path, _ = QFileDialog.getSaveFileName(self, "Exporter CSV", "", "CSV (*.csv)")
        if path:
            try:
                self.session.export_csv(path)
            except OSError as e:
                QMessageBox.warning(self, "Export", str(e))

    def closeEvent(self, event) -> None:
        self.scheduler.stop()
        self.video_player.close_player()
        super().closeEvent(event)
