from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal


class SignalTelemetrySink(QObject):
    """Relaie la télémétrie du tick vers l'UI via un signal Qt."""

    updated = pyqtSignal(int, float)  # (index actif, distance km)

    def publish(self, active_index: int, distance_km: float) -> None:
        self.updated.emit(active_index, distance_km)
