from __future__ import annotations

from typing import Protocol


class TelemetrySinkPort(Protocol):
    """Reçoit (index actif, distance cumulée en km); sans accusé de réception."""

    def publish(self, active_index: int, distance_km: float) -> None: ...
