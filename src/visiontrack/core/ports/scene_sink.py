from __future__ import annotations

from typing import Any, Optional, Protocol

from visiontrack.core.models.sync_models import SyncSettings
from visiontrack.domain.geo_types import PlanarPoint


class SceneSinkPort(Protocol):
    """Surface de dessin qui héberge le marqueur "position courante"."""

    def create_marker_entity(
        self, point: PlanarPoint, heading: float, settings: Optional[SyncSettings] = None
    ) -> Any: ...

    def update_marker_entity(
        self, identity: Any, point: PlanarPoint, heading: float, settings: Optional[SyncSettings] = None
    ) -> bool: ...

    def is_valid(self, identity: Any) -> bool: ...
