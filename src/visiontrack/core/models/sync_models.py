from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple, Union

from visiontrack.core.models.track_timeline import TrackTimeline
from visiontrack.domain.geo_types import PlanarPoint, ZoneDescriptor


class SchedulerState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"


@dataclass(frozen=True)
class SyncSettings:
    """Instantané immuable de la configuration, lu au début de chaque tick."""
    utm_zone: str = "17S"
    marker_size: float = 2.0
    marker_color: str = "#ff0000"
    route_color: str = "#0000ff"
    move_threshold: float = 0.1


@dataclass(frozen=True)
class CreateMarker:
    point: PlanarPoint
    heading: float


@dataclass(frozen=True)
class UpdateMarker:
    identity: Any
    point: PlanarPoint
    heading: float


@dataclass(frozen=True)
class NoOp:
    reason: str = ""


PlacementCommand = Union[CreateMarker, UpdateMarker, NoOp]


@dataclass(frozen=True)
class TickReport:
    """Résultat d'un tick de synchronisation (None si le tick n'a rien fait)."""
    video_seconds: float
    active_index: int
    distance_km: float
    command: PlacementCommand


@dataclass(frozen=True)
class TrackSummary:
    name: str
    point_count: int
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    has_elevation: bool
    total_distance_km: float
    zone: ZoneDescriptor


@dataclass(frozen=True)
class TrackLoadResult:
    timeline: TrackTimeline
    zone: ZoneDescriptor
    route: Tuple[PlanarPoint, ...] = field(default_factory=tuple)
    summary: Optional[TrackSummary] = None


@dataclass(frozen=True)
class SyncSnapshot:
    """Ce dont un tick a besoin: trace, zone de session et réglages courants."""
    timeline: TrackTimeline
    zone: ZoneDescriptor
    settings: SyncSettings
