from __future__ import annotations

from typing import Protocol, Sequence

from visiontrack.domain.geo_types import GeoSample


class TrackSourcePort(Protocol):
    def read(self, path: str) -> Sequence[GeoSample]: ...
