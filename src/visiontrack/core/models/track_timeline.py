#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Trace temporelle immuable pour VisionTrack.

Les secondes relatives et les distances cumulées sont calculées une seule
fois à la construction (un passage O(n)); tous les accès sont ensuite O(1).
L'ordre de la source fait foi: la trace n'est jamais retriée.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from visiontrack.core.errors import EmptyTrackError
from visiontrack.core.geodesy.haversine import haversine_km
from visiontrack.domain.geo_types import GeoSample


@dataclass(frozen=True)
class TimelineRow:
    """Ligne affichée dans la grille des points."""
    index: int
    distance_km: float
    latitude: float
    longitude: float
    elevation: Optional[float]
    time_text: str
    seconds: float


class TrackTimeline:
    """
    Séquence ordonnée de GeoSample + dérivés temporels et kilométriques.

    Attributes:
        name: Nom de la trace (ex: nom du fichier)
        base_time: Horodatage du premier point
    """

    __slots__ = ("name", "base_time", "_samples", "_relative_seconds", "_cumulative_km")

    def __init__(
        self,
        samples: Tuple[GeoSample, ...],
        relative_seconds: Tuple[float, ...],
        cumulative_km: Tuple[float, ...],
        name: str = "",
    ) -> None:
        self.name = name
        self.base_time: datetime = samples[0].timestamp
        self._samples = samples
        self._relative_seconds = relative_seconds
        self._cumulative_km = cumulative_km

    @classmethod
    def build(cls, samples: Optional[Iterable[GeoSample]], name: str = "") -> "TrackTimeline":
        """
        Construit la trace à partir des points dans l'ordre de la source.

        Raises:
            EmptyTrackError: Séquence vide ou absente
        """
        points = tuple(samples) if samples is not None else ()
        if not points:
            raise EmptyTrackError()

        base_time = points[0].timestamp
        relative: List[float] = []
        cumulative: List[float] = []
        running_km = 0.0
        previous: Optional[GeoSample] = None

        for sample in points:
            # Peut être négatif si la source n'est pas monotone: conservé tel quel
            relative.append((sample.timestamp - base_time).total_seconds())
            if previous is not None:
                running_km += haversine_km(
                    previous.latitude, previous.longitude,
                    sample.latitude, sample.longitude,
                )
            cumulative.append(running_km)
            previous = sample

        return cls(points, tuple(relative), tuple(cumulative), name=name)

    def count(self) -> int:
        return len(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def at(self, index: int) -> GeoSample:
        return self._samples[index]

    def __getitem__(self, index: int) -> GeoSample:
        return self._samples[index]

    def __iter__(self) -> Iterator[GeoSample]:
        return iter(self._samples)

    def relative_seconds(self, index: int) -> float:
        return self._relative_seconds[index]

    def cumulative_distance_km(self, index: int) -> float:
        return self._cumulative_km[index]

    @property
    def samples(self) -> Sequence[GeoSample]:
        return self._samples

    @property
    def all_relative_seconds(self) -> Sequence[float]:
        return self._relative_seconds

    @property
    def total_distance_km(self) -> float:
        return self._cumulative_km[-1]

    @property
    def duration_seconds(self) -> float:
        return self._relative_seconds[-1]

    @property
    def start_time(self) -> datetime:
        return self.base_time

    @property
    def end_time(self) -> datetime:
        return self._samples[-1].timestamp

    def has_elevation(self) -> bool:
        return any(s.elevation is not None for s in self._samples)

    def is_time_monotonic(self) -> bool:
        """True si les secondes relatives ne décroissent jamais."""
        rel = self._relative_seconds
        return all(rel[i] <= rel[i + 1] for i in range(len(rel) - 1))

    def rows(self) -> Iterator[TimelineRow]:
        """Lignes de la grille: distance arrondie au mètre, secondes au dixième."""
        for i, sample in enumerate(self._samples):
            yield TimelineRow(
                index=i,
                distance_km=round(self._cumulative_km[i], 3),
                latitude=sample.latitude,
                longitude=sample.longitude,
                elevation=sample.elevation,
                time_text=sample.timestamp.strftime("%H:%M:%S") if sample.has_time() else "",
                seconds=round(self._relative_seconds[i], 1),
            )

    def __repr__(self) -> str:
        return f"TrackTimeline(name={self.name!r}, points={len(self._samples)})"
