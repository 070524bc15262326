"""Recherche du point de trace le plus proche d'un instant vidéo.

Règles:
- le critère est |secondes_relatives[i] - requête|
- en cas d'égalité, le premier minimum (ordre de parcours) l'emporte
- une requête hors plage se ramène naturellement au premier ou au dernier point
"""

from __future__ import annotations

import math
from bisect import bisect_left
from typing import Optional

from visiontrack.core.models.track_timeline import TrackTimeline


def find_nearest(timeline: TrackTimeline, query_seconds: float) -> int:
    """Parcours linéaire complet, O(n)."""
    best_idx = 0
    min_diff = math.inf
    for i, seconds in enumerate(timeline.all_relative_seconds):
        diff = abs(seconds - query_seconds)
        if diff < min_diff:
            min_diff = diff
            best_idx = i
    return best_idx


class NearestSampleMatcher:
    """
    Recherche du point le plus proche, avec accélération par dichotomie.

    La dichotomie n'est utilisée que si la trace est monotone en temps (le
    cas normal): elle ne dépend pas de la requête précédente, donc un seek
    arrière donne le même résultat qu'un parcours complet. Une trace non
    monotone, ou une requête non finie, passe par find_nearest().
    """

    def __init__(self, use_bisect: bool = True) -> None:
        self.use_bisect = use_bisect
        self._timeline: Optional[TrackTimeline] = None
        self._monotonic = False

    def reset(self) -> None:
        self._timeline = None
        self._monotonic = False

    def find(self, timeline: TrackTimeline, query_seconds: float) -> int:
        if timeline is not self._timeline:
            self._timeline = timeline
            self._monotonic = timeline.is_time_monotonic()

        if not self.use_bisect or not self._monotonic or not math.isfinite(query_seconds):
            return find_nearest(timeline, query_seconds)
        return self._find_sorted(timeline, query_seconds)

    @staticmethod
    def _find_sorted(timeline: TrackTimeline, query_seconds: float) -> int:
        rel = timeline.all_relative_seconds
        upper = bisect_left(rel, query_seconds)
        if upper == 0:
            return 0
        if upper == len(rel):
            # Premier point du dernier groupe d'horodatages identiques
            return bisect_left(rel, rel[-1])

        lower_value = rel[upper - 1]
        if query_seconds - lower_value <= rel[upper] - query_seconds:
            return bisect_left(rel, lower_value)
        return upper
