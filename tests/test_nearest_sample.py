import math
import random

import pytest

from conftest import make_timeline
from visiontrack.core.usecases.nearest_sample import NearestSampleMatcher, find_nearest


@pytest.mark.parametrize(
    "query, expected",
    [(15, 1), (14.9, 1), (15.1, 2), (0, 0), (-5, 0), (100, 2), (10, 1)],
)
def test_find_nearest_on_regular_track(query, expected):
    timeline = make_timeline([0, 10, 20])
    assert find_nearest(timeline, query) == expected
    assert NearestSampleMatcher().find(timeline, query) == expected


def test_ties_resolve_to_first_minimum():
    timeline = make_timeline([0, 0, 5, 5, 5, 10])
    matcher = NearestSampleMatcher()
    for query, expected in [(0, 0), (2.5, 0), (5, 2), (7.5, 2), (10, 5), (50, 5)]:
        assert find_nearest(timeline, query) == expected
        assert matcher.find(timeline, query) == expected


def test_single_sample_track():
    timeline = make_timeline([0])
    assert NearestSampleMatcher().find(timeline, 123.0) == 0


def test_non_monotonic_track_uses_full_scan():
    timeline = make_timeline([0, 20, 10])
    matcher = NearestSampleMatcher()
    assert matcher.find(timeline, 11) == 2
    assert matcher.find(timeline, 19) == 1


def test_non_finite_query_falls_back_to_full_scan():
    timeline = make_timeline([0, 10])
    assert NearestSampleMatcher().find(timeline, math.nan) == 0


def test_bisect_matches_full_scan_including_backward_seeks():
    rng = random.Random(1234)
    for _ in range(30):
        rel = sorted(rng.choice([0, 0.5, 1, 2, 2, 3, 7, 7, 7.5, 12]) + rng.randint(0, 40) for _ in range(25))
        timeline = make_timeline(rel)
        matcher = NearestSampleMatcher()
        queries = [rng.uniform(-10, rel[-1] + 10) for _ in range(40)]
        queries += [r + d for r in rel[:5] for d in (-0.25, 0.0, 0.25)]
        # Ordre aléatoire: avance, retour arrière, répétitions
        rng.shuffle(queries)
        for q in queries:
            assert matcher.find(timeline, q) == find_nearest(timeline, q), (rel, q)


def test_matcher_follows_timeline_swap():
    matcher = NearestSampleMatcher()
    assert matcher.find(make_timeline([0, 10, 20]), 18) == 2
    assert matcher.find(make_timeline([0, 20, 10]), 18) == 1
