import os
from datetime import datetime, timedelta, timezone

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from visiontrack.core.models.track_timeline import TrackTimeline
from visiontrack.domain.geo_types import GeoSample, ZoneDescriptor

BASE_TIME = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)
ZONE_17N = ZoneDescriptor(17, True)


def make_samples(seconds, lat0=40.0, lon0=-81.0, step_deg=0.001, elevation=100.0):
    """Points alignés vers l'est, un par horodatage relatif donné."""
    return [
        GeoSample(
            latitude=lat0,
            longitude=lon0 + i * step_deg,
            elevation=elevation,
            timestamp=BASE_TIME + timedelta(seconds=s),
        )
        for i, s in enumerate(seconds)
    ]


def make_timeline(seconds, **kwargs):
    return TrackTimeline.build(make_samples(seconds, **kwargs), name="test.gpx")


class FakeScene:
    """Scène en mémoire: compte les écritures, peut échouer ou oublier une entité."""

    def __init__(self):
        self.creates = 0
        self.updates = 0
        self.fail_next = False
        self.positions = {}
        self._next_id = 1

    def create_marker_entity(self, point, heading, settings=None):
        if self.fail_next:
            self.fail_next = False
            raise RuntimeError("scene busy")
        identity = self._next_id
        self._next_id += 1
        self.creates += 1
        self.positions[identity] = (point, heading)
        return identity

    def update_marker_entity(self, identity, point, heading, settings=None):
        if self.fail_next:
            self.fail_next = False
            raise RuntimeError("scene busy")
        if identity not in self.positions:
            return False
        self.updates += 1
        self.positions[identity] = (point, heading)
        return True

    def is_valid(self, identity):
        return identity in self.positions

    def forget(self, identity):
        self.positions.pop(identity, None)

    @property
    def writes(self):
        return self.creates + self.updates


class FakeClock:
    def __init__(self, seconds=0.0, playing=True, media=True):
        self.seconds = seconds
        self.playing = playing
        self.media = media

    def current_seconds(self):
        return self.seconds

    def is_playing(self):
        return self.playing

    def has_media(self):
        return self.media


class RecordingTelemetry:
    def __init__(self):
        self.published = []

    def publish(self, active_index, distance_km):
        self.published.append((active_index, distance_km))


@pytest.fixture(scope="session")
def qapp():
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def fake_scene():
    return FakeScene()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def telemetry():
    return RecordingTelemetry()
