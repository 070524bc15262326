import pytest

from conftest import make_samples
from visiontrack.core.errors import TrackParseError
from visiontrack.core.models.sync_models import SyncSettings
from visiontrack.services.sync_session import SyncSession
from visiontrack.workers.track_loader import TrackLoadWorker


class _Source:
    def __init__(self, tracks):
        self.tracks = tracks

    def read(self, path):
        result = self.tracks[path]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def session():
    source = _Source({
        "ride.gpx": make_samples([0, 5, 10]),
        "empty.gpx": [],
        "folder.gpx": TrackParseError("folder.gpx", "[Errno 21] Is a directory"),
    })
    return SyncSession(settings=SyncSettings(utm_zone="17N"), track_source=source)


def _run(session, path):
    worker = TrackLoadWorker(session, path)
    loaded, errors = [], []
    worker.loaded.connect(loaded.append)
    worker.error.connect(errors.append)
    # Exécution synchrone: les signaux sont livrés directement
    worker.run()
    return loaded, errors


def test_worker_emits_loaded(qapp, session):
    loaded, errors = _run(session, "ride.gpx")
    assert errors == []
    assert loaded[0].summary.point_count == 3


@pytest.mark.parametrize("path, fragment", [("folder.gpx", "Is a directory"), ("empty.gpx", "Aucun point")])
def test_worker_reports_errors_and_keeps_previous_track(qapp, session, path, fragment):
    _run(session, "ride.gpx")
    timeline = session.timeline

    loaded, errors = _run(session, path)

    assert loaded == []
    assert fragment in errors[0]
    assert session.timeline is timeline


def test_worker_reports_malformed_zone(qapp, session):
    session._settings = SyncSettings(utm_zone="17X")
    loaded, errors = _run(session, "ride.gpx")
    assert loaded == []
    assert "Zone UTM invalide" in errors[0]
