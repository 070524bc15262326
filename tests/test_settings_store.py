import pytest
from PyQt6.QtCore import QSettings

from visiontrack.app.config import DEFAULT_UTM_ZONE, MARKER_SIZE_MAX
from visiontrack.services.settings_store import MAX_RECENT_FILES, SettingsStore


@pytest.fixture
def store(tmp_path):
    return SettingsStore(QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat))


def test_defaults(store):
    settings = store.load()
    assert settings.utm_zone == DEFAULT_UTM_ZONE
    assert settings.move_threshold == 0.1


def test_update_persists(store):
    store.update(utm_zone="18N", marker_color="#00ff00")
    settings = store.load()
    assert settings.utm_zone == "18N"
    assert settings.marker_color == "#00ff00"


def test_marker_size_is_clamped(store):
    store.settings.setValue("marker/size", 50.0)
    assert store.load().marker_size == MARKER_SIZE_MAX


def test_recent_files(store, tmp_path):
    paths = []
    for i in range(MAX_RECENT_FILES + 2):
        p = tmp_path / f"track{i}.gpx"
        p.write_text("", encoding="utf-8")
        paths.append(str(p))
        store.add_recent_file(str(p))

    recents = store.get_recent_files()
    assert len(recents) == MAX_RECENT_FILES
    assert recents[0] == paths[-1]

    store.add_recent_file(paths[-3])
    assert store.get_recent_files()[0] == paths[-3]
    assert store.get_recent_files(key="videos") == []


def test_save_style_round_trip(store):
    settings = store.update(route_color="#123456", marker_color="#abcdef", marker_size=4.5)
    loaded = store.load()
    assert loaded == settings
    assert loaded.route_color == "#123456"
    assert loaded.marker_size == 4.5
