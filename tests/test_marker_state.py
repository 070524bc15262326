import math

import pytest

from conftest import BASE_TIME, ZONE_17N, make_timeline
from visiontrack.core.errors import SceneWriteError
from visiontrack.core.models.sync_models import CreateMarker, NoOp, SyncSettings, UpdateMarker
from visiontrack.core.models.track_timeline import TrackTimeline
from visiontrack.core.usecases.marker_state import MarkerStateController, compute_heading
from visiontrack.domain.geo_types import GeoSample


def test_first_placement_creates_marker(fake_scene):
    timeline = make_timeline([0, 5, 10])
    controller = MarkerStateController()

    command = controller.sync(timeline, 0, ZONE_17N, fake_scene)

    assert isinstance(command, CreateMarker)
    assert fake_scene.creates == 1
    assert controller.state.is_present
    assert controller.state.last_planar_position == command.point


def test_same_position_twice_writes_once(fake_scene):
    timeline = make_timeline([0, 5, 10])
    controller = MarkerStateController()

    controller.sync(timeline, 1, ZONE_17N, fake_scene)
    second = controller.sync(timeline, 1, ZONE_17N, fake_scene)

    assert isinstance(second, NoOp)
    assert fake_scene.writes == 1


def test_movement_below_threshold_is_suppressed(fake_scene):
    # ~4 cm entre les deux points
    timeline = make_timeline([0, 1], step_deg=5e-7)
    controller = MarkerStateController()

    controller.sync(timeline, 0, ZONE_17N, fake_scene)
    command = controller.sync(timeline, 1, ZONE_17N, fake_scene)

    assert isinstance(command, NoOp)
    assert fake_scene.writes == 1


def test_movement_of_fifteen_centimetres_updates(fake_scene):
    # ~17 cm entre les deux points
    timeline = make_timeline([0, 1], step_deg=2e-6)
    controller = MarkerStateController()

    controller.sync(timeline, 0, ZONE_17N, fake_scene)
    command = controller.sync(timeline, 1, ZONE_17N, fake_scene)

    assert isinstance(command, UpdateMarker)
    assert fake_scene.creates == 1
    assert fake_scene.updates == 1


def test_threshold_comes_from_settings(fake_scene):
    timeline = make_timeline([0, 1], step_deg=2e-6)
    controller = MarkerStateController()
    settings = SyncSettings(move_threshold=1.0)

    controller.sync(timeline, 0, ZONE_17N, fake_scene, settings)
    command = controller.sync(timeline, 1, ZONE_17N, fake_scene, settings)

    assert isinstance(command, NoOp)


def test_stale_identity_is_recreated(fake_scene):
    timeline = make_timeline([0, 5, 10])
    controller = MarkerStateController()

    controller.sync(timeline, 0, ZONE_17N, fake_scene)
    fake_scene.forget(controller.state.identity)
    command = controller.sync(timeline, 1, ZONE_17N, fake_scene)

    assert isinstance(command, CreateMarker)
    assert fake_scene.creates == 2
    assert fake_scene.is_valid(controller.state.identity)


def test_scene_failure_is_logged_and_state_not_committed(fake_scene, caplog):
    timeline = make_timeline([0, 5, 10])
    controller = MarkerStateController()
    fake_scene.fail_next = True

    command = controller.sync(timeline, 0, ZONE_17N, fake_scene)

    assert isinstance(command, NoOp)
    assert not controller.state.is_present
    assert "Échec du placement" in caplog.text

    # Le tick suivant réessaie
    assert isinstance(controller.sync(timeline, 0, ZONE_17N, fake_scene), CreateMarker)


def test_failed_update_keeps_previous_position(fake_scene):
    timeline = make_timeline([0, 5, 10])
    controller = MarkerStateController()
    controller.sync(timeline, 0, ZONE_17N, fake_scene)
    before = controller.state.last_planar_position

    fake_scene.fail_next = True
    controller.sync(timeline, 2, ZONE_17N, fake_scene)

    assert controller.state.last_planar_position == before


def test_apply_raises_scene_write_error(fake_scene):
    controller = MarkerStateController()
    timeline = make_timeline([0, 5])
    command = controller.place(timeline, 0, ZONE_17N, fake_scene)
    fake_scene.fail_next = True
    with pytest.raises(SceneWriteError):
        controller.apply(command, fake_scene)


def test_out_of_range_index_is_noop(fake_scene):
    controller = MarkerStateController()
    command = controller.sync(make_timeline([0, 5]), 7, ZONE_17N, fake_scene)
    assert isinstance(command, NoOp)
    assert fake_scene.writes == 0


def test_heading_east_and_north():
    east = make_timeline([0, 1, 2])
    assert compute_heading(east, 0, ZONE_17N) == pytest.approx(0.0, abs=1e-2)
    # Dernier point: direction depuis le précédent
    assert compute_heading(east, 2, ZONE_17N) == pytest.approx(0.0, abs=1e-2)

    north = TrackTimeline.build([
        GeoSample(40.0, -81.0, timestamp=BASE_TIME),
        GeoSample(40.001, -81.0, timestamp=BASE_TIME),
    ])
    assert compute_heading(north, 0, ZONE_17N) == pytest.approx(math.pi / 2, abs=1e-6)


def test_single_point_heading_is_zero():
    assert compute_heading(make_timeline([0]), 0, ZONE_17N) == 0.0
