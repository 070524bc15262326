import math

import pytest
from PyQt6.QtWidgets import QGraphicsScene

from visiontrack.core.geodesy.utm_projection import project
from visiontrack.core.models.sync_models import SyncSettings
from visiontrack.domain.geo_types import PlanarPoint, ZoneDescriptor
from visiontrack.infra.qt.graphics_scene_sink import (
    GraphicsSceneSink,
    heading_to_rotation,
    scene_to_latlon,
    to_scene,
)
from visiontrack.infra.qt.telemetry import SignalTelemetrySink


@pytest.fixture
def sink(qapp):
    return GraphicsSceneSink(QGraphicsScene(), SyncSettings(marker_size=3.0))


def test_marker_definition_is_built_once(sink):
    assert sink._marker_shape is None
    first = sink.create_marker_entity(PlanarPoint(10.0, 20.0), 0.0)
    shape = sink._marker_shape
    sink.create_marker_entity(PlanarPoint(11.0, 20.0), 0.0)
    assert shape is not None
    assert sink._marker_shape is shape
    assert first.polygon().size() == 3


def test_create_places_marker_with_flipped_y(sink):
    item = sink.create_marker_entity(PlanarPoint(500100.0, 4428000.0), math.pi / 2)
    assert item.scene() is sink.scene
    assert item.pos().x() == 500100.0
    assert item.pos().y() == -4428000.0
    assert item.rotation() == pytest.approx(-90.0)
    assert item.scale() == 3.0


def test_update_and_validity(sink):
    item = sink.create_marker_entity(PlanarPoint(0.0, 0.0), 0.0)
    assert sink.is_valid(item)
    assert sink.update_marker_entity(item, PlanarPoint(5.0, 5.0), 0.0)
    assert item.pos().y() == -5.0

    sink.scene.removeItem(item)
    assert not sink.is_valid(item)
    assert not sink.update_marker_entity(item, PlanarPoint(6.0, 6.0), 0.0)
    assert not sink.is_valid(None)
    assert not sink.is_valid(42)


def test_draw_route_replaces_previous(sink):
    points = [PlanarPoint(0.0, 0.0), PlanarPoint(10.0, 0.0), PlanarPoint(10.0, 10.0)]
    first = sink.draw_route(points)
    second = sink.draw_route(points, "#00ff00")

    assert first.scene() is None
    assert second.scene() is sink.scene
    assert second.pen().color().name() == "#00ff00"
    assert sink.draw_route([]) is None
    assert second.scene() is None


def test_helpers():
    assert to_scene(PlanarPoint(1.0, 2.0)).y() == -2.0
    assert heading_to_rotation(0.0) == 0.0


def test_telemetry_signal(qapp):
    sink = SignalTelemetrySink()
    received = []
    sink.updated.connect(lambda i, d: received.append((i, d)))
    sink.publish(3, 1.25)
    assert received == [(3, 1.25)]


def test_set_route_color(sink):
    item = sink.draw_route([PlanarPoint(0.0, 0.0), PlanarPoint(1.0, 1.0)])
    sink.set_route_color("#123456")
    assert item.pen().color().name() == "#123456"
    assert item.pen().isCosmetic()


def test_restyle_marker(sink):
    item = sink.create_marker_entity(PlanarPoint(0.0, 0.0), 0.0)
    settings = SyncSettings(marker_color="#00ff00", marker_size=5.0)

    assert sink.restyle_marker(item, settings)
    assert item.brush().color().name() == "#00ff00"
    assert item.scale() == 5.0

    sink.scene.removeItem(item)
    assert not sink.restyle_marker(item, settings)
    assert not sink.restyle_marker(None, settings)


def test_scene_to_latlon_inverts_scene_mapping():
    zone = ZoneDescriptor(17, True)
    pos = to_scene(project(40.5, -80.2, zone))
    lat, lon = scene_to_latlon(pos.x(), pos.y(), zone)
    assert lat == pytest.approx(40.5, abs=1e-6)
    assert lon == pytest.approx(-80.2, abs=1e-6)
