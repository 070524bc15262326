#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Surface de dessin Qt (QGraphicsScene) pour VisionTrack.

Repère: 1 unité de scène = 1 mètre UTM, axe Y inversé (nord vers le haut).
"""

import logging
import math
from typing import Any, Optional, Sequence, Tuple

from PyQt6 import sip
from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QBrush, QColor, QPainterPath, QPen, QPolygonF
from PyQt6.QtWidgets import QGraphicsItem, QGraphicsPathItem, QGraphicsPolygonItem, QGraphicsScene

from visiontrack.core.geodesy.utm_projection import unproject
from visiontrack.core.models.sync_models import SyncSettings
from visiontrack.domain.geo_types import PlanarPoint, ZoneDescriptor

logger = logging.getLogger(__name__)

MARKER_Z_VALUE = 100
ROUTE_Z_VALUE = 10

# Flèche pointant vers +X, pointe à l'origine (taille unitaire, mise à l'échelle ensuite)
MARKER_SHAPE = ((-0.6, 0.20), (0.0, 0.0), (-0.6, -0.20))


def to_scene(point: PlanarPoint) -> QPointF:
    """Convertit un point UTM en coordonnées de scène (Y vers le bas)."""
    return QPointF(point.easting, -point.northing)


def heading_to_rotation(heading: float) -> float:
    """Cap mathématique (radians, anti-horaire) -> rotation Qt (degrés, horaire)."""
    return -math.degrees(heading)


def scene_to_latlon(x: float, y: float, zone: ZoneDescriptor) -> Tuple[float, float]:
    """Position de scène (curseur) -> (lat, lon) dans la zone de session."""
    return unproject(x, -y, zone)


class GraphicsSceneSink:
    """
    Implémente SceneSinkPort sur une QGraphicsScene.

    La définition visuelle du marqueur (polygone) n'est construite qu'une
    fois, à la première création.
    """

    def __init__(self, scene: QGraphicsScene, settings: Optional[SyncSettings] = None) -> None:
        self.scene = scene
        self.settings = settings or SyncSettings()
        self._marker_shape: Optional[QPolygonF] = None
        self._route_item: Optional[QGraphicsPathItem] = None

    def _marker_definition(self) -> QPolygonF:
        if self._marker_shape is None:
            logger.debug("Création de la définition du marqueur")
            self._marker_shape = QPolygonF([QPointF(x, y) for x, y in MARKER_SHAPE])
        return self._marker_shape

    def create_marker_entity(
        self, point: PlanarPoint, heading: float, settings: Optional[SyncSettings] = None
    ) -> Any:
        item = QGraphicsPolygonItem(self._marker_definition())
        item.setZValue(MARKER_Z_VALUE)
        self._apply_style(item, settings or self.settings)
        item.setPos(to_scene(point))
        item.setRotation(heading_to_rotation(heading))
        self.scene.addItem(item)
        return item

    def update_marker_entity(
        self, identity: Any, point: PlanarPoint, heading: float, settings: Optional[SyncSettings] = None
    ) -> bool:
        if not self.is_valid(identity):
            return False
        self._apply_style(identity, settings or self.settings)
        identity.setPos(to_scene(point))
        identity.setRotation(heading_to_rotation(heading))
        return True

    def restyle_marker(self, identity: Any, settings: Optional[SyncSettings] = None) -> bool:
        """Applique couleur et taille au marqueur existant; False s'il n'existe plus."""
        if not self.is_valid(identity):
            return False
        self._apply_style(identity, settings or self.settings)
        return True

    def is_valid(self, identity: Any) -> bool:
        if not isinstance(identity, QGraphicsItem) or sip.isdeleted(identity):
            return False
        return identity.scene() is self.scene

    def draw_route(self, points: Sequence[PlanarPoint], color: Optional[str] = None) -> Optional[QGraphicsPathItem]:
        """Dessine (ou remplace) la polyligne de la route."""
        self.clear_route()
        if not points:
            return None

        path = QPainterPath(to_scene(points[0]))
        for p in points[1:]:
            path.lineTo(to_scene(p))

        item = QGraphicsPathItem(path)
        item.setZValue(ROUTE_Z_VALUE)
        item.setPen(self._route_pen(color or self.settings.route_color))
        self.scene.addItem(item)
        self._route_item = item
        return item

    def set_route_color(self, color: str) -> None:
        if self._route_item is not None and not sip.isdeleted(self._route_item):
            self._route_item.setPen(self._route_pen(color))

    def clear_route(self) -> None:
        if self._route_item is not None and not sip.isdeleted(self._route_item):
            if self._route_item.scene() is self.scene:
                self.scene.removeItem(self._route_item)
        self._route_item = None

    @staticmethod
    def _route_pen(color: str) -> QPen:
        pen = QPen(QColor(color), 2)
        pen.setCosmetic(True)
        return pen

    @staticmethod
    def _apply_style(item: QGraphicsPolygonItem, settings: SyncSettings) -> None:
        color = QColor(settings.marker_color)
        item.setBrush(QBrush(color))
        item.setPen(QPen(Qt.PenStyle.NoPen))
        item.setScale(settings.marker_size)
