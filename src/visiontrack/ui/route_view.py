#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Vue de la scène (route + marqueur) avec suivi du curseur.
"""

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QGraphicsView


class RouteView(QGraphicsView):
    """QGraphicsView qui publie la position du curseur en coordonnées de scène."""

    cursor_moved = pyqtSignal(float, float)  # (x, y) scène

    def __init__(self, scene, parent=None):
        super().__init__(scene, parent)
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setDragMode(QGraphicsView.DragMode.ScrollHandDrag)
        self.setMouseTracking(True)

    def mouseMoveEvent(self, event):
        pos = self.mapToScene(event.position().toPoint())
        self.cursor_moved.emit(pos.x(), pos.y())
        super().mouseMoveEvent(event)
