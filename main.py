#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
VisionTrack - Synchronisation trace GPS / vidéo
Point d'entrée principal de l'application.

Application PyQt6 qui suit la lecture d'une vidéo et place un marqueur
sur la position GPS correspondante, projetée en coordonnées UTM.
"""

import sys
import os


def _ensure_src_on_path() -> None:
    """Permet d'exécuter `python main.py` sans installer le package."""
    if getattr(sys, "frozen", False):
        return

    repo_root = os.path.dirname(os.path.abspath(__file__))
    src_path = os.path.join(repo_root, "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


def main() -> int:
    """
    Point d'entrée principal de l'application.

    Returns:
        Code de retour de l'application
    """
    _ensure_src_on_path()
    from visiontrack.app.bootstrap import run

    return run(sys.argv)


if __name__ == "__main__":
    sys.exit(main())
