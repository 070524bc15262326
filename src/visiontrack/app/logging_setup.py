"""
Configuration du logging (console + fichier debug.log optionnel).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from visiontrack.app.config import LOG_FILE_NAME, LOG_LEVEL_ENV, user_data_dir

LOG_FORMAT = "[%(levelname)s %(asctime)s.%(msecs)03d] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

_CONFIGURED_FLAG = "_visiontrack_configured"


def default_log_file() -> str:
    return os.path.join(user_data_dir(), LOG_FILE_NAME)


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure le logger racine une seule fois.

    Niveau: argument explicite, sinon variable VISIONTRACK_LOG_LEVEL, sinon INFO.
    `log_file` ajoute un fichier (dossier créé au besoin).
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG, False):
        return

    lvl_name = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    lvl = getattr(logging, lvl_name, None)
    if not isinstance(lvl, int):
        lvl = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root.handlers.clear()
    root.addHandler(handler)

    if log_file:
        try:
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError as e:
            root.warning("Fichier de log indisponible (%s): %s", log_file, e)

    root.setLevel(lvl)
    setattr(root, _CONFIGURED_FLAG, True)


def clear_log_file(log_file: Optional[str] = None) -> None:
    """Vide le fichier de log (utile pour les essais)."""
    path = log_file or default_log_file()
    if os.path.exists(path):
        with open(path, "w", encoding="utf-8"):
            pass
