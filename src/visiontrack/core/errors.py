from __future__ import annotations


class VisionTrackError(Exception):
    """Erreur de base de VisionTrack."""


class EmptyTrackError(VisionTrackError):
    """La trace ne contient aucun point."""

    def __init__(self, message: str = "Aucun point dans la trace") -> None:
        super().__init__(message)


class MalformedZoneError(VisionTrackError, ValueError):
    """Chaîne de zone UTM invalide (ex: '', 'X', '61N')."""

    def __init__(self, text: object, reason: str = "") -> None:
        self.text = text
        detail = f": {reason}" if reason else ""
        super().__init__(f"Zone UTM invalide {text!r}{detail}")


class SceneWriteError(VisionTrackError):
    """Échec d'écriture du marqueur dans la scène (création ou mise à jour)."""


class TrackParseError(VisionTrackError):
    """Fichier de trace illisible."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Impossible de lire la trace {path}: {reason}")
