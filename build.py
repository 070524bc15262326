"""Construit l'exécutable VisionTrack (PyInstaller, un seul fichier)."""

import os
import shutil

import PyInstaller.__main__

APP_NAME = "VisionTrack"
ENTRY_POINT = "main.py"
OUTPUT_DIRS = ("build", "dist")

# Modules chargés dynamiquement, invisibles pour l'analyse d'imports
HIDDEN_IMPORTS = (
    "gpxpy",
    "fitparse",
    "pytz",
    "PyQt6.QtMultimedia",
    "PyQt6.QtMultimediaWidgets",
)


def pyinstaller_args():
    args = [
        ENTRY_POINT,
        f"--name={APP_NAME}",
        "--onefile",
        "--windowed",
        "--clean",
        "--paths=src",
    ]
    args += [f"--hidden-import={module}" for module in HIDDEN_IMPORTS]
    return args


def build():
    for folder in OUTPUT_DIRS:
        shutil.rmtree(folder, ignore_errors=True)

    print(f"Construction de {APP_NAME}...")
    PyInstaller.__main__.run(pyinstaller_args())
    print(f"Terminé: {os.path.join('dist', APP_NAME)}")


if __name__ == "__main__":
    build()
