"""Styles QSS pour VisionTrack.
Palette sombre; le marqueur et la route gardent leurs couleurs de réglages.
"""

COLOR_BACKGROUND = "#1e1e1e"
COLOR_PANEL = "#252525"
COLOR_ACCENT = "#2a4d69"
COLOR_TEXT_PRIMARY = "#e0e0e0"
COLOR_TEXT_SECONDARY = "#b0b0b0"
COLOR_BORDER = "#3a3a3a"
COLOR_HOVER = "#333333"
COLOR_INPUT_BG = "#181818"
COLOR_SCENE_BG = "#f4f4f4"  # fond clair sous la route

WINDOW_STYLE = f"""
QMainWindow, QWidget {{
    background-color: {COLOR_BACKGROUND};
    color: {COLOR_TEXT_PRIMARY};
    font-family: 'Segoe UI', 'Roboto', sans-serif;
    font-size: 13px;
}}
QDockWidget::title {{
    text-align: left;
    background: {COLOR_PANEL};
    padding: 8px 12px;
    font-weight: bold;
    border-bottom: 1px solid {COLOR_BORDER};
}}
QToolBar {{
    background: {COLOR_PANEL};
    border-bottom: 1px solid {COLOR_BORDER};
    spacing: 4px;
}}
QToolButton {{
    padding: 6px 10px;
    border: 1px solid transparent;
}}
QToolButton:hover {{
    background: {COLOR_HOVER};
}}
QToolButton:checked {{
    background: {COLOR_ACCENT};
    border-color: {COLOR_BORDER};
}}
QLineEdit {{
    background: {COLOR_INPUT_BG};
    border: 1px solid {COLOR_BORDER};
    padding: 3px;
}}
QTableWidget {{
    background: {COLOR_INPUT_BG};
    gridline-color: {COLOR_BORDER};
    selection-background-color: {COLOR_ACCENT};
}}
QHeaderView::section {{
    background: {COLOR_PANEL};
    color: {COLOR_TEXT_SECONDARY};
    border: 1px solid {COLOR_BORDER};
    padding: 4px;
}}
QStatusBar {{
    background: {COLOR_PANEL};
    color: {COLOR_TEXT_SECONDARY};
}}
"""

GROUPBOX_STYLE = f"""
QGroupBox {{
    border: 1px solid {COLOR_BORDER};
    margin-top: 16px;
    padding: 18px 10px 10px 10px;
    font-weight: 700;
    color: {COLOR_TEXT_SECONDARY};
    background-color: {COLOR_PANEL};
}}
QGroupBox::title {{
    subcontrol-origin: margin;
    subcontrol-position: top left;
    padding: 0 5px;
    left: 10px;
    color: {COLOR_ACCENT};
}}
"""
