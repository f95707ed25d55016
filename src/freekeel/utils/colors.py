"""
Color Helpers
"""
from PyQt6.QtGui import QColor


def normalize_color(value, fallback: str) -> str:
    """
    Return a color as #RRGGBB

    Accepts anything QColor understands ("yellow", "#ff0", "#FFFF00").
    Values QColor rejects give the fallback.
    """
    color = QColor(value) if isinstance(value, str) else QColor()
    if not color.isValid():
        return fallback
    return color.name(QColor.NameFormat.HexRgb).upper()
