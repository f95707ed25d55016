"""
Utilities module for FreeKeel
Contains settings and export utilities
"""
from .colors import normalize_color
from .settings import Settings
from .export import ExportOptions, FlatteningExporter

__all__ = ['normalize_color', 'Settings', 'ExportOptions', 'FlatteningExporter']
