"""
UI module for FreeKeel
Contains all user interface components
"""
from .main_window import MainWindow
from .pdf_canvas import PDFCanvasWidget
from .render_worker import RenderWorker

__all__ = [
    'MainWindow',
    'PDFCanvasWidget',
    'RenderWorker'
]
