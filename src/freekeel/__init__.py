"""
FreeKeel - mark up PDFs with text and freehand strokes, undo, and export
the marks flattened into the pages
"""
__version__ = "1.0.0"
