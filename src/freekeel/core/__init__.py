"""
Core module for FreeKeel
Annotation model, coordinate mapping, undo history, and PDF collaborators
"""
from .annotation import (Annotation, AnnotationType, Point, StrokeAnnotation, TextAnnotation,
                         annotation_from_dict, snapshot)
from .coordinates import PageSize, PageTransform, PageView, text_to_physical, to_physical
from .errors import (ExportError, FreeKeelError, LoadError, NoDocumentLoaded, PasswordRequired,
                     SerializationFailed)
from .history import HistoryManager
from .store import AnnotationStore, StrokeHandle
from .pdf_document import PDFMutator, PDFRasterizer, RasterDocument, RenderedPage, hex_to_rgb
from .overlay import OverlayRenderer

__all__ = [
    'Annotation',
    'AnnotationType',
    'Point',
    'StrokeAnnotation',
    'TextAnnotation',
    'annotation_from_dict',
    'snapshot',
    'PageSize',
    'PageTransform',
    'PageView',
    'text_to_physical',
    'to_physical',
    'ExportError',
    'FreeKeelError',
    'LoadError',
    'NoDocumentLoaded',
    'PasswordRequired',
    'SerializationFailed',
    'HistoryManager',
    'AnnotationStore',
    'StrokeHandle',
    'PDFMutator',
    'PDFRasterizer',
    'RasterDocument',
    'RenderedPage',
    'hex_to_rgb',
    'OverlayRenderer',
]
