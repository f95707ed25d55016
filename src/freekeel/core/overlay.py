"""
Overlay Renderer
Paints annotations onto transparent per-page surfaces
"""
import logging
from typing import Iterable, List, Sequence

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QColor, QFont, QImage, QPainter, QPainterPath, QPen

from .annotation import Annotation, StrokeAnnotation, TextAnnotation
from .coordinates import PageView

logger = logging.getLogger(__name__)


class OverlayRenderer:
    """
    Draws annotations in append order, later ones on top

    Holds no state between calls; the annotations passed in are the whole
    truth for the surface being painted.
    """

    FONT_FAMILY = "Arial"

    def create_surface(self, page_view: PageView) -> QImage:
        """Transparent surface matching the page's pixel size"""
        surface = QImage(page_view.width, page_view.height,
                         QImage.Format.Format_ARGB32_Premultiplied)
        surface.fill(Qt.GlobalColor.transparent)
        return surface

    def repaint(self, surface: QImage, page_view: PageView, annotations: Iterable[Annotation]):
        """Clear the surface and draw the page's annotations"""
        surface.fill(Qt.GlobalColor.transparent)

        painter = QPainter(surface)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
            for annotation in annotations:
                if annotation.page_index != page_view.index:
                    continue
                self.paint(painter, annotation)
        finally:
            painter.end()

    def repaint_all(self, surfaces: Sequence[QImage], page_views: Sequence[PageView],
                    annotations: Iterable[Annotation]):
        """Repaint every page; annotations on pages without a view are skipped"""
        by_page: List[List[Annotation]] = [[] for _ in page_views]
        for annotation in annotations:
            if 0 <= annotation.page_index < len(page_views):
                by_page[annotation.page_index].append(annotation)
            else:
                logger.debug("Skipping annotation on missing page %d", annotation.page_index)

        for surface, page_view, page_annotations in zip(surfaces, page_views, by_page):
            self.repaint(surface, page_view, page_annotations)

    def paint(self, painter: QPainter, annotation: Annotation):
        """Draw one annotation"""
        painter.save()
        try:
            if isinstance(annotation, TextAnnotation):
                self._paint_text(painter, annotation)
            elif isinstance(annotation, StrokeAnnotation):
                self._paint_stroke(painter, annotation)
            else:
                raise TypeError(f"Unsupported annotation: {type(annotation).__name__}")
        finally:
            painter.restore()

    def _paint_text(self, painter: QPainter, annotation: TextAnnotation):
        font = QFont(self.FONT_FAMILY)
        font.setPixelSize(max(1, int(annotation.size)))
        painter.setFont(font)
        painter.setPen(QColor(annotation.color))

        # Anchor is the top-left of the label, Qt draws from the baseline
        ascent = painter.fontMetrics().ascent()
        painter.drawText(QPointF(annotation.position.x, annotation.position.y + ascent),
                         annotation.text)

    def _paint_stroke(self, painter: QPainter, annotation: StrokeAnnotation):
        points = annotation.points
        if len(points) < 2:
            return

        pen = QPen(QColor(annotation.color), annotation.width, Qt.PenStyle.SolidLine,
                   Qt.PenCapStyle.RoundCap, Qt.PenJoinStyle.RoundJoin)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)

        path = QPainterPath()
        path.moveTo(points[0].x, points[0].y)
        for point in points[1:]:
            path.lineTo(point.x, point.y)

        painter.drawPath(path)
