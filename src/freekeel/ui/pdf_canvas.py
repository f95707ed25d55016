"""
PDF Canvas Widget
Shows every rendered page stacked vertically with its annotation overlay
"""
from typing import List, Optional, Tuple

from PIL import Image
from PyQt6.QtCore import QPointF, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QImage, QMouseEvent, QPainter, QPixmap
from PyQt6.QtWidgets import QInputDialog, QWidget

from ..core.overlay import OverlayRenderer
from ..core.session import DocumentSession, SessionController
from ..tools import BaseTool, TextTool


def pil_to_pixmap(image: Image.Image) -> QPixmap:
    """Convert an RGB Pillow image to a QPixmap"""
    image = image.convert("RGB")
    data = image.tobytes("raw", "RGB")
    qimage = QImage(data, image.width, image.height, image.width * 3, QImage.Format.Format_RGB888)
    # copy() detaches the QImage from the Python buffer
    return QPixmap.fromImage(qimage.copy())


class PDFCanvasWidget(QWidget):
    """Widget that displays the pages and routes pointer input to the active tool"""

    annotations_changed = pyqtSignal()

    # Gap between pages (in pixels)
    PAGE_GAP = 20

    def __init__(self, controller: SessionController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.renderer = OverlayRenderer()
        self.current_tool: Optional[BaseTool] = None

        self.page_pixmaps: List[QPixmap] = []
        self.overlays: List[QImage] = []
        self.page_offsets: List[int] = []

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    @property
    def session(self) -> DocumentSession:
        return self.controller.session

    def set_tool(self, tool: Optional[BaseTool]):
        """Set the current annotation tool"""
        if self.current_tool:
            self.current_tool.deactivate()

        self.current_tool = tool

        if self.current_tool:
            self.current_tool.activate()
            self.setCursor(self.current_tool.get_cursor())
        else:
            self.setCursor(Qt.CursorShape.ArrowCursor)

    def load_session(self):
        """Rebuild page surfaces after the controller installed a new session"""
        if self.current_tool:
            self.current_tool.deactivate()
            self.current_tool.activate()

        self.page_pixmaps = [pil_to_pixmap(image) for image in self.session.page_images]
        self.overlays = [self.renderer.create_surface(view) for view in self.session.page_views]
        self._calculate_page_offsets()
        self.refresh_overlays()

    def refresh_overlays(self):
        """Repaint every overlay from the live annotations"""
        self.renderer.repaint_all(self.overlays, self.session.page_views, self.session.store)
        self.update()

    def _calculate_page_offsets(self):
        self.page_offsets = []
        current_offset = 0
        max_width = 0

        for view in self.session.page_views:
            self.page_offsets.append(current_offset)
            current_offset += view.height + self.PAGE_GAP
            max_width = max(max_width, view.width)

        total_height = max(0, current_offset - self.PAGE_GAP)
        self.setMinimumSize(max_width, total_height)
        self.resize(max_width, total_height)

    def page_at(self, pos: QPointF) -> Optional[Tuple[int, QPointF]]:
        """Page under a widget position and the position in that page's pixels"""
        for view, offset in zip(self.session.page_views, self.page_offsets):
            local = QPointF(pos.x(), pos.y() - offset)
            if 0 <= local.x() < view.width and 0 <= local.y() < view.height:
                return view.index, local
        return None

    def _local_to_page(self, page_num: int, pos: QPointF) -> QPointF:
        return QPointF(pos.x(), pos.y() - self.page_offsets[page_num])

    def paintEvent(self, event):
        """Paint the pages and their overlays"""
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor("#2b2b2b"))

        for pixmap, overlay, offset in zip(self.page_pixmaps, self.overlays, self.page_offsets):
            painter.drawPixmap(0, offset, pixmap)
            painter.drawImage(0, offset, overlay)

        painter.end()

    def mousePressEvent(self, event: QMouseEvent):
        hit = self.page_at(event.position())
        if not self.current_tool or hit is None:
            return super().mousePressEvent(event)

        page_num, pos = hit
        if not self.current_tool.mouse_press(event, page_num, pos):
            return

        if isinstance(self.current_tool, TextTool):
            self._prompt_text(self.current_tool)
        else:
            self._changed()

    def mouseMoveEvent(self, event: QMouseEvent):
        handle = getattr(self.current_tool, 'handle', None)
        if handle is None:
            return super().mouseMoveEvent(event)

        # Keep extending the stroke's own page even when the pointer leaves it
        page_num = handle.page_index
        if page_num >= len(self.page_offsets):
            return
        pos = self._local_to_page(page_num, event.position())
        if self.current_tool.mouse_move(event, page_num, pos):
            self._changed()

    def mouseReleaseEvent(self, event: QMouseEvent):
        if not self.current_tool:
            return super().mouseReleaseEvent(event)

        hit = self.page_at(event.position())
        page_num, pos = hit if hit else (-1, event.position())
        if self.current_tool.mouse_release(event, page_num, pos):
            self._changed()

    def _prompt_text(self, tool: TextTool):
        text, ok = QInputDialog.getText(self, "Add Text", "Text:")
        if tool.place_text(text if ok else ""):
            self._changed()

    def _changed(self):
        self.refresh_overlays()
        self.annotations_changed.emit()
