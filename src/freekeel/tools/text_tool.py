"""
Text Label Tool
"""
from typing import Optional, Tuple

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QCursor, QMouseEvent

from ..core.annotation import TextAnnotation
from ..core.session import SessionController
from .base_tool import BaseTool, ToolType, to_point


class TextTool(BaseTool):
    """Places a text label where the user clicks, one label is one undo step"""

    def __init__(self, controller: SessionController):
        super().__init__(ToolType.TEXT, controller)
        self.cursor = QCursor(Qt.CursorShape.IBeamCursor)
        self.font_size = int(controller.settings.get('text.size', 18))
        self.color = controller.settings.get('text.color', '#FFFF00')
        self.pending: Optional[Tuple[int, QPointF]] = None

    def mouse_press(self, event: QMouseEvent, page_num: int, pos: QPointF) -> bool:
        if event.button() == Qt.MouseButton.LeftButton:
            # The canvas asks for the text, then calls place_text
            self.pending = (page_num, QPointF(pos))
            return True
        return False

    def place_text(self, text: str) -> Optional[TextAnnotation]:
        """Add the label at the pending click; cancelled or empty text adds nothing"""
        pending, self.pending = self.pending, None
        if pending is None or not text:
            return None

        page_num, pos = pending
        return self.controller.add_text(page_num, to_point(pos), text, self.font_size, self.color)

    def deactivate(self):
        self.pending = None
        super().deactivate()
