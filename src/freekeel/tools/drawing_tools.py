"""
Drawing Tools: Pen
"""
from typing import Optional

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QCursor, QMouseEvent

from ..core.session import SessionController
from ..core.store import StrokeHandle
from .base_tool import BaseTool, ToolType, to_point


class PenTool(BaseTool):
    """Freehand drawing tool, one drag is one undo step"""

    def __init__(self, controller: SessionController):
        super().__init__(ToolType.PEN, controller)
        self.cursor = QCursor(Qt.CursorShape.CrossCursor)
        self.width = int(controller.settings.get('stroke.width', 2))
        self.color = controller.settings.get('stroke.color', '#00FF00')
        self.handle: Optional[StrokeHandle] = None

    @property
    def is_drawing(self) -> bool:
        return self.handle is not None

    def mouse_press(self, event: QMouseEvent, page_num: int, pos: QPointF) -> bool:
        if event.button() != Qt.MouseButton.LeftButton:
            return False

        self.finish()
        self.handle = self.controller.begin_stroke(page_num, to_point(pos), self.width, self.color)
        return self.handle is not None

    def mouse_move(self, event: QMouseEvent, page_num: int, pos: QPointF) -> bool:
        if self.handle is None or page_num != self.handle.page_index:
            return False
        return self.controller.extend_stroke(self.handle, to_point(pos))

    def mouse_release(self, event: QMouseEvent, page_num: int, pos: QPointF) -> bool:
        if event.button() != Qt.MouseButton.LeftButton or self.handle is None:
            return False
        self.finish()
        return True

    def deactivate(self):
        self.finish()
        super().deactivate()

    def finish(self):
        """End the stroke in progress, if any"""
        if self.handle is not None:
            self.controller.end_stroke(self.handle)
            self.handle = None
