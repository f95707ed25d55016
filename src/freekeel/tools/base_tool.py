"""
Base Tool Class
All annotation tools inherit from this
"""
from enum import Enum

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QCursor, QMouseEvent

from ..core.annotation import Point
from ..core.session import SessionController


class ToolType(Enum):
    """Types of tools available"""
    TEXT = "text"
    PEN = "pen"


class BaseTool:
    """
    Base class for all annotation tools

    A tool turns pointer events on a page into edits on the controller, and
    decides what one undo step is.
    """

    def __init__(self, tool_type: ToolType, controller: SessionController):
        self.type = tool_type
        self.controller = controller
        self.is_active = False
        self.cursor = QCursor(Qt.CursorShape.ArrowCursor)

        self.color = "#000000"
        self.width = 2
        self.font_size = 18

    def activate(self):
        """Called when tool is activated"""
        self.is_active = True

    def deactivate(self):
        """Called when tool is deactivated"""
        self.is_active = False

    def mouse_press(self, event: QMouseEvent, page_num: int, pos: QPointF) -> bool:
        """
        Handle mouse press event
        Returns True if event was handled
        """
        return False

    def mouse_move(self, event: QMouseEvent, page_num: int, pos: QPointF) -> bool:
        """
        Handle mouse move event
        Returns True if the overlay needs a repaint
        """
        return False

    def mouse_release(self, event: QMouseEvent, page_num: int, pos: QPointF) -> bool:
        """
        Handle mouse release event
        Returns True if event was handled
        """
        return False

    def get_cursor(self) -> QCursor:
        """Get cursor for this tool"""
        return self.cursor

    def set_color(self, color: str):
        """Set tool color"""
        self.color = color

    def set_width(self, width: int):
        """Set tool width/thickness"""
        self.width = width

    def set_font_size(self, size: int):
        """Set font size for text tools"""
        self.font_size = size


def to_point(pos: QPointF) -> Point:
    return Point(pos.x(), pos.y())
