"""
Tests for the annotation tools
"""
from types import SimpleNamespace

import pytest
from PyQt6.QtCore import QPointF, Qt

from freekeel.core.annotation import Point, StrokeAnnotation
from freekeel.tools import PenTool, TextTool


def press(button=Qt.MouseButton.LeftButton):
    return SimpleNamespace(button=lambda: button)


MOVE = SimpleNamespace(button=lambda: Qt.MouseButton.NoButton)


@pytest.fixture
def pen(qapp, ready_controller):
    return PenTool(ready_controller)


@pytest.fixture
def text_tool(qapp, ready_controller):
    return TextTool(ready_controller)


class TestPenTool:
    """Tests for freehand drawing"""

    def test_drag_draws_one_stroke(self, pen):
        """Test press, moves and release make one stroke and one undo step"""
        assert pen.mouse_press(press(), 0, QPointF(1, 1))
        assert pen.mouse_move(MOVE, 0, QPointF(2, 2))
        assert pen.mouse_move(MOVE, 0, QPointF(3, 3))
        assert pen.mouse_release(press(), 0, QPointF(3, 3))

        store = pen.controller.session.store
        assert len(store) == 1
        assert store[0].points == [Point(1, 1), Point(2, 2), Point(3, 3)]
        assert len(pen.controller.session.history) == 1

    def test_moves_after_release_are_ignored(self, pen):
        """Test hovering after the drag does not extend the stroke"""
        pen.mouse_press(press(), 0, QPointF(1, 1))
        pen.mouse_release(press(), 0, QPointF(1, 1))

        assert not pen.mouse_move(MOVE, 0, QPointF(5, 5))
        assert pen.controller.session.store[0].points == [Point(1, 1)]

    def test_uses_tool_width_and_color(self, pen):
        """Test the stroke takes the tool's settings"""
        pen.set_width(7)
        pen.set_color("#123456")

        pen.mouse_press(press(), 1, QPointF(0, 0))

        stroke = pen.controller.session.store[0]
        assert isinstance(stroke, StrokeAnnotation)
        assert (stroke.page_index, stroke.width, stroke.color) == (1, 7, "#123456")

    def test_right_button_ignored(self, pen):
        """Test only the left button draws"""
        assert not pen.mouse_press(press(Qt.MouseButton.RightButton), 0, QPointF(1, 1))
        assert len(pen.controller.session.store) == 0

    def test_missing_page(self, pen):
        """Test drawing on a page that does not exist does nothing"""
        assert not pen.mouse_press(press(), 7, QPointF(1, 1))
        assert not pen.controller.can_undo()

    def test_deactivate_ends_stroke(self, pen):
        """Test switching tools freezes the stroke"""
        pen.mouse_press(press(), 0, QPointF(1, 1))
        handle = pen.handle

        pen.deactivate()

        assert not pen.is_drawing
        assert not pen.controller.extend_stroke(handle, Point(2, 2))


class TestTextTool:
    """Tests for placing labels"""

    def test_click_then_text(self, text_tool):
        """Test a click followed by text adds a label"""
        assert text_tool.mouse_press(press(), 2, QPointF(40, 60))

        label = text_tool.place_text("Hi")

        assert label.page_index == 2
        assert label.position == Point(40, 60)
        assert label.size == 18
        assert text_tool.controller.session.store.annotations == (label,)

    def test_cancelled_text_adds_nothing(self, text_tool):
        """Test an empty answer leaves the store and history alone"""
        text_tool.mouse_press(press(), 0, QPointF(1, 1))

        assert text_tool.place_text("") is None
        assert len(text_tool.controller.session.store) == 0
        assert not text_tool.controller.can_undo()

    def test_text_without_click(self, text_tool):
        """Test text without a pending click is ignored"""
        assert text_tool.place_text("orphan") is None
