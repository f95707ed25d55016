"""
Tests for the document session controller
"""
import pytest

from freekeel.core.annotation import Point, StrokeAnnotation, TextAnnotation
from freekeel.core.coordinates import PageSize
from freekeel.core.errors import LoadError, NoDocumentLoaded
from freekeel.utils.export import ExportOptions, FlatteningExporter


class TestLoading:
    """Tests for loading, creating and replacing documents"""

    def test_load_builds_page_views(self, controller, letter_pdf):
        """Test page views follow the render scale"""
        session = controller.load_document(letter_pdf)

        assert session.has_document
        assert session.page_count == 1
        view = session.page_views[0]
        assert view.index == 0
        assert abs(view.width - 918) <= 1
        assert abs(view.height - 1188) <= 1
        assert session.page_images[0].size == (view.width, view.height)

    def test_load_resets_annotations_and_history(self, controller, letter_pdf):
        """Test a new load starts with a clean store and history"""
        controller.load_document(letter_pdf)
        controller.add_text(0, Point(10, 10), "old")

        session = controller.load_document(letter_pdf)

        assert len(session.store) == 0
        assert not controller.can_undo()

    def test_failed_load_keeps_previous_session(self, controller, letter_pdf):
        """Test malformed bytes leave the last good session untouched"""
        controller.load_document(letter_pdf)
        controller.add_text(0, Point(10, 10), "keep me")
        previous = controller.session
        views = list(previous.page_views)

        with pytest.raises(LoadError):
            controller.load_document(b"this is not a pdf")

        assert controller.session is previous
        assert previous.page_views == views
        assert [a.text for a in previous.store] == ["keep me"]

    def test_stale_render_is_discarded(self, controller, make_pdf):
        """Test a render finishing after a newer load never overwrites it"""
        one_page = make_pdf(PageSize(612, 792))
        three_pages = make_pdf(*[PageSize(200, 300)] * 3)

        first = controller.begin_load()
        first_result = controller.render_document(one_page)
        second = controller.begin_load()
        second_result = controller.render_document(three_pages)

        assert controller.install(second, three_pages, second_result)
        assert not controller.install(first, one_page, first_result)
        assert controller.session.page_count == 3
        assert controller.session.generation == second

    def test_create_document(self, controller):
        """Test a blank document gets the requested page count"""
        session = controller.create_document(page_count=3)

        assert session.has_document
        assert session.page_count == 3

    def test_create_document_uses_default_size(self, controller):
        """Test new pages default to the configured size"""
        controller.settings.set('render.scale', 1.0)

        session = controller.create_document()

        assert session.page_count == 1
        assert abs(session.page_views[0].width - 612) <= 1
        assert abs(session.page_views[0].height - 792) <= 1


class TestEditing:
    """Tests for edits and their undo steps"""

    def test_add_text_is_one_undo_step(self, ready_controller):
        """Test undo removes exactly the last label"""
        first = ready_controller.add_text(0, Point(1, 1), "A")
        ready_controller.add_text(1, Point(2, 2), "B")

        assert ready_controller.undo()
        assert ready_controller.session.store.annotations == (first,)

    def test_rejected_text_adds_no_history(self, ready_controller):
        """Test empty text and missing pages are ignored"""
        assert ready_controller.add_text(0, Point(1, 1), "") is None
        assert ready_controller.add_text(5, Point(1, 1), "lost") is None
        assert not ready_controller.can_undo()

    def test_add_text_uses_settings_defaults(self, ready_controller):
        """Test size and color fall back to the configured defaults"""
        ready_controller.settings.set('text.size', 24)

        label = ready_controller.add_text(0, Point(1, 1), "Hi")

        assert label.size == 24
        assert label.color == "#FFFF00"

    def test_drag_is_one_undo_step(self, ready_controller):
        """Test a whole stroke gesture undoes at once"""
        handle = ready_controller.begin_stroke(0, Point(0, 0))
        for i in range(1, 6):
            ready_controller.extend_stroke(handle, Point(i, i))
        ready_controller.end_stroke(handle)

        stroke = ready_controller.session.store[0]
        assert isinstance(stroke, StrokeAnnotation)
        assert len(stroke.points) == 6

        assert ready_controller.undo()
        assert len(ready_controller.session.store) == 0
        assert not ready_controller.can_undo()

    def test_stroke_on_missing_page(self, ready_controller):
        """Test a stroke cannot start on a page that does not exist"""
        assert ready_controller.begin_stroke(9, Point(0, 0)) is None

    def test_undo_stales_active_stroke(self, ready_controller):
        """Test points sent after undo do not resurrect the stroke"""
        handle = ready_controller.begin_stroke(0, Point(0, 0))
        ready_controller.undo()

        assert not ready_controller.extend_stroke(handle, Point(1, 1))
        assert len(ready_controller.session.store) == 0

    def test_stroke_on_page_lost_to_reload(self, ready_controller, letter_pdf):
        """Test a drag cannot continue once a reload removed its page"""
        handle = ready_controller.begin_stroke(2, Point(0, 0))
        old_store = ready_controller.session.store

        token = ready_controller.begin_load()
        assert ready_controller.install(token, letter_pdf,
                                        ready_controller.render_document(letter_pdf))

        assert not ready_controller.extend_stroke(handle, Point(5, 5))
        assert len(ready_controller.session.store) == 0
        assert old_store[0].points == [Point(0, 0)]

    def test_named_colors_are_normalized(self, ready_controller):
        """Test color names from settings are stored as #RRGGBB"""
        ready_controller.settings.set('text.color', 'yellow')
        ready_controller.settings.set('stroke.color', 'bogus')

        label = ready_controller.add_text(0, Point(1, 1), "Hi")
        handle = ready_controller.begin_stroke(0, Point(0, 0))

        assert label.color == "#FFFF00"
        assert handle.stroke.color == "#00FF00"

    def test_undo_empty_is_noop(self, ready_controller):
        """Test undo with no history reports nothing done"""
        assert not ready_controller.undo()

    def test_undo_preserves_order(self, ready_controller):
        """Test undo restores the exact earlier order"""
        a = ready_controller.add_text(0, Point(0, 0), "A")
        handle = ready_controller.begin_stroke(0, Point(1, 1))
        ready_controller.end_stroke(handle)
        c = ready_controller.add_text(0, Point(2, 2), "C")
        ready_controller.add_text(0, Point(3, 3), "D")

        ready_controller.undo()

        annotations = ready_controller.annotations_for_page(0)
        assert annotations[0] == a
        assert isinstance(annotations[1], StrokeAnnotation)
        assert annotations[2] == c
        assert len(annotations) == 3


class TestExport:
    """Tests for exporting through the controller"""

    def test_export_without_document(self, controller):
        """Test export before any load fails"""
        with pytest.raises(NoDocumentLoaded):
            controller.export()

    def test_export_returns_pdf_bytes(self, controller, letter_pdf):
        """Test a loaded document exports to PDF bytes"""
        controller.load_document(letter_pdf)
        controller.add_text(0, Point(50, 50), "Hi")

        output = controller.export()

        assert output.startswith(b"%PDF")

    def test_export_with_named_color(self, controller, letter_pdf):
        """Test a color name in settings still exports with annotation colors"""
        controller.settings.set('text.color', 'yellow')
        controller.exporter = FlatteningExporter(ExportOptions(preserve_colors=True))
        controller.load_document(letter_pdf)
        controller.add_text(0, Point(50, 50), "Hi")

        assert controller.export().startswith(b"%PDF")


def test_labels_are_text_annotations(ready_controller):
    label = ready_controller.add_text(2, Point(3, 4), "x", size=10, color="#0000FF")

    assert label == TextAnnotation(2, Point(3, 4), "x", size=10, color="#0000FF")
