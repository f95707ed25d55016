"""
Shared pytest fixtures
"""
import os

# Qt must run headless before any PyQt6 import
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from typing import List, Optional

import pytest
from PyQt6.QtWidgets import QApplication

from freekeel.core import PageSize, PageView
from freekeel.core.pdf_document import create_document_bytes
from freekeel.core.session import DocumentSession, SessionController
from freekeel.utils.settings import Settings

LETTER = PageSize(612, 792)


class RecordingMutator:
    """Stands in for PDFMutator and records every draw call"""

    def __init__(self, page_sizes: List[PageSize]):
        self.page_sizes = page_sizes
        self.calls = []
        self.closed = False
        self.fail_serialize: Optional[Exception] = None

    @property
    def page_count(self) -> int:
        return len(self.page_sizes)

    def page_size(self, page_num: int) -> PageSize:
        return self.page_sizes[page_num]

    def draw_text(self, page_num, text, x, y, size, color):
        self.calls.append(("text", page_num, text, x, y, size, color))

    def draw_line(self, page_num, start, end, width, color):
        self.calls.append(("line", page_num, start, end, width, color))

    def serialize(self) -> bytes:
        if self.fail_serialize is not None:
            raise self.fail_serialize
        return b"%PDF-recorded"

    def close(self):
        self.closed = True


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for the whole test run"""
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def settings(tmp_path):
    """Settings backed by a temporary file"""
    return Settings(config_file=str(tmp_path / "settings.json"))


@pytest.fixture
def controller(settings):
    return SessionController(settings=settings)


@pytest.fixture
def make_pdf():
    """Build PDF bytes with the given page sizes"""
    def _make(*page_sizes: PageSize) -> bytes:
        return create_document_bytes(list(page_sizes) or [LETTER])
    return _make


@pytest.fixture
def letter_pdf(make_pdf):
    """One US Letter page"""
    return make_pdf(LETTER)


@pytest.fixture
def tall_session(letter_pdf):
    """Letter page shown on a 900x1400 overlay"""
    return DocumentSession(data=letter_pdf, page_views=[PageView(0, 900, 1400)])


@pytest.fixture
def three_page_session():
    """Three 900x1400 page views over placeholder bytes"""
    views = [PageView(i, 900, 1400) for i in range(3)]
    return DocumentSession(data=b"%PDF-placeholder", page_views=views)


@pytest.fixture
def recording_factory():
    """Mutator factory for FlatteningExporter that keeps the mutator it built"""
    class Factory:
        def __init__(self):
            self.page_sizes = [LETTER]
            self.mutator: Optional[RecordingMutator] = None

        def __call__(self, data, password=None):
            self.mutator = RecordingMutator(self.page_sizes)
            return self.mutator

    return Factory()


@pytest.fixture
def ready_controller(controller, three_page_session):
    """Controller holding a three-page session"""
    controller.session = three_page_session
    return controller
