"""
Main Window
Application main window with menus, tool bar, and the page canvas
"""
import logging
import os
from typing import List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QActionGroup, QColor, QKeySequence
from PyQt6.QtWidgets import (QColorDialog, QFileDialog, QInputDialog, QLabel, QMainWindow,
                             QMessageBox, QScrollArea, QSpinBox, QStatusBar, QToolBar)

from ..core.errors import ExportError, LoadError
from ..core.session import SessionController
from ..tools import PenTool, TextTool
from ..utils.settings import Settings
from .pdf_canvas import PDFCanvasWidget
from .render_worker import RenderWorker

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """FreeKeel main window"""

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__()
        self.settings = settings if settings is not None else Settings()
        self.controller = SessionController(settings=self.settings)
        self.text_tool = TextTool(self.controller)
        self.pen_tool = PenTool(self.controller)
        self._workers: List[RenderWorker] = []

        self.setWindowTitle("FreeKeel")
        self.setAcceptDrops(True)
        self.resize(1100, 900)

        self.setup_ui()
        self.create_menus()
        self.create_tool_toolbar()
        self.set_tool("text")
        self.update_undo_action()

    def setup_ui(self):
        self.canvas = PDFCanvasWidget(self.controller)
        self.canvas.annotations_changed.connect(self.update_undo_action)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidget(self.canvas)
        self.scroll_area.setAlignment(Qt.AlignmentFlag.AlignHCenter)
        self.setCentralWidget(self.scroll_area)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.status_bar.showMessage("Open or drop a PDF to start")

    def create_menus(self):
        """Create menu bar"""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")

        new_action = QAction("&New", self)
        new_action.setShortcut(QKeySequence.StandardKey.New)
        new_action.triggered.connect(self.new_document)
        file_menu.addAction(new_action)

        open_action = QAction("&Open...", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self.open_file)
        file_menu.addAction(open_action)

        self.recent_menu = file_menu.addMenu("Open &Recent")
        self.update_recent_menu()

        file_menu.addSeparator()

        self.export_action = QAction("&Save Flattened...", self)
        self.export_action.setShortcut(QKeySequence.StandardKey.Save)
        self.export_action.triggered.connect(self.export_flattened)
        file_menu.addAction(self.export_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence.StandardKey.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = menubar.addMenu("&Edit")

        self.undo_action = QAction("&Undo", self)
        self.undo_action.setShortcut(QKeySequence.StandardKey.Undo)
        self.undo_action.triggered.connect(self.undo)
        edit_menu.addAction(self.undo_action)

    def create_tool_toolbar(self):
        toolbar = QToolBar("Tools")
        self.addToolBar(toolbar)

        group = QActionGroup(self)
        group.setExclusive(True)
        self.tool_actions = {}
        for name, label in (("text", "Text"), ("pen", "Draw")):
            action = QAction(label, self)
            action.setCheckable(True)
            action.triggered.connect(lambda checked, n=name: self.set_tool(n))
            group.addAction(action)
            toolbar.addAction(action)
            self.tool_actions[name] = action

        toolbar.addSeparator()

        toolbar.addWidget(QLabel(" Text size "))
        self.text_size_spin = QSpinBox()
        self.text_size_spin.setRange(6, 144)
        self.text_size_spin.setValue(self.text_tool.font_size)
        self.text_size_spin.valueChanged.connect(self.on_text_size_changed)
        toolbar.addWidget(self.text_size_spin)

        text_color_action = QAction("Text Color", self)
        text_color_action.triggered.connect(lambda: self.choose_color(self.text_tool, 'text.color'))
        toolbar.addAction(text_color_action)

        toolbar.addSeparator()

        toolbar.addWidget(QLabel(" Line width "))
        self.line_width_spin = QSpinBox()
        self.line_width_spin.setRange(1, 50)
        self.line_width_spin.setValue(self.pen_tool.width)
        self.line_width_spin.valueChanged.connect(self.on_line_width_changed)
        toolbar.addWidget(self.line_width_spin)

        draw_color_action = QAction("Draw Color", self)
        draw_color_action.triggered.connect(lambda: self.choose_color(self.pen_tool, 'stroke.color'))
        toolbar.addAction(draw_color_action)

        toolbar.addSeparator()
        toolbar.addAction(self.undo_action)

    def set_tool(self, tool_name: str):
        tool = self.pen_tool if tool_name == "pen" else self.text_tool
        self.tool_actions[tool_name].setChecked(True)
        self.canvas.set_tool(tool)

    def on_text_size_changed(self, size: int):
        self.text_tool.set_font_size(size)
        self.settings.set('text.size', size)

    def on_line_width_changed(self, width: int):
        self.pen_tool.set_width(width)
        self.settings.set('stroke.width', width)

    def choose_color(self, tool, settings_key: str):
        color = QColorDialog.getColor(QColor(tool.color), self)
        if color.isValid():
            tool.set_color(color.name())
            self.settings.set(settings_key, color.name())

    # Documents

    def new_document(self):
        """Create a blank PDF, replacing the current one"""
        default_pages = int(self.settings.get('new_document.page_count', 1))
        pages, ok = QInputDialog.getInt(self, "New PDF", "How many pages?", default_pages, 1, 500)
        if not ok:
            return

        try:
            self.controller.create_document(page_count=pages)
        except LoadError as e:
            QMessageBox.critical(self, "Error", f"Could not create a PDF.\n\n{e}")
            return

        self._document_loaded("Untitled")

    def open_file(self):
        """Open a PDF file"""
        file_name, _ = QFileDialog.getOpenFileName(self, "Open PDF", "", "PDF Files (*.pdf)")
        if file_name:
            self.load_file(file_name)

    def update_recent_menu(self):
        """Rebuild the recent files menu from settings"""
        self.recent_menu.clear()
        recent = self.settings.get_recent_files()
        for path in recent:
            action = QAction(os.path.basename(path), self)
            action.setToolTip(path)
            action.triggered.connect(lambda checked, p=path: self.load_file(p))
            self.recent_menu.addAction(action)
        self.recent_menu.setEnabled(bool(recent))

    def load_file(self, file_name: str):
        """Read a PDF and render it in the background"""
        try:
            with open(file_name, 'rb') as f:
                data = f.read()
        except OSError as e:
            QMessageBox.critical(self, "Error", f"Could not read {file_name}.\n\n{e}")
            return

        token = self.controller.begin_load()
        worker = RenderWorker(self.controller, token, data, parent=self)
        worker.rendered.connect(lambda t, d, r, name=file_name: self._on_rendered(t, d, r, name))
        worker.failed.connect(self._on_render_failed)
        worker.finished.connect(lambda w=worker: self._forget_worker(w))
        self._workers.append(worker)
        worker.start()

        self.status_bar.showMessage(f"Opening {os.path.basename(file_name)}...")

    def _on_rendered(self, token: int, data: bytes, result, file_name: str):
        if not self.controller.install(token, data, result):
            return
        self.settings.add_recent_file(file_name)
        self.update_recent_menu()
        self._document_loaded(os.path.basename(file_name))

    def _on_render_failed(self, token: int, message: str):
        if not self.controller.is_current(token):
            return
        self.status_bar.showMessage("Could not open that PDF")
        QMessageBox.critical(self, "Error", f"Could not open that PDF.\n\n{message}")

    def _forget_worker(self, worker: RenderWorker):
        if worker in self._workers:
            self._workers.remove(worker)
        worker.deleteLater()

    def _document_loaded(self, title: str):
        self.canvas.load_session()
        self.update_undo_action()
        self.setWindowTitle(f"FreeKeel - {title}")
        self.status_bar.showMessage(f"Opened: {title} ({self.controller.session.page_count} page(s))")

    def export_flattened(self):
        """Save a copy of the PDF with the annotations burned in"""
        if not self.controller.session.has_document:
            QMessageBox.information(self, "Save", "Load a PDF first.")
            return

        default_name = self.settings.get('export.file_name', 'edited.pdf')
        file_name, _ = QFileDialog.getSaveFileName(self, "Save Flattened PDF", default_name,
                                                   "PDF Files (*.pdf)")
        if not file_name:
            return

        try:
            self.controller.exporter.export_to_file(self.controller.session, file_name)
        except (ExportError, OSError) as e:
            logger.error("Export failed: %s", e)
            QMessageBox.critical(self, "Error", f"Could not save the PDF.\n\n{e}")
            return

        self.status_bar.showMessage(f"Saved: {file_name}")

    def undo(self):
        if self.controller.undo():
            self.canvas.refresh_overlays()
        self.update_undo_action()

    def update_undo_action(self):
        self.undo_action.setEnabled(self.controller.can_undo())

    # Drag and drop

    def dragEnterEvent(self, event):
        if self._dropped_pdf(event) is not None:
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        file_name = self._dropped_pdf(event)
        if file_name is None:
            QMessageBox.warning(self, "Open", "Please drop a PDF file.")
            return
        event.acceptProposedAction()
        self.load_file(file_name)

    @staticmethod
    def _dropped_pdf(event) -> Optional[str]:
        mime = event.mimeData()
        if not mime.hasUrls():
            return None
        for url in mime.urls():
            path = url.toLocalFile()
            if path.lower().endswith(".pdf"):
                return path
        return None

    def closeEvent(self, event):
        for worker in list(self._workers):
            worker.wait()
        super().closeEvent(event)
