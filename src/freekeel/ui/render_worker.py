"""
Background worker that rasterizes a document without freezing the UI
"""
import logging
from typing import Optional

from PyQt6.QtCore import QThread, pyqtSignal

from ..core.errors import LoadError
from ..core.session import SessionController

logger = logging.getLogger(__name__)


class RenderWorker(QThread):
    """
    Renders every page of a PDF for one load token

    Only produces a RenderResult; installing it into the session happens
    on the GUI thread, where stale tokens are discarded.
    """

    # Signals
    rendered = pyqtSignal(int, object, object)  # token, data, RenderResult
    failed = pyqtSignal(int, str)  # token, error message

    def __init__(self, controller: SessionController, token: int, data: bytes,
                 password: Optional[str] = None, parent=None):
        super().__init__(parent)
        self._controller = controller
        self._token = token
        self._data = data
        self._password = password

    @property
    def token(self) -> int:
        return self._token

    def run(self):
        """Render in the background thread"""
        try:
            result = self._controller.render_document(self._data, self._password)
        except LoadError as e:
            logger.warning("Load %d failed: %s", self._token, e)
            self.failed.emit(self._token, str(e))
            return

        self.rendered.emit(self._token, self._data, result)
