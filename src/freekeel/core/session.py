"""
Document Session
Working state of the open document and the controller that owns it
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from PIL import Image

from ..utils.colors import normalize_color
from ..utils.export import FlatteningExporter
from ..utils.settings import Settings
from .annotation import Annotation, Point, TextAnnotation
from .coordinates import PageSize, PageView
from .history import HistoryManager
from .pdf_document import PDFRasterizer, RenderedPage, create_document_bytes
from .store import AnnotationStore, StrokeHandle

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """Pages rendered from a byte buffer, not yet installed in a session"""
    pages: List[RenderedPage] = field(default_factory=list)

    @property
    def page_views(self) -> List[PageView]:
        return [page.page_view for page in self.pages]

    @property
    def images(self) -> List[Image.Image]:
        return [page.image for page in self.pages]


class DocumentSession:
    """
    State of one open document

    Attributes:
        data: PDF bytes, None until a document is loaded or created
        password: password the bytes were opened with, if any
        page_views: rendered page sizes, index matches page position
        page_images: rendered page pixels, parallel to page_views
        store: live annotations
        history: undo snapshots
        generation: load token the session was installed under
    """

    def __init__(self, data: Optional[bytes] = None, page_views: Optional[List[PageView]] = None,
                 page_images: Optional[List[Image.Image]] = None, password: Optional[str] = None,
                 generation: int = 0, history_capacity: int = 50):
        self.data = data
        self.password = password
        self.page_views: List[PageView] = list(page_views or [])
        self.page_images: List[Image.Image] = list(page_images or [])
        self.store = AnnotationStore()
        self.history = HistoryManager(history_capacity)
        self.generation = generation

    @property
    def has_document(self) -> bool:
        return self.data is not None

    @property
    def page_count(self) -> int:
        return len(self.page_views)

    def page_view(self, page_index: int) -> Optional[PageView]:
        """Page view for an index, None for a dangling reference"""
        if 0 <= page_index < len(self.page_views):
            return self.page_views[page_index]
        return None


class SessionController:
    """
    Owns the single active session

    Every load bumps a generation counter. A render that completes after a
    newer load began carries a stale token and is discarded, so it can
    never overwrite the newer session.
    """

    def __init__(self, rasterizer: Optional[PDFRasterizer] = None,
                 settings: Optional[Settings] = None,
                 exporter: Optional[FlatteningExporter] = None):
        self.rasterizer = rasterizer or PDFRasterizer()
        self.settings = settings if settings is not None else Settings()
        self.exporter = exporter or FlatteningExporter.from_settings(self.settings)
        self._generation = 0
        self.session = DocumentSession(history_capacity=self.history_capacity)

    @property
    def history_capacity(self) -> int:
        return int(self.settings.get('history.capacity', 50))

    @property
    def render_scale(self) -> float:
        return float(self.settings.get('render.scale', 1.5))

    # Loading

    def begin_load(self) -> int:
        """Start a load and return its token"""
        self._generation += 1
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation

    def render_document(self, data: bytes, password: Optional[str] = None,
                        scale: Optional[float] = None) -> RenderResult:
        """Rasterize every page; touches no session state"""
        scale = self.render_scale if scale is None else scale
        document = self.rasterizer.open(data, password)
        try:
            pages = [document.render_page(i, scale) for i in range(document.page_count)]
        finally:
            document.close()
        return RenderResult(pages)

    def install(self, token: int, data: bytes, result: RenderResult,
                password: Optional[str] = None) -> bool:
        """Replace the session with a rendered document unless the load is stale"""
        if not self.is_current(token):
            logger.info("Discarding stale render for load %d (current is %d)",
                        token, self._generation)
            return False

        self.session = DocumentSession(
            data=bytes(data),
            page_views=result.page_views,
            page_images=result.images,
            password=password,
            generation=token,
            history_capacity=self.history_capacity,
        )
        logger.info("Loaded document with %d page(s)", self.session.page_count)
        return True

    def load_document(self, data: bytes, password: Optional[str] = None) -> DocumentSession:
        """Load PDF bytes; on failure the previous session is left untouched"""
        token = self.begin_load()
        result = self.render_document(data, password)
        self.install(token, data, result, password)
        return self.session

    def create_document(self, page_count: Optional[int] = None,
                        page_size: Optional[PageSize] = None) -> DocumentSession:
        """Create and load a blank document"""
        if page_count is None:
            page_count = int(self.settings.get('new_document.page_count', 1))
        if page_size is None:
            page_size = PageSize(
                float(self.settings.get('new_document.width', 612)),
                float(self.settings.get('new_document.height', 792)),
            )

        data = create_document_bytes([page_size] * max(1, page_count))
        return self.load_document(data)

    # Editing

    def add_text(self, page_index: int, position: Point, text: str,
                 size: Optional[int] = None, color: Optional[str] = None) -> Optional[TextAnnotation]:
        """Add a text label as one undo step"""
        if not text or self.session.page_view(page_index) is None:
            return None

        annotation = TextAnnotation(
            page_index=page_index,
            position=position,
            text=text,
            size=size if size is not None else int(self.settings.get('text.size', 18)),
            color=normalize_color(color or self.settings.get('text.color'), '#FFFF00'),
        )
        self.session.history.push(self.session.store)
        self.session.store.append(annotation)
        return annotation

    def begin_stroke(self, page_index: int, point: Point, width: Optional[int] = None,
                     color: Optional[str] = None) -> Optional[StrokeHandle]:
        """Start a stroke; the whole drag becomes one undo step"""
        if self.session.page_view(page_index) is None:
            return None

        self.session.history.push(self.session.store)
        return self.session.store.begin_stroke(
            page_index,
            point,
            width if width is not None else int(self.settings.get('stroke.width', 2)),
            normalize_color(color or self.settings.get('stroke.color'), '#00FF00'),
        )

    def extend_stroke(self, handle: StrokeHandle, point: Point) -> bool:
        if self.session.page_view(handle.page_index) is None:
            return False
        return self.session.store.append_point(handle, point)

    def end_stroke(self, handle: StrokeHandle):
        self.session.store.end_stroke(handle)

    def undo(self) -> bool:
        """Restore the state before the last edit; False when nothing to undo"""
        previous = self.session.history.pop()
        if previous is None:
            return False
        self.session.store.replace_all(previous)
        return True

    def can_undo(self) -> bool:
        return self.session.history.can_undo()

    def annotations_for_page(self, page_index: int) -> List[Annotation]:
        return self.session.store.for_page(page_index)

    # Export

    def export(self) -> bytes:
        return self.exporter.flatten(self.session)
