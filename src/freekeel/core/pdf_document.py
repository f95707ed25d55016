"""
PDF Collaborators
Rasterizes pages for display and mutates documents for export, on PyMuPDF
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import fitz  # PyMuPDF
from PIL import Image

from .annotation import Point
from .coordinates import PageSize, PageView
from .errors import LoadError, PasswordRequired, SerializationFailed

logger = logging.getLogger(__name__)

# Suppress MuPDF warnings about minor PDF syntax issues
fitz.TOOLS.mupdf_display_errors(False)


def hex_to_rgb(hex_color: str) -> Tuple[float, float, float]:
    """Convert a #RRGGBB color to an RGB tuple in the 0-1 range"""
    hex_color = hex_color.lstrip('#')
    if len(hex_color) != 6:
        raise ValueError(f"Expected a #RRGGBB color, got {hex_color!r}")
    return tuple(int(hex_color[i:i + 2], 16) / 255.0 for i in (0, 2, 4))


def _open_document(data: bytes, password: Optional[str] = None) -> fitz.Document:
    """Open PDF bytes, authenticating when the file is encrypted"""
    if not data:
        raise LoadError("The file is empty")

    try:
        doc = fitz.open(stream=bytes(data), filetype="pdf")
    except RuntimeError as e:
        raise LoadError(f"Could not open that PDF: {e}") from e

    if doc.needs_pass:
        if password is None:
            doc.close()
            raise PasswordRequired("This PDF is password protected")
        if not doc.authenticate(password):
            doc.close()
            raise PasswordRequired("Incorrect password")

    if doc.page_count == 0:
        doc.close()
        raise LoadError("The PDF has no pages")

    logger.debug("Opened PDF with %d page(s)", doc.page_count)
    return doc


@dataclass
class RenderedPage:
    """Pixel buffer of one page at a given render scale"""
    index: int
    image: Image.Image

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def page_view(self) -> PageView:
        return PageView(self.index, self.width, self.height)


class RasterDocument:
    """Open document that can render its pages to images"""

    def __init__(self, doc: fitz.Document):
        self.doc = doc

    @property
    def page_count(self) -> int:
        return self.doc.page_count

    def render_page(self, page_num: int, scale: float = 1.0) -> RenderedPage:
        """Render a page to an RGB image"""
        if not 0 <= page_num < self.page_count:
            raise IndexError(f"Page {page_num} out of range")

        page = self.doc[page_num]
        try:
            pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
        except RuntimeError as e:
            raise LoadError(f"Could not render page {page_num + 1}: {e}") from e

        image = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
        return RenderedPage(page_num, image)

    def close(self):
        self.doc.close()


class PDFRasterizer:
    """Opens PDF bytes for rendering"""

    def open(self, data: bytes, password: Optional[str] = None) -> RasterDocument:
        return RasterDocument(_open_document(data, password))


class PDFMutator:
    """
    Editable PDF used for flattening

    Coordinates given to the draw methods are physical: points with the
    origin at the bottom-left of the page and y growing upward.
    """

    FONT_NAME = "helv"

    def __init__(self, doc: fitz.Document):
        self.doc = doc

    @classmethod
    def load(cls, data: bytes, password: Optional[str] = None) -> "PDFMutator":
        return cls(_open_document(data, password))

    @classmethod
    def create(cls, page_sizes: Sequence[PageSize]) -> "PDFMutator":
        """Create a blank document with one page per size"""
        if not page_sizes:
            raise ValueError("A new document needs at least one page")

        doc = fitz.open()
        for size in page_sizes:
            doc.new_page(width=size.width, height=size.height)
        return cls(doc)

    @property
    def page_count(self) -> int:
        return self.doc.page_count

    def page_size(self, page_num: int) -> PageSize:
        """Get page size in points"""
        rect = self.doc[page_num].rect
        return PageSize(rect.width, rect.height)

    def draw_text(self, page_num: int, text: str, x: float, y: float, size: float, color: str):
        """Draw text with its baseline origin at the physical point"""
        page = self.doc[page_num]
        page.insert_text(
            self._to_page_point(page, x, y),
            text,
            fontsize=size,
            fontname=self.FONT_NAME,
            color=hex_to_rgb(color),
        )

    def draw_line(self, page_num: int, start: Point, end: Point, width: float, color: str):
        """Draw a straight segment between two physical points"""
        page = self.doc[page_num]
        page.draw_line(
            self._to_page_point(page, start.x, start.y),
            self._to_page_point(page, end.x, end.y),
            color=hex_to_rgb(color),
            width=width,
        )

    def serialize(self) -> bytes:
        try:
            return self.doc.tobytes(garbage=4, deflate=True)
        except RuntimeError as e:
            raise SerializationFailed(f"Could not write the PDF: {e}") from e

    def close(self):
        self.doc.close()

    @staticmethod
    def _to_page_point(page: fitz.Page, x: float, y: float) -> fitz.Point:
        # PyMuPDF measures from the top-left of the displayed page; content
        # is written in unrotated space
        return fitz.Point(x, page.rect.height - y) * page.derotation_matrix


def create_document_bytes(page_sizes: List[PageSize]) -> bytes:
    """Serialize a new blank document"""
    mutator = PDFMutator.create(page_sizes)
    try:
        return mutator.serialize()
    finally:
        mutator.close()
