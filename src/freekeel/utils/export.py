"""
PDF Export
Flattens annotations into page content at physical coordinates
"""
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from ..core.annotation import Annotation, StrokeAnnotation, TextAnnotation
from ..core.coordinates import PageTransform
from ..core.errors import LoadError, NoDocumentLoaded, SerializationFailed
from ..core.pdf_document import PDFMutator
from .colors import normalize_color

if TYPE_CHECKING:
    from ..core.session import DocumentSession
    from .settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportOptions:
    """How annotation marks are colored in the exported file"""
    text_color: str = "#FFFF00"
    stroke_color: str = "#00FF00"
    preserve_colors: bool = False

    def color_for(self, annotation: Annotation) -> str:
        if self.preserve_colors:
            return annotation.color
        if isinstance(annotation, TextAnnotation):
            return self.text_color
        return self.stroke_color


class FlatteningExporter:
    """Burns a session's annotations into a copy of its document"""

    def __init__(self, options: Optional[ExportOptions] = None,
                 mutator_factory: Callable[..., PDFMutator] = PDFMutator.load):
        self.options = options or ExportOptions()
        self.mutator_factory = mutator_factory

    @classmethod
    def from_settings(cls, settings: "Settings") -> "FlatteningExporter":
        return cls(ExportOptions(
            text_color=normalize_color(settings.get('export.text_color'), '#FFFF00'),
            stroke_color=normalize_color(settings.get('export.stroke_color'), '#00FF00'),
            preserve_colors=bool(settings.get('export.preserve_colors', False)),
        ))

    def flatten(self, session: "DocumentSession") -> bytes:
        """
        Return new PDF bytes with every live annotation drawn in

        Annotations are drawn in append order so overlaps match the screen.
        Annotations whose page no longer exists are skipped.
        """
        if session.data is None:
            raise NoDocumentLoaded()

        try:
            mutator = self.mutator_factory(session.data, session.password)
        except LoadError as e:
            raise SerializationFailed(f"Could not reopen the document: {e}") from e

        drawn = 0
        skipped = 0
        try:
            for annotation in session.store:
                if self._flatten_one(mutator, session, annotation):
                    drawn += 1
                else:
                    skipped += 1

            output = mutator.serialize()
        finally:
            mutator.close()

        logger.info("Exported %d annotation(s), skipped %d on missing pages", drawn, skipped)
        return output

    def export_to_file(self, session: "DocumentSession", output_path: str) -> str:
        """Flatten and write the result; nothing is written if flattening fails"""
        output = self.flatten(session)
        with open(output_path, 'wb') as f:
            f.write(output)
        return output_path

    def _flatten_one(self, mutator: PDFMutator, session: "DocumentSession",
                     annotation: Annotation) -> bool:
        page_num = annotation.page_index
        page_view = session.page_view(page_num)
        if not 0 <= page_num < mutator.page_count or page_view is None:
            logger.debug("Skipping annotation on missing page %d", page_num)
            return False

        transform = PageTransform.from_sizes(page_view, mutator.page_size(page_num))
        color = self.options.color_for(annotation)

        if not isinstance(annotation, (TextAnnotation, StrokeAnnotation)):
            raise TypeError(f"Unsupported annotation: {type(annotation).__name__}")

        try:
            if isinstance(annotation, TextAnnotation):
                origin = transform.text_to_physical(annotation.position, annotation.size)
                mutator.draw_text(page_num, annotation.text, origin.x, origin.y,
                                  annotation.size, color)
            else:
                for start, end in annotation.segments():
                    mutator.draw_line(page_num, transform.to_physical(start),
                                      transform.to_physical(end), annotation.width, color)
        except (ValueError, RuntimeError) as e:
            raise SerializationFailed(
                f"Could not draw annotation on page {page_num + 1}: {e}") from e

        return True
