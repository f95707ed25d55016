"""
Annotation Store
Live, ordered annotation collection of one document session
"""
from typing import Iterable, Iterator, List, Tuple

from .annotation import Annotation, Point, StrokeAnnotation


class StrokeHandle:
    """Lets the caller extend one specific in-flight stroke and nothing else"""

    def __init__(self, stroke: StrokeAnnotation):
        self.stroke = stroke
        self.active = True

    @property
    def page_index(self) -> int:
        return self.stroke.page_index


class AnnotationStore:
    """
    Holds annotations in append order

    Append order is the only z-ordering: later annotations draw on top.
    The store never records history itself, callers push a snapshot before
    any edit that should be one undo step.
    """

    def __init__(self):
        self._annotations: List[Annotation] = []
        self._handles: List[StrokeHandle] = []

    @property
    def annotations(self) -> Tuple[Annotation, ...]:
        return tuple(self._annotations)

    def append(self, annotation: Annotation):
        """Add an annotation on top of the others"""
        self._annotations.append(annotation)

    def begin_stroke(self, page_index: int, point: Point, width: int, color: str) -> StrokeHandle:
        """Append a one-point stroke and return the handle that extends it"""
        stroke = StrokeAnnotation.start(page_index, point, width, color)
        self._annotations.append(stroke)
        handle = StrokeHandle(stroke)
        self._handles.append(handle)
        return handle

    def append_point(self, handle: StrokeHandle, point: Point) -> bool:
        """Extend the handle's stroke, ignored when the handle is stale"""
        if not self.is_live(handle):
            return False
        handle.stroke.add_point(point)
        return True

    def end_stroke(self, handle: StrokeHandle):
        """Freeze the handle's stroke"""
        handle.active = False
        if handle in self._handles:
            self._handles.remove(handle)

    def is_live(self, handle: StrokeHandle) -> bool:
        """Whether the handle is still drawing a stroke held by this store"""
        if not handle.active:
            return False
        return any(annotation is handle.stroke for annotation in self._annotations)

    def replace_all(self, annotations: Iterable[Annotation]):
        """Install a historical snapshot"""
        self._end_all_strokes()
        self._annotations = list(annotations)

    def reset(self):
        """Remove every annotation"""
        self._end_all_strokes()
        self._annotations = []

    def for_page(self, page_index: int) -> List[Annotation]:
        """Annotations of one page, in append order"""
        return [a for a in self._annotations if a.page_index == page_index]

    def _end_all_strokes(self):
        for handle in self._handles:
            handle.active = False
        self._handles.clear()

    def __iter__(self) -> Iterator[Annotation]:
        return iter(tuple(self._annotations))

    def __len__(self) -> int:
        return len(self._annotations)

    def __getitem__(self, index: int) -> Annotation:
        return self._annotations[index]
