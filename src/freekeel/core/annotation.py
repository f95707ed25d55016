"""
Annotation Model
Text labels and freehand strokes bound to a page, in overlay-pixel space
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Tuple, Union

DEFAULT_TEXT_SIZE = 18
DEFAULT_TEXT_COLOR = "#FFFF00"
DEFAULT_STROKE_WIDTH = 2
DEFAULT_STROKE_COLOR = "#00FF00"


class AnnotationType(Enum):
    """Kinds of annotation a page can carry"""
    TEXT = "text"
    STROKE = "stroke"


@dataclass(frozen=True)
class Point:
    """Position in overlay-pixel space (origin top-left, y down)"""
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "Point":
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True)
class TextAnnotation:
    """
    Text label anchored at the visual top-left of where the user clicked

    Attributes:
        page_index: 0-based page the label belongs to
        position: anchor point in overlay pixels
        text: label content, never empty
        size: font size in pixels
        color: hex color used on screen
    """
    page_index: int
    position: Point
    text: str
    size: int = DEFAULT_TEXT_SIZE
    color: str = DEFAULT_TEXT_COLOR

    def __post_init__(self):
        if not self.text:
            raise ValueError("Text annotation requires non-empty text")

    @property
    def type(self) -> AnnotationType:
        return AnnotationType.TEXT

    def copy(self) -> "TextAnnotation":
        # Every field is immutable
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "page_index": self.page_index,
            "position": self.position.to_dict(),
            "text": self.text,
            "size": self.size,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TextAnnotation":
        return cls(
            page_index=data["page_index"],
            position=Point.from_dict(data["position"]),
            text=data["text"],
            size=data.get("size", DEFAULT_TEXT_SIZE),
            color=data.get("color", DEFAULT_TEXT_COLOR),
        )


@dataclass
class StrokeAnnotation:
    """
    Freehand polyline drawn with the pen tool

    The point list only grows while the stroke is being drawn. A stroke
    interrupted early may hold zero or one point.
    """
    page_index: int
    points: List[Point] = field(default_factory=list)
    width: int = DEFAULT_STROKE_WIDTH
    color: str = DEFAULT_STROKE_COLOR

    @classmethod
    def start(cls, page_index: int, point: Point, width: int = DEFAULT_STROKE_WIDTH,
              color: str = DEFAULT_STROKE_COLOR) -> "StrokeAnnotation":
        """Create a stroke holding its first point"""
        return cls(page_index=page_index, points=[point], width=width, color=color)

    @property
    def type(self) -> AnnotationType:
        return AnnotationType.STROKE

    def add_point(self, point: Point):
        """Extend the stroke by one point"""
        self.points.append(point)

    def segments(self) -> List[Tuple[Point, Point]]:
        """Consecutive point pairs, N points give N-1 segments"""
        return list(zip(self.points, self.points[1:]))

    def copy(self) -> "StrokeAnnotation":
        return StrokeAnnotation(
            page_index=self.page_index,
            points=list(self.points),
            width=self.width,
            color=self.color,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "page_index": self.page_index,
            "points": [p.to_dict() for p in self.points],
            "width": self.width,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StrokeAnnotation":
        return cls(
            page_index=data["page_index"],
            points=[Point.from_dict(p) for p in data.get("points", [])],
            width=data.get("width", DEFAULT_STROKE_WIDTH),
            color=data.get("color", DEFAULT_STROKE_COLOR),
        )


Annotation = Union[TextAnnotation, StrokeAnnotation]


def annotation_from_dict(data: Dict[str, Any]) -> Annotation:
    """Deserialize an annotation from its plain structural form"""
    kind = AnnotationType(data["type"])
    if kind == AnnotationType.TEXT:
        return TextAnnotation.from_dict(data)
    return StrokeAnnotation.from_dict(data)


def snapshot(annotations: Iterable[Annotation]) -> Tuple[Annotation, ...]:
    """Independent copy of an annotation sequence, sharing no mutable state"""
    return tuple(annotation.copy() for annotation in annotations)
