"""
Coordinate Mapping
Converts between overlay-pixel space (origin top-left, y down) and
physical page space (PDF points, origin bottom-left, y up)
"""
from dataclasses import dataclass

from .annotation import Point


@dataclass(frozen=True)
class PageView:
    """Rendered surface of one page: its index and pixel size at render scale"""
    index: int
    width: int
    height: int


@dataclass(frozen=True)
class PageSize:
    """Physical page size in points"""
    width: float
    height: float


@dataclass(frozen=True)
class PageTransform:
    """Per-page scale factors between pixel and physical space"""
    scale_x: float
    scale_y: float
    physical_height: float

    @classmethod
    def from_sizes(cls, page_view: PageView, physical_size: PageSize) -> "PageTransform":
        if page_view.width <= 0 or page_view.height <= 0:
            raise ValueError(f"Page view {page_view.index} has no pixel area")
        return cls(
            scale_x=physical_size.width / page_view.width,
            scale_y=physical_size.height / page_view.height,
            physical_height=physical_size.height,
        )

    def to_physical(self, point: Point) -> Point:
        """Map an overlay pixel to a physical point, flipping the y axis"""
        return Point(
            point.x * self.scale_x,
            self.physical_height - point.y * self.scale_y,
        )

    def text_to_physical(self, point: Point, font_size: float) -> Point:
        """
        Map a text anchor to its physical baseline origin

        Text is anchored at its visual top-left on screen but drawn from a
        bottom-left baseline on the page, so the font size is taken off y.
        """
        physical = self.to_physical(point)
        return Point(physical.x, physical.y - font_size)

    def to_pixel(self, point: Point) -> Point:
        """Inverse of to_physical"""
        return Point(
            point.x / self.scale_x,
            (self.physical_height - point.y) / self.scale_y,
        )


def to_physical(page_view: PageView, physical_size: PageSize, point: Point) -> Point:
    return PageTransform.from_sizes(page_view, physical_size).to_physical(point)


def text_to_physical(page_view: PageView, physical_size: PageSize, point: Point,
                     font_size: float) -> Point:
    return PageTransform.from_sizes(page_view, physical_size).text_to_physical(point, font_size)
