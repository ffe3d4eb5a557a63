"""
VectorPad Scene Elements

Defines the element variants placed on a page: Rectangle, Circle, Triangle,
Star, Line, Text and the freehand Path.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional, Type
import math

import numpy as np

from .geometry import Point, BoundingBox, element_center, to_local


DEFAULT_FILL_COLOR = "#3b82f6"
DEFAULT_BORDER_COLOR = "#1e293b"
DEFAULT_TEXT = "Text"

# A freehand path needs at least this many points to be stored
MIN_PATH_POINTS = 2


class ElementType(Enum):
    """Element variants."""
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    STAR = "star"
    LINE = "line"
    TEXT = "text"
    PATH = "path"


def point_in_polygon(point: Point, polygon: List[Point]) -> bool:
    """
    Check if a point is inside a polygon using ray casting.
    """
    n = len(polygon)
    inside = False

    j = n - 1
    for i in range(n):
        if ((polygon[i].y > point.y) != (polygon[j].y > point.y) and
            point.x < (polygon[j].x - polygon[i].x) *
            (point.y - polygon[i].y) / (polygon[j].y - polygon[i].y) +
            polygon[i].x):
            inside = not inside
        j = i

    return inside


def distance_to_segment(point: Point, a: Point, b: Point) -> float:
    """Shortest distance from point to the segment a-b."""
    dx = b.x - a.x
    dy = b.y - a.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return point.distance_to(a)
    t = ((point.x - a.x) * dx + (point.y - a.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return point.distance_to(Point(a.x + t * dx, a.y + t * dy))


class Element(ABC):
    """
    Abstract base class for all elements.

    Every element is described by its unrotated frame (x, y, width, height)
    plus a rotation in degrees around the frame's center. Subclasses provide
    their outline inside that frame.
    """

    element_type: ElementType = None

    def __init__(self, element_id: str, x: float = 0.0, y: float = 0.0,
                 width: float = 0.0, height: float = 0.0):
        self.id: str = element_id
        self.x: float = float(x)
        self.y: float = float(y)
        self.width: float = float(width)
        self.height: float = float(height)
        self.rotation: float = 0.0  # degrees, [0, 360)
        self.fill_color: str = DEFAULT_FILL_COLOR
        self.border_color: str = DEFAULT_BORDER_COLOR
        self.border_width: float = 0.0
        self.z_index: int = 0
        self.text_content: str = ""

    @property
    def type_name(self) -> str:
        return self.element_type.value

    @property
    def center(self) -> Point:
        return element_center(self)

    @abstractmethod
    def local_outline(self) -> List[Point]:
        """
        Return the outline of the element inside its unrotated frame.
        Closed outlines do not repeat the first point.
        """
        pass

    def get_outline(self) -> List[Point]:
        """Outline in document coordinates with the rotation applied."""
        points = self.local_outline()
        if not self.rotation:
            return points
        center = self.center
        return [p.rotate(self.rotation, center) for p in points]

    def get_bounding_box(self) -> BoundingBox:
        """Return the unrotated frame as a bounding box."""
        return BoundingBox(self.x, self.y, self.x + self.width, self.y + self.height)

    def contains_point(self, point: Point) -> bool:
        """Check if point is inside the element (rotation aware)."""
        return self.get_bounding_box().contains(to_local(point, self))

    def clone(self) -> 'Element':
        """Create an independent copy of this element."""
        element = self.__class__.__new__(self.__class__)
        element.__dict__.update(self.__dict__)
        return element

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(id={self.id!r}, x={self.x:g}, y={self.y:g}, "
                f"width={self.width:g}, height={self.height:g}, z_index={self.z_index})")


class Rectangle(Element):
    """A rectangle."""

    element_type = ElementType.RECTANGLE

    def local_outline(self) -> List[Point]:
        return [
            Point(self.x, self.y),
            Point(self.x + self.width, self.y),
            Point(self.x + self.width, self.y + self.height),
            Point(self.x, self.y + self.height),
        ]


class Circle(Element):
    """A circle (an ellipse inscribed in the frame)."""

    element_type = ElementType.CIRCLE
    segments = 48

    def local_outline(self) -> List[Point]:
        cx, cy = self.x + self.width / 2, self.y + self.height / 2
        rx, ry = self.width / 2, self.height / 2
        return [
            Point(cx + rx * math.cos(2 * math.pi * i / self.segments),
                  cy + ry * math.sin(2 * math.pi * i / self.segments))
            for i in range(self.segments)
        ]

    def contains_point(self, point: Point) -> bool:
        if self.width <= 0 or self.height <= 0:
            return False
        local = to_local(point, self)
        center = self.center
        return (((local.x - center.x) / (self.width / 2)) ** 2 +
                ((local.y - center.y) / (self.height / 2)) ** 2) <= 1


class Triangle(Element):
    """An isosceles triangle pointing up."""

    element_type = ElementType.TRIANGLE

    def local_outline(self) -> List[Point]:
        return [
            Point(self.x + self.width / 2, self.y),
            Point(self.x + self.width, self.y + self.height),
            Point(self.x, self.y + self.height),
        ]

    def contains_point(self, point: Point) -> bool:
        return point_in_polygon(to_local(point, self), self.local_outline())


class Star(Element):
    """A five pointed star."""

    element_type = ElementType.STAR
    spikes = 5
    inner_ratio = 0.5

    def local_outline(self) -> List[Point]:
        cx, cy = self.x + self.width / 2, self.y + self.height / 2
        rx, ry = self.width / 2, self.height / 2
        points = []
        for i in range(self.spikes * 2):
            # Start at the top spike
            angle = -math.pi / 2 + math.pi * i / self.spikes
            scale = 1.0 if i % 2 == 0 else self.inner_ratio
            points.append(Point(cx + rx * scale * math.cos(angle),
                                cy + ry * scale * math.sin(angle)))
        return points

    def contains_point(self, point: Point) -> bool:
        return point_in_polygon(to_local(point, self), self.local_outline())


class Line(Element):
    """A horizontal arrow line through the middle of its frame."""

    element_type = ElementType.LINE

    def local_outline(self) -> List[Point]:
        mid_y = self.y + self.height / 2
        return [Point(self.x, mid_y), Point(self.x + self.width, mid_y)]


class Text(Element):
    """A text box."""

    element_type = ElementType.TEXT

    def __init__(self, element_id: str, x: float = 0.0, y: float = 0.0,
                 width: float = 0.0, height: float = 0.0,
                 text: str = DEFAULT_TEXT):
        super().__init__(element_id, x, y, width, height)
        self.text_content = text

    def local_outline(self) -> List[Point]:
        return Rectangle.local_outline(self)


class Path(Element):
    """
    A freehand polyline.

    The frame is derived: it is the bounding box of the points padded by
    half the stroke width. The stroke is drawn with border_color and
    border_width.
    """

    element_type = ElementType.PATH

    def __init__(self, element_id: str, points: Optional[List[Point]] = None,
                 stroke_width: float = 3.0, stroke_color: str = DEFAULT_FILL_COLOR):
        super().__init__(element_id)
        self.fill_color = "transparent"
        self.border_color = stroke_color
        self.border_width = float(stroke_width)
        self.points: List[Point] = [p.copy() for p in points] if points else []
        if self.points:
            self.update_bounds()

    @property
    def is_valid(self) -> bool:
        return len(self.points) >= MIN_PATH_POINTS

    def add_point(self, point: Point) -> None:
        """Append a point and refresh the derived frame."""
        self.points.append(point.copy())
        self.update_bounds()

    def point_array(self) -> np.ndarray:
        """Points as an (n, 2) float array."""
        if not self.points:
            return np.empty((0, 2), dtype=float)
        return np.array([(p.x, p.y) for p in self.points], dtype=float)

    def update_bounds(self) -> None:
        """Recompute x, y, width, height from the points."""
        if not self.points:
            self.width = self.height = 0.0
            return
        coords = self.point_array()
        min_x, min_y = coords.min(axis=0)
        max_x, max_y = coords.max(axis=0)
        pad = self.border_width / 2
        self.x = float(min_x) - pad
        self.y = float(min_y) - pad
        self.width = float(max_x - min_x) + 2 * pad
        self.height = float(max_y - min_y) + 2 * pad

    def translate(self, dx: float, dy: float) -> None:
        """Move every point and the frame by (dx, dy)."""
        for p in self.points:
            p.x += dx
            p.y += dy
        self.x += dx
        self.y += dy

    def local_outline(self) -> List[Point]:
        return [p.copy() for p in self.points]

    def contains_point(self, point: Point) -> bool:
        """A path is hit when the point lies on its stroke."""
        local = to_local(point, self)
        tolerance = max(self.border_width / 2, 4.0)
        if len(self.points) == 1:
            return local.distance_to(self.points[0]) <= tolerance
        return any(
            distance_to_segment(local, a, b) <= tolerance
            for a, b in zip(self.points, self.points[1:])
        )

    def clone(self) -> 'Path':
        path = super().clone()
        path.points = [p.copy() for p in self.points]
        return path


ELEMENT_CLASSES: Dict[ElementType, Type[Element]] = {
    ElementType.RECTANGLE: Rectangle,
    ElementType.CIRCLE: Circle,
    ElementType.TRIANGLE: Triangle,
    ElementType.STAR: Star,
    ElementType.LINE: Line,
    ElementType.TEXT: Text,
    ElementType.PATH: Path,
}


def element_class_for(element_type) -> Type[Element]:
    """
    Look up the class for an ElementType or its string value.

    Raises:
        ValueError: if the type is unknown
    """
    try:
        return ELEMENT_CLASSES[ElementType(element_type)]
    except (ValueError, KeyError):
        raise ValueError(f"Unknown element type: {element_type}") from None


def element_number(element_id: str) -> int:
    """Numeric suffix of an 'element_<n>' id, -1 when there is none."""
    try:
        return int(str(element_id).rsplit("_", 1)[-1])
    except ValueError:
        return -1


def paint_order(elements: List[Element]) -> List[Element]:
    """
    Elements sorted bottom to top.

    Ties on z_index fall back to the numeric id so the order stays
    deterministic.
    """
    return sorted(elements, key=lambda e: (e.z_index, element_number(e.id), e.id))
