"""
VectorPad Geometry Utilities

Point and bounding box value types plus the coordinate helpers used by the
transform and path engines:
- clamping and angle normalization
- device <-> document coordinate mapping under zoom and pan
- angles measured around an element's center
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING
import math

if TYPE_CHECKING:
    from .elements import Element


@dataclass
class Point:
    """A 2D point."""
    x: float
    y: float

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def distance_to(self, other: 'Point') -> float:
        """Calculate Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def rotate(self, angle: float, center: 'Point' = None) -> 'Point':
        """Rotate point around center by angle (degrees)."""
        if center is None:
            center = Point(0, 0)
        rad = math.radians(angle)
        cos_a = math.cos(rad)
        sin_a = math.sin(rad)
        dx = self.x - center.x
        dy = self.y - center.y
        return Point(
            center.x + dx * cos_a - dy * sin_a,
            center.y + dx * sin_a + dy * cos_a
        )

    def copy(self) -> 'Point':
        return Point(self.x, self.y)


@dataclass
class BoundingBox:
    """Axis-aligned bounding box."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return Point(
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2
        )

    def contains(self, point: Point) -> bool:
        """Check if point is inside bounding box."""
        return (self.min_x <= point.x <= self.max_x and
                self.min_y <= point.y <= self.max_y)

    def padded(self, amount: float) -> 'BoundingBox':
        """Return a copy grown by amount on every side."""
        return BoundingBox(
            self.min_x - amount, self.min_y - amount,
            self.max_x + amount, self.max_y + amount
        )


def clamp(value: float, lo: float, hi: float) -> float:
    """Saturate value into [lo, hi]. lo > hi is a caller bug and yields lo."""
    return max(lo, min(value, hi))


def normalize_angle(degrees: float) -> float:
    """Reduce an angle in degrees to [0, 360)."""
    angle = math.fmod(degrees, 360.0)
    if angle < 0:
        angle += 360.0
    # -1e-15 + 360 rounds to 360.0; -0.0 must fold to 0
    if angle >= 360.0 or angle == 0:
        angle = 0.0
    return angle


def shortest_angle_delta(previous: float, current: float) -> float:
    """Signed difference current - previous folded into [-180, 180]."""
    diff = current - previous
    if diff > 180:
        diff -= 360
    if diff < -180:
        diff += 360
    return diff


def document_point_from_device(device_point: Point, zoom: float,
                               pan_offset: Point = None) -> Point:
    """
    Map a pointer position to document coordinates.

    Exact inverse of device_point_from_document: the paint transform scales
    by zoom and then translates by the pan offset.
    """
    if pan_offset is None:
        pan_offset = Point(0, 0)
    return Point(
        (device_point.x - pan_offset.x) / zoom,
        (device_point.y - pan_offset.y) / zoom
    )


def device_point_from_document(doc_point: Point, zoom: float,
                               pan_offset: Point = None) -> Point:
    """Apply the paint transform (scale, then translate) to a document point."""
    if pan_offset is None:
        pan_offset = Point(0, 0)
    return Point(
        doc_point.x * zoom + pan_offset.x,
        doc_point.y * zoom + pan_offset.y
    )


def element_center(element: 'Element') -> Point:
    return Point(element.x + element.width / 2, element.y + element.height / 2)


def angle_from_center(point: Point, element: 'Element') -> float:
    """Angle in degrees of point as seen from the element's center."""
    center = element_center(element)
    return math.degrees(math.atan2(point.y - center.y, point.x - center.x))


def to_local(point: Point, element: 'Element') -> Point:
    """Undo the element's rotation around its center for a document point."""
    if not element.rotation:
        return point.copy()
    return point.rotate(-element.rotation, element_center(element))
