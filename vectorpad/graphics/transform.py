"""
Transform Operations for VectorPad

Handles transformation of elements including:
- Translation (dragging and keyboard nudges)
- Resizing via the four corner handles
- Rotation (absolute nudges and pointer driven)
- Direct property edits from the properties panel

All positions are document coordinates. The canvas extent is a hard bound
that outranks handle semantics.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
import logging

from ..core.config import EditorConfig
from ..core.elements import Element, ElementType, Path
from ..core.geometry import (
    Point, clamp, normalize_angle, shortest_angle_delta, angle_from_center
)

logger = logging.getLogger(__name__)


class ResizeHandle(Enum):
    """Corner grips used to drive a resize."""
    NW = "nw"
    NE = "ne"
    SW = "sw"
    SE = "se"

    @property
    def moves_left_edge(self) -> bool:
        return self in (ResizeHandle.NW, ResizeHandle.SW)

    @property
    def moves_top_edge(self) -> bool:
        return self in (ResizeHandle.NW, ResizeHandle.NE)


@dataclass(frozen=True)
class ShapeConstraints:
    """How an element variant reacts to size changes."""
    resizable: bool = True
    keep_square: bool = False    # width and height stay equal
    fixed_height: bool = False   # height never changes


# One entry per ElementType; used by handle resizes and property edits alike
SHAPE_CONSTRAINTS: Dict[ElementType, ShapeConstraints] = {
    ElementType.RECTANGLE: ShapeConstraints(),
    ElementType.CIRCLE: ShapeConstraints(keep_square=True),
    ElementType.TRIANGLE: ShapeConstraints(),
    ElementType.STAR: ShapeConstraints(),
    ElementType.LINE: ShapeConstraints(fixed_height=True),
    ElementType.TEXT: ShapeConstraints(),
    ElementType.PATH: ShapeConstraints(resizable=False),
}

EDITABLE_PROPERTIES = (
    "width", "height", "rotation",
    "fill_color", "border_color", "border_width", "text_content",
)


def _to_number(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


class TransformManager:
    """
    Applies geometric edits to single elements.

    Provides methods for:
    - Moving elements (clamped to the canvas)
    - Resizing via handles with per-variant constraints
    - Rotating elements
    - Editing properties directly

    Drag and rotation gestures keep a little state between pointer samples
    (the drag offset and the rotation baseline).
    """

    def __init__(self, config: EditorConfig):
        """Initialize transform manager."""
        self.config = config
        self._drag_offset: Optional[Point] = None
        self._rotation_baseline: Optional[float] = None

    # -- move -------------------------------------------------------------

    def move_element(self, element: Element, dx: float, dy: float) -> bool:
        """
        Move an element by (dx, dy), clamping each axis to the canvas.

        Movement is always along canvas axes regardless of rotation. An axis
        with no delta is left where it is.

        Returns:
            True if the position changed
        """
        new_x, new_y = element.x, element.y
        if dx:
            new_x = clamp(element.x + dx, 0, self.config.canvas_width - element.width)
        if dy:
            new_y = clamp(element.y + dy, 0, self.config.canvas_height - element.height)
        applied_dx = new_x - element.x
        applied_dy = new_y - element.y
        if not applied_dx and not applied_dy:
            return False

        if isinstance(element, Path):
            element.translate(applied_dx, applied_dy)
        else:
            element.x = new_x
            element.y = new_y
        return True

    def start_drag(self, element: Element, point: Point) -> None:
        """Remember where inside the element the pointer grabbed it."""
        self._drag_offset = Point(point.x - element.x, point.y - element.y)

    def drag_to(self, element: Element, point: Point) -> bool:
        """Move the element so the grab offset follows the pointer."""
        if self._drag_offset is None:
            return False
        target_x = point.x - self._drag_offset.x
        target_y = point.y - self._drag_offset.y
        return self.move_element(element, target_x - element.x, target_y - element.y)

    def finish_drag(self) -> None:
        self._drag_offset = None

    # -- resize -----------------------------------------------------------

    def resize(self, element: Element, handle, point: Point) -> bool:
        """
        Resize an element by dragging one of its corner handles to point.

        Handles moving a left or top edge keep the opposite edge fixed, so a
        corner resize is anchored at the opposite corner. After the per-variant
        constraint is applied, the size is clipped to the canvas.

        Args:
            element: Element to resize
            handle: ResizeHandle or its string value
            point: Pointer position in document coordinates

        Returns:
            True if the element was resized
        """
        constraints = SHAPE_CONSTRAINTS[element.element_type]
        if not constraints.resizable:
            return False

        handle = ResizeHandle(handle)
        min_size = self.config.min_element_size
        canvas_w = self.config.canvas_width
        canvas_h = self.config.canvas_height

        right = element.x + element.width
        bottom = element.y + element.height
        new_x, new_y = element.x, element.y

        if handle.moves_left_edge:
            new_w = max(min_size, right - max(0.0, point.x))
            new_x = max(0.0, right - new_w)
        else:
            new_w = max(min_size, min(point.x - element.x, canvas_w - element.x))

        if handle.moves_top_edge:
            new_h = max(min_size, bottom - max(0.0, point.y))
            new_y = max(0.0, bottom - new_h)
        else:
            new_h = max(min_size, min(point.y - element.y, canvas_h - element.y))

        if constraints.keep_square:
            size = min(new_w, new_h)
            new_w = new_h = size
            if handle.moves_left_edge:
                new_x = max(0.0, right - size)
            if handle.moves_top_edge:
                new_y = max(0.0, bottom - size)

        if constraints.fixed_height:
            new_h = element.height
            new_y = element.y

        # Canvas bounds win over the handle result
        if new_x + new_w > canvas_w:
            new_w = canvas_w - new_x
        if new_y + new_h > canvas_h:
            new_h = canvas_h - new_y
        new_w = max(0.0, new_w)
        new_h = max(0.0, new_h)

        changed = (new_x, new_y, new_w, new_h) != (
            element.x, element.y, element.width, element.height)
        element.x, element.y = new_x, new_y
        element.width, element.height = new_w, new_h
        return changed

    # -- rotate -----------------------------------------------------------

    def rotate_element(self, element: Element, degrees: float) -> None:
        """Rotate an element by degrees (keyboard and wheel nudges)."""
        element.rotation = normalize_angle(element.rotation + degrees)

    def start_rotation(self, element: Element, point: Point) -> None:
        """Capture the pointer angle around the element center as baseline."""
        self._rotation_baseline = angle_from_center(point, element)

    def update_rotation(self, element: Element, point: Point) -> float:
        """
        Rotate by the pointer's angular movement since the previous sample.

        The difference is folded into [-180, 180] so crossing the atan2
        discontinuity keeps the rotation continuous.

        Returns:
            The applied rotation delta in degrees
        """
        if self._rotation_baseline is None:
            return 0.0
        current = angle_from_center(point, element)
        delta = shortest_angle_delta(self._rotation_baseline, current)
        element.rotation = normalize_angle(element.rotation + delta)
        self._rotation_baseline = current
        return delta

    def finish_rotation(self) -> None:
        self._rotation_baseline = None

    # -- property edits ---------------------------------------------------

    def set_property(self, element: Element, name: str, value: Any) -> bool:
        """
        Apply a direct property edit.

        Malformed values are ignored. Size edits respect the size floor, the
        variant constraints and the canvas extent.

        Returns:
            True if the element changed

        Raises:
            ValueError: if name is not an editable property
        """
        if name not in EDITABLE_PROPERTIES:
            raise ValueError(f"Unknown element property: {name}")

        constraints = SHAPE_CONSTRAINTS[element.element_type]

        if name in ("width", "height"):
            number = _to_number(value)
            if number is None or not constraints.resizable:
                return False
            if name == "height" and constraints.fixed_height:
                return False
            return self._set_size(element, name, number, constraints)

        if name == "rotation":
            number = _to_number(value)
            if number is None:
                return False
            element.rotation = normalize_angle(number)
            return True

        if name == "border_width":
            number = _to_number(value)
            if number is None:
                return False
            element.border_width = max(0.0, number)
            if isinstance(element, Path):
                element.update_bounds()
            return True

        if name == "text_content":
            if element.element_type is not ElementType.TEXT:
                return False
            element.text_content = str(value)
            return True

        # fill_color / border_color
        if not isinstance(value, str) or not value:
            return False
        setattr(element, name, value)
        return True

    def _set_size(self, element: Element, name: str, number: float,
                  constraints: ShapeConstraints) -> bool:
        if constraints.keep_square:
            extent = min(self.config.canvas_width, self.config.canvas_height)
        elif name == "width":
            extent = self.config.canvas_width
        else:
            extent = self.config.canvas_height
        size = min(max(self.config.min_element_size, number), extent)

        if name == "width" or constraints.keep_square:
            element.width = size
        if name == "height" or constraints.keep_square:
            element.height = size

        # Shift the origin back so the element stays on the canvas
        if element.x + element.width > self.config.canvas_width:
            element.x = self.config.canvas_width - element.width
        if element.y + element.height > self.config.canvas_height:
            element.y = self.config.canvas_height - element.height
        element.x = max(0.0, element.x)
        element.y = max(0.0, element.y)
        return True
