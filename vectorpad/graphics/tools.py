"""
Drawing Tools for VectorPad

Tool identifiers and the factory that places new shape elements on a click.
Freehand drawing and erasing live in freehand.py.
"""

from enum import Enum
from typing import Optional
import logging

from ..core.config import EditorConfig
from ..core.document import Document
from ..core.elements import Element, ElementType, element_class_for
from ..core.geometry import Point, clamp

logger = logging.getLogger(__name__)


class ToolType(Enum):
    """Types of editing tools."""
    SELECT = "select"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    STAR = "star"
    LINE = "line"
    TEXT = "text"
    PEN = "pen"
    ERASER = "eraser"

    @property
    def element_type(self) -> Optional[ElementType]:
        """Element variant placed by this tool, None for non-shape tools."""
        return _SHAPE_TOOLS.get(self)

    @property
    def is_shape_tool(self) -> bool:
        return self in _SHAPE_TOOLS


_SHAPE_TOOLS = {
    ToolType.RECTANGLE: ElementType.RECTANGLE,
    ToolType.CIRCLE: ElementType.CIRCLE,
    ToolType.TRIANGLE: ElementType.TRIANGLE,
    ToolType.STAR: ElementType.STAR,
    ToolType.LINE: ElementType.LINE,
    ToolType.TEXT: ElementType.TEXT,
}


def create_element(tool_type: ToolType, point: Point, document: Document,
                   config: EditorConfig) -> Element:
    """
    Place a new shape element centered on a click.

    The element gets the default dimensions of its variant and its top-left
    corner is clamped so that it keeps config.boundary away from the canvas
    edges.

    Args:
        tool_type: A shape tool
        point: Click position in document coordinates
        document: Document receiving the element
        config: Editor settings

    Returns:
        The created element, already added to the live buffer

    Raises:
        ValueError: if tool_type does not place shapes
    """
    tool_type = ToolType(tool_type)
    element_type = tool_type.element_type
    if element_type is None:
        raise ValueError(f"Tool does not create elements: {tool_type}")

    width, height = config.dimensions_for(element_type.value)
    x = clamp(point.x - width / 2, config.boundary,
              config.canvas_width - width - config.boundary)
    y = clamp(point.y - height / 2, config.boundary,
              config.canvas_height - height - config.boundary)

    element_cls = element_class_for(element_type)
    element = element_cls(document.generate_element_id(), x, y, width, height)
    element.fill_color = config.default_fill_color
    element.z_index = document.allocate_z_index()

    document.add_element(element)
    logger.debug("Created %s at (%.1f, %.1f)", element.id, x, y)
    return element
