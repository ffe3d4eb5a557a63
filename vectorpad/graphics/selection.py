"""
Selection Handling for VectorPad

Manages the single selection, hit testing of elements and of the selection
handles (four resize corners and a rotation knob above the top edge).
"""

from typing import Optional, Union
import logging

from PyQt6.QtCore import QObject, pyqtSignal

from ..core.document import Document
from ..core.elements import Element
from ..core.geometry import Point, to_local
from .transform import ResizeHandle, SHAPE_CONSTRAINTS

logger = logging.getLogger(__name__)

ROTATION_HANDLE = "rotate"

HANDLE_SIZE = 8.0
ROTATION_HANDLE_OFFSET = 25.0   # knob center above the top edge
ROTATION_HANDLE_RADIUS = 15.0


class SelectionManager(QObject):
    """
    Manages selection state and operations.

    Features:
    - Single selection by element or id
    - Topmost-first hit testing (rotation aware)
    - Handle hit testing for the selected element
    - Deleting the selected element

    Selecting never changes the z-order.
    """

    # Signals
    selection_changed = pyqtSignal(object)  # Selected Element or None

    def __init__(self, document: Document):
        """
        Initialize selection manager.

        Args:
            document: Document whose live elements are selected
        """
        super().__init__()
        self.document = document

    @property
    def selected_element(self) -> Optional[Element]:
        """The selected element; a stale selection reads as None."""
        return self.document.selected_element

    def select(self, element: Union[Element, str, None]) -> Optional[Element]:
        """
        Select an element (or the element with the given id).

        Unknown ids clear the selection.

        Returns:
            The selected element, or None
        """
        element_id = element.id if isinstance(element, Element) else element
        target = self.document.get_element(element_id)
        if target is None:
            self.deselect()
            return None

        if self.document.selected_element_id != target.id:
            self.document.selected_element_id = target.id
            self.selection_changed.emit(target)
        return target

    def deselect(self) -> None:
        """Clear the selection."""
        had_selection = self.document.selected_element_id is not None
        self.document.selected_element_id = None
        if had_selection:
            self.selection_changed.emit(None)

    def element_at(self, point: Point) -> Optional[Element]:
        """Return the topmost element under point, if any."""
        for element in reversed(self.document.paint_order()):
            if element.contains_point(point):
                return element
        return None

    def handle_at(self, point: Point) -> Optional[Union[ResizeHandle, str]]:
        """
        Return the handle of the selected element under point.

        Returns:
            A ResizeHandle, ROTATION_HANDLE, or None
        """
        element = self.selected_element
        if element is None:
            return None

        local = to_local(point, element)

        knob = Point(element.x + element.width / 2, element.y - ROTATION_HANDLE_OFFSET)
        if local.distance_to(knob) <= ROTATION_HANDLE_RADIUS:
            return ROTATION_HANDLE

        if not SHAPE_CONSTRAINTS[element.element_type].resizable:
            return None

        corners = {
            ResizeHandle.NW: Point(element.x, element.y),
            ResizeHandle.NE: Point(element.x + element.width, element.y),
            ResizeHandle.SW: Point(element.x, element.y + element.height),
            ResizeHandle.SE: Point(element.x + element.width, element.y + element.height),
        }
        half = HANDLE_SIZE / 2
        for handle, corner in corners.items():
            if abs(local.x - corner.x) <= half and abs(local.y - corner.y) <= half:
                return handle
        return None

    def delete_selected(self) -> Optional[Element]:
        """
        Remove the selected element from the document.

        Returns:
            The removed element, or None if nothing was selected
        """
        element = self.selected_element
        if element is None:
            return None
        self.document.remove_element(element.id)
        self.selection_changed.emit(None)
        logger.debug("Deleted %s", element.id)
        return element
