"""
Layer ordering for VectorPad

The z-order is the total order induced by (z_index, element number). Higher
paints on top and wins hit tests.
"""

from enum import Enum
from typing import List, Optional
import logging

from ..core.document import Document
from ..core.elements import Element, paint_order
from .selection import SelectionManager

logger = logging.getLogger(__name__)


class LayerDirection(Enum):
    """Direction in the layer stack; 'up' and 'down' are panel aliases."""
    FORWARD = "forward"    # toward the top
    BACKWARD = "backward"  # toward the bottom

    @classmethod
    def _missing_(cls, value):
        aliases = {"up": cls.FORWARD, "down": cls.BACKWARD}
        return aliases.get(value)


class LayerManager:
    """
    Reorders elements in the z-order and walks the selection through it.
    """

    def __init__(self, document: Document, selection: SelectionManager):
        self.document = document
        self.selection = selection

    def sorted_elements(self, elements: Optional[List[Element]] = None) -> List[Element]:
        """Elements (default: the live set) bottom to top."""
        return paint_order(self.document.elements if elements is None else elements)

    def allocate_z_index(self) -> int:
        """Top-of-stack z-index for a new element."""
        return self.document.allocate_z_index()

    def layer_list(self) -> List[Element]:
        """Live elements top to bottom, as a layers panel lists them."""
        return list(reversed(self.sorted_elements()))

    def bring_to_front(self, element: Optional[Element] = None) -> bool:
        """
        Put element (default: the selection) above every other element.

        Returns:
            False if there was nothing to do
        """
        element = element or self.selection.selected_element
        order = self.sorted_elements()
        if element is None or not order or order[-1] is element:
            return False
        element.z_index = order[-1].z_index + 1
        self.document.z_index_counter = max(self.document.z_index_counter,
                                            element.z_index + 1)
        return True

    def send_to_back(self, element: Optional[Element] = None) -> bool:
        """
        Put element (default: the selection) below every other element.

        Returns:
            False if there was nothing to do
        """
        element = element or self.selection.selected_element
        order = self.sorted_elements()
        if element is None or not order or order[0] is element:
            return False
        element.z_index = order[0].z_index - 1
        return True

    def reorder_layer(self, direction) -> bool:
        """
        Swap the selected element with its neighbor in the z-order, then
        renumber every element densely.

        Returns:
            False if nothing is selected or the element is already at that end
        """
        direction = LayerDirection(direction)
        element = self.selection.selected_element
        if element is None:
            return False

        order = self.sorted_elements()
        index = order.index(element)
        target = index + 1 if direction is LayerDirection.FORWARD else index - 1
        if target < 0 or target >= len(order):
            return False

        order[index], order[target] = order[target], order[index]
        self._assign_dense(order)
        return True

    def move_layer_selection(self, direction) -> Optional[Element]:
        """
        Select the element adjacent to the selection in the z-order,
        wrapping at either end. No z-index changes.

        Returns:
            The newly selected element, or None if nothing was selected
        """
        direction = LayerDirection(direction)
        element = self.selection.selected_element
        if element is None:
            return None

        order = self.layer_list()
        index = order.index(element)
        step = -1 if direction is LayerDirection.FORWARD else 1
        target = order[(index + step) % len(order)]
        return self.selection.select(target)

    def normalize(self) -> None:
        """Reassign z-indices 0..n-1 keeping the current order."""
        self._assign_dense(self.sorted_elements())

    def _assign_dense(self, order: List[Element]) -> None:
        for i, element in enumerate(order):
            element.z_index = i
        self.document.z_index_counter = max(self.document.z_index_counter, len(order))
