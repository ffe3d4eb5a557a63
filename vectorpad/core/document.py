"""
VectorPad Document Model

The Document class is the root container for all design data and the live
editing state of the active page.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .elements import Element, paint_order
from .page import Page


@dataclass
class Document:
    """
    The root document containing all design data.

    A Document contains Pages, each Page contains Elements. The elements of
    the active page are held in the live ``elements`` buffer while it is
    being edited; flush_live_buffer() hands them back to the page record.
    """
    name: str = "Untitled"
    pages: List[Page] = field(default_factory=list)
    active_page_index: int = 0

    # Live editing state of the active page
    elements: List[Element] = field(default_factory=list)
    element_counter: int = 0
    selected_element_id: Optional[str] = None

    # Allocation sources shared by all pages
    z_index_counter: int = 0
    page_counter: int = 0

    def __post_init__(self):
        if not self.pages:
            self.pages.append(Page())
        self.page_counter = max(self.page_counter, len(self.pages))
        self.active_page_index = min(max(self.active_page_index, 0), len(self.pages) - 1)
        self.load_page(self.active_page_index)

    @property
    def active_page(self) -> Page:
        return self.pages[self.active_page_index]

    # -- id and z-order allocation --------------------------------------

    def generate_element_id(self) -> str:
        """Allocate the next element id from the live counter."""
        self.element_counter += 1
        return f"element_{self.element_counter}"

    def allocate_z_index(self) -> int:
        """Return a z-index above every live element."""
        top = max((e.z_index for e in self.elements), default=-1) + 1
        value = max(self.z_index_counter, top)
        self.z_index_counter = value + 1
        return value

    def next_page_id(self) -> str:
        self.page_counter += 1
        return f"page_{self.page_counter}"

    # -- element access ---------------------------------------------------

    def get_element(self, element_id: Optional[str]) -> Optional[Element]:
        """Find a live element by its ID."""
        if element_id is None:
            return None
        for element in self.elements:
            if element.id == element_id:
                return element
        return None

    def add_element(self, element: Element) -> None:
        """Add an element to the live buffer."""
        self.elements.append(element)

    def remove_element(self, element_id: str) -> Optional[Element]:
        """
        Remove an element from the live buffer.

        Clears the selection when it pointed at the removed element.

        Returns:
            The removed element, or None if no element had that id
        """
        element = self.get_element(element_id)
        if element is None:
            return None
        self.elements.remove(element)
        if self.selected_element_id == element_id:
            self.selected_element_id = None
        return element

    @property
    def selected_element(self) -> Optional[Element]:
        """The selected element; a stale selection is cleared."""
        element = self.get_element(self.selected_element_id)
        if element is None:
            self.selected_element_id = None
        return element

    def paint_order(self) -> List[Element]:
        """Live elements in paint order (ascending z-index)."""
        return paint_order(self.elements)

    # -- page buffer ownership ------------------------------------------

    def flush_live_buffer(self) -> None:
        """Hand the live buffer and id counter back to the active page."""
        page = self.active_page
        page.elements = self.elements
        page.element_counter = self.element_counter

    def load_page(self, index: int) -> None:
        """Make the page at index active and adopt its buffer as the live set."""
        self.active_page_index = index
        page = self.pages[index]
        self.elements = page.elements
        self.element_counter = page.element_counter
        self.selected_element_id = None
