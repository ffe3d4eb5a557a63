"""
VectorPad Page

A page owns an independent set of elements and its own id counter.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .elements import Element


@dataclass
class Page:
    """
    A page of the document.

    Only the active page's elements are edited; the Document keeps them in
    its live buffer while the page is active.
    """
    id: str = "page_1"
    name: str = "Page 1"
    elements: List[Element] = field(default_factory=list)
    element_counter: int = 0

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        """Find an element by its ID."""
        for element in self.elements:
            if element.id == element_id:
                return element
        return None
