"""
Page Management for VectorPad

Adds, deletes and switches pages. Switching moves the live element buffer
back into the page record and adopts the target page's list; elements are
never copied.
"""

from typing import Optional
import logging

from PyQt6.QtCore import QObject, pyqtSignal

from ..core.document import Document
from ..core.page import Page
from ..graphics.renderer import Renderer, NullRenderer

logger = logging.getLogger(__name__)


class PageManager(QObject):
    """
    Manages the pages of a document.

    The last remaining page can never be deleted; the refusal is reported
    through page_delete_refused.
    """

    # Signals
    page_added = pyqtSignal(object)            # Page
    page_deleted = pyqtSignal(int)             # Removed index
    page_switched = pyqtSignal(int)            # New active index
    page_delete_refused = pyqtSignal(str)      # User-facing reason

    def __init__(self, document: Document, renderer: Optional[Renderer] = None):
        super().__init__()
        self.document = document
        self.renderer = renderer or NullRenderer()

    @property
    def page_count(self) -> int:
        return len(self.document.pages)

    def add_page(self, name: Optional[str] = None) -> Page:
        """Append an empty page and make it active."""
        page = Page(
            id=self.document.next_page_id(),
            name=name or f"Page {len(self.document.pages) + 1}",
        )
        self.document.pages.append(page)
        logger.info("Added %s", page.id)
        self.page_added.emit(page)
        self.switch_to_page(len(self.document.pages) - 1)
        return page

    def delete_page(self, index: int) -> bool:
        """
        Remove the page at index.

        If the active index was at or after the removed one it shifts down
        (floored at 0). When the active page itself is removed its neighbour
        is loaded; the discarded buffer is not flushed anywhere.

        Returns:
            False if index is invalid or it is the only page
        """
        document = self.document
        if len(document.pages) <= 1:
            reason = "Cannot delete the only page"
            logger.warning(reason)
            self.page_delete_refused.emit(reason)
            return False
        if not 0 <= index < len(document.pages):
            return False

        active = document.active_page_index
        removing_active = index == active
        if not removing_active:
            document.flush_live_buffer()

        removed = document.pages.pop(index)
        if active >= index:
            active = max(0, active - 1)
        logger.info("Deleted %s", removed.id)

        if removing_active:
            document.load_page(active)
            self._repaint()
            self.page_deleted.emit(index)
            self.page_switched.emit(active)
        else:
            document.active_page_index = active
            self.page_deleted.emit(index)
        return True

    def switch_to_page(self, index: int) -> bool:
        """
        Make the page at index active.

        Returns:
            False if index is out of range or already active
        """
        document = self.document
        if not 0 <= index < len(document.pages) or index == document.active_page_index:
            return False

        document.flush_live_buffer()
        document.load_page(index)
        self._repaint()
        logger.debug("Switched to page %d", index)
        self.page_switched.emit(index)
        return True

    def _repaint(self) -> None:
        self.renderer.clear()
        for element in self.document.paint_order():
            self.renderer.render_element(element)
