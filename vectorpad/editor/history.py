"""
Undo/Redo History for VectorPad

A bounded linear list of snapshots addressed by a cursor. One snapshot is
pushed per completed gesture, never per pointer sample.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import logging

from PyQt6.QtCore import QObject, pyqtSignal

from ..core.config import EditorConfig
from ..core.document import Document
from ..core.elements import Element, paint_order
from ..graphics.renderer import Renderer, NullRenderer

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    """Deep copy of the live editing state of the active page."""
    elements: List[Element] = field(default_factory=list)
    element_counter: int = 0
    selected_element_id: Optional[str] = None

    @classmethod
    def capture(cls, document: Document) -> 'Snapshot':
        return cls(
            elements=[e.clone() for e in document.elements],
            element_counter=document.element_counter,
            selected_element_id=document.selected_element_id,
        )


class HistoryManager(QObject):
    """
    Snapshot based undo/redo.

    The stack always holds at least one state (the one captured by reset()),
    so undo never leaves the document undefined. When the stack grows past
    the configured limit the oldest snapshot is evicted.
    """

    # Signals
    history_changed = pyqtSignal(bool, bool)  # can_undo, can_redo

    def __init__(self, document: Document, config: Optional[EditorConfig] = None,
                 renderer: Optional[Renderer] = None):
        super().__init__()
        self.document = document
        self.limit = max(1, (config or EditorConfig()).history_limit)
        self.renderer = renderer or NullRenderer()
        self._stack: List[Snapshot] = []
        self._index = -1
        self.reset()

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._stack) - 1

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def index(self) -> int:
        return self._index

    def reset(self) -> None:
        """Drop all history and capture the current state as the first entry."""
        self._stack = [Snapshot.capture(self.document)]
        self._index = 0
        self._emit()

    def save_state(self) -> None:
        """Push a snapshot of the current state, discarding any redo states."""
        del self._stack[self._index + 1:]
        self._stack.append(Snapshot.capture(self.document))
        self._index += 1

        if len(self._stack) > self.limit:
            self._stack.pop(0)
            self._index -= 1

        logger.debug("Saved history state %d/%d", self._index + 1, len(self._stack))
        self._emit()

    def undo(self) -> bool:
        """Step back one snapshot. Returns False if there is nothing to undo."""
        if not self.can_undo:
            return False
        self._index -= 1
        self.restore(self._stack[self._index])
        self._emit()
        return True

    def redo(self) -> bool:
        """Step forward one snapshot. Returns False if there is nothing to redo."""
        if not self.can_redo:
            return False
        self._index += 1
        self.restore(self._stack[self._index])
        self._emit()
        return True

    def restore(self, snapshot: Snapshot) -> None:
        """
        Replace the live state with copies from snapshot and repaint.

        The live list object is kept so the active page keeps owning it.
        The selection is restored by id and cleared if the id is gone.
        """
        document = self.document
        document.elements[:] = [e.clone() for e in snapshot.elements]
        document.element_counter = snapshot.element_counter
        document.selected_element_id = snapshot.selected_element_id
        if document.selected_element is None:
            document.selected_element_id = None

        self.renderer.clear()
        for element in paint_order(document.elements):
            self.renderer.render_element(element)

    def _emit(self) -> None:
        self.history_changed.emit(self.can_undo, self.can_redo)
