"""
VectorPad Editor Module

Contains the session level components:
- History: Snapshot based undo/redo
- Pages: Page add/delete/switch
- Session: Gesture handling over one document
"""

from .history import HistoryManager, Snapshot
from .pages import PageManager
from .session import EditorSession, InteractionMode

__all__ = [
    'HistoryManager',
    'Snapshot',
    'PageManager',
    'EditorSession',
    'InteractionMode',
]
