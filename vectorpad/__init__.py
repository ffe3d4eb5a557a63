"""
VectorPad - Vector Design Editing Engine

Pages of shapes, text and freehand paths with move/resize/rotate,
layering, undo/redo and export.
"""

__version__ = "0.1.0"
