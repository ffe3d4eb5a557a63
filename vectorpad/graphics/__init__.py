"""
VectorPad Graphics Module

Contains the editing components that act on the scene:
- Tools: Tool identifiers and element creation
- Freehand: Pen and eraser for paths
- Selection: Selection handling and hit testing
- Transform: Move, resize, rotate and property edits
- ZOrder: Layer ordering
- Renderer: Display collaborator interface
"""

from .renderer import Renderer, NullRenderer
from .tools import ToolType, create_element
from .freehand import PenTool, EraserTool, EraseResult
from .transform import TransformManager, ResizeHandle, ShapeConstraints, SHAPE_CONSTRAINTS
from .selection import SelectionManager, ROTATION_HANDLE
from .zorder import LayerManager, LayerDirection

__all__ = [
    # Renderer
    'Renderer',
    'NullRenderer',
    # Tools
    'ToolType',
    'create_element',
    'PenTool',
    'EraserTool',
    'EraseResult',
    # Transform
    'TransformManager',
    'ResizeHandle',
    'ShapeConstraints',
    'SHAPE_CONSTRAINTS',
    # Selection
    'SelectionManager',
    'ROTATION_HANDLE',
    # Layers
    'LayerManager',
    'LayerDirection',
]
