"""
VectorPad Core Module

Contains the core data structures:
- Geometry: Point, BoundingBox and coordinate helpers
- Elements: Rectangle, Circle, Triangle, Star, Line, Text, Path
- Page: an independent element set
- Document: root container and live editing state
- EditorConfig: engine settings
"""

# Import order matters - geometry first, then elements, page, document
from .geometry import (
    Point, BoundingBox, clamp, normalize_angle, shortest_angle_delta,
    document_point_from_device, device_point_from_document,
    angle_from_center, to_local
)
from .elements import (
    ElementType, Element, Rectangle, Circle, Triangle, Star, Line, Text, Path,
    MIN_PATH_POINTS, element_class_for, paint_order
)
from .page import Page
from .document import Document
from .config import EditorConfig, load_config, save_config

__all__ = [
    'Point', 'BoundingBox', 'clamp', 'normalize_angle', 'shortest_angle_delta',
    'document_point_from_device', 'device_point_from_document',
    'angle_from_center', 'to_local',
    'ElementType', 'Element', 'Rectangle', 'Circle', 'Triangle', 'Star',
    'Line', 'Text', 'Path', 'MIN_PATH_POINTS', 'element_class_for', 'paint_order',
    'Page',
    'Document',
    'EditorConfig', 'load_config', 'save_config',
]
