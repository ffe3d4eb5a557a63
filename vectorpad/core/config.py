"""
VectorPad Editor Configuration

Canvas extents, size floors, zoom bounds and tool constants, with
persistence through QSettings.
"""

from dataclasses import dataclass, field, fields
from typing import Dict, Tuple
import logging

from PyQt6.QtCore import QSettings

from .elements import DEFAULT_FILL_COLOR

logger = logging.getLogger(__name__)


def _default_dimensions() -> Dict[str, Tuple[float, float]]:
    return {
        "rectangle": (120.0, 80.0),
        "circle": (100.0, 100.0),
        "triangle": (100.0, 80.0),
        "star": (100.0, 100.0),
        "line": (150.0, 2.0),
        "text": (120.0, 40.0),
    }


@dataclass
class EditorConfig:
    """Settings shared by the editing engine."""
    canvas_width: float = 1200.0
    canvas_height: float = 800.0
    min_element_size: float = 20.0   # resize floor, 0 allows zero-size elements
    boundary: float = 5.0            # margin kept when placing new elements

    zoom_step: float = 0.1
    zoom_min: float = 0.25
    zoom_max: float = 3.0

    history_limit: int = 50

    eraser_radius: float = 10.0
    min_sample_distance: float = 3.0
    stroke_width: float = 3.0

    nudge_step: float = 5.0
    default_fill_color: str = DEFAULT_FILL_COLOR

    # Size of new shapes per element type: (width, height)
    default_dimensions: Dict[str, Tuple[float, float]] = field(
        default_factory=_default_dimensions
    )

    def dimensions_for(self, type_name: str) -> Tuple[float, float]:
        return self.default_dimensions.get(type_name, self.default_dimensions["rectangle"])


# Scalar fields persisted through QSettings
_SCALAR_FIELDS = [f for f in fields(EditorConfig) if f.name != "default_dimensions"]
_SETTINGS_GROUP = "editor"


def load_config(settings: QSettings) -> EditorConfig:
    """
    Build an EditorConfig from QSettings, falling back to defaults for
    missing or unreadable keys.
    """
    config = EditorConfig()
    settings.beginGroup(_SETTINGS_GROUP)
    try:
        for f in _SCALAR_FIELDS:
            if not settings.contains(f.name):
                continue
            default = getattr(config, f.name)
            try:
                value = settings.value(f.name, default, type=type(default))
            except TypeError:
                logger.warning("Ignoring unreadable setting %s", f.name)
                continue
            setattr(config, f.name, value)
    finally:
        settings.endGroup()
    return config


def save_config(config: EditorConfig, settings: QSettings) -> None:
    """Write the scalar settings of config to QSettings."""
    settings.beginGroup(_SETTINGS_GROUP)
    try:
        for f in _SCALAR_FIELDS:
            settings.setValue(f.name, getattr(config, f.name))
    finally:
        settings.endGroup()
    settings.sync()
