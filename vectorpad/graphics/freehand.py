"""
Freehand Tools for VectorPad

PenTool accumulates a pointer stream into a Path element; EraserTool removes
path points that fall inside a circular eraser.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import logging

import numpy as np

from ..core.config import EditorConfig
from ..core.document import Document
from ..core.elements import Path, MIN_PATH_POINTS
from ..core.geometry import Point, clamp, to_local

logger = logging.getLogger(__name__)


class PenTool:
    """Tool for freehand drawing."""

    def __init__(self, document: Document, config: EditorConfig):
        self.document = document
        self.config = config
        self._path: Optional[Path] = None

    @property
    def active_path(self) -> Optional[Path]:
        return self._path

    def start_path(self, point: Point, stroke_color: Optional[str] = None) -> Path:
        """
        Start a new path at point and put it on top of the z-order.

        Returns:
            The new (still incomplete) path, already in the live buffer
        """
        path = Path(
            self.document.generate_element_id(),
            [self._on_canvas(point)],
            stroke_width=self.config.stroke_width,
            stroke_color=stroke_color or self.config.default_fill_color,
        )
        path.z_index = self.document.allocate_z_index()
        self.document.add_element(path)
        self._path = path
        return path

    def extend_path(self, point: Point) -> bool:
        """
        Add point to the path if it is far enough from the last sample.

        Returns:
            True if a point was appended
        """
        if self._path is None:
            return False
        point = self._on_canvas(point)
        last = self._path.points[-1]
        if last.distance_to(point) <= self.config.min_sample_distance:
            return False
        self._path.add_point(point)
        return True

    def _on_canvas(self, point: Point) -> Point:
        # Keep the padded stroke frame inside the canvas
        pad = self.config.stroke_width / 2
        return Point(clamp(point.x, pad, self.config.canvas_width - pad),
                     clamp(point.y, pad, self.config.canvas_height - pad))

    def finish_path(self) -> Optional[Path]:
        """
        End the stroke.

        Returns:
            The committed path, or None if it had too few points and was
            discarded
        """
        path = self._path
        self._path = None
        if path is None:
            return None
        if len(path.points) < MIN_PATH_POINTS:
            self.document.remove_element(path.id)
            logger.debug("Discarded %s with %d point(s)", path.id, len(path.points))
            return None
        return path

    def cancel_path(self) -> Optional[str]:
        """Drop the path being drawn. Returns its id, if there was one."""
        path = self._path
        self._path = None
        if path is None:
            return None
        self.document.remove_element(path.id)
        return path.id


@dataclass
class EraseResult:
    """Paths touched by one eraser sample."""
    modified_ids: List[str] = field(default_factory=list)
    removed_ids: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.modified_ids or self.removed_ids)


class EraserTool:
    """
    Tool for erasing freehand paths point by point.

    Every sample is tested against all paths, so overlapping paths are
    erased independently.
    """

    def __init__(self, document: Document, config: EditorConfig):
        self.document = document
        self.config = config
        self._session_changed = False

    def begin_erase(self) -> None:
        self._session_changed = False

    def erase_at(self, point: Point) -> EraseResult:
        """
        Remove every path point within the eraser radius of point.

        Paths left with fewer than two points are deleted (and deselected);
        the others get their bounds recomputed.
        """
        result = EraseResult()
        radius_sq = self.config.eraser_radius ** 2
        paths = [e for e in self.document.elements if isinstance(e, Path)]

        for path in paths:
            coords = path.point_array()
            if not len(coords):
                continue
            local = to_local(point, path)
            dist_sq = ((coords - np.array([local.x, local.y])) ** 2).sum(axis=1)
            hit = dist_sq <= radius_sq
            if not hit.any():
                continue

            keep = np.flatnonzero(~hit)
            path.points = [path.points[i] for i in keep]
            if len(path.points) < MIN_PATH_POINTS:
                self.document.remove_element(path.id)
                result.removed_ids.append(path.id)
            else:
                path.update_bounds()
                result.modified_ids.append(path.id)

        if result.changed:
            self._session_changed = True
            logger.debug("Eraser modified %s, removed %s",
                         result.modified_ids, result.removed_ids)
        return result

    def end_erase(self) -> bool:
        """Finish the erase session. Returns True if anything was erased."""
        changed = self._session_changed
        self._session_changed = False
        return changed
