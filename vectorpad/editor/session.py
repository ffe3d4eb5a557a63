"""
Editor Session for VectorPad

The EditorSession owns one document together with the managers that edit
it, and turns pointer, keyboard and wheel input into edits:

- pointer_down / pointer_move / pointer_up drive one gesture at a time
  (drag, resize, rotate, freehand drawing, erasing or panning)
- each completed gesture pushes one history snapshot
- the renderer is told which elements appeared, changed or disappeared

Pointer positions arrive in device coordinates and are mapped to document
coordinates through the current zoom and pan.
"""

from enum import Enum
from typing import Any, Dict, Optional, Union
import logging

from PyQt6.QtCore import QObject, Qt, pyqtSignal

from ..core.config import EditorConfig
from ..core.document import Document
from ..core.elements import DEFAULT_TEXT, Element, ElementType, Text
from ..core.geometry import Point, document_point_from_device
from ..graphics.freehand import PenTool, EraserTool
from ..graphics.renderer import Renderer, NullRenderer
from ..graphics.selection import SelectionManager, ROTATION_HANDLE
from ..graphics.tools import ToolType, create_element
from ..graphics.transform import TransformManager, ResizeHandle
from ..graphics.zorder import LayerManager
from ..io import project_io
from .history import HistoryManager
from .pages import PageManager

logger = logging.getLogger(__name__)


class InteractionMode(Enum):
    """The gesture in progress. Modes are mutually exclusive."""
    IDLE = "idle"
    DRAGGING = "dragging"
    RESIZING = "resizing"
    ROTATING = "rotating"
    DRAWING_PATH = "drawing-path"
    ERASING = "erasing"
    PANNING = "panning"


KEY_ROTATIONS = {
    Qt.Key.Key_R: 15.0,
    Qt.Key.Key_E: -15.0,
    Qt.Key.Key_BracketLeft: -5.0,
    Qt.Key.Key_BracketRight: 5.0,
}

KEY_NUDGES = {
    Qt.Key.Key_Up: (0, -1),
    Qt.Key.Key_Down: (0, 1),
    Qt.Key.Key_Left: (-1, 0),
    Qt.Key.Key_Right: (1, 0),
}

WHEEL_ROTATION_STEP = 5.0


class EditorSession(QObject):
    """
    Editing context for one document.

    All state that the managers share (document, config, renderer) is held
    here and handed to them explicitly.
    """

    # Signals
    mode_changed = pyqtSignal(object)           # InteractionMode
    tool_changed = pyqtSignal(object)           # ToolType
    zoom_changed = pyqtSignal(float)
    view_changed = pyqtSignal(float, float)     # pan x, pan y
    element_created = pyqtSignal(object)        # Element
    element_changed = pyqtSignal(object)        # Element
    element_removed = pyqtSignal(str)           # Element id
    selection_changed = pyqtSignal(object)      # Element or None
    history_changed = pyqtSignal(bool, bool)    # can_undo, can_redo
    layers_changed = pyqtSignal()
    page_switched = pyqtSignal(int)
    page_delete_refused = pyqtSignal(str)
    document_loaded = pyqtSignal()

    def __init__(self, document: Optional[Document] = None,
                 config: Optional[EditorConfig] = None,
                 renderer: Optional[Renderer] = None):
        super().__init__()
        self.config = config or EditorConfig()
        self.renderer = renderer or NullRenderer()

        self.tool = ToolType.SELECT
        self.mode = InteractionMode.IDLE
        self.active_handle: Optional[ResizeHandle] = None
        self.zoom = 1.0
        self.pan_offset = Point(0.0, 0.0)
        self._pan_anchor: Optional[Point] = None
        self._pan_origin: Optional[Point] = None

        self._bind(document or Document())

    def _bind(self, document: Document) -> None:
        """Create the managers for document and wire their signals."""
        self.document = document
        self.transform = TransformManager(self.config)
        self.selection = SelectionManager(document)
        self.layers = LayerManager(document, self.selection)
        self.pen = PenTool(document, self.config)
        self.eraser = EraserTool(document, self.config)
        self.history = HistoryManager(document, self.config, self.renderer)
        self.pages = PageManager(document, self.renderer)

        self.selection.selection_changed.connect(self.selection_changed)
        self.history.history_changed.connect(self.history_changed)
        self.pages.page_switched.connect(self._on_page_switched)
        self.pages.page_delete_refused.connect(self.page_delete_refused)

    # -- coordinates ------------------------------------------------------

    def to_document(self, device_point: Point) -> Point:
        """Map a device position to document coordinates."""
        return document_point_from_device(device_point, self.zoom, self.pan_offset)

    # -- mode and tool ----------------------------------------------------

    @property
    def is_busy(self) -> bool:
        return self.mode is not InteractionMode.IDLE

    def _set_mode(self, mode: InteractionMode) -> None:
        if mode is not self.mode:
            self.mode = mode
            self.mode_changed.emit(mode)

    def set_tool(self, tool: Union[ToolType, str]) -> bool:
        """
        Make tool active. Ignored while a gesture is in progress.

        Returns:
            False if the tool was not changed or is not a known tool
        """
        try:
            tool = ToolType(tool)
        except ValueError:
            logger.warning("Ignoring unknown tool %r", tool)
            return False
        if self.is_busy:
            return False
        if tool is not self.tool:
            self.tool = tool
            self.tool_changed.emit(tool)
        return True

    # -- pointer gestures -------------------------------------------------

    def pointer_down(self, device_point: Point,
                     button: Qt.MouseButton = Qt.MouseButton.LeftButton,
                     shift: bool = False) -> bool:
        """
        Start a gesture.

        The middle button, or the left button with shift held, pans the
        view. A press while another gesture is in progress is ignored.

        Returns:
            True if the press was handled
        """
        if self.is_busy:
            return False

        if button == Qt.MouseButton.MiddleButton or shift:
            self._pan_anchor = device_point
            self._pan_origin = self.pan_offset
            self._set_mode(InteractionMode.PANNING)
            return True
        if button != Qt.MouseButton.LeftButton:
            return False

        point = self.to_document(device_point)

        if self.tool is ToolType.SELECT:
            return self._press_select(point)

        if self.tool is ToolType.PEN:
            path = self.pen.start_path(point)
            self.renderer.render_element(path)
            self._set_mode(InteractionMode.DRAWING_PATH)
            return True

        if self.tool is ToolType.ERASER:
            self.eraser.begin_erase()
            self._set_mode(InteractionMode.ERASING)
            self._erase_at(point)
            return True

        return self.create_element_at(point) is not None

    def _press_select(self, point: Point) -> bool:
        selected = self.selection.selected_element
        handle = self.selection.handle_at(point)

        if handle == ROTATION_HANDLE:
            self.transform.start_rotation(selected, point)
            self._set_mode(InteractionMode.ROTATING)
            return True

        if isinstance(handle, ResizeHandle):
            self.active_handle = handle
            self._set_mode(InteractionMode.RESIZING)
            return True

        element = self.selection.element_at(point)
        if element is None:
            self.selection.deselect()
            return False

        self.selection.select(element)
        self.transform.start_drag(element, point)
        self._set_mode(InteractionMode.DRAGGING)
        return True

    def pointer_move(self, device_point: Point) -> bool:
        """
        Feed one pointer sample to the gesture in progress.

        Returns:
            True if anything changed
        """
        mode = self.mode
        if mode is InteractionMode.IDLE:
            return False

        if mode is InteractionMode.PANNING:
            self.pan_offset = Point(
                self._pan_origin.x + device_point.x - self._pan_anchor.x,
                self._pan_origin.y + device_point.y - self._pan_anchor.y,
            )
            self.view_changed.emit(self.pan_offset.x, self.pan_offset.y)
            return True

        point = self.to_document(device_point)

        if mode is InteractionMode.DRAWING_PATH:
            if self.pen.extend_path(point):
                self.renderer.update_element_display(self.pen.active_path)
                return True
            return False

        if mode is InteractionMode.ERASING:
            return self._erase_at(point)

        element = self.selection.selected_element
        if element is None:
            return False

        if mode is InteractionMode.DRAGGING:
            changed = self.transform.drag_to(element, point)
        elif mode is InteractionMode.RESIZING:
            changed = self.transform.resize(element, self.active_handle, point)
        else:
            changed = bool(self.transform.update_rotation(element, point))

        if changed:
            self._element_updated(element)
        return changed

    def pointer_up(self, device_point: Optional[Point] = None) -> bool:
        """
        End the gesture in progress.

        Drag, resize and rotate always commit a snapshot on release. A
        freehand path is committed or discarded, and an erase session
        commits only if it removed something.

        Returns:
            True if a gesture was ended
        """
        mode = self.mode
        if mode is InteractionMode.IDLE:
            return False

        if device_point is not None and mode is not InteractionMode.PANNING:
            self.pointer_move(device_point)

        if mode in (InteractionMode.DRAGGING, InteractionMode.RESIZING,
                    InteractionMode.ROTATING):
            self.transform.finish_drag()
            self.transform.finish_rotation()
            self.history.save_state()
        elif mode is InteractionMode.DRAWING_PATH:
            self._finish_path()
        elif mode is InteractionMode.ERASING:
            if self.eraser.end_erase():
                self.history.save_state()
        else:
            self._pan_anchor = None
            self._pan_origin = None

        self.active_handle = None
        self._set_mode(InteractionMode.IDLE)
        return True

    def cancel_gesture(self) -> None:
        """Abort a freehand stroke; other gestures end as on release."""
        if self.mode is InteractionMode.DRAWING_PATH:
            path_id = self.pen.cancel_path()
            if path_id:
                self.renderer.remove_element(path_id)
            self._set_mode(InteractionMode.IDLE)
        elif self.is_busy:
            self.pointer_up()

    def _finish_path(self) -> None:
        candidate = self.pen.active_path
        path = self.pen.finish_path()
        if path is None:
            if candidate is not None:
                self.renderer.remove_element(candidate.id)
            return

        self.renderer.update_element_display(path)
        self.selection.select(path)
        self._set_mode(InteractionMode.IDLE)
        self.set_tool(ToolType.SELECT)
        self.history.save_state()
        self.element_created.emit(path)
        self.layers_changed.emit()

    def _erase_at(self, point: Point) -> bool:
        selected_id = self.document.selected_element_id
        result = self.eraser.erase_at(point)

        for element_id in result.modified_ids:
            self.renderer.update_element_display(self.document.get_element(element_id))
        for element_id in result.removed_ids:
            self.renderer.remove_element(element_id)
            self.element_removed.emit(element_id)

        if selected_id in result.removed_ids:
            self.selection_changed.emit(None)
        if result.removed_ids:
            self.layers_changed.emit()
        return result.changed

    # -- element operations -----------------------------------------------

    def create_element_at(self, point: Point, tool: Union[ToolType, str, None] = None) -> Optional[Element]:
        """
        Place a new element of the current (or given) shape tool centered on
        a document point, select it and commit a snapshot.

        Returns:
            The new element, or None if the tool does not place shapes
        """
        try:
            element = create_element(tool or self.tool, point, self.document, self.config)
        except ValueError as e:
            logger.warning("%s", e)
            return None
        self.renderer.render_element(element)
        self.selection.select(element)
        self.history.save_state()
        self.element_created.emit(element)
        self.layers_changed.emit()
        return element

    def delete_selected(self) -> bool:
        element = self.selection.delete_selected()
        if element is None:
            return False
        self.renderer.remove_element(element.id)
        self.history.save_state()
        self.element_removed.emit(element.id)
        self.layers_changed.emit()
        return True

    def nudge_selected(self, dx: float, dy: float) -> bool:
        """Move the selected element by (dx, dy) within the canvas."""
        element = self.selection.selected_element
        if element is None or not self.transform.move_element(element, dx, dy):
            return False
        self._element_updated(element)
        self.history.save_state()
        return True

    def rotate_selected(self, degrees: float) -> bool:
        element = self.selection.selected_element
        if element is None:
            return False
        self.transform.rotate_element(element, degrees)
        self._element_updated(element)
        self.history.save_state()
        return True

    def set_property(self, name: str, value: Any) -> bool:
        """
        Edit a property of the selected element.

        Returns:
            False if nothing changed or name is not an editable property
        """
        element = self.selection.selected_element
        if element is None:
            return False
        try:
            if not self.transform.set_property(element, name, value):
                return False
        except ValueError as e:
            logger.warning("%s", e)
            return False
        self._element_updated(element)
        self.history.save_state()
        return True

    def text_element_at(self, device_point: Point) -> Optional[Text]:
        """The text element under a double click, for in-place editing."""
        element = self.selection.element_at(self.to_document(device_point))
        if element is not None and element.element_type is ElementType.TEXT:
            return element
        return None

    def finish_text_edit(self, element_id: str, value: Optional[str]) -> bool:
        """Store edited text; empty input falls back to the default text."""
        element = self.document.get_element(element_id)
        if element is None or element.element_type is not ElementType.TEXT:
            return False
        element.text_content = value or DEFAULT_TEXT
        self._element_updated(element)
        self.history.save_state()
        return True

    def _element_updated(self, element: Element) -> None:
        self.renderer.update_element_display(element)
        self.element_changed.emit(element)

    # -- keyboard and wheel -----------------------------------------------

    def handle_key(self, key: Qt.Key, ctrl: bool = False, shift: bool = False) -> bool:
        """
        Apply a key press.

        Ctrl+Z undoes, Ctrl+Y or Ctrl+Shift+Z redoes. With a selection,
        Delete/Backspace delete it, arrows nudge it, R/E rotate it by
        +15/-15 degrees and [/] by -5/+5 degrees. Escape aborts a stroke.

        Returns:
            True if the key was handled
        """
        if ctrl and key == Qt.Key.Key_Z:
            return self.redo() if shift else self.undo()
        if ctrl and key == Qt.Key.Key_Y:
            return self.redo()
        if key == Qt.Key.Key_Escape:
            self.cancel_gesture()
            return True

        if self.is_busy or self.selection.selected_element is None:
            return False

        if key in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
            return self.delete_selected()
        if key in KEY_NUDGES:
            sx, sy = KEY_NUDGES[key]
            step = self.config.nudge_step
            self.nudge_selected(sx * step, sy * step)
            return True
        if key in KEY_ROTATIONS:
            return self.rotate_selected(KEY_ROTATIONS[key])
        return False

    def handle_wheel(self, delta_y: float, ctrl: bool = False, shift: bool = False) -> bool:
        """
        Apply a wheel step: Ctrl+Shift zooms (scrolling up zooms in), Ctrl
        alone rotates the selection by 5 degrees.
        """
        if ctrl and shift:
            return self.zoom_in() if delta_y < 0 else self.zoom_out()
        if ctrl and self.selection.selected_element is not None and not self.is_busy:
            step = WHEEL_ROTATION_STEP if delta_y > 0 else -WHEEL_ROTATION_STEP
            return self.rotate_selected(step)
        return False

    # -- zoom -------------------------------------------------------------

    def set_zoom(self, zoom: float) -> bool:
        zoom = round(min(max(zoom, self.config.zoom_min), self.config.zoom_max), 2)
        if zoom == self.zoom:
            return False
        self.zoom = zoom
        self.zoom_changed.emit(zoom)
        return True

    def zoom_in(self) -> bool:
        return self.set_zoom(self.zoom + self.config.zoom_step)

    def zoom_out(self) -> bool:
        return self.set_zoom(self.zoom - self.config.zoom_step)

    def reset_zoom(self) -> bool:
        return self.set_zoom(1.0)

    # -- history ----------------------------------------------------------

    def undo(self) -> bool:
        if self.is_busy or not self.history.undo():
            return False
        self.selection_changed.emit(self.selection.selected_element)
        self.layers_changed.emit()
        return True

    def redo(self) -> bool:
        if self.is_busy or not self.history.redo():
            return False
        self.selection_changed.emit(self.selection.selected_element)
        self.layers_changed.emit()
        return True

    # -- layers -----------------------------------------------------------

    def bring_to_front(self) -> bool:
        return self._commit_layers(self.layers.bring_to_front())

    def send_to_back(self) -> bool:
        return self._commit_layers(self.layers.send_to_back())

    def reorder_layer(self, direction) -> bool:
        return self._commit_layers(self.layers.reorder_layer(direction))

    def move_layer_selection(self, direction) -> Optional[Element]:
        return self.layers.move_layer_selection(direction)

    def _commit_layers(self, changed: bool) -> bool:
        if not changed:
            return False
        for element in self.layers.sorted_elements():
            self.renderer.update_element_display(element)
        self.history.save_state()
        self.layers_changed.emit()
        return True

    # -- pages ------------------------------------------------------------

    def add_page(self, name: Optional[str] = None):
        if self.is_busy:
            return None
        return self.pages.add_page(name)

    def delete_page(self, index: int) -> bool:
        if self.is_busy:
            return False
        return self.pages.delete_page(index)

    def switch_to_page(self, index: int) -> bool:
        if self.is_busy:
            return False
        return self.pages.switch_to_page(index)

    def _on_page_switched(self, index: int) -> None:
        # History is scoped to the page being edited
        self.history.reset()
        self.selection_changed.emit(None)
        self.layers_changed.emit()
        self.page_switched.emit(index)

    # -- persistence ------------------------------------------------------

    def serialize(self) -> Dict[str, Any]:
        """Document data, without the stroke currently being drawn."""
        data = project_io.serialize(self.document)
        path = self.pen.active_path
        if path is not None:
            page = data["pages"][data["currentPageIndex"]]
            page["elements"] = [e for e in page["elements"] if e["id"] != path.id]
        return data

    def deserialize(self, data: Any) -> bool:
        """
        Replace the document with one read from data.

        Returns:
            False if data was unusable; the current document is kept
        """
        document = project_io.deserialize(data)
        if document is None:
            return False
        self.load_document(document)
        return True

    def load_document(self, document: Document) -> None:
        """Start editing document, discarding any gesture and history."""
        self.cancel_gesture()
        self._bind(document)
        self.renderer.clear()
        for element in self.document.paint_order():
            self.renderer.render_element(element)
        self.document_loaded.emit()
        self.selection_changed.emit(None)
        self.layers_changed.emit()

    def save(self, filepath: str) -> bool:
        if self.is_busy:
            logger.warning("Cannot save while %s", self.mode.value)
            return False
        return project_io.save_project(self.document, filepath)

    def load(self, filepath: str) -> bool:
        if self.is_busy:
            logger.warning("Cannot load while %s", self.mode.value)
            return False
        document = project_io.load_project(filepath)
        if document is None:
            return False
        self.load_document(document)
        return True
