"""
Tests for the editor session: gestures, keyboard, wheel, zoom, pages and
persistence wired together.
"""

import os
import shutil
import tempfile
import unittest

from PyQt6.QtCore import Qt

from vectorpad.core.geometry import Point
from vectorpad.editor.session import EditorSession, InteractionMode
from vectorpad.graphics.renderer import Renderer
from vectorpad.graphics.tools import ToolType
from vectorpad.io.project_io import element_to_dict


class RecordingRenderer(Renderer):
    """Renderer that records the calls it receives."""

    def __init__(self):
        self.calls = []

    def render_element(self, element):
        self.calls.append(("render", element.id))

    def update_element_display(self, element):
        self.calls.append(("update", element.id))

    def remove_element(self, element_id):
        self.calls.append(("remove", element_id))

    def clear(self):
        self.calls.append(("clear", None))


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.renderer = RecordingRenderer()
        self.session = EditorSession(renderer=self.renderer)

    def create(self, tool="rectangle", x=100, y=100):
        self.session.set_tool(tool)
        self.session.pointer_down(Point(x, y))
        self.session.set_tool(ToolType.SELECT)
        return self.session.selection.selected_element


class TestShapeGestures(SessionTestCase):
    """Test creation, dragging, resizing and rotating by pointer."""

    def test_click_creates_selected_element(self):
        element = self.create()
        self.assertEqual((element.x, element.y), (40, 60))
        self.assertEqual(self.session.document.selected_element_id, element.id)
        self.assertEqual(self.session.history.depth, 2)
        self.assertIn(("render", element.id), self.renderer.calls)
        self.assertEqual(self.session.mode, InteractionMode.IDLE)

    def test_pointer_maps_through_zoom(self):
        self.session.set_zoom(2.0)
        element = self.create(x=200, y=200)
        self.assertEqual((element.x, element.y), (40, 60))

    def test_drag_commits_and_undoes(self):
        element = self.create()
        self.assertTrue(self.session.pointer_down(Point(100, 100)))
        self.assertEqual(self.session.mode, InteractionMode.DRAGGING)
        self.session.pointer_move(Point(150, 120))
        self.session.pointer_up()
        self.assertEqual((element.x, element.y), (90, 80))
        self.assertEqual(self.session.mode, InteractionMode.IDLE)

        self.assertTrue(self.session.undo())
        restored = self.session.document.get_element(element.id)
        self.assertEqual((restored.x, restored.y), (40, 60))

    def test_second_press_during_gesture_is_ignored(self):
        self.create()
        self.session.pointer_down(Point(100, 100))
        self.assertFalse(self.session.pointer_down(Point(10, 10)))
        self.assertFalse(self.session.set_tool("pen"))
        self.assertEqual(self.session.mode, InteractionMode.DRAGGING)

    def test_resize_from_handle(self):
        element = self.create()
        self.session.pointer_down(Point(160, 140))
        self.assertEqual(self.session.mode, InteractionMode.RESIZING)
        self.session.pointer_up(Point(200, 200))
        self.assertEqual((element.width, element.height), (160, 140))
        self.assertIsNone(self.session.active_handle)

    def test_rotate_from_knob(self):
        element = self.create()
        # Knob sits 25 units above the top edge, centered horizontally
        self.session.pointer_down(Point(100, 35))
        self.assertEqual(self.session.mode, InteractionMode.ROTATING)
        self.session.pointer_move(Point(140, 100))
        self.session.pointer_up()
        self.assertAlmostEqual(element.rotation, 90)

    def test_click_on_empty_canvas_deselects(self):
        self.create()
        self.assertFalse(self.session.pointer_down(Point(900, 700)))
        self.assertIsNone(self.session.selection.selected_element)

    def test_panning(self):
        self.session.pointer_down(Point(10, 10), shift=True)
        self.assertEqual(self.session.mode, InteractionMode.PANNING)
        self.session.pointer_move(Point(20, 30))
        self.session.pointer_up()
        self.assertEqual(self.session.pan_offset, Point(10, 20))
        self.assertEqual(self.session.to_document(Point(110, 120)), Point(100, 100))


class TestFreehandGestures(SessionTestCase):
    """Test drawing and erasing through the session."""

    def draw(self, *points):
        self.session.set_tool("pen")
        self.session.pointer_down(Point(*points[0]))
        for point in points[1:]:
            self.session.pointer_move(Point(*point))
        self.session.pointer_up()

    def test_committed_path_is_selected_and_tool_resets(self):
        self.draw((10, 10), (30, 10), (50, 10))
        path = self.session.selection.selected_element
        self.assertIsNotNone(path)
        self.assertEqual(len(path.points), 3)
        self.assertIs(self.session.tool, ToolType.SELECT)
        self.assertTrue(self.session.history.can_undo)

    def test_single_point_path_is_discarded(self):
        self.draw((10, 10))
        self.assertEqual(self.session.document.elements, [])
        self.assertIn(("remove", "element_1"), self.renderer.calls)
        self.assertFalse(self.session.history.can_undo)
        self.assertIs(self.session.tool, ToolType.PEN)

    def test_erase_session_commits_once(self):
        self.draw((10, 10), (30, 10))
        depth = self.session.history.depth

        self.session.set_tool("eraser")
        self.session.pointer_down(Point(10, 10))
        self.assertEqual(self.session.mode, InteractionMode.ERASING)
        self.session.pointer_move(Point(12, 10))
        self.session.pointer_up()

        self.assertEqual(self.session.document.elements, [])
        self.assertIsNone(self.session.document.selected_element_id)
        self.assertEqual(self.session.history.depth, depth + 1)

        self.session.undo()
        self.assertEqual(len(self.session.document.elements), 1)

    def test_erase_without_hits_adds_no_history(self):
        self.draw((10, 10), (30, 10))
        depth = self.session.history.depth
        self.session.set_tool("eraser")
        self.session.pointer_down(Point(500, 500))
        self.session.pointer_up()
        self.assertEqual(self.session.history.depth, depth)

    def test_escape_cancels_stroke(self):
        self.session.set_tool("pen")
        self.session.pointer_down(Point(10, 10))
        self.session.pointer_move(Point(40, 40))
        self.assertTrue(self.session.handle_key(Qt.Key.Key_Escape))
        self.assertEqual(self.session.document.elements, [])
        self.assertEqual(self.session.mode, InteractionMode.IDLE)


class TestKeyboardAndWheel(SessionTestCase):
    """Test key and wheel handling."""

    def test_rotation_keys(self):
        element = self.create()
        self.session.handle_key(Qt.Key.Key_R)
        self.assertEqual(element.rotation, 15)
        self.session.handle_key(Qt.Key.Key_E)
        self.assertEqual(element.rotation, 0)
        self.session.handle_key(Qt.Key.Key_BracketLeft)
        self.assertEqual(element.rotation, 355)
        self.session.handle_key(Qt.Key.Key_BracketRight)
        self.assertEqual(element.rotation, 0)

    def test_arrow_keys_nudge(self):
        element = self.create()
        self.session.handle_key(Qt.Key.Key_Right)
        self.session.handle_key(Qt.Key.Key_Up)
        self.assertEqual((element.x, element.y), (45, 55))

    def test_delete_key(self):
        element = self.create()
        self.assertTrue(self.session.handle_key(Qt.Key.Key_Delete))
        self.assertEqual(self.session.document.elements, [])
        self.assertIn(("remove", element.id), self.renderer.calls)

    def test_keys_need_selection(self):
        self.assertFalse(self.session.handle_key(Qt.Key.Key_R))

    def test_undo_redo_shortcuts(self):
        self.create()
        self.assertTrue(self.session.handle_key(Qt.Key.Key_Z, ctrl=True))
        self.assertEqual(self.session.document.elements, [])
        self.assertTrue(self.session.handle_key(Qt.Key.Key_Y, ctrl=True))
        self.assertEqual(len(self.session.document.elements), 1)
        self.session.handle_key(Qt.Key.Key_Z, ctrl=True)
        self.assertTrue(self.session.handle_key(Qt.Key.Key_Z, ctrl=True, shift=True))
        self.assertEqual(len(self.session.document.elements), 1)

    def test_wheel_zoom(self):
        self.assertTrue(self.session.handle_wheel(-120, ctrl=True, shift=True))
        self.assertEqual(self.session.zoom, 1.1)
        self.session.handle_wheel(120, ctrl=True, shift=True)
        self.assertEqual(self.session.zoom, 1.0)

    def test_wheel_rotates_selection(self):
        element = self.create()
        self.session.handle_wheel(120, ctrl=True)
        self.assertEqual(element.rotation, 5)
        self.session.handle_wheel(-120, ctrl=True)
        self.assertEqual(element.rotation, 0)
        self.assertFalse(self.session.handle_wheel(120))

    def test_zoom_bounds(self):
        for _ in range(40):
            self.session.zoom_in()
        self.assertEqual(self.session.zoom, 3.0)
        self.assertFalse(self.session.zoom_in())
        for _ in range(40):
            self.session.zoom_out()
        self.assertEqual(self.session.zoom, 0.25)
        self.session.reset_zoom()
        self.assertEqual(self.session.zoom, 1.0)


class TestEditing(SessionTestCase):
    """Test property edits, text edits and layer operations."""

    def test_set_property(self):
        element = self.create()
        self.assertTrue(self.session.set_property("width", "200"))
        self.assertEqual(element.width, 200)
        self.assertFalse(self.session.set_property("width", "wide"))
        with self.assertLogs("vectorpad.editor.session", level="WARNING"):
            self.assertFalse(self.session.set_property("opacity", 0.5))
        self.assertEqual(self.session.history.depth, 3)

    def test_unknown_tool_is_refused(self):
        with self.assertLogs("vectorpad.editor.session", level="WARNING"):
            self.assertFalse(self.session.set_tool("laser"))
        self.assertIs(self.session.tool, ToolType.SELECT)
        with self.assertLogs("vectorpad.editor.session", level="WARNING"):
            self.assertIsNone(self.session.create_element_at(Point(10, 10), ToolType.PEN))
        self.assertEqual(self.session.document.elements, [])

    def test_finish_text_edit(self):
        text = self.create(tool="text")
        self.assertIs(self.session.text_element_at(Point(100, 100)), text)
        self.assertTrue(self.session.finish_text_edit(text.id, "Hello"))
        self.assertEqual(text.text_content, "Hello")
        self.session.finish_text_edit(text.id, "")
        self.assertEqual(text.text_content, "Text")
        self.assertFalse(self.session.finish_text_edit("element_99", "x"))

    def test_layer_operations_commit(self):
        first = self.create(x=300, y=300)
        second = self.create(x=300, y=300)
        depth = self.session.history.depth

        self.session.selection.select(first)
        self.assertTrue(self.session.bring_to_front())
        self.assertGreater(first.z_index, second.z_index)
        self.assertEqual(self.session.history.depth, depth + 1)

        self.assertIs(self.session.move_layer_selection("down"), second)
        self.assertEqual(self.session.history.depth, depth + 1)


class TestPagesAndPersistence(SessionTestCase):
    """Test page operations and serialization through the session."""

    def test_page_switch_resets_history(self):
        self.create()
        self.assertTrue(self.session.history.can_undo)
        self.session.add_page()
        self.assertFalse(self.session.history.can_undo)
        self.assertEqual(self.session.document.elements, [])

    def test_delete_last_page_refused(self):
        refused = []
        self.session.page_delete_refused.connect(refused.append)
        self.assertFalse(self.session.delete_page(0))
        self.assertEqual(len(refused), 1)

    def test_serialize_round_trip(self):
        self.create()
        self.create(tool="circle", x=500, y=400)
        self.session.add_page()
        self.create(tool="star")
        data = self.session.serialize()

        other = EditorSession()
        self.assertTrue(other.deserialize(data))
        self.assertEqual(len(other.document.pages), 2)
        self.assertEqual(other.document.active_page_index, 1)
        for mine, theirs in zip(self.session.document.pages, other.document.pages):
            self.assertEqual([element_to_dict(e) for e in mine.elements],
                             [element_to_dict(e) for e in theirs.elements])
            self.assertEqual(mine.element_counter, theirs.element_counter)

    def test_serialize_leaves_out_stroke_in_progress(self):
        self.session.set_tool("pen")
        self.session.pointer_down(Point(100, 100))
        data = self.session.serialize()
        self.assertEqual(data["pages"][0]["elements"], [])
        self.assertEqual(len(self.session.document.elements), 1)

        self.session.pointer_move(Point(150, 100))
        self.session.pointer_up()
        elements = self.session.serialize()["pages"][0]["elements"]
        self.assertEqual(len(elements), 1)
        self.assertEqual(len(elements[0]["points"]), 2)

    def test_save_and_load_refused_mid_gesture(self):
        tmpdir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, tmpdir, True)
        filepath = os.path.join(tmpdir, "design.json")
        self.session.set_tool("pen")
        self.session.pointer_down(Point(100, 100))
        with self.assertLogs("vectorpad.editor.session", level="WARNING"):
            self.assertFalse(self.session.save(filepath))
        self.assertFalse(os.path.exists(filepath))

        self.session.pointer_move(Point(150, 100))
        self.session.pointer_up()
        self.assertTrue(self.session.save(filepath))
        self.session.set_tool("pen")
        self.session.pointer_down(Point(300, 300))
        with self.assertLogs("vectorpad.editor.session", level="WARNING"):
            self.assertFalse(self.session.load(filepath))
        self.assertEqual(self.session.mode, InteractionMode.DRAWING_PATH)

    def test_deserialize_garbage_keeps_document(self):
        element = self.create()
        self.assertFalse(self.session.deserialize("not a document"))
        self.assertIs(self.session.document.get_element(element.id), element)


if __name__ == '__main__':
    unittest.main()
