"""
Tests for scene elements, pages and the document container.
"""

import unittest

from vectorpad.core.document import Document
from vectorpad.core.elements import (
    Rectangle, Circle, Triangle, Line, Text, Path, ElementType,
    element_class_for, element_number, paint_order
)
from vectorpad.core.geometry import Point
from vectorpad.core.page import Page


class TestElements(unittest.TestCase):
    """Test element variants."""

    def test_rectangle_contains_point(self):
        rect = Rectangle("element_1", 10, 10, 100, 50)
        self.assertTrue(rect.contains_point(Point(50, 30)))
        self.assertFalse(rect.contains_point(Point(5, 30)))

    def test_hit_test_follows_rotation(self):
        rect = Rectangle("element_1", 0, 0, 100, 20)
        self.assertFalse(rect.contains_point(Point(50, 50)))
        rect.rotation = 90
        self.assertTrue(rect.contains_point(Point(50, 50)))

    def test_circle_corner_is_outside(self):
        circle = Circle("element_1", 0, 0, 100, 100)
        self.assertTrue(circle.contains_point(Point(50, 50)))
        self.assertFalse(circle.contains_point(Point(3, 3)))

    def test_triangle_contains_point(self):
        triangle = Triangle("element_1", 0, 0, 100, 80)
        self.assertTrue(triangle.contains_point(Point(50, 60)))
        self.assertFalse(triangle.contains_point(Point(5, 5)))

    def test_text_defaults(self):
        text = Text("element_1", 0, 0, 120, 40)
        self.assertEqual(text.text_content, "Text")
        self.assertEqual(text.element_type, ElementType.TEXT)

    def test_line_outline_is_horizontal(self):
        line = Line("element_1", 0, 0, 150, 2)
        outline = line.local_outline()
        self.assertEqual([(p.x, p.y) for p in outline], [(0, 1), (150, 1)])

    def test_clone_is_independent(self):
        rect = Rectangle("element_1", 1, 2, 3, 4)
        copy = rect.clone()
        copy.x = 99
        self.assertEqual(rect.x, 1)
        self.assertEqual(copy.id, "element_1")


class TestPath(unittest.TestCase):
    """Test the freehand path element."""

    def test_bounds_padded_by_half_stroke(self):
        path = Path("element_1", [Point(10, 10), Point(50, 30)], stroke_width=4)
        self.assertEqual((path.x, path.y, path.width, path.height), (8, 8, 44, 24))
        self.assertTrue(path.is_valid)

    def test_single_point_is_invalid(self):
        self.assertFalse(Path("element_1", [Point(1, 1)]).is_valid)

    def test_translate_moves_points_and_frame(self):
        path = Path("element_1", [Point(10, 10), Point(50, 30)], stroke_width=2)
        path.translate(5, -5)
        self.assertEqual(path.points[0], Point(15, 5))
        self.assertEqual((path.x, path.y), (14, 4))

    def test_hit_test_on_stroke(self):
        path = Path("element_1", [Point(0, 0), Point(100, 0)], stroke_width=2)
        self.assertTrue(path.contains_point(Point(50, 3)))
        self.assertFalse(path.contains_point(Point(50, 20)))

    def test_clone_copies_points(self):
        path = Path("element_1", [Point(0, 0), Point(10, 10)])
        copy = path.clone()
        copy.points[0].x = 42
        self.assertEqual(path.points[0].x, 0)


class TestElementHelpers(unittest.TestCase):
    """Test the element factory and ordering helpers."""

    def test_unknown_type_raises(self):
        with self.assertRaises(ValueError):
            element_class_for("hexagon")

    def test_class_lookup(self):
        self.assertIs(element_class_for("circle"), Circle)
        self.assertIs(element_class_for(ElementType.PATH), Path)

    def test_element_number(self):
        self.assertEqual(element_number("element_12"), 12)
        self.assertEqual(element_number("custom"), -1)

    def test_paint_order_tie_break(self):
        a = Rectangle("element_10", 0, 0, 1, 1)
        b = Rectangle("element_2", 0, 0, 1, 1)
        c = Rectangle("element_1", 0, 0, 1, 1)
        c.z_index = 5
        self.assertEqual([e.id for e in paint_order([a, b, c])],
                         ["element_2", "element_10", "element_1"])


class TestDocument(unittest.TestCase):
    """Test the document and its live buffer."""

    def test_starts_with_one_page(self):
        document = Document()
        self.assertEqual(len(document.pages), 1)
        self.assertIs(document.elements, document.pages[0].elements)

    def test_generate_element_id(self):
        document = Document()
        self.assertEqual(document.generate_element_id(), "element_1")
        self.assertEqual(document.generate_element_id(), "element_2")

    def test_allocate_z_index_stays_above_live_elements(self):
        document = Document()
        self.assertEqual(document.allocate_z_index(), 0)
        self.assertEqual(document.allocate_z_index(), 1)

        rect = Rectangle("element_1", 0, 0, 10, 10)
        rect.z_index = 10
        document.add_element(rect)
        self.assertEqual(document.allocate_z_index(), 11)

    def test_remove_selected_clears_selection(self):
        document = Document()
        document.add_element(Rectangle("element_1", 0, 0, 10, 10))
        document.selected_element_id = "element_1"
        removed = document.remove_element("element_1")
        self.assertEqual(removed.id, "element_1")
        self.assertIsNone(document.selected_element_id)
        self.assertIsNone(document.remove_element("element_1"))

    def test_stale_selection_reads_as_none(self):
        document = Document()
        document.selected_element_id = "element_9"
        self.assertIsNone(document.selected_element)
        self.assertIsNone(document.selected_element_id)

    def test_flush_and_load_move_the_buffer(self):
        first = Page("page_1", "Page 1", [Rectangle("element_1", 0, 0, 1, 1)], 1)
        second = Page("page_2", "Page 2", [], 0)
        document = Document(pages=[first, second])
        self.assertEqual(document.element_counter, 1)

        document.generate_element_id()
        document.flush_live_buffer()
        document.load_page(1)
        self.assertEqual(first.element_counter, 2)
        self.assertIs(document.elements, second.elements)
        self.assertEqual(document.page_counter, 2)
        self.assertEqual(document.next_page_id(), "page_3")


if __name__ == '__main__':
    unittest.main()
