"""
Tests for editor configuration persistence through QSettings.
"""

import os
import shutil
import tempfile
import unittest

from PyQt6.QtCore import QSettings

from vectorpad.core.config import EditorConfig, load_config, save_config


class TestEditorConfig(unittest.TestCase):
    """Test EditorConfig defaults and persistence."""

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = os.path.join(self.tmpdir, "vectorpad.ini")

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _settings(self):
        return QSettings(self.path, QSettings.Format.IniFormat)

    def test_defaults(self):
        config = EditorConfig()
        self.assertEqual((config.canvas_width, config.canvas_height), (1200, 800))
        self.assertEqual(config.min_element_size, 20)
        self.assertEqual(config.boundary, 5)
        self.assertEqual(config.history_limit, 50)
        self.assertEqual(config.dimensions_for("rectangle"), (120, 80))
        self.assertEqual(config.dimensions_for("line"), (150, 2))

    def test_unknown_type_uses_rectangle_dimensions(self):
        self.assertEqual(EditorConfig().dimensions_for("unknown"), (120, 80))

    def test_missing_settings_give_defaults(self):
        config = load_config(self._settings())
        self.assertEqual(config, EditorConfig())

    def test_save_and_load(self):
        config = EditorConfig(canvas_width=1000.0, history_limit=10, eraser_radius=15.0)
        save_config(config, self._settings())

        loaded = load_config(self._settings())
        self.assertEqual(loaded.canvas_width, 1000.0)
        self.assertEqual(loaded.history_limit, 10)
        self.assertEqual(loaded.eraser_radius, 15.0)
        self.assertEqual(loaded.canvas_height, 800.0)


if __name__ == '__main__':
    unittest.main()
