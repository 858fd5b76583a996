"""Tests for persisted preferences and the executable build command."""
import unittest
from unittest.mock import patch

import build
from borrowerdesk.config import PAGE_SIZE_SETTING
from borrowerdesk.database import DatabaseManager
from borrowerdesk.theme import ThemeManager, Theme
from borrowerdesk.views.borrowers import saved_page_size


class TestThemeManager(unittest.TestCase):

    def setUp(self):
        self.db = DatabaseManager(":memory:")

    def tearDown(self):
        self.db.close()

    def test_toggle_is_persisted(self):
        manager = ThemeManager(self.db)
        self.assertFalse(manager.is_dark)
        self.assertEqual(manager.toggle_theme(), "Dark")
        self.assertEqual(ThemeManager(self.db).colors, Theme.DARK)

    def test_missing_colour_key(self):
        self.assertEqual(ThemeManager(self.db).get_color("no_such_key"), "#ff0000")


class TestSavedPageSize(unittest.TestCase):

    def setUp(self):
        self.db = DatabaseManager(":memory:")

    def tearDown(self):
        self.db.close()

    def test_default_when_unset(self):
        self.assertEqual(saved_page_size(self.db), 10)

    def test_restores_saved_value(self):
        self.db.set_setting(PAGE_SIZE_SETTING, 25)
        self.assertEqual(saved_page_size(self.db), 25)

    def test_ignores_invalid_value(self):
        self.db.set_setting(PAGE_SIZE_SETTING, "abc")
        self.assertEqual(saved_page_size(self.db), 10)
        self.db.set_setting(PAGE_SIZE_SETTING, 7)
        self.assertEqual(saved_page_size(self.db), 10)


class TestBuildCommand(unittest.TestCase):

    def test_includes_package_and_entry_point(self):
        cmd = build.nuitka_command()
        self.assertIn("--include-package=borrowerdesk", cmd)
        self.assertEqual(cmd[-1], "borrowerdesk_app.py")

    @patch("build.os.path.exists", return_value=True)
    def test_icon_flag(self, _exists):
        cmd = build.nuitka_command("resources/icon.ico")
        self.assertEqual(cmd[-1], "--windows-icon-from-ico=resources/icon.ico")

    @patch("build.os.path.exists", return_value=False)
    def test_missing_icon_png(self, _exists):
        self.assertIsNone(build.prepare_icon())


if __name__ == "__main__":
    unittest.main()
