import json
import tempfile
import unittest
from pathlib import Path

from splitdiff.services.settings import (
    ApplicationSettings,
    DiffStyle,
    SettingsManager,
)


class TestSettingsManager(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "conf" / "settings.json"
        self.manager = SettingsManager(self.path)

    def tearDown(self):
        self._tmp.cleanup()

    def test_defaults_when_missing(self):
        settings = self.manager.settings
        self.assertEqual(settings, ApplicationSettings())
        self.assertFalse(settings.comparison.ignore_whitespace)
        self.assertTrue(settings.comparison.collapse_unchanged)
        self.assertEqual(settings.comparison.context_lines, 2)

    def test_save_and_reload(self):
        settings = self.manager.settings
        settings.comparison.ignore_whitespace = True
        settings.comparison.context_lines = 4
        settings.display.diff_style = DiffStyle.HUNKS_ONLY
        settings.display.width = 100
        self.assertTrue(self.manager.save())

        with open(self.path, encoding='utf-8') as f:
            stored = json.load(f)
        self.assertEqual(stored['display']['diff_style'], 'HUNKS_ONLY')

        reloaded = SettingsManager(self.path).settings
        self.assertEqual(reloaded, settings)

    def test_malformed_json_falls_back(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding='utf-8')
        with self.assertLogs(level='WARNING'):
            settings = self.manager.load()
        self.assertEqual(settings, ApplicationSettings())

    def test_bad_values_fall_back(self):
        self.path.parent.mkdir(parents=True)
        bad_values = [
            {"comparison": {"context_lines": "many"}},
            {"comparison": {"context_lines": -1}},
            {"comparison": {"context_lines": 2.5}},
            {"comparison": {"ignore_whitespace": "false"}},
            {"display": {"use_colors": 0}},
            {"display": {"width": 0}},
            {"display": {"tab_size": True}},
            {"comparison": ["not", "a", "table"]},
        ]
        for data in bad_values:
            with self.subTest(data=data):
                self.path.write_text(json.dumps(data), encoding='utf-8')
                with self.assertLogs(level='WARNING'):
                    settings = self.manager.load()
                self.assertEqual(settings, ApplicationSettings())

    def test_valid_values_are_kept(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text(json.dumps({
            "comparison": {"ignore_whitespace": False, "context_lines": 0},
            "display": {"use_colors": False, "tab_size": 8},
        }), encoding='utf-8')
        settings = self.manager.load()
        self.assertFalse(settings.comparison.ignore_whitespace)
        self.assertEqual(settings.comparison.context_lines, 0)
        self.assertFalse(settings.display.use_colors)
        self.assertEqual(settings.display.tab_size, 8)

    def test_unknown_enum_uses_default(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text(json.dumps({"display": {"diff_style": "FANCY"}}),
                             encoding='utf-8')
        self.assertEqual(self.manager.load().display.diff_style, DiffStyle.SIDE_BY_SIDE)

    def test_observers(self):
        seen = []
        self.manager.add_observer(seen.append)
        self.manager.reset()
        self.assertEqual(len(seen), 1)

        self.manager.remove_observer(seen.append)
        self.manager.save()
        self.assertEqual(len(seen), 1)


if __name__ == '__main__':
    unittest.main()
