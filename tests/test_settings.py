"""Flag, persisted-config, and environment resolution into ``RenderConfig``."""

from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from hlcat import cli, settings
from hlcat.errors import ConfigError
from hlcat.render import NUMBER_ALL, NUMBER_NONBLANK, NUMBER_NONE


class _TtyStream(io.StringIO):
    def isatty(self) -> bool:
        return True


class BuildRenderConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "config.json"
        patcher = mock.patch("hlcat.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)
        columns = mock.patch("hlcat.settings.terminal_columns", return_value=100)
        columns.start()
        self.addCleanup(columns.stop)

    def _build(self, argv: list[str], stdout=None):
        args = cli.build_parser().parse_args(argv)
        return settings.build_render_config(args, stdout if stdout is not None else io.StringIO())

    def test_defaults_for_non_terminal_output(self) -> None:
        config = self._build([])
        self.assertEqual(config.number_mode, NUMBER_NONE)
        self.assertFalse(config.color)
        self.assertFalse(config.wrap)
        self.assertEqual(config.wrap_width, 100)
        self.assertEqual(config.tab_width, 8)
        self.assertEqual(config.theme, "monokai")

    def test_show_all_sets_tabs_and_ends(self) -> None:
        config = self._build(["-A"])
        self.assertTrue(config.show_tabs)
        self.assertTrue(config.show_ends)

    def test_short_e_and_t_aliases(self) -> None:
        config = self._build(["-e", "-t"])
        self.assertTrue(config.show_tabs)
        self.assertTrue(config.show_ends)

    def test_long_nonprinting_aliases(self) -> None:
        config = self._build(["--show-nonprinting-ends", "--show-nonprinting-tabs"])
        self.assertTrue(config.show_tabs)
        self.assertTrue(config.show_ends)

    def test_number_nonblank_overrides_number(self) -> None:
        self.assertEqual(self._build(["-n"]).number_mode, NUMBER_ALL)
        self.assertEqual(self._build(["-n", "-b"]).number_mode, NUMBER_NONBLANK)

    def test_plain_disables_numbers_and_titles(self) -> None:
        config = self._build(["-n", "--title-number", "-p"])
        self.assertEqual(config.number_mode, NUMBER_NONE)
        self.assertFalse(config.titles)
        self.assertFalse(config.title_numbers)

    def test_title_number_implies_title(self) -> None:
        config = self._build(["--title-number"])
        self.assertTrue(config.titles)
        self.assertTrue(config.title_numbers)

    def test_wrap_width_implies_character_wrapping(self) -> None:
        config = self._build(["--wrap", "never", "--wrap-width", "40"])
        self.assertTrue(config.wrap)
        self.assertEqual(config.wrap_width, 40)

    def test_auto_modes_follow_terminal(self) -> None:
        with mock.patch.dict(os.environ, {"TERM": "xterm-256color"}, clear=False):
            os.environ.pop("NO_COLOR", None)
            config = self._build([], stdout=_TtyStream())
        self.assertTrue(config.color)
        self.assertTrue(config.wrap)

    def test_no_color_environment_disables_auto_color(self) -> None:
        with mock.patch.dict(os.environ, {"NO_COLOR": ""}):
            config = self._build([], stdout=_TtyStream())
        self.assertFalse(config.color)

    def test_dumb_terminal_disables_auto_color(self) -> None:
        with mock.patch.dict(os.environ, {"TERM": "dumb"}):
            os.environ.pop("NO_COLOR", None)
            config = self._build([], stdout=_TtyStream())
        self.assertFalse(config.color)

    def test_color_always_is_ignored_for_output_files(self) -> None:
        self.assertTrue(self._build(["--color", "always"]).color)
        self.assertFalse(self._build(["--color", "always", "-o", "out.txt"]).color)

    def test_unknown_theme_is_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            self._build(["--theme", "no-such-theme"])

    def test_persisted_defaults_apply_when_flags_are_absent(self) -> None:
        self.config_path.write_text(
            json.dumps({"theme": "emacs", "tabs": 4, "color": "always", "wrap": "character"}),
            encoding="utf-8",
        )
        config = self._build([])
        self.assertEqual(config.theme, "emacs")
        self.assertEqual(config.tab_width, 4)
        self.assertTrue(config.color)
        self.assertTrue(config.wrap)

        overridden = self._build(["--theme", "monokai", "--tabs", "2", "--color", "never", "--wrap", "never"])
        self.assertEqual(overridden.theme, "monokai")
        self.assertEqual(overridden.tab_width, 2)
        self.assertFalse(overridden.color)
        self.assertFalse(overridden.wrap)


if __name__ == "__main__":
    unittest.main()
