from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import TestCase

import tomli

from activitywire.config import Config, InvalidConfigError, Logging, Output


class TestConfig(TestCase):

    def setUp(self) -> None:
        self._tmp = TemporaryDirectory()
        self.config_file = Path(self._tmp.name).joinpath("activitywire", "config.toml")

    def tearDown(self) -> None:
        Config.config = None
        self._tmp.cleanup()

    def test_creates_default(self):
        config = Config(self.config_file)
        self.assertTrue(self.config_file.is_file())
        self.assertEqual(config.output, Output())
        self.assertEqual(config.logging, Logging())
        with open(self.config_file, "rb") as f:
            self.assertEqual(tomli.load(f)["output"]["indent"], 2)

    def test_load(self):
        self.config_file.parent.mkdir(parents=True)
        self.config_file.write_text('[output]\nindent = 0\nsort_keys = true\n\n[logging]\nverbose = true\n')
        config = Config(self.config_file)
        self.assertEqual(config.output.indent, 0)
        self.assertTrue(config.output.sort_keys)
        self.assertFalse(config.output.ensure_ascii)
        self.assertTrue(config.logging.verbose)
        self.assertEqual(config.logging.log_file, "")

    def test_unknown_section_ignored(self):
        self.config_file.parent.mkdir(parents=True)
        self.config_file.write_text('[player]\nvolume = 5\n')
        config = Config(self.config_file)
        self.assertEqual(config.output, Output())

    def test_invalid_indent(self):
        self.config_file.parent.mkdir(parents=True)
        self.config_file.write_text('[output]\nindent = -1\n')
        with self.assertRaises(InvalidConfigError):
            Config(self.config_file)

    def test_unknown_key(self):
        self.config_file.parent.mkdir(parents=True)
        self.config_file.write_text('[output]\ncolour = true\n')
        with self.assertRaises(InvalidConfigError):
            Config(self.config_file)

    def test_invalid_toml(self):
        self.config_file.parent.mkdir(parents=True)
        self.config_file.write_text('[output\n')
        with self.assertRaises(InvalidConfigError):
            Config(self.config_file)

    def test_save(self):
        config = Config(self.config_file)
        config.output.sort_keys = True
        config.logging.log_file = "activitywire.log"
        config.save()
        reloaded = Config(self.config_file)
        self.assertTrue(reloaded.output.sort_keys)
        self.assertEqual(reloaded.logging.log_file, "activitywire.log")

    def test_get_config(self):
        config = Config(self.config_file)
        self.assertIs(Config.get_config(), config)

    def test_json_options(self):
        self.assertEqual(Output().json_options(), {"indent": 2, "sort_keys": False, "ensure_ascii": False})
        self.assertIsNone(Output(indent=0).json_options()["indent"])
