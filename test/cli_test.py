import json
import logging
from io import StringIO
from logging.handlers import RotatingFileHandler
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import TestCase

from rich.console import Console

from activitywire import __version__
from activitywire.__main__ import run
from activitywire.config import Config
from activitywire.log import create_logger, get_logger

_SPOTIFY = {"name": "Spotify", "details": "Song Title", "state": "Artist", "party": {"size": [3, 5]}}


class TestCli(TestCase):

    def setUp(self) -> None:
        self._tmp = TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.config_file = self.root.joinpath("config.toml")
        self.payload = self.root.joinpath("activity.json")
        self.payload.write_text(json.dumps(_SPOTIFY))
        self.output = StringIO()
        self.console = Console(file=self.output, width=200)

    def tearDown(self) -> None:
        Config.config = None
        logger = get_logger()
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
        self._tmp.cleanup()

    def _run(self, *args: str) -> int:
        return run(["--config", str(self.config_file), *args], console=self.console)

    def test_version(self):
        self.assertEqual(run(["--version"], console=self.console), 0)
        self.assertIn(__version__, self.output.getvalue())

    def test_no_command(self):
        self.assertEqual(self._run(), 2)

    def test_decode(self):
        self.assertEqual(self._run("decode", str(self.payload)), 0)
        out = self.output.getvalue()
        self.assertIn("Spotify", out)
        self.assertIn("rich presence: True", out)
        self.assertIn("custom status: False", out)

    def test_encode_compact(self):
        self.assertEqual(self._run("encode", "--indent", "0", str(self.payload)), 0)
        self.assertEqual(json.loads(self.output.getvalue()), _SPOTIFY)
        self.assertEqual(len(self.output.getvalue().strip().splitlines()), 1)

    def test_encode_uses_config(self):
        self.config_file.write_text("[output]\nindent = 4\nsort_keys = true\n")
        self.assertEqual(self._run("encode", str(self.payload)), 0)
        expected = json.dumps(_SPOTIFY, indent=4, sort_keys=True, ensure_ascii=False)
        self.assertEqual(self.output.getvalue().strip(), expected)

    def test_negative_indent(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run("encode", "--indent", "-1", str(self.payload))
        self.assertEqual(ctx.exception.code, 2)
        self.assertEqual(self.output.getvalue(), "")

    def test_malformed(self):
        self.payload.write_text('{"name": "Game", "party": {"size": [1]}}')
        self.assertEqual(self._run("decode", str(self.payload)), 1)

    def test_missing_file(self):
        self.assertEqual(self._run("decode", str(self.root.joinpath("missing.json"))), 1)

    def test_log_file(self):
        log_file = self.root.joinpath("logs", "activitywire.log")
        self.assertEqual(self._run("--debug", "--log", str(log_file), "encode", str(self.payload)), 0)
        self.assertIn("Decoded activity", log_file.read_text(encoding="utf-8"))


class TestCreateLogger(TestCase):

    def setUp(self) -> None:
        self._tmp = TemporaryDirectory()
        self.log_file = Path(self._tmp.name).joinpath("activitywire.log")

    def tearDown(self) -> None:
        logger = get_logger()
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
        self._tmp.cleanup()

    def test_replaced_handler_is_closed(self):
        create_logger(verbose=True, log=self.log_file)
        first = get_logger().handlers[0]
        self.assertIsInstance(first, RotatingFileHandler)
        create_logger(verbose=False, log=self.log_file)
        if isinstance(first, RotatingFileHandler):
            self.assertIsNone(first.stream)
        self.assertEqual(len(get_logger().handlers), 1)
        self.assertIsNot(get_logger().handlers[0], first)
