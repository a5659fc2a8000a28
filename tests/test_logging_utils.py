import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from infrastructure.config import ContainerConfig, build_default_container
from infrastructure.logging_utils import setup_logging


class TestSetupLogging(unittest.TestCase):
    def setUp(self) -> None:
        self.root = logging.getLogger()
        self.saved_handlers = self.root.handlers[:]
        self.saved_level = self.root.level
        self.root.handlers = []

    def tearDown(self) -> None:
        for handler in self.root.handlers:
            handler.close()
        self.root.handlers = self.saved_handlers
        self.root.setLevel(self.saved_level)

    def test_configures_file_and_console_once(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "logs" / "indexquery.log"

            self.assertTrue(setup_logging("debug", log_file))
            self.assertFalse(setup_logging("error", log_file))

            self.assertEqual(len(self.root.handlers), 2)
            self.assertEqual(self.root.level, logging.DEBUG)
            self.assertTrue(log_file.exists())
            for handler in self.root.handlers:
                handler.close()

    def test_console_only_without_file(self):
        setup_logging("warning")

        self.assertEqual(len(self.root.handlers), 1)
        self.assertEqual(self.root.level, logging.WARNING)

    def test_container_leaves_logging_alone_by_default(self):
        build_default_container()

        self.assertEqual(self.root.handlers, [])

    def test_container_configures_logging_from_env(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "indexquery.log"
            env = {"INDEXQUERY_LOG_LEVEL": "debug", "INDEXQUERY_LOG_FILE": str(log_file)}
            with mock.patch.dict(os.environ, env):
                cfg = ContainerConfig.from_env()

            build_default_container(cfg)

            self.assertEqual(cfg.log_level, "debug")
            self.assertEqual(len(self.root.handlers), 2)
            self.assertEqual(self.root.level, logging.DEBUG)
            self.assertTrue(log_file.exists())
            for handler in self.root.handlers:
                handler.close()


if __name__ == "__main__":
    unittest.main()
