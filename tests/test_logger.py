import os
import sys
import tempfile
import unittest
from unittest import mock

# Ensure project src/ is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(ROOT, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from utils import config  # noqa: E402
from utils import logger as logger_module  # noqa: E402


class LoggerTestCase(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.log_file = os.path.join(self.temp_dir.name, "storefront.log")
        logger_module._console = None

    def tearDown(self):
        console = logger_module._console
        if console is not None:
            console.file.close()
        logger_module._console = None
        self.temp_dir.cleanup()

    def test_loggers_share_one_log_file_console(self):
        with mock.patch.object(config, "LOG_FILE", self.log_file):
            first = logger_module.get_logger("test.shared.first")
            second = logger_module.get_logger("test.shared.second")

            self.assertIs(first.handlers[0].console, second.handlers[0].console)
            first.info("written once")
            logger_module._console.file.flush()

        with open(self.log_file, encoding="utf-8") as f:
            self.assertIn("written once", f.read())

    def test_no_log_file_uses_default_console(self):
        with mock.patch.object(config, "LOG_FILE", ""):
            self.assertIsNone(logger_module._shared_console())


if __name__ == "__main__":
    unittest.main()
