"""Tests for logging_utils: ErrorBuffer, ErrorBufferHandler and setup_logging."""

import logging
import unittest

from folder_share.logging_utils import (
    ErrorBuffer,
    ErrorBufferHandler,
    error_buffer,
    setup_logging,
)


class TestErrorBuffer(unittest.TestCase):

    def test_newest_first(self) -> None:
        buf = ErrorBuffer(max_size=5)
        buf.append("t1", "ERROR", "first")
        buf.append("t2", "WARNING", "second")
        self.assertEqual([e["message"] for e in buf.get_all()], ["second", "first"])

    def test_rotates_at_max_size(self) -> None:
        buf = ErrorBuffer(max_size=3)
        for i in range(5):
            buf.append(f"t{i}", "ERROR", f"m{i}")
        self.assertEqual([e["message"] for e in buf.get_all()], ["m4", "m3", "m2"])

    def test_truncates_long_messages(self) -> None:
        buf = ErrorBuffer()
        buf.append("t", "ERROR", "x" * 1000)
        self.assertEqual(len(buf.get_all()[0]["message"]), 500)

    def test_clear(self) -> None:
        buf = ErrorBuffer()
        buf.append("t", "ERROR", "boom")
        buf.clear()
        self.assertEqual(buf.get_all(), [])


class TestErrorBufferHandler(unittest.TestCase):
    """Handler captures WARNING and above, ignores INFO."""

    def test_captures_warnings_only(self) -> None:
        buf = ErrorBuffer()
        handler = ErrorBufferHandler(buf)
        logger = logging.getLogger("folder-share.test-handler")
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        try:
            logger.info("just info")
            logger.warning("Rejected path %r", "../etc")
            logger.error("Delete failed")
        finally:
            logger.removeHandler(handler)
        entries = buf.get_all()
        self.assertEqual([e["level"] for e in entries], ["ERROR", "WARNING"])
        self.assertIn("../etc", entries[1]["message"])


class TestSetupLogging(unittest.TestCase):

    def tearDown(self) -> None:
        error_buffer.clear()

    def test_setup_installs_single_buffer_handler(self) -> None:
        setup_logging("debug")
        setup_logging("INFO")
        logger = logging.getLogger("folder-share")
        handlers = [h for h in logger.handlers if isinstance(h, ErrorBufferHandler)]
        self.assertEqual(len(handlers), 1)
        self.assertEqual(logger.level, logging.INFO)
        self.assertEqual(logging.getLogger("werkzeug").level, logging.WARNING)

    def test_warning_reaches_shared_buffer(self) -> None:
        setup_logging("INFO")
        error_buffer.clear()
        logging.getLogger("folder-share").warning("Rejected path outside storage")
        self.assertEqual(error_buffer.get_all()[0]["message"], "Rejected path outside storage")
