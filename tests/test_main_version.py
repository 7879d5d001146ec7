"""Tests for main module version loading and bootstrap."""

import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from folder_share.main import _load_version, bootstrap


class TestLoadVersion(unittest.TestCase):
    """Tests for _load_version startup behavior."""

    def test_load_version_returns_string_from_version_txt(self) -> None:
        """When version.txt exists (root or package), return its stripped contents."""
        result = _load_version()
        self.assertIsInstance(result, str)
        self.assertNotEqual(
            result,
            "unknown",
            "version.txt should be found from project root or package",
        )

    def test_load_version_returns_unknown_when_file_missing(self) -> None:
        """When version.txt does not exist, return 'unknown'."""
        real_exists = Path.exists

        def mock_exists(self: object) -> bool:
            if getattr(self, "name", "") == "version.txt":
                return False
            return real_exists(self)

        with patch.object(Path, "exists", mock_exists):
            result = _load_version()

        self.assertEqual(result, "unknown")


class TestBootstrap(unittest.TestCase):

    def test_bootstrap_creates_storage_root(self) -> None:
        tmp = tempfile.mkdtemp()
        self.addCleanup(lambda: shutil.rmtree(tmp, ignore_errors=True))
        storage = os.path.join(tmp, "nested", "uploads")
        config = {
            "STORAGE_PATH": storage,
            "LOG_LEVEL": "INFO",
            "RESOLVE_SYMLINKS": False,
        }
        with patch("folder_share.main.load_config", return_value=config):
            result = bootstrap()
        self.assertIs(result, config)
        self.assertTrue(os.path.isdir(storage))
