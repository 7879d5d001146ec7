#!/usr/bin/env python3
"""
Folder Share - Bootstrap and entry point.

Provides bootstrap() for the WSGI worker (folder_share.wsgi). The server is
started via run_server.py (Gunicorn); do not run Flask's built-in server.

Run the app with: python run_server.py
"""

import logging
import os
import sys
from pathlib import Path

from folder_share.config import load_config
from folder_share.constants import LOGGER_NAME
from folder_share.logging_utils import setup_logging

# Early logging for config loading (reconfigured after config is loaded)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(LOGGER_NAME)


def _load_version() -> str:
    """Load version from version.txt.

    Looks next to this module first (installed package data), then at the
    project root (running from source).
    """
    try:
        pkg_dir = Path(__file__).resolve().parent
        for candidate in (
            pkg_dir / "version.txt",
            pkg_dir.parent.parent / "version.txt",
        ):
            if candidate.exists():
                return candidate.read_text().strip()
    except OSError:
        pass
    return "unknown"


def bootstrap() -> dict:
    """Load config, setup logging, ensure the storage root exists; return config.

    Used by the WSGI entry point (wsgi.py). Does not start the web server.
    """
    config = load_config()
    setup_logging(config.get("LOG_LEVEL", "INFO"))

    logger.info("VERSION = %s", _load_version())

    storage_path = config["STORAGE_PATH"]
    os.makedirs(storage_path, exist_ok=True)
    logger.info("Storage root: %s", storage_path)
    if config.get("RESOLVE_SYMLINKS"):
        logger.info("Symlinks are resolved before containment checks")
    else:
        logger.info("Symlinks inside the storage root are trusted")
    return config


def main():
    """Entry point: direct user to run_server.py (Gunicorn is the only server)."""
    logger.error(
        "Folder Share must be started with run_server.py (Gunicorn). "
        "Do not use python -m folder_share.main to run the server."
    )
    sys.exit(1)


if __name__ == "__main__":
    main()
