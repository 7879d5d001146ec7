"""Configuration loading and validation."""

import os
import logging
import sys

import yaml
from voluptuous import Schema, Optional, Any, ALLOW_EXTRA, Invalid, Range, All

from folder_share.constants import (
    DEFAULT_FLASK_HOST,
    DEFAULT_FLASK_PORT,
    DEFAULT_MAX_UPLOAD_MB,
    DEFAULT_STORAGE_PATH,
    LOGGER_NAME,
)

logger = logging.getLogger(LOGGER_NAME)


# Configuration Schema
CONFIG_SCHEMA = Schema({
    # Web server binding and the storage root every request is confined to.
    Optional('network'): {
        Optional('flask_host'): str,       # Bind address for Gunicorn (e.g. 0.0.0.0).
        Optional('flask_port'): int,       # Port for the web UI and API.
        Optional('storage_path'): str,     # Storage root; created at startup if missing.
    },
    # Application behavior: logging, upload limits, symlink policy.
    Optional('settings'): {
        Optional('log_level'): Any('DEBUG', 'INFO', 'WARNING', 'ERROR'),  # Logging verbosity.
        Optional('max_upload_mb'): All(int, Range(min=1)),     # Requests larger than this are rejected with 413.
        Optional('resolve_symlinks'): bool,                     # Resolve symlinks before the containment check; false = symlinks inside storage are trusted.
    },
}, extra=ALLOW_EXTRA)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return str(value).lower() in ('true', '1', 'yes')


def load_config() -> dict:
    """Load configuration from config.yaml merged with environment variables.

    Priority (highest to lowest):
    1. Environment variables
    2. config.yaml
    3. Default values

    STORAGE_PATH is always returned as an absolute path.
    """
    config = {
        # Network settings
        'FLASK_HOST': DEFAULT_FLASK_HOST,
        'FLASK_PORT': DEFAULT_FLASK_PORT,
        'STORAGE_PATH': DEFAULT_STORAGE_PATH,

        # Settings defaults
        'LOG_LEVEL': 'INFO',
        'MAX_UPLOAD_MB': DEFAULT_MAX_UPLOAD_MB,
        'RESOLVE_SYMLINKS': False,
    }

    # Load from config.yaml if exists
    config_paths = ['/app/config.yaml', '/app/storage/config.yaml', './config.yaml']
    config_loaded = False

    for path in config_paths:
        if os.path.exists(path):
            try:
                logger.info(f"Loading config from {path}")
                with open(path, 'r') as f:
                    yaml_config = yaml.safe_load(f) or {}

                # Validate schema
                try:
                    yaml_config = CONFIG_SCHEMA(yaml_config)
                except Invalid as e:
                    logger.error(f"Invalid configuration in {path}: {e}")
                    sys.exit(1)

                if 'network' in yaml_config:
                    network = yaml_config['network']
                    config['FLASK_HOST'] = network.get('flask_host', config['FLASK_HOST'])
                    config['FLASK_PORT'] = network.get('flask_port', config['FLASK_PORT'])
                    config['STORAGE_PATH'] = network.get('storage_path', config['STORAGE_PATH'])

                if 'settings' in yaml_config:
                    settings = yaml_config['settings']
                    config['LOG_LEVEL'] = settings.get('log_level', config['LOG_LEVEL'])
                    config['MAX_UPLOAD_MB'] = settings.get('max_upload_mb', config['MAX_UPLOAD_MB'])
                    config['RESOLVE_SYMLINKS'] = settings.get('resolve_symlinks', config['RESOLVE_SYMLINKS'])

                config_loaded = True
                break

            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Error loading config from {path}: {e}")

    if not config_loaded:
        logger.info("No config.yaml found, using defaults")

    # Environment variables override everything (for deployment)
    config['FLASK_HOST'] = os.getenv('FLASK_HOST') or config['FLASK_HOST']
    config['FLASK_PORT'] = int(os.getenv('FLASK_PORT', str(config['FLASK_PORT'])))
    config['STORAGE_PATH'] = os.getenv('STORAGE_PATH', config['STORAGE_PATH'])
    config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', config['LOG_LEVEL'])
    config['MAX_UPLOAD_MB'] = int(os.getenv('MAX_UPLOAD_MB', str(config['MAX_UPLOAD_MB'])))
    config['RESOLVE_SYMLINKS'] = _env_bool('RESOLVE_SYMLINKS', config['RESOLVE_SYMLINKS'])

    if not config['STORAGE_PATH']:
        raise ValueError(
            "Missing required configuration: STORAGE_PATH (network.storage_path). "
            "Set it in config.yaml under 'network:' or as an environment variable."
        )
    config['STORAGE_PATH'] = os.path.abspath(config['STORAGE_PATH'])

    return config
