"""Flask app for the Folder Share web interface."""

import os
import time
import logging

from flask import Flask, render_template

from folder_share.constants import DEFAULT_MAX_UPLOAD_MB, LOGGER_NAME
from folder_share.managers.storage import StorageManager
from folder_share.web.routes import create_api_bp, create_pages_bp

logger = logging.getLogger(LOGGER_NAME)


def create_app(config: dict) -> Flask:
    """Create Flask app with all blueprints. Routes close over one StorageManager
    built from config['STORAGE_PATH']."""
    _template_dir = os.path.join(os.path.dirname(__file__), 'templates')
    _static_dir = os.path.join(os.path.dirname(__file__), 'static')
    app = Flask(__name__, template_folder=_template_dir, static_folder=_static_dir)
    app.config['MAX_CONTENT_LENGTH'] = int(
        config.get('MAX_UPLOAD_MB', DEFAULT_MAX_UPLOAD_MB)
    ) * 1024 * 1024

    storage = StorageManager(
        config['STORAGE_PATH'],
        resolve_symlinks=bool(config.get('RESOLVE_SYMLINKS', False)),
    )
    started_at = time.time()

    app.register_blueprint(create_pages_bp(storage))
    app.register_blueprint(create_api_bp(storage, started_at))

    @app.errorhandler(413)
    def upload_too_large(_e):
        logger.warning("Rejected upload larger than %s MB", config.get('MAX_UPLOAD_MB', DEFAULT_MAX_UPLOAD_MB))
        return render_template('error.html', error='Upload too large'), 413

    return app
