"""
WSGI entry point for Gunicorn.

Bootstraps config and logging, then exposes the Flask app built by
create_app(). Request handling holds no shared in-process state, so any
number of threads may serve it.
"""

import logging

from folder_share.constants import LOGGER_NAME
from folder_share.main import bootstrap
from folder_share.web.server import create_app

logger = logging.getLogger(LOGGER_NAME)


def create_application():
    """Create the WSGI application: bootstrap, return Flask app."""
    config = bootstrap()
    app = create_app(config)
    logger.info("Folder Share ready on %s:%s", config["FLASK_HOST"], config["FLASK_PORT"])
    return app


application = create_application()
