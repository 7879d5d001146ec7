"""Flask blueprints for the web app. Each module exposes create_bp(storage)."""

from folder_share.web.routes.api import create_bp as create_api_bp
from folder_share.web.routes.pages import create_bp as create_pages_bp

__all__ = [
    "create_api_bp",
    "create_pages_bp",
]
