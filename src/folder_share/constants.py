"""
Shared constants for storage defaults, archive downloads, and logging.

Centralizes defaults so config loading, the storage manager and the routes
do not duplicate magic values.
"""

# Storage root used when neither config.yaml nor STORAGE_PATH sets one.
DEFAULT_STORAGE_PATH: str = "/app/uploads"

DEFAULT_FLASK_HOST: str = "0.0.0.0"
DEFAULT_FLASK_PORT: int = 5080

# Upload size limit (MB); mapped to Flask MAX_CONTENT_LENGTH.
DEFAULT_MAX_UPLOAD_MB: int = 512

# Folder archives are served with this MIME type.
ARCHIVE_MIMETYPE: str = "application/zip"

# Used when a folder name sanitizes to nothing (e.g. "!!!").
ARCHIVE_FALLBACK_NAME: str = "archive"

# Error buffer for /status: max number of recent ERROR/WARNING log entries.
ERROR_BUFFER_MAX_SIZE: int = 10

# Logger name shared by every module.
LOGGER_NAME: str = "folder-share"
