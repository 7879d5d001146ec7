"""Manager modules for storage operations."""

from folder_share.managers.storage import StorageManager

__all__ = [
    "StorageManager",
]
