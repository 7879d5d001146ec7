"""Storage operations: listing, folder creation, uploads, archives, deletion."""

import io
import logging
import os
import shutil
import zipfile

from folder_share.constants import LOGGER_NAME
from folder_share.models import DirectoryEntry
from folder_share.path_helpers import (
    is_under_root,
    resolve_entry_under_storage,
    resolve_under_storage,
    storage_root,
)

logger = logging.getLogger(LOGGER_NAME)


class StorageManager:
    """Filesystem operations confined to one storage root.

    Methods other than resolve() take absolute paths already produced by
    resolve(); each re-checks containment and raises ValueError for paths
    outside the root. Filesystem failures propagate as OSError.
    """

    def __init__(self, storage_path: str, resolve_symlinks: bool = False):
        self.resolve_symlinks = resolve_symlinks

        # Ensure storage directory exists
        os.makedirs(storage_path, exist_ok=True)
        self.storage_path = storage_root(storage_path, resolve_symlinks)
        logger.info(f"StorageManager initialized: {self.storage_path}")
        logger.debug(f"Resolve symlinks: {resolve_symlinks}")

    def resolve(self, rel_path: str | None) -> str | None:
        """Resolve a client path under the storage root; None when invalid."""
        resolved = resolve_under_storage(self.storage_path, rel_path, self.resolve_symlinks)
        if resolved is None:
            logger.warning(f"Rejected path outside storage: {rel_path!r}")
        return resolved

    def resolve_entry(self, rel_path: str | None) -> str | None:
        """Like resolve(), but a trailing symlink names the link itself, not its target."""
        resolved = resolve_entry_under_storage(self.storage_path, rel_path, self.resolve_symlinks)
        if resolved is None:
            logger.warning(f"Rejected path outside storage: {rel_path!r}")
        return resolved

    def _check_inside(self, path: str) -> None:
        if not is_under_root(self.storage_path, os.path.normpath(path)):
            raise ValueError(f"Invalid path: {path}")

    def is_root(self, path: str) -> bool:
        return os.path.normpath(path) == self.storage_path

    def relative(self, path: str) -> str:
        """Path relative to the storage root using forward slashes; "" for the root."""
        self._check_inside(path)
        rel = os.path.relpath(path, self.storage_path)
        return "" if rel == "." else rel.replace(os.sep, "/")

    def parent_relative(self, path: str) -> str:
        """Parent folder of path relative to the root; "" when the parent is the root."""
        parent = os.path.dirname(self.relative(path))
        return "" if parent in ("", ".") else parent

    def list_directory(self, path: str) -> list[DirectoryEntry]:
        """Snapshot of the children of path in filesystem order.

        Raises OSError when path is missing, unreadable or not a directory.
        """
        self._check_inside(path)
        with os.scandir(path) as it:
            return [DirectoryEntry(name=e.name, is_directory=e.is_dir()) for e in it]

    def create_folder(self, path: str) -> None:
        """Create path and any missing parents; existing folders are left alone."""
        self._check_inside(path)
        if os.path.isdir(path):
            logger.debug(f"Folder already exists: {self.relative(path)}")
            return
        os.makedirs(path, exist_ok=True)
        logger.info(f"Created folder: {self.relative(path)}")

    def save_upload(self, file_storage, dest_path: str) -> None:
        """Write an uploaded werkzeug FileStorage to dest_path, replacing any existing file."""
        self._check_inside(dest_path)
        if self.is_root(dest_path) or os.path.isdir(dest_path):
            raise IsADirectoryError(f"Upload target is a directory: {dest_path}")
        file_storage.save(dest_path)
        logger.info(f"Uploaded file: {self.relative(dest_path)}")

    def build_folder_archive(self, path: str) -> io.BytesIO:
        """Zip the folder at path into memory.

        Entry names are prefixed with the folder's own name; directories get
        their own entries so empty folders survive extraction.
        """
        self._check_inside(path)
        if not os.path.isdir(path):
            raise NotADirectoryError(path)
        prefix = os.path.basename(os.path.normpath(path)) or "archive"
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
            zf.write(path, prefix)
            for root, dirs, files in os.walk(path):
                dirs.sort()
                for name in dirs + sorted(files):
                    abspath = os.path.join(root, name)
                    if not os.path.exists(abspath):
                        logger.warning(f"Skipping dangling symlink in archive: {self.relative(abspath)}")
                        continue
                    zf.write(abspath, self._arcname(prefix, path, abspath))
        buf.seek(0)
        logger.debug(f"Built archive for {self.relative(path)} ({buf.getbuffer().nbytes} bytes)")
        return buf

    @staticmethod
    def _arcname(prefix: str, base: str, abspath: str) -> str:
        rel = os.path.relpath(abspath, base).replace(os.sep, "/")
        return f"{prefix}/{rel}"

    def delete_entry(self, path: str) -> None:
        """Remove a file, symlink or directory tree. The storage root itself is refused."""
        self._check_inside(path)
        if self.is_root(path):
            raise ValueError("Refusing to delete storage root")
        rel = self.relative(path)
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
        logger.info(f"Deleted: {rel}")
