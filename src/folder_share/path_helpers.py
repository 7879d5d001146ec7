"""
Path safety helpers shared by the web layer and StorageManager.

Centralizes "path under storage root" checks so route handlers do not duplicate
normalize/containment logic. Every client-supplied path goes through
resolve_under_storage before any filesystem call; the storage root is always
passed in explicitly.
"""

import os
import posixpath
import re

from folder_share.constants import ARCHIVE_FALLBACK_NAME

_SEPARATORS = re.compile(r"[\\/]+")


def _segments(path: str) -> list[str]:
    return [s for s in _SEPARATORS.split(path) if s]


def storage_root(storage_path: str, resolve_symlinks: bool = False) -> str:
    """Return the normalized absolute form of storage_path (realpath when resolving symlinks)."""
    if resolve_symlinks:
        return os.path.realpath(storage_path)
    return os.path.normpath(os.path.abspath(storage_path))


def is_under_root(root: str, candidate: str) -> bool:
    """
    True when candidate equals root or root is an ancestor of candidate.

    Compares whole path segments via os.path.commonpath, so a sibling that only
    shares a string prefix (root /data/up, candidate /data/upload2) is outside.
    """
    try:
        return os.path.commonpath([root, candidate]) == root
    except ValueError:
        # Mixed absolute/relative paths or different drives.
        return False


def resolve_under_storage(
    storage_path: str, rel_path: str | None, resolve_symlinks: bool = False
) -> str | None:
    """
    Resolve an untrusted relative path under the storage root.

    Returns the storage root itself for None or "", the absolute path when the
    result stays inside the root, or None for anything else. Backslashes count
    as separators; any ".." segment or NUL byte is rejected before the path is
    normalized, and leading separators are stripped so "/etc" becomes "etc".
    Containment is checked per path segment, not by string prefix.

    With resolve_symlinks the candidate is realpath'd before the containment
    check; otherwise symlinks inside the root are trusted.

    Does not require the resolved path to exist.
    """
    if not storage_path:
        return None
    root = storage_root(storage_path, resolve_symlinks)
    if not rel_path:
        return root
    if "\x00" in rel_path:
        return None
    if ".." in _segments(rel_path):
        return None

    cleaned = posixpath.normpath(rel_path.replace("\\", "/")).lstrip("/")
    if ".." in _segments(cleaned):
        return None
    if cleaned in ("", "."):
        return root

    candidate = os.path.normpath(os.path.join(root, cleaned))
    if resolve_symlinks:
        candidate = os.path.realpath(candidate)
    if not is_under_root(root, candidate):
        return None
    return candidate


def resolve_entry_under_storage(
    storage_path: str, rel_path: str | None, resolve_symlinks: bool = False
) -> str | None:
    """
    Resolve a path naming a directory entry itself rather than what it points to.

    Same rules as resolve_under_storage, except that with resolve_symlinks only
    the parent directory is realpath'd; the final component stays as given, so
    a symlink resolves to the link, not its target. Used where the entry itself
    is operated on (delete).
    """
    lexical = resolve_under_storage(storage_path, rel_path)
    if lexical is None or not resolve_symlinks:
        return lexical
    root = storage_root(storage_path, resolve_symlinks)
    if lexical == storage_root(storage_path):
        return root
    parent = os.path.realpath(os.path.dirname(lexical))
    candidate = os.path.join(parent, os.path.basename(lexical))
    if not is_under_root(root, candidate):
        return None
    return candidate


def upload_filename(raw_name: str | None) -> str | None:
    """Reduce a client-supplied upload filename to its last segment; None if unusable.

    The name is kept byte-for-byte, including surrounding spaces.
    """
    if not raw_name or "\x00" in raw_name:
        return None
    parts = _segments(raw_name)
    if not parts:
        return None
    name = parts[-1]
    if name.strip() in ("", ".", ".."):
        return None
    return name


def archive_filename(folder_name: str) -> str:
    """
    Build the download filename for a folder archive.

    Keeps ASCII word characters, whitespace and hyphens, then collapses
    whitespace runs to underscores: "my report (final)!" -> "my_report_final.zip".
    """
    safe = re.sub(r"[^\w\s-]", "", folder_name, flags=re.ASCII)
    safe = re.sub(r"\s+", "_", safe, flags=re.ASCII)
    return f"{safe or ARCHIVE_FALLBACK_NAME}.zip"
