"""Data models for directory listings."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DirectoryEntry:
    """One child of a listed directory."""

    name: str
    is_directory: bool

    def to_dict(self) -> dict:
        """JSON shape used by /api/folder (camelCase key kept for the browser client)."""
        return {"name": self.name, "isDirectory": self.is_directory}
