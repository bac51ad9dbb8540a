"""Base types used across gitlore."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Author:
    """A commit author. Equal and hashable on (name, email)."""

    name: str
    email: str


class FileStatusKind(str, Enum):
    """Status of a file as reported by --name-status."""

    ADDED = "Added"
    DELETED = "Deleted"
    MODIFIED = "Modified"
    RENAMED = "Renamed"
    COPIED = "Copied"
    UPDATED = "Updated"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value
