"""Types for file listings, file statuses and file diffs."""

from dataclasses import dataclass, field
from typing import List, NamedTuple

from .base import Author, FileStatusKind


class ShortStat(NamedTuple):
    """Counts from a single shortstat summary line."""

    files_changed: int
    insertions: int
    deletions: int


@dataclass
class FileStatusEntry:
    """One line of --name-status output."""

    path: str
    status: FileStatusKind
    message: str = ""  # "<old> => <new>" for renames and copies


@dataclass
class FileStatusReport:
    """A commit header together with the status of every file it touched."""

    title: str
    commit_hash: str
    timestamp: str
    author: Author
    entries: List[FileStatusEntry] = field(default_factory=list)


@dataclass
class FileLineChangeStat:
    additions: int = 0
    deletions: int = 0

    def __str__(self) -> str:
        return f"Addition: {self.additions}, Deletion: {self.deletions}"


@dataclass
class FileDiffContext:
    """Both sides of a file between two commits.

    content1 and content2 hold the raw text of each side, "Binary file" when
    that side is binary, "File deleted" for the new side of a deleted file, or
    an empty string when the side does not apply.
    """

    hash1: str
    hash2: str
    path: str
    change_stat: FileLineChangeStat
    content1: str
    content2: str
    status: FileStatusKind


@dataclass
class RepoFileInfo:
    """A node of the repository file tree.

    Directory nodes created for intermediate path segments leave the object
    fields empty. Children are kept in insertion order.
    """

    name: str
    parent_dir: str
    object_mode: str = ""
    object_type: str = ""
    object_hash: str = ""
    object_size: str = ""
    is_dir: bool = False
    children: List["RepoFileInfo"] = field(default_factory=list)
