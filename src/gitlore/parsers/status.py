"""Parser for --name-status output."""

from typing import List

from gitlore.errors import ParseError
from gitlore.models.base import FileStatusKind
from gitlore.models.files import FileStatusEntry

STATUS_FLAGS = {
    "A": FileStatusKind.ADDED,
    "D": FileStatusKind.DELETED,
    "M": FileStatusKind.MODIFIED,
    "R": FileStatusKind.RENAMED,
    "C": FileStatusKind.COPIED,
    "U": FileStatusKind.UPDATED,
}


def parse_status_flag(flag: str) -> FileStatusKind:
    """Map a status column such as "M" or "R086" to its kind."""
    return STATUS_FLAGS.get(flag[:1], FileStatusKind.UNKNOWN)


def parse_status_line(line: str) -> FileStatusEntry:
    """Parse `<flag><score>\\t<path>[\\t<new path>]`."""
    columns = line.rstrip("\r\n").split("\t")
    if len(columns) < 2 or not columns[1]:
        raise ParseError("Status line has no path", params={"line": line})

    status = parse_status_flag(columns[0].strip())
    message = ""
    if status in (FileStatusKind.RENAMED, FileStatusKind.COPIED) and len(columns) > 2:
        message = f"{columns[1]} => {columns[2]}"
    return FileStatusEntry(path=columns[1], status=status, message=message)


def parse_name_status(text: str) -> List[FileStatusEntry]:
    """Parse every non-empty line, keeping input order."""
    return [parse_status_line(line) for line in text.splitlines() if line.strip()]


def split_rename_message(message: str) -> List[str]:
    """Return [old, new] from a "<old> => <new>" message."""
    old, sep, new = message.partition(" => ")
    if not sep:
        raise ParseError("Not a rename message", params={"message": message})
    return [old.strip(), new.strip()]
