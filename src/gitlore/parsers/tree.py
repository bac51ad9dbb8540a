"""Rebuild a nested file tree from the flat listing of `ls-tree -r`."""

from typing import Iterable, List, NamedTuple

from gitlore.models.files import RepoFileInfo
from gitlore.parsers.protocol import FIELD_SEP, RECORD_SEP, split_fields, split_records

ROOT_DIR = "./"

# objectmode values:
#   040000 directory
#   100644 regular file, 100755 executable, 120000 symlink, 160000 gitlink
DIRECTORY_MODE = "040000"

LS_TREE_FORMAT = "--format=" + FIELD_SEP.join(
    ["%(objectmode)", "%(objecttype)", "%(objectname)", "%(objectsize)", "%(path)"]
) + RECORD_SEP


class TreeEntry(NamedTuple):
    mode: str
    type: str
    hash: str
    size: str
    path: str


def parse_ls_tree(text: str) -> List[TreeEntry]:
    """Parse `ls-tree --format=LS_TREE_FORMAT` output into entries."""
    entries = []
    for record in split_records(text):
        mode, object_type, object_hash, size, path = split_fields(record.strip("\n"), 5)
        entries.append(TreeEntry(mode, object_type, object_hash, size.strip(), path))
    return entries


def _is_directory_mode(mode: str) -> bool:
    return mode.startswith(DIRECTORY_MODE)


def insert_entry(roots: List[RepoFileInfo], entry: TreeEntry) -> None:
    """Insert one entry below roots, creating directory nodes along its path.

    Each segment is looked up among the current children by a linear scan for a
    directory of that name. Only the node of the last segment gets the object
    fields; it is a directory only when its mode says so.
    """
    segments = entry.path.split("/")
    children = roots
    last = len(segments) - 1

    for i, segment in enumerate(segments):
        existing = next((node for node in children if node.is_dir and node.name == segment), None)
        if existing is not None:
            children = existing.children
            continue

        is_last = i == last
        node = RepoFileInfo(
            name=segment,
            parent_dir="/".join(segments[:i]) if i else ROOT_DIR,
            is_dir=not is_last or _is_directory_mode(entry.mode),
        )
        if is_last:
            node.object_mode = entry.mode
            node.object_type = entry.type
            node.object_hash = entry.hash
            node.object_size = entry.size
        children.append(node)
        if node.is_dir:
            children = node.children


def build_file_tree(entries: Iterable[TreeEntry]) -> List[RepoFileInfo]:
    """Build the root-level node list from (mode, type, hash, size, path) entries."""
    roots: List[RepoFileInfo] = []
    for entry in entries:
        entry = TreeEntry(*entry)
        if "/" in entry.path:
            insert_entry(roots, entry)
        else:
            roots.append(
                RepoFileInfo(
                    name=entry.path,
                    parent_dir=ROOT_DIR,
                    object_mode=entry.mode,
                    object_type=entry.type,
                    object_hash=entry.hash,
                    object_size=entry.size,
                    is_dir=_is_directory_mode(entry.mode),
                )
            )
    return roots
