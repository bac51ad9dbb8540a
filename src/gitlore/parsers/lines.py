"""Line-oriented parsers for branch, tag, shortlog and remote listings."""

import re
from typing import Dict, List

from gitlore.errors import ParseError
from gitlore.models.base import Author
from gitlore.models.repository import Remote

# "    12\tJane Doe <jane@example.com>"
SHORTLOG_RE = re.compile(r"^\s*(?P<count>\d+)\s+(?P<name>.*?)\s*<(?P<email>[^>]*)>\s*$")


def parse_branch_list(text: str) -> List[str]:
    """Branch names from `branch --all`, without the current-branch marker.

    Symbolic entries such as `remotes/origin/HEAD -> origin/main` keep their
    first token only.
    """
    branches = []
    for line in text.splitlines():
        line = line.lstrip("*").strip()
        if line:
            branches.append(line.split()[0])
    return branches


def parse_tag_list(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def parse_shortlog_line(line: str) -> Author:
    match = SHORTLOG_RE.match(line)
    if match is None:
        raise ParseError("Unrecognised shortlog line", params={"line": line})
    return Author(name=match.group("name"), email=match.group("email"))


def parse_shortlog(text: str, unique: bool = False) -> List[Author]:
    """Authors from `shortlog -sne` output, in output order.

    With unique=True repeated (name, email) pairs are collapsed onto their
    first occurrence.
    """
    authors = [parse_shortlog_line(line) for line in text.splitlines() if line.strip()]
    if unique:
        authors = list(dict.fromkeys(authors))
    return authors


def parse_remotes(text: str) -> List[Remote]:
    """Merge `remote -v` lines by remote name.

    The first URL seen for a name wins; operations are appended as found.
    """
    remotes: Dict[str, Remote] = {}
    for line in text.splitlines():
        parts = line.split()
        if not parts:
            continue
        if len(parts) < 3:
            raise ParseError("Unrecognised remote line", params={"line": line})

        name, url = parts[0], parts[1]
        operation = parts[2].strip("()")
        remote = remotes.get(name)
        if remote is None:
            remotes[name] = Remote(name=name, url=url, operations=[operation])
        else:
            remote.operations.append(operation)
    return list(remotes.values())
