"""Types describing branches, remotes and whole repositories."""

from dataclasses import dataclass, field
from typing import List

from .base import Author


@dataclass
class BranchCreationInfo:
    """The root commit of a branch's history."""

    branch_name: str
    timestamp: str
    author: Author
    commit_hash: str


@dataclass
class Branch:
    """A branch with its creation info and distinct contributors."""

    name: str
    creation_info: BranchCreationInfo
    authors: List[Author] = field(default_factory=list)


@dataclass
class Remote:
    """A remote merged from every `remote -v` line sharing its name."""

    name: str
    url: str
    operations: List[str] = field(default_factory=list)


@dataclass
class RepositoryFull:
    name: str
    path: str
    current_branch: Branch
    branches: List[Branch] = field(default_factory=list)
    authors: List[Author] = field(default_factory=list)
    remotes: List[Remote] = field(default_factory=list)


@dataclass
class RepositorySimple:
    name: str
    path: str
    current_branch: str
    branches: List[str] = field(default_factory=list)
    authors: List[Author] = field(default_factory=list)
    remotes: List[Remote] = field(default_factory=list)
