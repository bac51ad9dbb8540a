"""Repository-level queries and the composite repository info operations."""

import os
from typing import List, Optional

from loguru import logger

from gitlore.errors import InvocationError, NotFoundError
from gitlore.models.repository import Branch, Remote, RepositoryFull, RepositorySimple
from gitlore.parsers.lines import parse_remotes, parse_tag_list
from gitlore.queries.branches import (
    get_all_authors,
    get_branch_authors,
    get_branch_creation_info,
    get_branches,
    get_current_branch,
    get_current_branch_name,
)
from gitlore.queries.common import bound_to, git_text, resolve_runner
from gitlore.runner import GitRunner


def has_git(runner: Optional[GitRunner] = None) -> bool:
    """Check that the git executable can be run."""
    try:
        git_text(runner, "", ["--version"])
    except InvocationError as e:
        logger.debug(f"git is not available: {e}")
        return False
    return True


def is_git_repository(path: str, runner: Optional[GitRunner] = None) -> bool:
    """Check whether path is inside a git work tree."""
    try:
        output = git_text(runner, path, ["rev-parse", "--is-inside-work-tree"])
    except InvocationError:
        return False
    return output.strip() == "true"


def is_committed(path: str, runner: Optional[GitRunner] = None) -> bool:
    """True when the work tree has nothing to commit."""
    return git_text(runner, path, ["status", "--porcelain"]).strip() == ""


def get_tags(path: str, runner: Optional[GitRunner] = None) -> List[str]:
    return parse_tag_list(git_text(runner, path, ["tag"]))


def has_remote(path: str, runner: Optional[GitRunner] = None) -> bool:
    return git_text(runner, path, ["remote", "show"]).strip() != ""


def get_remotes(path: str, runner: Optional[GitRunner] = None) -> List[Remote]:
    """All remotes, each with the operations (fetch, push) it is configured for."""
    output = git_text(runner, path, ["remote", "-v"])
    with bound_to(path):
        return parse_remotes(output)


def get_branch_in_remote(path: str, branch: str, runner: Optional[GitRunner] = None) -> str:
    """Name of the remote a branch tracks.

    Raises:
        NotFoundError: the branch has no configured remote.
    """
    key = f"branch.{branch}.remote"
    try:
        output = git_text(runner, path, ["config", "--get", key])
    except InvocationError as e:
        # git config exits with 1 when the key is not set
        if e.status == 1:
            raise NotFoundError(
                f"Branch {branch!r} has no remote", path=path, params={"branch": branch}
            ) from e
        raise
    return output.strip()


def get_repository_name(path: str) -> str:
    """Base name of the repository directory, or "" when there is none."""
    return os.path.basename(os.path.normpath(path)) if path else ""


def get_repository_info_full(path: str, runner: Optional[GitRunner] = None) -> RepositoryFull:
    """Everything about a repository, including every branch's authors and root commit.

    Sub-queries run one after another; the first failure aborts the whole call.
    """
    runner = resolve_runner(runner)
    logger.info(f"Collecting repository info for {path}")

    branch_names = get_branches(path, runner)
    authors = get_all_authors(path, runner)
    current_branch = get_current_branch(path, runner)

    branches = []
    for name in branch_names:
        branches.append(
            Branch(
                name=name,
                creation_info=get_branch_creation_info(path, name, runner),
                authors=get_branch_authors(path, name, runner),
            )
        )

    remotes = get_remotes(path, runner)
    logger.info(f"Found {len(branches)} branches, {len(authors)} authors and {len(remotes)} remotes")

    return RepositoryFull(
        name=get_repository_name(path),
        path=path,
        current_branch=current_branch,
        branches=branches,
        authors=authors,
        remotes=remotes,
    )


def get_repository_info_simple(path: str, runner: Optional[GitRunner] = None) -> RepositorySimple:
    """Branch names, current branch, authors and remotes of a repository."""
    runner = resolve_runner(runner)
    branches = get_branches(path, runner)
    current_branch = get_current_branch_name(path, runner)
    authors = get_all_authors(path, runner)
    remotes = get_remotes(path, runner)

    return RepositorySimple(
        name=get_repository_name(path),
        path=path,
        current_branch=current_branch,
        branches=branches,
        authors=authors,
        remotes=remotes,
    )
