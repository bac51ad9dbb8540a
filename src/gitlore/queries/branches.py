"""Branch and author queries."""

from typing import List, Optional, Sequence

from gitlore.errors import ParseError
from gitlore.models.base import Author
from gitlore.models.repository import Branch, BranchCreationInfo
from gitlore.parsers.lines import parse_branch_list, parse_shortlog
from gitlore.parsers.protocol import build_format, parse_records
from gitlore.queries.common import bound_to, git_text, resolve_runner
from gitlore.runner import GitRunner

CREATION_PLACEHOLDERS = ["%an", "%ae", "%at", "%H"]


def get_branches(path: str, runner: Optional[GitRunner] = None) -> List[str]:
    """Local and remote-tracking branch names, in the order git lists them."""
    return parse_branch_list(git_text(runner, path, ["branch", "--all"]))


def get_current_branch_name(path: str, runner: Optional[GitRunner] = None) -> str:
    return git_text(runner, path, ["rev-parse", "--abbrev-ref", "HEAD"]).strip()


def get_current_branch(path: str, runner: Optional[GitRunner] = None) -> Branch:
    """The checked-out branch with its authors and creation info."""
    runner = resolve_runner(runner)
    name = get_current_branch_name(path, runner)
    return Branch(
        name=name,
        creation_info=get_branch_creation_info(path, name, runner),
        authors=get_branch_authors(path, name, runner),
    )


def get_branch_authors(path: str, branch: str, runner: Optional[GitRunner] = None) -> List[Author]:
    """Contributors of a branch in shortlog order (most commits first)."""
    output = git_text(runner, path, ["shortlog", branch, "-sne"])
    with bound_to(path, branch=branch):
        return parse_shortlog(output)


def get_all_authors(path: str, runner: Optional[GitRunner] = None) -> List[Author]:
    """Distinct (name, email) authors across all refs."""
    output = git_text(runner, path, ["shortlog", "-sne", "--all"])
    with bound_to(path):
        return parse_shortlog(output, unique=True)


def get_branch_creation_info(
    path: str, branch: str, runner: Optional[GitRunner] = None
) -> BranchCreationInfo:
    """The root commit of a branch: the oldest commit without a parent."""
    output = git_text(
        runner,
        path,
        ["log", branch, "--reverse", "--max-parents=0", build_format(CREATION_PLACEHOLDERS)],
    )
    with bound_to(path, branch=branch):
        records = parse_records(output, CREATION_PLACEHOLDERS)
        if not records:
            raise ParseError("Branch has no root commit")

    root = {key: value.strip() for key, value in records[0].items()}
    return BranchCreationInfo(
        branch_name=branch,
        timestamp=root["dateTimeStamp"],
        author=Author(name=root["authorName"], email=root["authorEmail"]),
        commit_hash=root["hashL"],
    )


def get_branches_creation_info(
    path: str, branches: Sequence[str], runner: Optional[GitRunner] = None
) -> List[BranchCreationInfo]:
    """Creation info of several branches; fails on the first branch that errors."""
    runner = resolve_runner(runner)
    return [get_branch_creation_info(path, branch, runner) for branch in branches]
