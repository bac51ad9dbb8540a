"""Commit log, commit file status and contribution queries."""

from typing import Dict, List, Optional, Sequence

from loguru import logger

from gitlore.errors import ParseError
from gitlore.models.base import Author
from gitlore.models.files import FileStatusReport
from gitlore.models.stat import BranchStatDailyContribute
from gitlore.parsers.contribution import (
    CONTRIBUTION_FORMAT,
    aggregate_daily_contributions,
    parse_shortstat_log,
)
from gitlore.parsers.protocol import FIELD_SEP, RECORD_SEP, build_format, parse_records, split_fields
from gitlore.parsers.status import parse_name_status
from gitlore.queries.common import bound_to, git_text
from gitlore.runner import GitRunner

REPORT_PLACEHOLDERS = ["%H", "%s", "%an", "%ae", "%at"]


def get_commit_log_format(
    path: str, branch: str, placeholders: Sequence[str], runner: Optional[GitRunner] = None
) -> List[Dict[str, str]]:
    """Commit log of a branch with the requested placeholders.

    Each commit becomes a dict keyed by the field name of each placeholder
    (see gitlore.parsers.protocol.FORMAT_KEYS), values stripped of surrounding
    whitespace.

    Args:
        path: Path to the repository.
        branch: Branch, tag or commit to start the log from.
        placeholders: Pretty-format placeholders such as "%H" or "%an".

    Raises:
        NotFoundError: a placeholder is unknown.
        ParseError: a record does not hold one value per placeholder.
    """
    with bound_to(path, branch=branch):
        log_format = build_format(placeholders)
    output = git_text(runner, path, ["log", branch, log_format])
    with bound_to(path, branch=branch):
        records = parse_records(output, placeholders)
    return [{key: value.strip() for key, value in record.items()} for record in records]


def get_commit_file_status(path: str, commit_hash: str, runner: Optional[GitRunner] = None) -> FileStatusReport:
    """Header of a commit and the status of each file it changed."""
    report_format = "--format=" + FIELD_SEP.join(REPORT_PLACEHOLDERS) + RECORD_SEP
    output = git_text(runner, path, ["show", commit_hash, "--name-status", report_format])

    with bound_to(path, hash=commit_hash):
        header, sep, body = output.partition(RECORD_SEP)
        if not sep:
            raise ParseError("Commit header not found")
        commit, title, name, email, timestamp = split_fields(header.strip("\n"), len(REPORT_PLACEHOLDERS))
        entries = parse_name_status(body)

    return FileStatusReport(
        title=title,
        commit_hash=commit,
        timestamp=timestamp,
        author=Author(name=name, email=email),
        entries=entries,
    )


def get_contribute_stat(path: str, branch: str, runner: Optional[GitRunner] = None) -> BranchStatDailyContribute:
    """Daily insertions, deletions and changed files of a branch, in total and per author."""
    output = git_text(runner, path, ["log", branch, "--shortstat", CONTRIBUTION_FORMAT, "--reverse"])
    with bound_to(path, branch=branch):
        observations = parse_shortstat_log(output)

    stat = aggregate_daily_contributions(observations, branch_name=branch)
    logger.info(
        f"{branch}: {stat.total_stat.commit_count} commits over {len(stat.total_stat.days)} days "
        f"by {len(stat.author_stats)} authors"
    )
    return stat
