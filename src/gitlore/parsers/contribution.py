"""Daily contribution statistics.

The aggregator folds per-commit change counts, oldest commit first, into
one daily series for the whole branch and one per author. Authors are keyed by
name only, so one person committing under several emails is counted once
(and two people sharing a name are merged). Several commits on the same day
are summed into a single day entry.
"""

from typing import Dict, Iterable, List, NamedTuple

from loguru import logger

from gitlore.models.base import Author
from gitlore.models.stat import (
    AuthorStatDailyContribute,
    BranchStatDailyContribute,
    StatDailyContribute,
)
from gitlore.parsers.protocol import FIELD_SEP, RECORD_SEP, split_fields
from gitlore.parsers.shortstat import is_shortstat_line, parse_shortstat

CONTRIBUTION_PLACEHOLDERS = ["%an", "%ae", "%as"]

# The record separator leads each commit so that the --shortstat lines git
# prints after the header stay inside the same record.
CONTRIBUTION_FORMAT = "--pretty=format:" + RECORD_SEP + FIELD_SEP.join(CONTRIBUTION_PLACEHOLDERS)


class Observation(NamedTuple):
    """Change counts of one commit."""

    author_name: str
    author_email: str
    day: str
    files_changed: int
    insertions: int
    deletions: int


class ContributionAggregator:
    """Accumulates observations into total and per-author daily series."""

    def __init__(self, branch_name: str = ""):
        self.branch_name = branch_name
        self.total = StatDailyContribute()
        self._authors: Dict[str, AuthorStatDailyContribute] = {}

    def add(self, observation: Observation) -> None:
        author_stat = self._authors.get(observation.author_name)
        if author_stat is None:
            author_stat = AuthorStatDailyContribute(
                author=Author(name=observation.author_name, email=observation.author_email)
            )
            self._authors[observation.author_name] = author_stat

        counts = (observation.files_changed, observation.insertions, observation.deletions)
        author_stat.stat.record(observation.day, *counts)
        self.total.record(observation.day, *counts)

    def result(self) -> BranchStatDailyContribute:
        return BranchStatDailyContribute(
            branch_name=self.branch_name,
            total_stat=self.total,
            author_stats=list(self._authors.values()),
        )


def aggregate_daily_contributions(
    observations: Iterable[Observation], branch_name: str = ""
) -> BranchStatDailyContribute:
    """Fold observations (oldest first) into a BranchStatDailyContribute."""
    aggregator = ContributionAggregator(branch_name)
    for observation in observations:
        aggregator.add(observation)
    return aggregator.result()


def parse_shortstat_log(text: str) -> List[Observation]:
    """Parse `log --shortstat` output produced with CONTRIBUTION_FORMAT.

    Each chunk is a header line followed by an optional shortstat line.
    Commits without one (merges, empty commits) carry no counts and are
    skipped.
    """
    observations = []
    for chunk in text.split(RECORD_SEP):
        lines = [line for line in chunk.splitlines() if line.strip()]
        if not lines:
            continue

        name, email, day = split_fields(lines[0], len(CONTRIBUTION_PLACEHOLDERS))
        stat_line = next((line for line in lines[1:] if is_shortstat_line(line)), None)
        if stat_line is None:
            logger.debug(f"Skipping commit by {name} on {day} without a shortstat line")
            continue

        files_changed, insertions, deletions = parse_shortstat(stat_line)
        observations.append(Observation(name, email, day, files_changed, insertions, deletions))
    return observations
