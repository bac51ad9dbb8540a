"""Types for daily contribution statistics."""

from dataclasses import dataclass, field
from typing import List

from .base import Author


@dataclass
class StatDailyContribute:
    """Daily series for one branch or one author.

    days, insertions, deletions and files_changed are parallel lists and
    always have the same length.
    """

    commit_count: int = 0
    days: List[str] = field(default_factory=list)
    insertions: List[int] = field(default_factory=list)
    deletions: List[int] = field(default_factory=list)
    files_changed: List[int] = field(default_factory=list)

    def record(self, day: str, files_changed: int, insertions: int, deletions: int) -> None:
        """Count one commit, merging it into the last day when the day matches."""
        self.commit_count += 1
        if self.days and self.days[-1] == day:
            self.files_changed[-1] += files_changed
            self.insertions[-1] += insertions
            self.deletions[-1] += deletions
        else:
            self.days.append(day)
            self.files_changed.append(files_changed)
            self.insertions.append(insertions)
            self.deletions.append(deletions)


@dataclass
class AuthorStatDailyContribute:
    author: Author
    stat: StatDailyContribute = field(default_factory=StatDailyContribute)


@dataclass
class BranchStatDailyContribute:
    branch_name: str
    total_stat: StatDailyContribute = field(default_factory=StatDailyContribute)
    author_stats: List[AuthorStatDailyContribute] = field(default_factory=list)
