#!/usr/bin/env python3
"""
examples/contribution_demo.py

Demonstrates gitlore by printing the daily contribution statistics and the
root commit of a branch, using the current directory's repository by default.
"""

import argparse
import os
import sys

from gitlore.errors import GitLoreError
from gitlore.queries.branches import get_branch_creation_info, get_current_branch_name
from gitlore.queries.commits import get_contribute_stat


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Show daily contributions of a branch")
    parser.add_argument(
        "--repo-path",
        type=str,
        default=os.getcwd(),
        help="Path to Git repository (default: current directory)",
    )
    parser.add_argument(
        "--branch",
        type=str,
        help="Branch to analyse (default: the checked-out branch)",
    )
    return parser.parse_args()


def format_series(stat) -> str:
    """Format one daily series as a table.

    Args:
        stat: StatDailyContribute to render

    Returns:
        One line per day with files changed, insertions and deletions
    """
    rows = [f"  {'day':<12}{'files':>7}{'+':>8}{'-':>8}"]
    for day, files, insertions, deletions in zip(
        stat.days, stat.files_changed, stat.insertions, stat.deletions
    ):
        rows.append(f"  {day:<12}{files:>7}{insertions:>8}{deletions:>8}")
    return "\n".join(rows)


def main():
    """Run the contribution demo."""
    args = parse_args()
    repo_path = args.repo_path

    try:
        branch = args.branch or get_current_branch_name(repo_path)
        created = get_branch_creation_info(repo_path, branch)
        stat = get_contribute_stat(repo_path, branch)
    except GitLoreError as e:
        print(f"Error reading repository: {e}", file=sys.stderr)
        return 1

    print(f"Branch {branch} starts at {created.commit_hash[:8]} by {created.author.name}")
    print(f"\n{stat.total_stat.commit_count} commits in total")
    print(format_series(stat.total_stat))

    for author_stat in stat.author_stats:
        print(f"\n{author_stat.author.name} <{author_stat.author.email}>: {author_stat.stat.commit_count} commits")
        print(format_series(author_stat.stat))

    return 0


if __name__ == "__main__":
    sys.exit(main())
