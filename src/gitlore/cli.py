"""Command line entry point: print repository data as JSON."""

import argparse
import dataclasses
import json
import os
import sys
from typing import Any, List, Optional

from loguru import logger

from gitlore.config import load_settings
from gitlore.errors import GitLoreError
from gitlore.queries.branches import get_branches
from gitlore.queries.commits import get_commit_file_status, get_contribute_stat
from gitlore.queries.files import get_files_diff_context, get_repo_file_list
from gitlore.queries.repository import (
    get_remotes,
    get_repository_info_full,
    get_repository_info_simple,
    is_git_repository,
)
from gitlore.runner import GitRunner


def to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, list):
        return [to_jsonable(item) for item in value]
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gitlore", description="Read repository history through git")
    parser.add_argument("--repo-path", type=str, help="Path to the Git repository", default=".")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("info", help="Full repository info")
    commands.add_parser("simple", help="Repository summary")
    commands.add_parser("branches", help="List branches")
    commands.add_parser("remotes", help="List remotes")

    tree = commands.add_parser("tree", help="File tree of a branch or commit")
    tree.add_argument("ref", nargs="?", default="HEAD")

    contrib = commands.add_parser("contrib", help="Daily contribution statistics of a branch")
    contrib.add_argument("branch", nargs="?", default="HEAD")

    status = commands.add_parser("status", help="Files changed by a commit")
    status.add_argument("hash")

    diff = commands.add_parser("diff", help="Diff context of every file between two commits")
    diff.add_argument("hash1")
    diff.add_argument("hash2")
    return parser


def run_command(args: argparse.Namespace, repo_path: str, runner: GitRunner) -> Any:
    if args.command == "info":
        return get_repository_info_full(repo_path, runner)
    if args.command == "simple":
        return get_repository_info_simple(repo_path, runner)
    if args.command == "branches":
        return get_branches(repo_path, runner)
    if args.command == "remotes":
        return get_remotes(repo_path, runner)
    if args.command == "tree":
        return get_repo_file_list(repo_path, args.ref, runner)
    if args.command == "contrib":
        return get_contribute_stat(repo_path, args.branch, runner)
    if args.command == "status":
        return get_commit_file_status(repo_path, args.hash, runner)
    return get_files_diff_context(repo_path, args.hash1, args.hash2, runner)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else settings.log_level)

    repo_path = os.path.abspath(args.repo_path)
    runner = GitRunner.from_settings(settings)
    if not is_git_repository(repo_path, runner):
        logger.error(f"Not a git repository: {repo_path}")
        return 1

    try:
        result = run_command(args, repo_path, runner)
    except GitLoreError as e:
        logger.error(str(e))
        return 1

    print(json.dumps(to_jsonable(result), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
