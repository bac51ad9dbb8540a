"""File tree, file status and file diff queries."""

from typing import Callable, List, Optional, Tuple

from loguru import logger

from gitlore.errors import ParseError
from gitlore.models.base import FileStatusKind
from gitlore.models.files import FileDiffContext, FileLineChangeStat, FileStatusEntry, RepoFileInfo
from gitlore.parsers.content import (
    BINARY_SENTINEL,
    DELETED_SENTINEL,
    count_lines,
    decode_content,
    is_binary,
)
from gitlore.parsers.shortstat import parse_shortstat
from gitlore.parsers.status import parse_name_status, split_rename_message
from gitlore.parsers.tree import LS_TREE_FORMAT, build_file_tree, parse_ls_tree
from gitlore.queries.common import bound_to, git_text, resolve_runner
from gitlore.runner import GitRunner


def get_repo_file_list(path: str, branch_or_hash: str, runner: Optional[GitRunner] = None) -> List[RepoFileInfo]:
    """Every file of a branch or commit as a nested tree."""
    output = git_text(runner, path, ["ls-tree", "-r", branch_or_hash, LS_TREE_FORMAT])
    with bound_to(path, ref=branch_or_hash):
        return build_file_tree(parse_ls_tree(output))


def _read_blob(runner: GitRunner, path: str, commit_hash: str, file_path: str) -> bytes:
    return runner.run(path, ["cat-file", "-p", f"{commit_hash}:{file_path}"])


def get_file_content(path: str, commit_hash: str, file_path: str, runner: Optional[GitRunner] = None) -> str:
    """Content of a file as of a commit."""
    return decode_content(_read_blob(resolve_runner(runner), path, commit_hash, file_path))


def get_file_status_at_commit(
    path: str, commit_hash: str, file_path: str, runner: Optional[GitRunner] = None
) -> FileStatusEntry:
    """How a commit changed one file."""
    output = git_text(runner, path, ["show", commit_hash, "--name-status", "--format=", "--", file_path])
    with bound_to(path, hash=commit_hash, file=file_path):
        entries = parse_name_status(output)
        if not entries:
            raise ParseError("No status found")
    return entries[0]


def get_files_status_between_commits(
    path: str, commit_hash1: str, commit_hash2: str, runner: Optional[GitRunner] = None
) -> List[FileStatusEntry]:
    output = git_text(runner, path, ["diff", "--name-status", commit_hash1, commit_hash2])
    with bound_to(path, hash1=commit_hash1, hash2=commit_hash2):
        return parse_name_status(output)


def _shortstat_change(
    runner: Optional[GitRunner], path: str, args: List[str], **params: str
) -> FileLineChangeStat:
    output = git_text(runner, path, args)
    with bound_to(path, **params):
        _, insertions, deletions = parse_shortstat(output)
    return FileLineChangeStat(additions=insertions, deletions=deletions)


def get_file_modify_stat_between_commits(
    path: str, commit_hash1: str, commit_hash2: str, file_path: str, runner: Optional[GitRunner] = None
) -> FileLineChangeStat:
    """Lines added and removed in one file between two commits.

    Raises:
        ParseError: git reported no change for the file.
    """
    return _shortstat_change(
        runner,
        path,
        ["diff", "--shortstat", f"{commit_hash1}...{commit_hash2}", "--", file_path],
        hash1=commit_hash1,
        hash2=commit_hash2,
        file=file_path,
    )


def get_diff_file_stat_between_commits(
    path: str,
    commit_hash1: str,
    commit_hash2: str,
    file_path1: str,
    file_path2: str,
    runner: Optional[GitRunner] = None,
) -> FileLineChangeStat:
    """Like get_file_modify_stat_between_commits for a file known under two paths."""
    return _shortstat_change(
        runner,
        path,
        ["diff", "--shortstat", f"{commit_hash1}...{commit_hash2}", "--", file_path1, file_path2],
        hash1=commit_hash1,
        hash2=commit_hash2,
        file1=file_path1,
        file2=file_path2,
    )


def _blob_text(runner: GitRunner, path: str, commit_hash: str, file_path: str) -> Tuple[str, bool]:
    blob = _read_blob(runner, path, commit_hash, file_path)
    if is_binary(blob):
        return BINARY_SENTINEL, True
    return decode_content(blob), False


def _build_diff_context(
    runner: GitRunner,
    path: str,
    commit_hash1: str,
    commit_hash2: str,
    entry: FileStatusEntry,
    change_stat: Callable[[str, str], FileLineChangeStat],
) -> FileDiffContext:
    """Fill both sides of one file according to its status.

    change_stat(old_path, new_path) supplies the line counts of modified and
    renamed files.
    """
    content1 = content2 = ""
    stat = FileLineChangeStat()

    if entry.status == FileStatusKind.ADDED:
        text, binary = _blob_text(runner, path, commit_hash2, entry.path)
        if binary:
            content1 = content2 = BINARY_SENTINEL
        else:
            content2 = text
            stat.additions = count_lines(text)

    elif entry.status == FileStatusKind.DELETED:
        text, binary = _blob_text(runner, path, commit_hash1, entry.path)
        content1 = text
        if not binary:
            stat.deletions = count_lines(text)
        content2 = DELETED_SENTINEL

    elif entry.status in (FileStatusKind.MODIFIED, FileStatusKind.RENAMED):
        old_path = new_path = entry.path
        if entry.status == FileStatusKind.RENAMED:
            with bound_to(path, file=entry.path):
                old_path, new_path = split_rename_message(entry.message)
        content1, _ = _blob_text(runner, path, commit_hash1, old_path)
        content2, _ = _blob_text(runner, path, commit_hash2, new_path)
        stat = change_stat(old_path, new_path)

    return FileDiffContext(
        hash1=commit_hash1,
        hash2=commit_hash2,
        path=entry.path,
        change_stat=stat,
        content1=content1,
        content2=content2,
        status=entry.status,
    )


def diff_file_context(
    repo: str, commit_hash1: str, commit_hash2: str, file_path: str, runner: Optional[GitRunner] = None
) -> FileDiffContext:
    """Both sides of one file between two commits.

    The status of the file is the one recorded by commit_hash2. A modified file
    whose content is identical in both commits gets a zero change stat.
    """
    runner = resolve_runner(runner)
    entry = get_file_status_at_commit(repo, commit_hash2, file_path, runner)

    def change_stat(old_path: str, new_path: str) -> FileLineChangeStat:
        if old_path != new_path:
            return get_diff_file_stat_between_commits(repo, commit_hash1, commit_hash2, old_path, new_path, runner)
        try:
            return _shortstat_change(
                runner,
                repo,
                ["diff", "--shortstat", commit_hash1, commit_hash2, "--", file_path],
                hash1=commit_hash1,
                hash2=commit_hash2,
                file=file_path,
            )
        except ParseError:
            logger.debug(f"No change in {file_path} between {commit_hash1} and {commit_hash2}")
            return FileLineChangeStat()

    return _build_diff_context(runner, repo, commit_hash1, commit_hash2, entry, change_stat)


def get_files_diff_context(
    repo: str, commit_hash1: str, commit_hash2: str, runner: Optional[GitRunner] = None
) -> List[FileDiffContext]:
    """Both sides of every file that differs between two commits."""
    runner = resolve_runner(runner)
    entries = get_files_status_between_commits(repo, commit_hash1, commit_hash2, runner)
    logger.info(f"Collecting diff context of {len(entries)} files between {commit_hash1} and {commit_hash2}")

    def change_stat(old_path: str, new_path: str) -> FileLineChangeStat:
        if old_path != new_path:
            return get_diff_file_stat_between_commits(repo, commit_hash1, commit_hash2, old_path, new_path, runner)
        return get_file_modify_stat_between_commits(repo, commit_hash1, commit_hash2, old_path, runner)

    return [
        _build_diff_context(runner, repo, commit_hash1, commit_hash2, entry, change_stat)
        for entry in entries
    ]
