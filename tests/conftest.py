"""Shared fixtures: a scripted git runner and throwaway repositories."""

from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union

import pytest
from git import Actor, Repo

from gitlore.errors import InvocationError
from gitlore.runner import GitRunner

ALICE = Actor("Alice", "alice@example.com")


class FakeRunner(GitRunner):
    """GitRunner answering from a table of argv -> stdout instead of running git."""

    def __init__(self, outputs: Dict[Tuple[str, ...], Union[str, bytes, Exception]]):
        super().__init__()
        self.outputs = outputs
        self.calls: List[Tuple[str, Tuple[str, ...]]] = []

    def run(self, working_dir: str, args: Sequence[str]) -> bytes:
        key = tuple(args)
        self.calls.append((working_dir, key))
        if key not in self.outputs:
            raise InvocationError("unexpected command", path=working_dir, params={"args": list(args)}, status=128)
        output = self.outputs[key]
        if isinstance(output, Exception):
            raise output
        return output.encode("utf-8") if isinstance(output, str) else output


def commit_files(
    repo: Repo,
    files: Dict[str, Union[str, bytes, None]],
    message: str,
    author: Actor = ALICE,
    date: str = "2024-01-01T12:00:00",
):
    """Write (or delete, for None) files relative to the work tree and commit them."""
    root = Path(repo.working_dir)
    added, removed = [], []
    for name, content in files.items():
        path = root / name
        if content is None:
            removed.append(name)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        added.append(name)

    if removed:
        repo.index.remove(removed, working_tree=True)
    if added:
        repo.index.add(added)
    return repo.index.commit(
        message, author=author, committer=author, author_date=date, commit_date=date
    )


@pytest.fixture
def commit():
    return commit_files


@pytest.fixture
def fake_runner():
    return FakeRunner


@pytest.fixture
def temp_git_repo(tmp_path):
    """Create an empty temporary Git repository."""
    repo_path = tmp_path / "test_repo"
    repo_path.mkdir()
    return Repo.init(repo_path)
