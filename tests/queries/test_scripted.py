"""Query tests against scripted git output: argv shapes and error handling."""

import pytest

from gitlore.errors import InvocationError, NotFoundError, ParseError
from gitlore.models.base import Author, FileStatusKind
from gitlore.parsers.contribution import CONTRIBUTION_FORMAT
from gitlore.parsers.protocol import FIELD_SEP, RECORD_SEP, build_format
from gitlore.parsers.tree import LS_TREE_FORMAT
from gitlore.queries.branches import (
    CREATION_PLACEHOLDERS,
    get_branch_creation_info,
    get_branches_creation_info,
)
from gitlore.queries.commits import get_commit_file_status, get_commit_log_format, get_contribute_stat
from gitlore.queries.files import (
    get_file_modify_stat_between_commits,
    get_files_diff_context,
    get_repo_file_list,
)
from gitlore.queries.repository import (
    get_branch_in_remote,
    get_remotes,
    get_repository_info_full,
    has_git,
    has_remote,
    is_committed,
    is_git_repository,
)

REPO = "/work/repo"
CREATION_FORMAT = build_format(CREATION_PLACEHOLDERS)


def _creation_output(name="Alice", email="alice@example.com", ts="1700000000", commit="abc"):
    return FIELD_SEP.join([name, email, ts, commit]) + RECORD_SEP


def test_has_git_true_and_false(fake_runner):
    assert has_git(fake_runner({("--version",): "git version 2.45.0\n"}))
    assert not has_git(fake_runner({}))


def test_is_git_repository(fake_runner):
    runner = fake_runner({("rev-parse", "--is-inside-work-tree"): "true\n"})
    assert is_git_repository(REPO, runner)
    assert runner.calls == [(REPO, ("rev-parse", "--is-inside-work-tree"))]
    assert not is_git_repository(REPO, fake_runner({}))


def test_is_committed(fake_runner):
    assert is_committed(REPO, fake_runner({("status", "--porcelain"): ""}))
    assert not is_committed(REPO, fake_runner({("status", "--porcelain"): " M a.txt\n"}))


def test_has_remote(fake_runner):
    assert has_remote(REPO, fake_runner({("remote", "show"): "origin\n"}))
    assert not has_remote(REPO, fake_runner({("remote", "show"): "\n"}))


def test_get_remotes(fake_runner):
    runner = fake_runner(
        {("remote", "-v"): "origin\thttps://example.com/r.git (fetch)\norigin\thttps://example.com/r.git (push)\n"}
    )
    [remote] = get_remotes(REPO, runner)
    assert remote.name == "origin"
    assert remote.operations == ["fetch", "push"]


def test_branch_without_remote_is_not_found(fake_runner):
    missing = InvocationError("exit 1", path=REPO, status=1)
    runner = fake_runner({("config", "--get", "branch.topic.remote"): missing})
    with pytest.raises(NotFoundError) as exc_info:
        get_branch_in_remote(REPO, "topic", runner)
    assert exc_info.value.path == REPO
    assert exc_info.value.params == {"branch": "topic"}


def test_branch_in_remote(fake_runner):
    runner = fake_runner({("config", "--get", "branch.main.remote"): "origin\n"})
    assert get_branch_in_remote(REPO, "main", runner) == "origin"


def test_branch_creation_info(fake_runner):
    runner = fake_runner(
        {("log", "main", "--reverse", "--max-parents=0", CREATION_FORMAT): _creation_output()}
    )
    info = get_branch_creation_info(REPO, "main", runner)
    assert info.branch_name == "main"
    assert info.author == Author("Alice", "alice@example.com")
    assert info.timestamp == "1700000000"
    assert info.commit_hash == "abc"


def test_branch_creation_info_without_commits(fake_runner):
    runner = fake_runner({("log", "main", "--reverse", "--max-parents=0", CREATION_FORMAT): ""})
    with pytest.raises(ParseError) as exc_info:
        get_branch_creation_info(REPO, "main", runner)
    assert exc_info.value.path == REPO
    assert exc_info.value.params["branch"] == "main"


def test_branches_creation_info_fails_fast(fake_runner):
    runner = fake_runner(
        {
            ("log", "main", "--reverse", "--max-parents=0", CREATION_FORMAT): _creation_output(),
            ("log", "dev", "--reverse", "--max-parents=0", CREATION_FORMAT): "broken output",
        }
    )
    with pytest.raises(ParseError):
        get_branches_creation_info(REPO, ["main", "dev", "never-reached"], runner)
    assert [call[1][1] for call in runner.calls] == ["main", "dev"]


def test_commit_log_format(fake_runner):
    log_format = build_format(["%h", "%s"])
    output = f"abc{FIELD_SEP}First  {RECORD_SEP}\ndef{FIELD_SEP}Second{RECORD_SEP}"
    runner = fake_runner({("log", "main", log_format): output})
    assert get_commit_log_format(REPO, "main", ["%h", "%s"], runner) == [
        {"hashS": "abc", "message": "First"},
        {"hashS": "def", "message": "Second"},
    ]


def test_commit_log_format_unknown_placeholder_runs_nothing(fake_runner):
    runner = fake_runner({})
    with pytest.raises(NotFoundError) as exc_info:
        get_commit_log_format(REPO, "main", ["%an", "%q"], runner)
    assert exc_info.value.path == REPO
    assert runner.calls == []


def test_commit_file_status(fake_runner):
    report_format = "--format=" + FIELD_SEP.join(["%H", "%s", "%an", "%ae", "%at"]) + RECORD_SEP
    output = (
        FIELD_SEP.join(["abc123", "Rename things", "Alice", "alice@example.com", "1700000000"])
        + RECORD_SEP
        + "\n\nR100\told.txt\tnew.txt\nM\tsrc/app.py\n"
    )
    runner = fake_runner({("show", "abc123", "--name-status", report_format): output})
    report = get_commit_file_status(REPO, "abc123", runner)
    assert report.title == "Rename things"
    assert report.commit_hash == "abc123"
    assert report.author == Author("Alice", "alice@example.com")
    assert [(e.status, e.message) for e in report.entries] == [
        (FileStatusKind.RENAMED, "old.txt => new.txt"),
        (FileStatusKind.MODIFIED, ""),
    ]


def test_contribute_stat_argv(fake_runner):
    output = (
        f"{RECORD_SEP}Alice{FIELD_SEP}alice@example.com{FIELD_SEP}2024-01-01\n\n"
        " 1 file changed, 3 insertions(+)\n"
    )
    runner = fake_runner({("log", "main", "--shortstat", CONTRIBUTION_FORMAT, "--reverse"): output})
    stat = get_contribute_stat(REPO, "main", runner)
    assert stat.total_stat.insertions == [3]
    assert stat.author_stats[0].author.name == "Alice"


def test_contribute_stat_with_unparseable_header(fake_runner):
    output = f"{RECORD_SEP}only-a-name\n\n 1 file changed, 3 insertions(+)\n"
    runner = fake_runner({("log", "main", "--shortstat", CONTRIBUTION_FORMAT, "--reverse"): output})
    with pytest.raises(ParseError):
        get_contribute_stat(REPO, "main", runner)


def test_repo_file_list_argv(fake_runner):
    output = FIELD_SEP.join(["100644", "blob", "h1", "4", "a/b.txt"]) + RECORD_SEP + "\n"
    runner = fake_runner({("ls-tree", "-r", "main", LS_TREE_FORMAT): output})
    [a] = get_repo_file_list(REPO, "main", runner)
    assert a.name == "a" and a.children[0].name == "b.txt"


def test_file_modify_stat(fake_runner):
    runner = fake_runner(
        {("diff", "--shortstat", "h1...h2", "--", "a.txt"): " 1 file changed, 4 insertions(+), 2 deletions(-)\n"}
    )
    stat = get_file_modify_stat_between_commits(REPO, "h1", "h2", "a.txt", runner)
    assert (stat.additions, stat.deletions) == (4, 2)


def test_file_modify_stat_without_changes(fake_runner):
    runner = fake_runner({("diff", "--shortstat", "h1...h2", "--", "a.txt"): ""})
    with pytest.raises(ParseError) as exc_info:
        get_file_modify_stat_between_commits(REPO, "h1", "h2", "a.txt", runner)
    assert exc_info.value.params["file"] == "a.txt"


def test_files_diff_context_rename_and_binary(fake_runner):
    runner = fake_runner(
        {
            ("diff", "--name-status", "h1", "h2"): "R090\told.py\tnew.py\nM\timg.png\n",
            ("cat-file", "-p", "h1:old.py"): "print(1)\n",
            ("cat-file", "-p", "h2:new.py"): "print(2)\n",
            ("diff", "--shortstat", "h1...h2", "--", "old.py", "new.py"): " 1 file changed, 1 insertion(+), 1 deletion(-)",
            ("cat-file", "-p", "h1:img.png"): b"\x89PNG\x00\x00",
            ("cat-file", "-p", "h2:img.png"): b"\x89PNG\x00\x01",
            ("diff", "--shortstat", "h1...h2", "--", "img.png"): " 1 file changed, 0 insertions(+), 0 deletions(-)",
        }
    )
    renamed, image = get_files_diff_context(REPO, "h1", "h2", runner)

    assert renamed.status == FileStatusKind.RENAMED
    assert (renamed.content1, renamed.content2) == ("print(1)\n", "print(2)\n")
    assert (renamed.change_stat.additions, renamed.change_stat.deletions) == (1, 1)

    assert image.status == FileStatusKind.MODIFIED
    assert image.content1 == image.content2 == "Binary file"


def test_files_diff_context_propagates_invocation_errors(fake_runner):
    runner = fake_runner({("diff", "--name-status", "h1", "h2"): "A\tmissing.txt\n"})
    with pytest.raises(InvocationError):
        get_files_diff_context(REPO, "h1", "h2", runner)


def test_repository_info_full_fails_fast(fake_runner):
    runner = fake_runner({("branch", "--all"): "* main\n"})
    with pytest.raises(InvocationError):
        get_repository_info_full(REPO, runner)
