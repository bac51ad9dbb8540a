"""Invocation of the git executable.

GitRunner is the single place where gitlore starts processes. It hands the
argv to GitPython's command layer and returns raw stdout bytes, turning every
failure into an InvocationError.
"""

from typing import List, Optional, Sequence

from git import Git
from git.exc import CommandError
from loguru import logger

from gitlore.config import Settings, load_settings
from gitlore.errors import InvocationError

QUOTE_PATH_OFF = ["-c", "core.quotePath=false"]


class GitRunner:
    """Run git commands in a working directory and collect their output."""

    def __init__(self, program: str = "git", timeout: Optional[float] = None):
        self.program = program
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "GitRunner":
        settings = settings or load_settings()
        return cls(program=settings.git_executable, timeout=settings.timeout)

    def run(self, working_dir: str, args: Sequence[str]) -> bytes:
        """Run `<program> <args>` in working_dir and return stdout.

        Raises:
            InvocationError: git could not be started or exited non-zero.
        """
        # paths with non-ASCII bytes are printed verbatim instead of quoted
        command: List[str] = [self.program, *QUOTE_PATH_OFF, *args]
        logger.debug(f"Running {' '.join(command)} in {working_dir or '.'}")

        try:
            status, stdout, stderr = Git(working_dir or None).execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
                stdout_as_string=False,
                strip_newline_in_stdout=False,
                kill_after_timeout=self.timeout,
            )
        except (CommandError, OSError) as e:
            raise InvocationError(
                f"Failed to run {self.program}: {e}",
                path=working_dir,
                params={"args": list(args)},
            ) from e

        if status != 0:
            stderr_text = stderr.decode("utf-8", errors="replace") if isinstance(stderr, bytes) else str(stderr)
            raise InvocationError(
                f"{self.program} {' '.join(args)} exited with status {status}: {stderr_text.strip()}",
                path=working_dir,
                params={"args": list(args)},
                status=status,
                stderr=stderr_text,
            )
        return stdout

    def run_text(self, working_dir: str, args: Sequence[str]) -> str:
        """Like run(), decoding stdout as UTF-8 with replacement characters."""
        return self.run(working_dir, args).decode("utf-8", errors="replace")


_default_runner: Optional[GitRunner] = None


def default_runner() -> GitRunner:
    """Runner built from load_settings(), created on first use."""
    global _default_runner
    if _default_runner is None:
        _default_runner = GitRunner.from_settings()
    return _default_runner
