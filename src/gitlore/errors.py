"""Errors raised by gitlore operations."""

from typing import Any, Dict, Optional


class GitLoreError(Exception):
    """Base error carrying the repository path and the offending parameters."""

    kind = "error"

    def __init__(self, message: str, path: str = "", params: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.params = dict(params or {})

    def __str__(self) -> str:
        text = f"[{self.kind}] {self.message}"
        if self.path:
            text = f"[{self.kind}] {self.path}: {self.message}"
        if self.params:
            details = ", ".join(f"{key}={value!r}" for key, value in self.params.items())
            text = f"{text} ({details})"
        return text


class InvocationError(GitLoreError):
    """git could not be started or exited with a non-zero status."""

    kind = "invocation"

    def __init__(
        self,
        message: str,
        path: str = "",
        params: Optional[Dict[str, Any]] = None,
        status: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(message, path, params)
        self.status = status
        self.stderr = stderr


class ParseError(GitLoreError):
    """git succeeded but its output did not have the expected shape."""

    kind = "parse"


class NotFoundError(GitLoreError):
    """Something the caller asked for does not exist."""

    kind = "not_found"
