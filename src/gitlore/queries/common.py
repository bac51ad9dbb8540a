"""Helpers shared by the query modules."""

from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence

from gitlore.errors import NotFoundError, ParseError
from gitlore.runner import GitRunner, default_runner


def resolve_runner(runner: Optional[GitRunner]) -> GitRunner:
    return runner if runner is not None else default_runner()


def git_text(runner: Optional[GitRunner], path: str, args: Sequence[str]) -> str:
    """Run git in path and return decoded stdout."""
    return resolve_runner(runner).run_text(path, args)


@contextmanager
def bound_to(path: str, **params: Any) -> Iterator[None]:
    """Attach the repository path and call parameters to parse errors raised inside."""
    try:
        yield
    except (ParseError, NotFoundError) as e:
        raise e.__class__(e.message, path=path, params={**params, **e.params}) from e
