"""Parser for git's one-line change summary.

    3 files changed, 10 insertions(+), 4 deletions(-)
    1 file changed, 2 deletions(-)
"""

import re

from gitlore.errors import ParseError
from gitlore.models.files import ShortStat

FILES_CHANGED_RE = re.compile(r"(\d+) files? changed")
COUNT_RE = re.compile(r"(\d+) (insertion|deletion)s?\([+-]\)")


def parse_shortstat(text: str) -> ShortStat:
    """Extract (files changed, insertions, deletions) from a shortstat line.

    Insertions and deletions are optional and recognised by their wording, not
    their position. Missing counts are 0.

    Raises:
        ParseError: there is no "N files changed" clause, i.e. no changes were
            detected.
    """
    match = FILES_CHANGED_RE.search(text)
    if match is None:
        raise ParseError("No changes detected", params={"text": text.strip()})

    counts = {"insertion": 0, "deletion": 0}
    for number, word in COUNT_RE.findall(text[match.end():]):
        counts[word] = int(number)

    return ShortStat(int(match.group(1)), counts["insertion"], counts["deletion"])


def is_shortstat_line(line: str) -> bool:
    return FILES_CHANGED_RE.search(line) is not None
