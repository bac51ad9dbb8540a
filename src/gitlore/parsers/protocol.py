"""Delimiter protocol for machine-readable git output.

Two sentinel strings are woven into a pretty-print format: FIELD_SEP between
the placeholder values of one record and RECORD_SEP after each record. The
output is then split on RECORD_SEP and each record on FIELD_SEP.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence

from gitlore.errors import NotFoundError, ParseError

FIELD_SEP = "<<FIELD>>"
RECORD_SEP = "<<RECORD>>"

# Placeholder -> field name of the parsed record
FORMAT_KEYS: Mapping[str, str] = MappingProxyType(
    {
        "%H": "hashL",
        "%h": "hashS",
        "%T": "treeL",
        "%t": "treeS",
        "%P": "parentHashL",
        "%p": "parentHashS",
        "%an": "authorName",
        "%ae": "authorEmail",
        "%ad": "date",
        "%ar": "dateRelative",
        "%at": "dateTimeStamp",
        "%ai": "dateIso",
        "%as": "dateYMD",
        "%ah": "dateHuman",
        "%cn": "committerName",
        "%ce": "committerEmail",
        "%cd": "committerDate",
        "%cr": "committerDateRelative",
        "%ct": "committerDateTimeStamp",
        "%cs": "committerDateYMD",
        "%ch": "committerDateHuman",
        "%d": "refs",
        "%D": "refsComma",
        "%s": "message",
        "%b": "body",
        "%B": "bodyNoTrailingSlash",
        "%N": "notes",
    }
)


def field_names(placeholders: Sequence[str]) -> List[str]:
    """Map placeholders to their field names.

    Raises:
        NotFoundError: a placeholder is not in FORMAT_KEYS.
    """
    names = []
    for placeholder in placeholders:
        if placeholder not in FORMAT_KEYS:
            raise NotFoundError(
                f"Unknown placeholder {placeholder!r}", params={"placeholder": placeholder}
            )
        names.append(FORMAT_KEYS[placeholder])
    return names


def build_format(placeholders: Sequence[str], prefix: str = "--pretty=format:") -> str:
    """Build a format argument such as `--pretty=format:%an<<FIELD>>%ae<<RECORD>>`."""
    if not placeholders:
        raise ValueError("At least one placeholder is required")
    field_names(placeholders)
    return prefix + FIELD_SEP.join(placeholders) + RECORD_SEP


def split_records(text: str) -> List[str]:
    """Split output on RECORD_SEP.

    git puts a newline between entries, which is removed from the start of
    every record but the first. The empty piece after the final separator is
    dropped.
    """
    records = text.split(RECORD_SEP)
    if records and not records[-1].strip():
        records.pop()
    return [
        record[1:] if index and record.startswith("\n") else record
        for index, record in enumerate(records)
    ]


def split_fields(record: str, expected: int) -> List[str]:
    """Split one record on FIELD_SEP, insisting on exactly `expected` values."""
    values = record.split(FIELD_SEP)
    if len(values) != expected:
        raise ParseError(
            f"Expected {expected} fields but found {len(values)}",
            params={"record": record},
        )
    return values


def parse_records(text: str, placeholders: Sequence[str]) -> List[Dict[str, str]]:
    """Parse delimiter-protocol output into one dict per record."""
    names = field_names(placeholders)
    return [
        dict(zip(names, split_fields(record, len(names)))) for record in split_records(text)
    ]


def join_records(rows: Sequence[Sequence[str]]) -> str:
    """Render rows of values the way git renders a delimiter-protocol format."""
    return "\n".join(FIELD_SEP.join(values) + RECORD_SEP for values in rows)
