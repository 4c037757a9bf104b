"""Delimited-list splitting shared by every string parser.

Splitting never drops empty tokens: ``""`` yields one empty entry, and a
trailing delimiter yields a trailing empty entry. Each parser decides
whether an empty entry is skipped or rejected.

Examples:
    >>> [e.parts for e in split_delimited("a=1,b=2")]
    [['a', '1'], ['b', '2']]
    >>> [e.raw for e in split_delimited("")]
    ['']
    >>> [e.parts for e in split_delimited("org/repo", sub_delimiter="/")]
    [['org', 'repo']]
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

FIELD_DELIMITER = ","
SUB_FIELD_DELIMITER = "="


class Entry(NamedTuple):
    """One outer token with its position and sub-field split."""

    offset: int
    raw: str
    parts: list[str]

    @property
    def is_empty(self) -> bool:
        return self.raw == ""

    @property
    def is_pair(self) -> bool:
        """True when the token split into exactly two parts."""
        return len(self.parts) == 2


def split_delimited(
    raw: str,
    field_delimiter: str = FIELD_DELIMITER,
    sub_delimiter: str | None = SUB_FIELD_DELIMITER,
) -> Iterator[Entry]:
    """Lazily split *raw* into entries, then split each entry on *sub_delimiter*.

    With ``sub_delimiter=None`` each entry's parts are just ``[token]``.
    """
    for offset, token in enumerate(raw.split(field_delimiter)):
        parts = token.split(sub_delimiter) if sub_delimiter is not None else [token]
        yield Entry(offset, token, parts)
