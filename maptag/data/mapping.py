"""Lookup-table construction from command output.

A regular expression with named capture groups is applied to each line of
the text. Every matching line becomes one row; every named group becomes
one column. Columns stay index-aligned, so the value at position *i* in
each column came from the same line::

    >>> m = build_mapping("web01 eu\\ndb01 us\\n", r"(?P<host>\\S+)\\s+(?P<region>\\S+)")
    >>> m.column("region")
    ('eu', 'us')
    >>> m.index_of("host", "db01")
    1
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

import pandas as pd

from ..core.exceptions import PatternCompileError


@dataclass(frozen=True)
class TagMapping:
    """Immutable, row-aligned lookup table keyed by capture-group name.

    Groups that never matched are absent; :meth:`column` returns an empty
    tuple for them.
    """

    columns: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {name: tuple(values) for name, values in self.columns.items()}
        lengths = {len(values) for values in frozen.values()}
        if len(lengths) > 1:
            raise ValueError(f"Mapping columns must have equal length, got {sorted(lengths)}")
        object.__setattr__(self, "columns", MappingProxyType(frozen))

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.columns.items())))

    @classmethod
    def empty(cls) -> TagMapping:
        return cls({})

    @property
    def groups(self) -> list[str]:
        """Group names present in the mapping."""
        return list(self.columns)

    def __len__(self) -> int:
        for values in self.columns.values():
            return len(values)
        return 0

    def __contains__(self, group: object) -> bool:
        return group in self.columns

    def column(self, group: str) -> tuple[str, ...]:
        return self.columns.get(group, ())

    def index_of(self, group: str, value: str) -> int:
        """Row index of the first *value* in *group*'s column, or -1."""
        for idx, candidate in enumerate(self.column(group)):
            if candidate == value:
                return idx
        return -1

    def row(self, index: int, exclude: Iterable[str] = ()) -> dict[str, str]:
        """Values at *index* for every group not listed in *exclude*."""
        skipped = set(exclude)
        return {
            name: values[index]
            for name, values in self.columns.items()
            if name not in skipped
        }

    def to_frame(self) -> pd.DataFrame:
        """Return the table as a DataFrame (one column per group)."""
        return pd.DataFrame({name: list(values) for name, values in self.columns.items()})


def compile_pattern(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    """Compile *pattern*, converting ``re.error`` into ``PatternCompileError``."""
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise PatternCompileError(f"Invalid regular expression: {exc}", pattern=pattern) from exc


def build_mapping(text: str, pattern: str | re.Pattern[str]) -> TagMapping:
    """Build a :class:`TagMapping` from *text* using *pattern*'s named groups.

    Lines are split on ``"\\n"``. Lines with no match are skipped. A
    named group that did not participate in a match contributes ``""``.
    Unnamed groups are ignored.

    Raises:
        PatternCompileError: If *pattern* is a string that does not compile.
    """
    regex = compile_pattern(pattern)
    group_ids = dict(regex.groupindex)

    columns: dict[str, list[str]] = {}
    for line in text.split("\n"):
        match = regex.search(line)
        if match is None:
            continue
        for name, group_id in group_ids.items():
            columns.setdefault(name, []).append(match.group(group_id) or "")

    return TagMapping(columns)
