"""Tests for build_mapping and TagMapping."""

from __future__ import annotations

import re

import pandas as pd
import pytest

from maptag.core.exceptions import PatternCompileError
from maptag.data.mapping import TagMapping, build_mapping, compile_pattern

PATTERN = r"(?P<first>\S+)\s+(?P<newtag>\S+)"

# -- build_mapping -----------------------------------------------------------


class TestBuildMapping:
    def test_single_line(self):
        m = build_mapping("valueone somevalue", PATTERN)
        assert m.column("first") == ("valueone",)
        assert m.column("newtag") == ("somevalue",)

    def test_rows_stay_aligned(self):
        text = "web01 eu\ndb01 us\ncache01 ap\n"
        m = build_mapping(text, PATTERN)

        assert len(m) == 3
        for i, host in enumerate(m.column("first")):
            assert m.row(i)["first"] == host
        assert m.row(1) == {"first": "db01", "newtag": "us"}

    def test_column_lengths_equal_matching_line_count(self):
        text = "a 1\nnot-a-match\nb 2\n\nc 3"
        m = build_mapping(text, PATTERN)

        assert {len(m.column(g)) for g in m.groups} == {3}

    def test_non_matching_lines_skipped(self):
        m = build_mapping("onlyoneword\nhost1 tagged\n", PATTERN)
        assert m.column("first") == ("host1",)

    def test_unnamed_groups_ignored(self):
        m = build_mapping("a-b-c", r"(?P<x>\w)-(\w)-(?P<z>\w)")
        assert sorted(m.groups) == ["x", "z"]
        assert m.row(0) == {"x": "a", "z": "c"}

    def test_non_participating_group_is_empty_string(self):
        m = build_mapping("host1\nhost2 eu", r"^(?P<host>\w+)(?:\s+(?P<region>\w+))?$")
        assert m.column("host") == ("host1", "host2")
        assert m.column("region") == ("", "eu")

    def test_no_matches_leaves_groups_absent(self):
        m = build_mapping("nothing\nhere", r"(?P<a>\d+)=(?P<b>\d+)")
        assert m.groups == []
        assert "a" not in m
        assert m.column("a") == ()
        assert len(m) == 0

    def test_match_may_start_mid_line(self):
        m = build_mapping("  leading spaces x", r"(?P<word>[a-z]+) (?P<next>[a-z]+)")
        assert m.row(0) == {"word": "leading", "next": "spaces"}

    def test_compiled_pattern_accepted(self):
        m = build_mapping("k v", re.compile(PATTERN))
        assert m.row(0) == {"first": "k", "newtag": "v"}

    def test_invalid_pattern_raises(self):
        with pytest.raises(PatternCompileError) as exc_info:
            build_mapping("anything", r"(?P<broken")
        assert exc_info.value.pattern == r"(?P<broken"


class TestCompilePattern:
    def test_returns_compiled_pattern_unchanged(self):
        regex = re.compile(PATTERN)
        assert compile_pattern(regex) is regex

    def test_wraps_re_error(self):
        with pytest.raises(PatternCompileError) as exc_info:
            compile_pattern("[unclosed")
        assert isinstance(exc_info.value.__cause__, re.error)


# -- TagMapping --------------------------------------------------------------


class TestTagMapping:
    def test_index_of_first_match_wins(self):
        m = TagMapping({"k": ["a", "b", "a"], "v": ["1", "2", "3"]})
        assert m.index_of("k", "a") == 0
        assert m.index_of("k", "b") == 1

    def test_index_of_missing_value(self):
        m = TagMapping({"k": ["a"], "v": ["1"]})
        assert m.index_of("k", "zzz") == -1

    def test_index_of_missing_group(self):
        m = TagMapping({"k": ["a"]})
        assert m.index_of("nope", "a") == -1

    def test_row_excludes_groups(self):
        m = TagMapping({"k": ["a"], "v": ["1"], "w": ["x"]})
        assert m.row(0, exclude=["k"]) == {"v": "1", "w": "x"}

    def test_unequal_columns_rejected(self):
        with pytest.raises(ValueError):
            TagMapping({"k": ["a", "b"], "v": ["1"]})

    def test_columns_are_read_only(self):
        m = TagMapping({"k": ["a"]})
        with pytest.raises(TypeError):
            m.columns["k"] = ("b",)
        assert isinstance(m.column("k"), tuple)

    def test_empty(self):
        m = TagMapping.empty()
        assert len(m) == 0
        assert m.groups == []

    def test_equality(self):
        assert TagMapping({"k": ["a"]}) == TagMapping({"k": ("a",)})

    def test_hashable(self):
        m = build_mapping("web01 eu", PATTERN)
        assert hash(m) == hash(TagMapping({"newtag": ["eu"], "first": ["web01"]}))
        assert len({m, build_mapping("web01 eu", PATTERN)}) == 1
        assert hash(TagMapping.empty()) == hash(TagMapping.empty())

    def test_to_frame(self):
        m = build_mapping("web01 eu\ndb01 us", PATTERN)
        df = m.to_frame()

        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["first", "newtag"]
        assert df["newtag"].tolist() == ["eu", "us"]
