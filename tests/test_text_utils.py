"""
Tests for line normalization and the section-number / title helpers.

No PDF needed - pure string logic.
"""

import pytest

from spec_reader.text_utils import (
    clean_heading_title,
    clean_toc_title,
    get_parent_id,
    get_section_level,
    is_dot_id,
    join_split_identifiers,
    normalize_for_key,
    shorten,
    split_page_lines,
)


@pytest.mark.unit
class TestSplitPageLines:
    """Raw page text -> clean lines."""

    def test_collapses_whitespace_and_drops_empty_lines(self):
        text = "  1  Introduction\t\r\n\n   \nSome text "
        assert split_page_lines(text) == ["1 Introduction", "Some text"]

    def test_composes_combining_marks(self):
        assert split_page_lines("Re\u0301sume\u0301") == ["R\u00e9sum\u00e9"]

    def test_removes_zero_width_spaces(self):
        assert split_page_lines("Po\u200bwer") == ["Power"]

    def test_empty_and_none_text(self):
        assert split_page_lines("") == []
        assert split_page_lines(None) == []

    def test_joins_identifier_broken_across_lines(self):
        assert split_page_lines("2.1.3\nCable Rules\nBody") == ["2.1.3 Cable Rules", "Body"]

    def test_identifier_join_can_be_turned_off(self):
        assert split_page_lines("3.1 Cables ....\n12", join_identifiers=False) == ["3.1 Cables ....", "12"]


@pytest.mark.unit
class TestJoinSplitIdentifiers:

    def test_drops_leading_dash_of_following_line(self):
        assert join_split_identifiers(["2.1", "- Purpose"]) == ["2.1 Purpose"]

    def test_merges_do_not_chain(self):
        assert join_split_identifiers(["1", "2", "Title"]) == ["1 2", "Title"]

    def test_lone_identifier_on_last_line_is_kept(self):
        assert join_split_identifiers(["Some text", "47"]) == ["Some text", "47"]

    def test_identifier_after_ellipsis_is_joined(self):
        lines = ["The rules are as follows...", "2.1", "Cable Design"]
        assert join_split_identifiers(lines) == ["The rules are as follows...", "2.1 Cable Design"]


@pytest.mark.unit
class TestSectionIds:

    @pytest.mark.parametrize("section_id, level, parent", [
        ("1", 1, None),
        ("2.1", 2, "2"),
        ("2.1.3", 3, "2.1"),
        ("10.0.4.12", 4, "10.0.4"),
    ])
    def test_level_and_parent_follow_segments(self, section_id, level, parent):
        assert get_section_level(section_id) == level
        assert get_parent_id(section_id) == parent
        if parent is not None:
            assert is_dot_id(parent)

    @pytest.mark.parametrize("text, expected", [
        ("1", True),
        ("2.1.3", True),
        ("2.", False),
        (".2", False),
        ("2.a", False),
        ("", False),
        (None, False),
    ])
    def test_is_dot_id(self, text, expected):
        assert is_dot_id(text) is expected


@pytest.mark.unit
class TestTitleCleaning:

    def test_heading_title_loses_leaders_and_page(self):
        assert clean_heading_title("Power Rules .......... 47") == "Power Rules"

    def test_heading_title_loses_trailing_number(self):
        assert clean_heading_title("Overview 12") == "Overview"

    def test_heading_title_collapses_dot_space_runs(self):
        assert clean_heading_title("Cable  ..  Assembly") == "Cable Assembly"

    def test_toc_title_cleanup(self):
        assert clean_toc_title("1.2 Power Rules..... 12") == "Power Rules"
        assert clean_toc_title("Scope:") == "Scope"
        assert clean_toc_title("  Cable   Assemblies ") == "Cable Assemblies"
        assert clean_toc_title(None) == ""


@pytest.mark.unit
class TestNormalizeForKey:

    def test_strips_punctuation_leaders_and_year(self):
        assert normalize_for_key("Power-Rules ... (Rev 2019)") == "power rules rev"

    def test_none_is_empty(self):
        assert normalize_for_key(None) == ""

    @pytest.mark.parametrize("raw", [
        "Power Rules",
        "USB Type-C® Cable 2019 2020",
        "Section..... 12",
        "2019",
        "  Mixed   CASE  !!",
        "Überblick",
    ])
    def test_idempotent(self, raw):
        once = normalize_for_key(raw)
        assert normalize_for_key(once) == once


@pytest.mark.unit
def test_shorten():
    assert shorten("Cables", 200) == "Cables"
    long_title = "x" * 250
    short = shorten(long_title, 200)
    assert len(short) == 200
    assert short.endswith("...")
    assert shorten(None, 10) == ""
