"""
Tests for reconciling the declared TOC with the parsed body sections.
"""

from dataclasses import FrozenInstanceError

import pytest

from spec_reader.models import Section, TableCountKey
from spec_reader.validation import count_tables, format_report_line, section_key, validate_sections

DOC = "Test Spec"


def section(section_id, title, page=None):
    return Section.create(DOC, section_id, title, page)


@pytest.mark.unit
class TestValidateSections:

    def test_toc_entry_without_body_match_is_missing(self, context):
        result = validate_sections([section("3.1", "Cables")], [], context)

        assert result.missing_sections == ("3.1 | Cables | page=",)
        assert result.missing_count == 1
        assert result.extra_sections == ()
        assert result.toc_section_count == 1
        assert result.parsed_section_count == 0

    def test_body_section_without_toc_entry_is_extra(self, context):
        result = validate_sections([], [section("7", "Annex", 40)], context)

        assert result.extra_sections == ("7 | Annex | page=40",)
        assert result.extra_count == 1

    def test_matching_ignores_case_and_punctuation(self, context):
        toc = [section("2.1", "Power Rules:", 10)]
        parsed = [section("2.1", "power rules", 12)]
        result = validate_sections(toc, parsed, context)

        assert result.missing_count == 0
        assert result.extra_count == 0

    def test_trailing_year_ignored_when_matching(self, context):
        toc = [section("1", "Revision 3.2 2019", 5)]
        parsed = [section("1", "Revision 3.2", 5)]

        assert validate_sections(toc, parsed, context).missing_count == 0

    def test_lines_sorted_by_key(self, context):
        parsed = [section("9", "Zeta"), section("10", "Alpha"), section("2", "Beta")]
        result = validate_sections([], parsed, context)

        assert [line.split(" | ")[0] for line in result.extra_sections] == ["10", "2", "9"]

    def test_missing_and_extra_are_disjoint(self, context):
        toc = [section("1", "Scope"), section("2", "Terms"), section("3", "Cables")]
        parsed = [section("1", "Scope"), section("3", "Plugs"), section("4", "Power")]
        result = validate_sections(toc, parsed, context)

        assert not set(result.missing_sections) & set(result.extra_sections)
        assert result.missing_sections == ("2 | Terms | page=", "3 | Cables | page=")
        assert result.extra_sections == ("3 | Plugs | page=", "4 | Power | page=")

    def test_first_section_wins_on_duplicate_key(self, context):
        parsed = [section("5", "Power", 10), section("5", "POWER", 20)]
        result = validate_sections([], parsed, context)

        assert result.parsed_section_count == 1
        assert result.extra_sections == ("5 | Power | page=10",)

    def test_table_counts(self, context):
        toc = [section("1", "Tables of values"), section("2", "Scope")]
        parsed = [section(None, "Table 4 Voltages"), section(None, "table 5"), section("2", "Scope")]
        result = validate_sections(toc, parsed, context)

        assert result.table_count(TableCountKey.TOC_TABLES_TOTAL) == 1
        assert result.table_count(TableCountKey.PARSED_TABLES_TOTAL) == 2

    def test_none_inputs_are_empty(self, context):
        result = validate_sections(None, None, context)

        assert (result.toc_section_count, result.parsed_section_count) == (0, 0)
        assert result.missing_sections == ()
        assert result.extra_sections == ()
        assert result.table_count(TableCountKey.TOC_TABLES_TOTAL) == 0

    def test_long_titles_truncated(self, make_context):
        long_title = "Cable " * 50
        result = validate_sections([section("1", long_title.strip())], [], make_context())
        rendered_title = result.missing_sections[0].split(" | ")[1]

        assert len(rendered_title) == 200
        assert rendered_title.endswith("...")

        short = validate_sections([section("1", long_title.strip())], [], make_context(report_title_max=20))
        assert short.missing_sections[0] == "1 | Cable Cable Cable... | page="

    def test_default_context(self):
        result = validate_sections([section("1", "Scope")], [section("1", "Scope")])
        assert result.missing_count == 0


@pytest.mark.unit
class TestValidationResult:

    def test_to_dict(self, context):
        result = validate_sections([section("3.1", "Cables")], [], context)

        assert result.to_dict() == {
            "toc_count": 1,
            "parsed_count": 0,
            "missing_count": 1,
            "extra_count": 0,
            "missing_sections": ["3.1 | Cables | page="],
            "extra_sections": [],
            "table_counts": {"toc_tables_total": 0, "parsed_tables_total": 0},
        }

    def test_result_is_immutable(self, context):
        result = validate_sections([section("1", "Scope")], [], context)

        with pytest.raises(FrozenInstanceError):
            result.missing_count = 0
        with pytest.raises(TypeError):
            result.table_counts[TableCountKey.TOC_TABLES_TOTAL] = 9


@pytest.mark.unit
def test_section_key():
    assert section_key(section("2.1", "Power Rules.")) == "2.1 power rules"
    assert section_key(section(None, "Annex A")) == "annex a"


@pytest.mark.unit
def test_format_report_line():
    assert format_report_line(section("4", "Plugs", 12)) == "4 | Plugs | page=12"
    assert format_report_line(section(None, "Annex")) == " | Annex | page="


@pytest.mark.unit
def test_count_tables():
    assert count_tables([section(None, "  Table 1"), section("1", "Scope")]) == 1
