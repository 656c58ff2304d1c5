from types import MappingProxyType
from typing import Dict, List, Optional, Sequence

from .context import ParseContext
from .models import Section, TableCountKey, ValidationResult
from .text_utils import normalize_for_key, shorten


def section_key(section: Section) -> str:
    """Canonical key used to match a TOC entry with a parsed section.

    Args:
        section: TOC entry or parsed section

    Returns:
        Lower-cased "<section_id> <normalized title>"
    """
    section_id = (section.section_id or "").strip()
    return f"{section_id} {normalize_for_key(section.title)}".strip().lower()


def _index_by_key(sections: Sequence[Section]) -> Dict[str, Section]:
    indexed: Dict[str, Section] = {}
    for section in sections:
        indexed.setdefault(section_key(section), section)
    return indexed


def format_report_line(section: Section, title_max: int = 200) -> str:
    """Render a section as "<section_id> | <title> | page=<page>"."""
    page = "" if section.page is None else str(section.page)
    return f"{section.section_id or ''} | {shorten(section.title, title_max)} | page={page}"


def count_tables(sections: Sequence[Section]) -> int:
    """Count entries whose title starts with "table"."""
    return sum(
        1
        for section in sections
        if section.title is not None and section.title.strip().lower().startswith("table")
    )


def validate_sections(
    toc_sections: Optional[Sequence[Section]],
    parsed_sections: Optional[Sequence[Section]],
    context: Optional[ParseContext] = None,
) -> ValidationResult:
    """Compare the declared TOC against the sections found in the body.

    Args:
        toc_sections: Final TOC entries (None is treated as empty)
        parsed_sections: Final body sections (None is treated as empty)
        context: Current parse context

    Returns:
        ValidationResult with missing (TOC only) and extra (body only) sections
    """
    context = context or ParseContext()
    toc_sections = list(toc_sections or [])
    parsed_sections = list(parsed_sections or [])
    title_max = context.config.report_title_max

    toc_map = _index_by_key(toc_sections)
    parsed_map = _index_by_key(parsed_sections)

    missing_keys = sorted(key for key in toc_map if key not in parsed_map)
    extra_keys = sorted(key for key in parsed_map if key not in toc_map)

    missing: List[str] = [format_report_line(toc_map[key], title_max) for key in missing_keys]
    extra: List[str] = [format_report_line(parsed_map[key], title_max) for key in extra_keys]

    table_counts = MappingProxyType({
        TableCountKey.TOC_TABLES_TOTAL: count_tables(toc_sections),
        TableCountKey.PARSED_TABLES_TOTAL: count_tables(parsed_sections),
    })

    result = ValidationResult(
        toc_section_count=len(toc_map),
        parsed_section_count=len(parsed_map),
        missing_count=len(missing),
        extra_count=len(extra),
        missing_sections=tuple(missing),
        extra_sections=tuple(extra),
        table_counts=table_counts,
    )
    context.logger.info(
        "Validation complete -> TOC=%d, Parsed=%d, Missing=%d, Extra=%d, Tables(TOC/Parsed)=%d/%d",
        result.toc_section_count,
        result.parsed_section_count,
        result.missing_count,
        result.extra_count,
        result.table_count(TableCountKey.TOC_TABLES_TOTAL),
        result.table_count(TableCountKey.PARSED_TABLES_TOTAL),
    )
    return result
