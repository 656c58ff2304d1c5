"""Section clean-up: deduplication, parent inference and ordering."""
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from .config import PLACEHOLDER_CONTENT
from .models import Section

_PLACEHOLDER_PREFIX = PLACEHOLDER_CONTENT.split(" —")[0]


def is_placeholder_content(content: Optional[str]) -> bool:
    """True if a section has no real body text."""
    if content is None:
        return True
    trimmed = content.strip()
    return not trimmed or trimmed.startswith(_PLACEHOLDER_PREFIX)


def _content_length(content: Optional[str]) -> int:
    return len(content.strip()) if content else 0


def choose_better_section(a: Section, b: Section) -> Section:
    """Return the better of two entries for the same section.

    Real content beats the placeholder, longer content beats shorter, and a
    lower page beats a higher or missing one. Otherwise the first is kept.
    """
    a_placeholder = is_placeholder_content(a.content)
    b_placeholder = is_placeholder_content(b.content)
    if a_placeholder != b_placeholder:
        return b if a_placeholder else a

    a_len = _content_length(a.content)
    b_len = _content_length(b.content)
    if a_len != b_len:
        return a if a_len > b_len else b

    if a.page is not None and b.page is not None:
        return a if a.page <= b.page else b
    if b.page is not None:
        return b
    return a


def _dedup_key(section: Section, position: int) -> str:
    if section.section_id is not None:
        return section.section_id
    if not section.full_path:
        # nothing to group by; the entry stands alone
        return f"#{position}"
    return f"{section.full_path}@p{section.page or 0}"


def deduplicate_sections(sections: Optional[Iterable[Section]]) -> List[Section]:
    """Keep the best entry per section_id, in order of first appearance.

    Args:
        sections: Sections that may repeat the same section_id

    Returns:
        One section per section_id (or per full_path/page for unnumbered entries)
    """
    best: Dict[str, Section] = {}
    for position, section in enumerate(sections or []):
        if section is None:
            continue
        key = _dedup_key(section, position)
        current = best.get(key)
        best[key] = section if current is None else choose_better_section(current, section)
    return list(best.values())


def _trim_trailing_zeros(candidate: str, known_ids) -> Optional[str]:
    # "1.0.1.0" -> "1.0.1", "1.0" -> "1"
    while '.' in candidate and candidate.endswith('.0'):
        candidate = candidate[:-2]
        if candidate in known_ids:
            return candidate
    return None


def infer_parent_ids(sections: List[Section]) -> List[Section]:
    """Fill in missing parent_id values from the section numbers present.

    A section without a parent gets the id with its last segment removed,
    if such a section exists; failing that, trailing ".0" segments are
    trimmed one at a time until an existing id is found.
    """
    known_ids = {s.section_id for s in sections if s.section_id}
    output = []
    for section in sections:
        sid = section.section_id
        if not section.parent_id and sid and '.' in sid:
            inferred = sid[:sid.rindex('.')]
            parent_id = inferred if inferred in known_ids else _trim_trailing_zeros(inferred, known_ids)
            if parent_id:
                section = replace(section, parent_id=parent_id)
        output.append(section)
    return output


def sort_sections(sections: List[Section]) -> List[Section]:
    """Order by page (sections without a page last), then by section_id as text."""
    return sorted(
        sections,
        key=lambda s: (s.page is None, s.page or 0, s.section_id or ""),
    )


def clean_sections(sections: Optional[List[Section]]) -> List[Section]:
    """Deduplicate, infer missing parents and sort the body sections.

    Args:
        sections: Raw sections from the body pass

    Returns:
        Cleaned sections, ordered by page then section_id
    """
    if not sections:
        return []
    return sort_sections(infer_parent_ids(deduplicate_sections(sections)))
