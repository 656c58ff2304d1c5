from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .text_utils import get_parent_id, get_section_level


@dataclass(frozen=True)
class Section:
    """Represents a document section (or TOC entry) with hierarchical structure."""
    doc_title: str
    section_id: Optional[str]
    title: str
    page: Optional[int]
    level: int
    parent_id: Optional[str]
    full_path: str
    tags: Tuple[str, ...] = ()
    content: Optional[str] = None

    @classmethod
    def create(
        cls,
        doc_title: str,
        section_id: Optional[str],
        title: str,
        page: Optional[int] = None,
        content: Optional[str] = None,
    ) -> "Section":
        """Create a section, deriving level, parent_id and full_path from the id.

        Args:
            doc_title: Title of the source document
            section_id: Dot-separated identifier (e.g. "2.1.3") or None
            title: Cleaned heading text
            page: Page the heading appears on, if known
            content: Accumulated body text (None for TOC entries)

        Returns:
            New Section object
        """
        title = title or ""
        level = get_section_level(section_id) if section_id else 1
        parent_id = get_parent_id(section_id) if section_id else None
        full_path = f"{section_id or ''} {title}".strip()
        return cls(
            doc_title=doc_title,
            section_id=section_id,
            title=title,
            page=page,
            level=level,
            parent_id=parent_id,
            full_path=full_path,
            tags=(),
            content=content,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the fields in their canonical order, for serializers."""
        return {
            "doc_title": self.doc_title,
            "section_id": self.section_id,
            "title": self.title,
            "page": self.page,
            "level": self.level,
            "parent_id": self.parent_id,
            "full_path": self.full_path,
            "tags": list(self.tags),
            "content": self.content,
        }


class TableCountKey(str, Enum):
    """Keys of ValidationResult.table_counts."""
    TOC_TABLES_TOTAL = "toc_tables_total"
    PARSED_TABLES_TOTAL = "parsed_tables_total"


@dataclass(frozen=True)
class ValidationResult:
    """Reconciliation of the declared TOC against the parsed body sections."""
    toc_section_count: int
    parsed_section_count: int
    missing_count: int
    extra_count: int
    missing_sections: Tuple[str, ...] = ()
    extra_sections: Tuple[str, ...] = ()
    table_counts: Mapping[TableCountKey, int] = field(default_factory=lambda: MappingProxyType({}))

    def table_count(self, key: TableCountKey) -> int:
        return self.table_counts.get(key, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "toc_count": self.toc_section_count,
            "parsed_count": self.parsed_section_count,
            "missing_count": self.missing_count,
            "extra_count": self.extra_count,
            "missing_sections": list(self.missing_sections),
            "extra_sections": list(self.extra_sections),
            "table_counts": {key.value: count for key, count in self.table_counts.items()},
        }


@dataclass(frozen=True)
class PrintedPages:
    """Document-wide decision on whether printed page numbers can be trusted.

    ``candidates[i]`` is the number found at the bottom of page ``i + 1``
    (0 when none). When ``trusted`` is False all candidates are zero.
    """
    trusted: bool
    candidates: Tuple[int, ...] = ()

    def page_for(self, page_index: int) -> int:
        """Return the printed number for a 1-based page index, else the index itself."""
        if self.trusted and 1 <= page_index <= len(self.candidates):
            printed = self.candidates[page_index - 1]
            if printed > 0:
                return printed
        return page_index


@dataclass(frozen=True)
class DocumentStructure:
    """Represents a complete parsed document: declared TOC, body sections and their diff."""
    doc_title: str
    toc_sections: List[Section]
    sections: List[Section]
    validation: ValidationResult
    printed_pages: PrintedPages
