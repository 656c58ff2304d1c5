import re
import string
import unicodedata
from typing import List, Optional

DOT_ID_REGEX = re.compile(r'^\d+(?:\.\d+)*$')
TRAILING_DOTS_REGEX = re.compile(r'\.{2,}\s*$')
_HORIZONTAL_WS_REGEX = re.compile(r'[ \t\x0b\f\r]+')
_LINE_BREAK_REGEX = re.compile(r'\r?\n')

# Title cleanup for body headings
_TRAILING_LEADER_PAGE_REGEX = re.compile(r'\.{2,}\s*\d+$')
_TRAILING_NUMBER_REGEX = re.compile(r'\s+\d+$')
_DOT_SPACE_RUN_REGEX = re.compile(r'[.\s]{2,}')

# Title cleanup for TOC entries
_LEADING_DOT_ID_REGEX = re.compile(r'^\s*\d+(?:\.\d+)*\s+')
_DOT_RUN_REGEX = re.compile(r'\.{2,}')
_TRAILING_PAGE_REGEX = re.compile(r'\s+\d{1,4}$')
_TRAILING_PUNCT_REGEX = re.compile('[' + re.escape(string.punctuation) + r'\s]+$')
_MULTI_SPACE_REGEX = re.compile(r'\s{2,}')

# Reconciliation keys
_NON_ALNUM_REGEX = re.compile(r'[^A-Za-z0-9\s]')
_WHITESPACE_REGEX = re.compile(r'\s+')
_TRAILING_YEARS_REGEX = re.compile(r'(?:\s+(?:19|20)\d{2})+$')


def is_dot_id(text: Optional[str]) -> bool:
    """Check whether text is a dot-separated numeric identifier such as "2.1.3"."""
    return bool(text) and DOT_ID_REGEX.match(text) is not None


def get_section_level(section_id: str) -> int:
    """Determine the hierarchical level of a section based on its ID.

    Args:
        section_id: Section identifier (e.g., "1.3.1")

    Returns:
        Level depth (e.g., 3 for "1.3.1")
    """
    return len(section_id.split('.'))


def get_parent_id(section_id: str) -> Optional[str]:
    """Get the parent section ID for a given section ID.

    Args:
        section_id: Section identifier (e.g., "1.3.1")

    Returns:
        Parent section ID (e.g., "1.3" for "1.3.1") or None for top-level
    """
    parts = section_id.split('.')
    if len(parts) == 1:
        return None
    return '.'.join(parts[:-1])


def normalize_text(text: Optional[str]) -> str:
    """Compose unicode, replace non-breaking spaces and collapse horizontal whitespace."""
    if not text:
        return ""
    text = unicodedata.normalize('NFC', text)
    text = text.replace('\u00a0', ' ').replace('\u200b', '')
    return _HORIZONTAL_WS_REGEX.sub(' ', text)


def join_split_identifiers(lines: List[str]) -> List[str]:
    """Merge a line holding only a section number with the line after it.

    Broken layouts put "2.1.3" on one line and its title on the next. A
    leading dash on the following line is dropped. Merges never chain.
    """
    joined = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if is_dot_id(line) and i + 1 < len(lines):
            following = lines[i + 1]
            if following.startswith('-'):
                following = following[1:].strip()
            joined.append(f"{line} {following}".strip())
            i += 2
            continue
        joined.append(line)
        i += 1
    return joined


def split_page_lines(text: Optional[str], join_identifiers: bool = True) -> List[str]:
    """Turn the raw text of one page into clean, non-empty lines.

    Args:
        text: Raw page text as returned by the page text provider
        join_identifiers: Re-join section numbers split from their titles.
            The TOC pass turns this off and joins after its leader-line pass.

    Returns:
        Trimmed, non-empty lines
    """
    lines = [line.strip() for line in _LINE_BREAK_REGEX.split(normalize_text(text))]
    lines = [line for line in lines if line]
    return join_split_identifiers(lines) if join_identifiers else lines


def clean_heading_title(title: str) -> str:
    """Strip dot leaders, trailing page numbers and dot/space runs from a body heading."""
    title = _TRAILING_LEADER_PAGE_REGEX.sub('', title.strip()).strip()
    title = _TRAILING_NUMBER_REGEX.sub('', title).strip()
    return _DOT_SPACE_RUN_REGEX.sub(' ', title).strip()


def clean_toc_title(raw: Optional[str]) -> str:
    """Clean a TOC entry title.

    Removes a section number that leaked into the title, dot leaders, a
    trailing page number and trailing punctuation.
    """
    if raw is None:
        return ""
    title = _LEADING_DOT_ID_REGEX.sub('', raw.strip(), count=1)
    title = _DOT_RUN_REGEX.sub(' ', title)
    title = _TRAILING_PAGE_REGEX.sub('', title)
    title = _TRAILING_PUNCT_REGEX.sub('', title)
    return _MULTI_SPACE_REGEX.sub(' ', title).strip()


def normalize_for_key(raw: Optional[str]) -> str:
    """Normalize a title for TOC/body matching.

    Lower-cases, drops punctuation and dot leaders, collapses whitespace and
    removes trailing year tokens ("... 2019"). Applying it twice is a no-op.
    """
    if raw is None:
        return ""
    text = _DOT_RUN_REGEX.sub(' ', raw).replace('\u00a0', ' ')
    text = _NON_ALNUM_REGEX.sub(' ', text)
    text = _WHITESPACE_REGEX.sub(' ', text).strip().lower()
    return _TRAILING_YEARS_REGEX.sub('', text).strip()


def shorten(text: Optional[str], max_length: int) -> str:
    """Truncate text to max_length characters, ending with an ellipsis when cut."""
    if text is None:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."
