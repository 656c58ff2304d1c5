import re
from typing import Dict, List, Optional, Sequence

from .context import ParseContext
from .header_detection import FurnitureFilter
from .models import Section
from .text_utils import TRAILING_DOTS_REGEX, clean_toc_title, is_dot_id, join_split_identifiers

# "2.3 Power Rules .......... 47"
DOTS_PAGE_REGEX = re.compile(r'^\s*(\d+(?:\.\d+)*)\s+(.+?)\s*\.{2,}\s*(\d{1,4})\s*$')
# "2.3 Power Rules 47"
TITLE_PAGE_REGEX = re.compile(r'^\s*(\d+(?:\.\d+)*)\s+(.+?)\s+(\d{1,4})\s*$')
# "2.3 Power Rules"
NUMBER_TITLE_REGEX = re.compile(r'^\s*(\d+(?:\.\d+)*)\s+(.+?)\s*$')
TRAILING_PAGE_IN_TITLE_REGEX = re.compile(r'^(.+?)\s*\.*\s*(\d{1,4})\s*$')
PAGE_TOKEN_REGEX = re.compile(r'^\d{1,4}$')

REVISION_KEYWORDS_REGEX = re.compile(
    r'\b(errata|erratum|revision|revision history|including errata|ecn|ecns|'
    r'editorial changes|initial release|change log)\b',
    re.IGNORECASE,
)
MONTH_WORD_REGEX = re.compile(
    r'\b(jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|jun(?:e)?|jul(?:y)?|aug(?:ust)?|'
    r'sep(?:tember)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\b',
    re.IGNORECASE,
)
TOC_START_REGEX = re.compile(r'contents|table of contents|introduction|overview')


def toc_page_limit(total_pages: int, context: ParseContext) -> int:
    """Number of leading pages scanned for the table of contents."""
    config = context.config
    return min(config.toc_max_pages, max(config.toc_min_pages, total_pages))


def join_leader_lines(lines: Sequence[str]) -> List[str]:
    """Join a line ending in dot leaders with a page number on the following line."""
    joined = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if TRAILING_DOTS_REGEX.search(line) and i + 1 < len(lines) and PAGE_TOKEN_REGEX.match(lines[i + 1]):
            joined.append(f"{line} {lines[i + 1]}")
            i += 2
            continue
        joined.append(line)
        i += 1
    return joined


def validate_candidate_page(candidate: Optional[int], doc_pages: int, current_year: int) -> Optional[int]:
    """Return the candidate page if plausible, else None.

    Args:
        candidate: Number parsed from a TOC line
        doc_pages: Total number of pages in the document
        current_year: Years 1900..current_year+1 are rejected as dates

    Returns:
        The page number, or None if it is not a usable page
    """
    if candidate is None or candidate <= 0:
        return None
    # front matter is full of years; never take one as a page
    if 1900 <= candidate <= current_year + 1:
        return None
    if doc_pages > 0 and candidate > doc_pages:
        return None
    return candidate


class TocParser:
    """Parses table-of-contents lines into one Section per declared section number.

    Args:
        doc_title: Title of the source document
        doc_pages: Total number of pages in the document
        context: Current parse context
    """

    def __init__(self, doc_title: str, doc_pages: int, context: ParseContext):
        self.doc_title = doc_title
        self.doc_pages = doc_pages
        self.context = context
        self.toc_started = False
        self.entries: Dict[str, Section] = {}

    def _page(self, raw: str) -> Optional[int]:
        return validate_candidate_page(int(raw), self.doc_pages, self.context.current_year)

    def put_best(self, section_id: str, title: str, page: Optional[int]) -> None:
        """Insert or update an entry, preferring the first one with a page or a title."""
        if not section_id or not section_id.strip():
            return
        existing = self.entries.get(section_id)
        if existing is None:
            self.entries[section_id] = Section.create(self.doc_title, section_id, title, page)
            return
        # prefer an entry that has a page
        if existing.page is None and page is not None:
            keep_title = title if title and title.strip() else existing.title
            self.entries[section_id] = Section.create(self.doc_title, section_id, keep_title, page)
            return
        # prefer a non-empty title if the existing one is blank
        if not existing.title.strip() and title and title.strip():
            self.entries[section_id] = Section.create(self.doc_title, section_id, title, existing.page)
        # otherwise first seen wins

    def _accept(self, section_id: str, title: str, page: Optional[int]) -> None:
        if not self.toc_started and page is not None:
            self.toc_started = True
        if self.toc_started:
            self.put_best(section_id, title, page)

    def parse_line(self, line: str) -> None:
        """Classify one TOC line and record the entry it declares, if any."""
        if not line.strip():
            return
        # skip document-history tables until the TOC proper has started
        if not self.toc_started and (REVISION_KEYWORDS_REGEX.search(line) or MONTH_WORD_REGEX.search(line)):
            return

        match = DOTS_PAGE_REGEX.match(line) or TITLE_PAGE_REGEX.match(line)
        if match:
            section_id, raw_title, raw_page = match.groups()
            self._accept(section_id, clean_toc_title(raw_title), self._page(raw_page))
            return

        match = NUMBER_TITLE_REGEX.match(line)
        if match:
            section_id, raw_title = match.groups()
            self._parse_number_title(section_id.strip(), raw_title.strip())
            return

        self._parse_fallback(line)

    def _parse_number_title(self, section_id: str, raw_title: str) -> None:
        trailing = TRAILING_PAGE_IN_TITLE_REGEX.match(raw_title)
        if trailing:
            title = clean_toc_title(trailing.group(1))
            page = self._page(trailing.group(2))
            if page is not None:
                self._accept(section_id, title, page)
                return
        else:
            title = clean_toc_title(raw_title)

        if not self.toc_started:
            if not TOC_START_REGEX.search(title.lower()):
                return
            self.toc_started = True
        self.put_best(section_id, title, None)

    def _parse_fallback(self, line: str) -> None:
        # last token numeric, first token a section number
        tokens = line.split()
        if not tokens or not PAGE_TOKEN_REGEX.match(tokens[-1]):
            return
        parts = line.strip().split(None, 1)
        if len(parts) < 2 or not is_dot_id(parts[0]):
            return
        title = clean_toc_title(re.sub(r'\d{1,4}$', '', parts[1].strip()))
        self._accept(parts[0], title, self._page(tokens[-1]))

    def sections(self) -> List[Section]:
        """Entries in order of first appearance."""
        return list(self.entries.values())


def extract_toc_entries(
    pages: Sequence[Sequence[str]],
    doc_title: str,
    context: ParseContext,
    furniture: Optional[FurnitureFilter] = None,
) -> List[Section]:
    """Extract Table of Contents entries from the front pages of the document.

    Args:
        pages: Normalized lines of each page, in page order, as returned by
            ``split_page_lines(text, join_identifiers=False)``
        doc_title: Title of the source document
        context: Current parse context
        furniture: Optional filter for repeated header/footer lines

    Returns:
        TOC entries, one per section number, in order of first appearance
    """
    limit = toc_page_limit(len(pages), context)
    lines = [line for page_lines in pages[:limit] for line in page_lines]
    if furniture is not None:
        lines = [line for line in lines if line not in furniture.headers_footers]

    parser = TocParser(doc_title, len(pages), context)
    # leader lines take their page number before section numbers are re-joined
    for line in join_split_identifiers(join_leader_lines(lines)):
        try:
            parser.parse_line(line)
        except ValueError as exc:
            context.logger.debug("line parse non-fatal: %r -> %s", line, exc)

    entries = parser.sections()
    context.logger.info("Extracted %d TOC entries from %s (pages scanned: %d)", len(entries), doc_title, limit)
    return entries
