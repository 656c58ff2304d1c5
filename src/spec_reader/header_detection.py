import re
from collections import Counter
from typing import Optional, Sequence, Set

# Captions and front-matter headings that never count as section body text
IGNORE_CONTENT_REGEX = re.compile(
    r'^(Figure\s+\d+|Table\s+\d+|List of Figures|List of Tables|Revision History)\b',
    re.IGNORECASE,
)
_PAGE_LABEL_REGEX = re.compile(r'^page\s+\d+$', re.IGNORECASE)
_PAGE_LABEL_PREFIX_REGEX = re.compile(r'^page\s+\d+\b', re.IGNORECASE)
# What may follow the document title on a running footer line:
# a revision or version label, a page label or a bare page number
_FOOTER_SUFFIX = (
    r'(?:\s*[-|,:\u2013]?\s*'
    r'(?:(?:revision|rev\.?|version|ver\.?)\s*\d.*|v\d[\d.]*|page\s+\d+.*|\d{1,4}))?\s*$'
)


class FurnitureFilter:
    """Decides which lines are running headers, footers or captions.

    Args:
        footer_title: Document title repeated in the running footer
        headers_footers: Extra lines known to repeat on every page
    """

    def __init__(self, footer_title: Optional[str] = None, headers_footers: Optional[Set[str]] = None):
        self.footer_title = (footer_title or "").strip().lower()
        self.headers_footers = headers_footers or set()
        self._footer_regex = None
        if self.footer_title:
            self._footer_regex = re.compile(r'^' + re.escape(self.footer_title) + _FOOTER_SUFFIX, re.IGNORECASE)

    def is_footer_line(self, line: str) -> bool:
        """Check if a line is the running footer: the title, optionally followed by a revision or page number."""
        return self._footer_regex is not None and self._footer_regex.match(line.strip()) is not None

    def is_page_furniture(self, line: str) -> bool:
        """Check if a whole line is a page label, footer title or known repeated line.

        These lines are dropped before heading detection.
        """
        line = line.strip()
        if line in self.headers_footers:
            return True
        lowered = line.lower()
        if lowered == "revision history" or _PAGE_LABEL_REGEX.match(lowered):
            return True
        return bool(self.footer_title) and lowered == self.footer_title

    def should_skip_content(self, line: str) -> bool:
        """Check if a line should be left out of a section's body text.

        Args:
            line: Text line to evaluate

        Returns:
            True for captions, footer lines and page labels
        """
        line = line.strip()
        if not line:
            return True
        if IGNORE_CONTENT_REGEX.match(line):
            return True
        if self.is_footer_line(line):
            return True
        return _PAGE_LABEL_PREFIX_REGEX.match(line) is not None


def identify_headers_footers(pages: Sequence[Sequence[str]], sample_pages: int = 10, min_repeats: int = 3) -> Set[str]:
    """Identify repeated text that appears on multiple pages (headers/footers).

    Args:
        pages: Normalized lines of each page, in page order
        sample_pages: Number of leading pages to sample
        min_repeats: Number of pages a line must appear on

    Returns:
        Set of text strings that appear to be headers or footers
    """
    text_frequency = Counter()

    for lines in pages[:sample_pages]:
        if not lines:
            continue
        # Check first and last few lines of each page, once per page
        edge_lines = set(lines[:3]) | set(lines[-3:])
        for line in edge_lines:
            if len(line) > 10:  # Only consider substantial text
                text_frequency[line] += 1

    return {text for text, count in text_frequency.items() if count >= min_repeats}
