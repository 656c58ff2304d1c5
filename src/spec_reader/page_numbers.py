"""Printed page number detection.

Specifications are usually typeset with front matter numbered separately, so
the physical page index and the number printed in the footer drift apart.
The printed numbers are only used when they behave like real page numbers
across the whole document.
"""
import re
from typing import List, Sequence

from .context import ParseContext
from .models import PrintedPages

_LEADER_PAGE_REGEX = re.compile(r'.*\.{2,}\s*\d+\s*$')
_PRINTED_PAGE_REGEX = re.compile(r'.*\b(\d{1,4})\s*$')


def find_printed_page(lines: Sequence[str]) -> int:
    """Return the page number printed at the end of a page, or 0 if none.

    Only the last line is inspected. A TOC dotted-leader line
    ("Overview ....... 12") is never taken as a page number.
    """
    if not lines:
        return 0
    last = lines[-1].strip()
    if not last or _LEADER_PAGE_REGEX.match(last):
        return 0
    match = _PRINTED_PAGE_REGEX.match(last)
    if not match:
        return 0
    value = int(match.group(1))
    return value if 0 < value < 10000 else 0


def should_use_printed_pages(candidates: Sequence[int]) -> bool:
    """Decide whether detected printed numbers are mostly present and increasing.

    Args:
        candidates: Printed number per page (0 when none was found)

    Returns:
        True if printed numbers are reliable enough to replace page indices
    """
    n = len(candidates)
    if n <= 2:
        return False
    non_zero = sum(1 for value in candidates if value > 0)
    monotonic = sum(
        1
        for previous, current in zip(candidates, candidates[1:])
        if previous > 0 and current > 0 and current == previous + 1
    )
    return non_zero >= max(6, n // 10) and monotonic / max(1, non_zero - 1) > 0.75


def infer_printed_pages(pages: Sequence[Sequence[str]], context: ParseContext) -> PrintedPages:
    """Detect printed page numbers for every page and decide whether to trust them.

    Args:
        pages: Normalized lines of each page, in page order
        context: Current parse context

    Returns:
        PrintedPages decision; untrusted decisions carry only zeros
    """
    candidates: List[int] = [find_printed_page(lines) for lines in pages]
    if should_use_printed_pages(candidates):
        context.logger.debug("Using printed page numbers detected on %d pages.", sum(1 for c in candidates if c))
        return PrintedPages(trusted=True, candidates=tuple(candidates))

    context.logger.debug("Printed page numbers ignored due to inconsistency.")
    return PrintedPages(trusted=False, candidates=tuple(0 for _ in candidates))
