import re
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from .config import PLACEHOLDER_CONTENT
from .context import ParseContext
from .header_detection import FurnitureFilter, identify_headers_footers
from .models import PrintedPages, Section
from .text_utils import clean_heading_title

# Headings like "1.2.3 Title" or "1 Title"; the title needs at least one letter
HEADING_REGEX = re.compile(r'^\s*(\d+(?:\.\d+)*)\s+(?=.*[A-Za-z])(.+?)\s*$')


class _OpenSection:
    """Heading that is still collecting body text."""

    def __init__(self, heading: Section):
        self.heading = heading
        self.buffer = ""

    def append(self, line: str) -> None:
        # A trailing hyphen is a word broken across lines: join without a space
        if line.endswith('-'):
            self.buffer += line[:-1].rstrip()
        else:
            self.buffer += line + ' '

    def finalize(self) -> Section:
        content = self.buffer.strip() or PLACEHOLDER_CONTENT
        return replace(self.heading, content=content)


def match_heading(line: str) -> Optional[Tuple[str, str]]:
    """Split a heading line into its section number and cleaned title.

    Args:
        line: Normalized text line

    Returns:
        (section_id, title) tuple, or None if the line is not a heading
    """
    match = HEADING_REGEX.match(line)
    if not match:
        return None
    section_id = match.group(1)
    title = clean_heading_title(match.group(2))
    return section_id, title


def build_furniture_filter(pages: Sequence[Sequence[str]], doc_title: str, context: ParseContext) -> FurnitureFilter:
    config = context.config
    headers_footers = set()
    if config.detect_repeated_furniture:
        headers_footers = identify_headers_footers(
            pages, config.furniture_sample_pages, config.furniture_min_repeats
        )
        context.logger.debug("Identified %d potential headers/footers", len(headers_footers))
    return FurnitureFilter(config.footer_title or doc_title, headers_footers)


def parse_body_sections(
    pages: Sequence[Sequence[str]],
    doc_title: str,
    printed_pages: PrintedPages,
    context: ParseContext,
    furniture: Optional[FurnitureFilter] = None,
) -> List[Section]:
    """Parse the body of the document into sections, in reading order.

    Every heading line opens a new section; the lines up to the next heading
    become its content. Text before the first heading is ignored.

    Args:
        pages: Normalized lines of each page, in page order
        doc_title: Title of the source document
        printed_pages: Printed page number decision for the document
        context: Current parse context
        furniture: Header/footer filter; built from the pages when omitted

    Returns:
        List of parsed sections
    """
    furniture = furniture or build_furniture_filter(pages, doc_title, context)
    sections = []
    current = None

    for page_index, lines in enumerate(pages, start=1):
        page = printed_pages.page_for(page_index)

        for line in lines:
            if furniture.is_page_furniture(line):
                continue

            heading = match_heading(line)
            if heading:
                if current:
                    sections.append(current.finalize())

                section_id, title = heading
                context.logger.debug("Heading pdf#%d page#%d -> %s %s", page_index, page, section_id, title)
                current = _OpenSection(Section.create(doc_title, section_id, title, page))
            elif current and not furniture.should_skip_content(line):
                current.append(line)

    # Add the very last section to the list
    if current:
        sections.append(current.finalize())

    context.logger.info("Extracted %d sections from %s", len(sections), doc_title)
    return sections
