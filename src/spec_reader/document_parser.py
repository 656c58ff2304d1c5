import re
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from .context import ParseContext
from .header_detection import FurnitureFilter
from .models import DocumentStructure, Section
from .page_numbers import infer_printed_pages
from .page_source import FitzPageTextProvider, PageTextProvider, read_pages
from .post_processing import clean_sections, deduplicate_sections
from .section_parser import build_furniture_filter, match_heading, parse_body_sections
from .text_utils import split_page_lines
from .toc_extractor import extract_toc_entries
from .validation import validate_sections

PostProcessor = Callable[[List[Section]], List[Section]]

_NUMBER_ONLY_REGEX = re.compile(r'^\d+$')


def extract_document_title(pages: Sequence[Sequence[str]], furniture: Optional[FurnitureFilter] = None) -> Optional[str]:
    """Extract the document title from the first page.

    Only lines above the first heading are considered; a page that opens
    with a heading has no title line.

    Args:
        pages: Normalized lines of each page
        furniture: Filter for known header/footer lines

    Returns:
        Document title or None if not found
    """
    if not pages:
        return None
    furniture = furniture or FurnitureFilter()
    for line in pages[0]:
        if match_heading(line):
            break
        if furniture.is_page_furniture(line) or _NUMBER_ONLY_REGEX.match(line) or len(line) < 3:
            continue
        return line
    return None


def parse_document(
    provider: PageTextProvider,
    doc_title: Optional[str] = None,
    context: Optional[ParseContext] = None,
    post_processor: Optional[PostProcessor] = None,
) -> DocumentStructure:
    """Main function to parse a document into its TOC, body sections and their diff.

    Args:
        provider: Page text provider for the document
        doc_title: Title of the document; detected from the first page when omitted
        context: Parse context (defaults to ParseContext.create(), which reads
            SPEC_READER_* settings from the environment and .env)
        post_processor: Optional extra clean-up applied to the body sections
            before the final deduplication pass

    Returns:
        DocumentStructure with TOC entries, body sections and validation result

    Raises:
        InputUnavailableError: if the provider cannot supply the pages
    """
    context = context or ParseContext.create()

    # Step 1: Read and normalize every page
    texts = [text for _, text in read_pages(provider)]
    pages = [split_page_lines(text) for text in texts]
    context.logger.info("Read %d pages", len(pages))

    # Step 2: Document title
    if not doc_title:
        doc_title = getattr(provider, "title", None) or extract_document_title(pages) or "Untitled"

    # Step 3: Printed page numbers
    printed_pages = infer_printed_pages(pages, context)

    # Step 4: TOC entries
    furniture = build_furniture_filter(pages, doc_title, context)
    toc_furniture = furniture if furniture.headers_footers else None
    toc_pages = [split_page_lines(text, join_identifiers=False) for text in texts]
    toc_sections = deduplicate_sections(extract_toc_entries(toc_pages, doc_title, context, toc_furniture))

    # Step 5: Body sections
    raw_sections = parse_body_sections(pages, doc_title, printed_pages, context, furniture)
    sections = clean_sections(raw_sections)
    if post_processor is not None:
        sections = post_processor(sections)
    sections = deduplicate_sections(sections)

    removed = len(raw_sections) - len(sections)
    context.logger.info("Parsed %d sections (removed %d duplicate entries)", len(sections), removed)

    # Step 6: Validate TOC coverage
    validation = validate_sections(toc_sections, sections, context)

    return DocumentStructure(
        doc_title=doc_title,
        toc_sections=toc_sections,
        sections=sections,
        validation=validation,
        printed_pages=printed_pages,
    )


def parse_pdf(
    pdf_path: Union[str, Path],
    doc_title: Optional[str] = None,
    context: Optional[ParseContext] = None,
    post_processor: Optional[PostProcessor] = None,
) -> DocumentStructure:
    """Parse a PDF file with PyMuPDF.

    Args:
        pdf_path: Path to the PDF file
        doc_title: Title of the document; falls back to the PDF metadata title,
            then the first line of the first page

    Returns:
        DocumentStructure for the PDF
    """
    with FitzPageTextProvider(pdf_path) as provider:
        return parse_document(provider, doc_title, context, post_processor)
