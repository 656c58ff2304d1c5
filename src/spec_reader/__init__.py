"""
Spec Reader Package

Recovers the declared table of contents and the actual section hierarchy of a
long technical specification, and reports where the two disagree.

Simple Usage:
    from spec_reader import parse_pdf

    structure = parse_pdf("spec.pdf", "USB Power Delivery Specification")
    print(structure.validation.missing_sections)

Text that is already extracted can be parsed with a static provider:
    from spec_reader import StaticPageTextProvider, parse_document

    structure = parse_document(StaticPageTextProvider(page_texts), "My Spec")

Without an explicit context, settings come from SPEC_READER_* environment
variables (and a .env file) through ParserConfig.from_env().
"""

from .config import ParserConfig, PLACEHOLDER_CONTENT
from .context import ParseContext
from .document_parser import extract_document_title, parse_document, parse_pdf
from .exceptions import ConfigError, InputUnavailableError, SpecReaderError
from .models import DocumentStructure, PrintedPages, Section, TableCountKey, ValidationResult
from .page_numbers import infer_printed_pages
from .page_source import FitzPageTextProvider, PageTextProvider, StaticPageTextProvider, read_pages
from .post_processing import clean_sections, deduplicate_sections, infer_parent_ids
from .section_parser import parse_body_sections
from .text_utils import split_page_lines
from .toc_extractor import extract_toc_entries
from .validation import validate_sections

__all__ = [
    "ConfigError",
    "DocumentStructure",
    "FitzPageTextProvider",
    "InputUnavailableError",
    "PLACEHOLDER_CONTENT",
    "PageTextProvider",
    "ParseContext",
    "ParserConfig",
    "PrintedPages",
    "Section",
    "SpecReaderError",
    "StaticPageTextProvider",
    "TableCountKey",
    "ValidationResult",
    "clean_sections",
    "deduplicate_sections",
    "extract_document_title",
    "extract_toc_entries",
    "infer_parent_ids",
    "infer_printed_pages",
    "parse_body_sections",
    "parse_document",
    "parse_pdf",
    "read_pages",
    "split_page_lines",
    "validate_sections",
]
