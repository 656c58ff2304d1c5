"""Page text providers.

The parser never opens documents itself: it reads every page once, up front,
from a provider exposing ``page_count()`` and ``get_page_text(index)``.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple, Union

import fitz

from .exceptions import InputUnavailableError


class PageTextProvider(Protocol):
    """Source of plain text, one string per page, pages numbered from 1."""

    def page_count(self) -> int:
        ...

    def get_page_text(self, index: int) -> str:
        ...


class StaticPageTextProvider:
    """Provider backed by page texts that are already in memory."""

    def __init__(self, pages: Sequence[str], title: Optional[str] = None):
        self._pages = list(pages)
        self.title = title

    def page_count(self) -> int:
        return len(self._pages)

    def get_page_text(self, index: int) -> str:
        if not 1 <= index <= len(self._pages):
            raise InputUnavailableError(f"Page {index} is out of range (1..{len(self._pages)})")
        text = self._pages[index - 1]
        if text is None:
            raise InputUnavailableError(f"No text available for page {index}")
        return text


class FitzPageTextProvider:
    """Provider reading page text from a PDF with PyMuPDF.

    Use as a context manager so the document is closed afterwards::

        with FitzPageTextProvider("spec.pdf") as provider:
            structure = parse_document(provider, "My Spec")
    """

    def __init__(self, pdf_path: Union[str, Path], sort: bool = True):
        self.pdf_path = Path(pdf_path)
        self.sort = sort
        if not self.pdf_path.exists():
            raise InputUnavailableError(f"PDF file does not exist: {self.pdf_path.resolve()}")
        try:
            self.doc = fitz.open(str(self.pdf_path))
        except Exception as exc:
            raise InputUnavailableError(f"Could not open PDF {self.pdf_path}: {exc}") from exc

    @property
    def title(self) -> Optional[str]:
        """Title from the PDF metadata, if one is set."""
        metadata = self.doc.metadata or {}
        title = (metadata.get("title") or "").strip()
        return title or None

    def page_count(self) -> int:
        return self.doc.page_count

    def get_page_text(self, index: int) -> str:
        if not 1 <= index <= self.doc.page_count:
            raise InputUnavailableError(f"Page {index} is out of range (1..{self.doc.page_count})")
        try:
            # sort=True reads blocks top-left to bottom-right, which keeps headings ahead of body text
            return self.doc[index - 1].get_text("text", sort=self.sort)
        except Exception as exc:
            raise InputUnavailableError(f"Could not read page {index} of {self.pdf_path}: {exc}") from exc

    def close(self) -> None:
        self.doc.close()

    def __enter__(self) -> "FitzPageTextProvider":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def read_pages(provider: PageTextProvider) -> List[Tuple[int, str]]:
    """Read every page from the provider in one pass.

    Args:
        provider: Page text provider

    Returns:
        List of (page_index, page_text) tuples, page_index starting at 1

    Raises:
        InputUnavailableError: if any page cannot be read
    """
    try:
        count = provider.page_count()
    except InputUnavailableError:
        raise
    except Exception as exc:
        raise InputUnavailableError(f"Could not determine page count: {exc}") from exc
    return [(index, provider.get_page_text(index)) for index in range(1, count + 1)]
