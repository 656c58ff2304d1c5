"""
Pytest configuration for project root.

Ensures the spec_reader package can be imported in tests without installing it.
Provides shared fixtures for building page text and parse contexts.
"""

import sys
import pytest
from pathlib import Path

# Add src/ to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from spec_reader import ParseContext, ParserConfig  # noqa: E402


DOC_TITLE = "USB Power Delivery Specification"


@pytest.fixture
def doc_title():
    return DOC_TITLE


@pytest.fixture
def context():
    """Parse context with the year pinned so page validation is reproducible."""
    return ParseContext(config=ParserConfig(), current_year=2025)


@pytest.fixture
def make_context():
    """Build a context from ParserConfig keyword arguments."""
    def _make(**overrides):
        return ParseContext(config=ParserConfig(**overrides), current_year=2025)
    return _make
