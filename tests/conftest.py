"""
Pytest configuration and shared fixtures for toc-sectioner tests.

PDF access is faked by patching ``pdfplumber.open`` inside the loader, so the
suite needs no binary fixtures.
"""

from pathlib import Path
from typing import Callable

import pytest
from pdfminer.pdfdocument import PDFNoOutlines

from toc_sectioner.config import Settings
from toc_sectioner.pipeline import loader

ENV_VARS = (
    "OUTPUT_PATH",
    "SCAN_DIRECTION",
    "MATCH_MODE",
    "MATCH_TOLERANCE",
    "OUTLINE_DEPTH",
    "OUTLINE_START_AFTER",
    "STRIP_TOC_ECHO",
    "PREAMBLE_TITLE",
    "NO_OUTLINE_POLICY",
    "LOG_LEVEL",
)

SAMPLE_PAGES = ["Intro hello world ", "Methods foo bar ", "Results done"]
SAMPLE_OUTLINE = [
    (1, "Intro", None, None, None),
    (1, "Methods", None, None, None),
    (1, "Results", None, None, None),
]


class FakePage:
    def __init__(self, text):
        self.text = text
        self.closed = False

    def extract_text(self):
        return self.text

    def close(self):
        self.closed = True


class FakeDocument:
    def __init__(self, outlines):
        self._outlines = outlines

    def get_outlines(self):
        if self._outlines is None:
            raise PDFNoOutlines
        return iter(self._outlines)


class FakePDF:
    """Stands in for ``pdfplumber.PDF``: metadata, ``doc.get_outlines()`` and pages."""

    def __init__(self, pages, title=None, outlines=None):
        self.pages = [FakePage(text) for text in pages]
        self.metadata = {"Title": title} if title is not None else {}
        self.doc = FakeDocument(outlines)
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of Settings.from_env()."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def fake_pdfs(monkeypatch, tmp_path) -> Callable[..., Path]:
    """
    Register fake PDFs by file name.

    Returns a function ``add(name, pages, title=None, outlines=None)`` that
    creates a placeholder file under ``tmp_path`` and makes ``pdfplumber.open``
    return a FakePDF for it. Passing an exception as ``pages`` makes opening
    that file raise it.

    Example:
        >>> path = fake_pdfs("doc.pdf", ["Intro text"], outlines=SAMPLE_OUTLINE)
        >>> load_document({"pdf_path": str(path)})
    """
    registry: dict[str, object] = {}

    def _open(path):
        entry = registry[Path(path).name]
        if isinstance(entry, Exception):
            raise entry
        return entry

    monkeypatch.setattr(loader.pdfplumber, "open", _open)

    def add(name, pages, title=None, outlines=None, directory=None):
        target = (directory or tmp_path) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(b"%PDF-1.4\n")
        if isinstance(pages, Exception):
            registry[name] = pages
        else:
            registry[name] = FakePDF(pages, title=title, outlines=outlines)
        return target

    add.registry = registry
    return add


@pytest.fixture
def sample_pages() -> list[str]:
    return list(SAMPLE_PAGES)


@pytest.fixture
def sample_outline() -> list[tuple]:
    return list(SAMPLE_OUTLINE)
