"""
PDF loading: pdfplumber for page text, pdfminer for the outline tree.
"""

import logging
from pathlib import Path

import pdfplumber
from pdfminer.pdfdocument import PDFNoOutlines
from pdfminer.utils import decode_text

from toc_sectioner.pipeline.text import normalize
from toc_sectioner.state import OutlineNode

logger = logging.getLogger(__name__)


class DocumentLoadError(Exception):
    """Raised when a file cannot be opened or read as a PDF."""


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return decode_text(value)
    return str(value)


def _read_outline(pdf) -> OutlineNode | None:
    """Rebuild the outline tree from pdfminer's flat ``(level, title, ...)`` stream.

    pdfminer numbers top-level entries 1; the synthetic root sits at level 0.
    """
    try:
        entries = list(pdf.doc.get_outlines())
    except PDFNoOutlines:
        return None

    root = OutlineNode(title="", children=[])
    stack: list[tuple[int, OutlineNode]] = [(0, root)]
    for level, title, *_ in entries:
        node = OutlineNode(title=_as_text(title), children=[])
        while stack[-1][0] >= level:
            stack.pop()
        stack[-1][1]["children"].append(node)
        stack.append((level, node))

    return root


def load_document(state: dict) -> dict:
    """Read title, outline and normalized page text from ``state["pdf_path"]``."""
    pdf_path = state["pdf_path"]
    path = Path(pdf_path)
    if not path.is_file():
        raise DocumentLoadError(f"PDF not found: {pdf_path}")

    logger.info("Opening %s", pdf_path)
    try:
        with pdfplumber.open(str(path)) as pdf:
            title = normalize(_as_text(pdf.metadata.get("Title")))
            outline = _read_outline(pdf)

            pages: list[str] = []
            for page in pdf.pages:
                # pdfplumber ends the last line without a newline; keep pages apart
                pages.append(normalize(_as_text(page.extract_text()) + "\n"))
                page.close()
    except Exception as exc:
        raise DocumentLoadError(f"Cannot read {pdf_path}: {exc}") from exc

    if outline is None:
        logger.info("No outline in %s", path.name)
    logger.info("Loaded %d pages from %s", len(pages), path.name)
    return {
        "title": title,
        "topic": path.name,
        "outline": outline,
        "pages": pages,
    }
