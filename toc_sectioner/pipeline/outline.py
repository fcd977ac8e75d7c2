"""
Flattens a document outline into the worklist of section titles.

Only the depth that is actually consumed gets traversed: by default just the
root's direct children, which are the chapters the matcher looks for.
"""

import logging
from collections import deque

from toc_sectioner.pipeline.text import normalize
from toc_sectioner.state import OutlineNode

logger = logging.getLogger(__name__)


def flatten(root: OutlineNode | None, max_depth: int | None = 1) -> list[str]:
    """Depth-first list of normalized titles below ``root``, in outline order."""
    if root is None:
        return []

    titles: list[str] = []

    def _walk(node: OutlineNode, depth: int) -> None:
        for child in node["children"]:
            title = normalize(child["title"])
            if title.strip():
                titles.append(title)
            else:
                logger.debug("Dropping blank outline entry at depth %d", depth)
            if max_depth is None or depth < max_depth:
                _walk(child, depth + 1)

    _walk(root, 1)
    return titles


def skip_through(titles: list[str], marker: str) -> list[str]:
    """Drop entries up to and including the first one equal to ``marker``.

    A missing marker leaves nothing, the same as an outline that never
    reaches its contents entry.
    """
    marker = normalize(marker)
    try:
        return titles[titles.index(marker) + 1:]
    except ValueError:
        logger.info("Outline has no %r entry, nothing left to match", marker)
        return []


def build_worklist(state: dict) -> dict:
    """Turn ``state["outline"]`` into a deque of titles in outline order."""
    settings = state["settings"]

    titles = flatten(state.get("outline"), settings.outline_depth)
    if titles and settings.start_after:
        titles = skip_through(titles, settings.start_after)

    logger.info("Worklist: %d outline titles", len(titles))
    return {"worklist": deque(titles), "outline_titles": titles}
