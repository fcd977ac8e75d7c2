"""
pipeline/assembler.py — turns matched sections into output records.

Records keep match order; every section already carries the title of the
boundary that opened it, so nothing is zipped by position.
"""

import logging

from toc_sectioner.config import NO_OUTLINE_WHOLE
from toc_sectioner.pipeline.sectioner import BACKWARD
from toc_sectioner.state import SectionRecord

logger = logging.getLogger(__name__)


def _record(state: dict, text: str, paragraph: str) -> SectionRecord:
    return SectionRecord(
        title=state["title"],
        topic=state["topic"],
        language=state["language"],
        text=text,
        paragraph=paragraph,
    )


def assemble(state: dict) -> dict:
    """Build one record per matched section, plus the optional preamble."""
    settings = state["settings"]

    if not state.get("outline_titles"):
        if settings.no_outline_policy == NO_OUTLINE_WHOLE:
            logger.info("No outline titles, emitting whole document as one record")
            return {"records": [_record(state, "".join(state["pages"]), state["title"])]}
        logger.info("No outline titles, skipping %s", state["topic"])
        return {"records": []}

    records = [_record(state, s["text"], s["title"]) for s in state.get("sections", [])]

    if settings.preamble_title is not None:
        preamble = _record(state, state.get("preamble", ""), settings.preamble_title)
        if settings.direction == BACKWARD:
            records.append(preamble)
        else:
            records.insert(0, preamble)

    if len(records) == 1:
        logger.info("Only one record for %r (%s)", state["title"], state["topic"])
    logger.info("Assembly complete: %d records", len(records))
    return {"records": records}
