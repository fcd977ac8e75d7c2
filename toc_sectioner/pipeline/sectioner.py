"""
Cuts page text into sections by locating outline titles in the body.

Titles extracted from an outline rarely appear verbatim in rendered text, so
each one is searched with a sliding window scored by edit distance and
accepted when the best window is within a tolerance proportional to the
title length. Titles are consumed strictly in worklist order: from the front
when scanning forward, from the back when scanning backward.
"""

import logging
import math
import unicodedata
from collections import deque
from typing import Iterable

from toc_sectioner.pipeline.distance import edit_distance
from toc_sectioner.state import Boundary, Section

logger = logging.getLogger(__name__)

FORWARD = "forward"
BACKWARD = "backward"
FUZZY = "fuzzy"
EXACT = "exact"

DEFAULT_TOLERANCE_RATIO = 0.1


def match_tolerance(title: str, ratio: float = DEFAULT_TOLERANCE_RATIO) -> int:
    """Edit budget for ``title``: ``len(title) * ratio`` rounded half up."""
    return math.floor(len(title) * ratio + 0.5)


def find_title(
    content: str,
    title: str,
    tolerance: int,
    reverse: bool = False,
    before: int | None = None,
) -> tuple[int, int] | None:
    """Return ``(offset, distance)`` of the closest window, or None.

    Windows are ``len(title)`` characters wide and scanned left to right, or
    right to left with ``reverse``. Only windows starting before ``before``
    are considered. The best offset moves only on a strict improvement, so
    ties go to the window seen first; distance 0 stops the scan.

    The result is the closest window overall, not the first one within
    tolerance: a later exact hit beats an earlier near miss.
    """
    width = len(title)
    last = len(content) - width
    if before is not None:
        last = min(last, before - 1)
    if not width or last < 0:
        return None

    offsets = range(last, -1, -1) if reverse else range(last + 1)
    best = tolerance + 1
    best_offset = None
    for offset in offsets:
        dist = edit_distance(content[offset:offset + width], title, max_distance=best - 1)
        if dist < best:
            best, best_offset = dist, offset
            if dist == 0:
                break

    if best_offset is None:
        return None
    return best_offset, best


def _widen(content: str, start: int, end: int) -> tuple[int, int]:
    """Grow ``[start, end)`` so no combining mark is cut off its base character."""
    while 0 < start < len(content) and unicodedata.combining(content[start]):
        start -= 1
    while end < len(content) and unicodedata.combining(content[end]):
        end += 1
    return start, end


class SectionMatcher:
    """Single-use matcher for one document.

    Feed it the normalized pages with :meth:`run`; afterwards ``sections``
    holds the matched sections in match order, ``boundaries`` the matched
    title spans, ``preamble`` the untitled text before the first boundary and
    ``unmatched`` whatever stayed in the worklist.
    """

    def __init__(
        self,
        titles: Iterable[str],
        direction: str = FORWARD,
        mode: str = FUZZY,
        tolerance_ratio: float = DEFAULT_TOLERANCE_RATIO,
    ):
        if direction not in (FORWARD, BACKWARD):
            raise ValueError(f"Unknown scan direction: {direction!r}")
        if mode not in (FUZZY, EXACT):
            raise ValueError(f"Unknown match mode: {mode!r}")

        self.direction = direction
        self.mode = mode
        self.tolerance_ratio = tolerance_ratio
        self.worklist: deque[str] = titles if isinstance(titles, deque) else deque(titles)

        self.sections: list[Section] = []
        self.boundaries: list[Boundary] = []
        self.preamble = ""

        # forward: the section currently receiving text
        self._title: str | None = None
        self._parts: list[str] = []
        self._start = 0

        # backward: unconsumed text and how many of its leading characters
        # have not been scanned for the current title yet
        self._pending = ""
        self._fresh = 0

    @property
    def unmatched(self) -> list[str]:
        return list(self.worklist)

    def run(self, pages: list[str]) -> list[Section]:
        starts = []
        offset = 0
        for page in pages:
            starts.append(offset)
            offset += len(page)

        if self.direction == FORWARD:
            for page, start in zip(pages, starts):
                self._feed_forward(page, start)
            self._close(offset)
        else:
            for page, start in zip(reversed(pages), reversed(starts)):
                self._feed_backward(page, start)
            self.preamble = self._pending

        if self.worklist:
            logger.warning(
                "%d outline titles unmatched: %s",
                len(self.worklist), ", ".join(repr(t) for t in self.worklist),
            )
        return self.sections

    def _locate(self, content: str, title: str, before: int | None = None) -> tuple[int, int, int] | None:
        reverse = self.direction == BACKWARD
        if self.mode == EXACT:
            if reverse:
                stop = len(content) if before is None else min(len(content), before - 1 + len(title))
                offset = content.rfind(title, 0, stop)
            else:
                offset = content.find(title)
            if offset < 0 or not title:
                return None
            dist = 0
        else:
            tolerance = match_tolerance(title, self.tolerance_ratio)
            hit = find_title(content, title, tolerance, reverse=reverse, before=before)
            if hit is None:
                return None
            offset, dist = hit

        start, end = _widen(content, offset, offset + len(title))
        return start, end, dist

    def _record(self, title: str, start: int, end: int, dist: int) -> None:
        self.boundaries.append(Boundary(title=title, start=start, end=end, distance=dist))
        logger.debug("Boundary %r at %d-%d (distance %d)", title, start, end, dist)

    # -- forward ---------------------------------------------------------

    def _feed_forward(self, content: str, pos: int) -> None:
        while self.worklist:
            title = self.worklist[0]
            hit = self._locate(content, title)
            if hit is None:
                break

            start, end, dist = hit
            self._parts.append(content[:start])
            self._close(pos + start)

            self.worklist.popleft()
            self._record(title, pos + start, pos + end, dist)
            self._title, self._start = title, pos + end
            content, pos = content[end:], pos + end

        self._parts.append(content)

    def _close(self, end: int) -> None:
        text = "".join(self._parts)
        self._parts = []
        if self._title is None:
            self.preamble = text
            return
        self.sections.append(Section(title=self._title, text=text, start=self._start, end=end))

    # -- backward --------------------------------------------------------

    def _feed_backward(self, content: str, pos: int) -> None:
        self._pending = content + self._pending
        self._fresh += len(content)

        while self.worklist:
            title = self.worklist[-1]
            hit = self._locate(self._pending, title, before=self._fresh)
            if hit is None:
                # every window starting here has now been tried for this title
                self._fresh = 0
                return

            start, end, dist = hit
            self.sections.append(Section(
                title=title,
                text=self._pending[end:],
                start=pos + end,
                end=pos + len(self._pending),
            ))
            self.worklist.pop()
            self._record(title, pos + start, pos + end, dist)

            self._pending = self._pending[:start]
            self._fresh = len(self._pending)


def strip_toc_echo(pages: list[str], title: str) -> list[str]:
    """Blank out the first exact occurrence of ``title`` on the first page."""
    if not pages or not title or title not in pages[0]:
        return pages
    return [pages[0].replace(title, " ", 1), *pages[1:]]


def discover_sections(state: dict) -> dict:
    """Match the worklist against the page text."""
    settings = state["settings"]
    pages = state["pages"]
    worklist = state["worklist"]

    if settings.strip_toc_echo and worklist:
        pages = strip_toc_echo(pages, worklist[0])

    matcher = SectionMatcher(
        worklist,
        direction=settings.direction,
        mode=settings.match_mode,
        tolerance_ratio=settings.tolerance_ratio,
    )
    sections = matcher.run(pages)

    for s in sections:
        logger.debug("  Section %r %d chars", s["title"], len(s["text"]))
    logger.info("Matched %d sections (%s, %s)", len(sections), settings.direction, settings.match_mode)
    return {
        "sections": sections,
        "boundaries": matcher.boundaries,
        "preamble": matcher.preamble,
        "unmatched": matcher.unmatched,
    }
