"""
Shared TypedDicts for the sectioning pipeline.
"""

from typing import TypedDict


class OutlineNode(TypedDict):
    title: str
    children: list["OutlineNode"]


class Boundary(TypedDict):
    title: str
    start: int       # offset of the matched title in the normalized document
    end: int
    distance: int    # edit distance of the accepted match


class Section(TypedDict):
    title: str
    text: str
    start: int       # body span, normalized document offsets
    end: int


class SectionRecord(TypedDict):
    title: str       # document title, same for every record of a document
    topic: str       # source file name
    language: str
    text: str
    paragraph: str   # matched section title
