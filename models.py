"""models.py — Shared data types for epubconvert."""

from dataclasses import dataclass, field
from enum import Enum


class LineRole(str, Enum):
    TITLE = "title"
    SUBTITLE = "subtitle"
    BODY = "body"
    DISCARDED = "discarded"


@dataclass
class BookInfo:
    title: str
    author: str = ""    # Empty when no author pattern matched


@dataclass
class TocEntry:
    display_title: str
    target_index: int   # Position of the source block, 0-based
    ordinal: int        # 1-based, dense over the entries that survive filtering

    @property
    def anchor(self) -> str:
        return f"chapter-{self.target_index}"


@dataclass
class BodyNode:
    kind: str           # "subtitle" or "paragraph"
    text: str
    is_drop_capped: bool = False


@dataclass
class ChapterDocument:
    block_index: int
    title_line: str | None = None
    body_nodes: list[BodyNode] = field(default_factory=list)

    @property
    def anchor(self) -> str:
        return f"chapter-{self.block_index}"

    @property
    def paragraphs(self) -> list[BodyNode]:
        return [n for n in self.body_nodes if n.kind == "paragraph"]


@dataclass
class ConversionResult:
    info: BookInfo
    toc: list[TocEntry]
    chapters: list[ChapterDocument]
    blocks: list[str]       # Raw text per content document, archive order
    source_name: str = ""   # e.g. "my_book.epub"
