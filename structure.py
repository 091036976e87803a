"""structure.py — Rebuild chapter/title structure from flat per-document text.

The input is one plain-text block per EPUB content document, in archive order.
Nothing here sees markup: titles, subtitles and paragraphs are inferred from
line shape alone (capitalisation, length, numbering, terminal punctuation).
Every function is pure and total over string input.
"""

import re

from models import (
    BodyNode,
    BookInfo,
    ChapterDocument,
    ConversionResult,
    LineRole,
    TocEntry,
)

TITLE_MAX_CHARS = 80
SUBTITLE_MAX_CHARS = 100
BOOK_TITLE_MAX_CHARS = 100
MIN_PARAGRAPH_CHARS = 30    # Body lines at or under this are noise
TITLE_SCAN_LINES = 3        # A chapter title must appear among the first N lines
TOC_FALLBACK_CHARS = 50

# Spanish markers match as substrings, English ones only as whole words
COVER_MARKER_RE = re.compile(r"PORTADA|\bCOVER\b")
CREDITS_MARKER_RE = re.compile(r"CRÉDITOS|\bCREDITS\b")

# Latin script only, with the Spanish accented capitals.
_UPPER = "A-ZÁÉÍÓÚÑ"
_LOWER = "a-záéíóúñ"
_NAME = rf"[{_UPPER}][{_LOWER}]+(?:\s+[{_UPPER}][{_LOWER}]+)*"

ENUMERATION_RE = re.compile(r"^\d+\.")
ENUMERATION_PREFIX_RE = re.compile(r"^\d+\.\s*")
TERMINAL_PUNCT_RE = re.compile(r"[.!?]$")
UPPER_START_RE = re.compile(rf"^[{_UPPER}]")
TITLE_PREFIX_RE = re.compile(r"^.*-\s*")

AUTHOR_PATTERNS = [
    re.compile(r"\b(?:by|por|author|autor)[\s:]+([^,\n]+)", re.IGNORECASE),
    re.compile(rf"({_NAME}),"),
    re.compile(rf"^({_NAME})\s*-", re.MULTILINE),  # any line start, not only the first
]


def split_lines(text: str) -> list[str]:
    """Split a block into trimmed, non-empty lines."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def has_marker(text: str, markers=(COVER_MARKER_RE, CREDITS_MARKER_RE)) -> bool:
    return any(m.search(text) for m in markers)


# --- Line classification ---------------------------------------------------

def ends_with_terminal_punctuation(line: str) -> bool:
    return TERMINAL_PUNCT_RE.search(line) is not None


def is_all_caps_heading(line: str) -> bool:
    return line == line.upper() and " " in line and len(line) < TITLE_MAX_CHARS


def is_numbered_heading(line: str) -> bool:
    return ENUMERATION_RE.match(line.strip()) is not None and len(line) < TITLE_MAX_CHARS


def is_leading_line_title(line: str, index: int) -> bool:
    return (
        index == 0
        and len(line) < TITLE_MAX_CHARS
        and not ends_with_terminal_punctuation(line)
    )


def is_title(line: str, index: int, lines: list[str] | None = None) -> bool:
    """True when any of the three title heuristics fires.

    ``lines`` is the block's full line list. The current rules only use
    ``index``.
    """
    return (
        is_all_caps_heading(line)
        or is_numbered_heading(line)
        or is_leading_line_title(line, index)
    )


def is_subtitle(line: str) -> bool:
    return (
        len(line) < SUBTITLE_MAX_CHARS
        and not ends_with_terminal_punctuation(line)
        and UPPER_START_RE.match(line) is not None
    )


def classify_line(line: str, index: int, lines: list[str] | None = None) -> LineRole:
    if is_title(line, index, lines):
        return LineRole.TITLE
    if is_subtitle(line):
        return LineRole.SUBTITLE
    if len(line) <= MIN_PARAGRAPH_CHARS:
        return LineRole.DISCARDED
    return LineRole.BODY


def format_title(raw: str) -> str:
    return ENUMERATION_PREFIX_RE.sub("", raw.strip()).strip()


def find_title_index(lines: list[str]) -> int | None:
    """Index of the first Title line among the first TITLE_SCAN_LINES, if any."""
    for i, line in enumerate(lines[:TITLE_SCAN_LINES]):
        if is_title(line, i, lines):
            return i
    return None


# --- Book info -------------------------------------------------------------

def extract_author(text: str) -> str:
    for pattern in AUTHOR_PATTERNS:
        m = pattern.search(text)
        if m and m.group(1):
            return m.group(1).strip()
    return ""


def extract_book_info(blocks: list[str], fallback_title: str) -> BookInfo:
    """Guess title and author from the first content block only."""
    if not blocks:
        return BookInfo(title=fallback_title, author="")

    first = blocks[0]
    author = extract_author(first)

    title = fallback_title
    lines = split_lines(first)
    if lines:
        first_line = lines[0]
        if len(first_line) < BOOK_TITLE_MAX_CHARS and not has_marker(first_line, (COVER_MARKER_RE,)):
            title = TITLE_PREFIX_RE.sub("", first_line).strip() or fallback_title

    return BookInfo(title=title, author=author)


# --- Table of contents -----------------------------------------------------

def _fallback_toc_title(line: str) -> str:
    if len(line) > TOC_FALLBACK_CHARS:
        return line[:TOC_FALLBACK_CHARS] + "..."
    return line


def toc_title_for(lines: list[str]) -> str:
    title_idx = find_title_index(lines)
    title = format_title(lines[title_idx]) if title_idx is not None else ""
    return title or _fallback_toc_title(lines[0])


def build_toc(blocks: list[str]) -> list[TocEntry]:
    entries = []
    ordinal = 1
    for index, text in enumerate(blocks):
        lines = split_lines(text)
        if not lines:
            continue
        display_title = toc_title_for(lines)
        # Same exclusion as format_chapter so every entry has a target
        if has_marker(display_title) or has_marker(text):
            continue
        entries.append(TocEntry(display_title=display_title, target_index=index, ordinal=ordinal))
        ordinal += 1
    return entries


# --- Chapter formatting ----------------------------------------------------

def format_chapter(text: str, block_index: int) -> ChapterDocument | None:
    """
    Build the structured chapter for one block, or None for cover/credits
    pages and blocks with no text.
    """
    if has_marker(text):
        return None
    lines = split_lines(text)
    if not lines:
        return None

    chapter = ChapterDocument(block_index=block_index)
    title_idx = find_title_index(lines)
    drop_capped = False

    for i, line in enumerate(lines):
        if i == title_idx:
            chapter.title_line = format_title(line) or line
            continue

        role = classify_line(line, i, lines)
        if role in (LineRole.TITLE, LineRole.SUBTITLE):
            chapter.body_nodes.append(BodyNode(kind="subtitle", text=format_title(line)))
        elif role == LineRole.BODY:
            chapter.body_nodes.append(
                BodyNode(kind="paragraph", text=line, is_drop_capped=not drop_capped)
            )
            drop_capped = True

    return chapter


def reconstruct(blocks: list[str], fallback_title: str, source_name: str = "") -> ConversionResult:
    """Run the whole reconstruction over an ordered block sequence."""
    blocks = list(blocks)
    chapters = []
    for index, text in enumerate(blocks):
        chapter = format_chapter(text, index)
        if chapter is not None:
            chapters.append(chapter)

    return ConversionResult(
        info=extract_book_info(blocks, fallback_title),
        toc=build_toc(blocks),
        chapters=chapters,
        blocks=blocks,
        source_name=source_name,
    )
