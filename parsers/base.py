"""parsers/base.py — Shared parser utilities and types."""

import re
import warnings
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, NavigableString, Tag, XMLParsedAsHTMLWarning
from bs4.element import PreformattedString

warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)

BLOCK_TAGS = {"p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "br"}
DROP_TAGS = ["script", "style"]
WS_RE = re.compile(r"\s+")


class EpubFormatError(ValueError):
    """The input is not a readable EPUB container."""


@dataclass
class ParseResult:
    """Standard return type for all parsers."""
    blocks: list[str]               # One plain-text block per content document
    fallback_title: str             # Source filename without extension
    source_name: str = ""
    document_names: list[str] = field(default_factory=list)


def _render_text(element: Tag) -> str:
    parts = []
    for node in element.children:
        if isinstance(node, NavigableString):
            # Comments, CDATA, doctypes and processing instructions
            if isinstance(node, PreformattedString):
                continue
            # Source line wrapping inside a text node is not a break
            parts.append(WS_RE.sub(" ", str(node)))
        elif isinstance(node, Tag):
            if node.name.lower() in BLOCK_TAGS:
                parts.append("\n" + _render_text(node) + "\n")
            else:
                parts.append(_render_text(node))
    return "".join(parts)


def normalize_lines(text: str) -> str:
    """Collapse spaces per line, trim lines and squeeze runs of blank lines."""
    cleaned_lines = []
    prev_blank = False
    for line in text.split("\n"):
        line = re.sub(r"[ \t]+", " ", line).strip()
        if not line:
            if not prev_blank:
                cleaned_lines.append("")
            prev_blank = True
        else:
            cleaned_lines.append(line)
            prev_blank = False
    return "\n".join(cleaned_lines).strip()


def html_to_text(markup: str, xml: bool = False) -> str:
    """
    Strip markup down to plain text.
    Block-level tags become line breaks; script/style content is discarded.
    Inline tags are joined without a separator, so "<b>O</b>nce" stays "Once".
    """
    soup = BeautifulSoup(markup, features="lxml-xml" if xml else "lxml")
    for tag in soup.find_all(DROP_TAGS):
        tag.decompose()
    root = soup.body or soup
    return normalize_lines(_render_text(root))
