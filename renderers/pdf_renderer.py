"""renderers/pdf_renderer.py — Flow the extracted text into fixed-size PDF pages using pymupdf."""

from typing import Callable

from models import ConversionResult
from renderers import Renderer

FONT_NAME = "helv"
LINE_SPACING = 1.4


def wrap_text(text: str, max_width: float, measure: Callable[[str], float]) -> list[str]:
    """
    Greedy word wrap. Newlines in the input are kept as line breaks and blank
    lines survive as empty strings. Words wider than max_width are split by
    character.
    """
    lines = []
    for raw_line in text.split("\n"):
        words = raw_line.split()
        if not words:
            lines.append("")
            continue
        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if measure(candidate) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
            # Hard split for a single word that still doesn't fit
            while measure(word) > max_width and len(word) > 1:
                cut = len(word) - 1
                while cut > 1 and measure(word[:cut]) > max_width:
                    cut -= 1
                lines.append(word[:cut])
                word = word[cut:]
            current = word
        lines.append(current)
    return lines


def paginate(lines: list[str], lines_per_page: int) -> list[list[str]]:
    """Chunk lines into pages; blank lines are not carried to the top of a page."""
    if lines_per_page < 1:
        raise ValueError(f"lines_per_page must be at least 1, got {lines_per_page}")
    pages = []
    current: list[str] = []
    for line in lines:
        if not current and not line:
            continue
        current.append(line)
        if len(current) == lines_per_page:
            pages.append(current)
            current = []
    if current or not pages:
        pages.append(current)
    return pages


def joined_text(result: ConversionResult) -> str:
    return "\n\n".join(block.strip() for block in result.blocks)


class PdfRenderer(Renderer):
    extension = ".pdf"
    media_type = "application/pdf"

    def __init__(self, page_size: str = "a4", font_size: float = 11.0, margin: float = 56.0):
        import fitz  # pymupdf

        width, height = fitz.paper_size(page_size)
        if width <= 0 or height <= 0:
            raise ValueError(f"Unknown page size: '{page_size}'")
        self.page_width = width
        self.page_height = height
        self.font_size = font_size
        self.margin = margin

    @property
    def line_height(self) -> float:
        return self.font_size * LINE_SPACING

    @property
    def lines_per_page(self) -> int:
        usable = self.page_height - 2 * self.margin
        return max(1, int(usable // self.line_height))

    def measure(self, text: str) -> float:
        import fitz

        return fitz.get_text_length(text, fontname=FONT_NAME, fontsize=self.font_size)

    def layout(self, result: ConversionResult) -> list[list[str]]:
        usable_width = self.page_width - 2 * self.margin
        lines = wrap_text(joined_text(result), usable_width, self.measure)
        return paginate(lines, self.lines_per_page)

    def render(self, result: ConversionResult) -> bytes:
        import fitz

        doc = fitz.open()
        try:
            for page_lines in self.layout(result):
                page = doc.new_page(width=self.page_width, height=self.page_height)
                y = self.margin + self.font_size
                for line in page_lines:
                    if line:
                        page.insert_text(
                            (self.margin, y), line,
                            fontname=FONT_NAME, fontsize=self.font_size,
                        )
                    y += self.line_height
            doc.set_metadata({
                "title": result.info.title,
                "author": result.info.author,
                "creator": "epubconvert",
            })
            return doc.tobytes()
        finally:
            doc.close()
