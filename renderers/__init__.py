"""renderers/ — Turn a ConversionResult into a downloadable document."""

from pathlib import Path

from models import ConversionResult

RENDERER_FORMATS = ("html", "pdf")


class Renderer:
    """Base class: one output format, one file extension."""

    extension = ""
    media_type = "application/octet-stream"

    def render(self, result: ConversionResult) -> bytes:
        raise NotImplementedError

    def output_name(self, result: ConversionResult) -> str:
        """'book.epub' -> 'book.html' (or .pdf)."""
        stem = Path(result.source_name).stem if result.source_name else result.info.title
        return f"{stem or 'book'}{self.extension}"


def get_renderer(fmt: str, **options) -> Renderer:
    """Dispatch on output format; options go to the renderer constructor."""
    fmt = fmt.lower()
    if fmt == "html":
        from renderers.html_renderer import HtmlRenderer
        return HtmlRenderer(**options)
    elif fmt == "pdf":
        from renderers.pdf_renderer import PdfRenderer
        return PdfRenderer(**options)
    raise ValueError(
        f"Unsupported output format: '{fmt}'. "
        f"Supported: {', '.join(RENDERER_FORMATS)}"
    )
