"""parsers/ — EPUB container reading and markup-to-text extraction."""

from pathlib import Path

from parsers.base import EpubFormatError, ParseResult

SUPPORTED_EXTENSIONS = {".epub"}

__all__ = ["EpubFormatError", "ParseResult", "SUPPORTED_EXTENSIONS", "parse_file"]


def parse_file(file_path: Path) -> ParseResult:
    """Dispatch to the EPUB parser after checking the input looks like one."""
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Input not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix == ".epub" or file_path.is_dir():
        from parsers.epub_parser import parse_epub
        return parse_epub(file_path)
    raise ValueError(
        f"Unsupported file format: '{suffix}'. "
        f"Supported: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
    )
