"""parsers/epub_parser.py — Read EPUB (packed or directory) into plain-text blocks."""

import zipfile
import zlib
from pathlib import Path

from tqdm import tqdm

from parsers.base import EpubFormatError, ParseResult, html_to_text

EPUB_MIMETYPE = "application/epub+zip"
CONTENT_SUFFIXES = (".html", ".xhtml")
EXCLUDED_NAME_PARTS = ("nav", "toc")


def is_content_document(name: str) -> bool:
    """Readable book text, as opposed to navigation documents or resources."""
    return name.endswith(CONTENT_SUFFIXES) and not any(
        part in name for part in EXCLUDED_NAME_PARTS
    )


def _decode(name: str, data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EpubFormatError(f"Content document is not valid UTF-8: {name} ({e})") from e


def _read_zip_documents(epub_path: Path) -> list[tuple[str, str]]:
    """Return (entry name, markup) for every content document, archive order."""
    if not zipfile.is_zipfile(epub_path):
        raise EpubFormatError(f"Not an EPUB (zip) container: {epub_path}")

    try:
        with zipfile.ZipFile(epub_path) as zf:
            names = zf.namelist()
            if "mimetype" in names:
                mimetype = zf.read("mimetype").decode("ascii", errors="replace").strip()
                if mimetype != EPUB_MIMETYPE:
                    raise EpubFormatError(f"Unexpected mimetype '{mimetype}' in {epub_path}")
            return [
                (name, _decode(name, zf.read(name)))
                for name in names
                if is_content_document(name)
            ]
    except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, OSError) as e:
        raise EpubFormatError(f"Cannot read EPUB archive {epub_path}: {e}") from e


def _read_dir_documents(epub_dir: Path) -> list[tuple[str, str]]:
    """Unpacked EPUB: files sorted by their path relative to the root."""
    docs = []
    for path in sorted(p for p in epub_dir.rglob("*") if p.is_file()):
        name = path.relative_to(epub_dir).as_posix()
        if is_content_document(name):
            docs.append((name, _decode(name, path.read_bytes())))
    return docs


def parse_epub(epub_path: Path) -> ParseResult:
    """Main entry point. Returns ParseResult with one text block per content document."""
    epub_path = Path(epub_path)
    if epub_path.is_dir():
        documents = _read_dir_documents(epub_path)
        fallback_title = epub_path.name.removesuffix(".epub")
    else:
        documents = _read_zip_documents(epub_path)
        fallback_title = epub_path.stem

    if not documents:
        raise EpubFormatError(f"No HTML/XHTML content documents found in {epub_path}")

    blocks, names = [], []
    for name, markup in tqdm(documents, desc="  Extracting text", unit="doc"):
        text = html_to_text(markup, xml=name.endswith(".xhtml"))
        if text.strip():
            blocks.append(text)
            names.append(name)

    return ParseResult(
        blocks=blocks,
        fallback_title=fallback_title,
        source_name=epub_path.name,
        document_names=names,
    )
