#!/usr/bin/env python3
"""
epubconvert — Convert EPUB e-books into a single styled HTML page or a PDF.

The HTML output rebuilds chapter titles, section headings and paragraphs from
the book's plain text and links them from a generated table of contents.
The PDF output flows the extracted text into fixed-size pages.

Quick start:
  1. python epubconvert.py book.epub --dry-run
  2. python epubconvert.py book.epub
  3. python epubconvert.py book.epub --format pdf --output ~/Desktop/book.pdf

Defaults can be set in .env (see settings.py):
  EPUBCONVERT_FORMAT=pdf
  EPUBCONVERT_LANG=es
"""

import argparse
import sys
from pathlib import Path

from settings import FORMATS, LANGUAGES, load_settings


def build_parser(settings=None) -> argparse.ArgumentParser:
    settings = settings or load_settings()
    parser = argparse.ArgumentParser(
        prog="epubconvert",
        description="Convert EPUB e-books to a standalone HTML page or a PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Dry run — show detected title, author and table of contents:
  python epubconvert.py book.epub --dry-run

  # HTML with Spanish labels:
  python epubconvert.py libro.epub --lang es

  # PDF in US Letter, 12pt:
  python epubconvert.py book.epub --format pdf --page-size letter --font-size 12

  # Unpacked EPUB directory:
  python epubconvert.py "My Book.epub/"
        """,
    )
    parser.add_argument("input_path", type=Path, help="Path to an .epub file or unpacked EPUB directory")
    parser.add_argument(
        "--format", choices=FORMATS, default=settings.output_format, dest="output_format",
        help=f"Output format (default: {settings.output_format})",
    )
    parser.add_argument(
        "--output", type=Path, default=None, metavar="PATH",
        help="Output file path (default: <output-dir>/<book>.html or .pdf)",
    )
    parser.add_argument(
        "--output-dir", type=Path, default=settings.output_dir, metavar="DIR",
        help=f"Directory for the converted file (default: {settings.output_dir})",
    )
    parser.add_argument(
        "--lang", choices=LANGUAGES, default=settings.lang,
        help=f"Language of the HTML page labels (default: {settings.lang})",
    )
    parser.add_argument(
        "--page-size", default=settings.pdf_page_size, metavar="NAME",
        help=f"PDF page size, e.g. a4, letter (default: {settings.pdf_page_size})",
    )
    parser.add_argument(
        "--font-size", type=float, default=settings.pdf_font_size, metavar="PT",
        help=f"PDF font size in points (default: {settings.pdf_font_size:g})",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Parse the book and list its table of contents without writing output",
    )
    return parser


def print_summary(result, document_count: int) -> None:
    print(f"Title:  {result.info.title}")
    print(f"Author: {result.info.author or '(unknown)'}")
    print(f"Content documents: {document_count}")
    print(f"Chapters: {len(result.chapters)}")


def print_toc(toc) -> None:
    print(f"\nTable of contents ({len(toc)} entries):")
    print("-" * 70)
    for entry in toc:
        print(f"  {entry.ordinal:2d}. {entry.display_title:<56} #{entry.anchor}")
    print("-" * 70)
    print()


def main(argv=None) -> int:
    try:
        settings = load_settings()
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1
    args = build_parser(settings).parse_args(argv)

    # Lazy imports keep --help fast
    from parsers import EpubFormatError, parse_file
    from renderers import get_renderer
    from structure import reconstruct

    print(f"Parsing: {args.input_path}")
    try:
        parsed = parse_file(args.input_path)
    except (EpubFormatError, FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    result = reconstruct(parsed.blocks, parsed.fallback_title, source_name=parsed.source_name)
    print_summary(result, len(parsed.blocks))

    if args.dry_run:
        print_toc(result.toc)
        print("Dry run complete. No files written.")
        return 0

    try:
        if args.output_format == "pdf":
            renderer = get_renderer("pdf", page_size=args.page_size, font_size=args.font_size)
        else:
            renderer = get_renderer("html", lang=args.lang)
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Rendering {args.output_format.upper()}...")
    output_file = args.output or args.output_dir / renderer.output_name(result)
    try:
        data = renderer.render(result)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_bytes(data)
    except OSError as e:
        print(f"ERROR: Cannot write {output_file}: {e}")
        return 1

    print(f"\nDone! Saved to: {output_file} ({len(data) // 1024} KB)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
