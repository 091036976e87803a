import zipfile

import pytest


def _xhtml(body: str) -> str:
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<html xmlns="http://www.w3.org/1999/xhtml">\n'
        "<head><title>ignored head title</title><style>p { color: red; }</style></head>\n"
        f"<body>{body}</body>\n"
        "</html>\n"
    )


@pytest.fixture
def make_epub(tmp_path):
    """Build a minimal EPUB: make_epub({"OEBPS/ch1.xhtml": "<p>..</p>"}) -> Path."""

    def _make(documents: dict[str, str], name: str = "book.epub", mimetype: str = "application/epub+zip"):
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("mimetype", mimetype)
            zf.writestr(
                "META-INF/container.xml",
                '<?xml version="1.0"?><container version="1.0"/>',
            )
            for entry, body in documents.items():
                zf.writestr(entry, _xhtml(body))
        return path

    return _make


@pytest.fixture
def sample_epub(make_epub):
    return make_epub(
        {
            "OEBPS/nav.xhtml": "<nav><ol><li>Chapter list</li></ol></nav>",
            "OEBPS/cover.xhtml": "<h1>PORTADA</h1>",
            "OEBPS/ch1.xhtml": (
                "<h1>MY BOOK TITLE</h1>"
                "<p>John Smith,</p>"
                "<p>Once upon a time in a land far away, things happened slowly.</p>"
            ),
            "OEBPS/ch2.xhtml": (
                "<h2>CHAPTER TWO</h2>"
                "<p>And then more things happened over time.</p>"
                "<script>var hidden = 'should not appear';</script>"
            ),
            "OEBPS/style.css": "p { margin: 0; }",
        },
        name="sample_book.epub",
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep EPUBCONVERT_* values loaded from .env files from leaking between tests."""
    for name in (
        "EPUBCONVERT_FORMAT",
        "EPUBCONVERT_OUTPUT_DIR",
        "EPUBCONVERT_LANG",
        "EPUBCONVERT_PDF_PAGE_SIZE",
        "EPUBCONVERT_PDF_FONT_SIZE",
    ):
        # setenv first so monkeypatch records the original state and restores it
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
