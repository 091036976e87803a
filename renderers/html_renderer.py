"""renderers/html_renderer.py — Single-file HTML page with cover, TOC and chapters."""

import datetime
from html import escape

from models import BodyNode, ChapterDocument, ConversionResult, TocEntry
from renderers import Renderer

LABELS = {
    "en": {
        "back_to_top": "↑ Top",
        "by": "by",
        "converted_from": "Converted from EPUB",
        "toc": "\U0001F4DA Contents",
        "footer": "\U0001F4D6 Generated automatically from EPUB",
        "converted_on": "Converted on",
    },
    "es": {
        "back_to_top": "↑ Inicio",
        "by": "por",
        "converted_from": "Convertido desde formato EPUB",
        "toc": "\U0001F4DA Índice de Contenidos",
        "footer": "\U0001F4D6 Documento generado automáticamente desde EPUB",
        "converted_on": "Fecha de conversión",
    },
}

STYLESHEET = """
body {
    font-family: Georgia, 'Times New Roman', serif;
    line-height: 1.8;
    max-width: 900px;
    margin: 0 auto;
    padding: 40px 20px;
    background-color: #fafafa;
    color: #2c3e50;
}
.cover-page {
    background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
    color: white;
    padding: 80px 40px;
    margin: -40px -20px 60px -20px;
    text-align: center;
    border-radius: 0 0 20px 20px;
}
.cover-title { font-size: 3em; font-weight: bold; margin-bottom: 20px; letter-spacing: 2px; }
.cover-author { font-size: 1.5em; margin-bottom: 30px; font-style: italic; opacity: 0.9; }
.cover-details { opacity: 0.8; border-top: 2px solid rgba(255,255,255,0.3); padding-top: 20px; }
.table-of-contents, .chapter {
    background: white;
    padding: 40px;
    margin-bottom: 40px;
    border-radius: 12px;
    box-shadow: 0 4px 20px rgba(0,0,0,0.08);
    border-left: 6px solid #3498db;
}
.chapter { scroll-margin-top: 20px; }
.toc-title { font-size: 2em; text-align: center; border-bottom: 2px solid #ecf0f1; padding-bottom: 15px; }
.toc-list { list-style: none; padding: 0; }
.toc-item { margin-bottom: 12px; padding: 10px 15px; border-radius: 8px; }
.toc-item:hover { background-color: #f8f9fa; }
.toc-link {
    text-decoration: none;
    color: #34495e;
    display: flex;
    justify-content: space-between;
    align-items: center;
}
.toc-link:hover { color: #3498db; }
.toc-number {
    background: #3498db;
    color: white;
    padding: 4px 12px;
    border-radius: 20px;
    font-size: 0.9em;
    min-width: 25px;
    text-align: center;
}
.chapter-title {
    font-size: 1.8em;
    padding-bottom: 15px;
    border-bottom: 2px solid #ecf0f1;
    text-transform: uppercase;
    letter-spacing: 1px;
}
.section-title { color: #34495e; font-size: 1.4em; margin: 30px 0 20px 0; }
.content p { margin-bottom: 18px; text-align: justify; text-indent: 1.5em; }
.content p:first-child { text-indent: 0; }
.dropcap {
    float: left;
    font-size: 4em;
    line-height: 0.8;
    padding-right: 8px;
    padding-top: 4px;
    color: #3498db;
    font-weight: bold;
}
.footer {
    text-align: center;
    margin-top: 60px;
    padding-top: 30px;
    border-top: 2px solid #bdc3c7;
    color: #7f8c8d;
    font-style: italic;
}
.nav-top {
    position: fixed;
    top: 20px;
    right: 20px;
    background: #3498db;
    color: white;
    padding: 10px 15px;
    border-radius: 25px;
    text-decoration: none;
    font-size: 0.9em;
    z-index: 1000;
}
@media (max-width: 600px) {
    body { padding: 20px 10px; }
    .cover-page { padding: 40px 20px; margin: -20px -10px 40px -10px; }
    .cover-title { font-size: 2em; }
    .chapter { padding: 25px; }
    .nav-top { display: none; }
}
"""


def render_paragraph(node: BodyNode) -> str:
    if node.is_drop_capped and node.text:
        first, rest = node.text[0], node.text[1:]
        return f'<p><span class="dropcap">{escape(first)}</span>{escape(rest)}</p>'
    return f"<p>{escape(node.text)}</p>"


def render_toc_entry(entry: TocEntry) -> str:
    return (
        '<li class="toc-item">'
        f'<a href="#{entry.anchor}" class="toc-link">'
        f"<span>{escape(entry.display_title)}</span>"
        f'<span class="toc-number">{entry.ordinal}</span>'
        "</a></li>"
    )


def render_chapter(chapter: ChapterDocument) -> str:
    lines = [f'<div id="{chapter.anchor}" class="chapter">']
    if chapter.title_line:
        lines.append(f'<h2 class="chapter-title">{escape(chapter.title_line)}</h2>')
    lines.append('<div class="content">')
    for node in chapter.body_nodes:
        if node.kind == "subtitle":
            lines.append(f'<h3 class="section-title">{escape(node.text)}</h3>')
        else:
            lines.append(render_paragraph(node))
    lines += ["</div>", "</div>"]
    return "\n".join(lines)


class HtmlRenderer(Renderer):
    extension = ".html"
    media_type = "text/html"

    def __init__(self, lang: str = "en", generated_on: datetime.date | None = None):
        if lang not in LABELS:
            raise ValueError(f"Unsupported language: '{lang}'. Supported: {', '.join(LABELS)}")
        self.lang = lang
        self.generated_on = generated_on

    def render_page(self, result: ConversionResult) -> str:
        labels = LABELS[self.lang]
        info = result.info
        date = (self.generated_on or datetime.date.today()).isoformat()
        title = escape(info.title)

        lines = [
            "<!DOCTYPE html>",
            f'<html lang="{self.lang}">',
            "<head>",
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{title}</title>",
            f"<style>{STYLESHEET}</style>",
            "</head>",
            "<body>",
            f'<a href="#top" class="nav-top">{labels["back_to_top"]}</a>',
            '<div id="top" class="cover-page">',
            f'<h1 class="cover-title">{title}</h1>',
        ]
        if info.author:
            lines.append(f'<div class="cover-author">{labels["by"]} {escape(info.author)}</div>')
        lines += [
            '<div class="cover-details">',
            f'<div>{labels["converted_from"]}</div>',
            f"<div>{date}</div>",
            "</div>",
            "</div>",
            '<div class="table-of-contents">',
            f'<h2 class="toc-title">{labels["toc"]}</h2>',
            '<ul class="toc-list">',
        ]
        lines += [render_toc_entry(entry) for entry in result.toc]
        lines += ["</ul>", "</div>"]
        lines += [render_chapter(chapter) for chapter in result.chapters]
        lines += [
            '<div class="footer">',
            f'<p>{labels["footer"]}</p>',
            f'<p>{labels["converted_on"]}: {date}</p>',
            "</div>",
            "</body>",
            "</html>",
        ]
        return "\n".join(lines) + "\n"

    def render(self, result: ConversionResult) -> bytes:
        return self.render_page(result).encode("utf-8")
