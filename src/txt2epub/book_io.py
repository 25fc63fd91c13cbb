from __future__ import annotations

import html
import uuid
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable

from ebooklib import epub

from .logging_utils import debug_log
from .render import DEFAULT_CSS, TOOL_NAME, body_to_html, cover_page_html, info_page_html
from .segment import Chapter
from .stats import ConversionStats

COVER_PAGE_TITLE = "封面"
INFO_PAGE_TITLE = "图书信息"
_STYLESHEET_NAME = "style/main.css"
_SUPPORTED_COVER_EXTS = (".jpg", ".jpeg", ".png", ".gif", ".webp")


@dataclass
class BookMetadata:
    title: str
    author: str
    maker: str
    description: str | None = None
    cover: Path | None = None
    language: str = "zh"
    publisher: str = TOOL_NAME


@dataclass
class EpubChapter:
    title: str
    html_body: str


@dataclass
class EpubPackage:
    output_path: Path
    chapter_files: list[str]
    cover_path: Path | None


def build_epub_chapters(chapters: Iterable[Chapter]) -> list[EpubChapter]:
    return [
        EpubChapter(title=chapter.title, html_body=body_to_html(chapter.body))
        for chapter in chapters
    ]


def default_description(stats: ConversionStats) -> str:
    return f"共 {stats.chapter_count} 章，约 {stats.ten_thousands} 万字"


def _html_document(title: str, file_name: str, content: str, language: str) -> epub.EpubHtml:
    item = epub.EpubHtml(title=title, file_name=file_name, lang=language)
    item.content = content
    item.add_link(href=_STYLESHEET_NAME, rel="stylesheet", type="text/css")
    return item


def _cover_file_name(cover: Path) -> str | None:
    suffix = cover.suffix.lower()
    if suffix not in _SUPPORTED_COVER_EXTS:
        return None
    return f"cover{'.jpg' if suffix == '.jpeg' else suffix}"


def _attach_cover(book: epub.EpubBook, cover: Path | None) -> Path | None:
    if cover is None:
        return None
    if not cover.is_file():
        debug_log(f"Cover image not found, skipping: {cover}")
        return None
    file_name = _cover_file_name(cover)
    if file_name is None:
        debug_log(f"Unsupported cover image type, skipping: {cover}")
        return None
    book.set_cover(file_name, cover.read_bytes(), create_page=False)
    return cover


def write_epub(
    output_path: Path,
    chapters: list[EpubChapter],
    metadata: BookMetadata,
    stats: ConversionStats,
    *,
    css: str = DEFAULT_CSS,
    made_on: date | None = None,
) -> EpubPackage:
    """
    Package rendered chapters into an EPUB 3 file with ebooklib.

    The book starts with a cover page (reading order only, not listed in the
    table of contents), followed by a book information page and one XHTML
    document per chapter.
    """
    book = epub.EpubBook()
    book.set_identifier(f"urn:uuid:{uuid.uuid4()}")
    book.set_title(metadata.title)
    book.set_language(metadata.language)
    book.add_author(metadata.author)
    book.add_metadata("DC", "publisher", metadata.publisher)
    book.add_metadata("DC", "description", metadata.description or default_description(stats))

    stylesheet = epub.EpubItem(
        uid="style_main",
        file_name=_STYLESHEET_NAME,
        media_type="text/css",
        content=css.encode("utf-8"),
    )
    book.add_item(stylesheet)
    cover_path = _attach_cover(book, metadata.cover)

    cover_page = _html_document(
        COVER_PAGE_TITLE,
        "cover_page.xhtml",
        cover_page_html(metadata.title, metadata.author),
        metadata.language,
    )
    info_page = _html_document(
        INFO_PAGE_TITLE,
        "info.xhtml",
        info_page_html(
            metadata.title,
            metadata.author,
            metadata.maker,
            stats.chapter_count,
            stats.total_words,
            made_on=made_on,
        ),
        metadata.language,
    )
    book.add_item(cover_page)
    book.add_item(info_page)

    chapter_items: list[epub.EpubHtml] = []
    for index, chapter in enumerate(chapters, start=1):
        file_name = f"chapter_{index:04d}.xhtml"
        content = f"<h2>{html.escape(chapter.title, quote=False)}</h2>\n{chapter.html_body}"
        item = _html_document(chapter.title, file_name, content, metadata.language)
        book.add_item(item)
        chapter_items.append(item)

    book.toc = [info_page, *chapter_items]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = [cover_page, "nav", info_page, *chapter_items]

    output_path.parent.mkdir(parents=True, exist_ok=True)
    debug_log(f"Writing {len(chapter_items)} chapter documents to {output_path}")
    epub.write_epub(str(output_path), book, {})
    return EpubPackage(
        output_path=output_path,
        chapter_files=[item.file_name for item in chapter_items],
        cover_path=cover_path,
    )
