from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Sequence

from .book_io import BookMetadata, build_epub_chapters, write_epub
from .dedupe import dedupe_chapters_with_count
from .filtering import filter_lines
from .logging_utils import debug_log
from .render import DEFAULT_CSS
from .segment import Chapter, segment_chapters
from .stats import collect_stats

_BOM = "\ufeff"


class ConversionError(RuntimeError):
    """Raised when a text document cannot be turned into a book."""


class EmptyChapterSetError(ConversionError):
    """Raised when no chapter heading is found anywhere in the document."""


class MissingOptionError(ConversionError, ValueError):
    """Raised when a required conversion option is empty."""


@dataclass
class ConvertOptions:
    input_file: Path
    output_file: Path
    title: str
    author: str
    maker: str
    ad_keywords: Sequence[str] = ()
    cover: Path | None = None
    description: str | None = None
    css: str = DEFAULT_CSS


@dataclass
class ChapterSplit:
    chapters: list[Chapter]
    filtered_lines: int = 0
    detected_chapters: int = 0
    removed_duplicates: int = 0


@dataclass
class ConversionResult:
    output_file: Path
    chapters: int
    total_words: int
    removed_duplicates: int = 0
    filtered_lines: int = 0
    chapter_titles: list[str] = field(default_factory=list)


def load_document(data: bytes) -> tuple[str, ...]:
    """Decode UTF-8 bytes into document lines, dropping a leading BOM."""
    text = data.decode("utf-8")
    if text.startswith(_BOM):
        text = text[len(_BOM) :]
    return tuple(line[:-1] if line.endswith("\r") else line for line in text.split("\n"))


def split_into_chapters(
    lines: Sequence[str], ad_keywords: Sequence[str] = ()
) -> ChapterSplit:
    """
    Run filtering, segmentation and deduplication over document lines.

    Raises ``EmptyChapterSetError`` when segmentation finds no chapter.
    """
    kept, filtered = filter_lines(lines, ad_keywords)
    detected = segment_chapters(kept)
    if not detected:
        raise EmptyChapterSetError("No chapter headings (第…章) found; check the file format.")
    chapters, removed = dedupe_chapters_with_count(detected)
    return ChapterSplit(
        chapters=chapters,
        filtered_lines=filtered,
        detected_chapters=len(detected),
        removed_duplicates=removed,
    )


def _check_required(options: ConvertOptions) -> None:
    missing = [
        name
        for name in ("input_file", "output_file", "title", "author", "maker")
        if not getattr(options, name)
    ]
    if missing:
        raise MissingOptionError(f"Missing required options: {', '.join(missing)}")


def convert_txt_to_epub(
    options: ConvertOptions, *, made_on: date | None = None
) -> ConversionResult:
    _check_required(options)
    input_file = Path(options.input_file)
    if not input_file.is_file():
        raise FileNotFoundError(f"Input file not found: {input_file}")

    debug_log(f"Reading {input_file}")
    lines = load_document(input_file.read_bytes())
    if options.ad_keywords:
        debug_log(f"Filtering lines containing: {', '.join(options.ad_keywords)}")
    split = split_into_chapters(lines, options.ad_keywords)
    debug_log(f"Dropped {split.filtered_lines} filtered line(s)")
    debug_log(f"Detected {split.detected_chapters} chapter heading(s)")
    debug_log(f"Removed {split.removed_duplicates} duplicate chapter(s)")

    stats = collect_stats(split.chapters)
    debug_log(f"Final chapters: {stats.chapter_count}, words: {stats.total_words}")
    metadata = BookMetadata(
        title=options.title,
        author=options.author,
        maker=options.maker,
        description=options.description,
        cover=Path(options.cover) if options.cover else None,
    )
    package = write_epub(
        Path(options.output_file),
        build_epub_chapters(split.chapters),
        metadata,
        stats,
        css=options.css,
        made_on=made_on,
    )
    return ConversionResult(
        output_file=package.output_path,
        chapters=stats.chapter_count,
        total_words=stats.total_words,
        removed_duplicates=split.removed_duplicates,
        filtered_lines=split.filtered_lines,
        chapter_titles=[chapter.title for chapter in split.chapters],
    )


__all__ = [
    "ChapterSplit",
    "ConversionError",
    "ConversionResult",
    "ConvertOptions",
    "EmptyChapterSetError",
    "MissingOptionError",
    "convert_txt_to_epub",
    "load_document",
    "split_into_chapters",
]
