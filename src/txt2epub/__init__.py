from .core import (
    ConversionError,
    ConversionResult,
    ConvertOptions,
    EmptyChapterSetError,
    convert_txt_to_epub,
    load_document,
    split_into_chapters,
)
from .dedupe import chapter_fingerprint, dedupe_chapters
from .filtering import filter_lines
from .numerals import chinese_numeral_to_int
from .segment import Chapter, chapters_to_text, segment_chapters
from .stats import ConversionStats, collect_stats

__all__ = [
    "Chapter",
    "ConversionError",
    "ConversionResult",
    "ConversionStats",
    "ConvertOptions",
    "EmptyChapterSetError",
    "chapter_fingerprint",
    "chapters_to_text",
    "chinese_numeral_to_int",
    "collect_stats",
    "convert_txt_to_epub",
    "dedupe_chapters",
    "filter_lines",
    "load_document",
    "segment_chapters",
    "split_into_chapters",
]
