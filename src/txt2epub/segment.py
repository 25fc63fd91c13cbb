from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from .numerals import chinese_numeral_to_int

__all__ = [
    "Chapter",
    "EMPTY_CHAPTER_PLACEHOLDER",
    "HEADING_PATTERN",
    "canonical_title",
    "chapters_to_text",
    "segment_chapters",
]

EMPTY_CHAPTER_PLACEHOLDER = "(本章暂无内容)"
HEADING_PATTERN = re.compile(r"^第([零一二三四五六七八九十百千万两亿0-9]+)章(?:\s*(.*))?")


@dataclass
class Chapter:
    number: int | None
    raw_title_suffix: str
    title: str
    body: str

    @property
    def lines(self) -> list[str]:
        return self.body.split("\n")


def canonical_title(number: int, suffix: str) -> str:
    return f"第{number}章{' ' + suffix if suffix else ''}".strip()


def _finish_body(body_lines: list[str]) -> str:
    body = "\n".join(body_lines).strip()
    return body if body else EMPTY_CHAPTER_PLACEHOLDER


def segment_chapters(lines: Iterable[str]) -> list[Chapter]:
    """
    Split document lines into chapters at every ``第…章`` heading.

    Lines before the first heading are not part of any chapter and are
    dropped. Every non-heading line after it is kept verbatim in the body of
    the chapter it follows; the joined body is trimmed as a whole.
    """
    chapters: list[Chapter] = []
    current: tuple[int | None, str, str] | None = None
    body_lines: list[str] = []

    for line in lines:
        match = HEADING_PATTERN.match(line)
        if match is None:
            if current is not None:
                body_lines.append(line)
            continue
        if current is not None:
            chapters.append(Chapter(*current, body=_finish_body(body_lines)))
        suffix = (match.group(2) or "").strip()
        number = chinese_numeral_to_int(match.group(1))
        if number is None:
            title = line.strip()
        else:
            title = canonical_title(number, suffix)
        current = (number, suffix, title)
        body_lines = []

    if current is not None:
        chapters.append(Chapter(*current, body=_finish_body(body_lines)))
    return chapters


def chapters_to_text(chapters: Sequence[Chapter]) -> str:
    """Serialize chapters back to plain text that ``segment_chapters`` reads again."""
    return "\n\n".join(f"{chapter.title}\n{chapter.body}" for chapter in chapters)
