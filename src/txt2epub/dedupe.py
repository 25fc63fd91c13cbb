from __future__ import annotations

import re
from typing import Sequence

from .segment import Chapter

__all__ = [
    "FINGERPRINT_LENGTH",
    "chapter_fingerprint",
    "dedupe_chapters",
    "dedupe_chapters_with_count",
]

FINGERPRINT_LENGTH = 5
_NON_FINGERPRINT_RE = re.compile(r"[^\u4e00-\u9fa5a-zA-Z0-9]")


def chapter_fingerprint(body: str, length: int = FINGERPRINT_LENGTH) -> str:
    return _NON_FINGERPRINT_RE.sub("", body)[:length]


def _distinct_positions(group: list[tuple[int, Chapter]]) -> tuple[list[int], int]:
    first_index, first = group[0]
    kept = [first_index]
    kept_prints = [chapter_fingerprint(first.body)]
    removed = 0
    for index, candidate in group[1:]:
        fingerprint = chapter_fingerprint(candidate.body)
        if fingerprint and fingerprint in kept_prints:
            removed += 1
            continue
        kept.append(index)
        kept_prints.append(fingerprint)
    return kept, removed


def dedupe_chapters_with_count(chapters: Sequence[Chapter]) -> tuple[list[Chapter], int]:
    """
    Collapse repeated chapters that share a number and a body fingerprint.

    Within each number the first occurrence always survives; a later one is
    dropped when its non-empty fingerprint equals the fingerprint of any
    chapter already kept for that number. Survivors are ordered by number
    (stable), while chapters without a number stay in their original slots.
    Returns the survivors and the number of dropped chapters.
    """
    groups: dict[int, list[tuple[int, Chapter]]] = {}
    for index, chapter in enumerate(chapters):
        if chapter.number is not None:
            groups.setdefault(chapter.number, []).append((index, chapter))

    surviving: set[int] = set()
    removed = 0
    for group in groups.values():
        kept, dropped = _distinct_positions(group)
        surviving.update(kept)
        removed += dropped

    ordered = [
        chapter
        for index, chapter in enumerate(chapters)
        if chapter.number is None or index in surviving
    ]
    numbered = iter(
        sorted(
            (chapter for chapter in ordered if chapter.number is not None),
            key=lambda chapter: chapter.number or 0,
        )
    )
    result = [chapter if chapter.number is None else next(numbered) for chapter in ordered]
    return result, removed


def dedupe_chapters(chapters: Sequence[Chapter]) -> list[Chapter]:
    return dedupe_chapters_with_count(chapters)[0]
