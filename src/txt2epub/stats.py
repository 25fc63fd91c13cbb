from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Sequence

from .segment import Chapter

__all__ = ["ConversionStats", "collect_stats", "count_words"]

_WHITESPACE_RE = re.compile(r"\s")


@dataclass(frozen=True)
class ConversionStats:
    chapter_count: int
    total_words: int

    @property
    def ten_thousands(self) -> int:
        """Word count in 万, rounded half up, as shown in book descriptions."""
        return math.floor(self.total_words / 10000 + 0.5)


def count_words(text: str) -> int:
    return len(_WHITESPACE_RE.sub("", text))


def collect_stats(chapters: Sequence[Chapter]) -> ConversionStats:
    return ConversionStats(
        chapter_count=len(chapters),
        total_words=sum(count_words(chapter.body) for chapter in chapters),
    )
