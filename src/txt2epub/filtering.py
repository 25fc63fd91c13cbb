from __future__ import annotations

from typing import Iterable, Sequence

__all__ = ["filter_lines", "parse_keyword_list"]


def filter_lines(
    lines: Sequence[str], block_keywords: Iterable[str]
) -> tuple[list[str], int]:
    """Drop every line containing one of ``block_keywords`` (plain substring match)."""
    keywords = [keyword for keyword in block_keywords if keyword]
    if not keywords:
        return list(lines), 0
    kept = [line for line in lines if not any(keyword in line for keyword in keywords)]
    return kept, len(lines) - len(kept)


def parse_keyword_list(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [keyword.strip() for keyword in raw.split(",") if keyword.strip()]
