from __future__ import annotations

from txt2epub.segment import (
    EMPTY_CHAPTER_PLACEHOLDER,
    Chapter,
    chapters_to_text,
    segment_chapters,
)


def test_scenario_basic_headings() -> None:
    lines = "第一章 开始\n你好\n\n第二章\n世界".split("\n")
    chapters = segment_chapters(lines)
    assert chapters == [
        Chapter(number=1, raw_title_suffix="开始", title="第1章 开始", body="你好"),
        Chapter(number=2, raw_title_suffix="", title="第2章", body="世界"),
    ]


def test_text_before_first_heading_is_dropped() -> None:
    chapters = segment_chapters(["intro text", "第1章", "正文"])
    assert len(chapters) == 1
    assert chapters[0].number == 1
    assert chapters[0].title == "第1章"
    assert chapters[0].body == "正文"


def test_no_heading_yields_no_chapters() -> None:
    assert segment_chapters(["just prose", "more prose"]) == []
    assert segment_chapters([]) == []


def test_empty_body_uses_placeholder() -> None:
    chapters = segment_chapters(["第一章", "", "   ", "第二章", "内容"])
    assert chapters[0].body == EMPTY_CHAPTER_PLACEHOLDER
    assert chapters[1].body == "内容"


def test_final_heading_without_body_is_kept() -> None:
    chapters = segment_chapters(["第一章", "内容", "第二章 尾声"])
    assert [chapter.title for chapter in chapters] == ["第1章", "第2章 尾声"]
    assert chapters[-1].body == EMPTY_CHAPTER_PLACEHOLDER


def test_body_keeps_inner_blank_lines_and_is_trimmed() -> None:
    chapters = segment_chapters(["第十章", "", "  第一段", "", "第二段  ", ""])
    assert chapters[0].body == "第一段\n\n第二段"
    assert chapters[0].lines == ["第一段", "", "第二段"]


def test_heading_grammar() -> None:
    lines = [
        "第一百零五章   大结局",
        "第12章标题紧贴",
        "  第三章 缩进的不是标题",
        "第三回 不是章",
        "第两千三百章",
    ]
    chapters = segment_chapters(lines)
    assert [(chapter.number, chapter.title) for chapter in chapters] == [
        (105, "第105章 大结局"),
        (12, "第12章 标题紧贴"),
        (2300, "第2300章"),
    ]
    assert chapters[0].raw_title_suffix == "大结局"
    assert chapters[1].body == "第三章 缩进的不是标题\n第三回 不是章"


def test_full_width_space_before_suffix() -> None:
    chapters = segment_chapters(["第八章\u3000风起", "正文"])
    assert chapters[0].title == "第8章 风起"


def test_chapters_to_text_round_trips() -> None:
    lines = ["前言", "第一章 开始", "你好", "", "第二章", "", "第三章 终", "再见"]
    chapters = segment_chapters(lines)
    again = segment_chapters(chapters_to_text(chapters).split("\n"))
    assert [chapter.title for chapter in again] == [chapter.title for chapter in chapters]
    assert [chapter.body for chapter in again] == [chapter.body for chapter in chapters]
