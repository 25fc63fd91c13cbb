from __future__ import annotations

import html
from datetime import date

__all__ = [
    "DEFAULT_CSS",
    "TOOL_NAME",
    "body_to_html",
    "cover_page_html",
    "format_chinese_date",
    "info_page_html",
]

TOOL_NAME = "txt2epub"

DEFAULT_CSS = """
body {
    font-family: "Microsoft YaHei", "宋体", "SimSun", serif;
    line-height: 1.8;
    text-align: justify;
    color: #333;
    margin: 0;
    padding: 20px;
}
p {
    margin: 1em 0;
    text-indent: 2em;
}
h1, h2, h3 {
    text-align: center;
    margin: 2em 0 1em 0;
    font-weight: bold;
}
h1 {
    font-size: 2em;
    color: #2c3e50;
}
h2 {
    font-size: 1.5em;
    color: #34495e;
}
table {
    width: 100%;
    margin: 1em 0;
}
td {
    vertical-align: top;
}
"""


def body_to_html(body: str) -> str:
    """Wrap every non-blank line of a chapter body in a ``<p>`` element."""
    paragraphs = (line.strip() for line in body.split("\n"))
    return "\n".join(
        f"<p>{html.escape(line, quote=False)}</p>" for line in paragraphs if line
    )


def format_chinese_date(value: date) -> str:
    return f"{value.year}年{value.month}月{value.day}日"


def cover_page_html(title: str, author: str) -> str:
    title_html = html.escape(title)
    author_html = html.escape(author)
    return f"""
<div style="text-align: center; padding: 50px 20px;">
    <h1 style="font-size: 3em; margin-bottom: 0.5em; color: #2c3e50;">{title_html}</h1>
    <p style="font-size: 1.5em; color: #7f8c8d; margin-top: 0; text-indent: 0;">{author_html} 著</p>
    <div style="margin-top: 3em; font-size: 1.2em; color: #95a5a6;">
        <p style="text-indent: 0;">一部精彩小说</p>
        <p style="text-indent: 0;">享受阅读时光</p>
    </div>
</div>
"""


def _info_row(label: str, value: str, *, last: bool = False) -> str:
    border = "" if last else ' style="border-bottom: 1px solid #ecf0f1;"'
    return (
        f"<tr{border}>"
        f'<td style="padding: 15px 10px; font-weight: bold; width: 120px;">{label}</td>'
        f'<td style="padding: 15px 10px;">{html.escape(value)}</td>'
        "</tr>"
    )


def info_page_html(
    title: str,
    author: str,
    maker: str,
    chapter_count: int,
    total_words: int,
    *,
    made_on: date | None = None,
) -> str:
    """Book information page listing title, author, counts and the maker."""
    made_on = made_on or date.today()
    rows = [
        _info_row("书名", title),
        _info_row("作者", author),
        _info_row("章节总数", f"{chapter_count} 章"),
        _info_row("总字数", f"{total_words:,} 字"),
        _info_row("制作者", maker),
        _info_row("制作工具", TOOL_NAME),
        _info_row("制作日期", format_chinese_date(made_on)),
        _info_row("格式", "EPUB 3.0", last=True),
    ]
    table = "\n".join(rows)
    return f"""
<div style="padding: 40px; line-height: 2; color: #2c3e50;">
    <h2 style="text-align: center; margin-bottom: 2em; color: #34495e;">图书信息</h2>
    <table style="width: 100%; border-collapse: collapse;">
{table}
    </table>
    <div style="margin-top: 3em; padding: 20px; background-color: #f8f9fa; border-left: 4px solid #3498db;">
        <h3 style="margin-top: 0; color: #2980b9;">制作说明</h3>
        <p>本电子书使用 {TOOL_NAME} 工具制作，已自动过滤广告信息，优化排版格式，力求为读者提供良好的阅读体验。</p>
    </div>
</div>
"""
