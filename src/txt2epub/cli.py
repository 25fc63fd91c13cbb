from __future__ import annotations

import argparse
import os
import sys
from importlib import metadata
from pathlib import Path

import tomllib
from rich.console import Console
from rich.markup import escape

from .core import ConversionError, ConvertOptions, convert_txt_to_epub
from .filtering import parse_keyword_list
from .logging_utils import set_debug_logging
from .stats import ConversionStats

DEFAULT_AUTHOR = "未知作者"
AD_KEYWORDS_ENV = "TXT2EPUB_AD_KEYWORDS"

_USAGE_EXAMPLES = (
    '  txt2epub -f novel.txt -a "作者名" -t "书名" -m "制作者"\n'
    '  txt2epub --file novel.txt --author "作者名" --title "书名" --maker "制作者" --cover cover.jpg'
)
_TROUBLESHOOTING = (
    "1. 检查输入文件是否为有效的 UTF-8 编码的 TXT 文件",
    "2. 确保文件包含章节标题（如：第一章、第二章等）",
    "3. 检查输出目录是否有写入权限",
    "4. 使用 --verbose 参数查看详细错误信息",
)


def _read_local_version() -> str | None:
    try:
        pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    except IndexError:  # pragma: no cover - defensive
        return None
    try:
        with pyproject_path.open("rb") as fh:
            data = tomllib.load(fh)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return None
    return data.get("project", {}).get("version")


try:
    __version__ = metadata.version("txt2epub")
except metadata.PackageNotFoundError:
    __version__ = _read_local_version() or "0.0.0+unknown"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="txt2epub",
        description="将 TXT 小说文件转换为 EPUB 电子书格式",
        epilog="使用示例:\n" + _USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"txt2epub {__version__}",
    )
    ap.add_argument("-f", "--file", required=True, help="输入的 TXT 文件路径")
    ap.add_argument(
        "-o",
        "--output",
        help="输出的 EPUB 文件路径 (默认与输入文件同名，扩展名为 .epub)",
    )
    ap.add_argument("-t", "--title", help="书籍标题 (默认基于文件名)")
    ap.add_argument(
        "-a",
        "--author",
        default=DEFAULT_AUTHOR,
        help=f"作者名称 (默认为 {DEFAULT_AUTHOR})",
    )
    ap.add_argument("-m", "--maker", required=True, help="制作者名称")
    ap.add_argument("-c", "--cover", help="封面图片路径")
    ap.add_argument("-d", "--description", help="书籍描述")
    ap.add_argument(
        "--ad-keywords",
        default=os.environ.get(AD_KEYWORDS_ENV),
        help=(
            "广告关键词，用逗号分隔；不传则不过滤广告。"
            f"未指定时读取环境变量 {AD_KEYWORDS_ENV}。"
        ),
    )
    ap.add_argument("--verbose", action="store_true", help="显示详细输出信息")
    return ap


def default_title(input_file: Path) -> str:
    return input_file.stem.replace("-", " ").replace("_", " ")


def options_from_args(args: argparse.Namespace, console: Console) -> ConvertOptions:
    input_file = Path(args.file).expanduser().resolve()
    if not input_file.is_file():
        raise FileNotFoundError(f"Input file not found: {input_file}")
    output_file = (
        Path(args.output).expanduser().resolve()
        if args.output
        else input_file.with_suffix(".epub")
    )
    cover: Path | None = None
    if args.cover:
        cover_path = Path(args.cover).expanduser().resolve()
        if cover_path.is_file():
            cover = cover_path
        else:
            console.print(f"[yellow]警告: 封面文件不存在: {escape(str(cover_path))}[/yellow]")
    return ConvertOptions(
        input_file=input_file,
        output_file=output_file,
        title=args.title or default_title(input_file),
        author=args.author or DEFAULT_AUTHOR,
        maker=args.maker,
        ad_keywords=parse_keyword_list(args.ad_keywords),
        cover=cover,
        description=args.description,
    )


def _print_plan(console: Console, options: ConvertOptions) -> None:
    console.print("转换配置:", style="bold")
    rows = [
        ("输入文件", str(options.input_file)),
        ("输出文件", str(options.output_file)),
        ("书籍标题", options.title),
        ("作者", options.author),
        ("制作者", options.maker),
    ]
    if options.cover:
        rows.append(("封面图片", str(options.cover)))
    if options.description:
        rows.append(("书籍描述", options.description))
    if options.ad_keywords:
        rows.append(("广告关键词", ", ".join(options.ad_keywords)))
        rows.append(("广告过滤", "启用"))
    else:
        rows.append(("广告过滤", "禁用"))
    for label, value in rows:
        console.print(f"   {label}: {escape(value)}")
    console.print()


def _print_failure(console: Console, exc: BaseException, verbose: bool) -> None:
    console.print(f"[red]转换失败:[/red] {escape(str(exc))}")
    if verbose:
        console.print_exception()
    console.print("\n解决建议:")
    for line in _TROUBLESHOOTING:
        console.print(f"   {line}")


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    if not argv:
        parser.print_help()
        return 0
    args = parser.parse_args(argv)
    set_debug_logging(bool(args.verbose))

    console = Console(highlight=False)
    try:
        options = options_from_args(args, console)
    except FileNotFoundError as exc:
        raise SystemExit(str(exc)) from exc
    _print_plan(console, options)

    try:
        result = convert_txt_to_epub(options)
    except (ConversionError, ValueError, OSError) as exc:
        _print_failure(console, exc, args.verbose)
        raise SystemExit(1) from exc

    stats = ConversionStats(chapter_count=result.chapters, total_words=result.total_words)
    console.print("[green]转换成功完成[/green]")
    console.print(f"   书名: {escape(options.title)}")
    console.print(f"   作者: {escape(options.author)}")
    console.print(f"   章节: {stats.chapter_count} 章")
    console.print(f"   字数: {stats.total_words:,} 字 (约 {stats.ten_thousands} 万字)")
    if result.filtered_lines:
        console.print(f"   已过滤 {result.filtered_lines} 行广告内容")
    if result.removed_duplicates:
        console.print(f"   已去除 {result.removed_duplicates} 个重复章节")
    console.print(f"输出文件: {escape(str(result.output_file))}")
    if result.output_file.exists():
        size_mb = result.output_file.stat().st_size / 1024 / 1024
        console.print(f"文件大小: {size_mb:.2f} MB")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
