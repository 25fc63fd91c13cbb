from __future__ import annotations

from pathlib import Path

import pytest

import txt2epub.cli as cli
from txt2epub.core import ConversionResult, ConvertOptions


def _write_novel(path: Path, text: str) -> Path:
    path.write_bytes(("\ufeff" + text).encode("utf-8"))
    return path


def test_parser_requires_file_and_maker(monkeypatch) -> None:
    monkeypatch.delenv(cli.AD_KEYWORDS_ENV, raising=False)
    parser = cli.build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["-f", "novel.txt"])
    args = parser.parse_args(["-f", "novel.txt", "-m", "制作者"])
    assert args.author == cli.DEFAULT_AUTHOR
    assert args.ad_keywords is None


def test_ad_keywords_default_from_environment(monkeypatch) -> None:
    monkeypatch.setenv(cli.AD_KEYWORDS_ENV, "广告,推广")
    args = cli.build_parser().parse_args(["-f", "novel.txt", "-m", "x"])
    assert args.ad_keywords == "广告,推广"


def test_options_from_args_fills_defaults(tmp_path: Path) -> None:
    novel = _write_novel(tmp_path / "my-great_novel.txt", "第一章\n内容")
    args = cli.build_parser().parse_args(
        ["-f", str(novel), "-m", "制作者", "--ad-keywords", " 广告 ,, 推广", "-c", str(tmp_path / "nope.jpg")]
    )
    console = cli.Console(record=True, width=200)
    options = cli.options_from_args(args, console)
    assert options.title == "my great novel"
    assert options.output_file == novel.with_suffix(".epub")
    assert options.ad_keywords == ["广告", "推广"]
    assert options.cover is None
    assert "封面文件不存在" in console.export_text()


def test_options_from_args_missing_input(tmp_path: Path) -> None:
    args = cli.build_parser().parse_args(["-f", str(tmp_path / "missing.txt"), "-m", "x"])
    with pytest.raises(FileNotFoundError):
        cli.options_from_args(args, cli.Console())


def test_main_without_arguments_prints_help(capsys) -> None:
    assert cli.main([]) == 0
    assert "txt2epub" in capsys.readouterr().out


def test_main_passes_options_and_reports(monkeypatch, tmp_path: Path, capsys) -> None:
    novel = _write_novel(tmp_path / "book.txt", "第一章\n内容")
    captured: dict[str, ConvertOptions] = {}

    def _fake_convert(options: ConvertOptions) -> ConversionResult:
        captured["options"] = options
        return ConversionResult(
            output_file=options.output_file,
            chapters=3,
            total_words=12345,
            removed_duplicates=1,
            filtered_lines=2,
        )

    monkeypatch.setattr(cli, "convert_txt_to_epub", _fake_convert)
    exit_code = cli.main(["-f", str(novel), "-m", "制作者", "-t", "书名", "--ad-keywords", "广告"])

    assert exit_code == 0
    options = captured["options"]
    assert options.title == "书名"
    assert options.maker == "制作者"
    assert options.ad_keywords == ["广告"]
    out = capsys.readouterr().out
    assert "转换成功完成" in out
    assert "12,345 字" in out
    assert "已去除 1 个重复章节" in out
    assert "已过滤 2 行广告内容" in out


def test_main_reports_missing_chapters(tmp_path: Path, capsys) -> None:
    novel = _write_novel(tmp_path / "plain.txt", "没有章节\n只有正文")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-f", str(novel), "-m", "制作者"])
    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert "转换失败" in out
    assert "解决建议" in out
    assert not novel.with_suffix(".epub").exists()


def test_main_missing_input_exits_with_message(tmp_path: Path) -> None:
    missing = tmp_path / "missing.txt"
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-f", str(missing), "-m", "制作者"])
    assert missing.name in str(excinfo.value.code)


def test_main_writes_epub(tmp_path: Path, capsys) -> None:
    pytest.importorskip("ebooklib")
    novel = _write_novel(
        tmp_path / "novel.txt",
        "简介\n第一章 开始\n你好\n广告：某网站\n\n第二章\n世界\n第二章\n世界\n",
    )
    output = tmp_path / "dist" / "novel.epub"
    exit_code = cli.main(
        ["-f", str(novel), "-m", "制作者", "-o", str(output), "--ad-keywords", "广告"]
    )
    assert exit_code == 0
    assert output.exists()
    out = capsys.readouterr().out
    assert "章节: 2 章" in out
    assert "字数: 4 字" in out
