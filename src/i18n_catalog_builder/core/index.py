"""出力翻訳ファイルのインデックス（言語 → 名前空間 → ファイル）.

出力ファイル名を命名パターンに照合し、言語と名前空間を取り出して索引を作ります。
照合したファイルは中身がJSONとして正しいかも検査します（壊れた翻訳ファイルは
実行時に黙って無視されがちなため、ビルド時に検出する）。
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from pathlib import Path

from loguru import logger

from .context import BuildContext
from .exceptions import InvalidTranslationFileError

OutputIndex = dict[str, dict[str, str]]


def _lang_and_namespace(match: re.Match[str]) -> tuple[str, str]:
    groups = match.groupdict()
    if "lang" in groups and "ns" in groups:
        return groups["lang"], groups["ns"]
    return match.group(1), match.group(2)


def collect_output_files(output_dir: Path | str) -> dict[str, str]:
    """出力ディレクトリ配下のファイルを {相対名: 内容} として集める.

    名前は posix 形式の相対パスで、ソート済みの順に並びます。
    """
    output_dir = Path(output_dir)
    if not output_dir.exists():
        return {}

    files: dict[str, str] = {}
    for path in sorted(p for p in output_dir.rglob("*") if p.is_file()):
        name = path.relative_to(output_dir).as_posix()
        files[name] = path.read_text(encoding="utf-8", errors="replace")
    return files


def build_output_index(
    files: Mapping[str, str],
    pattern: re.Pattern[str],
    context: BuildContext,
) -> OutputIndex:
    """出力ファイル群からインデックスを作る.

    パターンに一致しない名前は無視します。一致したがJSONとして不正なファイルは
    エラーとして記録し、インデックスから除外します。

    Args:
        files: 出力名 → 内容
        pattern: 言語と名前空間を捕捉する正規表現（名前付きグループ lang/ns、または1番目/2番目のグループ）
        context: 診断の記録先

    Returns:
        言語 → 名前空間 → 出力名
    """
    index: OutputIndex = {}
    for name, content in files.items():
        match = pattern.search(name)
        if not match:
            continue

        try:
            json.loads(content)
        except ValueError as e:
            context.error(InvalidTranslationFileError(name, str(e)))
            continue

        lang, ns = _lang_and_namespace(match)
        index.setdefault(lang, {})[ns] = name

    logger.info(f"[Phase 6] Indexed {sum(len(v) for v in index.values())} translation files in {len(index)} languages")
    return index


def write_output_index(index: OutputIndex, output_dir: Path | str, index_filename: str) -> Path:
    """インデックスを出力ディレクトリへ書き出す."""
    out_path = Path(output_dir) / index_filename
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(index, ensure_ascii=False, separators=(",", ":")), encoding="utf-8")
    logger.info(f"Output index written to {out_path}")
    return out_path
