"""カタログビルダー（オーケストレーター）.

ソースツリー上のマークアップ/プログラムソースから翻訳キーを抽出して1つのカタログにまとめ、
ベースラインとの差分、出力カタログ、言語/名前空間インデックスを生成する。
抽出結果の揺れはアダプタ/core 側に寄せ、ここでは「取り込み順（再現性）」
「診断の集約とレポート」「フェーズの実行順」を担う。
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from i18n_catalog_builder.adapters import BaseAdapter, MarkupAdapter, SourceAdapter
from i18n_catalog_builder.config import BuilderConfig, load_config
from i18n_catalog_builder.core.context import BuildContext, Catalog
from i18n_catalog_builder.core.diff import DiffReport, diff_catalogs, write_diff_report
from i18n_catalog_builder.core.exceptions import InvalidOutputNameError
from i18n_catalog_builder.core.index import (
    OutputIndex,
    build_output_index,
    collect_output_files,
    write_output_index,
)
from i18n_catalog_builder.core.merge import merge_observations, overlay_catalog, report_duplicate_values
from i18n_catalog_builder.core.normalize import normalize_batches
from i18n_catalog_builder.core.observations import ObservationBatch
from i18n_catalog_builder.core.reports import export_diagnostics_report
from i18n_catalog_builder.core.writer import write_catalog


@dataclass
class BuildResult:
    """1回のビルドの成果物."""

    context: BuildContext
    catalog: Catalog
    catalog_path: Path | None = None
    diff: DiffReport | None = None
    diff_path: Path | None = None
    index: OutputIndex = dataclasses.field(default_factory=dict)
    index_path: Path | None = None

    @property
    def has_errors(self) -> bool:
        return bool(self.context.errors)


def discover_documents(source_dir: Path) -> list[tuple[Path, str]]:
    """ソースディレクトリ配下のファイルを発見順（相対パスのソート順）で返す.

    Returns:
        (実ファイルのパス, ドキュメント識別子) のリスト
    """
    if not source_dir.exists():
        raise FileNotFoundError(f"Source directory not found: {source_dir}")

    documents = [(p, p.relative_to(source_dir).as_posix()) for p in source_dir.rglob("*") if p.is_file()]
    return sorted(documents, key=lambda d: d[1])


def _extract_batches(documents: list[tuple[Path, str]], adapters: list[BaseAdapter]) -> list[ObservationBatch]:
    batches: list[ObservationBatch] = []
    for path, document in documents:
        for adapter in adapters:
            if adapter.matches(document):
                batches.append(adapter.read(path, document))
                break
    return batches


def _index_input_files(output_dir: Path, catalog_path: Path | None, index_name: str | None) -> dict[str, str]:
    files = collect_output_files(output_dir)
    if index_name:
        files.pop(Path(index_name).as_posix(), None)
    if catalog_path is not None:
        # 今回書き出したカタログを最後に置き、同じ言語/名前空間の古い出力より優先させる
        name = catalog_path.resolve().relative_to(output_dir.resolve()).as_posix()
        files[name] = files.pop(name, catalog_path.read_text(encoding="utf-8"))
    return files


def build_catalog(config: BuilderConfig) -> BuildResult:
    """翻訳カタログをビルドする.

    Phase 0: ベースライン読み込み / 1: 抽出 / 2: 正規化 / 3: マージ /
    4: 差分 / 5: カタログ出力 / 6: インデックス の順に1回ずつ実行します。
    個々の問題は診断として記録され、ビルドは止まりません（差分ファイル書き込みの
    I/Oエラーのみ送出）。

    Args:
        config: ビルド設定

    Returns:
        ビルド結果

    Raises:
        FileNotFoundError: source_dir が存在しない場合
        OSError: 差分ファイルを書き出せない場合
    """
    source_dir = Path(config.source_dir)
    output_dir = Path(config.output_dir)

    context = BuildContext.start(config)

    documents = discover_documents(source_dir)
    adapters: list[BaseAdapter] = [MarkupAdapter(context), SourceAdapter(context)]
    batches = _extract_batches(documents, adapters)
    logger.info(f"[Phase 1] Scanned {len(documents)} files, {len(batches)} documents matched an adapter")

    observations = normalize_batches(batches, context)
    merge_observations(observations, context)
    if config.duplicate_warnings:
        report_duplicate_values(context)

    result = BuildResult(context=context, catalog=context.catalog)

    if config.create_diff and config.src is not None:
        result.diff = diff_catalogs(context.baseline, context.catalog)
        result.diff_path = write_diff_report(result.diff, config.src)

    if config.include_baseline:
        result.catalog = overlay_catalog(context.baseline, context.catalog, context)
    # [path] はソースディレクトリからのベースラインの相対位置
    context_dir = config.source_dir if config.src is not None else None
    try:
        result.catalog_path = write_catalog(
            result.catalog, output_dir, config.dest, config.resource_path, context_dir=context_dir
        )
    except InvalidOutputNameError as e:
        context.error(e)

    files = _index_input_files(output_dir, result.catalog_path, config.index)
    result.index = build_output_index(files, config.file_pattern, context)
    if config.index:
        result.index_path = write_output_index(result.index, output_dir, config.index)

    if config.report_dir is not None:
        export_diagnostics_report(context.diagnostics, config.report_dir)

    logger.info(
        f"[COMPLETE] Catalog build finished: {len(context.warnings)} warning(s), {len(context.errors)} error(s)"
    )
    return result


def _setup_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}",
    )


def _config_from_args(args: argparse.Namespace) -> BuilderConfig:
    config = load_config(args.config) if args.config else BuilderConfig()

    overrides: dict[str, object] = {}
    for name in ("source_dir", "output_dir", "src", "dest", "index", "translation_file_pattern", "report_dir"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    if args.function is not None:
        overrides["translation_function"] = args.function
    if args.alias:
        overrides["function_aliases"] = tuple(args.alias)
    if args.exclude:
        overrides["exclude_paths"] = tuple(args.exclude)
    if args.create_diff:
        overrides["create_diff"] = True
    if args.duplicate_warnings:
        overrides["duplicate_warnings"] = True
    if args.no_baseline:
        overrides["include_baseline"] = False

    return dataclasses.replace(config, **overrides) if overrides else config


def main(argv: list[str] | None = None) -> None:
    """CLI エントリポイント."""
    parser = argparse.ArgumentParser(description="Extract translation keys and build a translation catalog")
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument("--source-dir", type=Path, default=None, help="Root directory of templates and sources")
    parser.add_argument("--output-dir", type=Path, default=None, help="Output directory for catalog and index")
    parser.add_argument("--src", type=Path, default=None, help="Baseline catalog (previously published JSON)")
    parser.add_argument(
        "--dest",
        default=None,
        help="Catalog name template relative to output dir (e.g. locales/en/[name].[contenthash:8].json)",
    )
    parser.add_argument("--index", default=None, help="Index file name relative to output dir")
    parser.add_argument(
        "--pattern",
        dest="translation_file_pattern",
        default=None,
        help="Regex for translation file names capturing language and namespace",
    )
    parser.add_argument("--function", default=None, help="Translation function identifier (default: t)")
    parser.add_argument(
        "--alias",
        action="append",
        default=None,
        help="Additional identifier treated as the translation function (repeatable)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        help="Path excluded from extraction, relative to source dir (repeatable)",
    )
    parser.add_argument("--create-diff", action="store_true", help="Write <src>.diff.json next to the baseline")
    parser.add_argument(
        "--duplicate-warnings",
        action="store_true",
        help="Warn when several keys share the same default text",
    )
    parser.add_argument("--no-baseline", action="store_true", help="Do not merge the baseline into the output catalog")
    parser.add_argument("--report-dir", type=Path, default=None, help="Directory for warnings/errors CSV reports")
    parser.add_argument("--fail-on-error", action="store_true", help="Exit with status 1 when errors were reported")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    config = _config_from_args(args)
    result = build_catalog(config)

    if args.fail_on_error and result.has_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
