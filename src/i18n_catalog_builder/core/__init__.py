"""翻訳カタログ構築のコア処理群.

- 正規化（アダプタ出力 → オブザベーション列）
- マージ（階層カタログ化、構造衝突の検出）
- 差分（ベースラインとの new/changed/removed）
- インデックス（言語 → 名前空間 → ファイル）
"""

from .context import BuildContext, Diagnostic, DiagnosticLevel, load_baseline
from .diff import DiffReport, diff_catalogs, write_diff_report
from .index import build_output_index, collect_output_files, write_output_index
from .merge import flatten_catalog, merge_observations, overlay_catalog, report_duplicate_values
from .normalize import normalize_batches
from .writer import interpolate_name, serialize_catalog, write_catalog

__all__ = [
    "BuildContext",
    "Diagnostic",
    "DiagnosticLevel",
    "load_baseline",
    "normalize_batches",
    "merge_observations",
    "report_duplicate_values",
    "overlay_catalog",
    "flatten_catalog",
    "DiffReport",
    "diff_catalogs",
    "write_diff_report",
    "build_output_index",
    "collect_output_files",
    "write_output_index",
    "interpolate_name",
    "serialize_catalog",
    "write_catalog",
]
