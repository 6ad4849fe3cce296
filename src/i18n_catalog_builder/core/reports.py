"""診断結果の出力（レポート）.

ビルド中に記録した警告/エラーをCSVとして出力します。
"""

from __future__ import annotations

from pathlib import Path

import polars as pl

from .context import Diagnostic

_REPORT_SCHEMA = {"level": pl.String, "kind": pl.String, "key": pl.String, "message": pl.String}


def diagnostics_frame(diagnostics: list[Diagnostic]) -> pl.DataFrame:
    """診断の一覧を DataFrame にする（key を持たない診断は null）."""
    rows = [
        {
            "level": d.level.value,
            "kind": d.kind,
            "key": getattr(d.error, "key", None),
            "message": d.message,
        }
        for d in diagnostics
    ]
    return pl.DataFrame(rows, schema=_REPORT_SCHEMA)


def export_diagnostics_report(
    diagnostics: list[Diagnostic],
    output_dir: Path | str,
) -> dict[str, Path | None]:
    """診断レポートをCSVファイルとして出力する.

    Args:
        diagnostics: BuildContext.diagnostics
        output_dir: 出力ディレクトリ

    Returns:
        出力したCSVのパス（該当が無ければ None）
        - "warnings": warnings.csv
        - "errors": errors.csv
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    df = diagnostics_frame(diagnostics)
    result_paths: dict[str, Path | None] = {}
    for level, filename in (("warning", "warnings.csv"), ("error", "errors.csv")):
        subset = df.filter(pl.col("level") == level)
        out_path = output_dir / filename
        if len(subset) > 0:
            subset.write_csv(out_path)
            result_paths[f"{level}s"] = out_path
        else:
            # 前回実行分が残ると紛らわしいので消しておく
            out_path.unlink(missing_ok=True)
            result_paths[f"{level}s"] = None
    return result_paths
