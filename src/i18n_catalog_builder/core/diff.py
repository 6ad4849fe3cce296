"""ベースラインとの差分（new / changed / removed）.

マージ済みカタログと前回公開したベースラインを平坦化し、key でJOINして差分を求めます。
複数形/序数のバリアントキー（`_0`, `_1`, `_plural` など）は、複数形ルールの変化で
増減するものなので removed には含めません。
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

import polars as pl
from loguru import logger

from .context import Catalog
from .merge import flatten_catalog, set_path

TRANSLATION_VARIANT_PATTERN = r"_(\d+|plural)$"

_SCHEMA = {"key": pl.String, "value": pl.String, "order": pl.Int64}


@dataclass
class DiffReport:
    new: Catalog = field(default_factory=dict)
    changed: Catalog = field(default_factory=dict)
    removed: Catalog = field(default_factory=dict)

    def to_dict(self) -> dict[str, Catalog]:
        return {"new": self.new, "changed": self.changed, "removed": self.removed}

    def is_empty(self) -> bool:
        return not (self.new or self.changed or self.removed)


def _to_frame(flat: dict[str, str]) -> pl.DataFrame:
    return pl.DataFrame(
        {"key": list(flat.keys()), "value": list(flat.values()), "order": list(range(len(flat)))},
        schema=_SCHEMA,
    )


def _to_catalog(df: pl.DataFrame, value_column: str = "value") -> Catalog:
    catalog: Catalog = {}
    for row in df.iter_rows(named=True):
        set_path(catalog, row["key"], row[value_column])
    return catalog


def diff_catalogs(baseline: Catalog, merged: Catalog) -> DiffReport:
    """マージ済みカタログとベースラインの差分を求める.

    - removed: ベースラインにあってマージ結果に無いキー（バリアントキーは除く）
    - changed: 両方にあって文言が違うキー（値は新しい方）
    - new: マージ結果にだけあるキー

    順序はベースライン側（new はマージ結果側）の出現順に揃えます。

    Args:
        baseline: 前回公開したカタログ
        merged: 今回抽出したカタログ

    Returns:
        差分レポート
    """
    base_df = _to_frame(flatten_catalog(baseline))
    merged_df = _to_frame(flatten_catalog(merged))

    removed_df = (
        base_df.join(merged_df, on="key", how="anti")
        .filter(~pl.col("key").str.contains(TRANSLATION_VARIANT_PATTERN))
        .sort("order")
    )
    changed_df = (
        base_df.join(merged_df, on="key", how="inner", suffix="_new")
        .filter(pl.col("value") != pl.col("value_new"))
        .sort("order")
    )
    new_df = merged_df.join(base_df, on="key", how="anti").sort("order")

    logger.info(
        f"[Phase 4] Diff against baseline: {len(new_df)} new, {len(changed_df)} changed, {len(removed_df)} removed"
    )
    return DiffReport(
        new=_to_catalog(new_df),
        changed=_to_catalog(changed_df, value_column="value_new"),
        removed=_to_catalog(removed_df),
    )


def diff_path_for(baseline_path: Path | str) -> Path:
    """差分ファイルのパス（<baseline名>.diff.json、ベースラインと同じディレクトリ）."""
    baseline_path = Path(baseline_path)
    return baseline_path.parent / f"{baseline_path.stem}.diff.json"


def write_diff_report(report: DiffReport, baseline_path: Path | str) -> Path:
    """差分レポートをベースラインの隣に書き出す.

    出力先ディレクトリが無ければ作成します。それ以外のI/Oエラーはそのまま送出します。

    Returns:
        書き出したファイルのパス
    """
    out_path = diff_path_for(baseline_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent="\t", ensure_ascii=False)
    logger.info(f"Diff report written to {out_path}")
    return out_path
