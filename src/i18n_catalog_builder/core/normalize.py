"""抽出結果の正規化.

2種類のアダプタ（マークアップ / プログラムソース）が返したドキュメント単位の抽出結果を、
発見順を保ったまま1本のオブザベーション列にまとめます。

設計方針:
    - 並び順はドキュメントの発見順 → アダプタの出力順（マージ結果の再現性のため）
    - 除外パス配下のドキュメントは警告なしで捨てる（vendored コード用）
    - 静的に解決できない補間（${...}）を含むキーは警告するが残す
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from .context import BuildContext
from .exceptions import InterpolationError
from .observations import ObservationBatch, TranslationObservation

INTERPOLATION_MARKER = "${"


def has_interpolation(text: str | None) -> bool:
    return bool(text) and INTERPOLATION_MARKER in text


def is_excluded(document: str | Path, exclude_paths: Iterable[Path], root: Path | None = None) -> bool:
    """ドキュメントが除外パス配下にあるか判定する.

    Args:
        document: ドキュメントのパス（相対なら root 基準）
        exclude_paths: 除外パス（絶対パス）
        root: 相対パスの基準ディレクトリ

    Returns:
        除外対象なら True
    """
    path = Path(document)
    if not path.is_absolute() and root is not None:
        path = root / path
    path = path.resolve()
    return any(path == prefix or path.is_relative_to(prefix) for prefix in exclude_paths)


def normalize_batches(
    batches: Iterable[ObservationBatch],
    context: BuildContext,
) -> list[TranslationObservation]:
    """ドキュメント単位の抽出結果を1本の列に平坦化する.

    Args:
        batches: 発見順に並んだ抽出結果
        context: ビルドコンテキスト（batches と診断が更新される）

    Returns:
        順序を保ったオブザベーション列
    """
    root = context.config.source_dir.resolve()
    exclude_paths = context.config.resolved_exclude_paths()

    observations: list[TranslationObservation] = []
    skipped_documents = 0
    for batch in batches:
        if is_excluded(batch.document, exclude_paths, root):
            skipped_documents += 1
            continue

        context.batches[batch.document] = batch
        for obs in batch.observations:
            if has_interpolation(obs.key):
                context.warn(InterpolationError(obs.key))
            if has_interpolation(obs.value):
                context.warn(InterpolationError(obs.key, obs.value))
            observations.append(obs)

    if skipped_documents:
        logger.debug(f"Skipped {skipped_documents} document(s) under excluded paths")
    logger.info(f"[Phase 2] Normalized {len(observations)} observations from {len(context.batches)} documents")
    return observations
