"""ビルドコンテキスト.

1回のビルドに属する状態（カタログ、重複文言インデックス、診断、ベースライン）を
まとめて保持し、各コンポーネントへ明示的に受け渡します。
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from .exceptions import CatalogBuildError

if TYPE_CHECKING:
    from ..config import BuilderConfig
    from .observations import ObservationBatch

Catalog = dict[str, "str | Catalog"]


class DiagnosticLevel(str, Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    level: DiagnosticLevel
    error: CatalogBuildError

    @property
    def kind(self) -> str:
        return type(self.error).__name__

    @property
    def message(self) -> str:
        return str(self.error)


def load_baseline(path: Path | str | None) -> Catalog:
    """ベースラインカタログを読み込む.

    ファイルが無い、またはJSONとして読めない場合は空カタログとして扱います（エラーにしない）。

    Args:
        path: ベースラインJSONのパス（None なら空）

    Returns:
        ベースラインカタログ
    """
    if path is None:
        return {}
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug(f"Baseline not loaded ({path}): {e}; starting from an empty catalog")
        return {}

    if not isinstance(data, dict):
        logger.debug(f"Baseline is not a JSON object ({path}); starting from an empty catalog")
        return {}
    return data


@dataclass
class BuildContext:
    """1回のビルドの状態.

    Attributes:
        config: ビルド設定
        baseline: 前回公開分のカタログ（ビルド開始時に毎回再読み込み）
        catalog: マージ中のカタログ
        duplicate_values: 文言 → その文言を使うキー（初出順、重複なし）
        batches: ドキュメント識別子 → 抽出結果
        diagnostics: 警告/エラーの記録
    """

    config: BuilderConfig
    baseline: Catalog = field(default_factory=dict)
    catalog: Catalog = field(default_factory=dict)
    duplicate_values: dict[str, list[str]] = field(default_factory=dict)
    batches: dict[str, ObservationBatch] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @classmethod
    def start(cls, config: BuilderConfig) -> BuildContext:
        """ベースラインを読み込んで新しいコンテキストを作る."""
        baseline = load_baseline(config.src)
        logger.info(f"[Phase 0] Loaded baseline: {config.src} ({len(baseline)} top-level keys)")
        return cls(config=config, baseline=baseline)

    def warn(self, error: CatalogBuildError) -> None:
        logger.warning(str(error))
        self.diagnostics.append(Diagnostic(DiagnosticLevel.WARNING, error))

    def error(self, error: CatalogBuildError) -> None:
        logger.error(str(error))
        self.diagnostics.append(Diagnostic(DiagnosticLevel.ERROR, error))

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.level is DiagnosticLevel.WARNING]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.level is DiagnosticLevel.ERROR]
