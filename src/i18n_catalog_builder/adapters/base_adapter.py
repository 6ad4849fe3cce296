"""抽出アダプタ（基底クラス）.

各種ドキュメント（マークアップ/プログラムソース）から翻訳オブザベーションを取り出すための
共通インターフェースを定義します。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from fnmatch import fnmatch
from pathlib import Path, PurePosixPath

from loguru import logger

from ..core.context import BuildContext
from ..core.exceptions import SourceParseError
from ..core.normalize import is_excluded
from ..core.observations import ObservationBatch, TranslationObservation


class BaseAdapter(ABC):
    """抽出アダプタの基底クラス.

    全てのアダプタはこのクラスを継承し、extract() を実装します。

    Args:
        context: ビルドコンテキスト（設定の参照と診断の記録に使う）
    """

    #: 対象ファイル名のパターン（サブクラスで設定から決める）
    patterns: tuple[str, ...] = ()

    def __init__(self, context: BuildContext) -> None:
        self.context = context
        self._exclude_paths = context.config.resolved_exclude_paths()
        self._root = context.config.source_dir.resolve()

    def matches(self, document: str) -> bool:
        """ドキュメントがこのアダプタの対象か判定する."""
        name = PurePosixPath(document).name
        return any(fnmatch(name, pat) for pat in self.patterns)

    def read(self, path: Path | str, document: str) -> ObservationBatch:
        """ドキュメントを読み込んで抽出結果を返す.

        除外パス配下のドキュメントは読み込まず、空のバッチを返します（警告なし）。
        読み込めない（UTF-8 でない等）ドキュメントは SourceParseError を警告し、空のバッチを返します。

        Args:
            path: 実ファイルのパス
            document: ドキュメント識別子（ソースルートからの相対パス）

        Returns:
            抽出結果（アダプタの出力順）
        """
        if is_excluded(path, self._exclude_paths, self._root):
            return ObservationBatch(document=document)

        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.context.warn(SourceParseError(document, str(e)))
            return ObservationBatch(document=document)

        observations = self.extract(content, document)
        logger.debug(f"Extracted {len(observations)} translations from {document}")
        return ObservationBatch(document=document, observations=observations)

    @abstractmethod
    def extract(self, content: str, document: str) -> list[TranslationObservation]:
        """ドキュメントの内容から翻訳オブザベーションを抽出する.

        Args:
            content: ドキュメントの内容
            document: ドキュメント識別子（位置情報に使う）

        Returns:
            出現順のオブザベーション
        """
        ...
