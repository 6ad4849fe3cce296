"""翻訳オブザベーション（抽出結果）のデータ型.

アダプタ（マークアップ / プログラムソース）が返す {key, value} を、
ソース種別に依存しない共通モデルとして表現します。
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SourceLocation:
    """抽出元の位置情報.

    Attributes:
        document: ドキュメント識別子（ソースルートからの相対パス）
        line: 行番号（1始まり、不明なら None）
        column: 列番号（0始まり、不明なら None）
    """

    document: str
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        if self.line is None:
            return self.document
        return f"{self.document} (line {self.line}, column {self.column})"


@dataclass(frozen=True)
class TranslationObservation:
    """1件の抽出結果（マージ前）.

    Attributes:
        key: ドット区切りのキー（例: "home.title"）
        value: デフォルト文言（無い場合は None）
        location: 抽出元
    """

    key: str
    value: str | None
    location: SourceLocation


@dataclass
class ObservationBatch:
    """1ドキュメント分の抽出結果（アダプタの出力順を保持）."""

    document: str
    observations: list[TranslationObservation] = field(default_factory=list)
