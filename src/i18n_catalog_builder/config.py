"""ビルド設定.

YAML ファイル（任意）と CLI 引数から BuilderConfig を組み立てます。

YAML形式:
    source_dir: src
    output_dir: dist
    src: locales/en/translation.json
    dest: locales/en/translation.[contenthash:8].json
    index: locales/index.json
    create_diff: true
    duplicate_warnings: false
    translation_function: t
    function_aliases: [i18n.t]
    exclude_paths: [node_modules, vendor]
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from .core.exceptions import ConfigError

DEFAULT_DEST_TEMPLATE = "locales/en/translation.[contenthash:8].json"
DEFAULT_TRANSLATION_FILE_PATTERN = r"locales/(?P<lang>[^/]+)/(?P<ns>[^/.]+)(?:\.[^/.]+)?\.json$"
DEFAULT_EXCLUDE_DIRS = ("node_modules",)

_PATH_FIELDS = {"source_dir", "output_dir", "src", "report_dir"}
_TUPLE_FIELDS = {"function_aliases", "exclude_paths", "markup_globs", "source_globs"}


@dataclass(frozen=True)
class BuilderConfig:
    """カタログビルドの設定.

    Attributes:
        source_dir: 抽出対象ドキュメントのルート
        output_dir: 成果物（カタログ/インデックス）の出力先
        src: ベースラインカタログ（前回公開分）のパス
        dest: 出力カタログ名のテンプレート（[name], [ext], [contenthash:8] など）
        index: インデックスファイル名（output_dir からの相対、None なら出力しない）
        create_diff: ベースラインとの差分ファイルを出力するか
        duplicate_warnings: 同一文言を持つ複数キーを警告するか
        translation_function: 翻訳関数の識別子（例: "t", "i18n.t"）
        function_aliases: 翻訳関数として扱う別名
        exclude_paths: 抽出対象から外すパス（source_dir からの相対 or 絶対）
        translation_file_pattern: 出力翻訳ファイル名の正規表現（lang/ns を捕捉）
        marker_attribute: マークアップ中の翻訳マーカー属性名
        markup_globs: マークアップとして扱うファイルパターン
        source_globs: プログラムソースとして扱うファイルパターン
        include_baseline: 出力カタログをベースラインに重ねて生成するか
        report_dir: 診断レポートの出力先（None なら出力しない）
    """

    source_dir: Path = Path(".")
    output_dir: Path = Path("dist")
    src: Path | None = None
    dest: str = DEFAULT_DEST_TEMPLATE
    index: str | None = None
    create_diff: bool = False
    duplicate_warnings: bool = False
    translation_function: str = "t"
    function_aliases: tuple[str, ...] = ()
    exclude_paths: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    translation_file_pattern: str = DEFAULT_TRANSLATION_FILE_PATTERN
    marker_attribute: str = "t"
    markup_globs: tuple[str, ...] = ("*.html",)
    source_globs: tuple[str, ...] = ("*.py",)
    include_baseline: bool = True
    report_dir: Path | None = None
    _pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            pattern = re.compile(self.translation_file_pattern)
        except re.error as e:
            raise ConfigError(f"Invalid translation_file_pattern {self.translation_file_pattern!r}: {e}") from e
        if pattern.groups < 2:
            raise ConfigError(
                f"translation_file_pattern must capture language and namespace: {self.translation_file_pattern!r}"
            )
        if not self.translation_function:
            raise ConfigError("translation_function must not be empty")
        if self.create_diff and self.src is None:
            raise ConfigError("create_diff requires src (baseline path)")
        object.__setattr__(self, "_pattern", pattern)

    @property
    def file_pattern(self) -> re.Pattern[str]:
        return self._pattern

    @property
    def resource_path(self) -> Path:
        """出力名テンプレートの [name]/[ext] の基準となるパス."""
        return self.src if self.src is not None else Path("translation.json")

    def resolved_exclude_paths(self) -> list[Path]:
        """除外パスを絶対パスに解決する."""
        root = self.source_dir.resolve()
        resolved: list[Path] = []
        for p in self.exclude_paths:
            path = Path(p)
            resolved.append(path.resolve() if path.is_absolute() else (root / path).resolve())
        return resolved

    def function_names(self) -> set[str]:
        """翻訳関数として認識する呼び出し名の集合."""
        names = {self.translation_function, f"self.{self.translation_function}"}
        names.update(self.function_aliases)
        return names


def _coerce(name: str, value: Any, base_dir: Path) -> Any:
    if value is None:
        return None
    if name in _PATH_FIELDS:
        path = Path(value)
        return path if path.is_absolute() else base_dir / path
    if name in _TUPLE_FIELDS:
        if isinstance(value, str):
            return (value,)
        return tuple(str(v) for v in value)
    return value


def config_from_mapping(data: dict[str, Any], base_dir: Path | None = None) -> BuilderConfig:
    """辞書から BuilderConfig を生成する.

    Args:
        data: 設定値の辞書
        base_dir: 相対パスの基準ディレクトリ（None の場合はそのまま）

    Returns:
        設定オブジェクト

    Raises:
        ConfigError: 未知のキー、または不正な値が含まれている場合
    """
    known = {f.name for f in dataclasses.fields(BuilderConfig) if f.init}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config option(s): {', '.join(unknown)}")

    base = base_dir if base_dir is not None else Path()
    kwargs = {k: _coerce(k, v, base) for k, v in data.items()}
    return BuilderConfig(**kwargs)


def load_config(config_path: Path | str) -> BuilderConfig:
    """YAMLファイルから設定を読み込む.

    相対パスは設定ファイルのあるディレクトリを基準に解決します。

    Raises:
        FileNotFoundError: ファイルが存在しない場合
        ConfigError: YAML が不正、またはトップレベルがマッピングでない場合
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {config_path}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping, got {type(data).__name__}")

    config = config_from_mapping(data, base_dir=config_path.parent)
    logger.info(f"Loaded config from {config_path}")
    return config
