"""i18n_catalog_builder: 翻訳キーの抽出・マージ・差分・インデックス生成.

マークアップテンプレートとプログラムソースから翻訳キーを抽出し、階層カタログ、
ベースラインとの差分、言語/名前空間インデックスを生成する。
"""

from i18n_catalog_builder.builder import BuildResult, build_catalog
from i18n_catalog_builder.config import BuilderConfig, config_from_mapping, load_config

__version__ = "0.1.0"

__all__ = [
    "BuilderConfig",
    "BuildResult",
    "build_catalog",
    "config_from_mapping",
    "load_config",
]
