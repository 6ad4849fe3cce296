"""翻訳オブザベーション抽出用のアダプタ群."""

from .base_adapter import BaseAdapter
from .markup_adapter import MarkupAdapter
from .source_adapter import SourceAdapter

__all__ = [
    "BaseAdapter",
    "MarkupAdapter",
    "SourceAdapter",
]
