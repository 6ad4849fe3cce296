"""プログラムソース（Pythonモジュール）用アダプタ.

設定された翻訳関数（既定は ``t``、加えて ``self.t`` と別名）の呼び出しを探し、
第1位置引数をキー、第3位置引数をデフォルト文言として読み取ります::

    t("greet", None, "Hi there")
    self.t("menu.open")
"""

from __future__ import annotations

import ast

from ..core.context import BuildContext
from ..core.exceptions import NonLiteralArgumentError, SourceParseError
from ..core.observations import SourceLocation, TranslationObservation
from .base_adapter import BaseAdapter


def dotted_name(node: ast.AST) -> str | None:
    """呼び出し先の式をドット区切りの名前にする（解決できなければ None）.

    Examples:
        >>> dotted_name(ast.parse("i18n.t").body[0].value)
        'i18n.t'
    """
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        parent = dotted_name(node.value)
        return f"{parent}.{node.attr}" if parent else None
    return None


def _is_literal(node: ast.AST, allow_none: bool) -> bool:
    if not isinstance(node, ast.Constant):
        return False
    return isinstance(node.value, str) or (allow_none and node.value is None)


class _TranslationCallVisitor(ast.NodeVisitor):
    def __init__(self, adapter: SourceAdapter, document: str) -> None:
        self.adapter = adapter
        self.document = document
        self.observations: list[TranslationObservation] = []

    def visit_Call(self, node: ast.Call) -> None:
        name = dotted_name(node.func)
        if name in self.adapter.function_names:
            self._handle_call(name, node)
        self.generic_visit(node)

    def _handle_call(self, name: str, node: ast.Call) -> None:
        args = node.args
        if not args:
            return

        location = SourceLocation(self.document, node.lineno, node.col_offset)
        key_arg = args[0]
        value_arg = args[2] if len(args) >= 3 else None
        if not _is_literal(key_arg, allow_none=False) or (
            value_arg is not None and not _is_literal(value_arg, allow_none=True)
        ):
            self.adapter.context.warn(NonLiteralArgumentError(name, location))
            return

        value = value_arg.value if value_arg is not None else None
        self.observations.append(TranslationObservation(key=key_arg.value, value=value, location=location))


class SourceAdapter(BaseAdapter):
    """Pythonソースファイル用アダプタ."""

    def __init__(self, context: BuildContext) -> None:
        super().__init__(context)
        self.patterns = tuple(context.config.source_globs)
        self.function_names = context.config.function_names()

    def extract(self, content: str, document: str) -> list[TranslationObservation]:
        try:
            tree = ast.parse(content, filename=document)
        except SyntaxError as e:
            self.context.warn(SourceParseError(document, str(e)))
            return []

        visitor = _TranslationCallVisitor(self, document)
        visitor.visit(tree)
        return visitor.observations
