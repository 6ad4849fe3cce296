"""Unit tests for the Python source adapter."""

import ast
from pathlib import Path

import pytest

from i18n_catalog_builder.adapters.source_adapter import SourceAdapter, dotted_name
from i18n_catalog_builder.config import BuilderConfig
from i18n_catalog_builder.core.context import BuildContext
from i18n_catalog_builder.core.exceptions import NonLiteralArgumentError, SourceParseError


@pytest.fixture
def context(tmp_path: Path) -> BuildContext:
    return BuildContext(config=BuilderConfig(source_dir=tmp_path))


def _pairs(adapter: SourceAdapter, source: str) -> list[tuple[str, str | None]]:
    return [(o.key, o.value) for o in adapter.extract(source, "app/main.py")]


class TestSourceAdapter:
    """SourceAdapterのテスト."""

    def test_key_and_default_value(self, context: BuildContext) -> None:
        adapter = SourceAdapter(context)
        assert _pairs(adapter, 't("greet", None, "Hi there")') == [("greet", "Hi there")]
        assert context.diagnostics == []

    def test_dynamic_key_warns(self, context: BuildContext) -> None:
        """非リテラルのキーは警告してスキップする."""
        adapter = SourceAdapter(context)

        assert _pairs(adapter, "t(dynamic_var)") == []
        assert len(context.warnings) == 1
        error = context.warnings[0].error
        assert isinstance(error, NonLiteralArgumentError)
        assert "app/main.py (line 1, column 0)" in str(error)

    def test_dynamic_value_warns(self, context: BuildContext) -> None:
        adapter = SourceAdapter(context)

        assert _pairs(adapter, 't("greet", None, name)') == []
        assert [d.kind for d in context.warnings] == ["NonLiteralArgumentError"]

    def test_fstring_key_warns(self, context: BuildContext) -> None:
        adapter = SourceAdapter(context)

        assert _pairs(adapter, 't(f"user.{uid}")') == []
        assert len(context.warnings) == 1

    def test_key_only(self, context: BuildContext) -> None:
        adapter = SourceAdapter(context)
        assert _pairs(adapter, 't("menu.open")') == [("menu.open", None)]

    def test_second_argument_ignored(self, context: BuildContext) -> None:
        """第2引数（オプション）はリテラルでなくてもよい."""
        adapter = SourceAdapter(context)
        assert _pairs(adapter, 't("count", {"n": n}, "Count")') == [("count", "Count")]
        assert context.diagnostics == []

    def test_self_binding(self, context: BuildContext) -> None:
        adapter = SourceAdapter(context)
        source = "class View:\n    def render(self):\n        return self.t('menu.close', None, 'Close')\n"

        obs = adapter.extract(source, "app/view.py")

        assert [(o.key, o.value) for o in obs] == [("menu.close", "Close")]
        assert (obs[0].location.line, obs[0].location.column) == (3, 15)

    def test_configured_alias(self, tmp_path: Path) -> None:
        config = BuilderConfig(source_dir=tmp_path, translation_function="i18n.t", function_aliases=("_t",))
        adapter = SourceAdapter(BuildContext(config=config))
        source = 'i18n.t("a", None, "A")\n_t("b", None, "B")\nt("c", None, "C")\n'

        assert _pairs(adapter, source) == [("a", "A"), ("b", "B")]

    def test_nested_calls_in_order(self, context: BuildContext) -> None:
        adapter = SourceAdapter(context)
        source = 'render(t("title", None, "Title"), t("body", None, "Body"))\nprint("not a key")\n'

        assert _pairs(adapter, source) == [("title", "Title"), ("body", "Body")]

    def test_no_arguments(self, context: BuildContext) -> None:
        adapter = SourceAdapter(context)
        assert _pairs(adapter, "t()") == []
        assert context.diagnostics == []

    def test_syntax_error_warns(self, context: BuildContext) -> None:
        adapter = SourceAdapter(context)

        assert _pairs(adapter, "def broken(:\n") == []
        assert len(context.warnings) == 1
        assert isinstance(context.warnings[0].error, SourceParseError)

    def test_matches(self, context: BuildContext) -> None:
        adapter = SourceAdapter(context)
        assert adapter.matches("app/main.py")
        assert not adapter.matches("views/home.html")


def test_dotted_name() -> None:
    assert dotted_name(ast.parse("t").body[0].value) == "t"
    assert dotted_name(ast.parse("self.i18n.t").body[0].value) == "self.i18n.t"
    assert dotted_name(ast.parse("get().t").body[0].value) is None
