"""Unit tests for baseline diff."""

import json
from pathlib import Path

from i18n_catalog_builder.core.diff import diff_catalogs, diff_path_for, write_diff_report


class TestDiffCatalogs:
    """diff_catalogs関数のテスト."""

    def test_plural_variant_not_removed(self) -> None:
        """_plural バリアントは removed に含めない."""
        report = diff_catalogs({"a": "1", "a_plural": "1s"}, {"a": "2"})

        assert report.changed == {"a": "2"}
        assert report.removed == {}
        assert report.new == {}

    def test_removed_key(self) -> None:
        report = diff_catalogs({"x": "old"}, {})

        assert report.removed == {"x": "old"}
        assert report.changed == {}
        assert report.new == {}

    def test_ordinal_variant_not_removed(self) -> None:
        report = diff_catalogs({"item_0": "first", "item_12": "twelfth", "item": "Item"}, {})

        assert report.removed == {"item": "Item"}

    def test_new_keys_keep_hierarchy(self) -> None:
        report = diff_catalogs({}, {"home": {"title": "Home", "menu": {"open": "Open"}}})

        assert report.new == {"home": {"title": "Home", "menu": {"open": "Open"}}}
        assert report.changed == {}
        assert report.removed == {}

    def test_changed_shows_new_value(self) -> None:
        """changed には新しい文言が入る."""
        report = diff_catalogs({"home": {"title": "Old"}}, {"home": {"title": "New"}})

        assert report.changed == {"home": {"title": "New"}}

    def test_unchanged_catalog_is_empty(self) -> None:
        catalog = {"a": "1", "b": {"c": "2"}}
        report = diff_catalogs(catalog, catalog)

        assert report.is_empty()

    def test_order_follows_baseline(self) -> None:
        """removed の並びはベースラインの出現順."""
        report = diff_catalogs({"b": "1", "a": "1", "c": "1"}, {})

        assert list(report.removed) == ["b", "a", "c"]

    def test_leaf_replaced_by_branch(self) -> None:
        """葉が枝に置き換わった場合は removed と new に分かれる."""
        report = diff_catalogs({"a": "1"}, {"a": {"b": "2"}})

        assert report.removed == {"a": "1"}
        assert report.new == {"a": {"b": "2"}}


def test_only_trailing_variant_suffix_is_kept() -> None:
    """末尾が _数字 / _plural のキーだけがバリアント扱い."""
    baseline = {"apple_plural": "x", "apple_3": "x", "apple": "x", "plural_apple": "x", "apple_pluralx": "x"}

    report = diff_catalogs(baseline, {})

    assert list(report.removed) == ["apple", "plural_apple", "apple_pluralx"]


class TestWriteDiffReport:
    """write_diff_report関数のテスト."""

    def test_diff_path_for(self) -> None:
        assert diff_path_for(Path("locales/en/translation.json")) == Path("locales/en/translation.diff.json")

    def test_creates_missing_directory(self, tmp_path: Path) -> None:
        """出力先ディレクトリが無ければ作成する."""
        baseline_path = tmp_path / "missing" / "translation.json"
        report = diff_catalogs({"x": "old"}, {"y": "new"})

        out_path = write_diff_report(report, baseline_path)

        assert out_path == tmp_path / "missing" / "translation.diff.json"
        data = json.loads(out_path.read_text(encoding="utf-8"))
        assert data == {"new": {"y": "new"}, "changed": {}, "removed": {"x": "old"}}
        assert "\t" in out_path.read_text(encoding="utf-8")
