"""Unit tests for diagnostics reporting."""

from pathlib import Path

import polars as pl

from i18n_catalog_builder.config import BuilderConfig
from i18n_catalog_builder.core.context import BuildContext
from i18n_catalog_builder.core.exceptions import (
    InvalidTranslationFileError,
    MissingDefaultValueError,
    TranslationKeyConflictError,
)
from i18n_catalog_builder.core.reports import diagnostics_frame, export_diagnostics_report


def _context(tmp_path: Path) -> BuildContext:
    return BuildContext(config=BuilderConfig(source_dir=tmp_path))


class TestExportDiagnosticsReport:
    """export_diagnostics_report関数のテスト."""

    def test_export_warnings_and_errors(self, tmp_path: Path) -> None:
        context = _context(tmp_path)
        context.warn(MissingDefaultValueError("menu.open"))
        context.warn(MissingDefaultValueError("menu.close"))
        context.error(TranslationKeyConflictError("a.b", parent_path="a"))

        paths = export_diagnostics_report(context.diagnostics, tmp_path / "reports")

        assert paths["warnings"] is not None
        assert paths["errors"] is not None
        warnings_df = pl.read_csv(paths["warnings"])
        assert len(warnings_df) == 2
        assert warnings_df["key"].to_list() == ["menu.open", "menu.close"]
        errors_df = pl.read_csv(paths["errors"])
        assert errors_df["kind"].to_list() == ["TranslationKeyConflictError"]

    def test_export_without_errors_removes_stale_file(self, tmp_path: Path) -> None:
        """エラーが無ければ前回の errors.csv を消す."""
        report_dir = tmp_path / "reports"
        report_dir.mkdir()
        (report_dir / "errors.csv").write_text("stale", encoding="utf-8")
        context = _context(tmp_path)
        context.warn(MissingDefaultValueError("a"))

        paths = export_diagnostics_report(context.diagnostics, report_dir)

        assert paths["errors"] is None
        assert not (report_dir / "errors.csv").exists()
        assert paths["warnings"] == report_dir / "warnings.csv"

    def test_output_directory_creation(self, tmp_path: Path) -> None:
        output_dir = tmp_path / "new" / "reports"

        paths = export_diagnostics_report([], output_dir)

        assert output_dir.exists()
        assert paths == {"warnings": None, "errors": None}


def test_diagnostics_frame_key_column(tmp_path: Path) -> None:
    """key を持たない診断は null になる."""
    context = _context(tmp_path)
    context.error(InvalidTranslationFileError("locales/de/common.json", "Expecting value"))

    df = diagnostics_frame(context.diagnostics)

    assert df.columns == ["level", "kind", "key", "message"]
    assert df["key"].to_list() == [None]
    assert df["level"].to_list() == ["error"]
