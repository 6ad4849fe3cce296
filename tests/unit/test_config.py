"""Unit tests for builder configuration."""

from pathlib import Path

import pytest

from i18n_catalog_builder.config import (
    DEFAULT_DEST_TEMPLATE,
    BuilderConfig,
    config_from_mapping,
    load_config,
)
from i18n_catalog_builder.core.exceptions import ConfigError


class TestBuilderConfig:
    """BuilderConfigのテスト."""

    def test_defaults(self) -> None:
        config = BuilderConfig()

        assert config.dest == DEFAULT_DEST_TEMPLATE
        assert config.index is None
        assert not config.create_diff
        assert not config.duplicate_warnings
        assert config.translation_function == "t"
        assert config.exclude_paths == ("node_modules",)
        assert config.include_baseline
        assert config.file_pattern.search("locales/en/common.json")

    def test_invalid_pattern(self) -> None:
        with pytest.raises(ConfigError, match="Invalid translation_file_pattern"):
            BuilderConfig(translation_file_pattern="locales/(")

    def test_pattern_needs_two_groups(self) -> None:
        with pytest.raises(ConfigError, match="must capture language and namespace"):
            BuilderConfig(translation_file_pattern=r"locales/([^/]+)\.json$")

    def test_create_diff_requires_src(self) -> None:
        with pytest.raises(ConfigError, match="create_diff requires src"):
            BuilderConfig(create_diff=True)

    def test_function_names(self) -> None:
        config = BuilderConfig(translation_function="tr", function_aliases=("i18n.tr",))
        assert config.function_names() == {"tr", "self.tr", "i18n.tr"}

    def test_resolved_exclude_paths(self, tmp_path: Path) -> None:
        absolute = tmp_path / "elsewhere"
        config = BuilderConfig(source_dir=tmp_path, exclude_paths=("vendor", str(absolute)))

        assert config.resolved_exclude_paths() == [(tmp_path / "vendor").resolve(), absolute.resolve()]

    def test_resource_path(self) -> None:
        assert BuilderConfig().resource_path == Path("translation.json")
        assert BuilderConfig(src=Path("locales/en/app.json")).resource_path == Path("locales/en/app.json")


class TestLoadConfig:
    """load_config / config_from_mapping のテスト."""

    def test_load_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "i18n.yml"
        config_path.write_text(
            "\n".join(
                [
                    "source_dir: app",
                    "output_dir: dist",
                    "src: locales/en/translation.json",
                    "index: locales/index.json",
                    "create_diff: true",
                    "function_aliases: [i18n.t]",
                    "exclude_paths: vendor",
                ]
            ),
            encoding="utf-8",
        )

        config = load_config(config_path)

        assert config.source_dir == tmp_path / "app"
        assert config.output_dir == tmp_path / "dist"
        assert config.src == tmp_path / "locales" / "en" / "translation.json"
        assert config.index == "locales/index.json"
        assert config.create_diff
        assert config.function_aliases == ("i18n.t",)
        assert config.exclude_paths == ("vendor",)

    def test_empty_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "i18n.yml"
        config_path.write_text("", encoding="utf-8")

        assert load_config(config_path) == BuilderConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yml")

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        config_path = tmp_path / "i18n.yml"
        config_path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config(config_path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "i18n.yml"
        config_path.write_text("source_dir: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(config_path)

    def test_unknown_option(self) -> None:
        with pytest.raises(ConfigError, match="Unknown config option"):
            config_from_mapping({"sourcedir": "app"})
