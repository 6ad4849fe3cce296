"""Catalog builder exceptions.

ビルド中に検出した問題を表す例外クラスを定義します。
ほとんどは raise されず、Diagnostic として BuildContext に記録されます。
"""


class CatalogBuildError(Exception):
    """ビルド診断の基底クラス."""


class TranslationKeyConflictError(CatalogBuildError):
    """キー構造の衝突（葉とサブツリーの衝突）.

    Attributes:
        key: 採用できなかったキー
        parent_path: 既に葉として使われている親パス（葉→枝の衝突時）
        subkeys: 既存のサブキー（枝→葉の衝突時）
    """

    def __init__(
        self,
        key: str,
        *,
        parent_path: str | None = None,
        subkeys: list[str] | None = None,
    ) -> None:
        self.key = key
        self.parent_path = parent_path
        self.subkeys = subkeys or []
        if parent_path is not None:
            message = f'Translation key "{key}" cannot be used because the parent {parent_path} is already in use.'
        else:
            listing = "\n\t".join(self.subkeys)
            message = f'Translation key "{key}" cannot be used because there are already sub-keys:\n\t{listing}'
        super().__init__(message)


class MismatchedDefinitionError(CatalogBuildError):
    """同一キーに異なるデフォルト文言が定義されている."""

    def __init__(self, key: str, existing: str, incoming: str) -> None:
        self.key = key
        self.existing = existing
        self.incoming = incoming
        super().__init__(f'Translation key "{key}" has mismatching definitions:\n\t1. {existing}\n\t2. {incoming}')


class MissingDefaultValueError(CatalogBuildError):
    """デフォルト文言が無い（キー自身を文言として使う）."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f'Translation key "{key}" has no default value')


class InterpolationError(CatalogBuildError):
    """キーまたは文言に静的に解決できない補間（${...}）が含まれている."""

    def __init__(self, key: str, value: str | None = None) -> None:
        self.key = key
        self.value = value
        if value is None:
            message = f'Translation key "{key}" contains non-i18next interpolation'
        else:
            message = f'Translation key "{key}" contains template interpolation:\n\t{value}'
        super().__init__(message)


class NonLiteralArgumentError(CatalogBuildError):
    """翻訳関数の呼び出しにリテラル以外の引数が渡されている."""

    def __init__(self, function_name: str, location: object) -> None:
        self.function_name = function_name
        self.location = location
        super().__init__(f'Call to "{function_name}" contains non-literal arguments:\n\t{location}')


class MarkupBindingError(CatalogBuildError):
    """text バインドの要素が子要素を含んでいる."""

    def __init__(self, key: str, text: str, html: str) -> None:
        self.key = key
        self.text = text
        self.html = html
        super().__init__(
            f'Translation key "{key}" contains HTML elements but is bound as text:\n\tText: {text}\n\tHtml: {html}'
        )


class SourceParseError(CatalogBuildError):
    """ソースドキュメントを解析できなかった."""

    def __init__(self, document: str, reason: str) -> None:
        self.document = document
        self.reason = reason
        super().__init__(f"Failed to parse {document}: {reason}")


class InvalidTranslationFileError(CatalogBuildError):
    """出力済み翻訳ファイルが正しいJSONではない."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Translation file {name} is not valid JSON: {reason}")


class ConfigError(ValueError):
    """設定値が不正（ビルド開始前に送出）."""


class DuplicateValueError(CatalogBuildError):
    """同じ文言が複数のキーで定義されている（助言のみ）."""

    def __init__(self, value: str, keys: list[str]) -> None:
        self.value = value
        self.keys = keys
        listing = "\n\t".join(keys)
        super().__init__(f'There are multiple keys for translation "{value}":\n\t{listing}')


class InvalidOutputNameError(CatalogBuildError):
    """展開した出力名が出力ディレクトリの外、またはベースライン自身を指している."""

    def __init__(self, name: str, output_dir: object, reason: str) -> None:
        self.name = name
        self.output_dir = output_dir
        self.reason = reason
        super().__init__(f"Catalog name {name} cannot be written under {output_dir}: {reason}")
