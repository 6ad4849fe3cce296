"""カタログの書き出しと出力名テンプレート."""

from __future__ import annotations

import hashlib
import json
import os
import re
from pathlib import Path

from loguru import logger

from .context import Catalog
from .exceptions import InvalidOutputNameError

_PLACEHOLDER = re.compile(
    r"\[(?:(?P<algo>[a-z0-9_]+):)?(?P<kind>hash|contenthash)(?::(?P<length>\d+))?\]",
    re.IGNORECASE,
)
DEFAULT_HASH_ALGORITHM = "md5"


def serialize_catalog(catalog: Catalog) -> str:
    return json.dumps(catalog, ensure_ascii=False, separators=(",", ":"))


def _content_hash(content: str, algorithm: str, length: int | None) -> str:
    try:
        digest = hashlib.new(algorithm, content.encode("utf-8")).hexdigest()
    except ValueError as e:
        raise ValueError(f"Unsupported hash algorithm in name template: {algorithm}") from e
    return digest[:length] if length else digest


def interpolate_name(
    template: str,
    resource_path: Path | str,
    content: str,
    context_dir: Path | str | None = None,
) -> str:
    """出力名テンプレートを展開する.

    対応するプレースホルダ:
        - [name]: 元ファイル名（拡張子なし）
        - [ext]: 元ファイルの拡張子（ドットなし）
        - [path]: context_dir からの相対ディレクトリ（末尾 / 付き）
        - [folder]: 元ファイルの親ディレクトリ名
        - [hash] / [contenthash]: 内容のハッシュ（[sha1:hash:8] のように算法と長さを指定可）

    Args:
        template: テンプレート（例: "locales/en/[name].[contenthash:8].json"）
        resource_path: 元ファイルのパス
        content: 出力内容（ハッシュ計算に使用）
        context_dir: [path] の基準ディレクトリ

    Returns:
        展開後の名前

    Examples:
        >>> interpolate_name("[name].[ext]", "locales/translation.json", "{}")
        'translation.json'
    """
    resource_path = Path(resource_path)

    def _hash(m: re.Match[str]) -> str:
        algo = (m.group("algo") or DEFAULT_HASH_ALGORITHM).lower()
        length = int(m.group("length")) if m.group("length") else None
        return _content_hash(content, algo, length)

    name = _PLACEHOLDER.sub(_hash, template)

    if context_dir is None:
        rel_dir = resource_path.parent.as_posix()
    else:
        # 基準の外にあるファイルは ../ 付きの相対パスになる
        rel_dir = Path(os.path.relpath(resource_path.resolve().parent, Path(context_dir).resolve())).as_posix()
    path_part = "" if rel_dir in ("", ".") else f"{rel_dir}/"

    return (
        name.replace("[name]", resource_path.stem)
        .replace("[ext]", resource_path.suffix.lstrip("."))
        .replace("[path]", path_part)
        .replace("[folder]", resource_path.parent.name)
    )


def write_catalog(
    catalog: Catalog,
    output_dir: Path | str,
    template: str,
    resource_path: Path | str,
    context_dir: Path | str | None = None,
) -> Path | None:
    """カタログを出力する.

    カタログが空の場合は何も書き出しません。

    Args:
        catalog: 出力するカタログ
        output_dir: 出力先ディレクトリ
        template: 出力名テンプレート（output_dir からの相対）
        resource_path: [name]/[ext]/[path] の元になるファイル（ベースライン）
        context_dir: [path] の基準ディレクトリ

    Returns:
        書き出したファイルのパス（書き出さなかった場合は None）

    Raises:
        InvalidOutputNameError: 展開した名前が output_dir の外、またはベースライン自身を指す場合
    """
    if not catalog:
        logger.info("[Phase 5] Merged catalog is empty; no catalog written")
        return None

    content = serialize_catalog(catalog)
    name = interpolate_name(template, resource_path, content, context_dir)
    out_path = Path(output_dir) / name

    resolved = out_path.resolve()
    if not resolved.is_relative_to(Path(output_dir).resolve()):
        raise InvalidOutputNameError(name, output_dir, "resolves outside the output directory")
    if resolved == Path(resource_path).resolve():
        raise InvalidOutputNameError(name, output_dir, "would overwrite the baseline catalog")

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(content, encoding="utf-8")
    logger.info(f"[Phase 5] Catalog written to {out_path} ({len(content)} bytes)")
    return out_path
