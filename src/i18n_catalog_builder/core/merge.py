"""カタログのマージと衝突検出.

- オブザベーション列を階層カタログへ畳み込む（後勝ち）
- 葉/枝の構造衝突を検出してそのキーだけ捨てる
- 同一文言を持つ複数キーの検出（任意、警告のみ）
"""

from __future__ import annotations

import copy
from collections.abc import Iterable

from loguru import logger

from .context import BuildContext, Catalog
from .exceptions import (
    DuplicateValueError,
    MismatchedDefinitionError,
    MissingDefaultValueError,
    TranslationKeyConflictError,
)
from .observations import TranslationObservation


def flatten_catalog(catalog: Catalog, prefix: str = "") -> dict[str, str]:
    """階層カタログを {ドット区切りパス: 文言} に平坦化する.

    Examples:
        >>> flatten_catalog({"home": {"title": "Home"}, "ok": "OK"})
        {'home.title': 'Home', 'ok': 'OK'}
    """
    result: dict[str, str] = {}
    for k, v in catalog.items():
        if isinstance(v, str):
            result[prefix + k] = v
        elif isinstance(v, dict):
            result.update(flatten_catalog(v, prefix + k + "."))
    return result


def set_path(catalog: Catalog, key: str, value: str) -> None:
    """ドット区切りパスに値を設定する（途中の枝は作成、葉は上書き）."""
    *parents, leaf = key.split(".")
    node = catalog
    for segment in parents:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child
    node[leaf] = value


def assign_leaf(catalog: Catalog, key: str, value: str, context: BuildContext) -> tuple[bool, str | None]:
    """構造衝突を検査しながら葉を設定する.

    衝突した場合はカタログを変更せず、エラーを記録します。

    Args:
        catalog: 設定先カタログ
        key: ドット区切りキー
        value: 設定する文言
        context: 診断の記録先

    Returns:
        (設定できたか, 上書き前の文言)
    """
    segments = key.split(".")
    node = catalog
    pending: list[str] = []
    for i, segment in enumerate(segments[:-1]):
        child = node.get(segment)
        if child is None:
            # 衝突が判明するまで枝の作成は保留する
            pending = segments[i:-1]
            break
        if isinstance(child, str):
            context.error(TranslationKeyConflictError(key, parent_path=".".join(segments[: i + 1])))
            return False, None
        node = child

    leaf = segments[-1]
    if not pending:
        existing = node.get(leaf)
        if isinstance(existing, dict):
            subkeys = [f"{key}.{k}" for k in existing]
            context.error(TranslationKeyConflictError(key, subkeys=subkeys))
            return False, None
    else:
        existing = None
        for segment in pending:
            node[segment] = {}
            node = node[segment]

    node[leaf] = value
    return True, existing


def merge_observation(observation: TranslationObservation, context: BuildContext) -> bool:
    """1件のオブザベーションをカタログへマージする.

    Returns:
        マージできた場合 True（構造衝突時は False）
    """
    key = observation.key
    value = observation.value
    if not value:
        context.warn(MissingDefaultValueError(key))
        value = key

    assigned, existing = assign_leaf(context.catalog, key, value, context)
    if not assigned:
        return False

    keys = context.duplicate_values.setdefault(value, [])
    if key not in keys:
        keys.append(key)

    if existing is not None and existing != value:
        context.warn(MismatchedDefinitionError(key, existing, value))
    return True


def merge_observations(observations: Iterable[TranslationObservation], context: BuildContext) -> Catalog:
    """オブザベーション列を順番にマージする.

    例外は送出せず、問題はすべて context の診断に記録されます。

    Args:
        observations: 正規化済みオブザベーション列（発見順）
        context: ビルドコンテキスト

    Returns:
        マージ済みカタログ（context.catalog）
    """
    merged = 0
    rejected = 0
    for obs in observations:
        if merge_observation(obs, context):
            merged += 1
        else:
            rejected += 1

    logger.info(f"[Phase 3] Merged {merged} observations ({rejected} rejected by key conflicts)")
    return context.catalog


def report_duplicate_values(context: BuildContext) -> int:
    """同じ文言を持つ複数キーを警告する（ビルドは止めない）.

    Returns:
        警告件数
    """
    count = 0
    for value, keys in context.duplicate_values.items():
        if len(keys) > 1:
            context.warn(DuplicateValueError(value, list(keys)))
            count += 1
    return count


def overlay_catalog(base: Catalog, catalog: Catalog, context: BuildContext) -> Catalog:
    """マージ済みカタログをベースラインの複製に重ねる.

    ベースラインファイルを編集しなくても新規キーを利用できるようにするためのものです。
    ベースラインと構造が衝突するキーはエラーとして記録され、ベースライン側が残ります。

    Args:
        base: ベースラインカタログ（変更されない）
        catalog: マージ済みカタログ
        context: 診断の記録先

    Returns:
        重ね合わせたカタログ
    """
    result = copy.deepcopy(base)
    for key, value in flatten_catalog(catalog).items():
        assign_leaf(result, key, value, context)
    return result
