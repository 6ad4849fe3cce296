"""マークアップ（HTMLテンプレート）用アダプタ.

翻訳マーカー属性（既定は ``t``）を持つ要素を抽出します。属性値は ``;`` 区切りで、
各要素は ``key`` または ``key[属性名]`` の形式です::

    <span t="greeting">Hello</span>
    <img t="logo[alt]" alt="Logo" src="logo.png">
    <p t="intro[html];intro_title[title]" title="Intro">Read <b>this</b></p>
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from ..core.context import BuildContext
from ..core.exceptions import MarkupBindingError
from ..core.observations import SourceLocation, TranslationObservation
from .base_adapter import BaseAdapter

_ATTR_EXP = re.compile(r"\[([a-z\-]*)\]", re.IGNORECASE)

# element html の中身を読む疑似属性
_HTML_TARGETS = {"html", "prepend", "append"}


class MarkupAdapter(BaseAdapter):
    """マークアップテンプレート用アダプタ.

    入れ子の ``<template>`` 領域も通常の子要素として解析されるため、
    その中のマーカー付き要素も文書順に見つかります。
    """

    def __init__(self, context: BuildContext) -> None:
        super().__init__(context)
        self.patterns = tuple(context.config.markup_globs)
        self.marker = context.config.marker_attribute

    def extract(self, content: str, document: str) -> list[TranslationObservation]:
        soup = BeautifulSoup(content, "html.parser")
        observations: list[TranslationObservation] = []
        for element in soup.find_all(attrs={self.marker: True}):
            location = SourceLocation(document, element.sourceline, element.sourcepos)
            for key, value in self._parse_element(element):
                observations.append(TranslationObservation(key=key, value=value, location=location))
        return observations

    def _parse_element(self, element: Tag) -> list[tuple[str, str | None]]:
        marker_value = element.get(self.marker)
        if isinstance(marker_value, list):
            marker_value = " ".join(marker_value)

        results: list[tuple[str, str | None]] = []
        for raw_key in (marker_value or "").split(";"):
            key = raw_key.strip()
            if not key:
                continue

            attr = "src" if element.name == "img" else "text"
            match = _ATTR_EXP.search(key)
            if match:
                key = key.replace(match.group(0), "").strip()
                attr = match.group(1)

            results.append((key, self._read_value(element, key, attr)))
        return results

    def _read_value(self, element: Tag, key: str, attr: str) -> str | None:
        if attr == "text":
            value = element.get_text().strip()
            if element.find(True) is not None:
                self.context.warn(MarkupBindingError(key, value, element.decode_contents().strip()))
            return value
        if attr in _HTML_TARGETS:
            return element.decode_contents().strip()

        value = element.get(attr)
        if isinstance(value, list):
            return " ".join(value)
        return value
