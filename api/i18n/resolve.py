"""Resolve localized labels from upstream ``{lang: text}`` mappings."""

from __future__ import annotations

from typing import Any, Mapping

# Languages the upstream ephemeris API can label bodies and signs in.
SUPPORTED_LANGS = {"en", "te", "es", "fr", "pt", "ru", "de", "ja"}
FALLBACK_LANG = "en"


def clamp_lang(lang: str | None) -> str:
    if not lang:
        return FALLBACK_LANG
    lang = lang.lower()
    return lang if lang in SUPPORTED_LANGS else FALLBACK_LANG


def pick_label(labels: Any, lang: str | None = None) -> str:
    """Return the label for ``lang``, falling back to English.

    Missing mappings, missing keys and non-string values all resolve to an
    empty string; surrounding whitespace is stripped.
    """

    if not isinstance(labels, Mapping):
        return ""
    value = labels.get(lang or FALLBACK_LANG)
    if value is None:
        value = labels.get(FALLBACK_LANG)
    if not isinstance(value, str):
        return ""
    return value.strip()
