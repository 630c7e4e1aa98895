# File: typegen/locale.py
"""
NexaFlow TypeGen - Localized String Resolution
===============================================
A ``LocalizedString`` is either a plain string or a ``locale → text`` map.
Resolution is a pure function of the value, the requested locale and the
``LocaleConfig``; nothing here reads global state.

Fallback chain for maps:
    requested locale → fallback locale → default locale → ``en`` → first entry
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Union

from typegen.models import LocaleConfig, LocalizedString

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen.locale")

DEFAULT_LOCALE: str = "en"


def _candidates(locale: Optional[str], config: Optional[LocaleConfig]) -> List[str]:
    chain: List[str] = []
    if locale:
        chain.append(locale)
    if config is not None:
        chain.append(config.fallback_locale)
        chain.append(config.default_locale)
    chain.append(DEFAULT_LOCALE)
    # dedupe, keep order
    return list(dict.fromkeys(chain))


def resolve_localized_string(
    value: Optional[LocalizedString],
    locale: Optional[str] = None,
    config: Optional[LocaleConfig] = None,
) -> Optional[str]:
    """
    Resolve *value* to a single string.

    Returns ``None`` only when *value* is ``None`` or an empty map; callers
    then fall back to the raw identifier.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    for candidate in _candidates(locale, config):
        text: Optional[str] = value.get(candidate)
        if text is not None:
            return text
    for text in value.values():
        return text
    return None


def resolve_or_keep(
    value: Optional[LocalizedString],
    multi_locale: bool,
    locale: Optional[str] = None,
    config: Optional[LocaleConfig] = None,
) -> Optional[Union[str, Dict[str, str]]]:
    """Like ``resolve_localized_string`` but keeps maps intact under *multi_locale*."""
    if multi_locale and isinstance(value, dict):
        return dict(value)
    return resolve_localized_string(value, locale, config)


def locale_map(
    value: Optional[LocalizedString],
    locales: List[str],
    fallback: str,
    default: Optional[str] = None,
) -> Dict[str, str]:
    """
    Expand *value* into one entry per configured locale.

    Plain strings apply to every locale.  Map entries missing for a locale
    take the fallback-locale text, then ``en``, then *default*; locales with
    nothing to show are omitted.
    """
    if not value:
        if default is None:
            return {}
        return {loc: default for loc in locales}
    if isinstance(value, str):
        return {loc: value for loc in locales}
    result: Dict[str, str] = {}
    for loc in locales:
        text: Optional[str] = value.get(loc)
        if text is None:
            text = value.get(fallback)
        if text is None:
            text = value.get(DEFAULT_LOCALE)
        if text is None:
            text = default
        if text is not None:
            result[loc] = text
    return result


__all__: List[str] = [
    "DEFAULT_LOCALE",
    "resolve_localized_string",
    "resolve_or_keep",
    "locale_map",
]

logger.debug("typegen.locale loaded.")
