"""
Country name resolution.

The region provider only needs one capability from the locale database:
"what is the display name of this country in this locale?". NameResolver
is that seam; BabelNameResolver answers it from the CLDR territory names
shipped with Babel.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Dict, Optional

from babel import Locale, UnknownLocaleError

logger = logging.getLogger(__name__)


class NameResolver(ABC):
    """Resolves a country code to its display name in a locale."""

    @abstractmethod
    def resolve(self, country_code: str, locale: str) -> Optional[str]:
        """
        Args:
            country_code: ISO 3166-1 alpha-2 code, uppercase
            locale: Locale identifier (e.g. "fr", "pt_BR", "zh-Hant")

        Returns:
            The display name, or None when the locale has no name for the
            country. Must not raise for unknown countries or locales.
        """


@lru_cache(maxsize=64)
def _territory_names(locale: str) -> Optional[Dict[str, str]]:
    try:
        return dict(Locale.parse(locale.replace("-", "_")).territories)
    except (UnknownLocaleError, ValueError, TypeError) as e:
        logger.debug(f"No locale data for {locale!r}: {e}")
        return None


class BabelNameResolver(NameResolver):
    """Country names from Babel's CLDR data."""

    def resolve(self, country_code: str, locale: str) -> Optional[str]:
        if not country_code or not locale:
            return None
        names = _territory_names(locale)
        if names is None:
            return None
        return names.get(country_code.upper()) or None
