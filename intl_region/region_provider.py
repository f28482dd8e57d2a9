"""
Region Provider - countries by UN M49 continent and subregion

This module provides:
1. Country listings per continent/subregion with localized, sorted names
2. Country -> continent/subregion lookups
3. Enumeration of the available region and country codes

Region codes may be given in UN M49 numeric form ("002") or as an ISO-style
alias ("AFR"); aliases are normalized before the code is validated against
the region tables.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Union

from .config import FALLBACK_LOCALE, get_settings
from .exceptions import InvalidRegionCodeError, InvalidRegionTypeError
from .mapping.loader import MappingRepository, get_mapping_repository
from .models import RegionInfo, RegionType
from .names import BabelNameResolver, NameResolver


class RegionProvider:
    """
    Region-based country filtering on top of the UN M49 mapping tables.

    countries_by_continent / countries_by_subregion raise
    InvalidRegionCodeError for unknown codes, while region_info returns
    None for them, so listing code can probe codes without exception
    handling.
    """

    def __init__(
        self,
        default_locale: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        repository: Optional[MappingRepository] = None,
        name_resolver: Optional[NameResolver] = None,
        excluded_countries: Optional[Iterable[str]] = None,
    ):
        """
        Args:
            default_locale: Locale used when a call passes none (default: configured locale)
            logger: Receives name-resolution warnings/errors (default: module logger)
            repository: Mapping data (default: process-wide repository for the configured directory)
            name_resolver: Country name lookup (default: Babel CLDR names)
            excluded_countries: Country codes left out of listings (default: configured list)
        """
        settings = get_settings()
        self.default_locale = default_locale or settings.default_locale
        self.logger = logger or logging.getLogger(__name__)
        self.repository = repository or get_mapping_repository(str(settings.mapping_dir))
        self.name_resolver = name_resolver or BabelNameResolver()
        if excluded_countries is None:
            excluded_countries = settings.excluded_countries
        self.excluded_countries: FrozenSet[str] = frozenset(
            code.strip().upper() for code in excluded_countries
        )

    # ==========================================================================
    # Country listings
    # ==========================================================================

    def countries_by_continent(self, continent_code: str, locale: Optional[str] = None) -> Dict[str, str]:
        """
        Get all countries of a continent.

        Args:
            continent_code: UN M49 continent code or ISO continent alias
            locale: Locale for country names (default: the provider's default locale)

        Returns:
            Country codes mapped to localized names, sorted by name

        Raises:
            InvalidRegionCodeError: If the continent code is unknown
        """
        continents = self.repository.continents
        m49_code = self.repository.normalizer.normalize_continent(continent_code)
        if not continents.has_code(m49_code):
            raise InvalidRegionCodeError(RegionType.CONTINENT.value, continent_code)

        return self._localized_country_names(
            continents.members_of(m49_code), locale or self.default_locale
        )

    def countries_by_subregion(self, subregion_code: str, locale: Optional[str] = None) -> Dict[str, str]:
        """
        Get all countries of a subregion.

        Args:
            subregion_code: UN M49 subregion code or ISO subregion alias
            locale: Locale for country names (default: the provider's default locale)

        Returns:
            Country codes mapped to localized names, sorted by name

        Raises:
            InvalidRegionCodeError: If the subregion code is unknown
        """
        subregions = self.repository.subregions
        m49_code = self.repository.normalizer.normalize_subregion(subregion_code)
        if not subregions.has_code(m49_code):
            raise InvalidRegionCodeError(RegionType.SUBREGION.value, subregion_code)

        return self._localized_country_names(
            subregions.members_of(m49_code), locale or self.default_locale
        )

    def region_info(
        self,
        region_type: Union[RegionType, str],
        code: str,
        locale: Optional[str] = None,
    ) -> Optional[RegionInfo]:
        """
        Get a region's name and localized countries.

        Args:
            region_type: RegionType or "continent"/"subregion"
            code: UN M49 code or ISO alias of the region
            locale: Locale for country names

        Returns:
            RegionInfo, or None if the code is not a known region

        Raises:
            InvalidRegionTypeError: If region_type is not a region type
        """
        try:
            region_type = RegionType(region_type)
        except ValueError:
            raise InvalidRegionTypeError(str(region_type)) from None

        normalizer = self.repository.normalizer
        if region_type is RegionType.CONTINENT:
            table = self.repository.continents
            m49_code = normalizer.normalize_continent(code)
        else:
            table = self.repository.subregions
            m49_code = normalizer.normalize_subregion(code)

        if not table.has_code(m49_code):
            return None

        return RegionInfo(
            code=code,
            name=table.name_of(m49_code) or code,
            countries=self._localized_country_names(
                table.members_of(m49_code), locale or self.default_locale
            ),
        )

    def continent_info(self, continent_code: str, locale: Optional[str] = None) -> Optional[RegionInfo]:
        return self.region_info(RegionType.CONTINENT, continent_code, locale)

    def subregion_info(self, subregion_code: str, locale: Optional[str] = None) -> Optional[RegionInfo]:
        return self.region_info(RegionType.SUBREGION, subregion_code, locale)

    # ==========================================================================
    # Country -> region
    # ==========================================================================

    def continent_of(self, country_code: str, as_alias: bool = False) -> Optional[str]:
        """
        Get the continent of a country.

        Args:
            country_code: ISO 3166-1 alpha-2 country code (any case)
            as_alias: Return the ISO continent alias instead of the UN M49 code

        Returns:
            Continent code, or None if the country is not mapped
        """
        m49_code = self.repository.continents.region_of(country_code)
        if m49_code is None or not as_alias:
            return m49_code
        return self.repository.normalizer.continent_alias(m49_code) or m49_code

    def subregion_of(self, country_code: str) -> Optional[str]:
        """UN M49 subregion code of a country, or None if the country is not mapped."""
        return self.repository.subregions.region_of(country_code)

    # ==========================================================================
    # Enumeration
    # ==========================================================================

    def available_continent_codes(self, as_alias: bool = False) -> List[str]:
        codes = self.repository.continents.codes()
        if not as_alias:
            return codes
        normalizer = self.repository.normalizer
        return [normalizer.continent_alias(code) or code for code in codes]

    def available_subregion_codes(self, as_alias: bool = False) -> List[str]:
        codes = self.repository.subregions.codes()
        if not as_alias:
            return codes
        normalizer = self.repository.normalizer
        return [normalizer.subregion_alias(code) or code for code in codes]

    def available_country_codes(self) -> List[str]:
        """Countries known to either table, minus excluded countries, sorted."""
        countries = self.repository.continents.all_countries() | self.repository.subregions.all_countries()
        return sorted(countries - self.excluded_countries)

    def has_country_code(self, country_code: str) -> bool:
        if not country_code or country_code.strip().upper() in self.excluded_countries:
            return False
        return (
            self.repository.continents.has_country(country_code)
            or self.repository.subregions.has_country(country_code)
        )

    def has_continent_code(self, continent_code: str) -> bool:
        m49_code = self.repository.normalizer.normalize_continent(continent_code)
        return self.repository.continents.has_code(m49_code)

    def has_subregion_code(self, subregion_code: str) -> bool:
        m49_code = self.repository.normalizer.normalize_subregion(subregion_code)
        return self.repository.subregions.has_code(m49_code)

    # ==========================================================================
    # Alias lookups
    # ==========================================================================

    def iso_continent_code(self, m49_code: str) -> Optional[str]:
        return self.repository.normalizer.continent_alias(m49_code)

    def m49_continent_code(self, iso_code: str) -> Optional[str]:
        return self.repository.normalizer.m49_continent_code(iso_code)

    def iso_subregion_code(self, m49_code: str) -> Optional[str]:
        return self.repository.normalizer.subregion_alias(m49_code)

    def m49_subregion_code(self, iso_code: str) -> Optional[str]:
        return self.repository.normalizer.m49_subregion_code(iso_code)

    # ==========================================================================
    # Name resolution
    # ==========================================================================

    def _resolve_name(self, country_code: str, locale: str) -> str:
        """
        Resolve a display name: requested locale, then English, then the code itself.
        """
        name = self.name_resolver.resolve(country_code, locale)
        if name is not None:
            return name

        if locale != FALLBACK_LOCALE:
            name = self.name_resolver.resolve(country_code, FALLBACK_LOCALE)
            if name is not None:
                self.logger.warning(
                    f"Translation not available for country {country_code} in locale {locale}, "
                    f"using English fallback"
                )
                return name

        self.logger.error(f"No translation available for country {country_code} in any locale")
        return country_code

    def _localized_country_names(self, country_codes: Iterable[str], locale: str) -> Dict[str, str]:
        names: Dict[str, str] = {}
        for country_code in sorted(country_codes):
            if country_code in self.excluded_countries:
                self.logger.debug(f"Skipping geographically excluded country code: {country_code}")
                continue
            names[country_code] = self._resolve_name(country_code, locale)

        # Presentation order: by display name, code breaks ties
        return dict(sorted(names.items(), key=lambda item: (item[1], item[0])))
