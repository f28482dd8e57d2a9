"""
intl-region: countries by UN M49 continent and subregion.

    >>> from intl_region import RegionProvider
    >>> provider = RegionProvider()
    >>> provider.subregion_of("KE")
    '014'
    >>> provider.continent_of("ke", as_alias=True)
    'AFR'
"""
from .exceptions import (
    ConfigurationError,
    IntlRegionError,
    InvalidRegionCodeError,
    InvalidRegionTypeError,
    MappingLoadError,
    ValidationError,
)
from .models import RegionInfo, RegionType
from .names import BabelNameResolver, NameResolver
from .region_provider import RegionProvider

__version__ = "1.0.0"

__all__ = [
    "BabelNameResolver",
    "ConfigurationError",
    "IntlRegionError",
    "InvalidRegionCodeError",
    "InvalidRegionTypeError",
    "MappingLoadError",
    "NameResolver",
    "RegionInfo",
    "RegionProvider",
    "RegionType",
    "ValidationError",
]
