"""
Region Tables - country membership and naming per UN M49 region

Each table is built once from a mapping data file of the shape:

    {
        "mapping": {"KE": "014", ...},   # country code -> region code
        "names": {"014": "Eastern Africa", ...}
    }

and is read-only afterwards. Region codes are expected in canonical
(numeric) form; alias codes are resolved by the CodeNormalizer before a
table is consulted.
"""

from __future__ import annotations

import re
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Set

from ..exceptions import MappingLoadError

_COUNTRY_CODE_RE = re.compile(r"[A-Z]{2}")


class RegionTable:
    """
    Immutable country -> region index plus region -> name index.

    Country code arguments are case-insensitive; region codes are matched
    exactly.
    """

    kind = "region"

    def __init__(self, mapping: Mapping[str, str], names: Optional[Mapping[str, str]] = None):
        self._mapping: Dict[str, str] = {
            country.upper(): region for country, region in mapping.items()
        }
        self._names: Dict[str, str] = dict(names or {})

        members: Dict[str, Set[str]] = {}
        for country, region in self._mapping.items():
            members.setdefault(region, set()).add(country)
        self._members: Dict[str, FrozenSet[str]] = {
            region: frozenset(countries) for region, countries in members.items()
        }
        self._countries: FrozenSet[str] = frozenset(self._mapping)

    @classmethod
    def from_dict(cls, payload: Any, source: Optional[str] = None) -> "RegionTable":
        """
        Build a table from parsed mapping data.

        Args:
            payload: Parsed JSON document
            source: File the payload came from (used in error messages)

        Returns:
            The table

        Raises:
            MappingLoadError: If the payload does not have the expected shape
        """
        if not isinstance(payload, dict):
            raise MappingLoadError(f"{cls.kind} mapping must be a JSON object", path=source)

        mapping = payload.get("mapping")
        names = payload.get("names", {})
        if not isinstance(mapping, dict) or not mapping:
            raise MappingLoadError(
                f'{cls.kind} mapping requires a non-empty "mapping" object', path=source
            )
        if not isinstance(names, dict):
            raise MappingLoadError(f'{cls.kind} mapping "names" must be an object', path=source)

        for country, region in mapping.items():
            if not isinstance(country, str) or not _COUNTRY_CODE_RE.fullmatch(country.upper()):
                raise MappingLoadError(
                    f"Invalid country code in {cls.kind} mapping: {country!r}", path=source
                )
            if not isinstance(region, str) or not region:
                raise MappingLoadError(
                    f"Invalid {cls.kind} code for {country}: {region!r}", path=source
                )
        for region, name in names.items():
            if not isinstance(name, str):
                raise MappingLoadError(
                    f"Invalid {cls.kind} name for {region}: {name!r}", path=source
                )

        return cls(mapping, names)

    # ==========================================================================
    # Region lookups
    # ==========================================================================

    def has_code(self, code: str) -> bool:
        """Check if a canonical region code is known."""
        return code in self._members

    def members_of(self, code: str) -> FrozenSet[str]:
        """Country codes of a region; empty for unknown codes."""
        return self._members.get(code, frozenset())

    def name_of(self, code: str) -> Optional[str]:
        """
        Display name of a region.

        Returns:
            The configured name, the code itself if the region has no
            configured name, or None if the region is unknown
        """
        if code not in self._members:
            return None
        return self._names.get(code, code)

    def codes(self) -> List[str]:
        """All region codes that have at least one member, sorted."""
        return sorted(self._members)

    # ==========================================================================
    # Country lookups
    # ==========================================================================

    def region_of(self, country_code: str) -> Optional[str]:
        """Region code of a country, or None if the country is not mapped."""
        if not country_code:
            return None
        return self._mapping.get(country_code.strip().upper())

    def has_country(self, country_code: str) -> bool:
        """Check if a country is mapped to any region."""
        return self.region_of(country_code) is not None

    def all_countries(self) -> FrozenSet[str]:
        return self._countries

    def __len__(self) -> int:
        return len(self._mapping)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(regions={len(self._members)}, countries={len(self)})"


class ContinentTable(RegionTable):
    """Country -> UN M49 continent (002 Africa, 019 Americas, 142 Asia, 150 Europe, 009 Oceania)."""

    kind = "continent"


class SubregionTable(RegionTable):
    """Country -> UN M49 subregion (intermediate region where UN M49 defines one, e.g. 014 Eastern Africa)."""

    kind = "subregion"
