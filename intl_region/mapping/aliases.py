"""
Alias codes for UN M49 regions.

ISO-style three-letter aliases ("AFR", "EAF", ...) map 1:1 onto canonical
UN M49 numeric codes ("002", "014", ...). Continent and subregion aliases
live in separate maps; the two code spaces are never mixed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..exceptions import MappingLoadError


def _clean(code: str) -> str:
    return code.strip().upper() if code else ""


@dataclass(frozen=True)
class AliasMap:
    """Bidirectional alias <-> canonical code map for one code space."""

    to_canonical: Mapping[str, str]
    to_alias: Mapping[str, str]

    @classmethod
    def from_dict(cls, payload: Any, label: str, source: Optional[str] = None) -> "AliasMap":
        """
        Build an alias map from an {"iso_to_m49": ..., "m49_to_iso": ...} section.

        Both directions must agree: every pair listed in one direction must
        appear identically in the other, so no alias can point at two
        canonical codes.

        Raises:
            MappingLoadError: If the section is missing, malformed or inconsistent
        """
        if not isinstance(payload, dict):
            raise MappingLoadError(f"Missing alias section: {label}", path=source)

        iso_to_m49 = payload.get("iso_to_m49")
        m49_to_iso = payload.get("m49_to_iso")
        if not isinstance(iso_to_m49, dict) or not isinstance(m49_to_iso, dict):
            raise MappingLoadError(
                f'Alias section {label} requires "iso_to_m49" and "m49_to_iso" objects',
                path=source,
            )

        to_canonical: Dict[str, str] = {}
        for alias, canonical in iso_to_m49.items():
            if not isinstance(canonical, str) or not canonical:
                raise MappingLoadError(f"Invalid code for alias {alias} in {label}", path=source)
            to_canonical[_clean(alias)] = canonical

        to_alias: Dict[str, str] = {}
        for canonical, alias in m49_to_iso.items():
            if not isinstance(alias, str) or not alias:
                raise MappingLoadError(f"Invalid alias for code {canonical} in {label}", path=source)
            alias = _clean(alias)
            if to_canonical.get(alias) != canonical:
                raise MappingLoadError(
                    f"Alias {alias} maps to {to_canonical.get(alias)!r} but is listed for {canonical} in {label}",
                    path=source,
                )
            to_alias[canonical] = alias

        for alias, canonical in to_canonical.items():
            if to_alias.get(canonical) != alias:
                raise MappingLoadError(
                    f"Alias {alias} -> {canonical} has no matching inverse entry in {label}",
                    path=source,
                )

        return cls(to_canonical=to_canonical, to_alias=to_alias)

    def canonical(self, alias: str) -> Optional[str]:
        """Canonical code for an alias, or None for unknown aliases."""
        return self.to_canonical.get(_clean(alias))

    def alias(self, canonical: str) -> Optional[str]:
        """Alias for a canonical code, or None when no alias is configured."""
        return self.to_alias.get(canonical)


class CodeNormalizer:
    """
    Translates caller-supplied region codes into canonical UN M49 form.

    Normalization is permissive: a code that is not a known alias is
    returned unchanged and validated later against the region tables.
    """

    def __init__(self, continents: AliasMap, subregions: AliasMap):
        self.continents = continents
        self.subregions = subregions

    @classmethod
    def from_dict(cls, payload: Any, source: Optional[str] = None) -> "CodeNormalizer":
        if not isinstance(payload, dict):
            raise MappingLoadError("Alias mapping must be a JSON object", path=source)
        return cls(
            AliasMap.from_dict(payload.get("continent_mappings"), "continent_mappings", source),
            AliasMap.from_dict(payload.get("subregion_mappings"), "subregion_mappings", source),
        )

    def normalize_continent(self, code: str) -> str:
        return self.continents.canonical(code) or code

    def normalize_subregion(self, code: str) -> str:
        return self.subregions.canonical(code) or code

    def continent_alias(self, code: str) -> Optional[str]:
        return self.continents.alias(code)

    def subregion_alias(self, code: str) -> Optional[str]:
        return self.subregions.alias(code)

    def m49_continent_code(self, alias: str) -> Optional[str]:
        return self.continents.canonical(alias)

    def m49_subregion_code(self, alias: str) -> Optional[str]:
        return self.subregions.canonical(alias)
