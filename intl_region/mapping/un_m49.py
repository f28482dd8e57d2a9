"""
UN M49 registry helpers.

Parses the English overview table published at
https://unstats.un.org/unsd/methodology/m49/overview/ and merges countries
it lists into the local mapping data. Used by the offline scripts and the
consistency checker only; region lookups never touch the registry.
"""

from __future__ import annotations

import copy
import io
import logging
import re
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Tuple

import pandas as pd

from .region_table import ContinentTable

logger = logging.getLogger(__name__)

UN_M49_URL = "https://unstats.un.org/unsd/methodology/m49/overview/"
OVERVIEW_TABLE_ID = "downloadTableEN"

# Leading columns of the overview table, in order
FIELDS = [
    "global_code",
    "global_name",
    "region_code",
    "region_name",
    "subregion_code",
    "subregion_name",
    "intermediate_region_code",
    "intermediate_region_name",
    "country_or_area",
    "m49_code",
    "iso_alpha2",
    "iso_alpha3",
]
CODE_FIELDS = {"global_code", "region_code", "subregion_code", "intermediate_region_code", "m49_code"}

_ISO_ALPHA2_RE = re.compile(r"[A-Z]{2}")


def _clean_value(field: str, value: Any) -> str:
    if pd.isna(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    if field in CODE_FIELDS and text.isdigit():
        return text.zfill(3)
    return text


def parse_overview_table(html: str) -> List[Dict[str, str]]:
    """
    Extract the rows of the English overview table.

    Every value is returned as text: numeric codes keep their leading
    zeros and "NA" (Namibia) is not turned into a missing value.

    Raises:
        ValueError: If the page has no English overview table
    """
    try:
        tables = pd.read_html(
            io.StringIO(html),
            attrs={"id": OVERVIEW_TABLE_ID},
            flavor="lxml",
            keep_default_na=False,
        )
    except ValueError as e:
        raise ValueError("Could not find English data table") from e

    frame = tables[0]
    if frame.shape[1] < len(FIELDS):
        raise ValueError(
            f"English data table has {frame.shape[1]} columns, expected at least {len(FIELDS)}"
        )
    frame = frame.iloc[:, : len(FIELDS)]
    frame.columns = FIELDS

    return [
        {field: _clean_value(field, value) for field, value in row.items()}
        for row in frame.to_dict(orient="records")
    ]


def country_records(records: Iterable[Mapping[str, Any]]) -> Iterator[Mapping[str, Any]]:
    """Registry rows that describe a country with an ISO alpha-2 code and a region."""
    for record in records:
        iso2 = str(record.get("iso_alpha2") or "")
        if _ISO_ALPHA2_RE.fullmatch(iso2) and record.get("region_code"):
            yield record


def summarize(records: Iterable[Mapping[str, Any]]) -> Dict[str, int]:
    countries, regions, subregions = set(), set(), set()
    for record in country_records(records):
        countries.add(record["iso_alpha2"])
        regions.add(record["region_code"])
        subregions.add(record["subregion_code"])
    return {"countries": len(countries), "regions": len(regions), "subregions": len(subregions)}


def find_missing_countries(
    records: Iterable[Mapping[str, Any]], continents: ContinentTable
) -> List[Dict[str, str]]:
    """Registry countries that the continent table does not know yet."""
    missing: Dict[str, Dict[str, str]] = {}
    for record in country_records(records):
        iso2 = record["iso_alpha2"]
        if continents.has_country(iso2) or iso2 in missing:
            continue
        missing[iso2] = {
            "iso2": iso2,
            "name": record.get("country_or_area", ""),
            "continent_code": record["region_code"],
            "subregion_code": record.get("subregion_code", ""),
            "intermediate_region_code": record.get("intermediate_region_code", ""),
        }
    return [missing[code] for code in sorted(missing)]


def merge_missing_countries(
    continent_payload: Mapping[str, Any],
    subregion_payload: Mapping[str, Any],
    missing: Iterable[Mapping[str, str]],
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Add missing countries to copies of the continent and subregion data.

    The subregion assigned is the registry's intermediate region when that
    region is one the subregion data already names (e.g. 014 Eastern
    Africa), and the registry's sub-region otherwise.

    Returns:
        (continent_payload, subregion_payload), both new objects with
        mappings sorted by country code
    """
    continents = copy.deepcopy(dict(continent_payload))
    subregions = copy.deepcopy(dict(subregion_payload))
    continent_mapping = continents.setdefault("mapping", {})
    subregion_mapping = subregions.setdefault("mapping", {})
    known_subregions = set(subregions.get("names", {}))

    for country in missing:
        iso2 = country["iso2"]
        continent_mapping[iso2] = country["continent_code"]

        intermediate = country.get("intermediate_region_code", "")
        subregion = intermediate if intermediate in known_subregions else country["subregion_code"]
        if not subregion:
            logger.warning(f"No subregion for {iso2} ({country.get('name', '')}), skipping subregion mapping")
            continue
        subregion_mapping[iso2] = subregion

    continents["mapping"] = dict(sorted(continent_mapping.items()))
    subregions["mapping"] = dict(sorted(subregion_mapping.items()))
    return continents, subregions
