"""
Offline consistency checks for the region tables.

The continent and subregion tables are maintained independently and are
not cross-validated at lookup time. These checks report where they
disagree with each other, and optionally with a downloaded copy of the UN
M49 registry (see un_m49.py).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Set

from .region_table import ContinentTable, SubregionTable
from .un_m49 import country_records


@dataclass
class ConsistencyReport:
    only_in_continents: List[str] = field(default_factory=list)
    only_in_subregions: List[str] = field(default_factory=list)
    # subregion code -> continent codes its members belong to
    split_subregions: Dict[str, List[str]] = field(default_factory=dict)
    missing_from_tables: List[str] = field(default_factory=list)
    # country code -> description of the disagreement with the registry
    registry_mismatches: Dict[str, str] = field(default_factory=dict)

    @property
    def is_consistent(self) -> bool:
        return not (
            self.only_in_continents
            or self.only_in_subregions
            or self.split_subregions
            or self.missing_from_tables
            or self.registry_mismatches
        )

    def summary_lines(self) -> List[str]:
        lines: List[str] = []
        if self.only_in_continents:
            lines.append(f"Countries without a subregion: {', '.join(self.only_in_continents)}")
        if self.only_in_subregions:
            lines.append(f"Countries without a continent: {', '.join(self.only_in_subregions)}")
        for subregion, continents in self.split_subregions.items():
            lines.append(f"Subregion {subregion} spans continents: {', '.join(continents)}")
        if self.missing_from_tables:
            lines.append(f"Registry countries missing locally: {', '.join(self.missing_from_tables)}")
        for country, problem in self.registry_mismatches.items():
            lines.append(f"{country}: {problem}")
        return lines


def check_consistency(continents: ContinentTable, subregions: SubregionTable) -> ConsistencyReport:
    """
    Compare the two tables with each other.

    Every country should be in both tables, and all members of a subregion
    should belong to the same continent.
    """
    continent_countries = continents.all_countries()
    subregion_countries = subregions.all_countries()

    report = ConsistencyReport(
        only_in_continents=sorted(continent_countries - subregion_countries),
        only_in_subregions=sorted(subregion_countries - continent_countries),
    )

    for subregion in subregions.codes():
        parents: Set[str] = set()
        for country in subregions.members_of(subregion):
            continent = continents.region_of(country)
            if continent is not None:
                parents.add(continent)
        if len(parents) > 1:
            report.split_subregions[subregion] = sorted(parents)

    return report


def compare_with_un_data(
    records: Iterable[Mapping[str, Any]],
    continents: ContinentTable,
    subregions: SubregionTable,
) -> ConsistencyReport:
    """
    Check the tables against each other and against UN M49 registry records.

    A country's local subregion may be either the registry's sub-region or
    its intermediate region.
    """
    report = check_consistency(continents, subregions)

    for record in country_records(records):
        country = record["iso_alpha2"]
        if not continents.has_country(country):
            report.missing_from_tables.append(country)
            continue

        problems = []
        local_continent = continents.region_of(country)
        if local_continent != record["region_code"]:
            problems.append(f"continent {local_continent} (registry: {record['region_code']})")

        local_subregion = subregions.region_of(country)
        registry_subregions = {record["subregion_code"], record.get("intermediate_region_code", "")}
        if local_subregion not in registry_subregions:
            expected = "/".join(sorted(code for code in registry_subregions if code))
            problems.append(f"subregion {local_subregion} (registry: {expected})")

        if problems:
            report.registry_mismatches[country] = "; ".join(problems)

    report.missing_from_tables.sort()
    return report
