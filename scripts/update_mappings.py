#!/usr/bin/env python3
"""
Update Mappings Script

Adds countries listed in the downloaded UN M49 data but missing from the
local continent/subregion mapping files.

Usage:
    python scripts/download_un_m49_data.py
    python scripts/update_mappings.py [--un-data tests/_output/un-m49-data.json] [--dry-run]
"""

import sys
import json
import argparse
import logging
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from intl_region.config import DEFAULT_MAPPING_DIR
from intl_region.exceptions import MappingLoadError
from intl_region.mapping.loader import CONTINENT_FILE, SUBREGION_FILE, load_mapping_file
from intl_region.mapping.region_table import ContinentTable
from intl_region.mapping.un_m49 import find_missing_countries, merge_missing_countries

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEFAULT_UN_DATA = Path(__file__).parent.parent / "tests" / "_output" / "un-m49-data.json"


def write_mapping(path: Path, payload: dict) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=4, ensure_ascii=False)
        f.write("\n")


def main() -> int:
    parser = argparse.ArgumentParser(description="Add missing UN M49 countries to the mapping files")
    parser.add_argument("--un-data", type=Path, default=DEFAULT_UN_DATA, help="Downloaded UN M49 data")
    parser.add_argument("--mapping-dir", type=Path, default=DEFAULT_MAPPING_DIR, help="Mapping files to update")
    parser.add_argument("--dry-run", action="store_true", help="Only list the missing countries")
    args = parser.parse_args()

    if not args.un_data.exists():
        logger.error("UN data file not found. Please run: python scripts/download_un_m49_data.py")
        return 1

    continent_path = args.mapping_dir / CONTINENT_FILE
    subregion_path = args.mapping_dir / SUBREGION_FILE
    try:
        records = load_mapping_file(args.un_data)
        continent_payload = load_mapping_file(continent_path)
        subregion_payload = load_mapping_file(subregion_path)
        continents = ContinentTable.from_dict(continent_payload, str(continent_path))
    except MappingLoadError as e:
        logger.error(f"❌ {e.message}")
        return 1

    missing = find_missing_countries(records, continents)
    if not missing:
        logger.info("✅ All countries are already present in mappings")
        return 0

    logger.info(f"Found {len(missing)} missing countries:")
    for country in missing:
        logger.info(
            f"  - {country['iso2']} ({country['name']}) - Continent: {country['continent_code']}, "
            f"Subregion: {country['intermediate_region_code'] or country['subregion_code']}"
        )

    if args.dry_run:
        return 0

    continent_payload, subregion_payload = merge_missing_countries(
        continent_payload, subregion_payload, missing
    )
    write_mapping(continent_path, continent_payload)
    logger.info(f"Updated {continent_path}")
    write_mapping(subregion_path, subregion_payload)
    logger.info(f"Updated {subregion_path}")

    logger.info(f"✅ Added {len(missing)} countries to both mapping files")
    return 0


if __name__ == "__main__":
    sys.exit(main())
