"""
intl-region command-line tool

Usage:
    intl-region list continent 002                 List all African countries
    intl-region list subregion 014                 List Eastern African countries
    intl-region list continent AMR --locale fr     List American countries in French
    intl-region list continent 150 --format json   List European countries as JSON
    intl-region check [--un-data tests/_output/un-m49-data.json]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as SettingsValidationError

from .config import get_settings
from .exceptions import (
    ConfigurationError,
    IntlRegionError,
    InvalidRegionCodeError,
    MappingLoadError,
    get_error_response,
)
from .mapping.consistency import check_consistency, compare_with_un_data
from .mapping.loader import MappingRepository, get_mapping_repository, load_mapping_file
from .models import RegionType
from .region_provider import RegionProvider
from .services.export import FORMATS, export_service

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INVALID = 2

REGION_CODES_HELP = """\
Available continent codes:
  002 (AFR): Africa, 019 (AMR): Americas, 142 (ASI): Asia, 150 (EUR): Europe, 009 (OCE): Oceania

Available subregion codes:
  014: Eastern Africa, 017: Middle Africa, 015: Northern Africa, 018: Southern Africa, 011: Western Africa
  005: South America, 013: Central America, 021: Northern America, 029: Caribbean
  030: Eastern Asia, 034: Southern Asia, 035: South-eastern Asia, 143: Central Asia, 145: Western Asia
  151: Eastern Europe, 154: Northern Europe, 039: Southern Europe, 155: Western Europe
  053: Australia and New Zealand, 054: Melanesia, 057: Micronesia, 061: Polynesia
"""


def configure_logging(level: str) -> None:
    # stderr keeps stdout clean for json/csv output
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intl-region",
        description="List countries by UN M49 region (continent or subregion)",
    )
    parser.add_argument(
        "--mapping-dir",
        type=Path,
        help="Directory with continent.json, subregion.json and aliases.json (default: bundled data)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list",
        help="List countries by region",
        epilog=REGION_CODES_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    list_parser.add_argument(
        "type",
        choices=[region_type.value for region_type in RegionType],
        help='Type of region: "continent" or "subregion"',
    )
    list_parser.add_argument(
        "code",
        help='UN M49 region code or ISO alias (e.g. "002" or "AFR" for Africa, "014" for Eastern Africa)',
    )
    list_parser.add_argument("--locale", "-l", help="Locale for country names (default: configured locale)")
    list_parser.add_argument(
        "--format", "-f",
        choices=FORMATS,
        default="table",
        help="Output format",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Check that the continent and subregion mappings agree",
    )
    check_parser.add_argument(
        "--un-data",
        type=Path,
        help="Downloaded UN M49 data (see scripts/download_un_m49_data.py) to compare against",
    )
    return parser


def _report_error(error: IntlRegionError, file_format: str) -> None:
    if file_format == "json":
        print(json.dumps(get_error_response(error), indent=4, ensure_ascii=False))
    else:
        print(f"[ERROR] {error.message}", file=sys.stderr)


def run_list(args: argparse.Namespace, provider: RegionProvider) -> int:
    info = provider.region_info(args.type, args.code, args.locale)
    if info is None:
        _report_error(InvalidRegionCodeError(args.type, args.code), args.format)
        return EXIT_INVALID

    print(export_service.render(info, args.format))
    return EXIT_SUCCESS


def run_check(args: argparse.Namespace, repository: MappingRepository) -> int:
    if args.un_data:
        records = load_mapping_file(args.un_data)
        if not isinstance(records, list):
            raise MappingLoadError("UN M49 data must be a JSON list of records", path=str(args.un_data))
        report = compare_with_un_data(records, repository.continents, repository.subregions)
    else:
        report = check_consistency(repository.continents, repository.subregions)

    if report.is_consistent:
        print("[OK] Continent and subregion mappings are consistent")
        return EXIT_SUCCESS

    for line in report.summary_lines():
        print(f"[FAIL] {line}")
    return EXIT_FAILURE


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except SettingsValidationError as e:
        problems = [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()]
        error = ConfigurationError(f"Invalid configuration: {'; '.join(problems)}", details={"errors": problems})
        _report_error(error, getattr(args, "format", "table"))
        return EXIT_FAILURE
    configure_logging(settings.log_level)

    mapping_dir = args.mapping_dir or settings.mapping_dir
    repository = get_mapping_repository(str(mapping_dir))

    try:
        if args.command == "check":
            return run_check(args, repository)
        return run_list(args, RegionProvider(repository=repository))
    except IntlRegionError as e:
        logger.debug("Command failed", exc_info=True)
        _report_error(e, getattr(args, "format", "table"))
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
