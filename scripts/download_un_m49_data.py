#!/usr/bin/env python3
"""
UN M49 Data Download Script

Downloads the UN M49 overview page, extracts the English country table and
saves it to tests/_output/ for the registry validation tests and
update_mappings.py.

Usage:
    python scripts/download_un_m49_data.py [--output-dir tests/_output] [--timeout 60]
"""

import sys
import json
import argparse
import logging
from pathlib import Path

import httpx

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from intl_region.mapping.un_m49 import UN_M49_URL, parse_overview_table, summarize

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path(__file__).parent.parent / "tests" / "_output"
DATA_FILE = "un-m49-data.json"
HTML_FILE = "un-m49-overview.html"


def download_overview(url: str, timeout: float) -> str:
    logger.info(f"📥 Downloading UN M49 data from {url}")
    response = httpx.get(url, timeout=timeout, follow_redirects=True)
    response.raise_for_status()
    return response.text


def main() -> int:
    parser = argparse.ArgumentParser(description="Download the UN M49 country table")
    parser.add_argument("--url", default=UN_M49_URL, help="Overview page URL")
    parser.add_argument("--output-dir", type=Path, default=DEFAULT_OUTPUT_DIR, help="Where to write the files")
    parser.add_argument("--timeout", type=float, default=60.0, help="HTTP timeout in seconds")
    args = parser.parse_args()

    output_dir: Path = args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        html = download_overview(args.url, args.timeout)
    except httpx.HTTPError as e:
        logger.error(f"❌ Failed to fetch UN M49 data: {e}")
        return 1

    # Raw HTML is kept for debugging the table extraction
    html_path = output_dir / HTML_FILE
    html_path.write_text(html, encoding="utf-8")
    logger.info(f"Saved HTML to {html_path}")

    try:
        records = parse_overview_table(html)
    except ValueError as e:
        logger.error(f"❌ {e}")
        return 1

    data_path = output_dir / DATA_FILE
    with open(data_path, "w", encoding="utf-8") as f:
        json.dump(records, f, indent=4, ensure_ascii=False)
    logger.info(f"Saved {len(records)} records to {data_path}")

    summary = summarize(records)
    logger.info("=" * 40)
    logger.info("DATA SUMMARY")
    logger.info("=" * 40)
    logger.info(f"Total records: {len(records)}")
    logger.info(f"Countries: {summary['countries']}")
    logger.info(f"Regions: {summary['regions']}")
    logger.info(f"Subregions: {summary['subregions']}")
    logger.info("✅ Download completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
