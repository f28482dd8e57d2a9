from __future__ import annotations

import csv
import io
import json

import pandas as pd

from ..models import RegionInfo

FORMATS = ("table", "json", "csv")


class ExportService:
    def generate_table(self, info: RegionInfo) -> str:
        name = info.name[:1].upper() + info.name[1:]
        title = f"{name}: {info.code} ({len(info.countries)})"

        buffer = io.StringIO()
        buffer.write(f"{title}\n{'=' * len(title)}\n\n")

        if not info.countries:
            buffer.write("[WARNING] No countries found for this region.\n")
            return buffer.getvalue()

        df = pd.DataFrame(list(info.countries.items()), columns=["Code", "Country"])
        buffer.write(df.to_string(index=False, justify="left"))
        buffer.write("\n")
        return buffer.getvalue()

    def generate_json(self, info: RegionInfo) -> str:
        # Key order of countries is the display order
        return json.dumps(info.model_dump(), indent=4, ensure_ascii=False)

    def generate_csv(self, info: RegionInfo) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(["Code", "Country"])
        for country_code, country_name in info.countries.items():
            writer.writerow([country_code, country_name])
        return buffer.getvalue()

    def render(self, info: RegionInfo, file_format: str = "table") -> str:
        """Render a region listing; unknown formats fall back to the table layout."""
        file_format = (file_format or "table").lower()
        if file_format == "json":
            return self.generate_json(info)
        if file_format == "csv":
            return self.generate_csv(info)
        return self.generate_table(info)


export_service = ExportService()
