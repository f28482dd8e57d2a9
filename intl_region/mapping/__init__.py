"""
UN M49 mapping data

Components:
- ContinentTable / SubregionTable: country membership and region names
- AliasMap / CodeNormalizer: ISO-style alias <-> UN M49 code translation
- MappingRepository: lazy, once-only loading of the bundled JSON data
"""

from .aliases import AliasMap, CodeNormalizer
from .loader import MappingRepository, get_mapping_repository, load_mapping_file
from .region_table import ContinentTable, RegionTable, SubregionTable

__all__ = [
    "AliasMap",
    "CodeNormalizer",
    "ContinentTable",
    "MappingRepository",
    "RegionTable",
    "SubregionTable",
    "get_mapping_repository",
    "load_mapping_file",
]
