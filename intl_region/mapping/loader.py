"""
Mapping Loader

Loads the continent, subregion and alias data files on first use and keeps
the resulting tables for the lifetime of the repository. A missing or
malformed file raises MappingLoadError; nothing is cached in that case, so
the next access fails the same way.
"""

from __future__ import annotations

import json
import logging
import threading
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union

from ..config import get_settings
from ..exceptions import MappingLoadError
from .aliases import CodeNormalizer
from .region_table import ContinentTable, SubregionTable

logger = logging.getLogger(__name__)

CONTINENT_FILE = "continent.json"
SUBREGION_FILE = "subregion.json"
ALIAS_FILE = "aliases.json"


def load_mapping_file(path: Path) -> Any:
    """
    Read and parse one JSON mapping file.

    Raises:
        MappingLoadError: If the file is missing, unreadable or not valid JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise MappingLoadError(f"Mapping file not found: {path}", path=str(path)) from e
    except UnicodeDecodeError as e:
        raise MappingLoadError(f"Mapping file {path} is not valid UTF-8: {e}", path=str(path)) from e
    except json.JSONDecodeError as e:
        raise MappingLoadError(f"Invalid JSON in mapping file {path}: {e}", path=str(path)) from e
    except OSError as e:
        raise MappingLoadError(f"Cannot read mapping file {path}: {e}", path=str(path)) from e


class MappingRepository:
    """
    Lazily loaded, read-only region data.

    Each table is loaded at most once; concurrent first accesses are
    serialized by a lock and later accesses read the cached table without
    locking.
    """

    def __init__(self, mapping_dir: Union[str, Path]):
        self.mapping_dir = Path(mapping_dir)
        self._lock = threading.Lock()
        self._continents: Optional[ContinentTable] = None
        self._subregions: Optional[SubregionTable] = None
        self._normalizer: Optional[CodeNormalizer] = None

    def _path(self, filename: str) -> Path:
        return self.mapping_dir / filename

    @property
    def continents(self) -> ContinentTable:
        if self._continents is None:
            with self._lock:
                if self._continents is None:
                    path = self._path(CONTINENT_FILE)
                    self._continents = ContinentTable.from_dict(load_mapping_file(path), str(path))
                    logger.debug(f"Loaded {self._continents!r} from {path}")
        return self._continents

    @property
    def subregions(self) -> SubregionTable:
        if self._subregions is None:
            with self._lock:
                if self._subregions is None:
                    path = self._path(SUBREGION_FILE)
                    self._subregions = SubregionTable.from_dict(load_mapping_file(path), str(path))
                    logger.debug(f"Loaded {self._subregions!r} from {path}")
        return self._subregions

    @property
    def normalizer(self) -> CodeNormalizer:
        if self._normalizer is None:
            with self._lock:
                if self._normalizer is None:
                    path = self._path(ALIAS_FILE)
                    self._normalizer = CodeNormalizer.from_dict(load_mapping_file(path), str(path))
                    logger.debug(f"Loaded region aliases from {path}")
        return self._normalizer


@lru_cache
def get_mapping_repository(mapping_dir: Optional[str] = None) -> MappingRepository:
    """Process-wide repository for a mapping directory (configured directory by default)."""
    return MappingRepository(mapping_dir or get_settings().mapping_dir)
