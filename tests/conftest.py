"""
Shared pytest fixtures for intl-region tests.

Import fixtures from here instead of defining them in individual test files.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from intl_region.config import DEFAULT_MAPPING_DIR, get_settings
from intl_region.mapping.loader import MappingRepository, get_mapping_repository
from intl_region.names import NameResolver
from intl_region.region_provider import RegionProvider

ENV_PREFIX = "INTL_REGION_"


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Run every test with default settings and fresh process-wide caches."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    get_mapping_repository.cache_clear()
    yield
    get_settings.cache_clear()
    get_mapping_repository.cache_clear()


# ============================================================================
# Name Resolution Fixtures
# ============================================================================

class FakeNameResolver(NameResolver):
    """Name resolver backed by a {locale: {country: name}} dict, recording calls."""

    def __init__(self, names: Dict[str, Dict[str, str]]):
        self.names = names
        self.calls: List[Tuple[str, str]] = []

    def resolve(self, country_code: str, locale: str) -> Optional[str]:
        self.calls.append((country_code, locale))
        return self.names.get(locale, {}).get(country_code)


@pytest.fixture
def fake_names() -> Callable[[Dict[str, Dict[str, str]]], FakeNameResolver]:
    return FakeNameResolver


# ============================================================================
# Mapping Data Fixtures
# ============================================================================

@pytest.fixture
def repository() -> MappingRepository:
    """Repository over the bundled mapping data."""
    return MappingRepository(DEFAULT_MAPPING_DIR)


@pytest.fixture
def provider(repository) -> RegionProvider:
    """Provider over the bundled data with Babel country names."""
    return RegionProvider(default_locale="en", repository=repository)


@pytest.fixture
def sample_continents() -> Dict[str, Any]:
    return {
        "mapping": {"KE": "002", "TZ": "002", "ZA": "002", "TF": "002", "FR": "150", "DE": "150"},
        "names": {"002": "Africa", "150": "Europe"},
    }


@pytest.fixture
def sample_subregions() -> Dict[str, Any]:
    return {
        "mapping": {"KE": "014", "TZ": "014", "TF": "014", "ZA": "018", "FR": "155", "DE": "155"},
        "names": {"014": "Eastern Africa", "018": "Southern Africa", "155": "Western Europe"},
    }


@pytest.fixture
def sample_aliases() -> Dict[str, Any]:
    return {
        "continent_mappings": {
            "iso_to_m49": {"AFR": "002", "EUR": "150"},
            "m49_to_iso": {"002": "AFR", "150": "EUR"},
        },
        "subregion_mappings": {
            "iso_to_m49": {"EAF": "014", "SAF": "018"},
            "m49_to_iso": {"014": "EAF", "018": "SAF"},
        },
    }


@pytest.fixture
def write_mapping_dir(tmp_path, sample_continents, sample_subregions, sample_aliases):
    """Write a mapping directory; pass a str to write raw text instead of JSON, None to omit a file."""

    def _write(continent: Any = ..., subregion: Any = ..., aliases: Any = ...) -> Path:
        files = {
            "continent.json": sample_continents if continent is ... else continent,
            "subregion.json": sample_subregions if subregion is ... else subregion,
            "aliases.json": sample_aliases if aliases is ... else aliases,
        }
        for filename, content in files.items():
            if content is None:
                continue
            text = content if isinstance(content, str) else json.dumps(content)
            (tmp_path / filename).write_text(text, encoding="utf-8")
        return tmp_path

    return _write
