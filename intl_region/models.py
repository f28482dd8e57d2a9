from __future__ import annotations

from enum import Enum
from typing import Dict

from pydantic import BaseModel, Field


class RegionType(str, Enum):
    CONTINENT = "continent"
    SUBREGION = "subregion"


class RegionInfo(BaseModel):
    """A region with its localized member countries, sorted by name."""

    code: str
    name: str
    countries: Dict[str, str] = Field(default_factory=dict)
