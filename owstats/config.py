# owstats/config.py

import logging
import os
from dataclasses import dataclass
from typing import Iterable, Tuple

from owstats.models import Platform, Region

LOGGER = logging.getLogger(__name__)

BASE_URL = os.getenv("OWSTATS_BASE_URL", "https://playoverwatch.com/en-gb/career").rstrip("/")
DEFAULT_TIMEOUT_SECONDS = 20.0
TIMEOUT_ENV = "OWSTATS_TIMEOUT"

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-GB,en;q=0.9",
}

ALL_PLATFORMS = (Platform.PC, Platform.XBOX, Platform.PLAYSTATION)
ALL_REGIONS = (Region.US, Region.EU, Region.KR)


def timeout_seconds() -> float:
    """Request timeout from OWSTATS_TIMEOUT, read when a transport is built."""
    raw = os.getenv(TIMEOUT_ENV)
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        LOGGER.warning("Invalid %s=%r; using %ss.", TIMEOUT_ENV, raw, DEFAULT_TIMEOUT_SECONDS)
        return DEFAULT_TIMEOUT_SECONDS
    if not value > 0:
        LOGGER.warning("Non-positive %s=%r; using %ss.", TIMEOUT_ENV, raw, DEFAULT_TIMEOUT_SECONDS)
        return DEFAULT_TIMEOUT_SECONDS
    return value


def _ordered_unique(values: Iterable, unknown) -> tuple:
    out = []
    for value in values:
        if value is unknown or value in out:
            continue
        out.append(value)
    return tuple(out)


@dataclass(frozen=True)
class ResolverConfig:
    """
    Platforms and regions to try when auto-detecting, in priority order.

    The first candidate that answers wins, so a player with profiles on
    several consoles resolves to whichever platform is listed first.
    """

    platforms: Tuple[Platform, ...] = ()
    regions: Tuple[Region, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "platforms", _ordered_unique(self.platforms, Platform.UNKNOWN))
        object.__setattr__(self, "regions", _ordered_unique(self.regions, Region.UNKNOWN))

    def with_platforms(self, *platforms: Platform) -> "ResolverConfig":
        return ResolverConfig(platforms=platforms, regions=self.regions)

    def with_regions(self, *regions: Region) -> "ResolverConfig":
        return ResolverConfig(platforms=self.platforms, regions=regions)

    def with_all_platforms(self) -> "ResolverConfig":
        return self.with_platforms(*ALL_PLATFORMS)

    def with_all_regions(self) -> "ResolverConfig":
        return self.with_regions(*ALL_REGIONS)

    @classmethod
    def all_platforms(cls) -> "ResolverConfig":
        """PC, Xbox, PlayStation; no regions."""
        return cls(platforms=ALL_PLATFORMS)

    @classmethod
    def all_regions(cls) -> "ResolverConfig":
        """US, EU, KR; no platforms."""
        return cls(regions=ALL_REGIONS)

    @classmethod
    def default(cls) -> "ResolverConfig":
        return cls(platforms=ALL_PLATFORMS, regions=ALL_REGIONS)
