# owstats/resolver.py
"""
Locate the career page that hosts a player.

Candidates are tried one at a time in the caller's priority order and the
first qualifying answer wins. Platform probes need a 2xx; region probes
only need something other than a 404, because a private profile still
answers without the full page. The page fetched by the winning probe is
handed back so it never has to be downloaded twice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union
from urllib.parse import quote

from owstats import config
from owstats.identity import Identity
from owstats.models import Platform, ProfileLocation, Region
from owstats.transport import Page, PageLoader

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedPage:
    location: ProfileLocation
    page: Page

    @property
    def platform(self) -> Platform:
        return self.location.platform

    @property
    def region(self) -> Region:
        return self.location.region

    @property
    def url(self) -> str:
        return self.location.url


@dataclass(frozen=True)
class NotFound:
    """No candidate hosted the profile. A normal outcome, not an error."""

    identity: Identity
    platform: Platform = Platform.UNKNOWN
    region: Region = Region.UNKNOWN
    tried: Tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"No profile found for '{self.identity}' ({len(self.tried)} candidates tried)"


ResolveResult = Union[ResolvedPage, NotFound]


def profile_url(base_url: str, platform: Platform, region: Region, identity: Identity) -> str:
    base = base_url.rstrip("/")
    if platform is Platform.PC:
        return f"{base}/pc/{region.value}/{identity.url_token}"
    return f"{base}/{platform.value}/{quote(identity.handle, safe='')}"


class CandidateResolver:
    def __init__(self, loader: Optional[PageLoader] = None, base_url: Optional[str] = None):
        self.loader = loader or PageLoader()
        self.base_url = (base_url or config.BASE_URL).rstrip("/")

    def location(self, platform: Platform, region: Region, identity: Identity) -> ProfileLocation:
        if platform.is_console:
            region = Region.UNKNOWN
        return ProfileLocation(platform, region, profile_url(self.base_url, platform, region, identity))

    def candidate_locations(
        self,
        identity: Identity,
        platform_priority: Sequence[Platform] = (),
        region_priority: Sequence[Region] = (),
    ) -> List[ProfileLocation]:
        """Every location resolve() could probe, in probe order. No I/O."""
        if identity.is_tag:
            return [
                self.location(Platform.PC, region, identity)
                for region in region_priority
                if region is not Region.UNKNOWN
            ]
        return [
            self.location(platform, Region.UNKNOWN, identity)
            for platform in platform_priority
            if platform.is_console
        ]

    def resolve(
        self,
        identity: Identity,
        known_platform: Optional[Platform] = None,
        known_region: Optional[Region] = None,
        platform_priority: Sequence[Platform] = (),
        region_priority: Sequence[Region] = (),
    ) -> ResolveResult:
        if known_platform is Platform.UNKNOWN:
            known_platform = None
        if known_region is Region.UNKNOWN:
            known_region = None

        if identity.is_tag:
            if known_region is not None:
                return self._fetch_direct(identity, self.location(Platform.PC, known_region, identity))
            return self._probe_regions(identity, region_priority)

        if known_platform is not None and known_platform.is_console:
            return self._fetch_direct(identity, self.location(known_platform, Region.UNKNOWN, identity))

        return self._probe_platforms(identity, platform_priority)

    def _fetch_direct(self, identity: Identity, location: ProfileLocation) -> ResolveResult:
        page = self.loader.open(location.url)
        if page.response.not_found:
            LOGGER.warning("Profile for '%s' not found at %s", identity, location.url)
            return NotFound(identity, location.platform, Region.UNKNOWN, (location.url,))
        LOGGER.info("Fetched '%s' from %s (%s)", identity, location.url, page.status)
        return ResolvedPage(location, page)

    def _probe_platforms(self, identity: Identity, priority: Sequence[Platform]) -> ResolveResult:
        tried = []
        for platform in priority:
            if platform is Platform.PC:
                LOGGER.debug("Skipping PC probe for non-BattleTag handle '%s'", identity)
                continue
            if platform is Platform.UNKNOWN:
                continue
            location = self.location(platform, Region.UNKNOWN, identity)
            tried.append(location.url)
            page = self.loader.open(location.url)
            if page.response.ok:
                LOGGER.info("Resolved '%s' to platform %s", identity, platform.name)
                return ResolvedPage(location, page)
            LOGGER.debug("Platform %s missed for '%s' (%s)", platform.name, identity, page.status)

        LOGGER.warning("No platform hosts '%s' (tried %d)", identity, len(tried))
        return NotFound(identity, Platform.UNKNOWN, Region.UNKNOWN, tuple(tried))

    def _probe_regions(self, identity: Identity, priority: Sequence[Region]) -> ResolveResult:
        tried = []
        for region in priority:
            if region is Region.UNKNOWN:
                continue
            location = self.location(Platform.PC, region, identity)
            tried.append(location.url)
            page = self.loader.open(location.url)
            if not page.response.not_found:
                LOGGER.info("Resolved '%s' to region %s (%s)", identity, region.name, page.status)
                return ResolvedPage(location, page)
            LOGGER.debug("Region %s missed for '%s'", region.name, identity)

        LOGGER.warning("No region hosts '%s' (tried %d)", identity, len(tried))
        return NotFound(identity, Platform.PC, Region.UNKNOWN, tuple(tried))
