# owstats/player.py

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from owstats.config import ResolverConfig
from owstats.errors import ConfigurationRequired, MalformedIdentity
from owstats.extractor import PageExtractor
from owstats.identity import Identity
from owstats.models import AchievementSet, Platform, Profile, Region, StatTable
from owstats.resolver import CandidateResolver, NotFound, ResolvedPage, profile_url

LOGGER = logging.getLogger(__name__)


class OverwatchPlayer:
    """
    A player on the career site and the profile last downloaded for them.

    ``handle`` is a BattleTag ("SomeUser#1234") or a console username.
    ``platform`` and ``region`` are optional hints; a BattleTag is always PC
    and only PC profiles have a region. Anything not given is detected on
    refresh() using the priorities in ``config``.

    Not thread-safe: do not refresh the same player from two threads.
    """

    def __init__(
        self,
        handle: str,
        platform: Optional[Platform] = None,
        region: Optional[Region] = None,
        config: Optional[ResolverConfig] = None,
        resolver: Optional[CandidateResolver] = None,
        extractor: Optional[PageExtractor] = None,
    ):
        self._identity = Identity(handle)
        if platform is Platform.PC and not self._identity.is_tag:
            raise MalformedIdentity(f"PC players need a BattleTag, got '{handle}'")

        self.config = config or ResolverConfig.default()
        self._resolver = resolver or CandidateResolver()
        self._extractor = extractor or PageExtractor()

        self._platform_hint = self._identity.implied_platform or _known(platform, Platform)
        # only PC profiles are split by region
        self._region_hint = _known(region, Region) if self._platform_hint is Platform.PC else None

        self._platform = self._platform_hint or Platform.UNKNOWN
        self._region = self._region_hint or Region.UNKNOWN
        self._profile_url = self._initial_url()
        self._profile: Optional[Profile] = None

    def __repr__(self) -> str:
        return f"OverwatchPlayer({self.username!r}, platform={self._platform.name}, region={self._region.name})"

    def _initial_url(self) -> Optional[str]:
        if self._platform_hint is None:
            return None
        if self._platform_hint is Platform.PC and self._region_hint is None:
            return None
        return profile_url(
            self._resolver.base_url, self._platform_hint, self._region_hint or Region.UNKNOWN, self._identity
        )

    # --- Refresh ---

    def has_known_location(self) -> bool:
        if self._platform_hint is None:
            return False
        if self._platform_hint is Platform.PC and self._region_hint is None:
            return False
        return True

    def refresh(self, require_known_platform_region: bool = False) -> Union[Profile, NotFound]:
        """
        Download and parse the player's profile.

        With ``require_known_platform_region`` no detection is attempted and a
        missing platform (or a PC player without a region) raises
        ConfigurationRequired before any request is made.

        Returns the new Profile, or NotFound if no candidate hosts the player;
        in that case the previously downloaded profile is kept.
        """
        if require_known_platform_region and not self.has_known_location():
            if self._platform_hint is None:
                raise ConfigurationRequired(f"Platform for '{self.username}' is not set")
            raise ConfigurationRequired(f"Region for PC player '{self.username}' is not set")

        result = self._resolver.resolve(
            self._identity,
            known_platform=self._platform_hint,
            known_region=self._region_hint,
            platform_priority=self.config.platforms,
            region_priority=self.config.regions,
        )
        if isinstance(result, NotFound):
            self._platform = self._platform_hint or Platform.UNKNOWN
            self._region = self._region_hint or Region.UNKNOWN
            LOGGER.info("Refresh of %s found nothing: %s", self.username, result)
            return result

        return self._commit(result)

    def _commit(self, resolved: ResolvedPage) -> Profile:
        extracted = self._extractor.extract(resolved.page.document, url=resolved.url)
        profile = Profile.build(self._identity, resolved.location, extracted, datetime.now(timezone.utc))

        self._profile = profile
        self._platform = profile.platform
        self._region = profile.region
        self._profile_url = profile.profile_url
        LOGGER.info("Refreshed '%s' from %s", self.username, profile.profile_url)
        return profile

    def is_stale(self, max_age: timedelta) -> bool:
        if self._profile is None:
            return True
        return datetime.now(timezone.utc) - self._profile.last_refreshed > max_age

    # --- Accessors ---

    @property
    def identity(self) -> Identity:
        return self._identity

    @property
    def username(self) -> str:
        return self._identity.handle

    @property
    def profile(self) -> Optional[Profile]:
        return self._profile

    @property
    def platform(self) -> Platform:
        return self._platform

    @property
    def region(self) -> Region:
        return self._region

    @property
    def profile_url(self) -> Optional[str]:
        return self._profile_url

    @property
    def player_level(self) -> int:
        return self._profile.player_level if self._profile else 0

    @property
    def competitive_rank(self) -> int:
        return self._profile.competitive_rank if self._profile else 0

    @property
    def competitive_rank_image(self) -> Optional[str]:
        return self._profile.competitive_rank_image if self._profile else None

    @property
    def rank_tier(self) -> Optional[str]:
        return self._profile.rank_tier if self._profile else None

    @property
    def portrait_url(self) -> Optional[str]:
        return self._profile.portrait_url if self._profile else None

    @property
    def casual_stats(self) -> StatTable:
        return self._profile.casual_stats if self._profile else StatTable()

    @property
    def competitive_stats(self) -> Optional[StatTable]:
        return self._profile.competitive_stats if self._profile else None

    @property
    def achievements(self) -> AchievementSet:
        return self._profile.achievements if self._profile else AchievementSet()

    @property
    def last_refreshed(self) -> Optional[datetime]:
        return self._profile.last_refreshed if self._profile else None


def _known(value, enum_cls):
    if value is None or value is enum_cls.UNKNOWN:
        return None
    return value
