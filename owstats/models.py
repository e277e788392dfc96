# owstats/models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterator, Optional, Union

if TYPE_CHECKING:
    from owstats.identity import Identity

StatValue = Union[int, float, str]


class Platform(Enum):
    """Platforms in the order the site lists them."""

    PC = "pc"
    XBOX = "xbl"
    PLAYSTATION = "psn"
    UNKNOWN = "none"

    @property
    def is_console(self) -> bool:
        return self in (Platform.XBOX, Platform.PLAYSTATION)


class Region(Enum):
    US = "us"
    EU = "eu"
    KR = "kr"
    UNKNOWN = "none"


# (min skill rating, tier name), highest first
RANK_TIERS = (
    (4000, "Grandmaster"),
    (3500, "Master"),
    (3000, "Diamond"),
    (2500, "Platinum"),
    (2000, "Gold"),
    (1500, "Silver"),
    (1, "Bronze"),
)


@dataclass(frozen=True)
class ProfileLocation:
    platform: Platform
    region: Region
    url: str


def _freeze(categories: Dict[str, Dict[str, StatValue]]) -> Mapping:
    return MappingProxyType({
        name: MappingProxyType(dict(stats)) for name, stats in categories.items()
    })


class StatTable(Mapping):
    """
    Read-only category -> stat name -> value mapping for one game mode.

    The mapping itself holds the "All Heroes" numbers; ``heroes`` holds the
    same structure per hero.
    """

    def __init__(
        self,
        categories: Optional[Dict[str, Dict[str, StatValue]]] = None,
        heroes: Optional[Dict[str, Dict[str, Dict[str, StatValue]]]] = None,
    ):
        self._categories = _freeze(categories or {})
        self._heroes = MappingProxyType({
            hero: _freeze(hero_categories) for hero, hero_categories in (heroes or {}).items()
        })

    def __getitem__(self, category: str) -> Mapping:
        return self._categories[category]

    def __iter__(self) -> Iterator[str]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __repr__(self) -> str:
        return f"StatTable(categories={list(self._categories)}, heroes={list(self._heroes)})"

    @property
    def heroes(self) -> Mapping:
        return self._heroes

    def is_empty(self) -> bool:
        return not self._categories and not any(self._heroes.values())

    def get_stat(self, category: str, name: str, default: Optional[StatValue] = None) -> Optional[StatValue]:
        return self._categories.get(category, {}).get(name, default)


class AchievementSet:
    """Unlocked achievements, optionally grouped by the page's category labels."""

    def __init__(self, by_category: Optional[Dict[str, FrozenSet[str]]] = None):
        grouped = {category: frozenset(names) for category, names in (by_category or {}).items()}
        self._by_category = MappingProxyType(grouped)
        self._unlocked = frozenset().union(*grouped.values()) if grouped else frozenset()

    def __contains__(self, name: object) -> bool:
        return name in self._unlocked

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._unlocked))

    def __len__(self) -> int:
        return len(self._unlocked)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AchievementSet):
            return self._unlocked == other._unlocked
        if isinstance(other, (set, frozenset)):
            return self._unlocked == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._unlocked)

    def __repr__(self) -> str:
        return f"AchievementSet({sorted(self._unlocked)!r})"

    @property
    def unlocked(self) -> FrozenSet[str]:
        return self._unlocked

    @property
    def by_category(self) -> Mapping:
        return self._by_category


@dataclass(frozen=True)
class ExtractedProfile:
    """Everything read off a single profile page."""

    level: int = 0
    competitive_rank: int = 0
    competitive_rank_image: Optional[str] = None
    portrait_url: str = ""
    casual_stats: StatTable = field(default_factory=StatTable)
    competitive_stats: StatTable = field(default_factory=StatTable)
    achievements: AchievementSet = field(default_factory=AchievementSet)


@dataclass(frozen=True)
class Profile:
    """Immutable snapshot produced by one successful refresh."""

    identity: "Identity"
    platform: Platform
    region: Region
    profile_url: str
    player_level: int
    competitive_rank: int
    competitive_rank_image: Optional[str]
    portrait_url: str
    casual_stats: StatTable
    competitive_stats: Optional[StatTable]
    achievements: AchievementSet
    last_refreshed: datetime

    @classmethod
    def build(
        cls,
        identity: "Identity",
        location: ProfileLocation,
        extracted: ExtractedProfile,
        refreshed_at: datetime,
    ) -> "Profile":
        competitive = extracted.competitive_stats
        return cls(
            identity=identity,
            platform=location.platform,
            region=location.region,
            profile_url=location.url,
            player_level=extracted.level,
            competitive_rank=extracted.competitive_rank,
            competitive_rank_image=extracted.competitive_rank_image,
            portrait_url=extracted.portrait_url,
            casual_stats=extracted.casual_stats,
            competitive_stats=None if competitive.is_empty() else competitive,
            achievements=extracted.achievements,
            last_refreshed=refreshed_at,
        )

    @property
    def username(self) -> str:
        return self.identity.handle

    @property
    def rank_tier(self) -> Optional[str]:
        return rank_tier(self.competitive_rank)


def rank_tier(competitive_rank: int) -> Optional[str]:
    """Skill rating band name, None when unranked (0)."""
    for floor, name in RANK_TIERS:
        if competitive_rank >= floor:
            return name
    return None
