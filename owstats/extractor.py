# owstats/extractor.py

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional, Set

from bs4 import BeautifulSoup

from owstats import prestige
from owstats.errors import MalformedPage
from owstats.models import AchievementSet, ExtractedProfile, StatTable, StatValue

LOGGER = logging.getLogger(__name__)

ALL_HEROES_ID = "0x02E00000FFFFFFFF"
UNCATEGORIZED = "Uncategorized"

_INT_RE = re.compile(r"-?\d+")
_FLOAT_RE = re.compile(r"-?\d*\.\d+")
_DIGITS_RE = re.compile(r"[0-9]+")


class PageExtractor:
    """Read a career profile page into an ExtractedProfile."""

    LEVEL_SELECTOR = "div.player-level"
    LEVEL_TEXT_SELECTOR = "div.player-level div"
    RANK_TEXT_SELECTOR = "div.competitive-rank div"
    RANK_IMAGE_SELECTOR = "div.competitive-rank img"
    PORTRAIT_SELECTOR = "img.player-portrait"
    CASUAL_SELECTOR = "#quickplay"
    COMPETITIVE_SELECTOR = "#competitive"
    ACHIEVEMENTS_SELECTOR = "#achievements-section"

    def extract(self, document: BeautifulSoup, url: Optional[str] = None) -> ExtractedProfile:
        """
        Extract every profile field from a parsed page.

        Level, rank, badge, stats and achievements are optional per player and
        fall back to empty values. A border token missing from the prestige
        table raises UnknownPrestigeTier and a missing portrait raises
        MalformedPage; both mean the page no longer looks like we expect.
        """
        level = self._parse_level(document)
        rank = self._parse_int(self._text(document.select_one(self.RANK_TEXT_SELECTOR)))
        rank_image = self._attr(document.select_one(self.RANK_IMAGE_SELECTOR), "src")
        portrait = self._parse_portrait(document, url)

        return ExtractedProfile(
            level=level,
            competitive_rank=rank,
            competitive_rank_image=rank_image,
            portrait_url=portrait,
            casual_stats=self._parse_stat_section(document.select_one(self.CASUAL_SELECTOR)),
            competitive_stats=self._parse_stat_section(document.select_one(self.COMPETITIVE_SELECTOR)),
            achievements=self._parse_achievements(document.select_one(self.ACHIEVEMENTS_SELECTOR)),
        )

    # --- Value helpers ---

    @staticmethod
    def _text(node) -> str:
        if node is None:
            return ""
        return node.get_text(" ", strip=True)

    @staticmethod
    def _attr(node, name: str) -> Optional[str]:
        if node is None:
            return None
        value = node.get(name)
        return value.strip() if value and value.strip() else None

    @staticmethod
    def _parse_int(text: str) -> int:
        """Whole-number text -> int; anything else is 0."""
        clean = (text or "").strip()
        if not _DIGITS_RE.fullmatch(clean):
            return 0
        return int(clean)

    @staticmethod
    def _parse_stat_value(text: str) -> StatValue:
        """'1,234' -> 1234, '0.56' -> 0.56, '12:05' / '45%' stay strings."""
        clean = (text or "").strip()
        compact = clean.replace(",", "")
        if _INT_RE.fullmatch(compact):
            return int(compact)
        if _FLOAT_RE.fullmatch(compact):
            return float(compact)
        return clean

    # --- Header fields ---

    def _parse_level(self, document: BeautifulSoup) -> int:
        level_node = document.select_one(self.LEVEL_SELECTOR)
        if level_node is None:
            return 0
        level = self._parse_int(self._text(document.select_one(self.LEVEL_TEXT_SELECTOR)))
        token = prestige.find_token(level_node.get("style"))
        if token is None:
            return level
        return level + prestige.level_offset(token)

    def _parse_portrait(self, document: BeautifulSoup, url: Optional[str]) -> str:
        portrait = self._attr(document.select_one(self.PORTRAIT_SELECTOR), "src")
        if portrait is None:
            raise MalformedPage("Profile page has no player portrait", url)
        return portrait

    # --- Sections ---

    @staticmethod
    def _option_labels(section, group_id: str) -> Dict[str, str]:
        """Map data-category-id -> label from the section's dropdown."""
        labels = {}
        for option in section.select(f'select[data-group-id="{group_id}"] option'):
            value = option.get("value")
            if value:
                labels[value] = option.get_text(" ", strip=True)
        return labels

    def _parse_stat_group(self, group) -> Dict[str, Dict[str, Any]]:
        categories: Dict[str, Dict[str, Any]] = {}
        for table in group.select("table.data-table"):
            category = self._text(table.select_one(".stat-title")) or UNCATEGORIZED
            rows = table.select("tbody tr") or table.select("tr")
            for row in rows:
                cells = row.select("td")
                if len(cells) < 2:
                    continue
                name = self._text(cells[0])
                if not name:
                    LOGGER.debug("Skipping unnamed stat row in '%s'", category)
                    continue
                categories.setdefault(category, {})[name] = self._parse_stat_value(self._text(cells[1]))
        return categories

    def _parse_stat_section(self, section) -> StatTable:
        if section is None:
            return StatTable()

        hero_names = self._option_labels(section, "stats")
        all_heroes: Dict[str, Dict[str, Any]] = {}
        heroes: Dict[str, Dict[str, Dict[str, Any]]] = {}

        for group in section.select('div[data-group-id="stats"]'):
            category_id = group.get("data-category-id") or ALL_HEROES_ID
            categories = self._parse_stat_group(group)
            if not categories:
                continue
            if category_id == ALL_HEROES_ID:
                all_heroes = categories
            else:
                heroes[hero_names.get(category_id, category_id)] = categories

        return StatTable(all_heroes, heroes)

    def _parse_achievements(self, section) -> AchievementSet:
        if section is None:
            return AchievementSet()

        labels = self._option_labels(section, "achievements")
        groups = section.select('div[data-group-id="achievements"]') or [section]
        unlocked: Dict[str, Set[str]] = {}

        for group in groups:
            category = labels.get(group.get("data-category-id"), UNCATEGORIZED)
            for card in group.select("div.achievement-card"):
                if "m-disabled" in (card.get("class") or []):
                    continue
                name = self._text(card.select_one(".media-card-title"))
                if name:
                    unlocked.setdefault(category, set()).add(name)

        return AchievementSet(unlocked)
