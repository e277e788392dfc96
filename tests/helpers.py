# tests/helpers.py

from typing import Dict, List, Optional, Tuple

from owstats.models import Platform, Region
from owstats.transport import HttpResponse, PageLoader

BASE_URL = "https://career.test/en-gb/career"
PORTRAIT = "https://cdn.test/portraits/0x0250000000000D6B.png"
RANK_BADGE = "https://cdn.test/rank-icons/season-2/rank-4.png"
BRONZE_BORDER = "0x0250000000000918"
SILVER_BORDER = "0x0250000000000922"  # second prestige run, +100


def level_html(level: Optional[str] = "42", border: Optional[str] = BRONZE_BORDER) -> str:
    if level is None:
        return ""
    style = ""
    if border:
        style = f' style="background-image:url(https://cdn.test/playerlevelrewards/{border}_Border.png)"'
    return f'<div class="player-level"{style}><div class="u-vertical-center">{level}</div></div>'


def rank_html(rank: Optional[str] = "2650", badge: Optional[str] = RANK_BADGE) -> str:
    if rank is None:
        return ""
    img = f'<img src="{badge}">' if badge else ""
    return f'<div class="competitive-rank">{img}<div class="u-align-center h6">{rank}</div></div>'


def stat_table_html(category: str, stats: Dict[str, str]) -> str:
    rows = "".join(f"<tr><td>{name}</td><td>{value}</td></tr>" for name, value in stats.items())
    return (
        '<table class="data-table">'
        f'<thead><tr><th colspan="2"><span class="stat-title">{category}</span></th></tr></thead>'
        f"<tbody>{rows}</tbody></table>"
    )


def stat_section_html(
    section_id: str,
    groups: Dict[str, Dict[str, Dict[str, str]]],
    hero_labels: Optional[Dict[str, str]] = None,
) -> str:
    """groups: data-category-id -> category -> stat -> raw value."""
    options = "".join(
        f'<option value="{value}">{label}</option>' for value, label in (hero_labels or {}).items()
    )
    select = f'<select data-group-id="stats">{options}</select>' if options else ""
    body = "".join(
        f'<div data-group-id="stats" data-category-id="{category_id}">'
        + "".join(stat_table_html(category, stats) for category, stats in categories.items())
        + "</div>"
        for category_id, categories in groups.items()
    )
    return f'<div id="{section_id}" data-mode="{section_id}">{select}{body}</div>'


def achievements_html(categories: Dict[str, List[Tuple[str, bool]]]) -> str:
    """categories: label -> [(achievement name, unlocked)]."""
    options = ""
    groups = ""
    for i, (label, cards) in enumerate(categories.items()):
        category_id = f"0x0861000000000{i:03d}"
        options += f'<option value="{category_id}">{label}</option>'
        card_html = "".join(
            f'<div class="achievement-card{"" if unlocked else " m-disabled"}">'
            f'<div class="media-card-caption"><div class="media-card-title">{name}</div></div></div>'
            for name, unlocked in cards
        )
        groups += f'<div data-group-id="achievements" data-category-id="{category_id}">{card_html}</div>'
    return (
        '<section id="achievements-section">'
        f'<select data-group-id="achievements">{options}</select>{groups}</section>'
    )


ALL_HEROES = "0x02E00000FFFFFFFF"
REINHARDT = "0x02E0000000000007"

CASUAL_GROUPS = {
    ALL_HEROES: {
        "Combat": {"Eliminations": "1,234", "Deaths": "456", "Weapon Accuracy": "34%"},
        "Game": {"Time Played": "45 hours", "Games Won": "210"},
        "Average": {"Eliminations - Average": "14.52"},
    },
    REINHARDT: {
        "Hero Specific": {"Charge Kills": "77"},
    },
}

COMPETITIVE_GROUPS = {
    ALL_HEROES: {
        "Combat": {"Eliminations": "321", "Deaths": "120"},
        "Game": {"Games Played": "40"},
    },
}

HERO_LABELS = {ALL_HEROES: "ALL HEROES", REINHARDT: "Reinhardt"}


def build_profile_page(
    level: Optional[str] = "42",
    border: Optional[str] = BRONZE_BORDER,
    rank: Optional[str] = "2650",
    badge: Optional[str] = RANK_BADGE,
    portrait: Optional[str] = PORTRAIT,
    casual: Optional[dict] = None,
    competitive: Optional[dict] = None,
    achievements: Optional[dict] = None,
    include_casual: bool = True,
    include_competitive: bool = True,
) -> str:
    """Career page with every field filled in unless told otherwise."""
    portrait_html = f'<img class="player-portrait" src="{portrait}">' if portrait else ""
    casual_html = ""
    if include_casual:
        casual_html = stat_section_html(
            "quickplay", CASUAL_GROUPS if casual is None else casual, HERO_LABELS
        )
    competitive_html = ""
    if include_competitive:
        competitive_html = stat_section_html(
            "competitive", COMPETITIVE_GROUPS if competitive is None else competitive, HERO_LABELS
        )
    if achievements is None:
        achievements = {
            "General": [("Centenary", True), ("Level 25", True), ("Decorated", False)],
            "Offense": [("Card Shark", True)],
        }
    return (
        "<html><head><title>Overwatch Career Profile</title></head><body>"
        '<div class="masthead-player">'
        f"{portrait_html}{level_html(level, border)}{rank_html(rank, badge)}"
        "</div>"
        f"{casual_html}{competitive_html}{achievements_html(achievements) if achievements else ''}"
        "</body></html>"
    )


def pc_url(region: Region, token: str = "SomeUser-1234") -> str:
    return f"{BASE_URL}/pc/{region.value}/{token}"


def console_url(platform: Platform, handle: str = "ConsoleGuy") -> str:
    return f"{BASE_URL}/{platform.value}/{handle}"


class ScriptedTransport:
    """Transport double answering from a url -> (status, body) script and recording calls."""

    def __init__(self, responses: Optional[Dict[str, Tuple[int, str]]] = None, default_status: int = 404):
        self.responses = dict(responses or {})
        self.default_status = default_status
        self.calls: List[str] = []
        self.failures: Dict[str, Exception] = {}

    def get(self, url: str) -> HttpResponse:
        self.calls.append(url)
        if url in self.failures:
            raise self.failures[url]
        status, body = self.responses.get(url, (self.default_status, ""))
        return HttpResponse(status=status, body=body, url=url)


def scripted_loader(responses=None, default_status: int = 404) -> Tuple[PageLoader, ScriptedTransport]:
    transport = ScriptedTransport(responses, default_status)
    return PageLoader(transport), transport
