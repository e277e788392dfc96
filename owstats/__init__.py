# owstats/__init__.py
"""
Player profile extraction for the Overwatch career site.

Resolves a BattleTag or console handle to the page that hosts it and
parses level, rank, portrait, per-mode stats and achievements.
"""

from .config import ResolverConfig
from .errors import (
    ConfigurationRequired,
    MalformedIdentity,
    MalformedPage,
    OverwatchError,
    TransportError,
    UnknownPrestigeTier,
)
from .extractor import PageExtractor
from .identity import Identity, from_url_token, is_tag_identity, to_url_token
from .models import AchievementSet, Platform, Profile, ProfileLocation, Region, StatTable
from .player import OverwatchPlayer
from .resolver import CandidateResolver, NotFound, ResolvedPage
from .transport import HttpResponse, PageLoader, UrlTransport

__all__ = [
    'AchievementSet',
    'CandidateResolver',
    'ConfigurationRequired',
    'HttpResponse',
    'Identity',
    'MalformedIdentity',
    'MalformedPage',
    'NotFound',
    'OverwatchError',
    'OverwatchPlayer',
    'PageExtractor',
    'PageLoader',
    'Platform',
    'Profile',
    'ProfileLocation',
    'Region',
    'ResolvedPage',
    'ResolverConfig',
    'StatTable',
    'TransportError',
    'UnknownPrestigeTier',
    'UrlTransport',
    'from_url_token',
    'is_tag_identity',
    'to_url_token',
]
