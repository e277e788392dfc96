# owstats/identity.py
"""
Player identity handling.

A BattleTag ("Name#1234") always addresses a PC profile and is rendered
into the career URL with the '#' swapped for '-'. Any other string is a
console handle whose platform has to be supplied or detected.
"""

import re
from dataclasses import dataclass
from typing import Optional

from owstats.errors import MalformedIdentity
from owstats.models import Platform

TAG_PATTERN = re.compile(r"^[A-Za-z0-9]+#[0-9]+$")
TAG_SEPARATOR = "#"
URL_SEPARATOR = "-"


def is_tag_identity(handle: str) -> bool:
    """True if handle is a BattleTag (name#digits)."""
    if not isinstance(handle, str):
        return False
    return TAG_PATTERN.match(handle) is not None


def to_url_token(handle: str) -> str:
    if not is_tag_identity(handle):
        raise MalformedIdentity(f"'{handle}' is not a valid BattleTag")
    return handle.replace(TAG_SEPARATOR, URL_SEPARATOR)


def from_url_token(token: str) -> str:
    """Reverse to_url_token; only the last '-' is the discriminator separator."""
    name, sep, discriminator = (token or "").rpartition(URL_SEPARATOR)
    handle = f"{name}{TAG_SEPARATOR}{discriminator}" if sep else token
    if not is_tag_identity(handle):
        raise MalformedIdentity(f"'{token}' is not a BattleTag URL token")
    return handle


@dataclass(frozen=True)
class Identity:
    handle: str

    def __post_init__(self):
        if not isinstance(self.handle, str) or not self.handle.strip():
            raise MalformedIdentity("Player handle must be a non-empty string")

    @property
    def is_tag(self) -> bool:
        return is_tag_identity(self.handle)

    @property
    def url_token(self) -> str:
        return to_url_token(self.handle)

    @property
    def implied_platform(self) -> Optional[Platform]:
        return Platform.PC if self.is_tag else None

    def __str__(self) -> str:
        return self.handle
