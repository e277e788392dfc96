# owstats/errors.py

from typing import Optional


class OverwatchError(Exception):
    """Base class for every error raised by owstats."""


class MalformedIdentity(OverwatchError, ValueError):
    """Raised when a handle is not a BattleTag but a tag-only operation was requested."""


class ConfigurationRequired(OverwatchError):
    """Raised when a refresh demands a known platform/region that was never supplied."""


class UnknownPrestigeTier(OverwatchError):
    """Raised when the level border token is missing from the prestige table."""

    def __init__(self, token: str):
        super().__init__(f"Unknown prestige tier token '{token}'")
        self.token = token


class MalformedPage(OverwatchError):
    """Raised when a fetched profile page lacks a node every profile has."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(f"{message} ({url})" if url else message)
        self.url = url


class TransportError(OverwatchError):
    """Raised when the HTTP request itself fails (DNS, timeout, reset)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Request to {url} failed: {reason}")
        self.url = url
        self.reason = reason
