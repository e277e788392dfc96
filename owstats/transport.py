# owstats/transport.py
"""
HTTP access for the career site.

UrlTransport issues plain GETs and hands back status + body without
raising on HTTP error statuses, since a 404 is how the site says a
profile does not exist. PageLoader turns a response into a
BeautifulSoup document for the extractor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Dict, Optional
from urllib.error import HTTPError
from urllib.request import Request, urlopen

from bs4 import BeautifulSoup

from owstats import config
from owstats.errors import TransportError

LOGGER = logging.getLogger(__name__)

HTTP_NOT_FOUND = 404


@dataclass(frozen=True)
class HttpResponse:
    status: int
    body: str
    url: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def not_found(self) -> bool:
        return self.status == HTTP_NOT_FOUND


def _decode(raw: bytes, headers) -> str:
    charset = None
    if headers is not None and hasattr(headers, "get_content_charset"):
        charset = headers.get_content_charset()
    return (raw or b"").decode(charset or "utf-8", errors="replace")


class UrlTransport:
    """GET-only transport built on urllib."""

    def __init__(
        self,
        timeout_seconds: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.timeout_seconds = config.timeout_seconds() if timeout_seconds is None else timeout_seconds
        self.headers = dict(config.HEADERS if headers is None else headers)

    def get(self, url: str) -> HttpResponse:
        req = Request(url, headers=self.headers, method="GET")
        try:
            with urlopen(req, timeout=self.timeout_seconds) as resp:
                return HttpResponse(
                    status=resp.status,
                    body=_decode(resp.read(), getattr(resp, "headers", None)),
                    url=url,
                )
        except HTTPError as exc:
            body = exc.read() if exc.fp is not None else b""
            return HttpResponse(status=exc.code, body=_decode(body, exc.headers), url=url)
        except OSError as exc:
            # URLError, timeouts and connection resets all land here
            raise TransportError(url, str(getattr(exc, "reason", exc))) from exc


class Page:
    """A fetched response plus its parsed document, parsed on first access."""

    def __init__(self, response: HttpResponse):
        self.response = response

    @property
    def url(self) -> str:
        return self.response.url

    @property
    def status(self) -> int:
        return self.response.status

    @cached_property
    def document(self) -> BeautifulSoup:
        return BeautifulSoup(self.response.body, "html.parser")


class PageLoader:
    """Opens URLs as navigable documents."""

    def __init__(self, transport: Optional[UrlTransport] = None):
        self.transport = transport or UrlTransport()

    def open(self, url: str) -> Page:
        response = self.transport.get(url)
        LOGGER.debug("GET %s -> %s", url, response.status)
        return Page(response)
