"""
Feed server client over HTTP.

Maps the entry operations onto plain HTTP verbs:
- get_feed / get_entry: GET, retried on transport errors
- insert_entry: POST of an Atom entry to the feed URL
- update_entry: PUT of an Atom entry to the entry URL
- delete_entry: DELETE of the entry URL
"""

from __future__ import annotations

import logging
import time

import httpx

from ..config import ClientConfig
from ..core.types import Entity
from ..errors import FeedClientError
from ..utils.logging import log_event
from .atom import build_entry_xml, parse_entity_xml, parse_feed_xml
from .base import FeedClient

logger = logging.getLogger(__name__)

ATOM_CONTENT_TYPE = "application/atom+xml"


class HttpFeedClient(FeedClient):
    """FeedClient backed by an httpx.Client.

    Attributes:
        cfg: Timeout, retry and header settings
    """

    def __init__(
        self,
        cfg: ClientConfig | None = None,
        auth: tuple[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.cfg = cfg or ClientConfig()
        self._client = httpx.Client(
            timeout=self.cfg.timeout_seconds,
            headers={"User-Agent": self.cfg.user_agent, "Accept": ATOM_CONTENT_TYPE},
            auth=auth,
            follow_redirects=True,
            trust_env=self.cfg.trust_env,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpFeedClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def get_feed(self, url: str) -> list[Entity]:
        resp = self._request("GET", url, retries=self.cfg.retries)
        return parse_feed_xml(resp.content)

    def get_entry(self, url: str) -> Entity:
        resp = self._request("GET", url, retries=self.cfg.retries)
        return parse_entity_xml(resp.content)

    def insert_entry(self, url: str, entity: Entity) -> Entity:
        resp = self._request("POST", url, content=build_entry_xml(entity))
        return parse_entity_xml(resp.content)

    def update_entry(self, url: str, entity: Entity) -> Entity:
        resp = self._request("PUT", url, content=build_entry_xml(entity))
        return parse_entity_xml(resp.content)

    def delete_entry(self, url: str) -> None:
        self._request("DELETE", url)

    def entity_from_xml(self, text: str) -> Entity:
        return parse_entity_xml(text)

    def _request(
        self,
        method: str,
        url: str,
        content: str | None = None,
        retries: int = 0,
    ) -> httpx.Response:
        headers = {"Content-Type": f"{ATOM_CONTENT_TYPE}; charset=utf-8"} if content is not None else None
        body = content.encode("utf-8") if content is not None else None
        last_error: str | None = None

        for attempt in range(retries + 1):
            try:
                resp = self._client.request(method, url, content=body, headers=headers)
            except httpx.TransportError as exc:
                last_error = f"{type(exc).__name__}: {exc}"
                log_event(
                    logger,
                    "request failed",
                    level=logging.WARNING,
                    method=method,
                    url=url,
                    attempt=attempt + 1,
                    error=last_error,
                )
                if attempt < retries:
                    # Linear backoff: 0.5s, 1.0s, 1.5s...
                    time.sleep(0.5 * (attempt + 1))
                continue

            log_event(
                logger,
                "request completed",
                level=logging.DEBUG,
                method=method,
                url=url,
                status_code=resp.status_code,
            )
            if resp.is_error:
                raise FeedClientError(
                    f"{method} {url} failed with HTTP {resp.status_code}: {resp.text.strip()[:200]}",
                    status_code=resp.status_code,
                )
            return resp

        raise FeedClientError(f"{method} {url} failed: {last_error}")
