"""Client for the NewsData.io latest-news feed."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from .models import Article

LOGGER = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when the feed could not be fetched or reported a failure."""


class MissingApiKeyError(FetchError):
    """Raised when no NewsData API key is configured."""


@dataclass
class FetchResult:
    articles: List[Article]
    total_results: Optional[int] = None
    next_page: Optional[str] = None
    raw_count: int = 0


@dataclass
class NewsDataFetcher:
    """Fetch the latest articles with a fixed parameter profile."""

    api_key: Optional[str]
    base_url: str = "https://newsdata.io/api/1/latest"
    timeout: float = 10.0
    default_params: Dict[str, Any] = field(default_factory=dict)
    session: requests.Session = field(default_factory=requests.Session)

    name = "newsdata"

    def build_params(self, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {"apikey": self.api_key}
        params.update(self.default_params)
        params.update(overrides or {})
        return params

    def fetch(self, **overrides: Any) -> FetchResult:
        if not self.api_key:
            raise MissingApiKeyError("NEWSDATA_API_KEY not configured")

        params = self.build_params(overrides)
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            payload = response.json()
        except requests.RequestException as exc:
            raise FetchError(f"NewsData request failed: {exc}") from exc
        except ValueError as exc:
            raise FetchError(f"NewsData returned a non-JSON body (HTTP {response.status_code})") from exc

        if not isinstance(payload, dict) or payload.get("status") != "success":
            raise FetchError(f"NewsData reported a failure: {payload}")

        records = payload.get("results") or []
        articles = [Article.from_record(record) for record in records if record.get("link")]
        skipped = len(records) - len(articles)
        if skipped:
            LOGGER.debug("Skipped %d NewsData records without a link", skipped)
        LOGGER.info("Fetched %d articles from NewsData", len(articles))
        return FetchResult(
            articles=articles,
            total_results=payload.get("totalResults"),
            next_page=payload.get("nextPage"),
            raw_count=len(records),
        )


__all__ = ["FetchError", "FetchResult", "MissingApiKeyError", "NewsDataFetcher"]
