"""Shared dataclasses and type definitions for the news pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from dateutil import parser as date_parser


class ArticleStatus(str, Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"


@dataclass(frozen=True)
class Article:
    """Normalized article representation persisted in the store.

    ``link`` is the identity of an article; every other content field is
    passed through untouched.
    """

    link: str
    title: Optional[str] = None
    content: Optional[str] = None
    language: Optional[str] = None
    category: Optional[Any] = None
    pubDate: Optional[str] = None
    source_name: Optional[str] = None
    source_id: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    country: Optional[Any] = None
    source_url: Optional[str] = None
    status: ArticleStatus = ArticleStatus.INACTIVE
    summary: str = ""

    @property
    def is_active(self) -> bool:
        return self.status is ArticleStatus.ACTIVE

    @property
    def published_at(self) -> datetime:
        """Return ``pubDate`` as a naive UTC datetime for ordering.

        Missing or unparseable dates sort as the oldest possible value.
        """

        return parse_pub_date(self.pubDate)

    def activate(self, summary: str) -> "Article":
        return replace(self, summary=summary, status=ArticleStatus.ACTIVE)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Article":
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        if not values.get("link"):
            raise ValueError("article has no link")
        values["status"] = ArticleStatus(values.get("status") or ArticleStatus.INACTIVE.value)
        values["summary"] = values.get("summary") or ""
        return cls(**values)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Article":
        """Map one upstream feed record to a fresh, not yet summarized article."""

        return cls(
            link=record.get("link"),
            title=record.get("title"),
            content=record.get("content"),
            language=record.get("language"),
            category=record.get("category"),
            pubDate=record.get("pubDate"),
            source_name=record.get("source_name"),
            source_id=record.get("source_id"),
            image_url=record.get("image_url"),
            video_url=record.get("video_url"),
            country=record.get("country"),
            source_url=record.get("source_url"),
        )


# Full, identity-deduplicated set of articles as persisted.
Collection = List[Article]


def parse_pub_date(value: Optional[str]) -> datetime:
    if not value:
        return datetime.min
    try:
        parsed = date_parser.parse(value)
    except (ValueError, TypeError, OverflowError):
        return datetime.min
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


__all__ = ["Article", "ArticleStatus", "Collection", "parse_pub_date"]
