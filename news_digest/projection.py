"""Read-side views over the article collection."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .models import Article, ArticleStatus


def filter_by_status(articles: Sequence[Article], status: ArticleStatus) -> List[Article]:
    return [article for article in articles if article.status is status]


def list_active(articles: Sequence[Article]) -> List[Article]:
    """Return active articles, newest ``pubDate`` first."""

    active = filter_by_status(articles, ArticleStatus.ACTIVE)
    return sorted(active, key=lambda art: art.published_at, reverse=True)


def next_to_summarize(articles: Sequence[Article]) -> Optional[Article]:
    """Return the oldest inactive article, or ``None`` when nothing is pending.

    Ties on ``pubDate`` keep collection order.
    """

    inactive = filter_by_status(articles, ArticleStatus.INACTIVE)
    if not inactive:
        return None
    return min(inactive, key=lambda art: art.published_at)


__all__ = ["filter_by_status", "list_active", "next_to_summarize"]
