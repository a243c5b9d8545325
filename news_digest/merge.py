"""Deduplicating merge of freshly fetched articles into the stored collection."""

from __future__ import annotations

from typing import Dict, Iterable, Sequence

from .models import Article, Collection


def merge(incoming: Iterable[Article], existing: Sequence[Article]) -> Collection:
    """Combine a fetched batch with the stored collection, one article per link.

    A stored article always wins over an incoming one with the same link, so
    summaries that were already computed survive a re-fetch. The result lists
    new articles first, then the stored ones; callers must not rely on it for
    display order.
    """

    stored: Dict[str, Article] = {}
    for article in existing:
        stored.setdefault(article.link, article)

    merged: Dict[str, Article] = {}
    for article in incoming:
        if article.link in merged:
            continue
        merged[article.link] = stored.get(article.link, article)
    for article in existing:
        merged.setdefault(article.link, article)
    return list(merged.values())


def new_links(incoming: Iterable[Article], existing: Sequence[Article]) -> Sequence[str]:
    """Return links from ``incoming`` that the stored collection does not hold yet."""

    known = {article.link for article in existing}
    result = []
    for article in incoming:
        if article.link not in known:
            known.add(article.link)
            result.append(article.link)
    return result


__all__ = ["merge", "new_links"]
