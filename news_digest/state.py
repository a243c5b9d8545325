"""Persisted article store backed by a single JSON document."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Iterable

from .models import Article, Collection

LOGGER = logging.getLogger(__name__)


class CorruptStoreError(Exception):
    """Raised when the store document exists but cannot be parsed."""


class ArticleStore:
    """JSON-backed store holding the full article collection.

    The document has the shape ``{"articles": [...]}`` and is always read and
    replaced wholesale.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def load(self) -> Collection:
        """Return the stored collection, or an empty one if nothing is stored yet.

        Raises :class:`CorruptStoreError` when the document cannot be parsed.
        """

        with self._lock:
            if not self.path.exists():
                return []
            raw = self.path.read_bytes()
        try:
            payload = json.loads(raw.decode("utf-8"))
            records = payload.get("articles") or []
            if not isinstance(records, list):
                raise TypeError(f"'articles' is a {type(records).__name__}, not a list")
        except (AttributeError, TypeError, ValueError) as exc:
            raise CorruptStoreError(f"Could not parse store file {self.path}: {exc}") from exc

        articles = []
        for index, item in enumerate(records):
            try:
                articles.append(Article.from_dict(item))
            except (AttributeError, TypeError, ValueError) as exc:
                LOGGER.warning("Skipping invalid record %d in %s: %s", index, self.path, exc)
        return articles

    def load_for_update(self) -> Collection:
        """Load the collection for a write path, treating corruption as empty."""

        try:
            return self.load()
        except CorruptStoreError as exc:
            LOGGER.warning("%s; it will be overwritten", exc)
            return []

    def save(self, articles: Iterable[Article]) -> None:
        payload = {"articles": [article.to_dict() for article in articles]}
        data = json.dumps(payload, indent=2, ensure_ascii=False)
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(data)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        LOGGER.debug("Saved %d articles to %s", len(payload["articles"]), self.path)


__all__ = ["ArticleStore", "CorruptStoreError"]
