"""High-level orchestration of the ingestion and summarization cycles."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import Config
from .fetchers import FetchError, MissingApiKeyError, NewsDataFetcher
from .merge import merge, new_links
from .models import Article
from .projection import list_active, next_to_summarize
from .scheduler import Clock, PeriodicTask, Scheduler
from .state import ArticleStore, CorruptStoreError
from .summarizer import (
    LocalSummarizer,
    OpenAISummarizer,
    SummarizationCapability,
    SummaryProfile,
    apply_enrichment,
    summarize,
)

LOGGER = logging.getLogger(__name__)


@dataclass
class IngestionResult:
    articles: List[Article] = field(default_factory=list)
    new_count: int = 0
    total_results: Optional[int] = None
    next_page: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SummarizationResult:
    article: Optional[Article] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class NewsPipeline:
    """Wires the store, the feed and the summarizer into the two cycles."""

    store: ArticleStore
    fetcher: NewsDataFetcher
    summarizer: SummarizationCapability
    profile: SummaryProfile = field(default_factory=SummaryProfile)

    def ingest(self, **overrides: Any) -> IngestionResult:
        """Fetch the latest articles and merge them into the store."""

        try:
            fetched = self.fetcher.fetch(**overrides)
        except MissingApiKeyError as exc:
            LOGGER.warning("Skipping fetch: %s", exc)
            return IngestionResult(error=str(exc))
        except FetchError as exc:
            LOGGER.error("Fetch failed, store left untouched: %s", exc)
            return IngestionResult(error=str(exc))

        existing = self.store.load_for_update()
        added = new_links(fetched.articles, existing)
        merged = merge(fetched.articles, existing)
        try:
            self.store.save(merged)
        except OSError as exc:
            LOGGER.error("Could not persist %d merged articles: %s", len(merged), exc)
            return IngestionResult(articles=fetched.articles, error=f"Failed to write store: {exc}")

        LOGGER.info(
            "Merged %d fetched articles (%d new, %d stored in total)",
            len(fetched.articles),
            len(added),
            len(merged),
        )
        return IngestionResult(
            articles=fetched.articles,
            new_count=len(added),
            total_results=fetched.total_results,
            next_page=fetched.next_page,
        )

    def summarize_next(self) -> SummarizationResult:
        """Summarize and activate the oldest inactive article, if any."""

        articles = self.store.load_for_update()
        target = next_to_summarize(articles)
        if target is None:
            LOGGER.info("No eligible article to summarize")
            return SummarizationResult()

        summary = summarize(target.content, self.summarizer, self.profile)
        updated = apply_enrichment(target, articles, summary)
        try:
            self.store.save(updated)
        except OSError as exc:
            LOGGER.error("Could not persist summary for %s: %s", target.link, exc)
            return SummarizationResult(error=f"Failed to write store: {exc}")

        activated = target.activate(summary)
        LOGGER.info("Summarized and activated: %s", activated.title)
        return SummarizationResult(article=activated)

    def list_active_articles(self) -> Dict[str, Any]:
        """Return active articles newest first, or an error object on read failure."""

        try:
            articles = list_active(self.store.load())
        except (CorruptStoreError, OSError) as exc:
            LOGGER.error("Failed to read news data: %s", exc)
            return {"error": "Failed to read news data", "details": str(exc)}
        return {"articles": [article.to_dict() for article in articles], "totalResults": len(articles)}


def build_summarizer(config: Config) -> SummarizationCapability:
    if config.summarizer == "openai":
        if config.openai_api_key:
            return OpenAISummarizer(
                api_key=config.openai_api_key,
                model=config.openai_model,
                timeout=config.summarize_timeout,
            )
        LOGGER.warning("OPENAI_API_KEY not configured; using the local summarizer")
    return LocalSummarizer(language=config.local_summary_language)


def build_pipeline(config: Config) -> NewsPipeline:
    fetcher = NewsDataFetcher(
        api_key=config.newsdata_api_key,
        base_url=config.newsdata_url,
        timeout=config.fetch_timeout,
        default_params=dict(config.fetch_params),
    )
    return NewsPipeline(
        store=ArticleStore(config.store_file),
        fetcher=fetcher,
        summarizer=build_summarizer(config),
        profile=SummaryProfile(language=config.summary_language),
    )


def build_scheduler(pipeline: NewsPipeline, config: Config, clock: Optional[Clock] = None) -> Scheduler:
    tasks = [
        PeriodicTask("fetch", pipeline.ingest, config.fetch_interval),
        PeriodicTask("summarize", pipeline.summarize_next, config.summarize_interval),
    ]
    return Scheduler(tasks, clock=clock)


__all__ = [
    "IngestionResult",
    "NewsPipeline",
    "SummarizationResult",
    "build_pipeline",
    "build_scheduler",
    "build_summarizer",
]
