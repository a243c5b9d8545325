from pathlib import Path
from unittest.mock import MagicMock

import pytest

from news_digest.fetchers import FetchResult
from news_digest.models import Article, ArticleStatus
from news_digest.pipeline import NewsPipeline
from news_digest.state import ArticleStore
from news_digest.summarizer import SummarizationCapability


def make_article(link, pub_date="2024-01-01 00:00:00", status=ArticleStatus.INACTIVE, summary="", content="some body text"):
    return Article(
        link=link,
        title=f"Title for {link}",
        content=content,
        language="telugu",
        pubDate=pub_date,
        source_id="src",
        status=status,
        summary=summary,
    )


class StaticSummarizer(SummarizationCapability):
    name = "static"

    def __init__(self, summary="A short summary."):
        self.summary = summary
        self.calls = []

    def summarize(self, instructions, text):
        self.calls.append((instructions, text))
        return self.summary


class FailingSummarizer(SummarizationCapability):
    name = "failing"

    def summarize(self, instructions, text):
        raise RuntimeError("quota exceeded")


@pytest.fixture
def store(tmp_path: Path) -> ArticleStore:
    return ArticleStore(tmp_path / "newsdata.json")


@pytest.fixture
def fetcher():
    mock = MagicMock()
    mock.fetch.return_value = FetchResult(articles=[], total_results=0)
    return mock


@pytest.fixture
def pipeline(store, fetcher):
    return NewsPipeline(store=store, fetcher=fetcher, summarizer=StaticSummarizer())
