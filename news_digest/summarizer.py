"""Summarization helpers used to enrich articles before they are published."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from openai import OpenAI, OpenAIError
from sumy.nlp.stemmers import Stemmer
from sumy.nlp.tokenizers import Tokenizer
from sumy.parsers.plaintext import PlaintextParser
from sumy.summarizers.lsa import LsaSummarizer
from sumy.utils import get_stop_words

from .models import Article, Collection

LOGGER = logging.getLogger(__name__)

FALLBACK_PREFIX = "[Fallback] "
FALLBACK_WORD_COUNT = 30
ELLIPSIS = "..."


class SummarizationError(Exception):
    """Raised by a summarization capability that could not produce a summary."""


@dataclass(frozen=True)
class SummaryProfile:
    """Fixed instruction profile sent along with every article body."""

    language: str = "Telugu"
    min_letters: int = 400
    max_letters: int = 500
    max_characters: int = 400

    @property
    def instructions(self) -> str:
        return (
            f"Write a human-like, natural summary of the following news article in {self.language} "
            f"within {self.min_letters}-{self.max_letters} letters or maximum {self.max_characters} characters. "
            "The summary should read as if written by a person, not a machine. Some places use easy words."
        )


@dataclass(frozen=True)
class SummaryOutcome:
    """Either a summary produced by the capability or the error it failed with."""

    summary: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.summary is not None


class SummarizationCapability:
    """Base class for services able to turn an article body into a summary."""

    name: str = "base"

    def summarize(self, instructions: str, text: str) -> str:
        raise NotImplementedError


class OpenAISummarizer(SummarizationCapability):
    name = "openai"

    def __init__(self, api_key: str, model: str = "gpt-4", timeout: float = 60.0, client: Optional[OpenAI] = None) -> None:
        self.model = model
        self.client = client or OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def summarize(self, instructions: str, text: str) -> str:
        try:
            response = self.client.responses.create(model=self.model, instructions=instructions, input=text)
        except OpenAIError as exc:
            raise SummarizationError(f"OpenAI request failed: {exc}") from exc

        output = (getattr(response, "output_text", None) or "").strip()
        if not output:
            raise SummarizationError("OpenAI returned an empty summary")
        return output


class LocalSummarizer(SummarizationCapability):
    """Extractive LSA summarizer that runs without any network access."""

    name = "local"

    def __init__(self, language: str = "english", sentence_count: int = 3, max_characters: int = 500) -> None:
        self.language = language
        self.sentence_count = sentence_count
        self.max_characters = max_characters

    def summarize(self, instructions: str, text: str) -> str:
        try:
            parser = PlaintextParser.from_string(text, Tokenizer(self.language))
            summarizer = LsaSummarizer(Stemmer(self.language))
            summarizer.stop_words = get_stop_words(self.language)
            sentences = summarizer(parser.document, self.sentence_count)
        except (LookupError, ValueError) as exc:
            raise SummarizationError(f"LSA summarizer failed: {exc}") from exc

        summary = " ".join(str(sentence) for sentence in sentences).strip()
        if not summary:
            raise SummarizationError("LSA summarizer selected no sentences")
        return summary[: self.max_characters].strip()


def fallback_summary(text: str) -> str:
    """Deterministic summary used whenever the capability fails."""

    words = text.split()[:FALLBACK_WORD_COUNT]
    return FALLBACK_PREFIX + " ".join(words) + ELLIPSIS


def request_summary(text: str, capability: SummarizationCapability, profile: SummaryProfile) -> SummaryOutcome:
    try:
        summary = (capability.summarize(profile.instructions, text) or "").strip()
    except Exception as exc:  # any capability failure ends in the fallback
        return SummaryOutcome(error=exc)
    if not summary:
        return SummaryOutcome(error=SummarizationError(f"{capability.name} returned an empty summary"))
    return SummaryOutcome(summary=summary)


def summarize(text: Optional[str], capability: SummarizationCapability, profile: Optional[SummaryProfile] = None) -> str:
    """Summarize an article body, never raising.

    Empty text yields an empty summary without calling the capability.
    """

    if not text:
        return ""
    outcome = request_summary(text, capability, profile or SummaryProfile())
    if outcome.ok:
        return outcome.summary
    LOGGER.error("%s summarizer failed, using fallback summary: %s", capability.name, outcome.error)
    return fallback_summary(text)


def apply_enrichment(target: Article, articles: Sequence[Article], summary: str) -> Collection:
    """Return a copy of ``articles`` with ``target`` summarized and activated."""

    return [article.activate(summary) if article.link == target.link else article for article in articles]


__all__ = [
    "LocalSummarizer",
    "OpenAISummarizer",
    "SummarizationCapability",
    "SummarizationError",
    "SummaryOutcome",
    "SummaryProfile",
    "apply_enrichment",
    "fallback_summary",
    "request_summary",
    "summarize",
]
