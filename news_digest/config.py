"""Configuration utilities for the news digest service."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_DATA_DIR = Path(os.getenv("NEWS_DIGEST_DATA_DIR", "data"))
DEFAULT_STORE_FILE = DEFAULT_DATA_DIR / "newsdata.json"

DEFAULT_FETCH_PARAMS: Dict[str, Any] = {
    "timezone": "asia/kolkata",
    "full_content": 1,
    "image": 1,
    "timeframe": "30m",
    "removeduplicate": 1,
    "sort": "pubdateasc",
    "excludefield": "duplicate",
    "size": 50,
    "language": "te",
}


@dataclass(frozen=True)
class Config:
    """Runtime configuration values for the service."""

    newsdata_api_key: Optional[str]
    openai_api_key: Optional[str] = None
    data_dir: Path = DEFAULT_DATA_DIR
    store_file: Path = DEFAULT_STORE_FILE
    newsdata_url: str = "https://newsdata.io/api/1/latest"
    fetch_params: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_FETCH_PARAMS))
    summarizer: str = "local"
    openai_model: str = "gpt-4"
    summary_language: str = "Telugu"
    local_summary_language: str = "english"
    fetch_interval: float = 10 * 60
    summarize_interval: float = 60
    fetch_timeout: float = 10
    summarize_timeout: float = 60
    host: str = "0.0.0.0"
    port: int = 3002


def load_config() -> Config:
    """Load configuration from environment variables and defaults."""

    data_dir = Path(os.getenv("NEWS_DIGEST_DATA_DIR", str(DEFAULT_DATA_DIR)))
    openai_api_key = os.getenv("OPENAI_API_KEY")
    summarizer = os.getenv("NEWS_DIGEST_SUMMARIZER") or ("openai" if openai_api_key else "local")
    config = Config(
        newsdata_api_key=os.getenv("NEWSDATA_API_KEY"),
        openai_api_key=openai_api_key,
        data_dir=data_dir,
        store_file=data_dir / "newsdata.json",
        summarizer=summarizer,
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4"),
        port=int(os.getenv("PORT", "3002")),
    )

    # Ensure the store directory exists when configuration is loaded.
    config.data_dir.mkdir(parents=True, exist_ok=True)

    return config
