"""Command-line entry point for running the news digest service."""

from __future__ import annotations

import argparse
import logging

import uvicorn

from .api import create_app
from .config import load_config
from .pipeline import build_pipeline, build_scheduler


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch, summarize and serve the latest news")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--once", action="store_true", help="Run one fetch and one summarize cycle, then exit")
    parser.add_argument("--no-serve", action="store_true", help="Run the schedulers without the HTTP server")
    parser.add_argument("--port", type=int, help="Override the HTTP port")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    setup_logging(verbose=args.verbose)

    config = load_config()
    pipeline = build_pipeline(config)
    if args.once:
        pipeline.ingest()
        pipeline.summarize_next()
        return

    scheduler = build_scheduler(pipeline, config)
    if args.no_serve:
        try:
            scheduler.run()
        except KeyboardInterrupt:
            scheduler.stop()
        return

    scheduler.start_background()
    try:
        uvicorn.run(create_app(pipeline), host=config.host, port=args.port or config.port)
    finally:
        scheduler.stop()


if __name__ == "__main__":
    main()
