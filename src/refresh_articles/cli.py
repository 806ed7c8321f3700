"""CLI for refreshing the stored articles from the configured feed."""

from __future__ import annotations

import argparse
import logging

from common.cli_helpers import setup_logging
from common.config import load_config
from refresh_articles.refresh_articles import RefreshError, build_refresher

logger = logging.getLogger(__name__)


def parse_refresh_articles_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for refresh_articles.'''

    parser = argparse.ArgumentParser(description="Fetch the feed and merge new articles into the store.")
    parser.add_argument(
        "--config",
        default=None,
        help="Config name under configs/ (default: TECH_NEWS_CONFIG or prod).",
    )
    parser.add_argument(
        "--store-path",
        default=None,
        help="Override the article file path from the config.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_refresh_articles_args(argv)
    setup_logging()

    config = load_config(args.config)
    if args.store_path:
        config.store.path = args.store_path

    refresher = build_refresher(config)

    try:
        summary = refresher.refresh()
    except RefreshError as e:
        logger.error("%s: %s", e, e.__cause__)
        raise SystemExit(1) from e

    logger.info(
        "Refresh complete: %d new, %d total, last updated %s",
        summary.added_count,
        summary.total_articles,
        summary.updated_at,
    )


if __name__ == "__main__":
    main()
