"""RSS feed fetching."""

import logging
from typing import Protocol

import feedparser
import requests

from common.config import FeedConfig
from fetch_articles.models import Article
from fetch_articles.sources import RSS_FEEDS, SOURCE_LABELS

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "tech-news/1.0 (RSS reader)"


class FetchError(Exception):
    """Raised when the upstream feed is unreachable or unparseable."""


class ArticleFetcher(Protocol):
    def fetch(self) -> list[Article]:
        ...


class RSSFeedFetcher:
    """Fetches one RSS/Atom feed and normalizes its entries into Articles.

    No retry and no filtering: every entry of the feed becomes an Article,
    in feed order.
    """

    def __init__(
        self,
        feed_url: str,
        source_label: str,
        timeout: int = 30,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.feed_url = feed_url
        self.source_label = source_label
        self.timeout = timeout
        self.user_agent = user_agent

    @classmethod
    def for_source(cls, source: str, **kwargs) -> "RSSFeedFetcher":
        """Build a fetcher for a known source key from RSS_FEEDS."""
        feed_url = RSS_FEEDS.get(source)
        if not feed_url:
            raise ValueError(f"Unknown source: {source}. Valid sources: {', '.join(sorted(RSS_FEEDS))}")
        return cls(feed_url, SOURCE_LABELS.get(source, source), **kwargs)

    def fetch(self) -> list[Article]:
        logger.info("Fetching RSS feed %s", self.feed_url)
        feed = _fetch_feed(self.feed_url, self.timeout, self.user_agent)
        articles = []
        for entry in feed.entries:
            article = _parse_entry(entry, self.source_label)
            if article is None:
                logger.warning("Skipping entry without guid or link: %s", entry.get("title"))
                continue
            articles.append(article)
        logger.info("Found %d articles from %s", len(articles), self.source_label)
        return articles


def build_fetcher(config: FeedConfig) -> RSSFeedFetcher:
    """Build the fetcher for the configured feed.

    An explicit url wins over the source key; the label falls back to the
    known label for the source.
    """
    if config.url:
        return RSSFeedFetcher(
            config.url,
            config.source_label or SOURCE_LABELS.get(config.source, config.source),
            timeout=config.request_timeout,
            user_agent=config.user_agent,
        )

    fetcher = RSSFeedFetcher.for_source(
        config.source,
        timeout=config.request_timeout,
        user_agent=config.user_agent,
    )
    if config.source_label:
        fetcher.source_label = config.source_label
    return fetcher


def _fetch_feed(feed_url: str, timeout: int, user_agent: str) -> feedparser.FeedParserDict:
    """Download and parse a feed, raising FetchError on any failure."""
    try:
        response = requests.get(
            feed_url,
            timeout=timeout,
            headers={"User-Agent": user_agent},
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error("Failed to fetch RSS feed %s: %s", feed_url, e)
        raise FetchError(f"Failed to fetch feed {feed_url}: {e}") from e

    feed = feedparser.parse(response.content)

    # feedparser sets bozo for recoverable quirks too; only an empty bozo
    # document counts as unparseable.
    if feed.bozo and not feed.entries:
        logger.error("Unparseable RSS feed %s: %s", feed_url, feed.get("bozo_exception"))
        raise FetchError(f"Unparseable feed {feed_url}: {feed.get('bozo_exception')}")

    return feed


def _parse_entry(entry, source: str) -> Article | None:
    """Normalize a single feed entry into an Article.

    Returns None when the entry has neither a guid nor a link to identify it.
    """
    link = entry.get("link")
    article_id = entry.get("id") or link
    if not article_id:
        return None

    return Article(
        id=article_id,
        title=entry.get("title"),
        link=link,
        description=_get_description(entry),
        pub_date=entry.get("published"),
        author=entry.get("author") or "Unknown",
        source=source,
    )


def _get_description(entry) -> str | None:
    """Short excerpt if the entry has one, else the full content."""
    summary = entry.get("summary")
    if summary:
        return summary

    content = entry.get("content") or []
    if content:
        return content[0].get("value")

    return None
