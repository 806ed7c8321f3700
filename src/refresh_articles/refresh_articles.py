"""Fetch the feed and merge the results into the article store."""

import logging
import threading
from typing import Callable

from article_store.merge import MAX_ARTICLES, merge_articles
from article_store.models import ArticleDocument
from article_store.store import ArticleStore, JsonArticleStore
from common.config import AppConfig
from common.datetime import utc_now_iso
from fetch_articles.fetch_rss_articles import ArticleFetcher, build_fetcher
from refresh_articles.models import RefreshSummary

logger = logging.getLogger(__name__)


class RefreshError(Exception):
    """Raised when any step of a refresh fails; the store is left as it was."""


class ArticleRefresher:
    """Runs fetch -> load -> merge -> save against one store.

    The load/merge/save sequence is serialized per refresher, so concurrent
    refreshes in one process cannot overwrite each other's merge.
    """

    def __init__(
        self,
        fetcher: ArticleFetcher,
        store: ArticleStore,
        max_articles: int = MAX_ARTICLES,
        clock: Callable[[], str] = utc_now_iso,
    ):
        self.fetcher = fetcher
        self.store = store
        self.max_articles = max_articles
        self.clock = clock
        self._lock = threading.Lock()

    def refresh(self) -> RefreshSummary:
        """Fetch new articles and merge them into the store.

        Returns:
            RefreshSummary with the number of added articles, the stored total
            and the timestamp of the last refresh that added anything

        Raises:
            RefreshError: If fetching, loading or saving fails. Nothing is
                written when the fetch fails.
        """
        logger.info("Starting article refresh")

        try:
            incoming = self.fetcher.fetch()

            with self._lock:
                document = self.store.load()
                result = merge_articles(document.articles, incoming, limit=self.max_articles)

                updated_at = self.clock() if result.added_count > 0 else document.last_updated
                self.store.save(ArticleDocument(articles=result.articles, last_updated=updated_at))
        except Exception as e:
            logger.error("Article refresh failed: %s", e)
            raise RefreshError("Failed to refresh articles") from e

        logger.info("Added %d new articles (%d total)", result.added_count, len(result.articles))

        return RefreshSummary(
            added_count=result.added_count,
            total_articles=len(result.articles),
            updated_at=updated_at,
        )


def build_store(config: AppConfig) -> JsonArticleStore:
    return JsonArticleStore(config.store.path)


def build_refresher(
    config: AppConfig,
    store: ArticleStore | None = None,
    fetcher: ArticleFetcher | None = None,
) -> ArticleRefresher:
    """Wire a refresher from config, using the given store/fetcher when provided."""
    return ArticleRefresher(
        fetcher=fetcher or build_fetcher(config.feed),
        store=store or build_store(config),
        max_articles=config.store.max_articles,
    )
