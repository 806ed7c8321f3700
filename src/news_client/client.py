"""Client for the articles API, used by the rendering layer."""

import logging

import requests

from common.config import AppConfig
from fetch_articles.models import Article
from news_client.cache import TagCache

logger = logging.getLogger(__name__)

ARTICLES_TAG = "articles"
ARTICLES_KEY = "GET /api/articles"
HOME_PATH = "/"


class RefreshError(Exception):
    """Raised when the refresh request to the API fails."""


class ArticlesClient:
    """Reads articles through a tagged cache and triggers refreshes.

    Reads never raise: any failure degrades to an empty list, which is not
    cached. A successful refresh invalidates the articles tag and the home
    page so the next read goes back to the API.
    """

    def __init__(
        self,
        base_url: str,
        cache: TagCache | None = None,
        timeout: int = 30,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.cache = cache or TagCache()
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: AppConfig) -> "ArticlesClient":
        cache = TagCache(ttl_seconds=config.cache.ttl_seconds, enabled=config.cache.enabled)
        return cls(config.client.api_base_url, cache=cache, timeout=config.client.request_timeout)

    def get_articles(self) -> list[Article]:
        cached = self.cache.get(ARTICLES_KEY)
        if cached is not None:
            return list(cached)

        try:
            response = self.session.get(f"{self.base_url}/api/articles", timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
            articles = [Article.from_dict(record) for record in data.get("articles") or []]
        except Exception as e:
            logger.error("Error fetching articles: %s", e)
            return []

        self.cache.set(ARTICLES_KEY, tuple(articles), tags=[ARTICLES_TAG])
        return articles

    def get_page(self, path: str = HOME_PATH) -> list[Article]:
        """Articles for a rendered page, cached under the page path.

        Page entries are untagged; they are dropped with invalidate_path.
        """
        cached = self.cache.get(path)
        if cached is not None:
            return list(cached)

        articles = self.get_articles()
        self.cache.set(path, tuple(articles))
        return articles

    def refresh_articles(self) -> dict:
        """Ask the API to refresh, then invalidate the cached reads.

        Raises:
            RefreshError: If the request fails or the API answers with an error
        """
        try:
            response = self.session.post(
                f"{self.base_url}/api/articles/refresh",
                timeout=self.timeout,
                headers={"Cache-Control": "no-store"},
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Error refreshing articles: %s", e)
            raise RefreshError("Failed to refresh articles") from e

        self.cache.invalidate(ARTICLES_TAG)
        self.cache.invalidate_path(HOME_PATH)

        return {"success": True}
