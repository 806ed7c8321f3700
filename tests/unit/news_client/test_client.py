"""Tests for news_client.client module."""

from unittest.mock import Mock

import pytest
import requests

from common.config import AppConfig, CacheConfig, ClientConfig
from news_client.cache import TagCache
from news_client.client import ArticlesClient, RefreshError

ARTICLES_PAYLOAD = {
    "articles": [
        {
            "id": "A",
            "title": "Title A",
            "link": "https://dev.to/a",
            "description": "desc",
            "pubDate": "Mon, 01 Jan 2024 12:00:00 GMT",
            "author": "Unknown",
            "source": "Dev.to",
        }
    ],
    "total": 1,
    "lastUpdated": None,
}


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def _response(payload=None, status: int = 200) -> Mock:
    response = Mock()
    response.status_code = status
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    return response


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session() -> Mock:
    session = Mock()
    session.get.return_value = _response(ARTICLES_PAYLOAD)
    session.post.return_value = _response({"message": "Articles refreshed"})
    return session


@pytest.fixture
def client(session, clock) -> ArticlesClient:
    return ArticlesClient("http://localhost:3001/", cache=TagCache(ttl_seconds=300, clock=clock), session=session)


class TestGetArticles:
    def test_parses_articles(self, client, session) -> None:
        articles = client.get_articles()

        assert [a.id for a in articles] == ["A"]
        assert articles[0].pub_date == "Mon, 01 Jan 2024 12:00:00 GMT"
        session.get.assert_called_once_with("http://localhost:3001/api/articles", timeout=30)

    def test_cached_within_ttl(self, client, session, clock) -> None:
        client.get_articles()
        clock.now = 299
        client.get_articles()

        assert session.get.call_count == 1

    def test_refetches_after_ttl(self, client, session, clock) -> None:
        client.get_articles()
        clock.now = 301
        client.get_articles()

        assert session.get.call_count == 2

    def test_network_error_returns_empty_list(self, client, session) -> None:
        session.get.side_effect = requests.ConnectionError("down")

        assert client.get_articles() == []

    def test_http_error_returns_empty_list_and_is_not_cached(self, client, session) -> None:
        session.get.return_value = _response(status=500)

        assert client.get_articles() == []

        session.get.return_value = _response(ARTICLES_PAYLOAD)
        assert [a.id for a in client.get_articles()] == ["A"]

    def test_bad_payload_returns_empty_list(self, client, session) -> None:
        session.get.return_value = _response({"articles": [{"title": "no id"}]})

        assert client.get_articles() == []


class TestGetPage:
    def test_page_is_cached_under_path(self, client, session) -> None:
        client.get_page("/")
        client.cache.invalidate_path("/")
        client.get_page("/")

        # The API read is still cached under the articles tag.
        assert session.get.call_count == 1

    def test_page_entry_is_not_tagged(self, client) -> None:
        client.get_page("/")

        client.cache.invalidate("articles")

        assert "/" in client.cache
        client.cache.invalidate_path("/")
        assert "/" not in client.cache

    def test_mutating_result_does_not_change_cache(self, client, session) -> None:
        first = client.get_page("/")
        first.clear()
        second = client.get_page("/")
        second.append(second[0])

        assert [a.id for a in client.get_page("/")] == ["A"]
        assert [a.id for a in client.get_articles()] == ["A"]
        assert session.get.call_count == 1


class TestRefreshArticles:
    def test_posts_and_invalidates(self, client, session) -> None:
        client.get_page("/")

        result = client.refresh_articles()

        assert result == {"success": True}
        session.post.assert_called_once_with(
            "http://localhost:3001/api/articles/refresh",
            timeout=30,
            headers={"Cache-Control": "no-store"},
        )
        assert "/" not in client.cache

        client.get_page("/")
        assert session.get.call_count == 2

    def test_refresh_drops_api_read_and_page(self, client) -> None:
        client.get_page("/")

        client.refresh_articles()

        assert "GET /api/articles" not in client.cache
        assert "/" not in client.cache

    def test_failure_raises_and_keeps_cache(self, client, session) -> None:
        client.get_page("/")
        session.post.return_value = _response(status=500)

        with pytest.raises(RefreshError, match="Failed to refresh articles"):
            client.refresh_articles()

        assert "/" in client.cache

    def test_network_failure_raises(self, client, session) -> None:
        session.post.side_effect = requests.Timeout("slow")

        with pytest.raises(RefreshError):
            client.refresh_articles()


class TestFromConfig:
    def test_builds_from_config(self) -> None:
        config = AppConfig(
            cache=CacheConfig(enabled=False, ttl_seconds=60),
            client=ClientConfig(api_base_url="http://api:3001", request_timeout=5),
        )

        client = ArticlesClient.from_config(config)

        assert client.base_url == "http://api:3001"
        assert client.timeout == 5
        assert client.cache.ttl_seconds == 60
        assert client.cache.enabled is False
