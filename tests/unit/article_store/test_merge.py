"""Tests for article_store.merge module."""

from article_store.merge import MAX_ARTICLES, merge_articles
from fetch_articles.models import Article


def _articles(*ids: str) -> list[Article]:
    return [Article(id=i, title=f"Title {i}", link=f"https://dev.to/{i}", source="Dev.to") for i in ids]


def _ids(articles: list[Article]) -> list[str]:
    return [a.id for a in articles]


class TestMergeArticles:
    def test_prepends_unseen_and_drops_known(self) -> None:
        existing = _articles("A", "B")
        incoming = _articles("C", "A", "D")

        result = merge_articles(existing, incoming)

        assert _ids(result.articles) == ["C", "D", "A", "B"]
        assert result.added_count == 2

    def test_empty_incoming_returns_existing(self) -> None:
        existing = _articles("A", "B", "C")

        result = merge_articles(existing, [])

        assert result.articles == existing
        assert result.added_count == 0

    def test_empty_incoming_still_caps_existing(self) -> None:
        existing = _articles(*[str(i) for i in range(MAX_ARTICLES + 5)])

        result = merge_articles(existing, [])

        assert result.articles == existing[:MAX_ARTICLES]
        assert result.added_count == 0

    def test_caps_at_fifty_keeping_first_of_batch(self) -> None:
        incoming = _articles(*[f"n{i}" for i in range(60)])

        result = merge_articles([], incoming)

        assert len(result.articles) == 50
        assert result.articles == incoming[:50]
        assert result.added_count == 60

    def test_overflow_drops_oldest_existing(self) -> None:
        existing = _articles(*[f"old{i}" for i in range(50)])
        incoming = _articles("new1", "new2")

        result = merge_articles(existing, incoming)

        assert len(result.articles) == 50
        assert _ids(result.articles[:3]) == ["new1", "new2", "old0"]
        assert "old48" not in _ids(result.articles)
        assert "old49" not in _ids(result.articles)

    def test_all_known_adds_nothing(self) -> None:
        existing = _articles("A", "B")

        result = merge_articles(existing, _articles("B", "A"))

        assert _ids(result.articles) == ["A", "B"]
        assert result.added_count == 0

    def test_known_ids_never_duplicated(self) -> None:
        existing = _articles("A", "B", "C")
        incoming = _articles("C", "X", "B", "Y", "A")

        result = merge_articles(existing, incoming)

        ids = _ids(result.articles)
        for known in ("A", "B", "C"):
            assert ids.count(known) == 1

    def test_batch_duplicates_are_only_checked_against_existing(self) -> None:
        result = merge_articles(_articles("A"), _articles("X", "X"))

        assert _ids(result.articles) == ["X", "X", "A"]
        assert result.added_count == 2

    def test_custom_limit(self) -> None:
        result = merge_articles(_articles("A", "B"), _articles("C"), limit=2)

        assert _ids(result.articles) == ["C", "A"]

    def test_does_not_mutate_inputs(self) -> None:
        existing = _articles("A")
        incoming = _articles("B")

        merge_articles(existing, incoming)

        assert _ids(existing) == ["A"]
        assert _ids(incoming) == ["B"]
