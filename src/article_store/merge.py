"""Merge newly fetched articles into the stored list."""

from typing import Sequence

from article_store.models import MergeResult
from fetch_articles.models import Article

MAX_ARTICLES = 50


def merge_articles(
    existing: Sequence[Article],
    incoming: Sequence[Article],
    limit: int = MAX_ARTICLES,
) -> MergeResult:
    """Prepend unseen incoming articles to the existing list and cap its length.

    Incoming articles are only checked against ids already in ``existing``;
    repeats inside the incoming batch itself are kept as they arrive.

    Args:
        existing: Stored articles, newest first
        incoming: Freshly fetched articles, in feed order
        limit: Maximum number of articles to retain

    Returns:
        MergeResult with the capped list and the number of articles that
        passed the dedup filter
    """
    existing_ids = {article.id for article in existing}
    new_articles = [article for article in incoming if article.id not in existing_ids]

    merged = [*new_articles, *existing][:limit]

    return MergeResult(articles=merged, added_count=len(new_articles))
