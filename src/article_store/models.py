"""Data models for the article store."""

from dataclasses import dataclass, field
from typing import Any, Optional

from fetch_articles.models import Article


@dataclass
class ArticleDocument:
    """The persisted document: newest-first articles plus last-updated time."""
    articles: list[Article] = field(default_factory=list)
    last_updated: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "articles": [article.to_dict() for article in self.articles],
            "lastUpdated": self.last_updated,
        }


@dataclass
class MergeResult:
    """Outcome of merging a fetched batch into the stored list."""
    articles: list[Article]
    added_count: int
