"""Data models for the fetch_articles stage."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Article:
    """Normalized article parsed from an RSS feed entry.

    Persisted and served with camelCase keys (``pubDate``); see to_dict/from_dict.
    """
    id: str
    title: Optional[str] = None
    link: Optional[str] = None
    description: Optional[str] = None
    pub_date: Optional[str] = None
    author: Optional[str] = None
    source: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "link": self.link,
            "description": self.description,
            "pubDate": self.pub_date,
            "author": self.author,
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Article":
        return cls(
            id=data["id"],
            title=data.get("title"),
            link=data.get("link"),
            description=data.get("description"),
            pub_date=data.get("pubDate"),
            author=data.get("author"),
            source=data.get("source"),
        )
