"""Data models for the refresh_articles stage."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class RefreshSummary:
    """What a single refresh did to the store."""
    added_count: int
    total_articles: int
    updated_at: Optional[str]
