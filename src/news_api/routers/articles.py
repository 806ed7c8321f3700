"""Article API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from article_store.store import ArticleStore
from news_api.models.article import (
    ArticleListResponse,
    ArticleResponse,
    ErrorResponse,
    RefreshResponse,
)
from refresh_articles.refresh_articles import ArticleRefresher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/articles", tags=["articles"])


def get_article_store(request: Request) -> ArticleStore:
    """Dependency to get the app's article store."""
    return request.app.state.store


def get_refresher(request: Request) -> ArticleRefresher:
    """Dependency to get the app's refresher."""
    return request.app.state.refresher


@router.get(
    "",
    response_model=ArticleListResponse,
    responses={500: {"model": ErrorResponse}},
)
def list_articles(store: Annotated[ArticleStore, Depends(get_article_store)]):
    """List all stored articles, newest first.

    A missing or unreadable article file reads as an empty list.
    """
    try:
        document = store.load()
        articles = [ArticleResponse.from_article(a) for a in document.articles]
    except Exception:
        logger.exception("Failed to load articles")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch articles"})

    return ArticleListResponse(
        articles=articles,
        total=len(articles),
        last_updated=document.last_updated,
    )


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    responses={500: {"model": ErrorResponse}},
)
def refresh_articles(refresher: Annotated[ArticleRefresher, Depends(get_refresher)]):
    """Fetch the feed and merge new articles into the store.

    Failures are turned into a 500 by the RefreshError handler on the app.
    """
    summary = refresher.refresh()

    return RefreshResponse(
        message="Articles refreshed",
        new_articles_count=summary.added_count,
        total_articles=summary.total_articles,
        updated_at=summary.updated_at,
    )
