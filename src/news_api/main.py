"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from article_store.store import ArticleStore
from common.cli_helpers import setup_logging
from common.config import AppConfig, get_config
from fetch_articles.fetch_rss_articles import ArticleFetcher
from news_api.routers import articles
from refresh_articles.refresh_articles import RefreshError, build_refresher, build_store

logger = logging.getLogger(__name__)


def create_app(
    config: AppConfig | None = None,
    store: ArticleStore | None = None,
    fetcher: ArticleFetcher | None = None,
) -> FastAPI:
    """Build the API app.

    Args:
        config: App config (default: the global config)
        store: Article store to serve and refresh (default: JSON file from config)
        fetcher: Feed fetcher used by refresh (default: RSS fetcher from config)
    """
    config = config or get_config()
    store = store or build_store(config)

    app = FastAPI(
        title="Tech News Aggregator API",
        description="Aggregated technology articles with on-demand refresh",
        version="1.0.0",
    )

    app.state.config = config
    app.state.store = store
    app.state.refresher = build_refresher(config, store=store, fetcher=fetcher)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.cors.allow_origin],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(RefreshError)
    async def refresh_error_handler(request: Request, exc: RefreshError):
        return JSONResponse(status_code=500, content={"error": str(exc)})

    app.include_router(articles.router)

    @app.get("/")
    async def root():
        """API root - returns basic info."""
        return {"message": "Tech News Aggregator API"}

    return app


def main():
    """Run the API server."""
    import uvicorn

    setup_logging()
    config = get_config()
    logger.info("Starting server on http://%s:%d", config.server.host, config.server.port)

    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
    )


if __name__ == "__main__":
    main()
