"""View state for the article list and its refresh button."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Optional

from fetch_articles.models import Article
from news_client.client import ArticlesClient, RefreshError


class RefreshStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class ArticleListState:
    articles: list[Article] = field(default_factory=list)
    status: RefreshStatus = RefreshStatus.IDLE
    error: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status is RefreshStatus.PENDING


class ArticleListController:
    """Drives the list through idle -> pending -> success | error.

    While a refresh is pending the list stays at its last rendered value;
    nothing unconfirmed is ever shown. On success the list is replaced by the
    re-rendered page, on error it is left alone and the message is surfaced.
    """

    def __init__(self, client: ArticlesClient, initial_articles: list[Article] | None = None):
        self.client = client
        if initial_articles is None:
            initial_articles = client.get_page()
        self.state = ArticleListState(articles=list(initial_articles))
        self._listeners: list[Callable[[ArticleListState], None]] = []

    def subscribe(self, listener: Callable[[ArticleListState], None]) -> None:
        self._listeners.append(listener)

    def _set_state(self, state: ArticleListState) -> None:
        self.state = state
        for listener in self._listeners:
            listener(state)

    def refresh(self) -> ArticleListState:
        if self.state.is_pending:
            return self.state

        self._set_state(replace(self.state, status=RefreshStatus.PENDING, error=None))

        try:
            self.client.refresh_articles()
        except RefreshError as e:
            self._set_state(replace(self.state, status=RefreshStatus.ERROR, error=str(e)))
            return self.state

        articles = self.client.get_page()
        self._set_state(ArticleListState(articles=list(articles), status=RefreshStatus.SUCCESS))
        return self.state
