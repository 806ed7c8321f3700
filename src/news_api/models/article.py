"""Article Pydantic models."""

from pydantic import BaseModel, ConfigDict, Field

from fetch_articles.models import Article


class ArticleResponse(BaseModel):
    """Article response model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str | None = None
    link: str | None = None
    description: str | None = None
    pub_date: str | None = Field(default=None, alias="pubDate")
    author: str | None = None
    source: str | None = None

    @classmethod
    def from_article(cls, article: Article) -> "ArticleResponse":
        return cls(**article.to_dict())


class ArticleListResponse(BaseModel):
    """All stored articles, newest first."""

    model_config = ConfigDict(populate_by_name=True)

    articles: list[ArticleResponse]
    total: int
    last_updated: str | None = Field(default=None, alias="lastUpdated")


class RefreshResponse(BaseModel):
    """Summary of a refresh."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    new_articles_count: int = Field(alias="newArticlesCount")
    total_articles: int = Field(alias="totalArticles")
    updated_at: str | None = Field(default=None, alias="updatedAt")


class ErrorResponse(BaseModel):
    error: str
