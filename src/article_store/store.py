"""File-backed and in-memory article stores."""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from article_store.models import ArticleDocument
from fetch_articles.models import Article

logger = logging.getLogger(__name__)


class StoreReadError(Exception):
    """Raised internally when the persisted document cannot be read."""


class StoreWriteError(Exception):
    """Raised when the persisted document cannot be written."""


class ArticleStore(Protocol):
    def load(self) -> ArticleDocument:
        ...

    def save(self, document: ArticleDocument) -> None:
        ...


class JsonArticleStore:
    """Stores the whole ArticleDocument as one pretty-printed JSON file.

    ``load`` never fails: a missing, unreadable or malformed file reads as
    the empty document. Individual records without a string id are dropped
    and the rest of the file is kept. A legacy file holding a bare array of
    articles is accepted and read with ``last_updated`` set to None.

    Every load and save operates on the entire document. There is no file
    locking, so concurrent writers in different processes are last-writer-wins.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _ensure_dir(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> ArticleDocument:
        try:
            self._ensure_dir()
            return self._read_document()
        except FileNotFoundError:
            logger.debug("No article file at %s, starting empty", self.path)
        except (OSError, StoreReadError) as e:
            logger.warning("Could not read article file %s: %s", self.path, e)
        return ArticleDocument()

    def _read_document(self) -> ArticleDocument:
        with self.path.open(encoding="utf-8") as f:
            try:
                raw = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise StoreReadError(f"Malformed JSON: {e}") from e

        return parse_document(raw)

    def save(self, document: ArticleDocument) -> None:
        body = json.dumps(document.to_dict(), indent=2, ensure_ascii=False)

        try:
            self._ensure_dir()
            # Write beside the target, then rename over it in one step.
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(body)
                os.replace(tmp_path, self.path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error("Failed to write article file %s: %s", self.path, e)
            raise StoreWriteError(f"Failed to write {self.path}: {e}") from e

        logger.info("Saved %d articles to %s", len(document.articles), self.path)


class InMemoryArticleStore:
    """ArticleStore kept in memory; load and save hand out copies."""

    def __init__(self, document: ArticleDocument | None = None):
        self._document = copy.deepcopy(document) if document else ArticleDocument()

    def load(self) -> ArticleDocument:
        return copy.deepcopy(self._document)

    def save(self, document: ArticleDocument) -> None:
        self._document = copy.deepcopy(document)


def parse_document(raw: Any) -> ArticleDocument:
    """Build an ArticleDocument from decoded JSON, accepting the legacy array form.

    Raises:
        StoreReadError: If the data has neither the document nor the array shape
    """
    if isinstance(raw, list):
        return ArticleDocument(articles=_parse_articles(raw), last_updated=None)

    if isinstance(raw, dict):
        last_updated = raw.get("lastUpdated")
        if last_updated is not None and not isinstance(last_updated, str):
            raise StoreReadError(f"Unexpected lastUpdated value: {last_updated!r}")
        return ArticleDocument(
            articles=_parse_articles(raw.get("articles") or []),
            last_updated=last_updated,
        )

    raise StoreReadError(f"Unexpected document type: {type(raw).__name__}")


def _parse_articles(records: Any) -> list[Article]:
    if not isinstance(records, list):
        raise StoreReadError("Articles must be a list")

    articles = []
    for index, record in enumerate(records):
        if not isinstance(record, dict) or not isinstance(record.get("id"), str) or not record["id"]:
            logger.warning("Dropping malformed stored article at index %d: %r", index, record)
            continue
        articles.append(Article.from_dict(record))

    return articles
