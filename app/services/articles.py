"""Article storage and retrieval."""

import hashlib
import logging
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateArticleError, StoreUnavailableError
from app.models.article import Article, ArticleCategory
from app.schemas.article import ArticleCreate

logger = logging.getLogger(__name__)

DEFAULT_LATEST_LIMIT = 10
DEFAULT_CATEGORY_LIMIT = 10
DEFAULT_FEATURED_LIMIT = 3


def content_hash(title: str, date: datetime) -> str:
    """MD5 of title + ISO date; identifies an article, not a security hash."""
    data = title + date.isoformat()
    return hashlib.md5(data.encode("utf-8"), usedforsecurity=False).hexdigest()


def create_article(session: Session, data: ArticleCreate) -> Article:
    """Insert an article; the database assigns its id. Raises DuplicateArticleError on hash clash."""
    article_date = data.date or datetime.now(UTC)
    digest = content_hash(data.title, article_date)
    article = Article(
        hash=digest,
        title=data.title,
        summary=data.summary,
        article_text=data.article_text,
        date=article_date,
        image=data.image,
        category=data.category,
        featured=data.featured,
    )
    session.add(article)
    try:
        session.commit()
        session.refresh(article)
    except IntegrityError as e:
        session.rollback()
        raise DuplicateArticleError(digest) from e
    except SQLAlchemyError as e:
        session.rollback()
        raise StoreUnavailableError("Failed to create article", cause=e) from e
    logger.info(
        "Article created: article_id=%s category=%s", article.id, article.category.value
    )
    return article


def _fetch(session: Session, query, what: str) -> list[Article]:
    try:
        return query.all()
    except SQLAlchemyError as e:
        session.rollback()
        raise StoreUnavailableError(f"Failed to fetch {what}", cause=e) from e


def get_latest_articles(session: Session, limit: int = DEFAULT_LATEST_LIMIT) -> list[Article]:
    query = session.query(Article).order_by(Article.date.desc(), Article.id.desc()).limit(limit)
    return _fetch(session, query, "latest articles")


def get_articles_by_category(
    session: Session,
    category: ArticleCategory,
    limit: int = DEFAULT_CATEGORY_LIMIT,
) -> list[Article]:
    query = (
        session.query(Article)
        .filter(Article.category == category)
        .order_by(Article.date.desc(), Article.id.desc())
        .limit(limit)
    )
    return _fetch(session, query, f"{category.value} articles")


def get_featured_articles(session: Session, limit: int = DEFAULT_FEATURED_LIMIT) -> list[Article]:
    query = (
        session.query(Article)
        .filter(Article.featured.is_(True))
        .order_by(Article.date.desc(), Article.id.desc())
        .limit(limit)
    )
    return _fetch(session, query, "featured articles")


def get_article_by_id(session: Session, article_id: int) -> Article | None:
    try:
        return session.get(Article, article_id)
    except SQLAlchemyError as e:
        session.rollback()
        raise StoreUnavailableError("Failed to fetch article", cause=e) from e
