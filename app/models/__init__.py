"""SQLAlchemy ORM models."""

from app.models.article import Article, ArticleCategory
from app.models.base import Base
from app.models.user import DEFAULT_ROLE, Role, User

__all__ = ["Article", "ArticleCategory", "Base", "DEFAULT_ROLE", "Role", "User"]
