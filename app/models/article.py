"""ORM model for published articles."""

import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String, Text, func

from app.models.base import Base


class ArticleCategory(str, enum.Enum):
    POLITICAL = "Political"
    GENERAL = "General"


class Article(Base):
    """
    Article shown on the site. hash is the MD5 of title + ISO date and keeps
    the same story from being stored twice.
    """

    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hash = Column(String(32), nullable=False, unique=True)
    title = Column(String(512), nullable=False)
    summary = Column(Text, nullable=False)
    article_text = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    image = Column(String(2048), nullable=False)
    category = Column(
        Enum(
            ArticleCategory,
            name="article_category",
            native_enum=False,
            length=16,
            values_callable=lambda categories: [c.value for c in categories],
        ),
        nullable=False,
        index=True,
    )
    featured = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
