"""
Inkwell Backend — Article SQLAlchemy Model
============================================

What:  ORM model representing the `articles` table.
Who:   Used by ArticleService and UserService (user's articles listing).

Ownership:
    `user_id` is indexed but deliberately has no FOREIGN KEY constraint.
    The owner is re-checked by ArticleService on every write, and deleting
    a user leaves its articles in place.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Article(Base):
    """A piece of writing owned by one user."""

    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # 255 is mirrored by settings.article_title_max_length
    title: Mapped[str] = mapped_column(String(255), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    user_id: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # Serves GET /users/{id}/articles
    __table_args__ = (
        Index("idx_articles_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, user_id={self.user_id}, title='{self.title}')>"
