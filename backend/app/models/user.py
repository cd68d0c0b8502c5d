"""
Inkwell Backend — User SQLAlchemy Model
=========================================

What:  ORM model representing the `users` table.
Who:   Used by UserService (through the persistence gateway) and by Alembic.

Table Design Rationale:
    - Integer identity primary key: ids appear in URLs (/users/{id})
    - email: unique index; the store itself rejects duplicates, which
      closes the gap between the "email already exists" check and the insert
    - created_at: set on insert, never updated
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    """
    A registered author.

    Lifecycle:
        Created after the email uniqueness check, updated in place,
        deleted without touching the articles that reference it.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(String(320), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("uq_users_email", "email", unique=True),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
