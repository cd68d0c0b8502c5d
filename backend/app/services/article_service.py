"""
Inkwell Backend — Article Service
===================================

What:  Business rules for the `articles` resource.
Who:   Called by the /articles route handlers.

Check Order (create and update):
    1. title non-blank            → 400 "Title cannot be empty"
    2. content non-blank          → 400 "Content cannot be empty"
    3. structural rules           → 400 {"title": ..., "content": ...}
    4. user_id present            → 400 "User ID is required"
    5. user_id is an integer      → 400 "User ID must be a valid integer"
    6. owning user exists         → 404 "User not found"
    7. (update) article exists    → 404 "Article not found"
    8. write, re-fetch joined with the owner, return

Ownership:
    articles.user_id has no foreign key, so step 6 runs on every write.
    The owner row is read FOR UPDATE, which keeps a concurrent user delete
    from landing between the check and the write on backends that lock.
"""

import logging
from typing import Any, List, Tuple

from sqlalchemy import insert, select, update

from app.exceptions import NotFoundError, ValidationError
from app.models.article import Article
from app.models.user import User
from app.schemas.article import ArticleDetail
from app.services.base import ResourceService
from app.services.validators import coerce_int, is_blank, is_row_id, validate_article

logger = logging.getLogger(__name__)

users = User.__table__
articles = Article.__table__

# Articles joined with their owner; LEFT JOIN keeps articles whose owner
# was deleted visible (name/email come back as null)
ARTICLE_DETAIL = select(
    articles.c.id,
    articles.c.title,
    articles.c.content,
    articles.c.user_id,
    articles.c.created_at,
    users.c.name,
    users.c.email,
).select_from(articles.outerjoin(users, articles.c.user_id == users.c.id))


class ArticleService(ResourceService):
    """CRUD operations on articles."""

    resource_name = "Article"
    table = articles

    async def list_articles(self) -> List[ArticleDetail]:
        rows = await self.gateway.fetch_all(ARTICLE_DETAIL.order_by(articles.c.id))
        return [ArticleDetail.model_validate(row) for row in rows]

    async def get_article(self, raw_id: Any) -> ArticleDetail:
        article_id = self.parse_id(raw_id)
        return await self._detail(article_id)

    async def create_article(self, payload: Any) -> ArticleDetail:
        title, content, user_id = self._validate(payload)
        await self._require_owner(user_id)

        result = await self.gateway.execute(
            insert(articles).values(title=title, content=content, user_id=user_id)
        )
        logger.info("Article %s created for user %s", result.last_id, user_id)
        return await self._detail(result.last_id)

    async def update_article(self, raw_id: Any, payload: Any) -> ArticleDetail:
        title, content, user_id = self._validate(payload)
        await self._require_owner(user_id)

        article_id = self.parse_id(raw_id)
        result = await self.gateway.execute(
            update(articles)
            .where(articles.c.id == article_id)
            .values(title=title, content=content, user_id=user_id)
        )
        if result.rows_affected == 0:
            raise NotFoundError(resource=self.resource_name, resource_id=article_id)
        return await self._detail(article_id)

    async def delete_article(self, raw_id: Any) -> None:
        """Delete without a prior read; zero rows affected is a 404."""
        article_id = self.parse_id(raw_id)
        await self.delete_by_id(article_id)
        logger.info("Article %s deleted", article_id)

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _detail(self, article_id: int) -> ArticleDetail:
        row = await self.require(
            ARTICLE_DETAIL.where(articles.c.id == article_id), article_id
        )
        return ArticleDetail.model_validate(row)

    async def _require_owner(self, user_id: int) -> None:
        # An id no row can carry is a missing owner, not a driver error
        if not is_row_id(user_id):
            raise NotFoundError(resource="User", resource_id=user_id)
        owner = await self.gateway.fetch_one(
            select(users.c.id).where(users.c.id == user_id).with_for_update()
        )
        if owner is None:
            raise NotFoundError(resource="User", resource_id=user_id)

    def _validate(self, payload: Any) -> Tuple[str, str, int]:
        body = self.body(payload)
        if is_blank(body.get("title")):
            raise ValidationError("Title cannot be empty", field="title")
        if is_blank(body.get("content")):
            raise ValidationError("Content cannot be empty", field="content")

        errors = validate_article(body)
        if errors:
            raise ValidationError("Article is not valid", errors=errors)

        raw_user_id = body.get("user_id")
        if is_blank(raw_user_id):
            raise ValidationError("User ID is required", field="user_id")
        user_id = coerce_int(raw_user_id)
        if user_id is None:
            raise ValidationError("User ID must be a valid integer", field="user_id")

        return body["title"], body["content"], user_id
