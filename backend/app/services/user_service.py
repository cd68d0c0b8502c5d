"""
Inkwell Backend — User Service
================================

What:  Business rules for the `users` resource.
Who:   Called by the /users route handlers.

Check Order (create and update):
    1. name present and non-blank      → 400 "Name cannot be empty"
    2. email present and non-blank     → 400 "Email cannot be empty"
    3. email syntax                    → 400 "EMAIL not valid"
    4. (update) user exists            → 404 "User not found"
    5. email not owned by another user → 409 "Email already exists"
    6. write, re-fetch, return the row

The unique index on users.email backs up step 5: if a concurrent request
inserts the same email between the check and the write, the gateway's
ConflictError is reported with the same message.
"""

import logging
from typing import Any, Optional, Tuple

from sqlalchemy import insert, select, update

from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.article import Article
from app.models.user import User
from app.schemas.article import ArticleResponse
from app.schemas.user import UserArticlesResponse, UserListResponse, UserResponse
from app.services.base import ResourceService
from app.services.validators import is_blank, validate_email_syntax

logger = logging.getLogger(__name__)

users = User.__table__
articles = Article.__table__

EMAIL_TAKEN = "Email already exists"


class UserService(ResourceService):
    """CRUD operations on users, plus the per-user article listing."""

    resource_name = "User"
    table = users

    def _select_user(self, user_id: int, lock: bool = False):
        statement = select(users).where(users.c.id == user_id)
        if lock:
            # Blocks article writes that are checking this owner
            statement = statement.with_for_update()
        return statement

    async def list_users(
        self, limit: Optional[str] = None, page: Optional[str] = None
    ) -> UserListResponse:
        size, number, offset = self.page_window(limit, page)
        rows = await self.gateway.fetch_all(
            select(users).order_by(users.c.id).limit(size).offset(offset)
        )
        total = await self.count()
        return UserListResponse(
            users=[UserResponse.model_validate(row) for row in rows],
            total=total,
            page=number,
            limit=size,
        )

    async def get_user(self, raw_id: Any) -> UserResponse:
        user_id = self.parse_id(raw_id)
        row = await self.require(self._select_user(user_id), user_id)
        return UserResponse.model_validate(row)

    async def list_user_articles(
        self,
        raw_id: Any,
        limit: Optional[str] = None,
        page: Optional[str] = None,
    ) -> UserArticlesResponse:
        """
        One page of a user's articles.

        The owner is looked up first: an unknown user is a 404, while a
        known user without articles is an empty page.
        """
        user_id = self.parse_id(raw_id)
        user = await self.require(self._select_user(user_id), user_id)

        size, number, offset = self.page_window(limit, page)
        rows = await self.gateway.fetch_all(
            select(articles)
            .where(articles.c.user_id == user_id)
            .order_by(articles.c.id)
            .limit(size)
            .offset(offset)
        )
        total = await self.count(articles.c.user_id == user_id, source=articles)
        return UserArticlesResponse(
            user=UserResponse.model_validate(user),
            articles=[ArticleResponse.model_validate(row) for row in rows],
            total=total,
            page=number,
            limit=size,
        )

    async def create_user(self, payload: Any) -> UserResponse:
        name, email = self._validate(payload)

        await self._ensure_email_free(email)
        try:
            result = await self.gateway.execute(
                insert(users).values(name=name, email=email)
            )
        except ConflictError:
            raise ConflictError(EMAIL_TAKEN) from None

        logger.info("User %s created", result.last_id)
        row = await self.require(self._select_user(result.last_id), result.last_id)
        return UserResponse.model_validate(row)

    async def update_user(self, raw_id: Any, payload: Any) -> UserResponse:
        name, email = self._validate(payload)

        user_id = self.parse_id(raw_id)
        await self.require(self._select_user(user_id, lock=True), user_id)
        await self._ensure_email_free(email, exclude_id=user_id)

        try:
            result = await self.gateway.execute(
                update(users).where(users.c.id == user_id).values(name=name, email=email)
            )
        except ConflictError:
            raise ConflictError(EMAIL_TAKEN) from None
        if result.rows_affected == 0:
            raise NotFoundError(resource=self.resource_name, resource_id=user_id)

        row = await self.require(self._select_user(user_id), user_id)
        return UserResponse.model_validate(row)

    async def delete_user(self, raw_id: Any) -> None:
        """
        Delete a user. Its articles are left untouched.

        The row is read (and locked) first; a zero-row delete after that
        read is still reported as 404.
        """
        user_id = self.parse_id(raw_id)
        await self.require(self._select_user(user_id, lock=True), user_id)
        await self.delete_by_id(user_id)
        logger.info("User %s deleted", user_id)

    # ── Helpers ───────────────────────────────────────────────────────────

    def _validate(self, payload: Any) -> Tuple[str, str]:
        body = self.body(payload)
        name = body.get("name")
        if is_blank(name) or not isinstance(name, str):
            raise ValidationError("Name cannot be empty", field="name")
        email = body.get("email")
        if is_blank(email) or not isinstance(email, str):
            raise ValidationError("Email cannot be empty", field="email")
        if not validate_email_syntax(email):
            raise ValidationError("EMAIL not valid", field="email")
        return name, email

    async def _ensure_email_free(self, email: str, exclude_id: Optional[int] = None) -> None:
        statement = select(users.c.id).where(users.c.email == email)
        if exclude_id is not None:
            statement = statement.where(users.c.id != exclude_id)
        if await self.gateway.fetch_one(statement) is not None:
            raise ConflictError(EMAIL_TAKEN, context={"email": email})
