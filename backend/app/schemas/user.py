"""
Inkwell Backend — User Response Schemas
=========================================

What:  Pydantic models describing what the /users endpoints return.
Why:   Rows coming out of the gateway are plain mappings; these models
       fix the public shape and drive the OpenAPI docs.

Request bodies are NOT modelled here: the create/update payloads are read
as raw JSON objects so the services can apply their ordered checks
("Name cannot be empty" before "Email cannot be empty", ...) instead of
FastAPI's all-at-once 422.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from app.schemas.article import ArticleResponse


class UserResponse(BaseModel):
    """A single user row."""
    id: int = Field(description="Store-generated user identifier")
    name: str = Field(description="Display name")
    email: str = Field(description="Unique email address")
    created_at: datetime = Field(description="When the user was created")

    model_config = {"from_attributes": True}


class UserListResponse(BaseModel):
    """
    What:  One page of users.
    Who:   Returned by GET /users.

    Pagination is limit/page based; `total` counts every user, not the page.
    """
    users: List[UserResponse] = Field(description="Users on this page")
    total: int = Field(description="Total number of users")
    page: int = Field(description="Echoed page number (1-based)")
    limit: int = Field(description="Echoed page size")


class UserArticlesResponse(BaseModel):
    """One page of a user's articles, with the owner attached."""
    user: UserResponse
    articles: List[ArticleResponse]
    total: int = Field(description="Total number of articles owned by the user")
    page: int
    limit: int
