"""
Inkwell Backend — Article Response Schemas
============================================

Two shapes are exposed:
    ArticleResponse: the bare row (user's article listing)
    ArticleDetail:   the row joined with its owner's name and email
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ArticleResponse(BaseModel):
    id: int = Field(description="Store-generated article identifier")
    title: str
    content: str
    user_id: int = Field(description="Owning user identifier")
    created_at: datetime

    model_config = {"from_attributes": True}


class ArticleDetail(ArticleResponse):
    """
    What:  Article enriched with its owner (join on users.id).
    Who:   Returned by GET /articles, GET/POST/PUT /articles/{id}.

    name/email are null when the owning user has since been deleted.
    """
    name: Optional[str] = Field(default=None, description="Owner's name")
    email: Optional[str] = Field(default=None, description="Owner's email")
