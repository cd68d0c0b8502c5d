"""
Inkwell Backend — Article Route Handlers
==========================================

Routes:
    GET    /articles         every article, joined with its owner
    GET    /articles/{id}    single joined article
    POST   /articles         create → 201
    PUT    /articles/{id}    update → 200
    DELETE /articles/{id}    delete → 204
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Response

from app.schemas.article import ArticleDetail
from app.schemas.common import ErrorResponse
from app.services.article_service import ArticleService
from app.services.gateway import PersistenceGateway, get_gateway

router = APIRouter(prefix="/articles", tags=["Articles"])


def get_article_service(gateway: PersistenceGateway = Depends(get_gateway)) -> ArticleService:
    return ArticleService(gateway)


@router.get(
    "",
    response_model=List[ArticleDetail],
    responses={500: {"model": ErrorResponse}},
    summary="List all articles with their owners",
)
async def list_articles(
    service: ArticleService = Depends(get_article_service),
) -> List[ArticleDetail]:
    return await service.list_articles()


@router.get(
    "/{article_id}",
    response_model=ArticleDetail,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Get a single article",
)
async def get_article(
    article_id: str,
    service: ArticleService = Depends(get_article_service),
) -> ArticleDetail:
    return await service.get_article(article_id)


@router.post(
    "",
    status_code=201,
    response_model=ArticleDetail,
    responses={
        400: {"model": ErrorResponse},
        404: {"description": "Owning user not found", "model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Create an article",
)
async def create_article(
    payload: Optional[Any] = Body(default=None),
    service: ArticleService = Depends(get_article_service),
) -> ArticleDetail:
    return await service.create_article(payload)


@router.put(
    "/{article_id}",
    response_model=ArticleDetail,
    responses={
        400: {"model": ErrorResponse},
        404: {"description": "Article or owning user not found", "model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Update an article",
)
async def update_article(
    article_id: str,
    payload: Optional[Any] = Body(default=None),
    service: ArticleService = Depends(get_article_service),
) -> ArticleDetail:
    return await service.update_article(article_id, payload)


@router.delete(
    "/{article_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Delete an article",
)
async def delete_article(
    article_id: str,
    service: ArticleService = Depends(get_article_service),
) -> Response:
    await service.delete_article(article_id)
    return Response(status_code=204)
