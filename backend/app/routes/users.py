"""
Inkwell Backend — User Route Handlers
=======================================

What:  HTTP surface of the `users` resource.
How:   Each handler reads the path/query/body, delegates to UserService,
       and picks the success status code. Failures are exceptions turned
       into `{"error": ...}` bodies by the handlers in main.py.

Routes:
    GET    /users                  paginated list (limit, page)
    GET    /users/{id}             single user
    GET    /users/{id}/articles    user + paginated articles (limit, page|offset)
    POST   /users                  create → 201
    PUT    /users/{id}             update → 200
    DELETE /users/{id}             delete → 204

Path ids are declared as strings: the service decides what a non-numeric
id means (not found), so FastAPI never answers those with a 422.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Response

from app.schemas.common import ErrorResponse
from app.schemas.user import UserArticlesResponse, UserListResponse, UserResponse
from app.services.gateway import PersistenceGateway, get_gateway
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(gateway: PersistenceGateway = Depends(get_gateway)) -> UserService:
    return UserService(gateway)


@router.get(
    "",
    response_model=UserListResponse,
    responses={500: {"model": ErrorResponse}},
    summary="List users with pagination",
)
async def list_users(
    limit: Optional[str] = Query(default=None, description="Page size (default 10)"),
    page: Optional[str] = Query(default=None, description="1-based page number (default 1)"),
    service: UserService = Depends(get_user_service),
) -> UserListResponse:
    """
    Example:
        GET /users?limit=2&page=2 → users 3 and 4, total = number of users
    """
    return await service.list_users(limit=limit, page=page)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Get a single user",
)
async def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.get_user(user_id)


@router.get(
    "/{user_id}/articles",
    response_model=UserArticlesResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="List a user's articles with pagination",
)
async def list_user_articles(
    user_id: str,
    limit: Optional[str] = Query(default=None, description="Page size (default 10)"),
    page: Optional[str] = Query(default=None, description="1-based page number (default 1)"),
    offset: Optional[str] = Query(
        default=None,
        description="Older clients send the page number as `offset`; `page` wins when both are set",
    ),
    service: UserService = Depends(get_user_service),
) -> UserArticlesResponse:
    return await service.list_user_articles(
        user_id, limit=limit, page=page if page is not None else offset
    )


@router.post(
    "",
    status_code=201,
    response_model=UserResponse,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Create a user",
)
async def create_user(
    payload: Optional[Any] = Body(default=None),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.create_user(payload)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Update a user",
)
async def update_user(
    user_id: str,
    payload: Optional[Any] = Body(default=None),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.update_user(user_id, payload)


@router.delete(
    "/{user_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Delete a user (its articles are kept)",
)
async def delete_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> Response:
    await service.delete_user(user_id)
    return Response(status_code=204)
