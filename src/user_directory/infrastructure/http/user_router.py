"""FastAPI router for user directory endpoints."""

from __future__ import annotations

from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Response

from user_directory.application.dto.user_models import (
    ErrorResponse,
    UserCreatePayload,
    UserResponse,
)
from user_directory.application.services.user_directory_service import (
    UserCandidate,
    UserDirectoryService,
)
from user_directory.domain.result import Err


def build_user_router(*, directory_service: UserDirectoryService) -> APIRouter:
    """Build router exposing list, fetch, create and soft-delete of users."""

    router = APIRouter(prefix="/user", tags=["users"])

    @router.get("/", response_model=list[UserResponse])
    async def list_users() -> list[UserResponse]:
        accounts = await directory_service.list_active()
        return [UserResponse.from_account(account) for account in accounts]

    @router.get(
        "/{login}",
        response_model=UserResponse,
        responses={404: {"model": ErrorResponse}},
    )
    async def get_user(login: str) -> UserResponse:
        account = await directory_service.get_active_by_login(login=login)
        if account is None:
            raise HTTPException(status_code=404, detail="user not found")
        return UserResponse.from_account(account)

    @router.post(
        "/",
        response_model=UserResponse,
        status_code=201,
        responses={400: {"model": ErrorResponse}},
    )
    async def create_user(payload: UserCreatePayload, response: Response) -> UserResponse:
        result = await directory_service.create(
            UserCandidate(
                login=payload.login,
                password=payload.password,
                group=payload.group,
            )
        )
        if isinstance(result, Err):
            raise HTTPException(status_code=400, detail=result.error.message)

        account = result.value
        response.headers["Location"] = f"/user/{quote(account.login, safe='')}"
        return UserResponse.from_account(account)

    @router.delete(
        "/{login}",
        response_class=Response,
        responses={400: {"model": ErrorResponse}},
    )
    async def delete_user(login: str) -> Response:
        deleted = await directory_service.soft_delete(login=login)
        if not deleted:
            raise HTTPException(status_code=400, detail="user not found")
        return Response(status_code=200)

    return router
