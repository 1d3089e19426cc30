"""pf_user REST endpoints.

POST   /users            — create (open; stores a bcrypt hash)
GET    /users            — list
GET    /users/me         — caller's profile
GET    /users/{user_id}  — detail
PUT    /users/me         — update caller
DELETE /users/me         — delete caller (cascades to owned rows)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_common.cache import CacheAsideStore, get_cache_store
from src.pf_common.database import get_db_session
from src.pf_common.response import ApiResponse, success_for
from src.pf_gateway.auth.dependencies import get_current_user_id
from src.pf_user.application.schemas import CreateUserRequest, UpdateUserRequest
from src.pf_user.application.service import UserApplicationService

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(
    cache: Annotated[CacheAsideStore, Depends(get_cache_store)],
) -> UserApplicationService:
    return UserApplicationService(cache=cache)


_Service = Annotated[UserApplicationService, Depends(get_user_service)]


@router.post("")
async def create_user(
    body: CreateUserRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.create_user(db, body)
    return success_for(request, data.model_dump())


@router.get("")
async def list_users(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.list_users(db)
    return success_for(request, [u.model_dump() for u in data])


@router.get("/me")
async def get_me(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.get_user(db, user_id)
    return success_for(request, data.model_dump())


@router.put("/me")
async def update_me(
    body: UpdateUserRequest,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.update_user(db, user_id, body)
    return success_for(request, data.model_dump())


@router.delete("/me")
async def delete_me(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    await service.delete_user(db, user_id)
    return success_for(request, {"id": user_id, "deleted": True})


@router.get("/{target_id}")
async def get_user(
    target_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.get_user(db, target_id)
    return success_for(request, data.model_dump())
