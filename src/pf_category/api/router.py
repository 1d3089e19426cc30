"""pf_category REST endpoints.

POST   /categories                      — create (type: income | expense)
GET    /categories                      — caller's categories, by name
GET    /categories/{id}                 — detail
PUT    /categories/{id}                 — full update
DELETE /categories/{id}                 — delete (cascades to transactions)
GET    /categories/{id}/transactions    — transactions in the category (cached)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_category.application.schemas import CategoryRequest
from src.pf_category.application.service import CategoryApplicationService
from src.pf_common.cache import CacheAsideStore, get_cache_store
from src.pf_common.database import get_db_session
from src.pf_common.response import ApiResponse, success_for
from src.pf_gateway.auth.dependencies import get_current_user_id
from src.pf_transaction.api.router import get_transaction_service
from src.pf_transaction.application.service import TransactionApplicationService

router = APIRouter(prefix="/categories", tags=["categories"])


def get_category_service(
    cache: Annotated[CacheAsideStore, Depends(get_cache_store)],
) -> CategoryApplicationService:
    return CategoryApplicationService(cache=cache)


_Service = Annotated[CategoryApplicationService, Depends(get_category_service)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryRequest,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.create_category(db, user_id, body)
    return success_for(request, data.model_dump())


@router.get("")
async def list_categories(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.list_categories(db, user_id)
    return success_for(request, [c.model_dump() for c in data])


@router.get("/{category_id}")
async def get_category(
    category_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.get_category(db, user_id, category_id)
    return success_for(request, data.model_dump())


@router.put("/{category_id}")
async def update_category(
    category_id: int,
    body: CategoryRequest,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.update_category(db, user_id, category_id, body)
    return success_for(request, data.model_dump())


@router.delete("/{category_id}")
async def delete_category(
    category_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    await service.delete_category(db, user_id, category_id)
    return success_for(request, {"id": category_id, "deleted": True})


@router.get("/{category_id}/transactions")
async def list_category_transactions(
    category_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    transactions: Annotated[TransactionApplicationService, Depends(get_transaction_service)],
    request: Request,
) -> ApiResponse:
    data = await transactions.list_by_category(db, user_id, category_id)
    return success_for(request, [t.model_dump() for t in data])
