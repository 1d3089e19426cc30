"""pf_transaction REST endpoints.

POST   /transactions            — create (user/account/category must exist)
GET    /transactions            — caller's transactions (cached)
GET    /transactions/compare    — income vs expense totals
GET    /transactions/{id}       — detail
PUT    /transactions/{id}       — full update
DELETE /transactions/{id}       — delete

Per-account and per-category listings live on the account and category
routers and reuse get_transaction_service().
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_common.cache import CacheAsideStore, get_cache_store
from src.pf_common.database import get_db_session
from src.pf_common.response import ApiResponse, success_for
from src.pf_gateway.auth.dependencies import get_current_user_id
from src.pf_transaction.application.schemas import TransactionRequest
from src.pf_transaction.application.service import TransactionApplicationService

router = APIRouter(prefix="/transactions", tags=["transactions"])


def get_transaction_service(
    cache: Annotated[CacheAsideStore, Depends(get_cache_store)],
) -> TransactionApplicationService:
    return TransactionApplicationService(cache=cache)


_Service = Annotated[TransactionApplicationService, Depends(get_transaction_service)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_transaction(
    body: TransactionRequest,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.create_transaction(db, user_id, body)
    return success_for(request, data.model_dump())


@router.get("")
async def list_transactions(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.list_for_user(db, user_id)
    return success_for(request, [t.model_dump() for t in data])


@router.get("/compare")
async def compare_income_expenses(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.compare_income_expenses(db, user_id)
    return success_for(request, data.model_dump())


@router.get("/{transaction_id}")
async def get_transaction(
    transaction_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.get_transaction(db, user_id, transaction_id)
    return success_for(request, data.model_dump())


@router.put("/{transaction_id}")
async def update_transaction(
    transaction_id: int,
    body: TransactionRequest,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.update_transaction(db, user_id, transaction_id, body)
    return success_for(request, data.model_dump())


@router.delete("/{transaction_id}")
async def delete_transaction(
    transaction_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    await service.delete_transaction(db, user_id, transaction_id)
    return success_for(request, {"id": transaction_id, "deleted": True})
