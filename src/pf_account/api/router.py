"""pf_account REST endpoints.

POST   /accounts                         — create
GET    /accounts                         — caller's accounts
GET    /accounts/{id}                    — detail
PUT    /accounts/{id}                    — full update
DELETE /accounts/{id}                    — delete (cascades to transactions)
GET    /accounts/{id}/transactions       — transactions on the account (cached)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_account.application.schemas import AccountRequest
from src.pf_account.application.service import AccountApplicationService
from src.pf_common.cache import CacheAsideStore, get_cache_store
from src.pf_common.database import get_db_session
from src.pf_common.response import ApiResponse, success_for
from src.pf_gateway.auth.dependencies import get_current_user_id
from src.pf_transaction.api.router import get_transaction_service
from src.pf_transaction.application.service import TransactionApplicationService

router = APIRouter(prefix="/accounts", tags=["accounts"])


def get_account_service(
    cache: Annotated[CacheAsideStore, Depends(get_cache_store)],
) -> AccountApplicationService:
    return AccountApplicationService(cache=cache)


_Service = Annotated[AccountApplicationService, Depends(get_account_service)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_account(
    body: AccountRequest,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.create_account(db, user_id, body)
    return success_for(request, data.model_dump())


@router.get("")
async def list_accounts(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.list_accounts(db, user_id)
    return success_for(request, [a.model_dump() for a in data])


@router.get("/{account_id}")
async def get_account(
    account_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.get_account(db, user_id, account_id)
    return success_for(request, data.model_dump())


@router.put("/{account_id}")
async def update_account(
    account_id: int,
    body: AccountRequest,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    data = await service.update_account(db, user_id, account_id, body)
    return success_for(request, data.model_dump())


@router.delete("/{account_id}")
async def delete_account(
    account_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: _Service,
    request: Request,
) -> ApiResponse:
    await service.delete_account(db, user_id, account_id)
    return success_for(request, {"id": account_id, "deleted": True})


@router.get("/{account_id}/transactions")
async def list_account_transactions(
    account_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    transactions: Annotated[TransactionApplicationService, Depends(get_transaction_service)],
    request: Request,
) -> ApiResponse:
    data = await transactions.list_by_account(db, user_id, account_id)
    return success_for(request, [t.model_dump() for t in data])
