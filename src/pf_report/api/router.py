"""pf_report REST endpoints.

GET /reports/summary?refresh=false                          — stored or fresh summary
GET /reports/expenses-by-category?start_date=&end_date=     — live, inclusive dates
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_common.database import get_db_session
from src.pf_common.response import ApiResponse, success_for
from src.pf_gateway.auth.dependencies import get_current_user_id
from src.pf_report.application.service import ReportApplicationService

router = APIRouter(prefix="/reports", tags=["reports"])

_service = ReportApplicationService()


@router.get("/summary")
async def get_summary(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    refresh: Annotated[bool, Query(description="Regenerate instead of reusing")] = False,
) -> ApiResponse:
    data = await _service.get_summary(db, user_id, refresh=refresh)
    return success_for(request, data.model_dump())


@router.get("/expenses-by-category")
async def expenses_by_category(
    start_date: date,
    end_date: date,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.expenses_by_category(db, user_id, start_date, end_date)
    return success_for(request, data.model_dump(mode="json"))
