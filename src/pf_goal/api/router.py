"""pf_goal REST endpoints.

POST   /goals             — create
GET    /goals             — caller's goals (priority desc, deadline asc)
GET    /goals/progress    — saved / target per goal, in percent
GET    /goals/{id}        — detail
PUT    /goals/{id}        — full update
DELETE /goals/{id}        — delete
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_common.database import get_db_session
from src.pf_common.response import ApiResponse, success_for
from src.pf_gateway.auth.dependencies import get_current_user_id
from src.pf_goal.application.schemas import GoalRequest
from src.pf_goal.application.service import GoalApplicationService

router = APIRouter(prefix="/goals", tags=["goals"])

_service = GoalApplicationService()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_goal(
    body: GoalRequest,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_goal(db, user_id, body)
    return success_for(request, data.model_dump())


@router.get("")
async def list_goals(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_goals(db, user_id)
    return success_for(request, [g.model_dump() for g in data])


@router.get("/progress")
async def goal_progress(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.goal_progress(db, user_id)
    return success_for(request, [g.model_dump() for g in data])


@router.get("/{goal_id}")
async def get_goal(
    goal_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_goal(db, user_id, goal_id)
    return success_for(request, data.model_dump())


@router.put("/{goal_id}")
async def update_goal(
    goal_id: int,
    body: GoalRequest,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.update_goal(db, user_id, goal_id, body)
    return success_for(request, data.model_dump())


@router.delete("/{goal_id}")
async def delete_goal(
    goal_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    await _service.delete_goal(db, user_id, goal_id)
    return success_for(request, {"id": goal_id, "deleted": True})
