"""Weight goal router - API endpoints for weight goal management."""
from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from app.dependencies import get_weight_goal_service
from app.errors import ServiceError
from app.models.weight_goal import (
    DeleteResponse,
    WeightGoal,
    WeightGoalCreate,
    WeightGoalRevision,
    WeightGoalSummary,
    WeightGoalUpdate,
)
from app.services.weight_goal_service import WeightGoalService


router = APIRouter(prefix="/weight-goals", tags=["weight-goals"])


def _http_error(error: ServiceError) -> HTTPException:
    return HTTPException(status_code=error.status_code, detail=error.to_dict())


@router.get("", response_model=list[WeightGoalSummary])
async def list_weight_goals(
    user_id: int = Query(..., alias="userId", gt=0, description="Owner user id"),
    service: WeightGoalService = Depends(get_weight_goal_service),
):
    """
    List weight goals of a user.

    - Returns summaries in creation order
    """
    return await service.list_goals(user_id=user_id)


@router.post("", response_model=WeightGoal, status_code=status.HTTP_201_CREATED)
async def create_weight_goal(
    goal: WeightGoalCreate,
    service: WeightGoalService = Depends(get_weight_goal_service),
):
    """
    Create a new weight goal.

    - Validates safety against the user's age bracket
    - Returns 400 UNSAFE_GOAL with the validation result if rejected
    - Returns 400 UNDERAGE for users under 18
    """
    try:
        return await service.create_goal(goal)
    except ServiceError as e:
        raise _http_error(e)


@router.get("/{goal_id}", response_model=WeightGoal)
async def get_weight_goal(
    goal_id: int = Path(gt=0),
    service: WeightGoalService = Depends(get_weight_goal_service),
):
    """
    Get a single weight goal.

    - Returns 404 if goal not found
    """
    try:
        return await service.get_goal(goal_id)
    except ServiceError as e:
        raise _http_error(e)


@router.put("/{goal_id}", response_model=WeightGoal)
async def update_weight_goal(
    goal_update: WeightGoalUpdate,
    goal_id: int = Path(gt=0),
    service: WeightGoalService = Depends(get_weight_goal_service),
):
    """
    Update a weight goal.

    - Weight or duration changes refresh the safety validation and deficit
    - Returns 404 if goal not found
    """
    try:
        return await service.update_goal(goal_id, goal_update)
    except ServiceError as e:
        raise _http_error(e)


@router.delete("/{goal_id}", response_model=DeleteResponse)
async def delete_weight_goal(
    goal_id: int = Path(gt=0),
    service: WeightGoalService = Depends(get_weight_goal_service),
):
    """
    Permanently delete a weight goal.

    - Returns 404 if goal not found
    """
    try:
        return await service.delete_goal(goal_id)
    except ServiceError as e:
        raise _http_error(e)


@router.post("/{goal_id}/revise", response_model=WeightGoal)
async def revise_weight_goal(
    revision: WeightGoalRevision,
    goal_id: int = Path(gt=0),
    service: WeightGoalService = Depends(get_weight_goal_service),
):
    """
    Revise a weight goal.

    - Applies the proposed adjustments only when approveAdjustments is true
    - Returns 404 if goal not found
    """
    try:
        return await service.revise_goal(goal_id, revision)
    except ServiceError as e:
        raise _http_error(e)
