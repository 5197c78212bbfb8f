"""FastAPI dependencies resolving the collaborators stored on app.state."""
from fastapi import Request

from app.services.user_service import UserService
from app.services.weight_goal_service import WeightGoalService


def get_weight_goal_service(request: Request) -> WeightGoalService:
    """Dependency building a WeightGoalService over the app's repositories."""
    state = request.app.state
    return WeightGoalService(
        goals=state.goal_repository,
        profiles=state.profile_lookup,
        locks=state.goal_locks,
    )


def get_user_service(request: Request) -> UserService:
    """Dependency building a UserService over the app's user repository."""
    return UserService(request.app.state.user_repository)
