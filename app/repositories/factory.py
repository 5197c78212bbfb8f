"""Repository selection based on the configured storage backend.

- "memory": in-memory repositories (default, used by tests)
- "mongodb": MongoDB repositories on the connected database
"""
from app.config import settings
from app.database import Database
from app.repositories.goal_repository import (
    GoalRepository,
    InMemoryGoalRepository,
    MongoGoalRepository,
)
from app.repositories.user_repository import (
    InMemoryUserRepository,
    MongoUserRepository,
    UserRepository,
)


def _connected_db(database: Database):
    if database.db is None:
        raise RuntimeError("Database not connected")
    return database.db


def create_goal_repository(database: Database) -> GoalRepository:
    """Create the goal repository for the configured backend."""
    if settings.storage_backend == "mongodb":
        return MongoGoalRepository(_connected_db(database))
    return InMemoryGoalRepository()


def create_user_repository(database: Database) -> UserRepository:
    """Create the user repository for the configured backend."""
    if settings.storage_backend == "mongodb":
        return MongoUserRepository(_connected_db(database))
    return InMemoryUserRepository()
