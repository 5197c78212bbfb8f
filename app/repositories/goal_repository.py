"""Weight goal repositories: interface, in-memory and MongoDB implementations."""
from abc import ABC, abstractmethod
from typing import Any, Optional

from app.database import next_sequence
from app.models.weight_goal import WeightGoal

DATETIME_FIELDS = ("next_review_date", "created_at", "updated_at")


class GoalRepository(ABC):
    """Persistence contract for weight goals."""

    @abstractmethod
    async def next_id(self) -> int:
        """Allocate a new, strictly increasing goal id."""

    @abstractmethod
    async def add(self, goal: WeightGoal) -> WeightGoal:
        """Store a new goal."""

    @abstractmethod
    async def get_by_id(self, goal_id: int) -> Optional[WeightGoal]:
        """Fetch a goal, or None if absent."""

    @abstractmethod
    async def get_by_user(self, user_id: int) -> list[WeightGoal]:
        """All goals owned by a user, in insertion order."""

    @abstractmethod
    async def update(self, goal_id: int, fields: dict[str, Any]) -> Optional[WeightGoal]:
        """Overwrite the given fields; None if the goal is absent."""

    @abstractmethod
    async def delete(self, goal_id: int) -> bool:
        """Hard-remove a goal; False if it did not exist."""

    @abstractmethod
    async def exists(self, goal_id: int) -> bool:
        """Whether a goal with this id is stored."""


class InMemoryGoalRepository(GoalRepository):
    """Dict-backed goal store for tests and single-process deployments."""

    def __init__(self) -> None:
        self._goals: dict[int, WeightGoal] = {}
        self._current_id = 0

    async def next_id(self) -> int:
        self._current_id += 1
        return self._current_id

    async def add(self, goal: WeightGoal) -> WeightGoal:
        self._goals[goal.id] = goal
        return goal

    async def get_by_id(self, goal_id: int) -> Optional[WeightGoal]:
        return self._goals.get(goal_id)

    async def get_by_user(self, user_id: int) -> list[WeightGoal]:
        return [goal for goal in self._goals.values() if goal.user_id == user_id]

    async def update(self, goal_id: int, fields: dict[str, Any]) -> Optional[WeightGoal]:
        existing = self._goals.get(goal_id)
        if existing is None:
            return None
        updated = existing.model_copy(update=fields)
        self._goals[goal_id] = updated
        return updated

    async def delete(self, goal_id: int) -> bool:
        return self._goals.pop(goal_id, None) is not None

    async def exists(self, goal_id: int) -> bool:
        return goal_id in self._goals


class MongoGoalRepository(GoalRepository):
    """
    MongoDB goal store.

    Goals are stored with their integer id as ``_id``; ids come from the
    ``counters`` collection.
    """

    def __init__(self, db):
        """Initialize repository with database connection."""
        self.db = db
        self.goals = db["weight_goals"]
        self.counters = db["counters"]

    def _goal_to_doc(self, goal: WeightGoal) -> dict:
        """Convert a WeightGoal to a storable document (enums as values)."""
        doc = goal.model_dump(mode="json")
        doc["_id"] = doc.pop("id")
        for field in DATETIME_FIELDS:
            doc[field] = getattr(goal, field)
        return doc

    def _doc_to_goal(self, doc: dict) -> WeightGoal:
        """Convert a database document to a WeightGoal."""
        data = {key: value for key, value in doc.items() if key != "_id"}
        return WeightGoal.model_validate({**data, "id": doc["_id"]})

    async def next_id(self) -> int:
        return await next_sequence(self.counters, "weight_goals")

    async def add(self, goal: WeightGoal) -> WeightGoal:
        await self.goals.insert_one(self._goal_to_doc(goal))
        return goal

    async def get_by_id(self, goal_id: int) -> Optional[WeightGoal]:
        doc = await self.goals.find_one({"_id": goal_id})
        if not doc:
            return None
        return self._doc_to_goal(doc)

    async def get_by_user(self, user_id: int) -> list[WeightGoal]:
        cursor = self.goals.find({"user_id": user_id}).sort("_id", 1)
        docs = await cursor.to_list(length=None)
        return [self._doc_to_goal(doc) for doc in docs]

    async def update(self, goal_id: int, fields: dict[str, Any]) -> Optional[WeightGoal]:
        existing = await self.get_by_id(goal_id)
        if existing is None:
            return None
        updated = existing.model_copy(update=fields)
        await self.goals.replace_one({"_id": goal_id}, self._goal_to_doc(updated))
        return updated

    async def delete(self, goal_id: int) -> bool:
        result = await self.goals.delete_one({"_id": goal_id})
        return result.deleted_count > 0

    async def exists(self, goal_id: int) -> bool:
        count = await self.goals.count_documents({"_id": goal_id}, limit=1)
        return count > 0
