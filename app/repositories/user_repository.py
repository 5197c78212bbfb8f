"""User repositories: interface, in-memory and MongoDB implementations."""
from abc import ABC, abstractmethod
from typing import Optional

from app.database import next_sequence
from app.models.user import UserInDB

DATETIME_FIELDS = ("terms_accepted_at", "created_at", "updated_at")


class UserRepository(ABC):
    """Persistence contract for registered users."""

    @abstractmethod
    async def next_id(self) -> int:
        """Allocate a new, strictly increasing user id."""

    @abstractmethod
    async def add(self, user: UserInDB) -> UserInDB:
        """Store a new user."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[UserInDB]:
        """Fetch a user, or None if absent."""

    @abstractmethod
    async def email_exists(self, email: str) -> bool:
        """Whether the email is already registered."""


class InMemoryUserRepository(UserRepository):
    """Dict-backed user store."""

    def __init__(self) -> None:
        self._users: dict[int, UserInDB] = {}
        self._current_id = 0

    async def next_id(self) -> int:
        self._current_id += 1
        return self._current_id

    async def add(self, user: UserInDB) -> UserInDB:
        self._users[user.id] = user
        return user

    async def get_by_id(self, user_id: int) -> Optional[UserInDB]:
        return self._users.get(user_id)

    async def email_exists(self, email: str) -> bool:
        return any(user.email == email for user in self._users.values())


class MongoUserRepository(UserRepository):
    """MongoDB user store keyed by integer ``_id``."""

    def __init__(self, db):
        """Initialize repository with database connection."""
        self.db = db
        self.users = db["users"]
        self.counters = db["counters"]

    def _user_to_doc(self, user: UserInDB) -> dict:
        doc = user.model_dump(mode="json")
        doc["_id"] = doc.pop("id")
        for field in DATETIME_FIELDS:
            doc[field] = getattr(user, field)
        return doc

    def _doc_to_user(self, doc: dict) -> UserInDB:
        data = {key: value for key, value in doc.items() if key != "_id"}
        return UserInDB.model_validate({**data, "id": doc["_id"]})

    async def next_id(self) -> int:
        return await next_sequence(self.counters, "users")

    async def add(self, user: UserInDB) -> UserInDB:
        await self.users.insert_one(self._user_to_doc(user))
        return user

    async def get_by_id(self, user_id: int) -> Optional[UserInDB]:
        doc = await self.users.find_one({"_id": user_id})
        if not doc:
            return None
        return self._doc_to_user(doc)

    async def email_exists(self, email: str) -> bool:
        count = await self.users.count_documents({"email": email}, limit=1)
        return count > 0
