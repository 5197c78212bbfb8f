"""User-profile lookups used to resolve a user's age when creating goals."""
from abc import ABC, abstractmethod

from app.config import settings
from app.errors import ProfileNotFoundError
from app.repositories.user_repository import UserRepository
from app.utils.dates import calculate_age


class UserProfileLookup(ABC):
    """Resolves profile data for a goal owner."""

    @abstractmethod
    async def get_age(self, user_id: int) -> int:
        """Age in full years of the given user."""


class FixedAgeProfileLookup(UserProfileLookup):
    """Returns the same age for every user."""

    def __init__(self, age: int = 30):
        self.age = age

    async def get_age(self, user_id: int) -> int:
        return self.age


class RegistryProfileLookup(UserProfileLookup):
    """Derives the age from the registered user's birth date."""

    def __init__(self, users: UserRepository):
        self.users = users

    async def get_age(self, user_id: int) -> int:
        """
        Raises:
            ProfileNotFoundError: If the user is not registered
        """
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise ProfileNotFoundError("User profile not found")
        return calculate_age(user.birth_date)


def create_profile_lookup(users: UserRepository) -> UserProfileLookup:
    """Create the lookup selected by settings.profile_lookup."""
    if settings.profile_lookup == "fixed":
        return FixedAgeProfileLookup(settings.fixed_user_age)
    return RegistryProfileLookup(users)
