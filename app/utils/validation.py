"""Conditional registration rules.

Each rule inspects a registration request and returns field-path errors; an
empty list means the rule passed.
"""
import re
from typing import NamedTuple

from app.constants import ADULT_AGE, PASSWORD_PATTERN
from app.models.user import RegistrationMethod, UserCreate, UserType


class FieldError(NamedTuple):
    """A rule violation tied to a request field."""

    path: tuple[str, ...]
    message: str

    def to_dict(self) -> dict:
        return {"path": list(self.path), "message": self.message}


def check_password(user: UserCreate) -> list[FieldError]:
    """Email sign-ups need a strong password."""
    if user.registration_method != RegistrationMethod.EMAIL:
        return []
    if not user.password:
        return [FieldError(("password",), "Password is required for email registration")]
    if not re.match(PASSWORD_PATTERN, user.password):
        return [
            FieldError(
                ("password",),
                "Password must have at least 8 characters, an uppercase letter, "
                "a number and a special character",
            )
        ]
    return []


def check_professional_data(user: UserCreate) -> list[FieldError]:
    """Health professionals must provide their credentials."""
    if user.user_type == UserType.HEALTH_PROFESSIONAL and user.professional_data is None:
        return [
            FieldError(
                ("professionalData",),
                "Professional data is required for health professionals",
            )
        ]
    return []


def check_guardian_authorization(user: UserCreate, age: int) -> list[FieldError]:
    """Users under 18 need a guardian's authorization."""
    if age < ADULT_AGE and user.guardian_authorization is None:
        return [
            FieldError(
                ("guardianAuthorization",),
                "Guardian authorization is required for users under 18",
            )
        ]
    return []


def validate_registration(user: UserCreate, age: int) -> list[FieldError]:
    """Run every conditional registration rule."""
    return [
        *check_password(user),
        *check_professional_data(user),
        *check_guardian_authorization(user, age),
    ]
