"""User model definitions."""
from datetime import date, datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import EmailStr, Field, field_validator

from app.constants import (
    CPF_PATTERN,
    NAME_MAX_LENGTH,
    NAME_MIN_WORDS,
    PHONE_PATTERN,
)
from app.models.base import CamelModel


class UserType(str, Enum):
    """Kinds of platform user."""

    FINAL_USER = "final_user"
    HEALTH_PROFESSIONAL = "health_professional"


class RegistrationMethod(str, Enum):
    """How the user signed up."""

    EMAIL = "email"
    GOOGLE = "google"
    FACEBOOK = "facebook"


class Gender(str, Enum):
    """Declared gender."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"


class ActivityLevel(str, Enum):
    """Physical activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    INTENSE = "intense"
    VERY_INTENSE = "very_intense"


class BmiCategory(str, Enum):
    """BMI classification."""

    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESITY_1 = "obesity_1"
    OBESITY_2 = "obesity_2"
    OBESITY_3 = "obesity_3"


class RiskLevel(str, Enum):
    """Initial health risk level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class VerificationStatus(str, Enum):
    """Verification state of professional credentials."""

    PENDING = "pending"
    IN_ANALYSIS = "in_analysis"
    APPROVED = "approved"
    REJECTED = "rejected"


class IntegrationStatus(str, Enum):
    """Social login integration state."""

    SUCCESS = "success"
    FAILURE = "failure"
    PENDING = "pending"


class ProfessionalData(CamelModel):
    """Health professional credentials."""

    registration_number: str = Field(min_length=1, max_length=20)
    professional_council: str = Field(min_length=1)
    specialty: str = Field(min_length=1)
    supporting_document: str = Field(min_length=1)


class GuardianAuthorization(CamelModel):
    """Guardian consent for users under 18."""

    guardian_name: str = Field(min_length=1, max_length=100)
    guardian_cpf: str = Field(pattern=CPF_PATTERN)
    guardian_email: EmailStr


class Anthropometrics(CamelModel):
    """Body measurements at registration."""

    current_weight: float = Field(ge=30, le=300)
    height: float = Field(ge=1.2, le=2.5)
    waist: Optional[float] = Field(None, ge=40, le=200)
    hip: Optional[float] = Field(None, ge=50, le=250)
    arm: Optional[float] = Field(None, ge=15, le=60)


class HealthData(CamelModel):
    """Optional health background."""

    medical_history: Optional[str] = Field(None, max_length=1000)
    medications: Optional[str] = Field(None, max_length=500)
    food_allergies: Optional[str] = Field(None, max_length=300)
    dietary_restrictions: Optional[list[str]] = None
    health_conditions: Optional[list[str]] = None


class Lifestyle(CamelModel):
    """Lifestyle information."""

    activity_level: ActivityLevel
    work_routine: Optional[str] = None
    food_preferences: Optional[list[str]] = None
    preferred_exercise_time: Optional[str] = None


class UserCreate(CamelModel):
    """User registration request."""

    user_type: UserType
    registration_method: RegistrationMethod
    social_id: Optional[str] = None
    full_name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    email: EmailStr
    password: Optional[str] = None
    birth_date: date
    gender: Gender
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    professional_data: Optional[ProfessionalData] = None
    guardian_authorization: Optional[GuardianAuthorization] = None
    anthropometrics: Anthropometrics
    health_data: Optional[HealthData] = None
    lifestyle: Lifestyle
    profile_photo: Optional[str] = None
    accept_terms: Literal[True]
    accept_privacy: Literal[True]

    @field_validator("full_name")
    @classmethod
    def full_name_has_two_words(cls, value: str) -> str:
        if len(value.strip().split()) < NAME_MIN_WORDS:
            raise ValueError("Full name must contain at least 2 words")
        return value


class InitialProfile(CamelModel):
    """Profile generated from registration data."""

    profile_id: str
    bmi_category: BmiCategory
    risk_level: RiskLevel
    initial_recommendations: list[str]
    suggested_target_weight: float


class UserInDB(CamelModel):
    """Stored user record."""

    id: int
    user_type: UserType
    registration_method: RegistrationMethod
    social_id: Optional[str] = None
    integration_status: IntegrationStatus
    full_name: str
    email: str
    hashed_password: Optional[str] = None
    birth_date: date
    gender: Gender
    phone: Optional[str] = None
    is_minor: bool
    profile_photo: Optional[str] = None
    terms_accepted_at: datetime
    terms_version: str
    confirmation_token: str
    email_confirmed: bool = False
    confirmation_attempts: int = 0
    professional_data: Optional[ProfessionalData] = None
    professional_verification: Optional[VerificationStatus] = None
    guardian_authorization: Optional[GuardianAuthorization] = None
    guardian_token: Optional[str] = None
    guardian_confirmed: bool = False
    anthropometrics: Anthropometrics
    bmi: float
    health_data: Optional[HealthData] = None
    lifestyle: Lifestyle
    initial_profile: InitialProfile
    created_at: datetime
    updated_at: datetime


class UserRegisterResponse(CamelModel):
    """Registration outcome."""

    id: int
    email: str
    message: str
    requires_email_confirmation: bool = True
    requires_guardian_authorization: bool
