"""User service - registration and initial health profile."""
import logging
from datetime import datetime, timezone

from app.constants import ADULT_AGE, MAX_USER_AGE, MIN_USER_AGE, TERMS_VERSION
from app.errors import ConflictError, ValidationError
from app.models.user import (
    ActivityLevel,
    BmiCategory,
    InitialProfile,
    IntegrationStatus,
    RiskLevel,
    UserCreate,
    UserInDB,
    UserRegisterResponse,
    UserType,
    VerificationStatus,
)
from app.repositories.user_repository import UserRepository
from app.utils.dates import calculate_age
from app.utils.security import generate_token, hash_password
from app.utils.validation import validate_registration

logger = logging.getLogger(__name__)


def calculate_bmi(weight: float, height: float) -> float:
    """Body mass index rounded to two decimals."""
    return round(weight / (height * height), 2)


def bmi_category(bmi: float) -> BmiCategory:
    """Classify a BMI value."""
    if bmi < 18.5:
        return BmiCategory.UNDERWEIGHT
    if bmi < 25:
        return BmiCategory.NORMAL
    if bmi < 30:
        return BmiCategory.OVERWEIGHT
    if bmi < 35:
        return BmiCategory.OBESITY_1
    if bmi < 40:
        return BmiCategory.OBESITY_2
    return BmiCategory.OBESITY_3


def build_initial_profile(user: UserCreate, bmi: float, age: int) -> InitialProfile:
    """
    Simplified initial profile: BMI category, risk level, recommendations and
    a suggested target weight (the lower of a 10% loss and the BMI 24.9 weight).
    """
    conditions = 0
    if user.health_data and user.health_data.health_conditions:
        conditions = len(user.health_data.health_conditions)

    risk = RiskLevel.LOW
    if bmi >= 30 or age > 60 or conditions > 0:
        risk = RiskLevel.MEDIUM
    if bmi >= 40 or conditions > 2:
        risk = RiskLevel.HIGH

    recommendations = [
        "Keep a balanced diet",
        "Drink at least 2 liters of water a day",
    ]
    if user.lifestyle.activity_level == ActivityLevel.SEDENTARY:
        recommendations.append("Start with light 30-minute walks")

    height = user.anthropometrics.height
    healthy_weight = 24.9 * height * height
    suggested = min(user.anthropometrics.current_weight * 0.9, healthy_weight)

    return InitialProfile(
        profile_id=generate_token(),
        bmi_category=bmi_category(bmi),
        risk_level=risk,
        initial_recommendations=recommendations,
        suggested_target_weight=round(suggested, 1),
    )


class UserService:
    """Service for handling user registration."""

    def __init__(self, users: UserRepository):
        """Initialize service with the user repository."""
        self.users = users

    async def register_user(self, user_create: UserCreate) -> UserRegisterResponse:
        """
        Register a new user.

        Args:
            user_create: Registration data

        Returns:
            Registration outcome (no sensitive fields)

        Raises:
            ValidationError: If age is out of range or a conditional rule fails
            ConflictError: If email is already registered
        """
        if await self.users.email_exists(user_create.email):
            raise ConflictError("Email already registered")

        age = calculate_age(user_create.birth_date)
        if age < MIN_USER_AGE or age > MAX_USER_AGE:
            raise ValidationError(
                f"Age must be between {MIN_USER_AGE} and {MAX_USER_AGE} years"
            )

        errors = validate_registration(user_create, age)
        if errors:
            raise ValidationError(
                "Validation failed", details=[error.to_dict() for error in errors]
            )

        is_minor = age < ADULT_AGE
        bmi = calculate_bmi(
            user_create.anthropometrics.current_weight,
            user_create.anthropometrics.height,
        )
        now = datetime.now(timezone.utc)

        user = UserInDB(
            id=await self.users.next_id(),
            user_type=user_create.user_type,
            registration_method=user_create.registration_method,
            social_id=user_create.social_id,
            integration_status=(
                IntegrationStatus.SUCCESS if user_create.social_id else IntegrationStatus.PENDING
            ),
            full_name=user_create.full_name,
            email=user_create.email,
            hashed_password=hash_password(user_create.password) if user_create.password else None,
            birth_date=user_create.birth_date,
            gender=user_create.gender,
            phone=user_create.phone,
            is_minor=is_minor,
            profile_photo=user_create.profile_photo,
            terms_accepted_at=now,
            terms_version=TERMS_VERSION,
            confirmation_token=generate_token(),
            anthropometrics=user_create.anthropometrics,
            bmi=bmi,
            health_data=user_create.health_data,
            lifestyle=user_create.lifestyle,
            initial_profile=build_initial_profile(user_create, bmi, age),
            created_at=now,
            updated_at=now,
        )

        if user_create.user_type == UserType.HEALTH_PROFESSIONAL:
            user.professional_data = user_create.professional_data
            user.professional_verification = VerificationStatus.PENDING

        if is_minor:
            user.guardian_authorization = user_create.guardian_authorization
            user.guardian_token = generate_token()

        await self.users.add(user)
        logger.info("Registered user %s (%s)", user.id, user.user_type.value)

        return UserRegisterResponse(
            id=user.id,
            email=user.email,
            message="User registered successfully",
            requires_email_confirmation=True,
            requires_guardian_authorization=is_minor,
        )
