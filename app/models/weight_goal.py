"""Weight goal model definitions."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from app.constants import (
    ARM_RANGE,
    EXERCISE_FREQUENCY_RANGE,
    HIP_RANGE,
    MAX_CUSTOM_MILESTONES,
    MAX_PERSONALIZED_ALERTS,
    MAX_WEEKS,
    MAX_WEIGHT,
    MIN_WEEKS,
    MIN_WEIGHT,
    TIME_OF_DAY_PATTERN,
    WAIST_RANGE,
    WATER_INTAKE_RANGE,
)
from app.models.base import CamelModel


class AgeBracket(str, Enum):
    """Age brackets driving the safety limits."""

    YOUNG = "young"
    ADULT = "adult"
    SENIOR = "senior"


class ValidationStatus(str, Enum):
    """Outcome of the safety validation."""

    APPROVED = "approved"
    WARNING = "warning"
    REJECTED = "rejected"


class SuggestionType(str, Enum):
    """Kinds of corrective suggestion."""

    DEADLINE = "deadline"
    TARGET_WEIGHT = "targetWeight"


class Frequency(str, Enum):
    """Review and milestone cadence."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class AlertType(str, Enum):
    """Alert types a user can request."""

    WEIGHING = "weighing"
    MEASUREMENT = "measurement"
    EXERCISE = "exercise"
    HYDRATION = "hydration"
    MEAL = "meal"


class NotificationChannel(str, Enum):
    """Notification delivery channels."""

    PUSH = "push"
    EMAIL = "email"
    SMS = "sms"


class Motivation(str, Enum):
    """Main motivation for the goal."""

    HEALTH = "health"
    AESTHETIC = "aesthetic"
    SELF_ESTEEM = "self_esteem"
    PERFORMANCE = "performance"
    MEDICAL = "medical"


class Approach(str, Enum):
    """Preferred weight-loss approach."""

    DIET = "diet"
    EXERCISE = "exercise"
    COMBINED = "combined"


class Experience(str, Enum):
    """Previous weight-loss experience."""

    FIRST_TIME = "first_time"
    PREVIOUS_ATTEMPTS = "previous_attempts"
    PROFESSIONAL_GUIDANCE = "professional_guidance"


class RevisionReason(str, Enum):
    """Why a goal revision was requested."""

    SLOW_PROGRESS = "slow_progress"
    FAST_PROGRESS = "fast_progress"
    CIRCUMSTANCE_CHANGE = "circumstance_change"
    HEALTH_ISSUE = "health_issue"
    NEW_GOAL = "new_goal"


# Request sub-records


class SecondaryGoals(CamelModel):
    """Optional body measurement and habit targets."""

    current_waist: Optional[float] = Field(None, ge=WAIST_RANGE[0], le=WAIST_RANGE[1])
    desired_waist: Optional[float] = Field(None, ge=WAIST_RANGE[0], le=WAIST_RANGE[1])
    current_hip: Optional[float] = Field(None, ge=HIP_RANGE[0], le=HIP_RANGE[1])
    desired_hip: Optional[float] = Field(None, ge=HIP_RANGE[0], le=HIP_RANGE[1])
    current_arm: Optional[float] = Field(None, ge=ARM_RANGE[0], le=ARM_RANGE[1])
    desired_arm: Optional[float] = Field(None, ge=ARM_RANGE[0], le=ARM_RANGE[1])
    weekly_exercise_frequency: Optional[int] = Field(
        None, ge=EXERCISE_FREQUENCY_RANGE[0], le=EXERCISE_FREQUENCY_RANGE[1]
    )
    daily_water_intake: Optional[float] = Field(
        None, ge=WATER_INTAKE_RANGE[0], le=WATER_INTAKE_RANGE[1]
    )


class CustomMilestone(CamelModel):
    """User-defined intermediate milestone."""

    target_weight: float
    weeks: int = Field(gt=0)
    description: str = Field(max_length=100)


class PreferredTimes(CamelModel):
    """Preferred alert times of day (HH:MM)."""

    morning: str = Field(pattern=TIME_OF_DAY_PATTERN)
    afternoon: str = Field(pattern=TIME_OF_DAY_PATTERN)
    evening: str = Field(pattern=TIME_OF_DAY_PATTERN)


class AlertPreferences(CamelModel):
    """User alert preferences."""

    desired_types: list[AlertType]
    preferred_times: PreferredTimes
    custom_frequency: dict[str, str] = Field(default_factory=dict)
    notification_channels: list[NotificationChannel]


class PersonalizedAlert(CamelModel):
    """User-authored alert."""

    type: AlertType
    time: str = Field(pattern=TIME_OF_DAY_PATTERN)
    frequency: str
    custom_message: str = Field(max_length=100)
    active: bool


# Generated sub-records


class Suggestion(CamelModel):
    """Corrective suggestion emitted by the safety validation."""

    type: SuggestionType
    suggested_value: int | float
    rationale: str


class SafetyValidation(CamelModel):
    """Safety verdict for a goal."""

    status: ValidationStatus
    alerts: list[str] = Field(default_factory=list)
    suggestions: list[Suggestion] = Field(default_factory=list)
    safety_score: int


class ActionPlan(CamelModel):
    """Initial action plan."""

    nutrition_recommendations: list[str]
    suggested_activities: list[str]
    next_steps: list[str]
    weekly_schedule: dict[str, list[str]]


class ConfiguredAlert(CamelModel):
    """Alert derived from the user's requested alert types."""

    type: AlertType
    frequency: Frequency
    time: str
    message: str
    active: bool = True


class ObjectiveAlert(CamelModel):
    """Alert derived from the main weight objective."""

    type: str
    frequency: Frequency
    suggested_time: str
    message: str
    based_on: str


class ReviewCriteria(CamelModel):
    """Thresholds that should trigger a goal review."""

    max_deviation_percent: float
    weeks_without_progress: int
    max_acceleration: float


class GoalMetadata(CamelModel):
    """Age data captured once at creation."""

    age_bracket: AgeBracket
    user_age: int


class InteractionHistory(CamelModel):
    """Alert interaction statistics."""

    response_rate: float = 0
    most_effective_times: list[str] = Field(default_factory=list)
    most_followed_types: list[str] = Field(default_factory=list)


# Requests


class WeightGoalCreate(CamelModel):
    """Weight goal creation request."""

    user_id: int = Field(gt=0)
    current_weight: float = Field(ge=MIN_WEIGHT, le=MAX_WEIGHT)
    target_weight: float = Field(ge=MIN_WEIGHT, le=MAX_WEIGHT)
    duration_weeks: int = Field(ge=MIN_WEEKS, le=MAX_WEEKS)
    secondary_goals: Optional[SecondaryGoals] = None
    main_motivation: Motivation
    personal_motivation: Optional[str] = Field(None, max_length=500)
    preferred_approach: Approach
    previous_experience: Experience
    auto_milestones: bool
    milestone_frequency: Optional[Frequency] = None
    custom_milestones: Optional[list[CustomMilestone]] = Field(
        None, max_length=MAX_CUSTOM_MILESTONES
    )
    alert_preferences: AlertPreferences
    personalized_alerts: Optional[list[PersonalizedAlert]] = Field(
        None, max_length=MAX_PERSONALIZED_ALERTS
    )
    smart_configuration: bool


class WeightGoalUpdate(CamelModel):
    """Weight goal update model - all fields optional."""

    current_weight: Optional[float] = Field(None, ge=MIN_WEIGHT, le=MAX_WEIGHT)
    target_weight: Optional[float] = Field(None, ge=MIN_WEIGHT, le=MAX_WEIGHT)
    duration_weeks: Optional[int] = Field(None, ge=MIN_WEEKS, le=MAX_WEEKS)
    secondary_goals: Optional[SecondaryGoals] = None
    main_motivation: Optional[Motivation] = None
    personal_motivation: Optional[str] = Field(None, max_length=500)
    preferred_approach: Optional[Approach] = None
    auto_milestones: Optional[bool] = None
    milestone_frequency: Optional[Frequency] = None
    custom_milestones: Optional[list[CustomMilestone]] = Field(
        None, max_length=MAX_CUSTOM_MILESTONES
    )
    user_approval: Optional[bool] = None
    alert_preferences: Optional[AlertPreferences] = None
    personalized_alerts: Optional[list[PersonalizedAlert]] = Field(
        None, max_length=MAX_PERSONALIZED_ALERTS
    )
    smart_configuration: Optional[bool] = None
    active: Optional[bool] = None

    def changes(self) -> dict:
        """Fields explicitly provided with a non-null value."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class ManualAdjustments(CamelModel):
    """User-supplied overrides for a revision."""

    new_target_weight: Optional[float] = Field(None, ge=MIN_WEIGHT, le=MAX_WEIGHT)
    new_duration_weeks: Optional[int] = Field(None, ge=MIN_WEEKS, le=MAX_WEEKS)


class WeightGoalRevision(CamelModel):
    """Revision request."""

    revision_reason: RevisionReason
    approve_adjustments: bool
    manual_adjustments: Optional[ManualAdjustments] = None


class ProposedAdjustments(CamelModel):
    """Adjustments computed for a revision."""

    new_target_weight: float
    new_duration_weeks: int
    rationale: str
    plan_impact: str


# Entity and projections


class WeightGoal(CamelModel):
    """Full weight goal entity."""

    id: int
    user_id: int
    current_weight: float
    target_weight: float
    duration_weeks: int
    total_weight_to_lose: float
    metadata: GoalMetadata

    secondary_goals: Optional[SecondaryGoals] = None
    main_motivation: Motivation
    personal_motivation: Optional[str] = None
    preferred_approach: Approach
    previous_experience: Experience
    auto_milestones: bool
    milestone_frequency: Optional[Frequency] = None
    custom_milestones: Optional[list[CustomMilestone]] = None

    safety_validation: SafetyValidation
    user_approval: bool = False
    medical_restrictions: Optional[list[str]] = None
    blocking_conditions: Optional[list[str]] = None
    daily_caloric_deficit: int
    action_plan: ActionPlan
    configured_alerts: list[ConfiguredAlert] = Field(default_factory=list)

    review_frequency: Frequency
    review_criteria: ReviewCriteria
    next_review_date: datetime
    review_alerts: list[dict] = Field(default_factory=list)

    alert_preferences: AlertPreferences
    personalized_alerts: list[PersonalizedAlert] = Field(default_factory=list)
    smart_configuration: bool
    interaction_history: InteractionHistory = Field(default_factory=InteractionHistory)
    objective_alerts: list[ObjectiveAlert] = Field(default_factory=list)
    # Not generated yet; populated by future alert generators.
    secondary_objective_alerts: list[dict] = Field(default_factory=list)
    milestone_alerts: list[dict] = Field(default_factory=list)
    motivational_alerts: list[dict] = Field(default_factory=list)

    active: bool = True
    created_at: datetime
    updated_at: datetime


class WeightGoalSummary(CamelModel):
    """List projection of a weight goal."""

    id: int
    current_weight: float
    target_weight: float
    total_weight_to_lose: float
    duration_weeks: int
    active: bool
    created_at: datetime


class DeleteResponse(CamelModel):
    """Confirmation returned after a delete."""

    message: str
